"""
Share intent construction.

Maps a platform to one of five deep-link templates. Unknown platforms get
a copy-to-clipboard directive with "<text> <url>".
"""

from urllib.parse import quote

from personalization.models.interaction import ShareAction, ShareIntent, SharePlatform

SHARE_URL_TEMPLATES = {
    SharePlatform.TWITTER: "https://twitter.com/intent/tweet?url={url}&text={text}",
    SharePlatform.FACEBOOK: "https://www.facebook.com/sharer/sharer.php?u={url}",
    SharePlatform.LINKEDIN: "https://www.linkedin.com/sharing/share-offsite/?url={url}",
    SharePlatform.WHATSAPP: "https://wa.me/?text={text}%20{url}",
    SharePlatform.EMAIL: "mailto:?subject={text}&body={url}",
}


def encode_component(value: str) -> str:
    """Percent-encode like a browser's encodeURIComponent."""
    return quote(value, safe="-_.!~*'()")


def build_share_intent(platform: str, url: str, text: str) -> ShareIntent:
    try:
        known = SharePlatform(platform.lower())
    except ValueError:
        return ShareIntent(
            platform=platform,
            action=ShareAction.COPY_TO_CLIPBOARD,
            text=f"{text} {url}",
        )

    share_url = SHARE_URL_TEMPLATES[known].format(
        url=encode_component(url), text=encode_component(text)
    )
    return ShareIntent(platform=known.value, action=ShareAction.OPEN_URL, url=share_url)
