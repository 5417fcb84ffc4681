# Personalization engine: recommendations, social engagement and A/B evaluation
