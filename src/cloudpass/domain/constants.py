"""Centralized constants for the cloudpass application.

All magic numbers and configuration defaults live here so every layer
imports from a single source of truth.
"""

# ---------- Adaptive Selection ----------
NEW_QUESTION_WEIGHT = 5.0  # never-attempted questions
LEARNING_STREAK_MAX = 3  # exclusive upper bound of the "learning" streak band
DEFAULT_SESSION_SIZE = 10

# ---------- Scoring ----------
SCALED_SCORE_MIN = 100
SCALED_SCORE_MAX = 1000
PASSING_SCORE = 700

# ---------- Exam Domains ----------
DOMAINS = {
    1: "Cloud Concepts",
    2: "Security & Compliance",
    3: "Cloud Technology & Services",
    4: "Billing, Pricing & Support",
}

# Questions per domain in a mock exam (65 total)
EXAM_BLUEPRINT = {
    1: 16,
    2: 20,
    3: 22,
    4: 7,
}
