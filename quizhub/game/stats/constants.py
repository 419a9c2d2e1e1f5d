BADGE_PERFECT_SCORE = "Perfect Score"
BADGE_QUIZ_MASTER = "Quiz Master"

QUIZ_MASTER_MIN_QUIZZES = 10
PERFECT_SCORE_PERCENTAGE = 100.0

GLOBAL_LEADERBOARD_DEFAULT_LIMIT = 50
