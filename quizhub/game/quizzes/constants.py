QUIZ_CATEGORIES = frozenset(
    {
        "General Knowledge",
        "Science",
        "History",
        "Sports",
        "Technology",
        "Entertainment",
        "Literature",
        "Geography",
    }
)
QUIZ_DIFFICULTIES = frozenset({"easy", "medium", "hard"})

QUIZ_DEFAULT_DIFFICULTY = "medium"
QUESTION_DEFAULT_POINTS = 10
QUESTION_DEFAULT_TIME_LIMIT_SECONDS = 30
QUESTION_MIN_OPTIONS = 2
