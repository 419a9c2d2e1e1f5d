class QuizError(Exception):
    code = "E_QUIZ"
    message = "Quiz operation failed"


class QuizNotFoundError(QuizError):
    code = "E_QUIZ_NOT_FOUND"
    message = "Quiz not found"


class QuizUserNotFoundError(QuizError):
    code = "E_USER_NOT_FOUND"
    message = "User not found"


class QuizValidationError(QuizError):
    code = "E_QUIZ_INVALID"
    message = "Quiz definition is invalid"
