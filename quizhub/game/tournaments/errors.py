class TournamentError(Exception):
    code = "E_TOURNAMENT"
    message = "Tournament operation failed"


class TournamentNotFoundError(TournamentError):
    code = "E_TOURNAMENT_NOT_FOUND"
    message = "Tournament not found"


class TournamentQuizNotFoundError(TournamentError):
    code = "E_QUIZ_NOT_FOUND"
    message = "Quiz not found"


class TournamentAccessError(TournamentError):
    code = "E_TOURNAMENT_FORBIDDEN"
    message = "Only the tournament owner may do this"


class TournamentInvalidStateError(TournamentError):
    code = "E_TOURNAMENT_INVALID_STATE"
    message = "Operation is not allowed in the current tournament status"


class TournamentFullError(TournamentError):
    code = "E_TOURNAMENT_FULL"
    message = "Tournament is full"


class TournamentAlreadyJoinedError(TournamentError):
    code = "E_TOURNAMENT_ALREADY_JOINED"
    message = "Already joined this tournament"


class TournamentNotRegisteredError(TournamentError):
    code = "E_TOURNAMENT_NOT_REGISTERED"
    message = "Not registered for this tournament"


class TournamentAlreadySubmittedError(TournamentError):
    code = "E_TOURNAMENT_ALREADY_SUBMITTED"
    message = "Answers were already submitted for this tournament"


class TournamentValidationError(TournamentError):
    code = "E_TOURNAMENT_INVALID"
    message = "Tournament definition is invalid"


class TournamentUserNotFoundError(TournamentError):
    code = "E_USER_NOT_FOUND"
    message = "User not found"
