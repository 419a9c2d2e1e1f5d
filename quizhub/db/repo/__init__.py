from quizhub.db.repo.quiz_attempts_repo import QuizAttemptsRepo
from quizhub.db.repo.quizzes_repo import QuizzesRepo
from quizhub.db.repo.tournament_participants_repo import TournamentParticipantsRepo
from quizhub.db.repo.tournaments_repo import TournamentsRepo
from quizhub.db.repo.users_repo import UsersRepo

__all__ = [
    "QuizAttemptsRepo",
    "QuizzesRepo",
    "TournamentParticipantsRepo",
    "TournamentsRepo",
    "UsersRepo",
]
