from quizhub.db.models.quiz_attempts import QuizAttempt
from quizhub.db.models.quiz_questions import QuizQuestion
from quizhub.db.models.quizzes import Quiz
from quizhub.db.models.tournament_participants import TournamentParticipant
from quizhub.db.models.tournament_prizes import TournamentPrize
from quizhub.db.models.tournaments import Tournament
from quizhub.db.models.users import User

__all__ = [
    "Quiz",
    "QuizAttempt",
    "QuizQuestion",
    "Tournament",
    "TournamentParticipant",
    "TournamentPrize",
    "User",
]
