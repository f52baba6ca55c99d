from .builder import RoundBuilder
from .models import Round, RoundOutcome, RoundQuestion, RoundStatus
from .outcome import IMPROVEMENT_EPSILON, RoundOutcomeEvaluator
from .session import AnswerResult, QuizSession
from .timer import QuestionTimer

__all__ = [
    "RoundBuilder",
    "Round",
    "RoundQuestion",
    "RoundStatus",
    "RoundOutcome",
    "RoundOutcomeEvaluator",
    "IMPROVEMENT_EPSILON",
    "QuizSession",
    "AnswerResult",
    "QuestionTimer",
]
