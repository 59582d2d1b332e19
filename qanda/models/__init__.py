from qanda.models.question import Question
from qanda.models.answer import Answer
from qanda.models.vote import AnswerVote, QuestionVote

__all__ = ["Question", "Answer", "QuestionVote", "AnswerVote"]
