from examdrill.models.user import User
from examdrill.models.question import Question
from examdrill.models.review_state import ReviewState
from examdrill.models.study_session import StudySession
from examdrill.models.session_answer import SessionAnswer

__all__ = [
    "User",
    "Question",
    "ReviewState",
    "StudySession",
    "SessionAnswer"
]
