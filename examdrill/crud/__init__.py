from examdrill.crud.user import create_user, get_user
from examdrill.crud.question import create_questions, get_question, increment_times_studied
from examdrill.crud.review_state import (
    get_review_state,
    upsert_review_state,
    get_review_states_since
)
from examdrill.crud.study_session import (
    create_study_session,
    get_study_session,
    increment_session_totals,
    mark_session_finished,
    add_session_answer,
    get_category_breakdown,
    get_finished_sessions,
    get_session_answers
)

__all__ = [
    "create_user",
    "get_user",
    "create_questions",
    "get_question",
    "increment_times_studied",
    "get_review_state",
    "upsert_review_state",
    "get_review_states_since",
    "create_study_session",
    "get_study_session",
    "increment_session_totals",
    "mark_session_finished",
    "add_session_answer",
    "get_category_breakdown",
    "get_finished_sessions",
    "get_session_answers",
]
