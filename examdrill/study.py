"""
Study session engine: start a session, record answers, finish it.

Every function takes the database session and the acting user/session ids
explicitly, plus an optional `now` so callers and tests control the clock.
"""

from sqlalchemy.orm import Session
from loguru import logger
from datetime import datetime, timedelta
from typing import List, Optional

from examdrill import crud
from examdrill.config import settings
from examdrill.errors import NotFoundError, SessionFinishedError
from examdrill.quality import score
from examdrill.selector import select_questions, count_due_questions
from examdrill.sm2 import SM2Algorithm
from examdrill.stats import (
    average,
    build_category_stats,
    build_session_stats,
    current_streak,
    percentage,
)
from examdrill.schemas import (
    AnswerRecord,
    HistoryRequest,
    QuestionSummary,
    RecordAnswerRequest,
    RecordAnswerResult,
    ReviewStateResponse,
    SessionHistoryItem,
    SessionStats,
    SessionSummary,
    StartSessionRequest,
    StartSessionResult,
    StatsRequest,
    UserStats,
)

PERIOD_DAYS = {
    "week": 7,
    "month": 30,
    "year": 365,
    "all": None,
}


def start_session(
    db: Session,
    user_id: int,
    request: StartSessionRequest,
    now: Optional[datetime] = None
) -> StartSessionResult:
    """Open a study session and pick its questions"""
    now = now or datetime.now()
    crud.get_user(db, user_id)

    session = crud.create_study_session(db, user_id, started_at=now)
    questions = select_questions(
        db,
        user_id,
        request.question_count,
        categories=request.categories,
        difficulty=request.difficulty,
        only_due=request.only_due,
        now=now
    )
    logger.info(
        "Started session {} for user {} with {} of {} requested questions",
        session.id, user_id, len(questions), request.question_count
    )

    return StartSessionResult(
        session_id=session.id,
        questions=[QuestionSummary.model_validate(q) for q in questions]
    )


def record_answer(
    db: Session,
    user_id: int,
    answer: RecordAnswerRequest,
    now: Optional[datetime] = None
) -> RecordAnswerResult:
    """
    Score an answer, advance the question's review state and update session totals.

    Raises:
        NotFoundError: unknown session or question, or a session owned by another user
        SessionFinishedError: the session has already ended
    """
    now = now or datetime.now()

    session = crud.get_study_session(db, answer.session_id)
    if session.user_id != user_id:
        logger.warning("User {} tried to answer in session {} owned by user {}",
                       user_id, session.id, session.user_id)
        raise NotFoundError("Study session", answer.session_id)
    if session.is_finished:
        raise SessionFinishedError(session.id)
    crud.get_question(db, answer.question_id)

    # The counter update only matches open sessions, so a finish that lands
    # after the check above still leaves the session untouched
    if not crud.increment_session_totals(db, session.id, answer.was_correct, answer.time_spent_ms):
        db.rollback()
        raise SessionFinishedError(session.id)

    prior = crud.get_review_state(db, user_id, answer.question_id)
    quality = score(answer.was_correct, answer.confidence, answer.time_spent_ms)
    review = SM2Algorithm.advance(prior, quality, reference_time=now)

    state = crud.upsert_review_state(
        db,
        user_id=user_id,
        question_id=answer.question_id,
        session_id=session.id,
        review=review,
        was_correct=answer.was_correct,
        confidence=answer.confidence,
        time_spent_ms=answer.time_spent_ms,
        reviewed_at=now
    )
    crud.add_session_answer(
        db,
        session_id=session.id,
        question_id=answer.question_id,
        was_correct=answer.was_correct,
        confidence=answer.confidence,
        time_spent_ms=answer.time_spent_ms,
        quality=quality,
        selected_answers=answer.selected_answers,
        answered_at=now
    )
    crud.increment_times_studied(db, answer.question_id)
    db.commit()

    logger.debug(
        "Session {} question {}: quality {}, strength {}, next review in {} days",
        session.id, answer.question_id, quality, review.strength, review.interval_days
    )

    return RecordAnswerResult(
        quality_score=quality,
        next_interval_days=review.interval_days,
        review_state=ReviewStateResponse.model_validate(state)
    )


def finish_session(db: Session, session_id: int, now: Optional[datetime] = None) -> SessionStats:
    """
    End a session and summarize it.

    Finishing an already finished session changes nothing and returns the
    same statistics, since a finished session no longer accepts answers.
    """
    if crud.mark_session_finished(db, session_id, ended_at=now or datetime.now()):
        logger.info("Finished session {}", session_id)

    # Raises NotFoundError for unknown ids (the update above matched nothing)
    session = crud.get_study_session(db, session_id)
    return build_session_stats(session, crud.get_category_breakdown(db, session_id))


def get_due_count(db: Session, user_id: int, now: Optional[datetime] = None) -> int:
    """Questions due for review or never studied"""
    crud.get_user(db, user_id)
    return count_due_questions(db, user_id, now=now)


def get_stats(
    db: Session,
    user_id: int,
    request: StatsRequest,
    now: Optional[datetime] = None
) -> UserStats:
    """Accuracy, category performance, session totals and streak for a period"""
    now = now or datetime.now()
    crud.get_user(db, user_id)

    days = PERIOD_DAYS[request.period]
    since = now - timedelta(days=days) if days else None

    states = crud.get_review_states_since(db, user_id, since=since)
    correct = sum(1 for state, _ in states if state.last_outcome)
    sessions = crud.get_finished_sessions(db, user_id, since=since)

    streak_sessions = crud.get_finished_sessions(db, user_id, limit=settings.streak_lookback_sessions)
    streak = current_streak((s.started_at for s in streak_sessions), today=now.date())

    return UserStats(
        total_studied=len(states),
        correct_answers=correct,
        accuracy=percentage(correct, len(states)),
        total_sessions=len(sessions),
        average_session_length_ms=average(sum(s.total_time_spent_ms or 0 for s in sessions), len(sessions)),
        current_streak=streak,
        category_stats=build_category_stats((category, state.last_outcome) for state, category in states),
        recent_sessions=[SessionSummary.model_validate(s) for s in sessions[:10]]
    )


def get_history(db: Session, user_id: int, request: HistoryRequest) -> List[SessionHistoryItem]:
    """Finished sessions, newest first, with per-session accuracy and answers"""
    crud.get_user(db, user_id)
    sessions = crud.get_finished_sessions(db, user_id, limit=request.limit, offset=request.offset)

    history = []
    for session in sessions:
        answers = crud.get_session_answers(db, session.id, category=request.category)
        history.append(SessionHistoryItem(
            **SessionSummary.model_validate(session).model_dump(),
            accuracy=percentage(session.correct_answers, session.total_questions),
            average_time_ms=average(session.total_time_spent_ms, session.total_questions),
            answers=[
                AnswerRecord(
                    question_id=answer.question_id,
                    category=category,
                    was_correct=answer.was_correct,
                    confidence=answer.confidence,
                    time_spent_ms=answer.time_spent_ms,
                    quality=answer.quality,
                    answered_at=answer.answered_at
                )
                for answer, category in answers
            ]
        ))
    return history
