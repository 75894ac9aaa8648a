from sqlalchemy import update, func, case
from sqlalchemy.orm import Session
from examdrill.models import StudySession, SessionAnswer, Question
from examdrill.errors import NotFoundError
from datetime import datetime
from typing import Dict, List, Optional, Tuple

def create_study_session(db: Session, user_id: int, started_at: datetime) -> StudySession:
    """Open a new study session with zeroed counters"""
    session = StudySession(user_id=user_id, started_at=started_at)
    db.add(session)
    db.commit()
    db.refresh(session)
    return session

def get_study_session(db: Session, session_id: int) -> StudySession:
    """Get a study session by ID, raising NotFoundError if absent"""
    session = db.query(StudySession).filter(
        StudySession.id == session_id
    ).execution_options(populate_existing=True).first()
    if not session:
        raise NotFoundError("Study session", session_id)
    return session

def increment_session_totals(db: Session, session_id: int, was_correct: bool, time_spent_ms: int) -> bool:
    """
    Add one answer to the session's running counters in-database.
    Only open sessions are updated. Returns False if the session has ended.
    """
    result = db.execute(
        update(StudySession)
        .where(StudySession.id == session_id, StudySession.ended_at.is_(None))
        .values(
            total_questions=StudySession.total_questions + 1,
            correct_answers=StudySession.correct_answers + (1 if was_correct else 0),
            total_time_spent_ms=StudySession.total_time_spent_ms + time_spent_ms
        )
    )
    return result.rowcount > 0

def mark_session_finished(db: Session, session_id: int, ended_at: datetime) -> bool:
    """Stamp ended_at once. Returns False if the session was already finished."""
    result = db.execute(
        update(StudySession)
        .where(StudySession.id == session_id, StudySession.ended_at.is_(None))
        .values(ended_at=ended_at)
    )
    db.commit()
    return result.rowcount > 0

def add_session_answer(
    db: Session,
    session_id: int,
    question_id: int,
    was_correct: bool,
    confidence: str,
    time_spent_ms: int,
    quality: int,
    selected_answers: List[str],
    answered_at: datetime
) -> SessionAnswer:
    """Append an answer to the session log"""
    answer = SessionAnswer(
        session_id=session_id,
        question_id=question_id,
        was_correct=was_correct,
        confidence=confidence,
        time_spent_ms=time_spent_ms,
        quality=quality,
        selected_answers=list(selected_answers),
        answered_at=answered_at
    )
    db.add(answer)
    return answer

def get_category_breakdown(db: Session, session_id: int) -> Dict[str, Tuple[int, int]]:
    """Map category -> (total, correct) over all answers logged in a session"""
    rows = db.query(
        Question.category,
        func.count(SessionAnswer.id),
        func.sum(case((SessionAnswer.was_correct.is_(True), 1), else_=0))
    ).join(
        Question, Question.id == SessionAnswer.question_id
    ).filter(
        SessionAnswer.session_id == session_id
    ).group_by(Question.category).all()
    
    return {category: (total, correct or 0) for category, total, correct in rows}

def get_finished_sessions(
    db: Session,
    user_id: int,
    limit: Optional[int] = None,
    offset: int = 0,
    since: Optional[datetime] = None
) -> List[StudySession]:
    """Finished sessions for a user, most recently started first"""
    query = db.query(StudySession).filter(
        StudySession.user_id == user_id,
        StudySession.ended_at.isnot(None)
    )
    if since is not None:
        query = query.filter(StudySession.started_at >= since)
    query = query.order_by(StudySession.started_at.desc(), StudySession.id.desc()).offset(offset)
    if limit is not None:
        query = query.limit(limit)
    return query.all()

def get_session_answers(
    db: Session,
    session_id: int,
    category: Optional[str] = None
) -> List[Tuple[SessionAnswer, str]]:
    """Answers logged in a session with their question category"""
    query = db.query(SessionAnswer, Question.category).join(
        Question, Question.id == SessionAnswer.question_id
    ).filter(SessionAnswer.session_id == session_id)
    if category:
        query = query.filter(Question.category == category)
    return query.order_by(SessionAnswer.id).all()
