from sqlalchemy.orm import Session
from sqlalchemy.dialects import postgresql, sqlite
from examdrill.models import ReviewState, Question
from examdrill.schemas import ReviewUpdate
from datetime import datetime
from typing import List, Optional, Tuple

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}

def get_review_state(db: Session, user_id: int, question_id: int) -> Optional[ReviewState]:
    """Get the latest review state for a (user, question) pair"""
    return db.query(ReviewState).filter(
        ReviewState.user_id == user_id,
        ReviewState.question_id == question_id
    ).execution_options(populate_existing=True).first()

def upsert_review_state(
    db: Session,
    user_id: int,
    question_id: int,
    session_id: int,
    review: ReviewUpdate,
    was_correct: bool,
    confidence: str,
    time_spent_ms: int,
    reviewed_at: datetime
) -> ReviewState:
    """
    Insert or overwrite the review state keyed by (user_id, question_id).
    
    Only the latest answer is kept. Concurrent writers for the same pair
    serialize on the unique key and the last one wins.
    """
    values = {
        "session_id": session_id,
        "strength": review.strength,
        "repetition_count": review.repetition_count,
        "interval_days": review.interval_days,
        "next_review_at": review.next_review_at,
        "last_outcome": was_correct,
        "last_confidence": confidence,
        "last_time_spent_ms": time_spent_ms,
        "last_reviewed_at": reviewed_at,
    }
    
    insert = _UPSERT_DIALECTS.get(db.get_bind().dialect.name)
    if insert is not None:
        stmt = insert(ReviewState).values(user_id=user_id, question_id=question_id, **values)
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id", "question_id"],
            set_=values
        )
        db.execute(stmt)
    else:
        state = get_review_state(db, user_id, question_id)
        if state is None:
            db.add(ReviewState(user_id=user_id, question_id=question_id, **values))
        else:
            for key, value in values.items():
                setattr(state, key, value)
    
    db.flush()
    return get_review_state(db, user_id, question_id)

def get_review_states_since(
    db: Session,
    user_id: int,
    since: Optional[datetime] = None
) -> List[Tuple[ReviewState, str]]:
    """Review states last answered on or after `since`, with the question category"""
    query = db.query(ReviewState, Question.category).join(
        Question, Question.id == ReviewState.question_id
    ).filter(ReviewState.user_id == user_id)
    if since is not None:
        query = query.filter(ReviewState.last_reviewed_at >= since)
    return query.all()
