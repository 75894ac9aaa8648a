"""Assemble study sessions from due and never-studied questions."""

from sqlalchemy import and_, or_, func, literal, DateTime
from sqlalchemy.orm import Session, Query
from examdrill.models import Question, ReviewState
from datetime import datetime
from typing import List, Optional


def _candidate_query(
    db: Session,
    user_id: int,
    now: datetime,
    categories: Optional[List[str]] = None,
    difficulty: Optional[str] = None,
    only_due: bool = True
) -> Query:
    """Public questions matching the filters, joined to the user's review state"""
    query = db.query(Question).outerjoin(
        ReviewState,
        and_(ReviewState.question_id == Question.id, ReviewState.user_id == user_id)
    ).filter(Question.is_public.is_(True))
    
    if categories:
        query = query.filter(Question.category.in_(categories))
    if difficulty:
        query = query.filter(Question.difficulty == difficulty)
    if only_due:
        query = query.filter(or_(
            ReviewState.id.is_(None),  # never studied by this user
            ReviewState.next_review_at <= now
        ))
    return query


def select_questions(
    db: Session,
    user_id: int,
    count: int,
    categories: Optional[List[str]] = None,
    difficulty: Optional[str] = None,
    only_due: bool = True,
    now: Optional[datetime] = None
) -> List[Question]:
    """
    Pick up to `count` questions for a study session, most overdue first.
    
    Overdue amount is now - next_review_at. Never-studied questions count as
    exactly due (overdue 0), so they sort after overdue reviews and before
    reviews that are not due yet (only reachable with only_due=False).
    Ordering by COALESCE(next_review_at, now) ascending is the same ranking,
    so the whole selection is one bounded query.
    
    Args:
        user_id: Whose review states decide what is due
        count: Maximum number of questions; <= 0 returns an empty list
        categories: Optional category whitelist
        difficulty: Optional difficulty ("easy", "medium", "hard")
        only_due: Restrict to due or never-studied questions
        now: Reference time (defaults to now)
    """
    if count <= 0:
        return []
    
    now = now or datetime.now()
    effective_due = func.coalesce(ReviewState.next_review_at, literal(now, DateTime))
    
    return _candidate_query(
        db, user_id, now,
        categories=categories,
        difficulty=difficulty,
        only_due=only_due
    ).order_by(effective_due.asc(), Question.id.asc()).limit(count).all()


def count_due_questions(db: Session, user_id: int, now: Optional[datetime] = None) -> int:
    """Number of public questions that are due or never studied by the user"""
    return _candidate_query(db, user_id, now or datetime.now(), only_due=True).count()
