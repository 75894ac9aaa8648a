"""
Pytest Configuration and Fixtures.

Provides an in-memory SQLite database with the examdrill schema and a few
helpers for building users, questions and review states.
"""
import pytest
import sys
from datetime import datetime
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from examdrill.database import Base
from examdrill import models
from examdrill.crud import upsert_review_state
from examdrill.schemas import ReviewUpdate

NOW = datetime(2026, 3, 18, 9, 30)


@pytest.fixture
def now():
    """Fixed reference time for scheduling assertions."""
    return NOW


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user(db):
    user = models.User(username="resident", name="Test Resident")
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def other_user(db):
    user = models.User(username="attending")
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def make_question(db):
    """Factory for catalog questions."""
    def _make(category="Adult Psychiatry", difficulty="medium", is_public=True, text=None):
        question = models.Question(
            text=text or f"{category} question",
            options=[{"label": "A", "text": "Yes"}, {"label": "B", "text": "No"}],
            correct_answers=["A"],
            category=category,
            difficulty=difficulty,
            is_public=is_public,
        )
        db.add(question)
        db.commit()
        return question
    return _make


@pytest.fixture
def make_review_state(db):
    """Factory for stored review states with a chosen due time."""
    def _make(user, question, next_review_at, strength=2.5, repetition_count=1, interval_days=1,
              was_correct=True, reviewed_at=None):
        state = upsert_review_state(
            db,
            user_id=user.id,
            question_id=question.id,
            session_id=None,
            review=ReviewUpdate(
                strength=strength,
                repetition_count=repetition_count,
                interval_days=interval_days,
                next_review_at=next_review_at,
            ),
            was_correct=was_correct,
            confidence="medium",
            time_spent_ms=8000,
            reviewed_at=reviewed_at or NOW,
        )
        db.commit()
        return state
    return _make
