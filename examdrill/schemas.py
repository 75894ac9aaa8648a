from pydantic import BaseModel, Field
from typing import Dict, List, Literal, Optional
from datetime import datetime
from examdrill.config import settings

Confidence = Literal["low", "medium", "high"]
Difficulty = Literal["easy", "medium", "hard"]
StatsPeriod = Literal["week", "month", "year", "all"]


class UserCreate(BaseModel):
    """Schema for registering a study account"""
    username: str = Field(min_length=1)
    name: Optional[str] = None


class QuestionOption(BaseModel):
    label: str
    text: str


class QuestionCreate(BaseModel):
    """Schema for a catalog question (used by the import command)"""
    text: str = Field(min_length=1)
    options: List[QuestionOption] = Field(default_factory=list)
    correct_answers: List[str] = Field(default_factory=list)
    explanation: Optional[str] = None
    category: str = Field(min_length=1)
    difficulty: Difficulty = "medium"
    is_public: bool = True


class QuestionSummary(BaseModel):
    """Question as handed out in a study session"""
    id: int
    text: str
    options: List[QuestionOption] = Field(default_factory=list)
    category: str
    difficulty: Difficulty

    class Config:
        from_attributes = True


# ===================================================================
# REQUESTS
# ===================================================================

class StartSessionRequest(BaseModel):
    """Filters and size of a new study session"""
    question_count: int = Field(default=settings.default_question_count, ge=1, le=settings.max_question_count)
    categories: Optional[List[str]] = None
    difficulty: Optional[Difficulty] = None
    only_due: bool = True


class RecordAnswerRequest(BaseModel):
    """A single answer event submitted during a session"""
    session_id: int
    question_id: int
    was_correct: bool
    confidence: Confidence
    time_spent_ms: int = Field(ge=0)
    selected_answers: List[str] = Field(default_factory=list)


class StatsRequest(BaseModel):
    period: StatsPeriod = "month"


class HistoryRequest(BaseModel):
    limit: int = Field(default=settings.history_page_size, ge=1, le=100)
    offset: int = Field(default=0, ge=0)
    category: Optional[str] = None


# ===================================================================
# RESULTS
# ===================================================================

class ReviewUpdate(BaseModel):
    """New scheduling values produced by the SM-2 step"""
    strength: float
    repetition_count: int
    interval_days: int
    next_review_at: datetime


class ReviewStateResponse(BaseModel):
    user_id: int
    question_id: int
    strength: float
    repetition_count: int
    interval_days: int
    next_review_at: datetime
    last_outcome: bool
    last_confidence: Confidence
    last_time_spent_ms: int
    last_reviewed_at: datetime

    class Config:
        from_attributes = True


class StartSessionResult(BaseModel):
    session_id: int
    questions: List[QuestionSummary]


class RecordAnswerResult(BaseModel):
    quality_score: int
    next_interval_days: int
    review_state: ReviewStateResponse


class CategoryTally(BaseModel):
    total: int = 0
    correct: int = 0


class SessionStats(BaseModel):
    """End-of-session summary"""
    total_questions: int = 0
    correct_answers: int = 0
    accuracy: float = 0.0  # percent
    total_time_spent_ms: int = 0
    average_time_per_question_ms: float = 0.0
    category_breakdown: Dict[str, CategoryTally] = Field(default_factory=dict)


class SessionSummary(BaseModel):
    id: int
    started_at: datetime
    ended_at: Optional[datetime] = None
    total_questions: int
    correct_answers: int
    total_time_spent_ms: int

    class Config:
        from_attributes = True


class CategoryStats(CategoryTally):
    accuracy: float = 0.0


class UserStats(BaseModel):
    """Per-user statistics over a period"""
    total_studied: int
    correct_answers: int
    accuracy: float
    total_sessions: int
    average_session_length_ms: float
    current_streak: int
    category_stats: Dict[str, CategoryStats]
    recent_sessions: List[SessionSummary]


class AnswerRecord(BaseModel):
    question_id: int
    category: str
    was_correct: bool
    confidence: Confidence
    time_spent_ms: int
    quality: int
    answered_at: datetime


class SessionHistoryItem(SessionSummary):
    accuracy: float
    average_time_ms: float
    answers: List[AnswerRecord] = Field(default_factory=list)
