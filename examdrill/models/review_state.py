from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from examdrill.database import Base

class ReviewState(Base):
    """Latest SM-2 scheduling state per (user, question) pair"""
    __tablename__ = "review_states"
    __table_args__ = (
        UniqueConstraint("user_id", "question_id", name="uq_review_state_user_question"),
    )
    
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    question_id = Column(Integer, ForeignKey("questions.id"), nullable=False)
    session_id = Column(Integer, ForeignKey("study_sessions.id"))  # session of the latest answer
    
    # SM-2 algorithm fields
    strength = Column(Float, nullable=False, default=2.5)  # ease factor, never below 1.3
    repetition_count = Column(Integer, nullable=False, default=0)  # successful reviews since last lapse
    interval_days = Column(Integer, nullable=False, default=0)
    next_review_at = Column(DateTime, nullable=False, index=True)
    
    # Latest answer
    last_outcome = Column(Boolean, nullable=False)
    last_confidence = Column(String, nullable=False)  # low, medium, high
    last_time_spent_ms = Column(Integer, nullable=False, default=0)
    last_reviewed_at = Column(DateTime, nullable=False)
    
    user = relationship("User", back_populates="review_states")
    question = relationship("Question", back_populates="review_states")
