from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from examdrill.database import Base

class SessionAnswer(Base):
    """Answer log entry for a session (analytics only, never read by the scheduler)"""
    __tablename__ = "session_answers"
    
    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(Integer, ForeignKey("study_sessions.id"), nullable=False, index=True)
    question_id = Column(Integer, ForeignKey("questions.id"), nullable=False)
    
    was_correct = Column(Boolean, nullable=False)
    confidence = Column(String, nullable=False)
    time_spent_ms = Column(Integer, nullable=False, default=0)
    quality = Column(Integer, nullable=False)  # 0-5
    selected_answers = Column(JSON, default=list)
    answered_at = Column(DateTime, nullable=False, default=datetime.now)
    
    session = relationship("StudySession", back_populates="answers")
    question = relationship("Question")
