from sqlalchemy import Column, Integer, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from examdrill.database import Base

class StudySession(Base):
    """One study run by a user, with running answer totals"""
    __tablename__ = "study_sessions"
    
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    
    started_at = Column(DateTime, nullable=False, default=datetime.now)
    ended_at = Column(DateTime)  # set once on finish
    
    total_questions = Column(Integer, nullable=False, default=0)
    correct_answers = Column(Integer, nullable=False, default=0)
    total_time_spent_ms = Column(Integer, nullable=False, default=0)
    
    user = relationship("User", back_populates="study_sessions")
    answers = relationship("SessionAnswer", back_populates="session", order_by="SessionAnswer.id")

    @property
    def is_finished(self) -> bool:
        return self.ended_at is not None
