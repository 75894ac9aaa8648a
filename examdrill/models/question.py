from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from examdrill.database import Base

class Question(Base):
    """Multiple-choice exam question from the shared catalog"""
    __tablename__ = "questions"
    
    id = Column(Integer, primary_key=True, index=True)
    text = Column(Text, nullable=False)
    options = Column(JSON, default=list)  # [{"label": "A", "text": "..."}, ...]
    correct_answers = Column(JSON, default=list)  # ["A"]
    explanation = Column(Text)
    category = Column(String, nullable=False, index=True)
    difficulty = Column(String, nullable=False, default="medium")  # easy, medium, hard
    is_public = Column(Boolean, nullable=False, default=True)
    times_studied = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.now)
    
    review_states = relationship("ReviewState", back_populates="question")
