from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from examdrill.database import Base

class User(Base):
    """Study account (profile data is owned by the accounts service)"""
    __tablename__ = "users"
    
    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, nullable=False, unique=True)
    name = Column(String)
    created_at = Column(DateTime, default=datetime.now)
    
    study_sessions = relationship("StudySession", back_populates="user")
    review_states = relationship("ReviewState", back_populates="user")
