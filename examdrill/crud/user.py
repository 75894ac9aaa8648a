from sqlalchemy.orm import Session
from examdrill.models import User
from examdrill.schemas import UserCreate
from examdrill.errors import NotFoundError

def create_user(db: Session, user: UserCreate) -> User:
    """Create a new study account"""
    db_user = User(**user.model_dump())
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user

def get_user(db: Session, user_id: int) -> User:
    """Get user by ID, raising NotFoundError if absent"""
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User", user_id)
    return user
