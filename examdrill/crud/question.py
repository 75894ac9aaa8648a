from sqlalchemy import update
from sqlalchemy.orm import Session
from examdrill.models import Question
from examdrill.schemas import QuestionCreate
from examdrill.errors import NotFoundError
from typing import List

def create_questions(db: Session, questions: List[QuestionCreate]) -> List[Question]:
    """Add catalog questions in one transaction"""
    db_questions = [Question(**question.model_dump()) for question in questions]
    db.add_all(db_questions)
    db.commit()
    for db_question in db_questions:
        db.refresh(db_question)
    return db_questions

def get_question(db: Session, question_id: int) -> Question:
    """Get catalog question by ID, raising NotFoundError if absent"""
    question = db.query(Question).filter(Question.id == question_id).first()
    if not question:
        raise NotFoundError("Question", question_id)
    return question

def increment_times_studied(db: Session, question_id: int):
    """Bump the question's study counter in-database"""
    db.execute(
        update(Question)
        .where(Question.id == question_id)
        .values(times_studied=Question.times_studied + 1)
    )
