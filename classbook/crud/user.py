import uuid

from sqlalchemy.orm import Session
from classbook.db.models.user import User
from classbook.core.security import get_password_hash

def get_user_by_email(db: Session, email: str):
    return db.query(User).filter(User.email == email).first()


def create_user(db: Session, email: str, password: str, full_name: str, role: str):
    db_user = User(
        id=uuid.uuid4().hex,
        email=email,
        hashed_password=get_password_hash(password),
        full_name=full_name,
        role=role
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user
