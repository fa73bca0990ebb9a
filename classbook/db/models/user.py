from sqlalchemy import Column, String, Enum
from classbook.db.base import Base

class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    role = Column(Enum("admin", "teacher", "parent", name="user_role"), nullable=False)
    full_name = Column(String, nullable=False)
