from sqlalchemy import Column, Integer, String, DateTime, Enum
from sqlalchemy.sql import func
from hometail.models.base import Base
import enum

class UserRole(str, enum.Enum):
    USER = "USER"
    ADMIN = "ADMIN"

class User(Base):
    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, autoincrement=True)
    firebase_uid = Column(String(128), unique=True, nullable=False)

    full_name = Column(String(255))
    email = Column(String(255), unique=True)
    phone = Column(String(20))
    city = Column(String(100))

    role = Column(Enum(UserRole), default=UserRole.USER, nullable=False)

    created_at = Column(DateTime, default=func.now())
