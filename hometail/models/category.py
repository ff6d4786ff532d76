from sqlalchemy import Column, Integer, String, Boolean
from hometail.models.base import Base

class Category(Base):
    __tablename__ = "categories"

    category_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), unique=True, nullable=False)
    active = Column(Boolean, default=True, nullable=False)
