from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from hometail.models.base import Base

class Breed(Base):
    __tablename__ = "breeds"
    __table_args__ = (
        UniqueConstraint("category_id", "name", name="uq_breeds_category_name"),
    )

    breed_id = Column(Integer, primary_key=True, autoincrement=True)
    category_id = Column(Integer, ForeignKey("categories.category_id"), nullable=False)
    name = Column(String(100), nullable=False)
    active = Column(Boolean, default=True, nullable=False)

    category = relationship("Category")
