from sqlalchemy import Column, Integer, String, Text, Boolean, Date, DateTime, Enum, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from hometail.models.base import Base
import enum

class Gender(str, enum.Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    UNKNOWN = "UNKNOWN"

class Size(str, enum.Enum):
    SMALL = "SMALL"
    MEDIUM = "MEDIUM"
    LARGE = "LARGE"
    EXTRA_LARGE = "EXTRA_LARGE"

class AgeGroup(str, enum.Enum):
    BABY = "BABY"        # < 6 months
    YOUNG = "YOUNG"      # 6 - 24 months
    ADULT = "ADULT"      # 24 - 84 months
    SENIOR = "SENIOR"    # >= 84 months

class Animal(Base):
    __tablename__ = "animals"

    animal_id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.category_id"), nullable=False)
    breed_id = Column(Integer, ForeignKey("breeds.breed_id"), nullable=True)

    gender = Column(Enum(Gender), default=Gender.UNKNOWN, nullable=False)
    size = Column(Enum(Size), nullable=True)
    birthday = Column(Date, nullable=True, index=True)

    short_description = Column(String(255))
    long_description = Column(Text)
    image = Column(String(255))

    # only the adoption lifecycle flips this to true
    is_adopted = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    category = relationship("Category")
    breed = relationship("Breed")
    owner = relationship("User", foreign_keys=[owner_id])
    requests = relationship(
        "AdoptionRequest",
        back_populates="animal",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
