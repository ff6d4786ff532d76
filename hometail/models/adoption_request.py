from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, Enum, ForeignKey,
    UniqueConstraint, CheckConstraint, Index,
)
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from hometail.models.base import Base
import enum

NOTE_MAX_LENGTH = 500

class RequestStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

OPEN_STATUSES = (RequestStatus.PENDING, RequestStatus.APPROVED)

class AdoptionRequest(Base):
    __tablename__ = "adoption_requests"
    __table_args__ = (
        # open_slot is TRUE while PENDING/APPROVED and NULL once REJECTED;
        # NULLs never collide, so this allows one open request per pair
        UniqueConstraint("animal_id", "requester_id", "open_slot", name="uq_adoption_requests_open"),
        CheckConstraint(
            "(status = 'PENDING' AND decision_at IS NULL) "
            "OR (status <> 'PENDING' AND decision_at IS NOT NULL)",
            name="ck_adoption_requests_decision_at",
        ),
        Index("ix_adoption_requests_animal_status", "animal_id", "status"),
    )

    request_id = Column(Integer, primary_key=True, autoincrement=True)
    animal_id = Column(Integer, ForeignKey("animals.animal_id", ondelete="CASCADE"), nullable=False)
    requester_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)

    note = Column(String(NOTE_MAX_LENGTH), nullable=False)
    status = Column(Enum(RequestStatus), default=RequestStatus.PENDING, nullable=False)
    open_slot = Column(Boolean, default=True, nullable=True)

    created_at = Column(DateTime, default=func.now(), nullable=False)
    decision_at = Column(DateTime, nullable=True)

    animal = relationship("Animal", back_populates="requests")
    requester = relationship("User", foreign_keys=[requester_id])
