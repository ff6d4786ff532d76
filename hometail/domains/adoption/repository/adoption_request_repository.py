from datetime import datetime
from sqlalchemy.orm import Session
from sqlalchemy import select, update, func
from typing import Optional, List

from hometail.models.adoption_request import AdoptionRequest, RequestStatus, OPEN_STATUSES
from hometail.models.animal import Animal


class AdoptionRequestRepository:
    def __init__(self, db: Session):
        self.db = db

    # -------------------------------
    # Lookups
    # -------------------------------
    def get_by_id(self, request_id: int) -> Optional[AdoptionRequest]:
        return self.db.get(AdoptionRequest, request_id)

    def get_for_update(self, request_id: int) -> Optional[AdoptionRequest]:
        """Re-read the row under a row lock (no-op lock on SQLite)."""
        return (
            self.db.query(AdoptionRequest)
            .filter(AdoptionRequest.request_id == request_id)
            .with_for_update()
            .populate_existing()
            .first()
        )

    def exists_open_request(self, animal_id: int, requester_id: int) -> bool:
        return (
            self.db.query(AdoptionRequest.request_id)
            .filter(
                AdoptionRequest.animal_id == animal_id,
                AdoptionRequest.requester_id == requester_id,
                AdoptionRequest.status.in_(OPEN_STATUSES),
            )
            .first()
            is not None
        )

    # -------------------------------
    # Writes
    # -------------------------------
    def create_request(self, animal_id: int, requester_id: int, note: str, created_at: datetime) -> AdoptionRequest:
        req = AdoptionRequest(
            animal_id=animal_id,
            requester_id=requester_id,
            note=note,
            status=RequestStatus.PENDING,
            open_slot=True,
            created_at=created_at,
            decision_at=None,
        )
        self.db.add(req)
        self.db.flush()
        return req

    def approve_if_pending(self, request_id: int, decided_at: datetime) -> bool:
        """Compare-and-set PENDING -> APPROVED; False if someone got there first."""
        result = self.db.execute(
            update(AdoptionRequest)
            .where(
                AdoptionRequest.request_id == request_id,
                AdoptionRequest.status == RequestStatus.PENDING,
            )
            .values(status=RequestStatus.APPROVED, decision_at=decided_at)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def reject_if_pending(self, request_id: int, decided_at: datetime) -> bool:
        result = self.db.execute(
            update(AdoptionRequest)
            .where(
                AdoptionRequest.request_id == request_id,
                AdoptionRequest.status == RequestStatus.PENDING,
            )
            .values(status=RequestStatus.REJECTED, decision_at=decided_at, open_slot=None)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def reject_other_pending(self, animal_id: int, exclude_request_id: int, decided_at: datetime) -> int:
        result = self.db.execute(
            update(AdoptionRequest)
            .where(
                AdoptionRequest.animal_id == animal_id,
                AdoptionRequest.request_id != exclude_request_id,
                AdoptionRequest.status == RequestStatus.PENDING,
            )
            .values(status=RequestStatus.REJECTED, decision_at=decided_at, open_slot=None)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def update_note_if_pending(self, request_id: int, note: str) -> bool:
        """Conditional note write; False once the request is decided or its animal adopted."""
        available = select(Animal.animal_id).where(Animal.is_adopted.is_(False))
        result = self.db.execute(
            update(AdoptionRequest)
            .where(
                AdoptionRequest.request_id == request_id,
                AdoptionRequest.status == RequestStatus.PENDING,
                AdoptionRequest.animal_id.in_(available),
            )
            .values(note=note)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def delete(self, req: AdoptionRequest):
        self.db.delete(req)
        self.db.flush()

    # -------------------------------
    # Listings
    # -------------------------------
    def _ordered(self, query):
        return query.order_by(AdoptionRequest.created_at.desc(), AdoptionRequest.request_id.desc())

    def list_all(self) -> List[AdoptionRequest]:
        return self._ordered(self.db.query(AdoptionRequest)).all()

    def list_by_animal(self, animal_id: int) -> List[AdoptionRequest]:
        return self._ordered(
            self.db.query(AdoptionRequest)
            .filter(AdoptionRequest.animal_id == animal_id)
        ).all()

    def list_by_requester(self, requester_id: int) -> List[AdoptionRequest]:
        return self._ordered(
            self.db.query(AdoptionRequest)
            .filter(AdoptionRequest.requester_id == requester_id)
        ).all()

    def list_by_animal_owner(self, owner_id: int) -> List[AdoptionRequest]:
        return self._ordered(
            self.db.query(AdoptionRequest)
            .join(Animal, Animal.animal_id == AdoptionRequest.animal_id)
            .filter(Animal.owner_id == owner_id)
        ).all()

    def count_by_animal_and_status(self, animal_id: int, status: RequestStatus) -> int:
        return (
            self.db.query(func.count(AdoptionRequest.request_id))
            .filter(
                AdoptionRequest.animal_id == animal_id,
                AdoptionRequest.status == status,
            )
            .scalar()
        )
