import logging
from datetime import datetime
from typing import Callable, Optional, Union

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from hometail.core import clock
from hometail.core.result import Result
from hometail.models.adoption_request import AdoptionRequest, RequestStatus, NOTE_MAX_LENGTH

from hometail.domains.adoption.exception import adoption_failure
from hometail.domains.adoption.repository.adoption_request_repository import AdoptionRequestRepository
from hometail.domains.animals.repository.animal_repository import AnimalRepository
from hometail.domains.users.repository.user_repository import UserRepository

logger = logging.getLogger(__name__)

DECISIONS = (RequestStatus.APPROVED, RequestStatus.REJECTED)


def parse_status(raw: Union[str, RequestStatus, None]) -> Optional[RequestStatus]:
    """Case-insensitive status lookup; None for anything unknown."""
    if isinstance(raw, RequestStatus):
        return raw
    if not raw:
        return None
    try:
        return RequestStatus(raw.strip().upper())
    except ValueError:
        return None


class AdoptionLifecycleService:
    """
    Adoption request lifecycle: PENDING -> APPROVED | REJECTED, or removed.

    Every operation takes the acting user explicitly and returns a ``Result``.
    Approving a request rejects the other pending requests on the same animal
    and marks the animal adopted in a single transaction.
    """

    def __init__(self, db: Session, now: Callable[[], datetime] = clock.now_utc):
        self.db = db
        self.now = now
        self.repo = AdoptionRequestRepository(db)
        self.animal_repo = AnimalRepository(db)
        self.user_repo = UserRepository(db)

    # ---------------------------------------------------------
    # Read model
    # ---------------------------------------------------------
    @staticmethod
    def to_item(req: AdoptionRequest) -> dict:
        return {
            "request_id": req.request_id,
            "animal_id": req.animal_id,
            "animal_name": req.animal.name if req.animal else None,
            "animal_owner_id": req.animal.owner_id if req.animal else None,
            "requester_id": req.requester_id,
            "requester_name": req.requester.full_name if req.requester else None,
            "note": req.note,
            "status": req.status,
            "created_at": req.created_at,
            "decision_at": req.decision_at,
        }

    def _refuse(self, code: str, **context) -> Result:
        logger.info("Adoption request refused: %s %s", code, context)
        return adoption_failure(code)

    def _unavailable(self, action: str, error: Exception) -> Result:
        self.db.rollback()
        logger.error("Adoption %s failed on store error: %s", action, error)
        return adoption_failure("ADOPT_503_1")

    def _still_available(self, animal_id: int) -> bool:
        animal = self.animal_repo.get_for_update(animal_id)
        return animal is not None and not animal.is_adopted

    @staticmethod
    def _clean_note(note: Optional[str]) -> str:
        return (note or "").strip()

    # ---------------------------------------------------------
    # 1) Create
    # ---------------------------------------------------------
    def create_request(self, animal_id: int, requester_id: int, note: Optional[str]) -> Result:
        # 1) Animal / requester
        animal = self.animal_repo.get_by_id(animal_id)
        if not animal:
            return self._refuse("ADOPT_CREATE_404_1", animal_id=animal_id)

        if not self.user_repo.exists(requester_id):
            return self._refuse("ADOPT_CREATE_404_2", requester_id=requester_id)

        # 2) Animal still available
        if animal.is_adopted:
            return self._refuse("ADOPT_CREATE_409_1", animal_id=animal_id)

        # 3) Owner cannot request own animal
        if animal.owner_id == requester_id:
            return self._refuse("ADOPT_CREATE_403_1", animal_id=animal_id, requester_id=requester_id)

        # 4) One open request per (animal, requester)
        if self.repo.exists_open_request(animal_id, requester_id):
            return self._refuse("ADOPT_CREATE_409_2", animal_id=animal_id, requester_id=requester_id)

        # 5) Note
        note = self._clean_note(note)
        if not note:
            return self._refuse("ADOPT_CREATE_400_1")
        if len(note) > NOTE_MAX_LENGTH:
            return self._refuse("ADOPT_CREATE_400_2")

        # 6) Insert under the animal lock; the unique constraint catches a concurrent duplicate
        try:
            if not self._still_available(animal_id):
                self.db.rollback()
                return self._refuse("ADOPT_CREATE_409_1", animal_id=animal_id)

            req = self.repo.create_request(
                animal_id=animal_id,
                requester_id=requester_id,
                note=note,
                created_at=self.now(),
            )

            # 7) Re-check once the insert holds the write lock (SQLite has no row locks)
            if not self._still_available(animal_id):
                self.db.rollback()
                return self._refuse("ADOPT_CREATE_409_1", animal_id=animal_id)

            self.db.commit()
            self.db.refresh(req)
        except IntegrityError:
            self.db.rollback()
            return self._refuse("ADOPT_CREATE_409_2", animal_id=animal_id, requester_id=requester_id)
        except OperationalError as e:
            return self._unavailable("create", e)
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            "Adoption request %s created: animal=%s requester=%s",
            req.request_id, animal_id, requester_id,
        )
        return Result.success(self.to_item(req))

    # ---------------------------------------------------------
    # 2) Decide (approve / reject), animal owner only
    # ---------------------------------------------------------
    def decide(
        self,
        request_id: int,
        decision: Union[str, RequestStatus],
        acting_owner_id: int,
    ) -> Result:
        # 1) Request + owner
        req = self.repo.get_by_id(request_id)
        if not req:
            return self._refuse("ADOPT_DECIDE_404_1", request_id=request_id)

        if req.animal.owner_id != acting_owner_id:
            return self._refuse("ADOPT_DECIDE_403_1", request_id=request_id, actor=acting_owner_id)

        # 2) Decision value
        status = parse_status(decision)
        if status not in DECISIONS:
            return self._refuse("ADOPT_DECIDE_400_1", request_id=request_id, decision=decision)

        # 3) Fast path for already decided requests
        if req.status != RequestStatus.PENDING:
            return self._refuse("ADOPT_DECIDE_400_2", request_id=request_id, status=req.status)

        decided_at = self.now()
        rejected_count = 0
        try:
            # 4) Lock the request and re-check under the lock
            locked = self.repo.get_for_update(request_id)
            if locked is None or locked.status != RequestStatus.PENDING:
                self.db.rollback()
                return self._refuse("ADOPT_DECIDE_400_2", request_id=request_id)

            if status == RequestStatus.APPROVED:
                # 5) Lock the animal, then conditional writes
                self.animal_repo.get_for_update(locked.animal_id)

                if not self.repo.approve_if_pending(request_id, decided_at):
                    self.db.rollback()
                    return self._refuse("ADOPT_DECIDE_400_2", request_id=request_id)

                if not self.animal_repo.mark_adopted(locked.animal_id):
                    self.db.rollback()
                    return self._refuse("ADOPT_DECIDE_409_1", animal_id=locked.animal_id)

                rejected_count = self.repo.reject_other_pending(
                    locked.animal_id,
                    exclude_request_id=request_id,
                    decided_at=decided_at,
                )
            else:
                if not self.repo.reject_if_pending(request_id, decided_at):
                    self.db.rollback()
                    return self._refuse("ADOPT_DECIDE_400_2", request_id=request_id)

            self.db.commit()
        except OperationalError as e:
            return self._unavailable("decide", e)
        except Exception:
            self.db.rollback()
            raise

        req = self.repo.get_by_id(request_id)
        if status == RequestStatus.APPROVED:
            logger.info(
                "Adoption request %s approved: animal %s adopted, %s competing request(s) rejected",
                request_id, req.animal_id, rejected_count,
            )
        else:
            logger.info("Adoption request %s rejected", request_id)

        return Result.success({
            "adoption_request": self.to_item(req),
            "rejected_count": rejected_count,
            "animal_adopted": bool(req.animal.is_adopted),
        })

    # ---------------------------------------------------------
    # 3) Update note, requester only
    # ---------------------------------------------------------
    def update_note(self, request_id: int, new_note: Optional[str], acting_requester_id: int) -> Result:
        req = self.repo.get_by_id(request_id)
        if not req:
            return self._refuse("ADOPT_NOTE_404_1", request_id=request_id)

        if req.requester_id != acting_requester_id:
            return self._refuse("ADOPT_NOTE_403_1", request_id=request_id, actor=acting_requester_id)

        if req.status != RequestStatus.PENDING:
            return self._refuse("ADOPT_NOTE_400_1", request_id=request_id, status=req.status)

        if req.animal.is_adopted:
            return self._refuse("ADOPT_NOTE_409_1", animal_id=req.animal_id)

        note = self._clean_note(new_note)
        if not note:
            return self._refuse("ADOPT_NOTE_400_2")
        if len(note) > NOTE_MAX_LENGTH:
            return self._refuse("ADOPT_NOTE_400_3")

        try:
            # Conditional write: still pending and the animal still available
            if not self.repo.update_note_if_pending(request_id, note):
                self.db.rollback()
                current = self.repo.get_by_id(request_id)
                if current is None:
                    return self._refuse("ADOPT_NOTE_404_1", request_id=request_id)
                if current.status != RequestStatus.PENDING:
                    return self._refuse("ADOPT_NOTE_400_1", request_id=request_id, status=current.status)
                return self._refuse("ADOPT_NOTE_409_1", animal_id=current.animal_id)

            self.db.commit()
            self.db.refresh(req)
        except OperationalError as e:
            return self._unavailable("note update", e)
        except Exception:
            self.db.rollback()
            raise

        return Result.success(self.to_item(req))

    # ---------------------------------------------------------
    # 4) Cancel, requester or administrator
    # ---------------------------------------------------------
    def cancel(self, request_id: int, acting_user_id: int, is_admin: bool = False) -> Result:
        req = self.repo.get_by_id(request_id)
        if not req:
            return self._refuse("ADOPT_CANCEL_404_1", request_id=request_id)

        if req.requester_id != acting_user_id and not is_admin:
            return self._refuse("ADOPT_CANCEL_403_1", request_id=request_id, actor=acting_user_id)

        try:
            self.repo.delete(req)
            self.db.commit()
        except OperationalError as e:
            return self._unavailable("cancel", e)
        except Exception:
            self.db.rollback()
            raise

        logger.info("Adoption request %s removed by user %s", request_id, acting_user_id)
        return Result.success(None)

    # ---------------------------------------------------------
    # 5) Queries
    # ---------------------------------------------------------
    def get_request(self, request_id: int, acting_user_id: int, is_admin: bool = False) -> Result:
        req = self.repo.get_by_id(request_id)
        if not req:
            return adoption_failure("ADOPT_GET_404_1")
        if not is_admin and acting_user_id not in (req.requester_id, req.animal.owner_id):
            return adoption_failure("ADOPT_GET_403_1")
        return Result.success(self.to_item(req))

    def list_all(self) -> Result:
        return Result.success([self.to_item(r) for r in self.repo.list_all()])

    def list_by_animal(self, animal_id: int) -> Result:
        return Result.success([self.to_item(r) for r in self.repo.list_by_animal(animal_id)])

    def list_by_requester(self, requester_id: int) -> Result:
        return Result.success([self.to_item(r) for r in self.repo.list_by_requester(requester_id)])

    def list_for_owner(self, owner_id: int) -> Result:
        return Result.success([self.to_item(r) for r in self.repo.list_by_animal_owner(owner_id)])

    def list_for_owner_animal(self, owner_id: int, animal_id: int) -> Result:
        animal = self.animal_repo.get_by_id(animal_id)
        if not animal:
            return adoption_failure("ADOPT_LIST_404_1")
        if animal.owner_id != owner_id:
            return adoption_failure("ADOPT_LIST_403_1")
        return self.list_by_animal(animal_id)

    def count_by_animal_and_status(self, animal_id: int, status: Union[str, RequestStatus]) -> Result:
        parsed = parse_status(status)
        if parsed is None:
            return adoption_failure("ADOPT_COUNT_400_1")
        return Result.success(self.repo.count_by_animal_and_status(animal_id, parsed))
