import logging
import math
from datetime import date
from typing import Callable, Optional

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from hometail.core import clock
from hometail.core.config import settings
from hometail.core.identity import Identity
from hometail.core.result import Result
from hometail.models.animal import Animal
from hometail.schemas.animals.animal_schema import AnimalCreateRequest, AnimalUpdateRequest

from hometail.domains.animals.exception import animal_failure
from hometail.domains.animals.repository.animal_filters import AnimalSearchCriteria, build_predicate
from hometail.domains.animals.repository.animal_repository import AnimalRepository, SORT_COLUMNS
from hometail.domains.animals.repository.taxonomy_repository import TaxonomyRepository
from hometail.domains.animals.service.age_classifier import classify_optional

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "category_id", "gender")


class AnimalService:
    def __init__(self, db: Session, today: Callable[[], date] = clock.today):
        self.db = db
        self.today = today
        self.repo = AnimalRepository(db)
        self.taxonomy_repo = TaxonomyRepository(db)

    # ---------------------------------------------------------
    # Read model
    # ---------------------------------------------------------
    def to_item(self, animal: Animal, include_owner: bool = False, today: Optional[date] = None) -> dict:
        info = classify_optional(animal.birthday, today or self.today())

        item = {
            "animal_id": animal.animal_id,
            "name": animal.name,
            "category_id": animal.category_id,
            "category_name": animal.category.name if animal.category else None,
            "breed_id": animal.breed_id,
            "breed_name": animal.breed.name if animal.breed else None,
            "gender": animal.gender,
            "size": animal.size,
            "birthday": animal.birthday,
            "age": info.years if info else None,
            "age_group": info.age_group if info else None,
            "age_description": info.description if info else "Unknown",
            "short_description": animal.short_description,
            "long_description": animal.long_description,
            "image": animal.image,
            "adopted": animal.is_adopted,
            "owner_id": animal.owner_id,
            "owner": None,
        }
        if include_owner and animal.owner is not None:
            item["owner"] = {
                "full_name": animal.owner.full_name,
                "email": animal.owner.email,
                "phone": animal.owner.phone,
            }
        return item

    # ---------------------------------------------------------
    # 1) Search
    # ---------------------------------------------------------
    def search(
        self,
        criteria: AnimalSearchCriteria,
        page: int = 0,
        size: Optional[int] = None,
        sort: str = "id",
        descending: bool = True,
    ) -> Result:
        size = settings.DEFAULT_PAGE_SIZE if size is None else size
        if page < 0:
            return animal_failure("ANIMAL_SEARCH_400_1")
        if size < 1:
            return animal_failure("ANIMAL_SEARCH_400_2")
        if sort not in SORT_COLUMNS:
            return animal_failure("ANIMAL_SEARCH_400_3")
        size = min(size, settings.MAX_PAGE_SIZE)

        today = self.today()
        try:
            items, total = self.repo.search(
                build_predicate(criteria, today),
                page=page,
                size=size,
                sort=sort,
                descending=descending,
            )
        except OperationalError as e:
            logger.warning("Animal search failed on store error: %s", e)
            return animal_failure("ANIMAL_503_1")

        return Result.success({
            "animals": [self.to_item(a, today=today) for a in items],
            "page": page,
            "size": size,
            "total_count": total,
            "total_pages": math.ceil(total / size) if total else 0,
        })

    # ---------------------------------------------------------
    # 2) Single animal / by owner
    # ---------------------------------------------------------
    def get_animal(self, animal_id: int, viewer: Optional[Identity] = None) -> Result:
        animal = self.repo.get_by_id(animal_id)
        if not animal:
            return animal_failure("ANIMAL_404_1")
        # owner contact details are only for signed-in callers
        return Result.success(self.to_item(animal, include_owner=viewer is not None))

    def list_by_owner(self, owner_id: int) -> Result:
        today = self.today()
        animals = self.repo.list_by_owner(owner_id)
        return Result.success([self.to_item(a, include_owner=True, today=today) for a in animals])

    # ---------------------------------------------------------
    # 3) Create
    # ---------------------------------------------------------
    def create_animal(self, identity: Identity, body: AnimalCreateRequest) -> Result:
        category = self.taxonomy_repo.get_category(body.category_id)
        if not category:
            return animal_failure("ANIMAL_CREATE_404_1")

        if body.breed_id is not None:
            breed = self.taxonomy_repo.get_breed(body.breed_id)
            if not breed:
                return animal_failure("ANIMAL_CREATE_404_2")
            if breed.category_id != category.category_id:
                return animal_failure("ANIMAL_CREATE_400_1")

        if body.birthday is not None and body.birthday > self.today():
            return animal_failure("ANIMAL_CREATE_400_2")

        try:
            animal = self.repo.create(owner_id=identity.user_id, **body.model_dump())
            self.db.commit()
            self.db.refresh(animal)
        except OperationalError as e:
            self.db.rollback()
            logger.warning("Animal create failed on store error: %s", e)
            return animal_failure("ANIMAL_503_1")
        except Exception:
            self.db.rollback()
            raise

        logger.info("Animal %s listed by user %s", animal.animal_id, identity.user_id)
        return Result.success(self.to_item(animal, include_owner=True))

    # ---------------------------------------------------------
    # 4) Update (owner only)
    # ---------------------------------------------------------
    def update_animal(self, identity: Identity, animal_id: int, body: AnimalUpdateRequest) -> Result:
        # Explicit nulls clear optional fields
        changes = body.model_dump(exclude_unset=True)
        if not changes:
            return animal_failure("ANIMAL_EDIT_400_1")
        if any(field in changes and changes[field] is None for field in REQUIRED_FIELDS):
            return animal_failure("ANIMAL_EDIT_400_4")

        animal = self.repo.get_by_id(animal_id)
        if not animal:
            return animal_failure("ANIMAL_EDIT_404_1")

        if animal.owner_id != identity.user_id:
            return animal_failure("ANIMAL_EDIT_403_1")

        category_id = changes.get("category_id", animal.category_id)
        if "category_id" in changes and not self.taxonomy_repo.get_category(category_id):
            return animal_failure("ANIMAL_EDIT_404_2")

        breed_id = changes.get("breed_id", animal.breed_id)
        if breed_id is not None and ("breed_id" in changes or "category_id" in changes):
            breed = self.taxonomy_repo.get_breed(breed_id)
            if not breed:
                return animal_failure("ANIMAL_EDIT_404_3")
            if breed.category_id != category_id:
                return animal_failure("ANIMAL_EDIT_400_2")

        if changes.get("birthday") is not None and changes["birthday"] > self.today():
            return animal_failure("ANIMAL_EDIT_400_3")

        try:
            self.repo.update_partial(animal, **changes)
            self.db.commit()
            self.db.refresh(animal)
        except OperationalError as e:
            self.db.rollback()
            logger.warning("Animal %s update failed on store error: %s", animal_id, e)
            return animal_failure("ANIMAL_503_1")
        except Exception:
            self.db.rollback()
            raise

        return Result.success(self.to_item(animal, include_owner=True))

    # ---------------------------------------------------------
    # 5) Delete (owner only, requests cascade)
    # ---------------------------------------------------------
    def delete_animal(self, identity: Identity, animal_id: int) -> Result:
        animal = self.repo.get_by_id(animal_id)
        if not animal:
            return animal_failure("ANIMAL_DELETE_404_1")

        if animal.owner_id != identity.user_id:
            return animal_failure("ANIMAL_DELETE_403_1")

        try:
            self.repo.delete(animal)
            self.db.commit()
        except OperationalError as e:
            self.db.rollback()
            logger.warning("Animal %s delete failed on store error: %s", animal_id, e)
            return animal_failure("ANIMAL_503_1")
        except Exception:
            self.db.rollback()
            raise

        logger.info("Animal %s deleted by owner %s", animal_id, identity.user_id)
        return Result.success(None)
