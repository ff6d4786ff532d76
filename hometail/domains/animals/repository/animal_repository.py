from sqlalchemy.orm import Session
from sqlalchemy import update
from typing import Optional, List, Tuple

from hometail.models.animal import Animal
from hometail.models.breed import Breed
from hometail.models.category import Category

SORT_COLUMNS = {
    "id": Animal.animal_id,
    "name": Animal.name,
    "birthday": Animal.birthday,
    "created_at": Animal.created_at,
}
DEFAULT_SORT = "id"


class AnimalRepository:
    def __init__(self, db: Session):
        self.db = db

    # -------------------------------
    # Lookups
    # -------------------------------
    def get_by_id(self, animal_id: int) -> Optional[Animal]:
        return self.db.get(Animal, animal_id)

    def get_for_update(self, animal_id: int) -> Optional[Animal]:
        return (
            self.db.query(Animal)
            .filter(Animal.animal_id == animal_id)
            .with_for_update()
            .populate_existing()
            .first()
        )

    def list_by_owner(self, owner_id: int) -> List[Animal]:
        return (
            self.db.query(Animal)
            .filter(Animal.owner_id == owner_id)
            .order_by(Animal.animal_id.desc())
            .all()
        )

    # -------------------------------
    # Search (predicate from animal_filters)
    # -------------------------------
    def search(
        self,
        predicate,
        page: int,
        size: int,
        sort: str = DEFAULT_SORT,
        descending: bool = True,
    ) -> Tuple[List[Animal], int]:
        query = (
            self.db.query(Animal)
            .outerjoin(Category, Category.category_id == Animal.category_id)
            .outerjoin(Breed, Breed.breed_id == Animal.breed_id)
            .filter(predicate)
        )

        total = query.count()

        column = SORT_COLUMNS.get(sort, SORT_COLUMNS[DEFAULT_SORT])
        order = [column.desc() if descending else column.asc()]
        if column is not Animal.animal_id:
            order.append(Animal.animal_id.desc())

        items = (
            query.order_by(*order)
            .offset(page * size)
            .limit(size)
            .all()
        )
        return items, total

    # -------------------------------
    # Writes
    # -------------------------------
    def create(self, owner_id: int, **fields) -> Animal:
        animal = Animal(owner_id=owner_id, is_adopted=False, **fields)
        self.db.add(animal)
        self.db.flush()
        return animal

    def update_partial(self, animal: Animal, **kwargs) -> Animal:
        for k, v in kwargs.items():
            setattr(animal, k, v)
        self.db.flush()
        return animal

    def delete(self, animal: Animal):
        self.db.delete(animal)
        self.db.flush()

    def mark_adopted(self, animal_id: int) -> bool:
        """Flip is_adopted false -> true; False when it was already adopted."""
        result = self.db.execute(
            update(Animal)
            .where(Animal.animal_id == animal_id, Animal.is_adopted.is_(False))
            .values(is_adopted=True)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
