from sqlalchemy.orm import Session
from typing import Optional, List

from hometail.models.breed import Breed
from hometail.models.category import Category


class TaxonomyRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_categories(self) -> List[Category]:
        return (
            self.db.query(Category)
            .filter(Category.active.is_(True))
            .order_by(Category.name.asc())
            .all()
        )

    def list_breeds(self, category_id: Optional[int] = None) -> List[Breed]:
        query = self.db.query(Breed).filter(Breed.active.is_(True))
        if category_id is not None:
            query = query.filter(Breed.category_id == category_id)
        return query.order_by(Breed.name.asc()).all()

    def get_category(self, category_id: int) -> Optional[Category]:
        return self.db.get(Category, category_id)

    def get_breed(self, breed_id: int) -> Optional[Breed]:
        return self.db.get(Breed, breed_id)
