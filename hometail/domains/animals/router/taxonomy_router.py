from fastapi import APIRouter, Request, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from hometail.db import get_db
from hometail.core.response import ok_response
from hometail.schemas.taxonomy.taxonomy_schema import CategoryListResponse, BreedListResponse
from hometail.domains.animals.repository.taxonomy_repository import TaxonomyRepository

router = APIRouter(
    prefix="/api/v1",
    tags=["Taxonomy"]
)


@router.get(
    "/categories",
    summary="List active categories",
    response_model=CategoryListResponse,
)
def list_categories(request: Request, db: Session = Depends(get_db)):
    categories = TaxonomyRepository(db).list_categories()
    return ok_response(
        200,
        request.url.path,
        categories=[{"category_id": c.category_id, "name": c.name} for c in categories],
    )


@router.get(
    "/breeds",
    summary="List active breeds",
    description="Optionally restricted to one category.",
    response_model=BreedListResponse,
)
def list_breeds(
    request: Request,
    category_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
):
    breeds = TaxonomyRepository(db).list_breeds(category_id)
    return ok_response(
        200,
        request.url.path,
        breeds=[
            {"breed_id": b.breed_id, "category_id": b.category_id, "name": b.name}
            for b in breeds
        ],
    )
