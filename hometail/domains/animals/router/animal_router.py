from fastapi import APIRouter, Request, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from hometail.db import get_db
from hometail.core.error_handler import failure_response
from hometail.core.identity import Identity, get_identity, get_optional_identity
from hometail.core.response import ok_response
from hometail.models.animal import AgeGroup, Gender, Size
from hometail.schemas.error_schema import ErrorResponse
from hometail.schemas.animals.animal_schema import (
    AnimalCreateRequest,
    AnimalUpdateRequest,
    AnimalResponse,
    AnimalListResponse,
    AnimalPageResponse,
)

from hometail.domains.animals.exception import (
    ANIMAL_SEARCH_RESPONSES,
    ANIMAL_CREATE_RESPONSES,
    ANIMAL_UPDATE_RESPONSES,
    ANIMAL_DELETE_RESPONSES,
)
from hometail.domains.animals.repository.animal_filters import AnimalSearchCriteria
from hometail.domains.animals.service.animal_service import AnimalService

router = APIRouter(
    prefix="/api/v1/animals",
    tags=["Animals"]
)


# ---------------------------------------------------------
# 1) Search
# ---------------------------------------------------------
@router.get(
    "",
    summary="Search animals",
    description=(
        "Filter animals by free text, category, breed, gender, size, age group "
        "and adoption flag. Every given filter must match."
    ),
    response_model=AnimalPageResponse,
    responses=ANIMAL_SEARCH_RESPONSES,
)
def search_animals(
    request: Request,
    q: Optional[str] = Query(None, description="Free text; every word must match name, description, category or breed"),
    category_id: Optional[int] = Query(None),
    breed_id: Optional[int] = Query(None),
    gender: Optional[Gender] = Query(None),
    animal_size: Optional[Size] = Query(None, description="Animal size filter"),
    age_group: Optional[AgeGroup] = Query(None),
    adopted: Optional[bool] = Query(None),
    page: int = Query(0, description="Zero-based page index"),
    size: Optional[int] = Query(None, description="Page size"),
    sort: str = Query("id", description="id, name, birthday or created_at"),
    direction: str = Query("desc", pattern="^(asc|desc|ASC|DESC)$"),
    db: Session = Depends(get_db),
):
    criteria = AnimalSearchCriteria(
        q=q,
        category_id=category_id,
        breed_id=breed_id,
        gender=gender,
        size=animal_size,
        age_group=age_group,
        adopted=adopted,
    )
    result = AnimalService(db).search(
        criteria,
        page=page,
        size=size,
        sort=sort,
        descending=direction.lower() == "desc",
    )
    if not result.ok:
        return failure_response(result.failure, request.url.path)
    return ok_response(200, request.url.path, **result.value)


# ---------------------------------------------------------
# 2) Animals of one owner
# ---------------------------------------------------------
@router.get(
    "/by-owner/{owner_id}",
    summary="List an owner's animals",
    response_model=AnimalListResponse,
)
def list_owner_animals(
    owner_id: int,
    request: Request,
    db: Session = Depends(get_db),
):
    result = AnimalService(db).list_by_owner(owner_id)
    return ok_response(200, request.url.path, animals=result.value)


# ---------------------------------------------------------
# 3) Detail
# ---------------------------------------------------------
@router.get(
    "/{animal_id}",
    summary="Get an animal",
    description="Owner contact details are included only for signed-in callers.",
    response_model=AnimalResponse,
    responses={404: {"model": ErrorResponse, "description": "Animal not found"}},
)
def get_animal(
    animal_id: int,
    request: Request,
    viewer: Optional[Identity] = Depends(get_optional_identity),
    db: Session = Depends(get_db),
):
    result = AnimalService(db).get_animal(animal_id, viewer)
    if not result.ok:
        return failure_response(result.failure, request.url.path)
    return ok_response(200, request.url.path, animal=result.value)


# ---------------------------------------------------------
# 4) Create
# ---------------------------------------------------------
@router.post(
    "",
    summary="List a new animal",
    status_code=201,
    response_model=AnimalResponse,
    responses=ANIMAL_CREATE_RESPONSES,
)
def create_animal(
    body: AnimalCreateRequest,
    request: Request,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    result = AnimalService(db).create_animal(identity, body)
    if not result.ok:
        return failure_response(result.failure, request.url.path)
    return ok_response(201, request.url.path, animal=result.value)


# ---------------------------------------------------------
# 5) Update
# ---------------------------------------------------------
@router.patch(
    "/{animal_id}",
    summary="Edit an animal",
    response_model=AnimalResponse,
    responses=ANIMAL_UPDATE_RESPONSES,
)
def update_animal(
    animal_id: int,
    body: AnimalUpdateRequest,
    request: Request,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    result = AnimalService(db).update_animal(identity, animal_id, body)
    if not result.ok:
        return failure_response(result.failure, request.url.path)
    return ok_response(200, request.url.path, animal=result.value)


# ---------------------------------------------------------
# 6) Delete
# ---------------------------------------------------------
@router.delete(
    "/{animal_id}",
    summary="Delete an animal and its adoption requests",
    responses=ANIMAL_DELETE_RESPONSES,
)
def delete_animal(
    animal_id: int,
    request: Request,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    result = AnimalService(db).delete_animal(identity, animal_id)
    if not result.ok:
        return failure_response(result.failure, request.url.path)
    return ok_response(200, request.url.path, animal_id=animal_id)
