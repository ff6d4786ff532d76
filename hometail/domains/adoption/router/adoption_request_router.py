from fastapi import APIRouter, Request, Depends, Query
from sqlalchemy.orm import Session

from hometail.db import get_db
from hometail.core.error_handler import failure_response
from hometail.core.identity import Identity, get_identity
from hometail.core.response import ok_response
from hometail.schemas.error_schema import ErrorResponse
from hometail.schemas.adoption.adoption_request_schema import (
    AdoptionRequestCreate,
    AdoptionDecisionRequest,
    AdoptionNoteUpdate,
    AdoptionRequestResponse,
    AdoptionDecisionResponse,
    AdoptionRequestListResponse,
    AdoptionRequestCountResponse,
)

from hometail.domains.adoption.exception import (
    adoption_error,
    ADOPT_CREATE_RESPONSES,
    ADOPT_DECIDE_RESPONSES,
    ADOPT_NOTE_RESPONSES,
    ADOPT_CANCEL_RESPONSES,
    ADOPT_LIST_RESPONSES,
    ADOPT_COUNT_RESPONSES,
)
from hometail.domains.adoption.service.lifecycle_service import AdoptionLifecycleService, parse_status

router = APIRouter(
    prefix="/api/v1/adoption-requests",
    tags=["Adoption"]
)


def _list_response(result, path: str):
    if not result.ok:
        return failure_response(result.failure, path)
    return ok_response(200, path, requests=result.value, total_count=len(result.value))


# ---------------------------------------------------------
# 1) Create
# ---------------------------------------------------------
@router.post(
    "",
    summary="Request to adopt an animal",
    description="Creates a PENDING request from the signed-in user for an animal that is not yet adopted.",
    status_code=201,
    response_model=AdoptionRequestResponse,
    responses=ADOPT_CREATE_RESPONSES,
)
def create_adoption_request(
    body: AdoptionRequestCreate,
    request: Request,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    result = AdoptionLifecycleService(db).create_request(
        animal_id=body.animal_id,
        requester_id=identity.user_id,
        note=body.note,
    )
    if not result.ok:
        return failure_response(result.failure, request.url.path)
    return ok_response(201, request.url.path, adoption_request=result.value)


# ---------------------------------------------------------
# 2) All requests (administrators)
# ---------------------------------------------------------
@router.get(
    "",
    summary="List every adoption request",
    response_model=AdoptionRequestListResponse,
    responses=ADOPT_LIST_RESPONSES,
)
def list_all_requests(
    request: Request,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    if not identity.is_admin:
        return adoption_error("ADOPT_LIST_403_2", request.url.path)
    return _list_response(AdoptionLifecycleService(db).list_all(), request.url.path)


# ---------------------------------------------------------
# 3) My requests / requests for my animals
# ---------------------------------------------------------
@router.get(
    "/me",
    summary="Requests I have made",
    response_model=AdoptionRequestListResponse,
    responses={401: {"model": ErrorResponse}},
)
def list_my_requests(
    request: Request,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    result = AdoptionLifecycleService(db).list_by_requester(identity.user_id)
    return _list_response(result, request.url.path)


@router.get(
    "/received",
    summary="Requests for all of my animals",
    response_model=AdoptionRequestListResponse,
    responses={401: {"model": ErrorResponse}},
)
def list_received_requests(
    request: Request,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    result = AdoptionLifecycleService(db).list_for_owner(identity.user_id)
    return _list_response(result, request.url.path)


@router.get(
    "/received/{animal_id}",
    summary="Requests for one of my animals",
    response_model=AdoptionRequestListResponse,
    responses=ADOPT_LIST_RESPONSES,
)
def list_received_requests_for_animal(
    animal_id: int,
    request: Request,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    result = AdoptionLifecycleService(db).list_for_owner_animal(identity.user_id, animal_id)
    return _list_response(result, request.url.path)


# ---------------------------------------------------------
# 4) Per animal
# ---------------------------------------------------------
@router.get(
    "/animal/{animal_id}",
    summary="Requests for an animal",
    response_model=AdoptionRequestListResponse,
    responses={401: {"model": ErrorResponse}},
)
def list_requests_for_animal(
    animal_id: int,
    request: Request,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    result = AdoptionLifecycleService(db).list_by_animal(animal_id)
    return _list_response(result, request.url.path)


@router.get(
    "/animal/{animal_id}/count",
    summary="Count an animal's requests by status",
    response_model=AdoptionRequestCountResponse,
    responses=ADOPT_COUNT_RESPONSES,
)
def count_requests_for_animal(
    animal_id: int,
    request: Request,
    status: str = Query("PENDING", description="PENDING, APPROVED or REJECTED"),
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    result = AdoptionLifecycleService(db).count_by_animal_and_status(animal_id, status)
    if not result.ok:
        return failure_response(result.failure, request.url.path)
    return ok_response(
        200,
        request.url.path,
        animal_id=animal_id,
        request_status=parse_status(status),
        count=result.value,
    )


# ---------------------------------------------------------
# 5) Single request
# ---------------------------------------------------------
@router.get(
    "/{request_id}",
    summary="Get an adoption request",
    response_model=AdoptionRequestResponse,
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
def get_adoption_request(
    request_id: int,
    request: Request,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    result = AdoptionLifecycleService(db).get_request(request_id, identity.user_id, identity.is_admin)
    if not result.ok:
        return failure_response(result.failure, request.url.path)
    return ok_response(200, request.url.path, adoption_request=result.value)


# ---------------------------------------------------------
# 6) Approve / reject (animal owner)
# ---------------------------------------------------------
@router.patch(
    "/{request_id}/status",
    summary="Approve or reject a request",
    description=(
        "Approving marks the animal adopted and rejects every other pending "
        "request for it in the same transaction."
    ),
    response_model=AdoptionDecisionResponse,
    responses=ADOPT_DECIDE_RESPONSES,
)
def decide_adoption_request(
    request_id: int,
    body: AdoptionDecisionRequest,
    request: Request,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    result = AdoptionLifecycleService(db).decide(request_id, body.status, identity.user_id)
    if not result.ok:
        return failure_response(result.failure, request.url.path)
    return ok_response(200, request.url.path, **result.value)


# ---------------------------------------------------------
# 7) Edit note (requester)
# ---------------------------------------------------------
@router.patch(
    "/{request_id}/note",
    summary="Edit the note of a pending request",
    response_model=AdoptionRequestResponse,
    responses=ADOPT_NOTE_RESPONSES,
)
def update_adoption_note(
    request_id: int,
    body: AdoptionNoteUpdate,
    request: Request,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    result = AdoptionLifecycleService(db).update_note(request_id, body.note, identity.user_id)
    if not result.ok:
        return failure_response(result.failure, request.url.path)
    return ok_response(200, request.url.path, adoption_request=result.value)


# ---------------------------------------------------------
# 8) Cancel (requester or administrator)
# ---------------------------------------------------------
@router.delete(
    "/{request_id}",
    summary="Cancel an adoption request",
    responses=ADOPT_CANCEL_RESPONSES,
)
def cancel_adoption_request(
    request_id: int,
    request: Request,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    result = AdoptionLifecycleService(db).cancel(request_id, identity.user_id, identity.is_admin)
    if not result.ok:
        return failure_response(result.failure, request.url.path)
    return ok_response(200, request.url.path, request_id=request_id)
