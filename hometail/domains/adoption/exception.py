from dataclasses import dataclass
from typing import Dict

from hometail.core.error_handler import error_response
from hometail.core.result import ErrorKind, Failure, Result
from hometail.schemas.error_schema import ErrorResponse


@dataclass(frozen=True)
class AdoptionError:
    kind: ErrorKind
    code: str
    reason: str

    @property
    def status(self) -> int:
        return self.kind.http_status

    def to_failure(self) -> Failure:
        return Failure(kind=self.kind, code=self.code, reason=self.reason)

    def to_dict(self, path: str) -> Dict:
        return {
            "success": False,
            "status": self.status,
            "code": self.code,
            "reason": self.reason,
            "timeStamp": "...",
            "path": path,
        }


ADOPTION_ERRORS: Dict[str, AdoptionError] = {
    # Create
    "ADOPT_CREATE_404_1": AdoptionError(ErrorKind.NOT_FOUND, "ADOPT_CREATE_404_1", "Animal not found."),
    "ADOPT_CREATE_404_2": AdoptionError(ErrorKind.NOT_FOUND, "ADOPT_CREATE_404_2", "Requester not found."),
    "ADOPT_CREATE_409_1": AdoptionError(ErrorKind.CONFLICT_ALREADY_ADOPTED, "ADOPT_CREATE_409_1", "This animal is already adopted."),
    "ADOPT_CREATE_403_1": AdoptionError(ErrorKind.FORBIDDEN, "ADOPT_CREATE_403_1", "You cannot request your own animal."),
    "ADOPT_CREATE_409_2": AdoptionError(ErrorKind.CONFLICT_DUPLICATE_REQUEST, "ADOPT_CREATE_409_2", "You already have an active request for this animal."),
    "ADOPT_CREATE_400_1": AdoptionError(ErrorKind.INVALID_INPUT, "ADOPT_CREATE_400_1", "Note cannot be blank."),
    "ADOPT_CREATE_400_2": AdoptionError(ErrorKind.INVALID_INPUT, "ADOPT_CREATE_400_2", "Note must be at most 500 characters."),

    # Decide (approve / reject)
    "ADOPT_DECIDE_400_1": AdoptionError(ErrorKind.INVALID_INPUT, "ADOPT_DECIDE_400_1", "Status must be APPROVED or REJECTED."),
    "ADOPT_DECIDE_404_1": AdoptionError(ErrorKind.NOT_FOUND, "ADOPT_DECIDE_404_1", "Request not found."),
    "ADOPT_DECIDE_403_1": AdoptionError(ErrorKind.FORBIDDEN, "ADOPT_DECIDE_403_1", "Only the animal's owner can decide on this request."),
    "ADOPT_DECIDE_400_2": AdoptionError(ErrorKind.INVALID_STATE, "ADOPT_DECIDE_400_2", "Only pending requests can be approved or rejected."),
    "ADOPT_DECIDE_409_1": AdoptionError(ErrorKind.CONFLICT_ALREADY_ADOPTED, "ADOPT_DECIDE_409_1", "This animal is already adopted."),

    # Update note
    "ADOPT_NOTE_404_1": AdoptionError(ErrorKind.NOT_FOUND, "ADOPT_NOTE_404_1", "Request not found."),
    "ADOPT_NOTE_403_1": AdoptionError(ErrorKind.FORBIDDEN, "ADOPT_NOTE_403_1", "Only the requester can edit the note."),
    "ADOPT_NOTE_400_1": AdoptionError(ErrorKind.INVALID_STATE, "ADOPT_NOTE_400_1", "Only pending requests can be modified."),
    "ADOPT_NOTE_409_1": AdoptionError(ErrorKind.CONFLICT_ALREADY_ADOPTED, "ADOPT_NOTE_409_1", "This animal is already adopted."),
    "ADOPT_NOTE_400_2": AdoptionError(ErrorKind.INVALID_INPUT, "ADOPT_NOTE_400_2", "Note cannot be blank."),
    "ADOPT_NOTE_400_3": AdoptionError(ErrorKind.INVALID_INPUT, "ADOPT_NOTE_400_3", "Note must be at most 500 characters."),

    # Cancel
    "ADOPT_CANCEL_404_1": AdoptionError(ErrorKind.NOT_FOUND, "ADOPT_CANCEL_404_1", "Request not found."),
    "ADOPT_CANCEL_403_1": AdoptionError(ErrorKind.FORBIDDEN, "ADOPT_CANCEL_403_1", "Only the requester can cancel this request."),

    # Queries
    "ADOPT_GET_404_1": AdoptionError(ErrorKind.NOT_FOUND, "ADOPT_GET_404_1", "Request not found."),
    "ADOPT_GET_403_1": AdoptionError(ErrorKind.FORBIDDEN, "ADOPT_GET_403_1", "Only the requester or the animal's owner can view this request."),
    "ADOPT_LIST_404_1": AdoptionError(ErrorKind.NOT_FOUND, "ADOPT_LIST_404_1", "Animal not found."),
    "ADOPT_LIST_403_1": AdoptionError(ErrorKind.FORBIDDEN, "ADOPT_LIST_403_1", "You do not own this animal."),
    "ADOPT_LIST_403_2": AdoptionError(ErrorKind.FORBIDDEN, "ADOPT_LIST_403_2", "Administrator role required."),
    "ADOPT_COUNT_400_1": AdoptionError(ErrorKind.INVALID_INPUT, "ADOPT_COUNT_400_1", "Status must be PENDING, APPROVED or REJECTED."),

    # Store
    "ADOPT_503_1": AdoptionError(ErrorKind.UNAVAILABLE, "ADOPT_503_1", "Database temporarily unavailable. Please retry."),
}


def adoption_failure(code: str) -> Result:
    return Result(failure=ADOPTION_ERRORS[code].to_failure())


def adoption_error(code: str, path: str):
    err = ADOPTION_ERRORS.get(code)
    if not err:
        return error_response(500, "ADOPT_500_1", "Internal server error.", path)
    return error_response(err.status, err.code, err.reason, path)


def _examples(path: str, codes) -> Dict:
    return {
        code: {"value": ADOPTION_ERRORS[code].to_dict(path)}
        for code in codes
    }


def _responses(path: str, groups: Dict[int, tuple]) -> Dict:
    responses = {401: {"model": ErrorResponse, "description": "Authentication failed"}}
    for status, (description, codes) in groups.items():
        responses[status] = {
            "model": ErrorResponse,
            "description": description,
            "content": {"application/json": {"examples": _examples(path, codes)}},
        }
    responses[503] = {"model": ErrorResponse, "description": "Store unavailable, retry later"}
    return responses


# Swagger responses
ADOPT_CREATE_RESPONSES = _responses("/api/v1/adoption-requests", {
    400: ("Invalid note", ["ADOPT_CREATE_400_1", "ADOPT_CREATE_400_2"]),
    403: ("Own animal", ["ADOPT_CREATE_403_1"]),
    404: ("Animal or requester not found", ["ADOPT_CREATE_404_1", "ADOPT_CREATE_404_2"]),
    409: ("Adopted or duplicate", ["ADOPT_CREATE_409_1", "ADOPT_CREATE_409_2"]),
})

ADOPT_DECIDE_RESPONSES = _responses("/api/v1/adoption-requests/{request_id}/status", {
    400: ("Invalid status or request not pending", ["ADOPT_DECIDE_400_1", "ADOPT_DECIDE_400_2"]),
    403: ("Not the animal's owner", ["ADOPT_DECIDE_403_1"]),
    404: ("Request not found", ["ADOPT_DECIDE_404_1"]),
    409: ("Animal already adopted", ["ADOPT_DECIDE_409_1"]),
})

ADOPT_NOTE_RESPONSES = _responses("/api/v1/adoption-requests/{request_id}/note", {
    400: ("Invalid note or request not pending", ["ADOPT_NOTE_400_1", "ADOPT_NOTE_400_2", "ADOPT_NOTE_400_3"]),
    403: ("Not the requester", ["ADOPT_NOTE_403_1"]),
    404: ("Request not found", ["ADOPT_NOTE_404_1"]),
    409: ("Animal already adopted", ["ADOPT_NOTE_409_1"]),
})

ADOPT_CANCEL_RESPONSES = _responses("/api/v1/adoption-requests/{request_id}", {
    403: ("Not the requester", ["ADOPT_CANCEL_403_1"]),
    404: ("Request not found", ["ADOPT_CANCEL_404_1"]),
})

ADOPT_LIST_RESPONSES = {
    401: {"model": ErrorResponse, "description": "Authentication failed"},
    403: {"model": ErrorResponse, "description": "Not allowed"},
    404: {"model": ErrorResponse, "description": "Animal not found"},
}

ADOPT_COUNT_RESPONSES = _responses("/api/v1/adoption-requests/animal/{animal_id}/count", {
    400: ("Invalid status", ["ADOPT_COUNT_400_1"]),
})
