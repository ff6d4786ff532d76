from dataclasses import dataclass
from typing import Dict

from hometail.core.result import ErrorKind, Failure, Result
from hometail.schemas.error_schema import ErrorResponse


@dataclass(frozen=True)
class AnimalError:
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


ANIMAL_ERRORS: Dict[str, AnimalError] = {
    # Lookup
    "ANIMAL_404_1": AnimalError(ErrorKind.NOT_FOUND, "ANIMAL_404_1", "Animal not found."),

    # Search
    "ANIMAL_SEARCH_400_1": AnimalError(ErrorKind.INVALID_INPUT, "ANIMAL_SEARCH_400_1", "page must be 0 or greater."),
    "ANIMAL_SEARCH_400_2": AnimalError(ErrorKind.INVALID_INPUT, "ANIMAL_SEARCH_400_2", "size must be 1 or greater."),
    "ANIMAL_SEARCH_400_3": AnimalError(ErrorKind.INVALID_INPUT, "ANIMAL_SEARCH_400_3", "Unknown sort key."),

    # Create
    "ANIMAL_CREATE_404_1": AnimalError(ErrorKind.NOT_FOUND, "ANIMAL_CREATE_404_1", "Category not found."),
    "ANIMAL_CREATE_404_2": AnimalError(ErrorKind.NOT_FOUND, "ANIMAL_CREATE_404_2", "Breed not found."),
    "ANIMAL_CREATE_400_1": AnimalError(ErrorKind.INVALID_INPUT, "ANIMAL_CREATE_400_1", "Breed does not belong to the given category."),
    "ANIMAL_CREATE_400_2": AnimalError(ErrorKind.INVALID_INPUT, "ANIMAL_CREATE_400_2", "Birthday cannot be in the future."),

    # Update
    "ANIMAL_EDIT_404_1": AnimalError(ErrorKind.NOT_FOUND, "ANIMAL_EDIT_404_1", "Animal not found."),
    "ANIMAL_EDIT_404_2": AnimalError(ErrorKind.NOT_FOUND, "ANIMAL_EDIT_404_2", "Category not found."),
    "ANIMAL_EDIT_404_3": AnimalError(ErrorKind.NOT_FOUND, "ANIMAL_EDIT_404_3", "Breed not found."),
    "ANIMAL_EDIT_403_1": AnimalError(ErrorKind.FORBIDDEN, "ANIMAL_EDIT_403_1", "Only the owner can edit this animal."),
    "ANIMAL_EDIT_400_1": AnimalError(ErrorKind.INVALID_INPUT, "ANIMAL_EDIT_400_1", "Nothing to update."),
    "ANIMAL_EDIT_400_2": AnimalError(ErrorKind.INVALID_INPUT, "ANIMAL_EDIT_400_2", "Breed does not belong to the given category."),
    "ANIMAL_EDIT_400_3": AnimalError(ErrorKind.INVALID_INPUT, "ANIMAL_EDIT_400_3", "Birthday cannot be in the future."),
    "ANIMAL_EDIT_400_4": AnimalError(ErrorKind.INVALID_INPUT, "ANIMAL_EDIT_400_4", "name, category_id and gender cannot be null."),

    # Delete
    "ANIMAL_DELETE_404_1": AnimalError(ErrorKind.NOT_FOUND, "ANIMAL_DELETE_404_1", "Animal not found."),
    "ANIMAL_DELETE_403_1": AnimalError(ErrorKind.FORBIDDEN, "ANIMAL_DELETE_403_1", "Only the owner can delete this animal."),

    # Store
    "ANIMAL_503_1": AnimalError(ErrorKind.UNAVAILABLE, "ANIMAL_503_1", "Database temporarily unavailable. Please retry."),
}


def animal_failure(code: str) -> Result:
    return Result(failure=ANIMAL_ERRORS[code].to_failure())


def _examples(path: str, codes) -> Dict:
    return {
        code: {"value": ANIMAL_ERRORS[code].to_dict(path)}
        for code in codes
    }


# Swagger responses
ANIMAL_SEARCH_RESPONSES = {
    400: {
        "model": ErrorResponse,
        "description": "Invalid search parameters",
        "content": {
            "application/json": {
                "examples": _examples("/api/v1/animals", [
                    "ANIMAL_SEARCH_400_1", "ANIMAL_SEARCH_400_2", "ANIMAL_SEARCH_400_3",
                ])
            }
        },
    },
    503: {"model": ErrorResponse, "description": "Store unavailable"},
}

ANIMAL_CREATE_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid request"},
    401: {"model": ErrorResponse, "description": "Authentication failed"},
    404: {"model": ErrorResponse, "description": "Category or breed not found"},
    500: {"model": ErrorResponse, "description": "Internal server error"},
}

ANIMAL_UPDATE_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid request"},
    401: {"model": ErrorResponse, "description": "Authentication failed"},
    403: {"model": ErrorResponse, "description": "Not the owner"},
    404: {"model": ErrorResponse, "description": "Animal, category or breed not found"},
    500: {"model": ErrorResponse, "description": "Internal server error"},
}

ANIMAL_DELETE_RESPONSES = {
    401: {"model": ErrorResponse, "description": "Authentication failed"},
    403: {"model": ErrorResponse, "description": "Not the owner"},
    404: {"model": ErrorResponse, "description": "Animal not found"},
    500: {"model": ErrorResponse, "description": "Internal server error"},
}
