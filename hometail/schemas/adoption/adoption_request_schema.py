from datetime import datetime
from pydantic import BaseModel, Field
from typing import List, Optional

from hometail.models.adoption_request import RequestStatus


class AdoptionRequestCreate(BaseModel):
    """Create an adoption request"""
    animal_id: int = Field(..., description="Animal ID")
    note: str = Field(..., description="Message to the owner (1-500 characters)")


class AdoptionDecisionRequest(BaseModel):
    """Approve or reject a request"""
    status: str = Field(..., description="APPROVED or REJECTED")


class AdoptionNoteUpdate(BaseModel):
    """Replace the note of a pending request"""
    note: str = Field(..., description="New note (1-500 characters)")


class AdoptionRequestInfo(BaseModel):
    """Adoption request read model"""
    request_id: int = Field(..., description="Request ID")
    animal_id: int = Field(..., description="Animal ID")
    animal_name: Optional[str] = Field(None, description="Animal name")
    animal_owner_id: Optional[int] = Field(None, description="Owner of the animal")
    requester_id: int = Field(..., description="Requester ID")
    requester_name: Optional[str] = Field(None, description="Requester full name")
    note: str = Field(..., description="Note")
    status: RequestStatus = Field(..., description="PENDING, APPROVED or REJECTED")
    created_at: Optional[datetime] = Field(None, description="Creation time")
    decision_at: Optional[datetime] = Field(None, description="Decision time, null while pending")


class AdoptionRequestResponse(BaseModel):
    success: bool = Field(True)
    status: int = Field(200)
    adoption_request: AdoptionRequestInfo
    timeStamp: str
    path: str


class AdoptionDecisionResponse(BaseModel):
    success: bool = Field(True)
    status: int = Field(200)
    adoption_request: AdoptionRequestInfo
    rejected_count: int = Field(0, description="Other pending requests rejected by this approval")
    animal_adopted: bool = Field(..., description="Adoption flag of the animal after the decision")
    timeStamp: str
    path: str


class AdoptionRequestListResponse(BaseModel):
    success: bool = Field(True)
    status: int = Field(200)
    requests: List[AdoptionRequestInfo] = Field(default_factory=list)
    total_count: int = Field(0)
    timeStamp: str
    path: str


class AdoptionRequestCountResponse(BaseModel):
    success: bool = Field(True)
    status: int = Field(200)
    animal_id: int
    request_status: RequestStatus
    count: int
    timeStamp: str
    path: str
