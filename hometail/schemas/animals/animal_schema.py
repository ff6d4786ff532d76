from datetime import date
from pydantic import BaseModel, Field
from typing import List, Optional

from hometail.models.animal import AgeGroup, Gender, Size


class AnimalCreateRequest(BaseModel):
    """Create an animal listing"""
    name: str = Field(..., min_length=1, max_length=255, description="Animal name")
    category_id: int = Field(..., description="Category ID")
    breed_id: Optional[int] = Field(None, description="Breed ID (must belong to the category)")
    gender: Gender = Field(Gender.UNKNOWN, description="MALE, FEMALE or UNKNOWN")
    size: Optional[Size] = Field(None, description="SMALL, MEDIUM, LARGE or EXTRA_LARGE")
    birthday: Optional[date] = Field(None, description="Birth date")
    short_description: Optional[str] = Field(None, max_length=255, description="Short description")
    long_description: Optional[str] = Field(None, description="Long description")
    image: Optional[str] = Field(None, max_length=255, description="Image path or URL")


class AnimalUpdateRequest(BaseModel):
    """Partial update; omitted fields are left unchanged, null clears an optional field"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    category_id: Optional[int] = None
    breed_id: Optional[int] = None
    gender: Optional[Gender] = None
    size: Optional[Size] = None
    birthday: Optional[date] = None
    short_description: Optional[str] = Field(None, max_length=255)
    long_description: Optional[str] = None
    image: Optional[str] = Field(None, max_length=255)


class OwnerContact(BaseModel):
    """Owner contact, only shown to signed-in users"""
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class AnimalItem(BaseModel):
    """Animal read model"""
    animal_id: int = Field(..., description="Animal ID")
    name: str = Field(..., description="Name")
    category_id: int = Field(..., description="Category ID")
    category_name: Optional[str] = Field(None, description="Category name")
    breed_id: Optional[int] = Field(None, description="Breed ID")
    breed_name: Optional[str] = Field(None, description="Breed name")
    gender: Gender = Field(..., description="Gender")
    size: Optional[Size] = Field(None, description="Size")
    birthday: Optional[date] = Field(None, description="Birth date")
    age: Optional[int] = Field(None, description="Age in whole years")
    age_group: Optional[AgeGroup] = Field(None, description="Derived age group")
    age_description: str = Field("Unknown", description="Human readable age, e.g. '3 years'")
    short_description: Optional[str] = None
    long_description: Optional[str] = None
    image: Optional[str] = None
    adopted: bool = Field(..., description="Adoption flag")
    owner_id: int = Field(..., description="Owner user ID")
    owner: Optional[OwnerContact] = Field(None, description="Owner contact")


class AnimalResponse(BaseModel):
    success: bool = Field(True)
    status: int = Field(200)
    animal: AnimalItem
    timeStamp: str
    path: str


class AnimalListResponse(BaseModel):
    success: bool = Field(True)
    status: int = Field(200)
    animals: List[AnimalItem] = Field(default_factory=list)
    timeStamp: str
    path: str


class AnimalPageResponse(BaseModel):
    """Search result page"""
    success: bool = Field(True)
    status: int = Field(200)
    animals: List[AnimalItem] = Field(default_factory=list)
    page: int = Field(..., description="Zero-based page index")
    size: int = Field(..., description="Page size")
    total_count: int = Field(..., description="Total matching animals")
    total_pages: int = Field(..., description="Number of pages")
    timeStamp: str
    path: str
