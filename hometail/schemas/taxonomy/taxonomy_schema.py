from pydantic import BaseModel, Field
from typing import List


class CategoryItem(BaseModel):
    category_id: int = Field(..., description="Category ID")
    name: str = Field(..., description="Category name")


class BreedItem(BaseModel):
    breed_id: int = Field(..., description="Breed ID")
    category_id: int = Field(..., description="Category ID")
    name: str = Field(..., description="Breed name")


class CategoryListResponse(BaseModel):
    success: bool = Field(True)
    status: int = Field(200)
    categories: List[CategoryItem] = Field(default_factory=list)
    timeStamp: str
    path: str


class BreedListResponse(BaseModel):
    success: bool = Field(True)
    status: int = Field(200)
    breeds: List[BreedItem] = Field(default_factory=list)
    timeStamp: str
    path: str
