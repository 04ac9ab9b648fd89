"""
Category Pydantic Schemas
"""

from pydantic import Field, field_validator

from videoshare.models.category import ALL_CATEGORIES
from videoshare.schemas.base import CamelModel


class CategoryCreate(CamelModel):
    name: str = Field(..., max_length=50, description="Category name")

    @field_validator("name")
    @classmethod
    def name_is_real_category(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Category name is required")
        if value == ALL_CATEGORIES:
            raise ValueError(f"'{ALL_CATEGORIES}' is reserved")
        return value


class CategoryResponse(CamelModel):
    id: int
    name: str
