"""
Pydantic schemas for companies.

JSON uses camelCase (numEmployees, logoUrl); the Python attributes are
snake_case and either spelling is accepted on input.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional


class CompanyCreateRequest(BaseModel):
    """Schema for creating a new company"""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    handle: str = Field(..., min_length=1, max_length=25, pattern=r"^[a-z0-9-]+$")
    name: str = Field(..., min_length=1)
    description: str
    num_employees: Optional[int] = Field(None, ge=0, alias="numEmployees")
    logo_url: Optional[str] = Field(None, alias="logoUrl")


class CompanyUpdateRequest(BaseModel):
    """Partial update; only the fields sent are changed. The handle is immutable."""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, ge=0, alias="numEmployees")
    logo_url: Optional[str] = Field(None, alias="logoUrl")

    @field_validator("name", "description")
    @classmethod
    def reject_null(cls, v: Optional[str]) -> str:
        """name and description may be changed but never cleared"""
        if v is None:
            raise ValueError("cannot be null")
        return v


class CompanyResponse(BaseModel):
    """Schema for company response"""
    model_config = ConfigDict(populate_by_name=True)

    handle: str
    name: str
    description: str
    num_employees: Optional[int] = Field(None, alias="numEmployees")
    logo_url: Optional[str] = Field(None, alias="logoUrl")
