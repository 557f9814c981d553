from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator
from pydantic.alias_generators import to_camel

from dashboard.models.profile import UserRole

_camel = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProfileCreate(BaseModel):
    model_config = _camel

    user_id: str = Field(min_length=1, max_length=255)
    first_name: Optional[str] = Field(default=None, max_length=255)
    last_name: Optional[str] = Field(default=None, max_length=255)
    avatar_url: Optional[str] = Field(default=None, max_length=1024)


class ProfileUpdate(BaseModel):
    """Partial update: only keys present in the request body are written."""

    model_config = _camel

    first_name: Optional[str] = Field(default=None, max_length=255)
    last_name: Optional[str] = Field(default=None, max_length=255)
    avatar_url: Optional[str] = Field(default=None, max_length=1024)
    active: Optional[StrictBool] = None

    @field_validator("active")
    @classmethod
    def active_not_null(cls, v):
        if v is None:
            raise ValueError("active must be true or false")
        return v


class ProfileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    user_id: str
    role: UserRole
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    avatar_url: Optional[str] = None
    active: bool
    created_at: datetime
    updated_at: datetime


class ProfileList(BaseModel):
    profiles: List[ProfileOut]
