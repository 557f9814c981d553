from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CompanyCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    # Limits mirror the companies table columns
    name: str = Field(min_length=1, max_length=255)
    address: Optional[str] = Field(default=None, max_length=512)
    phone: Optional[str] = Field(default=None, max_length=64)


class CompanyOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    name: str
    address: Optional[str] = None
    phone: Optional[str] = None
    created_at: datetime
    updated_at: datetime
