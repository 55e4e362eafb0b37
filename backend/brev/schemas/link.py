from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class LinkCreate(BaseModel):
    """Schema for creating a new short link"""
    url: str = Field(..., description="Original URL to shorten")
    code: Optional[str] = Field(None, description="Custom short code, generated when omitted")


class LinkResponse(BaseModel):
    """Schema for link response"""
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: int
    code: str
    original_url: str
    clicks: int = 0
    created_at: Optional[datetime] = None


class ExportResponse(BaseModel):
    """Temporary download location of a metrics report"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    file_url: str


class HealthResponse(BaseModel):
    status: str
    database: str
