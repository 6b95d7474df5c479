"""Pydantic schemas for owned resources.

Learn: Separate "Create"/"Update" schemas (input) from "Read" (output).
owner_id appears only on the read side: it always comes from the
authenticated identity, never from the request body.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ResourceCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    link: str = Field(..., min_length=1)
    description: Optional[str] = None


class ResourceUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    link: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None


class ResourceRead(BaseModel):
    id: int
    owner_id: int
    title: str
    link: str
    description: Optional[str]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
