"""Pydantic schemas for users.

Learn: UserRead is the only outward shape of a User. It has no
password_hash field, so the hash can't leak through any response.
UserUpdate lists the editable profile fields; unknown keys (including
any attempt to send a password) are ignored.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class UserRead(BaseModel):
    id: int
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class UserUpdate(BaseModel):
    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
