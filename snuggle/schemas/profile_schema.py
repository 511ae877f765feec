from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class ProfileSummary(BaseModel):
    id: str
    nickname: Optional[str] = None
    profile_image_url: Optional[str] = None

    model_config = {"from_attributes": True}


class ProfileOut(ProfileSummary):
    deleted_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class AccountStatusOut(BaseModel):
    isDeleted: bool
    deletedAt: Optional[datetime] = None
