from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel


class SkinOut(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None
    is_system: bool
    css_variables: Optional[Dict[str, Any]] = None
    layout_config: Optional[Dict[str, Any]] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class SkinRef(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    css_variables: Optional[Dict[str, Any]] = None
    layout_config: Optional[Dict[str, Any]] = None

    model_config = {"from_attributes": True}


class SkinApplicationOut(BaseModel):
    id: str
    blog_id: str
    skin_id: Optional[str] = None
    custom_css_variables: Optional[Dict[str, Any]] = None
    custom_layout_config: Optional[Dict[str, Any]] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class BlogSkinOut(SkinApplicationOut):
    skin: Optional[SkinRef] = None


class SkinApply(BaseModel):
    blog_id: str
    skin_id: str


class SkinCustomize(BaseModel):
    custom_css_variables: Optional[Dict[str, Any]] = None
    custom_layout_config: Optional[Dict[str, Any]] = None
