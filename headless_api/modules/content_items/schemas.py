from pydantic import BaseModel
from typing import Any, Dict
from datetime import datetime


class ContentItemCreate(BaseModel):
    data: Dict[str, Any] = {}


class ContentItemUpdate(BaseModel):
    data: Dict[str, Any]


class ContentItemResponse(BaseModel):
    id: str
    content_type_id: int
    data: Dict[str, Any]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
