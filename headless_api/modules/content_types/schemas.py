from pydantic import BaseModel, Field as PydanticField
from typing import Optional, List
from datetime import datetime
from headless_api.modules.content_types.field_types import FieldType


class ContentTypeCreate(BaseModel):
    name: str = PydanticField(..., min_length=1)


class FieldCreate(BaseModel):
    display_id: str = PydanticField(..., min_length=1)
    field_type: FieldType
    required: bool = False


class FieldResponse(BaseModel):
    id: int
    content_type_id: int
    display_id: str
    field_type: str
    required: bool

    class Config:
        from_attributes = True


class ContentTypeResponse(BaseModel):
    id: int
    name: str
    service_id: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ContentTypeWithFieldsResponse(ContentTypeResponse):
    fields: List[FieldResponse]
