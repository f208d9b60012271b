from pydantic import BaseModel, Field
from typing import Optional, List
from headless_api.config.permissions_config import Permission


class RoleCreate(BaseModel):
    name: str = Field(..., min_length=1)
    permissions: List[Permission] = []


class RoleResponse(BaseModel):
    id: int
    name: str
    service_id: str
    permissions: List[Permission]


class RoleCreatedResponse(RoleResponse):
    api_key: Optional[str] = None
