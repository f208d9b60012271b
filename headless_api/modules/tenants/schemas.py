from pydantic import BaseModel, Field


class ServiceCreate(BaseModel):
    name: str = Field(..., min_length=1)


class ServiceCreatedResponse(BaseModel):
    service_id: str
    name: str
    api_key: str


class ServiceResponse(BaseModel):
    service_id: str
    name: str
