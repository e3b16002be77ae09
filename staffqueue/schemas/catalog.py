from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from staffqueue.schemas.entities import Service, ServiceDuration


class ServiceCreateRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    owner_id: Optional[str] = None
    name: str = Field(..., min_length=1)
    duration: ServiceDuration
    required_staff_type: str = Field(..., min_length=1)


class ServiceUpdateRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    owner_id: Optional[str] = None
    service_id: str
    name: Optional[str] = Field(None, min_length=1)
    duration: Optional[ServiceDuration] = None
    required_staff_type: Optional[str] = Field(None, min_length=1)


class ServiceDeleteRequest(BaseModel):
    owner_id: Optional[str] = None
    service_id: str


class ServiceListRequest(BaseModel):
    owner_id: Optional[str] = None


class ServiceListResponse(BaseModel):
    total: int
    items: List[Service]
