# === mockapi/schemas/endpoint.py ===
from enum import Enum
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


def _upper_method(value):
    if isinstance(value, str):
        return value.upper()
    return value


def _check_path(value: Optional[str]) -> Optional[str]:
    if value is not None and not value.startswith("/"):
        raise ValueError("path must start with /")
    return value


class EndpointCreate(BaseModel):
    method: HttpMethod
    path: str = Field(min_length=1)
    response_body: Optional[str] = None
    status_code: int = Field(default=200, ge=100, le=599)
    requires_key: bool = False

    @field_validator("method", mode="before")
    @classmethod
    def normalize_method(cls, value):
        return _upper_method(value)

    @field_validator("path")
    @classmethod
    def validate_path(cls, value):
        return _check_path(value)


class EndpointUpdate(BaseModel):
    method: Optional[HttpMethod] = None
    path: Optional[str] = Field(default=None, min_length=1)
    response_body: Optional[str] = None
    status_code: Optional[int] = Field(default=None, ge=100, le=599)
    requires_key: Optional[bool] = None

    @field_validator("method", mode="before")
    @classmethod
    def normalize_method(cls, value):
        return _upper_method(value)

    @field_validator("path")
    @classmethod
    def validate_path(cls, value):
        return _check_path(value)


class EndpointResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    project_id: str
    method: str
    path: str
    response_body: Optional[str]
    status_code: int
    requires_key: bool
    created_at: Optional[datetime] = None


class EndpointEnvelope(BaseModel):
    endpoint: EndpointResponse


class EndpointListResponse(BaseModel):
    endpoints: List[EndpointResponse]
