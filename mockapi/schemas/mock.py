# mockapi/schemas/mock.py
from dataclasses import dataclass
from typing import Optional

from mockapi.schemas.endpoint import HttpMethod


@dataclass(frozen=True)
class MockRequest:
    """What the dispatcher needs to know about an inbound mock call."""

    project_id: str
    method: HttpMethod
    path: str
    presented_key: Optional[str] = None


@dataclass(frozen=True)
class RenderedResponse:
    body: bytes
    content_type: str
    status_code: int
