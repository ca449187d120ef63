# === mockapi/api/mock.py ===
from fastapi import APIRouter, Request
from fastapi.responses import Response
from typing import Optional
from mockapi.schemas.endpoint import HttpMethod
from mockapi.schemas.mock import MockRequest, RenderedResponse
from mockapi.services.dispatcher import MockDispatcher

router = APIRouter()

MOCK_METHODS = [m.value for m in HttpMethod]

# statuses that must not carry a body on the wire
BODYLESS_STATUSES = {204, 304}


def extract_presented_key(request: Request) -> Optional[str]:
    """Dedicated key header first, then the Authorization header.

    The first "Bearer " in the Authorization value is dropped; whatever
    remains is the key.
    """
    api_key = request.headers.get(request.app.state.settings.API_KEY_HEADER)
    if api_key:
        return api_key

    authorization = request.headers.get("Authorization")
    if authorization:
        return authorization.replace("Bearer ", "", 1)
    return None


def build_mock_request(request: Request, project_id: str, path: str) -> MockRequest:
    return MockRequest(
        project_id=project_id,
        method=HttpMethod(request.method.upper()),
        path="/" + path,
        presented_key=extract_presented_key(request),
    )


def to_response(rendered: RenderedResponse) -> Response:
    body = rendered.body
    if rendered.status_code in BODYLESS_STATUSES:
        body = b""
    return Response(
        content=body,
        status_code=rendered.status_code,
        headers={"Content-Type": rendered.content_type},
    )


def get_dispatcher(request: Request) -> MockDispatcher:
    return request.app.state.dispatcher


@router.api_route("/{project_id}", methods=MOCK_METHODS, include_in_schema=False)
async def serve_mock_root(project_id: str, request: Request):
    rendered = await get_dispatcher(request).serve(build_mock_request(request, project_id, ""))
    return to_response(rendered)


@router.api_route("/{project_id}/{path:path}", methods=MOCK_METHODS, include_in_schema=False)
async def serve_mock(project_id: str, path: str, request: Request):
    rendered = await get_dispatcher(request).serve(build_mock_request(request, project_id, path))
    return to_response(rendered)
