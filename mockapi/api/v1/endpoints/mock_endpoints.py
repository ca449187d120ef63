# === mockapi/api/v1/endpoints/mock_endpoints.py ===
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy.future import select
from mockapi.api.deps import get_owned_project, get_project_endpoint
from mockapi.db.database import get_db
from mockapi.models.endpoint import Endpoint
from mockapi.models.project import Project
from mockapi.schemas.endpoint import (
    EndpointCreate,
    EndpointUpdate,
    EndpointResponse,
    EndpointEnvelope,
    EndpointListResponse,
)
import logging

logger = logging.getLogger(__name__)

router = APIRouter()

CONFLICT_DETAIL = "An endpoint with this method and path already exists"


async def _commit_or_conflict(db: AsyncSession):
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.info(f"Endpoint uniqueness violated: {e.orig}")
        raise HTTPException(status_code=409, detail=CONFLICT_DETAIL)


@router.get("/projects/{project_id}/endpoints", response_model=EndpointListResponse)
async def list_endpoints(project: Project = Depends(get_owned_project), db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(Endpoint)
        .where(Endpoint.project_id == project.id)
        .order_by(Endpoint.created_at.desc())
    )
    return EndpointListResponse(
        endpoints=[EndpointResponse.model_validate(ep) for ep in result.scalars().all()]
    )


@router.post("/projects/{project_id}/endpoints", response_model=EndpointEnvelope, status_code=201)
async def create_endpoint(
    payload: EndpointCreate,
    project: Project = Depends(get_owned_project),
    db: AsyncSession = Depends(get_db),
):
    endpoint = Endpoint(
        project_id=project.id,
        method=payload.method.value,
        path=payload.path,
        response_body=payload.response_body or None,
        status_code=payload.status_code,
        requires_key=payload.requires_key,
    )
    db.add(endpoint)
    await _commit_or_conflict(db)
    await db.refresh(endpoint)

    logger.info(f"Created endpoint {endpoint.method} {endpoint.path} in project {project.id}")
    return EndpointEnvelope(endpoint=EndpointResponse.model_validate(endpoint))


@router.get("/projects/{project_id}/endpoints/{endpoint_id}", response_model=EndpointEnvelope)
async def get_endpoint(endpoint: Endpoint = Depends(get_project_endpoint)):
    return EndpointEnvelope(endpoint=EndpointResponse.model_validate(endpoint))


@router.put("/projects/{project_id}/endpoints/{endpoint_id}", response_model=EndpointEnvelope)
async def update_endpoint(
    payload: EndpointUpdate,
    endpoint: Endpoint = Depends(get_project_endpoint),
    db: AsyncSession = Depends(get_db),
):
    updates = payload.model_dump(exclude_unset=True)

    if updates.get("method") is not None:
        endpoint.method = updates["method"].value
    if updates.get("path") is not None:
        endpoint.path = updates["path"]
    if "response_body" in updates:
        endpoint.response_body = updates["response_body"] or None
    if updates.get("status_code") is not None:
        endpoint.status_code = updates["status_code"]
    if updates.get("requires_key") is not None:
        endpoint.requires_key = updates["requires_key"]

    await _commit_or_conflict(db)
    await db.refresh(endpoint)
    return EndpointEnvelope(endpoint=EndpointResponse.model_validate(endpoint))


@router.delete("/projects/{project_id}/endpoints/{endpoint_id}")
async def delete_endpoint(endpoint: Endpoint = Depends(get_project_endpoint), db: AsyncSession = Depends(get_db)):
    await db.delete(endpoint)
    await db.commit()
    return {"success": True}
