# === mockapi/api/v1/endpoints/access_keys.py ===
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from mockapi.api.deps import get_project_endpoint
from mockapi.db.database import get_db
from mockapi.models.api_key import AccessKey
from mockapi.models.endpoint import Endpoint
from mockapi.schemas.api_key import AccessKeyCreate, AccessKeyResponse, AccessKeyListResponse
import secrets

router = APIRouter()

KEY_PREFIX = "mk_"


def generate_key_value() -> str:
    return KEY_PREFIX + secrets.token_urlsafe(24)


@router.get("/projects/{project_id}/endpoints/{endpoint_id}/keys", response_model=AccessKeyListResponse)
async def list_keys(endpoint: Endpoint = Depends(get_project_endpoint), db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(AccessKey).where(AccessKey.endpoint_id == endpoint.id).order_by(AccessKey.created_at)
    )
    return AccessKeyListResponse(keys=[AccessKeyResponse.model_validate(k) for k in result.scalars().all()])


@router.post(
    "/projects/{project_id}/endpoints/{endpoint_id}/keys",
    response_model=AccessKeyResponse,
    status_code=201,
)
async def create_key(
    payload: AccessKeyCreate = AccessKeyCreate(),
    endpoint: Endpoint = Depends(get_project_endpoint),
    db: AsyncSession = Depends(get_db),
):
    key = AccessKey(endpoint_id=endpoint.id, key_value=payload.key_value or generate_key_value())
    db.add(key)
    await db.commit()
    await db.refresh(key)
    return AccessKeyResponse.model_validate(key)


@router.delete("/projects/{project_id}/endpoints/{endpoint_id}/keys/{key_id}")
async def delete_key(
    key_id: str,
    endpoint: Endpoint = Depends(get_project_endpoint),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(
        select(AccessKey).where(AccessKey.id == key_id, AccessKey.endpoint_id == endpoint.id)
    )
    key = result.scalar_one_or_none()
    if not key:
        raise HTTPException(status_code=404, detail="Key not found")

    await db.delete(key)
    await db.commit()
    return {"success": True}
