# === mockapi/api/deps.py ===
from fastapi import Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from mockapi.core.security import get_current_user_id
from mockapi.db.database import get_db
from mockapi.models.project import Project
from mockapi.models.endpoint import Endpoint


async def get_owned_project(
    project_id: str,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> Project:
    result = await db.execute(
        select(Project).where(Project.id == project_id, Project.user_id == user_id)
    )
    project = result.scalar_one_or_none()
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


async def get_project_endpoint(
    endpoint_id: str,
    project: Project = Depends(get_owned_project),
    db: AsyncSession = Depends(get_db),
) -> Endpoint:
    result = await db.execute(
        select(Endpoint).where(Endpoint.id == endpoint_id, Endpoint.project_id == project.id)
    )
    endpoint = result.scalar_one_or_none()
    if not endpoint:
        raise HTTPException(status_code=404, detail="Endpoint not found")
    return endpoint
