"""
Activity log API router.

Farmers append, list and delete their own logs; administrators may
delete any log.
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from carbon_ledger.core.dependencies import CurrentUser, get_current_user, get_db_session
from carbon_ledger.database.repositories import ActivityLogRepository
from carbon_ledger.pydantic_models.activity_log import (
    ActivityLogCreate,
    ActivityLogListResponse,
    ActivityLogPydModel,
    DeleteResponse,
)

router = APIRouter(
    prefix="/api/logs",
    tags=["Activity Logs"],
)

logger = logging.getLogger(__name__)


@router.get("", response_model=ActivityLogListResponse)
async def list_activity_logs(
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """List the caller's activity logs."""
    repo = ActivityLogRepository(session)
    logs = await repo.list_by_owner(user.id)
    return ActivityLogListResponse(
        logs=[ActivityLogPydModel.model_validate(log) for log in logs]
    )


@router.post("", response_model=ActivityLogPydModel, status_code=status.HTTP_201_CREATED)
async def add_activity_log(
    log: ActivityLogCreate,
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """
    Append an activity log for the caller.

    Example:
        ```
        POST /api/logs
        {"type": "tree_planting", "date": "2024-01-10", "quantity": 5, "unit": "trees"}
        ```
    """
    repo = ActivityLogRepository(session)
    created = await repo.create(owner_id=user.id, **log.model_dump())
    await session.commit()

    logger.info(f"Added {created.type} log {created.id} for {user.id}")
    return created


@router.delete("/{log_id}", response_model=DeleteResponse)
async def delete_activity_log(
    log_id: UUID,
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Delete an activity log owned by the caller (any log for admins)."""
    repo = ActivityLogRepository(session)
    if user.is_admin:
        deleted = await repo.delete(log_id)
    else:
        deleted = await repo.delete_owned(log_id, user.id)

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Activity log {log_id} not found",
        )

    await session.commit()
    logger.info(f"Deleted log {log_id} (requested by {user.id})")
    return DeleteResponse()
