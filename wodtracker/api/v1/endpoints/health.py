"""Liveness and readiness probes."""

import logging
import os

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wodtracker.db.session import get_db

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("")
async def health():
    """Liveness. Includes built_at when BACKEND_BUILT_AT is set."""
    payload: dict = {"status": "ok"}
    built_at = os.environ.get("BACKEND_BUILT_AT")
    if built_at:
        payload["built_at"] = built_at
    return payload


@router.get("/ready")
async def readiness(db: AsyncSession = Depends(get_db)):
    """Readiness: the database answers SELECT 1."""
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning("readiness check failed: %s", e)
        return JSONResponse(status_code=503, content={"status": "error", "error": str(e)})
    return {"status": "ok", "database": "connected"}
