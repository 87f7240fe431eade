"""
mc_orchestrator.api.routers.health

Liveness endpoint (`/healthz`).
"""

from __future__ import annotations

from fastapi import APIRouter

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    # Liveness: process is up and serving HTTP. The flow has no other local dependency.
    return {"status": "ok"}
