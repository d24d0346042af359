"""System information endpoints."""

from __future__ import annotations

import platform
from importlib.metadata import PackageNotFoundError, version

from fastapi import APIRouter

from writeflow.backend.models.api import SystemInfo

router = APIRouter(prefix="/system", tags=["system"])


def _package_version() -> str:
    try:
        return version("writeflow-studio")
    except PackageNotFoundError:
        return "0.0.0"


@router.get("/info", response_model=SystemInfo)
async def get_system_info() -> SystemInfo:
    return SystemInfo(
        platform=platform.system().lower(),
        arch=platform.machine(),
        version=_package_version(),
    )
