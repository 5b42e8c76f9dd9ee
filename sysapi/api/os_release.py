from typing import Dict

from fastapi import APIRouter, HTTPException, Request

from sysapi.errors import MetricReadError
from sysapi.services import os_release as os_release_service

router = APIRouter()


@router.get("/os-release", response_model=Dict[str, str], summary="OS identification")
def os_release(request: Request) -> Dict[str, str]:
    """Return the raw key/value pairs of the host's os-release file."""
    settings = request.app.state.settings
    try:
        return os_release_service.get_os_release(settings.os_release_path)
    except MetricReadError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
