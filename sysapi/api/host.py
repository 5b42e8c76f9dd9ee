from fastapi import APIRouter, HTTPException, Request

from sysapi.errors import MetricReadError
from sysapi.models.host import DiskUsage, UptimeStatus
from sysapi.services import host_monitor

router = APIRouter()


@router.get("/uptime", response_model=UptimeStatus, summary="Host uptime")
def uptime() -> UptimeStatus:
    """Return the number of seconds since the host was booted."""
    try:
        return host_monitor.get_uptime()
    except MetricReadError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@router.get("/diskusage", response_model=DiskUsage, summary="Root filesystem usage")
def disk_usage(request: Request) -> DiskUsage:
    """
    Return capacity, free and used space of the configured filesystem
    (Settings.disk_path, "/" by default).

    If the filesystem statistics cannot be read, a HTTP 500 with a plain-text
    message is returned.
    """
    settings = request.app.state.settings
    try:
        return host_monitor.get_disk_usage(settings.disk_path)
    except MetricReadError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
