from fastapi import APIRouter

from sysapi.models.host import VersionInfo
from sysapi.version import __version__

router = APIRouter()


@router.get("/version", response_model=VersionInfo, summary="Service version")
async def version() -> VersionInfo:
    """Return the version of the running service. Touches no host resources."""
    return VersionInfo(version=__version__)
