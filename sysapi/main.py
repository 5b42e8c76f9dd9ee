import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from sysapi.api import host, os_release, version, vms
from sysapi.config import Settings, get_settings
from sysapi.logging_config import LOGGER_NAME
from sysapi.version import __version__

API_PREFIX = "/api/v1"

# (router, tags) pairs served under API_PREFIX and, for compatibility with
# older clients, without a prefix
ROUTES = (
    (version.router, ["meta"]),
    (host.router, ["host"]),
    (os_release.router, ["host"]),
    (vms.router, ["vms"]),
)


def create_app(
    settings: Optional[Settings] = None,
    logger: Optional[logging.Logger] = None,
) -> FastAPI:
    app = FastAPI(title="Host Telemetry API", version=__version__)
    app.state.settings = settings or get_settings()
    app.state.logger = logger or logging.getLogger(LOGGER_NAME)

    for router, tags in ROUTES:
        app.include_router(router, prefix=API_PREFIX, tags=tags)
        app.include_router(router, include_in_schema=False)

    @app.exception_handler(StarletteHTTPException)
    async def plain_text_error(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
        if exc.status_code >= 500:
            app.state.logger.error(
                "%s %s failed: %s", request.method, request.url.path, exc.detail
            )
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code)

    return app


# built from defaults so importing this module never reads a config file
app = create_app(Settings())
