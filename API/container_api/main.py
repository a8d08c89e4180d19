import logging

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from container_api.api import containers
from container_api.core.config import get_settings
from container_api.core.errors import (
    ContainerAPIError,
    container_api_error_handler,
    http_error_handler,
    unhandled_error_handler,
    validation_error_handler,
)
from container_api.core.logging_setup import setup_logging
from container_api.services.container_service import ContainerService
from container_api.services.docker_runtime import DockerSDKRuntime

settings = get_settings()
setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

docker_runtime = DockerSDKRuntime()
container_service = ContainerService(docker_runtime, settings)


app = FastAPI(title="Container Resource API")
app.state.container_service = container_service

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(ContainerAPIError, container_api_error_handler)
app.add_exception_handler(RequestValidationError, validation_error_handler)
app.add_exception_handler(StarletteHTTPException, http_error_handler)
app.add_exception_handler(Exception, unhandled_error_handler)

app.include_router(containers.router)

# ---------- Static page ----------

app.mount("/static", StaticFiles(directory=settings.STATIC_DIR, check_dir=False), name="static")


@app.get("/", include_in_schema=False)
async def index():
    if not settings.INDEX_FILE.is_file():
        raise HTTPException(status_code=404, detail="Not Found")
    return FileResponse(settings.INDEX_FILE)


# ---------- Startup / Shutdown ----------

@app.on_event("startup")
async def startup_event():
    logger.info("[STARTUP] Serving containers from image %s", settings.CONTAINER_IMAGE)


@app.on_event("shutdown")
async def shutdown_event():
    await docker_runtime.close()
    logger.info("[SHUTDOWN] Docker client released")
