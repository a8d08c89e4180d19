from fastapi import Request

from container_api.services.container_service import ContainerService


def get_container_service(request: Request) -> ContainerService:
    """FastAPI dependency: the process-wide service stored on ``app.state``."""
    return request.app.state.container_service
