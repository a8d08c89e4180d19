from fastapi import APIRouter, Depends

from container_api.api.dependencies import get_container_service
from container_api.api.forms import container_id_form, create_container_form, resource_update_form
from container_api.schemas.container import (
    ContainerCreateRequest,
    ContainerCreateResponse,
    ContainerResourcesResponse,
    ContainerSummaryResponse,
    MessageResponse,
    ResourceUpdateRequest,
)
from container_api.services.container_service import ContainerService


router = APIRouter(prefix="/containers", tags=["containers"])


@router.post(
    "",
    response_model=ContainerCreateResponse,
    summary="Create and start a container",
    description="Rejects the request with 400 if any existing container already publishes the host port.",
)
async def create_container(
    payload: ContainerCreateRequest = Depends(create_container_form),
    container_service: ContainerService = Depends(get_container_service),
):
    created = await container_service.create_container(
        ram=payload.ram,
        cpu=payload.cpu,
        host_port=payload.host_port,
    )
    return ContainerCreateResponse(
        container_id=created.container_id,
        ip_address=created.ip_address,
    )


@router.get("", response_model=list[ContainerSummaryResponse])
async def list_containers(
    container_service: ContainerService = Depends(get_container_service),
):
    containers = await container_service.list_containers()
    return [
        ContainerSummaryResponse(ID=c.id, Names=c.names)
        for c in containers
    ]


@router.post("/stop", response_model=MessageResponse)
async def stop_container(
    container_id: str = Depends(container_id_form),
    container_service: ContainerService = Depends(get_container_service),
):
    await container_service.stop_container(container_id)
    return MessageResponse(message="Container stopped successfully")


@router.get("/{container_id}/resources", response_model=ContainerResourcesResponse)
async def get_container_resources(
    container_id: str,
    container_service: ContainerService = Depends(get_container_service),
):
    resources = await container_service.get_resources(container_id)
    return ContainerResourcesResponse(cpu=resources.cpu, ram=resources.ram)


@router.put(
    "/{container_id}/resources",
    response_model=ContainerResourcesResponse,
    summary="Update CPU / memory limits",
    description="Returns the limits reported by the engine after the update.",
)
async def update_container_resources(
    container_id: str,
    payload: ResourceUpdateRequest = Depends(resource_update_form),
    container_service: ContainerService = Depends(get_container_service),
):
    resources = await container_service.update_resources(
        container_id,
        ram=payload.ram,
        cpu=payload.cpu,
    )
    return ContainerResourcesResponse(cpu=resources.cpu, ram=resources.ram)
