from pydantic import BaseModel, Field

from container_api.domain.container import NANO_CPUS_PER_CORE

# engine fields are int64
MAX_INT64 = 2**63 - 1
MAX_CPU_CORES = MAX_INT64 // NANO_CPUS_PER_CORE


class ContainerCreateRequest(BaseModel):
    ram: int = Field(..., gt=0, le=MAX_INT64, description="Memory limit in bytes (swap is set to the same value)")
    cpu: int = Field(..., gt=0, le=MAX_CPU_CORES, description="CPU limit in whole cores")
    host_port: int = Field(..., ge=1, le=65535, description="Host port bound to the container's port 80/tcp")


class ResourceUpdateRequest(BaseModel):
    ram: int = Field(..., gt=0, le=MAX_INT64)
    cpu: int = Field(..., gt=0, le=MAX_CPU_CORES)


class ContainerCreateResponse(BaseModel):
    container_id: str
    ip_address: str


class ContainerResourcesResponse(BaseModel):
    cpu: int
    ram: int


class ContainerSummaryResponse(BaseModel):
    ID: str
    Names: list[str]


class MessageResponse(BaseModel):
    message: str
