from typing import Any, Protocol

from container_api.domain.container import ContainerSpec


class DockerRuntime(Protocol):
    # -------------------------------
    # Containers
    # -------------------------------
    async def list_containers(self) -> list[dict[str, Any]]:
        """Raw container summaries (running and stopped), engine order."""
        ...

    async def create(self, spec: ContainerSpec) -> str:
        """Create a container from a spec. Returns the engine-assigned id."""
        ...

    async def start(self, container_id: str) -> None:
        """Start a created container."""
        ...

    async def inspect(self, container_id: str) -> dict[str, Any]:
        """Full inspect document of a container."""
        ...

    async def update_resources(
        self,
        container_id: str,
        *,
        memory: int,
        memory_swap: int,
        nano_cpus: int,
    ) -> None:
        """Apply new memory / CPU limits to an existing container."""
        ...

    async def stop(self, container_id: str) -> None:
        """Stop a container with the engine's default grace period."""
        ...

    async def close(self) -> None:
        """Release the engine connection."""
        ...
