import asyncio
import logging
from typing import List, Optional

from container_api.core.config import Settings, get_settings
from container_api.core.errors import ContainerAPIError, PortConflictError
from container_api.domain.container import (
    ContainerCreation,
    ContainerResources,
    ContainerSpec,
    ContainerSummary,
    cores_to_nano_cpus,
    pick_ip_address,
    published_host_ports,
)
from container_api.domain.ports import DockerRuntime

logger = logging.getLogger(__name__)


class ContainerService:
    def __init__(self, docker_runtime: DockerRuntime, settings: Optional[Settings] = None):
        self.docker_runtime = docker_runtime
        self.settings = settings or get_settings()
        # host ports of create requests still in flight in this process
        self._reserved_ports: set[int] = set()
        self._lock = asyncio.Lock()

    # -------------------------------
    # Port checks
    # -------------------------------
    async def is_port_allocated(self, host_port: int) -> bool:
        """True if any container, running or stopped, publishes ``host_port``."""
        containers = await self.docker_runtime.list_containers()
        return any(host_port in published_host_ports(c) for c in containers)

    async def _reserve_port(self, host_port: int) -> None:
        async with self._lock:
            if host_port in self._reserved_ports or await self.is_port_allocated(host_port):
                logger.info("Host port %s is already allocated", host_port)
                raise PortConflictError()
            self._reserved_ports.add(host_port)

    async def _release_port(self, host_port: int) -> None:
        async with self._lock:
            self._reserved_ports.discard(host_port)

    # -------------------------------
    # Provisioning
    # -------------------------------
    async def create_container(
        self,
        *,
        ram: int,
        cpu: int,
        host_port: int,
    ) -> ContainerCreation:
        """
        Check the host port, then create, start and inspect a container.
        Nothing is rolled back: a container that fails to start stays created.
        """
        await self._reserve_port(host_port)
        try:
            spec = ContainerSpec(
                image=self.settings.CONTAINER_IMAGE,
                memory=ram,
                memory_swap=ram,
                nano_cpus=cores_to_nano_cpus(cpu),
                host_port=host_port,
                container_port=self.settings.CONTAINER_PORT,
                host_ip=self.settings.BIND_HOST_IP,
            )
            container_id = await self.docker_runtime.create(spec)
            logger.info("Created container %s (host port %s)", container_id, host_port)

            try:
                await self.docker_runtime.start(container_id)
            except ContainerAPIError:
                logger.warning("Container %s was created but not started; it is left in place", container_id)
                raise

            details = await self.docker_runtime.inspect(container_id)
        finally:
            await self._release_port(host_port)

        return ContainerCreation(container_id=container_id, ip_address=pick_ip_address(details))

    # -------------------------------
    # Resources
    # -------------------------------
    async def get_resources(self, container_id: str) -> ContainerResources:
        details = await self.docker_runtime.inspect(container_id)
        return ContainerResources.from_inspect(details)

    async def update_resources(self, container_id: str, *, ram: int, cpu: int) -> ContainerResources:
        """Apply new limits and return what the engine reports afterwards."""
        await self.docker_runtime.update_resources(
            container_id,
            memory=ram,
            memory_swap=ram,
            nano_cpus=cores_to_nano_cpus(cpu),
        )
        logger.info("Updated resources of %s: ram=%s cpu=%s", container_id, ram, cpu)
        return await self.get_resources(container_id)

    # -------------------------------
    # Listing / stopping
    # -------------------------------
    async def list_containers(self) -> List[ContainerSummary]:
        containers = await self.docker_runtime.list_containers()
        return [
            ContainerSummary(id=c["Id"], names=list(c.get("Names") or []))
            for c in containers
        ]

    async def stop_container(self, container_id: str) -> None:
        logger.info("Stopping container %s", container_id)
        await self.docker_runtime.stop(container_id)
        logger.info("Stopped container %s", container_id)
