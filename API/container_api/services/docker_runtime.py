import asyncio
import logging
import threading
from typing import Any, Callable, Optional, TypeVar

import docker
import requests
from docker.errors import DockerException

from container_api.core.errors import RuntimeConnectionError, RuntimeOperationError
from container_api.domain.container import ContainerSpec
from container_api.domain.ports import DockerRuntime

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _client_from_env() -> docker.DockerClient:
    # DOCKER_HOST / DOCKER_TLS_VERIFY / DOCKER_CERT_PATH, API version negotiated
    return docker.from_env(version="auto")


class DockerSDKRuntime(DockerRuntime):
    """
    Docker engine adapter. One client is shared by all requests: it is
    created on first use and rebuilt after a connection failure.
    """

    def __init__(self, client_factory: Optional[Callable[[], docker.DockerClient]] = None):
        self._client_factory = client_factory or _client_from_env
        self._client: Optional[docker.DockerClient] = None
        self._client_lock = threading.Lock()

    @property
    def client(self) -> docker.DockerClient:
        with self._client_lock:
            if self._client is None:
                try:
                    self._client = self._client_factory()
                except (DockerException, requests.exceptions.ConnectionError) as e:
                    logger.error("Cannot connect to Docker engine: %s", e)
                    raise RuntimeConnectionError(str(e)) from e
                logger.info("Connected to Docker engine (API %s)", self._client.api.api_version)
            return self._client

    def _reset(self, client: docker.DockerClient) -> None:
        with self._client_lock:
            if self._client is client:
                self._client = None
        try:
            client.close()
        except Exception as e:
            logger.debug("Ignoring error while closing Docker client: %s", e)

    def _execute(self, action: str, operation: Callable[[docker.DockerClient], T]) -> T:
        client = self.client
        try:
            return operation(client)
        except requests.exceptions.ConnectionError as e:
            logger.error("Docker %s failed, connection lost: %s", action, e)
            self._reset(client)
            raise RuntimeConnectionError(str(e)) from e
        except (DockerException, requests.exceptions.RequestException) as e:
            # RequestException covers ReadTimeout past the client timeout
            logger.error("Docker %s failed: %s", action, e)
            raise RuntimeOperationError(str(e)) from e

    async def _call(self, action: str, operation: Callable[[docker.DockerClient], T]) -> T:
        return await asyncio.to_thread(self._execute, action, operation)

    # -------------------------------
    # Container lifecycle
    # -------------------------------
    async def list_containers(self) -> list[dict[str, Any]]:
        return await self._call("list", lambda c: c.api.containers(all=True))

    async def create(self, spec: ContainerSpec) -> str:
        """Create (but do not start) a container and return its id."""

        def _create(c: docker.DockerClient) -> str:
            host_config = c.api.create_host_config(
                mem_limit=spec.memory,
                memswap_limit=spec.memory_swap,
                nano_cpus=spec.nano_cpus,
                port_bindings={spec.port_key: (spec.host_ip, spec.host_port)},
            )
            created = c.api.create_container(image=spec.image, host_config=host_config)
            return created["Id"]

        return await self._call("create", _create)

    async def start(self, container_id: str) -> None:
        await self._call("start", lambda c: c.api.start(container_id))

    async def inspect(self, container_id: str) -> dict[str, Any]:
        return await self._call("inspect", lambda c: c.api.inspect_container(container_id))

    async def update_resources(
        self,
        container_id: str,
        *,
        memory: int,
        memory_swap: int,
        nano_cpus: int,
    ) -> None:
        def _update(c: docker.DockerClient) -> None:
            # APIClient.update_container() has no nano_cpus parameter
            api = c.api
            url = api._url("/containers/{0}/update", container_id)
            data = {"Memory": memory, "MemorySwap": memory_swap, "NanoCpus": nano_cpus}
            res = api._post_json(url, data=data)
            result = api._result(res, True)
            for warning in (result or {}).get("Warnings") or []:
                logger.warning("Docker update %s: %s", container_id, warning)

        await self._call("update", _update)

    async def stop(self, container_id: str) -> None:
        await self._call("stop", lambda c: c.api.stop(container_id))

    async def close(self) -> None:
        with self._client_lock:
            client, self._client = self._client, None
        if client is not None:
            await asyncio.to_thread(client.close)
            logger.info("Docker client closed")
