import pytest
import requests
from unittest.mock import MagicMock

from docker.errors import DockerException, NotFound

from container_api.core.errors import RuntimeConnectionError, RuntimeOperationError
from container_api.domain.container import ContainerSpec
from container_api.services.docker_runtime import DockerSDKRuntime


def make_runtime(client=None):
    client = client or MagicMock()
    factory = MagicMock(return_value=client)
    return DockerSDKRuntime(client_factory=factory), client, factory


@pytest.mark.asyncio
async def test_client_is_created_once_and_shared():
    runtime, client, factory = make_runtime()
    client.api.containers.return_value = []

    await runtime.list_containers()
    await runtime.list_containers()

    factory.assert_called_once()
    client.api.containers.assert_called_with(all=True)


@pytest.mark.asyncio
async def test_connection_failure_raises_runtime_connection_error():
    factory = MagicMock(side_effect=DockerException("Error while fetching server API version"))
    runtime = DockerSDKRuntime(client_factory=factory)

    with pytest.raises(RuntimeConnectionError) as e:
        await runtime.list_containers()

    assert "server API version" in e.value.message
    assert e.value.status_code == 500


@pytest.mark.asyncio
async def test_lost_connection_resets_client():
    runtime, client, factory = make_runtime()
    client.api.containers.side_effect = requests.exceptions.ConnectionError("connection refused")

    with pytest.raises(RuntimeConnectionError):
        await runtime.list_containers()

    client.close.assert_called_once()
    client.api.containers.side_effect = None
    client.api.containers.return_value = []
    await runtime.list_containers()
    assert factory.call_count == 2


@pytest.mark.asyncio
async def test_create_builds_host_config():
    runtime, client, _ = make_runtime()
    client.api.create_host_config.return_value = {"fake": "host-config"}
    client.api.create_container.return_value = {"Id": "new-id", "Warnings": []}

    spec = ContainerSpec(
        image="ombansod",
        memory=1024,
        memory_swap=1024,
        nano_cpus=2_000_000_000,
        host_port=8081,
    )
    container_id = await runtime.create(spec)

    assert container_id == "new-id"
    client.api.create_host_config.assert_called_once_with(
        mem_limit=1024,
        memswap_limit=1024,
        nano_cpus=2_000_000_000,
        port_bindings={"80/tcp": ("0.0.0.0", 8081)},
    )
    client.api.create_container.assert_called_once_with(image="ombansod", host_config={"fake": "host-config"})


@pytest.mark.asyncio
async def test_engine_error_text_is_forwarded():
    runtime, client, _ = make_runtime()
    client.api.inspect_container.side_effect = NotFound("No such container: nope")

    with pytest.raises(RuntimeOperationError) as e:
        await runtime.inspect("nope")

    assert "No such container: nope" in e.value.message


@pytest.mark.asyncio
async def test_update_resources_posts_nano_cpus():
    runtime, client, _ = make_runtime()
    client.api._url.return_value = "http+docker://localhost/v1.43/containers/abc/update"
    client.api._result.return_value = {"Warnings": []}

    await runtime.update_resources("abc", memory=2048, memory_swap=2048, nano_cpus=1_000_000_000)

    client.api._url.assert_called_once_with("/containers/{0}/update", "abc")
    client.api._post_json.assert_called_once_with(
        "http+docker://localhost/v1.43/containers/abc/update",
        data={"Memory": 2048, "MemorySwap": 2048, "NanoCpus": 1_000_000_000},
    )


@pytest.mark.asyncio
async def test_start_and_stop_use_engine_defaults():
    runtime, client, _ = make_runtime()

    await runtime.start("abc")
    await runtime.stop("abc")

    client.api.start.assert_called_once_with("abc")
    client.api.stop.assert_called_once_with("abc")


@pytest.mark.asyncio
async def test_close_releases_client():
    runtime, client, factory = make_runtime()
    client.api.containers.return_value = []
    await runtime.list_containers()

    await runtime.close()

    client.close.assert_called_once()
    await runtime.list_containers()
    assert factory.call_count == 2


@pytest.mark.asyncio
async def test_read_timeout_is_forwarded_as_operation_error():
    runtime, client, factory = make_runtime()
    client.api.stop.side_effect = requests.exceptions.ReadTimeout("Read timed out. (read timeout=60)")

    with pytest.raises(RuntimeOperationError) as e:
        await runtime.stop("abc")

    assert e.value.message == "Read timed out. (read timeout=60)"
    # a slow engine is not a lost connection; the client is kept
    client.close.assert_not_called()
    await runtime.start("abc")
    factory.assert_called_once()
