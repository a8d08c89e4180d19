from dataclasses import dataclass, field
from typing import Any

NANO_CPUS_PER_CORE = 1_000_000_000


def cores_to_nano_cpus(cores: int) -> int:
    return cores * NANO_CPUS_PER_CORE


def nano_cpus_to_cores(nano_cpus: int) -> int:
    # Truncates: a 1.5-core container reports 1.
    return nano_cpus // NANO_CPUS_PER_CORE


@dataclass
class ContainerSpec:
    image: str
    memory: int
    memory_swap: int
    nano_cpus: int
    host_port: int
    container_port: int = 80
    host_ip: str = "0.0.0.0"

    @property
    def port_key(self) -> str:
        return f"{self.container_port}/tcp"


@dataclass
class ContainerCreation:
    container_id: str
    ip_address: str = ""


@dataclass
class ContainerResources:
    cpu: int
    ram: int

    @classmethod
    def from_inspect(cls, details: dict[str, Any]) -> "ContainerResources":
        host_config = details.get("HostConfig") or {}
        return cls(
            cpu=nano_cpus_to_cores(host_config.get("NanoCpus") or 0),
            ram=host_config.get("Memory") or 0,
        )


@dataclass
class ContainerSummary:
    id: str
    names: list[str] = field(default_factory=list)


def published_host_ports(summary: dict[str, Any]) -> set[int]:
    """Host ports a container publishes, from a ``/containers/json`` entry."""
    return {
        int(port["PublicPort"])
        for port in summary.get("Ports") or []
        if port.get("PublicPort")
    }


def pick_ip_address(details: dict[str, Any]) -> str:
    """
    IP address of one attached network, or "" when none is attached.
    With several networks the engine's mapping order decides which one.
    """
    networks = (details.get("NetworkSettings") or {}).get("Networks") or {}
    for network in networks.values():
        return (network or {}).get("IPAddress") or ""
    return ""
