import re
from typing import Optional

from fastapi import Form
from pydantic import ValidationError

from container_api.core.errors import InputValidationError
from container_api.schemas.container import ContainerCreateRequest, ResourceUpdateRequest

_INTEGER = re.compile(r"[+-]?[0-9]+")

FIELD_LABELS = {
    "ram": "RAM",
    "cpu": "CPU",
    "host_port": "host port",
}


def parse_int_field(value: Optional[str], label: str) -> int:
    """Parse a base-10 form value, rejecting blanks, whitespace and underscores."""
    if value is None or not _INTEGER.fullmatch(value):
        raise InputValidationError(f"Invalid input for {label}")
    return int(value)


def _invalid_input(exc: ValidationError) -> InputValidationError:
    errors = exc.errors()
    field = errors[0]["loc"][0] if errors and errors[0].get("loc") else None
    return InputValidationError(f"Invalid input for {FIELD_LABELS.get(field, field)}")


async def create_container_form(
    ram: Optional[str] = Form(None, description="Memory limit in bytes"),
    cpu: Optional[str] = Form(None, description="CPU limit in cores"),
    host_port: Optional[str] = Form(None, alias="hostPort", description="Host port to publish"),
) -> ContainerCreateRequest:
    values = {
        "ram": parse_int_field(ram, FIELD_LABELS["ram"]),
        "cpu": parse_int_field(cpu, FIELD_LABELS["cpu"]),
        "host_port": parse_int_field(host_port, FIELD_LABELS["host_port"]),
    }
    try:
        return ContainerCreateRequest(**values)
    except ValidationError as e:
        raise _invalid_input(e) from e


async def resource_update_form(
    ram: Optional[str] = Form(None, description="Memory limit in bytes"),
    cpu: Optional[str] = Form(None, description="CPU limit in cores"),
) -> ResourceUpdateRequest:
    values = {
        "ram": parse_int_field(ram, FIELD_LABELS["ram"]),
        "cpu": parse_int_field(cpu, FIELD_LABELS["cpu"]),
    }
    try:
        return ResourceUpdateRequest(**values)
    except ValidationError as e:
        raise _invalid_input(e) from e


async def container_id_form(
    container_id: Optional[str] = Form(None, alias="containerID"),
) -> str:
    if container_id is None or not container_id.strip():
        raise InputValidationError("Invalid input for container ID")
    return container_id.strip()
