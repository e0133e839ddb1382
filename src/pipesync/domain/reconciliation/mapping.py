"""Translate a (source, destination) pair into a registry pipeline configuration."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Final

from .actions import Endpoint, PipelineConfig, Schedule

if TYPE_CHECKING:
    from pipesync.domain.model import Destination, Source
    from pipesync.domain.values import ConfigMapping, ConfigValue

SINK_ROLES: Final[Mapping[str, str]] = {
    "POSTGRES": "postgres",
}
DEFAULT_SCHEDULE: Final[Schedule] = Schedule(type="once_per_hour")

_USER_KEY = "user"
_USERNAME_KEY = "username"
_PORT_KEY = "port"
_RESOURCES_KEY = "resources"


def sink_role(definition_name: str) -> str:
    """Registry role for a destination type; empty when the type is unsupported."""

    return SINK_ROLES.get(definition_name, "")


def map_pipeline_config(source: Source, destination: Destination) -> PipelineConfig:
    warnings: list[str] = []
    sink_options = map_sink_options(destination.config, warnings)
    resources = extract_resources(source.config, warnings)
    return PipelineConfig(
        source=Endpoint(role=source.definition_name, options=source.config),
        sink=Endpoint(role=sink_role(destination.definition_name), options=sink_options),
        schedule=DEFAULT_SCHEDULE,
        resources=resources,
        paused=not destination.is_processor_enabled,
        warnings=tuple(warnings),
    )


def map_sink_options(config: ConfigMapping, warnings: list[str]) -> dict[str, ConfigValue]:
    """Rename ``user`` to ``username`` and coerce a textual ``port`` to an integer.

    A port that does not parse is dropped rather than sent as garbage or zero.
    """

    options: dict[str, ConfigValue] = {}
    for key, value in config.items():
        if key == _USER_KEY:
            options[_USERNAME_KEY] = value
        elif key == _PORT_KEY:
            port = _parse_port(value)
            if port is None:
                warnings.append(f"dropped unparseable port {value!r}")
                continue
            options[_PORT_KEY] = port
        else:
            options[key] = value
    return options


def extract_resources(config: ConfigMapping, warnings: list[str]) -> tuple[str, ...] | None:
    raw = config.get(_RESOURCES_KEY)
    if raw is None:
        return None
    if isinstance(raw, str | bytes) or not isinstance(raw, Sequence):
        warnings.append(f"ignored non-list resources value {raw!r}")
        return None

    roles: list[str] = []
    for item in raw:
        if isinstance(item, str):
            roles.append(item)
        else:
            warnings.append(f"skipped non-string resource {item!r}")
    return tuple(roles)


def _parse_port(value: ConfigValue) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None
