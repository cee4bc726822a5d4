"""
Base domain model with camelCase JSON export.

All resolved values (projects, modules, variants, dependencies) inherit from
BaseDomainModel. Instances are frozen: once a resolve call hands out a value
nobody mutates it.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, ClassVar, Dict, Type, TypeVar

T = TypeVar("T", bound="BaseDomainModel")


def to_camel_case(snake_str: str) -> str:
    """
    Convert snake_case to camelCase.

    Examples:
        >>> to_camel_case("project_path")
        'projectPath'
        >>> to_camel_case("resolved_artifact_paths")
        'resolvedArtifactPaths'
    """
    components = snake_str.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


def to_json_value(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, BaseDomainModel):
        return value.to_json()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, BaseException):
        return f"{type(value).__name__}: {value}"
    if isinstance(value, (list, tuple)):
        return [to_json_value(item) for item in value]
    if isinstance(value, dict):
        return {k: to_json_value(v) for k, v in value.items()}
    return value


@dataclass(frozen=True)
class BaseDomainModel:
    """
    Base class for all domain models.

    JSON compatibility:
    - to_json() serializes to camelCase keys
    - Enum values are serialized as their values
    - Tuples and lists become JSON arrays
    - Members of a closed union set `json_type`, emitted as "type"
    """

    json_type: ClassVar[str | None] = None

    def to_json(self) -> Dict[str, Any]:
        """
        Serialize to JSON-ready dictionary (camelCase).

        Returns:
            Dictionary with camelCase keys and JSON-compatible values
        """
        result: Dict[str, Any] = {}
        if self.json_type is not None:
            result["type"] = self.json_type

        for field in fields(self):
            key = to_camel_case(field.name)
            if key in result:
                raise TypeError(f"{type(self).__name__}.{field.name} collides with the '{key}' discriminator")
            result[key] = to_json_value(getattr(self, field.name))

        return result

    @classmethod
    def from_json(cls: Type[T], data: Dict[str, Any]) -> T:
        """
        Deserialize a flat model from camelCase JSON.

        Nested models are not rebuilt; override in subclasses that need it.

        Raises:
            ValueError: If a required field is missing
        """
        kwargs: Dict[str, Any] = {}

        for field in fields(cls):
            json_key = to_camel_case(field.name)
            if json_key in data:
                kwargs[field.name] = data[json_key]

        try:
            return cls(**kwargs)
        except TypeError as e:
            raise ValueError(f"Invalid {cls.__name__} payload: {e}") from e
