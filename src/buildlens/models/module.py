"""
Module models.

Every node of the module tree becomes exactly one of these, so downstream
tooling can always find a module by name and path, even when it failed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple

from buildlens.models.dependency import Dependency
from buildlens.models.source_root import SourceRoot
from buildlens.models.variant import BuildVariant
from buildlens.shared.domain.base_model import BaseDomainModel


class ModuleType(str, Enum):
    """Kind of an Android module."""

    APPLICATION = "APPLICATION"
    LIBRARY = "LIBRARY"


@dataclass(frozen=True)
class Module(BaseDomainModel):
    """Base class of the closed module set. Subclasses declare name and path first."""


@dataclass(frozen=True)
class ResolvedApplicationOrLibraryModule(Module):
    """Android application or library module resolved against one variant."""

    json_type = "android"

    name: str
    path: str
    module_type: ModuleType
    selected_variant: BuildVariant
    build_variants: Tuple[BuildVariant, ...] = field(default_factory=tuple)
    roots: Tuple[SourceRoot, ...] = field(default_factory=tuple)
    dependencies: Tuple[Dependency, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ResolvedGenericModule(Module):
    """Non-Android module (plain JVM/Kotlin library, grouping module, ...)."""

    json_type = "generic"

    name: str
    path: str
    roots: Tuple[SourceRoot, ...] = field(default_factory=tuple)
    dependencies: Tuple[Dependency, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class FailedModule(Module):
    """Module whose resolution failed. Siblings are unaffected."""

    json_type = "failed"

    name: str
    path: str
    details: str
    cause: BaseException | None = None

    @classmethod
    def from_err(cls, err: Any, name: str, path: str) -> "FailedModule":
        """Build from an Err outcome, keeping its note and cause."""
        return cls(
            name=name,
            path=path,
            details=err.note or f"Resolution failed for: {path}",
            cause=err.cause,
        )

    def to_json(self) -> Dict[str, Any]:
        result = super().to_json()
        if self.cause is not None and getattr(self.cause, "cause", None) is not None:
            result["rootCause"] = f"{type(self.cause.cause).__name__}: {self.cause.cause}"
        return result


@dataclass(frozen=True)
class UnknownModule(Module):
    """Tree node that could not be classified (no project directory)."""

    json_type = "unknown"

    name: str
    path: str


EXHAUSTIVE_MODULE_TYPES = (
    ResolvedApplicationOrLibraryModule,
    ResolvedGenericModule,
    FailedModule,
    UnknownModule,
)
