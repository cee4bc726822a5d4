"""Project models: the resolved project and its raw (diagnostic) counterpart."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from buildlens.models.module import Module
from buildlens.shared.domain.base_model import BaseDomainModel
from buildlens.shared.domain.outcome import Outcome


@dataclass(frozen=True)
class Project(BaseDomainModel):
    """Result of one top-level resolve call. Modules are in flatten order."""

    name: str
    path: str
    modules: Tuple[Module, ...] = field(default_factory=tuple)

    def module(self, path: str) -> Module | None:
        """Find a module by its project path (e.g. ":app")."""
        return next((m for m in self.modules if m.path == path), None)


@dataclass(frozen=True)
class RawModule(BaseDomainModel):
    """Nested, unprocessed view of a module and every model fetched for it."""


@dataclass(frozen=True)
class RawAndroidModule(RawModule):
    json_type = "android"

    name: str
    path: str
    children: Tuple[RawModule, ...]
    basic_project: Outcome
    project: Outcome
    dsl: Outcome
    variant_dependencies: Outcome

    def to_json(self) -> Dict[str, Any]:
        return {
            "type": self.json_type,
            "name": self.name,
            "path": self.path,
            "basicProject": self.basic_project.to_json(),
            "project": self.project.to_json(),
            "dsl": self.dsl.to_json(),
            "variantDependencies": self.variant_dependencies.to_json(),
            "children": [child.to_json() for child in self.children],
        }


@dataclass(frozen=True)
class RawGenericModule(RawModule):
    json_type = "generic"

    name: str
    path: str
    children: Tuple[RawModule, ...]
    generic_model: Outcome

    def to_json(self) -> Dict[str, Any]:
        return {
            "type": self.json_type,
            "name": self.name,
            "path": self.path,
            "genericModel": self.generic_model.to_json(),
            "children": [child.to_json() for child in self.children],
        }


@dataclass(frozen=True)
class RawProject(BaseDomainModel):
    module: RawModule
