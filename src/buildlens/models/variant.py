"""Build variant models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from buildlens.models.dependency import Dependency
from buildlens.models.source_root import SourceRoot
from buildlens.shared.domain.base_model import BaseDomainModel


@dataclass(frozen=True)
class BuildVariant(BaseDomainModel):
    """
    One flavor/build-type combination a module can be compiled against.

    `is_default` is tri-state: None means no information was available,
    which is not the same as an explicit False.
    """

    name: str
    display_name: str | None = None
    is_default: bool | None = None


@dataclass(frozen=True)
class ResolvedVariantBundle(BaseDomainModel):
    """Dependencies and generated source roots for one (module, variant) pair."""

    dependencies: Tuple[Dependency, ...] = field(default_factory=tuple)
    generated_roots: Tuple[SourceRoot, ...] = field(default_factory=tuple)
