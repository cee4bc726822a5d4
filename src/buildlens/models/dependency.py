"""
Dependency models.

The dependency set is closed:

- External (coordinates from a repository): JarDependency, ArchiveDependency
- Project (another module of the same build): TypedVariantProjectDependency,
  GenericProjectDependency
- Local (produced by the build, no coordinates): ClassFolderDependency,
  LocalArchiveDependency

Consumers switch over EXHAUSTIVE_DEPENDENCY_TYPES; adding a new kind means
adding it there too (a test checks this).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Hashable, Tuple

from buildlens.shared.domain.base_model import BaseDomainModel


class Scope(str, Enum):
    """Classpath a dependency edge came from."""

    COMPILE = "COMPILE"
    TEST = "TEST"
    RUNTIME = "RUNTIME"


@dataclass(frozen=True)
class Dependency(BaseDomainModel):
    """Base class of the closed dependency set."""

    def identity(self) -> Tuple[Hashable, ...]:
        """Key that is unique within one module's dependency collection."""
        raise NotImplementedError


@dataclass(frozen=True)
class ExternalDependency(Dependency):
    """Dependency with group/artifact/version coordinates."""

    def identity(self) -> Tuple[Hashable, ...]:
        return (self.json_type, self.group, self.artifact, self.version)

    @property
    def coordinates(self) -> str:
        return f"{self.group}:{self.artifact}:{self.version}"


@dataclass(frozen=True)
class JarDependency(ExternalDependency):
    """A single jar, e.g. org.jetbrains.kotlin:kotlin-stdlib:1.9.0."""

    json_type = "jar"

    path: str
    group: str
    artifact: str
    version: str
    scope: Scope = Scope.COMPILE


@dataclass(frozen=True)
class ArchiveDependency(ExternalDependency):
    """
    An archive (AAR) holding several resolvable artifacts.

    `resolved_artifact_paths` lists the extracted jars, typically classes.jar
    plus any bundled libs.
    """

    json_type = "archive"

    path: str
    resolved_artifact_paths: Tuple[str, ...]
    group: str
    artifact: str
    version: str
    scope: Scope = Scope.COMPILE


@dataclass(frozen=True)
class ProjectDependency(Dependency):
    """Dependency on another module of the same build, e.g. project(":core")."""


@dataclass(frozen=True)
class TypedVariantProjectDependency(ProjectDependency):
    """
    Dependency on a specific build type of a sibling module.

    Key shape: ``:|:feature-one|debug|<attributes>|<capabilities>``
    """

    json_type = "typed-variant-project"

    project_path: str
    build_type: str
    capabilities: Tuple[str, ...] = field(default_factory=tuple)
    scope: Scope = Scope.COMPILE
    path: str = ""

    def identity(self) -> Tuple[Hashable, ...]:
        return (self.json_type, self.project_path, self.build_type)


@dataclass(frozen=True)
class GenericProjectDependency(ProjectDependency):
    """
    Dependency on a plain JVM/Kotlin sibling module (not variant specific).

    Key shape: ``:|:shared-utils|org.gradle.category>library,...|<capabilities>``
    """

    json_type = "generic-project"

    project_path: str
    capabilities: Tuple[str, ...] = field(default_factory=tuple)
    scope: Scope = Scope.COMPILE
    path: str = ""

    def identity(self) -> Tuple[Hashable, ...]:
        return (self.json_type, self.project_path)


@dataclass(frozen=True)
class LocalDependency(Dependency):
    """Build-produced artifact without coordinates."""

    def identity(self) -> Tuple[Hashable, ...]:
        return (self.json_type, self.path)


@dataclass(frozen=True)
class ClassFolderDependency(LocalDependency):
    """Directory of compiled classes, e.g. build/intermediates/javac/debug/classes."""

    json_type = "class-folder"

    path: str
    description: str = ""
    scope: Scope = Scope.COMPILE


@dataclass(frozen=True)
class LocalArchiveDependency(LocalDependency):
    """Jar produced by the build or the platform, e.g. R.jar or android.jar."""

    json_type = "local-archive"

    path: str
    description: str = ""
    scope: Scope = Scope.COMPILE


EXHAUSTIVE_DEPENDENCY_TYPES = (
    JarDependency,
    ArchiveDependency,
    TypedVariantProjectDependency,
    GenericProjectDependency,
    ClassFolderDependency,
    LocalArchiveDependency,
)


def deduplicate(dependencies) -> Tuple[Dependency, ...]:
    """Drop later duplicates by identity, keeping first-seen order."""
    seen = set()
    result = []
    for dependency in dependencies:
        key = dependency.identity()
        if key in seen:
            continue
        seen.add(key)
        result.append(dependency)
    return tuple(result)
