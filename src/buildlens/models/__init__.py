"""
Resolved project models.

Contains the project, module, variant, source-root and dependency models.
"""

from buildlens.models.dependency import (
    EXHAUSTIVE_DEPENDENCY_TYPES,
    ArchiveDependency,
    ClassFolderDependency,
    Dependency,
    ExternalDependency,
    GenericProjectDependency,
    JarDependency,
    LocalArchiveDependency,
    LocalDependency,
    ProjectDependency,
    Scope,
    TypedVariantProjectDependency,
)
from buildlens.models.module import (
    EXHAUSTIVE_MODULE_TYPES,
    FailedModule,
    Module,
    ModuleType,
    ResolvedApplicationOrLibraryModule,
    ResolvedGenericModule,
    UnknownModule,
)
from buildlens.models.project import Project, RawAndroidModule, RawGenericModule, RawModule, RawProject
from buildlens.models.source_root import Language, SourceRoot
from buildlens.models.variant import BuildVariant, ResolvedVariantBundle

__all__ = [
    "EXHAUSTIVE_DEPENDENCY_TYPES",
    "EXHAUSTIVE_MODULE_TYPES",
    "ArchiveDependency",
    "BuildVariant",
    "ClassFolderDependency",
    "Dependency",
    "ExternalDependency",
    "FailedModule",
    "GenericProjectDependency",
    "JarDependency",
    "Language",
    "LocalArchiveDependency",
    "LocalDependency",
    "Module",
    "ModuleType",
    "Project",
    "ProjectDependency",
    "RawAndroidModule",
    "RawGenericModule",
    "RawModule",
    "RawProject",
    "ResolvedApplicationOrLibraryModule",
    "ResolvedGenericModule",
    "ResolvedVariantBundle",
    "Scope",
    "SourceRoot",
    "TypedVariantProjectDependency",
    "UnknownModule",
]
