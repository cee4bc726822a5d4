"""Project, module and raw resolution."""

from buildlens.resolution.generic import GenericModuleResolver
from buildlens.resolution.orchestrator import ModuleResolver, flatten_module_tree, is_android_module
from buildlens.resolution.project import ProjectResolver, resolve_project_sync
from buildlens.resolution.raw import RawProjectResolver

__all__ = [
    "GenericModuleResolver",
    "ModuleResolver",
    "ProjectResolver",
    "RawProjectResolver",
    "flatten_module_tree",
    "is_android_module",
    "resolve_project_sync",
]
