"""
Resolver for generic (non-Android) modules.

Plain Java/Kotlin modules expose their layout through the generic module
model: content source and test directories plus single-entry library
dependencies with module coordinates.
"""

from typing import Optional, Tuple

from buildlens.gradle.fetch import fetch_generic_module
from buildlens.gradle.models import GenericModuleModel, ProjectTreeNode
from buildlens.gradle.session import ModelSession
from buildlens.models.dependency import Dependency, JarDependency, Scope, deduplicate
from buildlens.models.module import FailedModule, Module, ResolvedGenericModule
from buildlens.models.source_root import Language, SourceRoot
from buildlens.shared.domain.outcome import Err

_SCOPES = {
    "COMPILE": Scope.COMPILE,
    "PROVIDED": Scope.COMPILE,
    "TEST": Scope.TEST,
    "RUNTIME": Scope.RUNTIME,
}


class GenericModuleResolver:
    """Resolve source roots and library dependencies of a non-Android module."""

    def __init__(self, session: ModelSession):
        self.session = session

    def resolve(self, handle: ProjectTreeNode) -> Module:
        model = fetch_generic_module(self.session, handle)
        if isinstance(model, Err):
            return FailedModule.from_err(model, handle.name, handle.path)

        return ResolvedGenericModule(
            name=handle.name,
            path=handle.path,
            roots=self.extract_source_roots(model.value),
            dependencies=self.extract_dependencies(model.value),
        )

    @staticmethod
    def extract_source_roots(model: GenericModuleModel) -> Tuple[SourceRoot, ...]:
        directories = list(model.source_directories) + list(model.test_directories)
        return tuple(SourceRoot(path=path, language=Language.JAVA) for path in directories)

    @staticmethod
    def extract_dependencies(model: GenericModuleModel) -> Tuple[Dependency, ...]:
        dependencies = [
            JarDependency(
                path=entry.file,
                group=entry.gradle_module_version.group,
                artifact=entry.gradle_module_version.name,
                version=entry.gradle_module_version.version,
                scope=convert_scope(entry.scope),
            )
            for entry in model.dependencies
            if entry.file is not None and entry.gradle_module_version is not None
        ]
        return deduplicate(dependencies)


def convert_scope(scope: Optional[str]) -> Scope:
    """Map an IDE dependency scope name; unknown or missing scopes count as COMPILE."""
    if scope is None:
        return Scope.COMPILE
    return _SCOPES.get(scope.upper(), Scope.COMPILE)
