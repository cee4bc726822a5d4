"""
Variant dependency bundle.

Resolves everything a module needs for one variant: the flattened dependency
graph (every transitive edge, deduplicated), the build's own class folders
and jars, and the generated source roots.

Scopes:
- main artifact compile graph -> COMPILE
- main artifact runtime graph -> RUNTIME
- unit test artifact compile graph -> TEST

When the same dependency reaches the module through several classpaths the
first occurrence wins, so COMPILE takes precedence.
"""

from pathlib import PurePath
from typing import Iterator, List, Mapping, Optional, Sequence, Set

from buildlens.dependencies.resolver import resolve_dependency
from buildlens.gradle.fetch import fetch_variant_dependencies
from buildlens.gradle.models import (
    ApplicationOrLibraryProjectModel,
    GraphItemModel,
    LibraryModel,
    ProjectTreeNode,
    VariantDependenciesModel,
    VariantModel,
)
from buildlens.gradle.session import ModelSession
from buildlens.models.dependency import (
    ClassFolderDependency,
    Dependency,
    LocalArchiveDependency,
    Scope,
    deduplicate,
)
from buildlens.models.variant import BuildVariant, ResolvedVariantBundle
from buildlens.shared.domain.outcome import Err, Ok, Outcome
from buildlens.shared.infrastructure.config import settings
from buildlens.shared.infrastructure.logging import get_logger
from buildlens.sources.resolver import generated_source_roots

logger = get_logger(__name__)


def resolve_variant_bundle(
    session: ModelSession,
    handle: ProjectTreeNode,
    project_model: ApplicationOrLibraryProjectModel,
    variant: BuildVariant,
) -> Outcome[ResolvedVariantBundle]:
    """Fetch and flatten the dependencies of one module variant."""
    variant_dependencies = fetch_variant_dependencies(session, handle, variant)
    if isinstance(variant_dependencies, Err):
        return variant_dependencies.forward()

    variant_model = project_model.variant(variant.name)
    if variant_model is None:
        logger.warning("variant_missing_from_project_model", module=handle.path, variant=variant.name)

    dependencies = list(extract_graph_dependencies(variant_dependencies.value))
    dependencies.extend(extract_class_folder_dependencies(variant_model))
    unique = deduplicate(dependencies)

    logger.debug(
        "variant_dependencies_resolved",
        module=handle.path,
        variant=variant.name,
        edges=len(dependencies),
        unique=len(unique),
    )
    return Ok(
        ResolvedVariantBundle(dependencies=unique, generated_roots=generated_source_roots(variant_model)),
        note=f"Resolved {len(unique)} dependencies for {handle.path} ({variant.name})",
    )


def extract_graph_dependencies(model: VariantDependenciesModel) -> Iterator[Dependency]:
    """Walk every enabled classpath graph in scope order."""
    graphs = [(model.main_artifact.compile_dependencies, Scope.COMPILE)]
    if settings.include_runtime_classpath and model.main_artifact.runtime_dependencies:
        graphs.append((model.main_artifact.runtime_dependencies, Scope.RUNTIME))
    if settings.include_test_classpath and model.unit_test_artifact is not None:
        graphs.append((model.unit_test_artifact.compile_dependencies, Scope.TEST))

    for roots, scope in graphs:
        yield from flatten_graph(roots, scope, model.libraries)


def flatten_graph(
    roots: Sequence[GraphItemModel],
    scope: Scope,
    libraries: Mapping[str, LibraryModel],
    expanded: Optional[Set[str]] = None,
) -> Iterator[Dependency]:
    """
    Pre-order walk of a dependency graph.

    An item's children are expanded only the first time its record is seen:
    in a conflict-resolved graph the same key always has the same subtree.
    """
    if expanded is None:
        expanded = set()

    for item in roots:
        dependency = resolve_dependency(item.record, scope, libraries)
        if dependency is not None:
            yield dependency

        if item.record in expanded:
            continue
        expanded.add(item.record)
        yield from flatten_graph(item.dependencies, scope, libraries, expanded)


def extract_class_folder_dependencies(variant_model: Optional[VariantModel]) -> List[Dependency]:
    """Compiled output of the module itself: jars (e.g. R.jar) and class directories."""
    if variant_model is None:
        return []

    result: List[Dependency] = []
    for path in variant_model.main_artifact.classes_folders:
        file_name = PurePath(path).name
        if path.endswith(".jar"):
            result.append(LocalArchiveDependency(
                path=path,
                description=f"Android compiled artifact: {file_name}",
                scope=Scope.COMPILE,
            ))
        else:
            result.append(ClassFolderDependency(
                path=path,
                description=f"Compiled classes: {file_name}",
                scope=Scope.COMPILE,
            ))
    return result
