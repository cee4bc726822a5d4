"""
Dependency graph resolver.

Turns one graph item into a typed Dependency, using the variant's library
table (keyed by the exact graph-item key) for artifact paths. Resolution is
best effort: anything that cannot be parsed or has no library record is
dropped and None is returned. The caller decides the scope.
"""

from typing import Mapping, Optional

from buildlens.dependencies.graph_item import GraphItemKey, parse_record
from buildlens.gradle.models import LibraryModel
from buildlens.models.dependency import (
    ArchiveDependency,
    Dependency,
    GenericProjectDependency,
    JarDependency,
    Scope,
    TypedVariantProjectDependency,
)
from buildlens.shared.domain.exceptions import GraphItemParseError
from buildlens.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


def resolve_dependency(
    record: str,
    scope: Scope,
    libraries: Mapping[str, LibraryModel],
) -> Optional[Dependency]:
    """
    Decode one graph item.

    Args:
        record: Textual rendering of the graph item
        scope: Scope to assign to the dependency
        libraries: Library records keyed by graph-item key

    Returns:
        The dependency, or None when the item is malformed or unresolvable
    """
    try:
        key = parse_record(record)
    except GraphItemParseError as e:
        logger.debug("graph_item_dropped", reason=str(e))
        return None

    if key.is_project_reference:
        return _resolve_project_dependency(key, scope, libraries)

    library = libraries.get(key.raw)
    if library is None:
        logger.debug("graph_item_unresolved", key=key.raw)
        return None

    if library.android_library_data is not None:
        return ArchiveDependency(
            path=library.artifact or "",
            resolved_artifact_paths=tuple(library.android_library_data.compile_jar_files),
            group=key.group,
            artifact=key.name,
            version=key.version,
            scope=scope,
        )

    if library.artifact is not None:
        return JarDependency(
            path=library.artifact,
            group=key.group,
            artifact=key.name,
            version=key.version,
            scope=scope,
        )

    logger.debug("graph_item_without_artifact", key=key.raw)
    return None


def _resolve_project_dependency(
    key: GraphItemKey,
    scope: Scope,
    libraries: Mapping[str, LibraryModel],
) -> Dependency:
    library = libraries.get(key.raw)

    if library is not None and library.project_info is not None:
        info = library.project_info
        artifact_path = library.artifact or ""
        if info.build_type:
            return TypedVariantProjectDependency(
                project_path=info.project_path,
                build_type=info.build_type,
                capabilities=tuple(info.capabilities),
                scope=scope,
                path=artifact_path,
            )
        return GenericProjectDependency(
            project_path=info.project_path,
            capabilities=tuple(info.capabilities),
            scope=scope,
            path=artifact_path,
        )

    # No enriched record: infer from the key structure.
    if key.version and key.third_segment_is_build_type:
        return TypedVariantProjectDependency(project_path=key.name, build_type=key.version, scope=scope)

    return GenericProjectDependency(project_path=key.name, scope=scope)
