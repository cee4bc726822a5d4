"""
Source root resolution.

Declared roots come from the main source provider of the basic project model
(Java roots, then Kotlin roots). Generated roots come from the main artifact
of the selected variant and are appended separately by the caller. The two
sets may overlap; nothing is deduplicated.
"""

from typing import Optional, Tuple

from buildlens.gradle.fetch import fetch_basic_project
from buildlens.gradle.models import BasicProjectModel, ProjectTreeNode, VariantModel
from buildlens.gradle.session import ModelSession
from buildlens.models.source_root import Language, SourceRoot
from buildlens.shared.domain.outcome import Err, Ok, Outcome


def resolve_source_roots(session: ModelSession, handle: ProjectTreeNode) -> Outcome[Tuple[SourceRoot, ...]]:
    """Fetch the basic project model of a module and list its declared roots."""
    basic_project = fetch_basic_project(session, handle)
    if isinstance(basic_project, Err):
        return basic_project.forward()

    return Ok(
        declared_source_roots(basic_project.value),
        note=f"Resolved source roots for: {handle.path}",
    )


def declared_source_roots(basic_project: BasicProjectModel) -> Tuple[SourceRoot, ...]:
    if basic_project.main_source_set is None:
        return ()

    provider = basic_project.main_source_set.source_provider
    java_roots = [SourceRoot(path=path, language=Language.JAVA) for path in provider.java_directories]
    kotlin_roots = [SourceRoot(path=path, language=Language.KOTLIN) for path in provider.kotlin_directories]
    return tuple(java_roots + kotlin_roots)


def generated_source_roots(variant: Optional[VariantModel]) -> Tuple[SourceRoot, ...]:
    """Generated source folders of the variant's main artifact."""
    if variant is None:
        return ()
    return tuple(
        SourceRoot(path=path, language=Language.JAVA)
        for path in variant.main_artifact.generated_source_folders
    )
