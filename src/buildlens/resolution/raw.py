"""
Raw (diagnostic) project export.

Walks the module tree from the root itself, keeping the nesting, and fetches
every model kind available for each node. Every model is kept as its Outcome,
so missing or broken models show up in the export instead of failing it.
"""

from pathlib import Path
from typing import Optional, Tuple

from buildlens.gradle.fetch import (
    fetch_basic_project,
    fetch_generic_module,
    fetch_project_dsl,
    fetch_project_model,
    fetch_project_tree,
    fetch_variant_dependencies,
)
from buildlens.gradle.models import ApplicationOrLibraryProjectModel, ProjectDslModel, ProjectTreeNode
from buildlens.gradle.service import ModelService
from buildlens.gradle.session import ModelSession, establish_session
from buildlens.models.project import RawAndroidModule, RawGenericModule, RawModule, RawProject
from buildlens.models.variant import BuildVariant
from buildlens.resolution.orchestrator import is_android_module
from buildlens.shared.domain.exceptions import VariantResolutionFailure
from buildlens.shared.domain.outcome import Err, Ok, Outcome
from buildlens.shared.infrastructure.logging import get_logger
from buildlens.variants.catalog import resolve_build_variants
from buildlens.variants.selector import choose_build_variant

logger = get_logger(__name__)

DEFAULT_REFERENCE = BuildVariant(name="debug", display_name="debug", is_default=True)


class RawProjectResolver:
    """Export every model of every module, nested like the module tree."""

    def __init__(self, project_dir: str | Path, service: ModelService, reference: Optional[BuildVariant] = None):
        self.project_dir = Path(project_dir)
        self.service = service
        self.reference = reference or DEFAULT_REFERENCE

    def resolve(self) -> Outcome[RawProject]:
        opened = establish_session(self.service, self.project_dir)
        if isinstance(opened, Err):
            return opened.forward()

        with opened.value as session:
            tree = fetch_project_tree(session)
            if isinstance(tree, Err):
                return tree.forward()
            module = self.resolve_node(session, tree.value)

        return Ok(RawProject(module=module), note=f"Raw models exported for: {self.project_dir}")

    def resolve_node(self, session: ModelSession, handle: ProjectTreeNode) -> RawModule:
        """Export one node, then its children in source order."""
        if not is_android_module(handle):
            generic_model = fetch_generic_module(session, handle)
            return RawGenericModule(
                name=handle.name,
                path=handle.path,
                children=self._resolve_children(session, handle),
                generic_model=generic_model,
            )

        basic_project = fetch_basic_project(session, handle)
        project = fetch_project_model(session, handle)
        dsl = fetch_project_dsl(session, handle)
        variant_dependencies = self._variant_dependencies(session, handle, project, dsl)
        logger.debug("raw_module_exported", module=handle.path)

        return RawAndroidModule(
            name=handle.name,
            path=handle.path,
            children=self._resolve_children(session, handle),
            basic_project=basic_project,
            project=project,
            dsl=dsl,
            variant_dependencies=variant_dependencies,
        )

    def _resolve_children(self, session: ModelSession, handle: ProjectTreeNode) -> Tuple[RawModule, ...]:
        return tuple(self.resolve_node(session, child) for child in handle.children)

    def _variant_dependencies(
        self,
        session: ModelSession,
        handle: ProjectTreeNode,
        project: Outcome[ApplicationOrLibraryProjectModel],
        dsl: Outcome[ProjectDslModel],
    ) -> Outcome:
        if isinstance(project, Err):
            return project.forward()

        catalog = resolve_build_variants(project.value, dsl.value if isinstance(dsl, Ok) else None)
        if isinstance(catalog, Err):
            return catalog.forward()
        if not catalog.value:
            return Err(
                cause=VariantResolutionFailure(f"{handle.path} declares no build variants"),
                note=f"No build variants found for: {handle.path}",
            )

        variant = choose_build_variant(self.reference, catalog.value)
        return fetch_variant_dependencies(session, handle, variant)
