"""
Top-level project resolver.

One resolve call owns one model session. The call:
1. establishes the session and fetches the project tree (failures abort)
2. picks the reference variant from the primary (application) module,
   unless the caller supplied one (failures abort)
3. hands the tree to the module orchestrator, which isolates per-module
   failures

Usage:
```python
resolver = ProjectResolver("/path/to/project", SnapshotModelService("models.yaml"))
outcome = await resolver.resolve()
if isinstance(outcome, Ok):
    print(outcome.value.to_json())
```
"""

import asyncio
from pathlib import Path
from typing import List, Optional, Tuple

from buildlens.gradle.fetch import (
    fetch_basic_project,
    fetch_project_dsl,
    fetch_project_model,
    fetch_project_tree,
)
from buildlens.gradle.models import ProjectTreeNode, ProjectType
from buildlens.gradle.service import ModelService
from buildlens.gradle.session import ModelSession, establish_session
from buildlens.models.project import Project
from buildlens.models.variant import BuildVariant
from buildlens.resolution.orchestrator import (
    ModuleResolver,
    flatten_module_tree,
    is_android_module,
    module_concurrency,
)
from buildlens.shared.domain.exceptions import VariantResolutionFailure
from buildlens.shared.domain.outcome import Err, Ok, Outcome
from buildlens.shared.infrastructure.config import settings
from buildlens.shared.infrastructure.logging import get_logger
from buildlens.variants.catalog import resolve_build_variants
from buildlens.variants.selector import select_default_variant

logger = get_logger(__name__)


class ProjectResolver:
    """Resolve a whole project into a Project value."""

    def __init__(self, project_dir: str | Path, service: ModelService, concurrency: Optional[int] = None):
        self.project_dir = Path(project_dir)
        self.service = service
        self.concurrency = module_concurrency(concurrency)

    async def resolve(self, reference: Optional[BuildVariant] = None) -> Outcome[Project]:
        """
        Resolve every module of the project.

        Args:
            reference: Variant driving selection in every module. When omitted
                the primary module's default variant is used.

        Returns:
            Ok with the Project, or Err when the session, the project tree or
            the reference variant could not be obtained
        """
        opened = await asyncio.to_thread(establish_session, self.service, self.project_dir)
        if isinstance(opened, Err):
            return opened.forward()

        session = opened.value
        try:
            tree = await asyncio.to_thread(fetch_project_tree, session)
            if isinstance(tree, Err):
                logger.error("project_tree_unavailable", project_dir=str(self.project_dir), note=tree.note)
                return tree.forward()
            root = tree.value

            if reference is None:
                selected = await asyncio.to_thread(select_reference_variant, session, root)
                if isinstance(selected, Err):
                    return selected.forward()
                reference = selected.value

            logger.info("project_resolution_started", project=root.name, reference_variant=reference.name)
            modules = await ModuleResolver(session, concurrency=self.concurrency).resolve_modules(root, reference)
        finally:
            await asyncio.to_thread(session.close)

        project = Project(
            name=root.name,
            path=root.project_directory or str(self.project_dir),
            modules=tuple(modules),
        )
        return Ok(project, note=f"Resolved {len(project.modules)} modules with variant: {reference.name}")

    async def resolve_build_variants(self) -> Outcome[Tuple[BuildVariant, ...]]:
        """List the primary module's build variants (the candidates for a reference variant)."""
        opened = await asyncio.to_thread(establish_session, self.service, self.project_dir)
        if isinstance(opened, Err):
            return opened.forward()

        session = opened.value
        try:
            tree = await asyncio.to_thread(fetch_project_tree, session)
            if isinstance(tree, Err):
                return tree.forward()
            return await asyncio.to_thread(resolve_primary_catalog, session, tree.value)
        finally:
            await asyncio.to_thread(session.close)

    def resolve_sync(self, reference: Optional[BuildVariant] = None) -> Outcome[Project]:
        return asyncio.run(self.resolve(reference))

    def resolve_build_variants_sync(self) -> Outcome[Tuple[BuildVariant, ...]]:
        return asyncio.run(self.resolve_build_variants())


def primary_module_candidates(root: ProjectTreeNode) -> List[ProjectTreeNode]:
    """Android modules in search order: the root's direct children first, then deeper nodes."""
    direct = [child for child in root.children if is_android_module(child)]
    direct_paths = {child.path for child in direct}
    deeper = [
        node for node in flatten_module_tree(root)
        if node.path not in direct_paths and is_android_module(node)
    ]
    return direct + deeper


def resolve_primary_catalog(session: ModelSession, root: ProjectTreeNode) -> Outcome[Tuple[BuildVariant, ...]]:
    """
    Build variant catalog of the first application module.

    Falls back to a single `fallback_variant_name` variant when the project
    has no application module.
    """
    for handle in primary_module_candidates(root):
        basic = fetch_basic_project(session, handle)
        if isinstance(basic, Err) or basic.value.project_type != ProjectType.APPLICATION:
            continue

        project_model = fetch_project_model(session, handle)
        if isinstance(project_model, Err):
            return project_model.forward()

        dsl = fetch_project_dsl(session, handle)
        if isinstance(dsl, Err):
            logger.debug("primary_module_dsl_unavailable", module=handle.path, note=dsl.note)

        logger.debug("primary_module_found", module=handle.path)
        return resolve_build_variants(project_model.value, dsl.value if isinstance(dsl, Ok) else None)

    fallback = settings.fallback_variant_name
    logger.info("primary_module_not_found", project=root.name, fallback_variant=fallback)
    return Ok(
        (BuildVariant(name=fallback, display_name=fallback),),
        note=f"No application module found in: {root.name}, using variant: {fallback}",
    )


def select_reference_variant(session: ModelSession, root: ProjectTreeNode) -> Outcome[BuildVariant]:
    catalog = resolve_primary_catalog(session, root)
    if isinstance(catalog, Err):
        return catalog.forward()

    selected = select_default_variant(catalog.value)
    if selected is None:
        return Err(
            cause=VariantResolutionFailure(f"Primary module of {root.name} has no build variants"),
            note=f"Couldn't select a reference variant for: {root.name}",
        )
    return Ok(selected, note=f"Selected reference variant: {selected.name}")


def resolve_project_sync(
    project_dir: str | Path,
    service: ModelService,
    reference: Optional[BuildVariant] = None,
) -> Outcome[Project]:
    """Blocking convenience wrapper around ProjectResolver.resolve."""
    return ProjectResolver(project_dir, service).resolve_sync(reference)
