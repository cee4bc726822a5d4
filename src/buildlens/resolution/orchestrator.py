"""
Module resolution orchestrator.

Flattens the module tree and resolves every module against the reference
variant. Each module is resolved in isolation: whatever goes wrong with one
module becomes a FailedModule and its siblings carry on. The orchestrator
itself never fails.

Per Android module:
1. fetch the project model
2. list its build variants
3. choose the variant matching the reference variant
4. fetch the basic project model and resolve the variant's dependencies
   concurrently
5. assemble the module: declared roots and module kind both come from the
   basic project model

Model fetches are blocking, so they run in worker threads; modules are
resolved concurrently up to `module_concurrency` and returned in flatten
order.
"""

import asyncio
from pathlib import Path
from typing import List, Optional

from buildlens.dependencies.bundle import resolve_variant_bundle
from buildlens.gradle.fetch import fetch_basic_project, fetch_project_model
from buildlens.gradle.models import ProjectTreeNode, ProjectType
from buildlens.gradle.session import ModelSession
from buildlens.models.module import (
    FailedModule,
    Module,
    ModuleType,
    ResolvedApplicationOrLibraryModule,
    ResolvedGenericModule,
    UnknownModule,
)
from buildlens.models.variant import BuildVariant
from buildlens.resolution.generic import GenericModuleResolver
from buildlens.shared.domain.exceptions import (
    ConfigurationError,
    ModuleResolutionFailure,
    VariantResolutionFailure,
)
from buildlens.shared.domain.outcome import Err
from buildlens.shared.infrastructure.config import settings
from buildlens.shared.infrastructure.logging import get_logger
from buildlens.sources.resolver import declared_source_roots
from buildlens.variants.catalog import resolve_build_variants
from buildlens.variants.selector import choose_build_variant

logger = get_logger(__name__)


def flatten_module_tree(root: ProjectTreeNode) -> List[ProjectTreeNode]:
    """Pre-order list of every node below the root (the root itself excluded)."""
    flattened: List[ProjectTreeNode] = []
    for child in root.children:
        flattened.append(child)
        flattened.extend(flatten_module_tree(child))
    return flattened


def module_concurrency(value: Optional[int] = None) -> int:
    """Explicit concurrency, or the configured one. Must be at least one."""
    concurrency = settings.module_concurrency if value is None else value
    if concurrency < 1:
        raise ConfigurationError(
            f"Module concurrency must be at least 1, got {concurrency}",
            {"concurrency": concurrency},
        )
    return concurrency


def is_android_module(handle: ProjectTreeNode, marker: Optional[str] = None) -> bool:
    """A module is an Android module when its directory holds the manifest marker."""
    if handle.project_directory is None:
        return False
    return (Path(handle.project_directory) / (marker or settings.manifest_marker)).is_file()


class ModuleResolver:
    """Resolve every module of a project tree against one reference variant."""

    def __init__(
        self,
        session: ModelSession,
        concurrency: Optional[int] = None,
        resolve_generic_modules: Optional[bool] = None,
    ):
        self.session = session
        self.concurrency = module_concurrency(concurrency)
        self.resolve_generic_modules = (
            settings.resolve_generic_modules if resolve_generic_modules is None else resolve_generic_modules
        )

    async def resolve_modules(self, root: ProjectTreeNode, reference: BuildVariant) -> List[Module]:
        """
        Resolve all modules below the root.

        Returns:
            One Module per flattened node, in flatten order
        """
        handles = flatten_module_tree(root)
        semaphore = asyncio.Semaphore(self.concurrency)

        async def _isolated(handle: ProjectTreeNode) -> Module:
            async with semaphore:
                try:
                    return await self.resolve_module(handle, reference)
                except Exception as e:
                    logger.error("module_resolution_crashed", module=handle.path, error=str(e))
                    failure = ModuleResolutionFailure(handle.name, f"Unexpected error: {e}", cause=e)
                    return FailedModule(
                        name=handle.name,
                        path=handle.path,
                        details=failure.module_detail,
                        cause=failure,
                    )

        modules = await asyncio.gather(*(_isolated(handle) for handle in handles))

        failed = sum(1 for module in modules if isinstance(module, FailedModule))
        logger.info("modules_resolved", total=len(modules), failed=failed, reference_variant=reference.name)
        return list(modules)

    async def resolve_module(self, handle: ProjectTreeNode, reference: BuildVariant) -> Module:
        if handle.project_directory is None:
            logger.warning("module_without_directory", module=handle.path)
            return UnknownModule(name=handle.name, path=handle.path)

        if is_android_module(handle):
            return await self.resolve_android_module(handle, reference)
        return await self.resolve_generic_module(handle)

    async def resolve_android_module(self, handle: ProjectTreeNode, reference: BuildVariant) -> Module:
        project_model = await asyncio.to_thread(fetch_project_model, self.session, handle)
        if isinstance(project_model, Err):
            return self._failed(handle, project_model)

        catalog = resolve_build_variants(project_model.value)
        if isinstance(catalog, Err):
            return self._failed(handle, catalog)
        if not catalog.value:
            return self._failed(handle, Err(
                cause=VariantResolutionFailure(f"{handle.path} declares no build variants"),
                note=f"No build variants found for: {handle.path}",
            ))

        variant = choose_build_variant(reference, catalog.value)

        basic_project, bundle = await asyncio.gather(
            asyncio.to_thread(fetch_basic_project, self.session, handle),
            asyncio.to_thread(resolve_variant_bundle, self.session, handle, project_model.value, variant),
        )
        if isinstance(basic_project, Err):
            return self._failed(handle, basic_project)
        if isinstance(bundle, Err):
            return self._failed(handle, bundle)

        module_type = ModuleType.LIBRARY
        if basic_project.value.project_type == ProjectType.APPLICATION:
            module_type = ModuleType.APPLICATION

        logger.info(
            "module_resolved",
            module=handle.path,
            variant=variant.name,
            dependencies=len(bundle.value.dependencies),
        )
        return ResolvedApplicationOrLibraryModule(
            name=handle.name,
            path=handle.path,
            module_type=module_type,
            selected_variant=variant,
            build_variants=catalog.value,
            roots=declared_source_roots(basic_project.value) + bundle.value.generated_roots,
            dependencies=bundle.value.dependencies,
        )

    async def resolve_generic_module(self, handle: ProjectTreeNode) -> Module:
        if self.resolve_generic_modules:
            return await asyncio.to_thread(GenericModuleResolver(self.session).resolve, handle)
        return ResolvedGenericModule(name=handle.name, path=handle.path)

    @staticmethod
    def _failed(handle: ProjectTreeNode, err: Err) -> FailedModule:
        logger.warning("module_failed", module=handle.path, note=err.note, cause=str(err.cause))
        return FailedModule.from_err(err, handle.name, handle.path)
