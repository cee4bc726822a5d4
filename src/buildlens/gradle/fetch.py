"""
Model fetch layer.

One request per call against the session's connection, mapped onto an
Outcome: a missing model is a routine Err with a not-found note, a transport
or payload error is an Err carrying the cause. Nothing is retried or cached.
"""

from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import ValidationError

from buildlens.gradle.models import (
    ApplicationOrLibraryProjectModel,
    BasicProjectModel,
    GenericModuleModel,
    ProjectDslModel,
    ProjectTreeNode,
    UpstreamModel,
    VariantDependenciesModel,
)
from buildlens.gradle.service import ModelKind
from buildlens.gradle.session import ModelSession
from buildlens.models.variant import BuildVariant
from buildlens.shared.domain.exceptions import ModelFetchError, ModelNotFound
from buildlens.shared.domain.outcome import Err, Ok, Outcome
from buildlens.shared.infrastructure.config import settings
from buildlens.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

M = TypeVar("M", bound=UpstreamModel)


def fetch(
    session: ModelSession,
    handle: Optional[ProjectTreeNode],
    kind: ModelKind,
    model_type: Type[M],
    params: Optional[Dict[str, Any]] = None,
) -> Outcome[M]:
    """
    Fetch one model for a module.

    Args:
        session: Session of the current resolve call
        handle: Module node, None for project-wide models
        kind: Requested model kind
        model_type: Pydantic model the payload is validated into
        params: Optional model parameters

    Returns:
        Ok with the validated model, or Err (not-found or fetch error)
    """
    location = handle.path if handle is not None else str(session.project_dir)

    connected = session.connect()
    if isinstance(connected, Err):
        return connected.forward()

    try:
        payload = connected.value.query(handle.path if handle is not None else None, kind, params)
    except Exception as e:
        logger.warning("model_fetch_failed", kind=kind.value, module=location, error=str(e))
        return Err(
            cause=ModelFetchError(f"{kind.value} request failed for {location}: {e}", cause=e),
            note=f"There was an error while fetching {kind.value} model from: {location}",
        )

    if payload is None:
        logger.debug("model_not_found", kind=kind.value, module=location)
        return Err(
            cause=ModelNotFound(f"No {kind.value} for {location}", {"kind": kind.value, "module": location}),
            note=f"There is no {kind.value} model in: {location}",
        )

    try:
        model = model_type.model_validate(payload)
    except ValidationError as e:
        logger.warning("model_payload_invalid", kind=kind.value, module=location, errors=e.error_count())
        return Err(
            cause=ModelFetchError(f"Invalid {kind.value} payload for {location}", cause=e),
            note=f"Malformed {kind.value} model received from: {location}",
        )

    logger.debug("model_fetched", kind=kind.value, module=location)
    return Ok(model, note=f"Successfully fetched {kind.value} from: {location}")


def fetch_project_tree(session: ModelSession) -> Outcome[ProjectTreeNode]:
    return fetch(session, None, ModelKind.PROJECT_TREE, ProjectTreeNode)


def fetch_project_model(session: ModelSession, handle: ProjectTreeNode) -> Outcome[ApplicationOrLibraryProjectModel]:
    return fetch(session, handle, ModelKind.APPLICATION_OR_LIBRARY_PROJECT, ApplicationOrLibraryProjectModel)


def fetch_basic_project(session: ModelSession, handle: ProjectTreeNode) -> Outcome[BasicProjectModel]:
    return fetch(session, handle, ModelKind.BASIC_PROJECT, BasicProjectModel)


def fetch_project_dsl(session: ModelSession, handle: ProjectTreeNode) -> Outcome[ProjectDslModel]:
    return fetch(session, handle, ModelKind.PROJECT_DSL, ProjectDslModel)


def fetch_generic_module(session: ModelSession, handle: ProjectTreeNode) -> Outcome[GenericModuleModel]:
    return fetch(session, handle, ModelKind.GENERIC_MODULE, GenericModuleModel)


def fetch_variant_dependencies(
    session: ModelSession,
    handle: ProjectTreeNode,
    variant: BuildVariant,
) -> Outcome[VariantDependenciesModel]:
    """Fetch the dependency graphs of one variant, with the classpaths enabled in settings."""
    params = {
        "variantName": variant.name,
        "buildRuntimeClasspath": settings.include_runtime_classpath,
        "buildUnitTestRuntimeClasspath": settings.include_test_classpath,
        "buildAndroidTestRuntimeClasspath": False,
        "buildTestFixtureRuntimeClasspath": False,
    }
    return fetch(session, handle, ModelKind.VARIANT_DEPENDENCIES, VariantDependenciesModel, params)
