"""
Model service abstraction.

The model service answers typed queries about a project: one request keyed by
module path, model kind and optional parameters, one JSON-like payload back.
How the answer is produced (a Gradle tooling daemon, a recorded snapshot, a
remote server) is up to the concrete service.
"""

from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional


class ModelKind(str, Enum):
    """Kinds of model the service can be asked for."""

    PROJECT_TREE = "ProjectTree"
    APPLICATION_OR_LIBRARY_PROJECT = "ApplicationOrLibraryProjectModel"
    BASIC_PROJECT = "BasicProjectModel"
    PROJECT_DSL = "ProjectDslModel"
    VARIANT_DEPENDENCIES = "VariantDependencies"
    GENERIC_MODULE = "GenericModuleModel"


class ModelConnection(ABC):
    """An open connection to the model service for one project."""

    @abstractmethod
    def query(
        self,
        handle: Optional[str],
        kind: ModelKind,
        params: Optional[Dict[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Issue one model request.

        Args:
            handle: Module path (e.g. ":app"), None for project-wide models
            kind: Requested model kind
            params: Optional model parameters (e.g. variantName)

        Returns:
            The model payload, or None when the module has no such model

        Raises:
            Exception: Any transport error; the fetch layer turns it into an Err
        """

    def close(self) -> None:
        """Release transport resources."""


class ModelService(ABC):
    """Factory of connections, one per top-level resolve call."""

    @abstractmethod
    def connect(self, project_dir: Path) -> ModelConnection:
        """Open a connection for the project rooted at `project_dir`."""
