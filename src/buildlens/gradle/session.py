"""
Model session: the connection state of one top-level resolve call.

A session is created per resolve call and passed explicitly to every fetch.
The connection is opened on first use and reused for the rest of the
session; separate resolve calls never share a connection.
"""

import threading
from pathlib import Path
from typing import Optional

from buildlens.gradle.service import ModelConnection, ModelService
from buildlens.shared.domain.exceptions import ConnectionFailure
from buildlens.shared.domain.outcome import Err, Ok, Outcome
from buildlens.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


class ModelSession:
    """Lazily connected, memoized access to the model service for one project."""

    def __init__(self, service: ModelService, project_dir: Path):
        self.service = service
        self.project_dir = Path(project_dir)
        self._connection: Optional[ModelConnection] = None
        self._lock = threading.Lock()

    @property
    def is_connected(self) -> bool:
        return self._connection is not None

    def connect(self) -> Outcome[ModelConnection]:
        """Return the session's connection, opening it on first call."""
        with self._lock:
            if self._connection is not None:
                return Ok(
                    self._connection,
                    note=f"Connection already established for: {self.project_dir}",
                )

            try:
                self._connection = self.service.connect(self.project_dir)
            except Exception as e:
                logger.error("model_service_connection_failed", project_dir=str(self.project_dir), error=str(e))
                return Err(
                    cause=ConnectionFailure(str(e), {"project_dir": str(self.project_dir)}),
                    note=f"Couldn't establish connection with the model service for: {self.project_dir}",
                )

            logger.debug("model_service_connected", project_dir=str(self.project_dir))
            return Ok(self._connection, note=f"Connection established for: {self.project_dir}")

    def close(self) -> None:
        with self._lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None

    def __enter__(self) -> "ModelSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def establish_session(service: ModelService, project_dir: Path) -> Outcome[ModelSession]:
    """Create a session and make sure the service is reachable."""
    session = ModelSession(service, project_dir)
    connected = session.connect()
    if isinstance(connected, Err):
        return connected.forward()
    return Ok(session, note=connected.note)
