"""
HTTP model service.

Talks to a model server that fronts a Gradle tooling daemon:

    POST {base_url}/models
    {"projectDir": "...", "handle": ":app", "kind": "BasicProjectModel", "params": {...}}

200 returns the model payload, 404 means the module has no model of that kind.
Every other status is a transport error.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import httpx

from buildlens.gradle.service import ModelConnection, ModelKind, ModelService
from buildlens.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


class HttpModelConnection(ModelConnection):
    def __init__(self, client: httpx.Client, project_dir: Path):
        self._client = client
        self._project_dir = project_dir

    def query(
        self,
        handle: Optional[str],
        kind: ModelKind,
        params: Optional[Dict[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        response = self._client.post(
            "/models",
            json={
                "projectDir": str(self._project_dir),
                "handle": handle,
                "kind": kind.value,
                "params": params or {},
            },
        )
        if response.status_code == 404:
            return None
        response.raise_for_status()
        return response.json()

    def close(self) -> None:
        self._client.close()


class HttpModelService(ModelService):
    """Model service reached over HTTP."""

    def __init__(self, base_url: str, timeout: float = 120.0, transport: httpx.BaseTransport | None = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def connect(self, project_dir: Path) -> HttpModelConnection:
        client = httpx.Client(base_url=self.base_url, timeout=self.timeout, transport=self._transport)
        try:
            response = client.get("/health")
            response.raise_for_status()
        except httpx.HTTPError:
            client.close()
            raise

        logger.debug("model_server_connected", base_url=self.base_url, project_dir=str(project_dir))
        return HttpModelConnection(client, Path(project_dir))
