"""
Offline model service backed by a recorded snapshot.

A snapshot is a YAML (or JSON) document holding the project tree and every
model payload per module:

```yaml
tree:
  name: my-app
  path: ":"
  projectDirectory: .
  children:
    - {name: app, path: ":app", projectDirectory: app}
models:
  ":app":
    ApplicationOrLibraryProjectModel: {...}
    BasicProjectModel: {...}
    VariantDependencies:
      debug: {...}        # keyed by variant name
```

A payload of the form ``{"$error": "message"}`` makes the query raise, which
is how transport failures are recorded. Relative project directories are
resolved against the directory passed to `connect`.
"""

import copy
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from buildlens.gradle.service import ModelConnection, ModelKind, ModelService
from buildlens.shared.domain.exceptions import ConfigurationError
from buildlens.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

ERROR_MARKER = "$error"


class SnapshotQueryError(RuntimeError):
    """Recorded transport failure replayed from a snapshot."""


class SnapshotConnection(ModelConnection):
    def __init__(self, data: Dict[str, Any], project_dir: Path):
        self._data = data
        self._project_dir = project_dir

    def query(
        self,
        handle: Optional[str],
        kind: ModelKind,
        params: Optional[Dict[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        if kind == ModelKind.PROJECT_TREE:
            tree = self._data.get("tree")
            return self._absolutize(copy.deepcopy(tree)) if tree is not None else None

        module_models = (self._data.get("models") or {}).get(handle) or {}
        payload = module_models.get(kind.value)

        if payload is not None and kind == ModelKind.VARIANT_DEPENDENCIES:
            variant_name = (params or {}).get("variantName")
            payload = payload.get(variant_name)

        if isinstance(payload, dict) and ERROR_MARKER in payload:
            raise SnapshotQueryError(str(payload[ERROR_MARKER]))

        return copy.deepcopy(payload)

    def _absolutize(self, node: Dict[str, Any]) -> Dict[str, Any]:
        directory = node.get("projectDirectory")
        if directory is not None and not Path(directory).is_absolute():
            node["projectDirectory"] = str((self._project_dir / directory).resolve())
        for child in node.get("children") or []:
            self._absolutize(child)
        return node


class SnapshotModelService(ModelService):
    """Serve models from a snapshot file or an in-memory document."""

    def __init__(self, source: Any):
        self._source = source

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SnapshotModelService":
        return cls(data)

    def connect(self, project_dir: Path) -> SnapshotConnection:
        data = self._load()
        logger.debug("snapshot_connected", project_dir=str(project_dir), modules=len(data.get("models") or {}))
        return SnapshotConnection(data, Path(project_dir))

    def _load(self) -> Dict[str, Any]:
        if isinstance(self._source, dict):
            return self._source

        path = Path(self._source)
        if not path.is_file():
            raise ConfigurationError(f"Snapshot file not found: {path}", {"path": str(path)})

        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Snapshot file is not valid YAML/JSON: {path}", {"error": str(e)}) from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Snapshot root must be a mapping: {path}")
        return data
