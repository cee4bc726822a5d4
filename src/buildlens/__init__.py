"""
buildlens - variant-aware structure extraction for Gradle/Android projects.

Usage:
```python
from buildlens import ProjectResolver, SnapshotModelService

resolver = ProjectResolver("/path/to/project", SnapshotModelService("models.yaml"))
outcome = resolver.resolve_sync()
```
"""

from buildlens.gradle.service import ModelService
from buildlens.gradle.snapshot import SnapshotModelService
from buildlens.gradle.http import HttpModelService
from buildlens.resolution.project import ProjectResolver, resolve_project_sync
from buildlens.resolution.raw import RawProjectResolver
from buildlens.shared.domain.outcome import Err, Ok, Outcome

__version__ = "0.1.0"

__all__ = [
    "ModelService",
    "SnapshotModelService",
    "HttpModelService",
    "ProjectResolver",
    "RawProjectResolver",
    "resolve_project_sync",
    "Ok",
    "Err",
    "Outcome",
]
