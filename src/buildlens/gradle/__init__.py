"""
Model service access.

Transports (snapshot, HTTP), the per-resolve session and the fetch layer.
"""

from buildlens.gradle.fetch import fetch
from buildlens.gradle.http import HttpModelService
from buildlens.gradle.service import ModelConnection, ModelKind, ModelService
from buildlens.gradle.session import ModelSession, establish_session
from buildlens.gradle.snapshot import SnapshotModelService

__all__ = [
    "fetch",
    "establish_session",
    "HttpModelService",
    "ModelConnection",
    "ModelKind",
    "ModelService",
    "ModelSession",
    "SnapshotModelService",
]
