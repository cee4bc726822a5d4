"""
buildlens CLI
=============

Resolve a Gradle/Android project into JSON.

    buildlens resolve PATH [--variant NAME] [--snapshot FILE | --server URL] [--output FILE]
    buildlens variants PATH [--snapshot FILE | --server URL]
    buildlens raw PATH [--variant NAME] [--snapshot FILE | --server URL] [--output FILE]

Exit code is 0 when the resolve call succeeds and 1 when it fails.
"""

import json
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.panel import Panel

from buildlens.gradle.http import HttpModelService
from buildlens.gradle.service import ModelService
from buildlens.gradle.snapshot import SnapshotModelService
from buildlens.models.variant import BuildVariant
from buildlens.resolution.project import ProjectResolver
from buildlens.resolution.raw import RawProjectResolver
from buildlens.shared.domain.outcome import Err, Outcome
from buildlens.shared.infrastructure.config import settings
from buildlens.shared.infrastructure.logging import configure_logging

app = typer.Typer(
    name="buildlens",
    help="Variant-aware structure extraction for Gradle/Android projects",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()
error_console = Console(stderr=True)

SNAPSHOT_OPTION = typer.Option(None, "--snapshot", "-s", help="Recorded model snapshot (YAML or JSON)")
SERVER_OPTION = typer.Option(None, "--server", help="Model server base URL (defaults to BUILDLENS_MODEL_SERVER_URL)")
OUTPUT_OPTION = typer.Option(None, "--output", "-o", help="Write JSON to this file instead of stdout")
VARIANT_OPTION = typer.Option(None, "--variant", "-v", help="Reference variant name")


def _model_service(snapshot: Optional[Path], server: Optional[str]) -> ModelService:
    if snapshot is not None and server is not None:
        raise typer.BadParameter("Use either --snapshot or --server, not both")
    if snapshot is not None:
        return SnapshotModelService(snapshot)

    url = server or settings.model_server_url
    if url is None:
        raise typer.BadParameter("No model source: pass --snapshot, --server or set BUILDLENS_MODEL_SERVER_URL")
    return HttpModelService(url, timeout=settings.model_server_timeout)


def _reference(variant: Optional[str]) -> Optional[BuildVariant]:
    if variant is None:
        return None
    return BuildVariant(name=variant, display_name=variant)


def _emit(outcome: Outcome, payload: Any, output: Optional[Path]) -> None:
    """Print the payload of an Ok outcome, or the failure of an Err, and exit accordingly."""
    if isinstance(outcome, Err):
        error_console.print(Panel(
            f"[bold]{outcome.note or 'Resolution failed'}[/bold]\n[dim]{outcome.cause}[/dim]",
            title="[red]buildlens[/red]",
            border_style="red",
        ))
        raise typer.Exit(1)

    if output is not None:
        output.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        error_console.print(f"[green]Wrote[/green] {output}")
    else:
        console.print_json(data=payload)


@app.command()
def resolve(
    path: Path = typer.Argument(..., help="Project root directory"),
    variant: Optional[str] = VARIANT_OPTION,
    snapshot: Optional[Path] = SNAPSHOT_OPTION,
    server: Optional[str] = SERVER_OPTION,
    output: Optional[Path] = OUTPUT_OPTION,
):
    """
    Resolve every module of a project.

    Example:
        buildlens resolve ./my-app --snapshot models.yaml
        buildlens resolve ./my-app --variant proDebug -o project.json
    """
    configure_logging()
    resolver = ProjectResolver(path, _model_service(snapshot, server))
    outcome = resolver.resolve_sync(_reference(variant))
    _emit(outcome, outcome.value.to_json() if outcome.is_ok else None, output)


@app.command()
def variants(
    path: Path = typer.Argument(..., help="Project root directory"),
    snapshot: Optional[Path] = SNAPSHOT_OPTION,
    server: Optional[str] = SERVER_OPTION,
    output: Optional[Path] = OUTPUT_OPTION,
):
    """
    List the build variants of the primary module.

    Example:
        buildlens variants ./my-app --server http://localhost:8765
    """
    configure_logging()
    outcome = ProjectResolver(path, _model_service(snapshot, server)).resolve_build_variants_sync()
    payload = [v.to_json() for v in outcome.value] if outcome.is_ok else None
    _emit(outcome, payload, output)


@app.command()
def raw(
    path: Path = typer.Argument(..., help="Project root directory"),
    variant: Optional[str] = VARIANT_OPTION,
    snapshot: Optional[Path] = SNAPSHOT_OPTION,
    server: Optional[str] = SERVER_OPTION,
    output: Optional[Path] = OUTPUT_OPTION,
):
    """
    Export every model of every module, nested like the module tree.

    Example:
        buildlens raw ./my-app --snapshot models.yaml -o raw.json
    """
    configure_logging()
    resolver = RawProjectResolver(path, _model_service(snapshot, server), _reference(variant))
    outcome = resolver.resolve()
    _emit(outcome, outcome.value.module.to_json() if outcome.is_ok else None, output)


def main():
    """Entry point for setuptools."""
    app()


if __name__ == "__main__":
    app()
