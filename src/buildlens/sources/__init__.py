"""Source root resolution."""

from buildlens.sources.resolver import declared_source_roots, generated_source_roots, resolve_source_roots

__all__ = ["declared_source_roots", "generated_source_roots", "resolve_source_roots"]
