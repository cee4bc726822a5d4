"""Dependency graph decoding and per-variant dependency bundles."""

from buildlens.dependencies.bundle import resolve_variant_bundle
from buildlens.dependencies.graph_item import GRAPH_ITEM_GRAMMAR_VERSION, GraphItemKey, extract_key, parse_key
from buildlens.dependencies.resolver import resolve_dependency

__all__ = [
    "GRAPH_ITEM_GRAMMAR_VERSION",
    "GraphItemKey",
    "extract_key",
    "parse_key",
    "resolve_dependency",
    "resolve_variant_bundle",
]
