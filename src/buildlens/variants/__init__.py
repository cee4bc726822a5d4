"""Build variant catalog and selection."""

from buildlens.variants.catalog import resolve_build_variants
from buildlens.variants.selector import choose_build_variant, select_default_variant, split_camel_case

__all__ = [
    "resolve_build_variants",
    "choose_build_variant",
    "select_default_variant",
    "split_camel_case",
]
