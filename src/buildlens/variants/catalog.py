"""
Build variant catalog.

Lists the variants of an Android module. When the DSL model is available a
variant is flagged default if its name contains the name of a flavor declared
default in the build script. This is a substring heuristic, not real variant
decomposition: a short default flavor such as "pro" also marks variants of a
"professional" flavor. Without DSL information the flag stays None.
"""

from typing import Dict, Optional, Tuple

from buildlens.gradle.models import ApplicationOrLibraryProjectModel, ProjectDslModel, VariantModel
from buildlens.models.variant import BuildVariant
from buildlens.shared.domain.outcome import Ok, Outcome


def resolve_build_variants(
    project_model: ApplicationOrLibraryProjectModel,
    dsl_model: Optional[ProjectDslModel] = None,
) -> Outcome[Tuple[BuildVariant, ...]]:
    """Map every variant of the project model to a BuildVariant."""
    flavor_defaults = _flavor_defaults(dsl_model) if dsl_model is not None else None

    variants = tuple(
        BuildVariant(
            name=variant.name,
            display_name=variant.display_name or variant.name,
            is_default=_is_default(variant, flavor_defaults),
        )
        for variant in project_model.variants
    )

    return Ok(
        variants,
        note=f"Successfully resolved build variants for: {project_model.namespace or project_model.path}",
    )


def _flavor_defaults(dsl_model: ProjectDslModel) -> Dict[str, bool]:
    return {flavor.name: bool(flavor.is_default) for flavor in dsl_model.product_flavors}


def _is_default(variant: VariantModel, flavor_defaults: Optional[Dict[str, bool]]) -> Optional[bool]:
    if flavor_defaults is None:
        return None

    variant_name = variant.name.lower()
    for flavor, is_default in flavor_defaults.items():
        if is_default and flavor.lower() in variant_name:
            return True
    return None
