"""
Build variant selection.

Two independent rules:

- `select_default_variant` picks the variant of the primary (application)
  module when the caller did not ask for one.
- `choose_build_variant` picks, for every other module, the variant that best
  matches that reference. It only looks at the reference and the module's own
  catalog, so the result never depends on which modules were resolved first.
"""

from typing import Iterable, List, Optional, Sequence

from buildlens.models.variant import BuildVariant
from buildlens.shared.domain.exceptions import VariantResolutionFailure


def split_camel_case(name: str) -> List[str]:
    """
    Split before every uppercase letter.

    Examples:
        >>> split_camel_case("myFlavorDebug")
        ['my', 'Flavor', 'Debug']
        >>> split_camel_case("Release")
        ['Release']
    """
    parts: List[str] = []
    current = ""
    for char in name:
        if char.isupper() and current:
            parts.append(current)
            current = ""
        current += char
    if current:
        parts.append(current)
    return parts


def count_common_parts(reference_parts: Sequence[str], candidate_parts: Sequence[str]) -> int:
    """Case-insensitive overlap; each reference part counts at most once."""
    candidate_lower = {part.lower() for part in candidate_parts}
    return sum(1 for part in reference_parts if part.lower() in candidate_lower)


def count_exact_parts(reference_parts: Sequence[str], candidate_parts: Sequence[str]) -> int:
    """Case-sensitive overlap, used to break ties between equal overlaps."""
    candidate_set = set(candidate_parts)
    return sum(1 for part in reference_parts if part in candidate_set)


def choose_build_variant(reference: BuildVariant, candidates: Iterable[BuildVariant]) -> BuildVariant:
    """
    Pick the candidate that best matches the reference variant.

    1. Exact name match.
    2. Most camelCase tokens shared with the reference, compared
       case-insensitively (at least one). Equal overlaps are ordered by
       the number of tokens matching with the same case, then the first
       candidate wins.
    3. First candidate flagged default, else the first candidate.

    Raises:
        VariantResolutionFailure: If there are no candidates
    """
    candidates = list(candidates)
    if not candidates:
        raise VariantResolutionFailure(f"No build variants to match against '{reference.name}'")

    for candidate in candidates:
        if candidate.name == reference.name:
            return candidate

    reference_parts = split_camel_case(reference.name)
    best: Optional[BuildVariant] = None
    best_score = (0, 0)
    for candidate in candidates:
        candidate_parts = split_camel_case(candidate.name)
        score = (
            count_common_parts(reference_parts, candidate_parts),
            count_exact_parts(reference_parts, candidate_parts),
        )
        if score[0] > 0 and score > best_score:
            best, best_score = candidate, score
    if best is not None:
        return best

    for candidate in candidates:
        if candidate.is_default is True:
            return candidate
    return candidates[0]


def select_default_variant(variants: Iterable[BuildVariant]) -> Optional[BuildVariant]:
    """
    Pick the default variant the way Android Studio does.

    1. First variant explicitly flagged default.
    2. Alphabetically first variant whose name contains "debug".
    3. Alphabetically first variant overall.

    Returns:
        The selected variant, or None for an empty collection
    """
    variants = list(variants)
    if not variants:
        return None

    for variant in variants:
        if variant.is_default is True:
            return variant

    debug_variants = [v for v in variants if "debug" in v.name.lower()]
    if debug_variants:
        return min(debug_variants, key=lambda v: v.name)

    return min(variants, key=lambda v: v.name)
