"""Turn ranked pattern records into natural-language guidance."""

from __future__ import annotations

from .detectors import (
    COMPONENT_SHAPES,
    COMPONENTS,
    ERROR_HANDLING,
    HOOKS,
    IMPORTS,
    NAMING,
    STATE_MANAGEMENT,
    STYLING,
)
from .scoring import PatternRecord

ERROR_HANDLING_GAP = "Add error handling patterns (try-catch, error boundaries)"


def _percent(confidence: float) -> int:
    # Round half up, like Math.round
    return int(confidence * 100 + 0.5)


def _top(categories: dict[str, list[PatternRecord]], category: str) -> PatternRecord | None:
    records = categories.get(category) or []
    return records[0] if records else None


def synthesize(categories: dict[str, list[PatternRecord]]) -> list[str]:
    """Build recommendations from the top record of each category.

    Order is fixed. Error handling is the exception to "summarise the top
    record": its recommendation is emitted only when nothing was found.
    """
    recommendations: list[str] = []

    top_import = _top(categories, IMPORTS)
    if top_import:
        recommendations.append(
            f"Use {top_import.pattern} imports ({_percent(top_import.confidence)}% of codebase)"
        )

    top_shape = next(
        (r for r in categories.get(COMPONENTS) or [] if r.pattern in COMPONENT_SHAPES),
        None,
    )
    if top_shape:
        recommendations.append(f"Follow {top_shape.pattern} pattern for components")

    top_state = _top(categories, STATE_MANAGEMENT)
    if top_state:
        recommendations.append(f"Use {top_state.pattern} for state management")

    if not categories.get(ERROR_HANDLING):
        recommendations.append(ERROR_HANDLING_GAP)

    top_styling = _top(categories, STYLING)
    if top_styling:
        recommendations.append(f"Continue using {top_styling.pattern} for styling")

    hooks = [r.pattern for r in (categories.get(HOOKS) or [])[:3]]
    if hooks:
        recommendations.append(f"Common hooks: {', '.join(hooks)}")

    top_naming = _top(categories, NAMING)
    if top_naming:
        recommendations.append(
            f"Name files using {top_naming.pattern} ({_percent(top_naming.confidence)}% of files)"
        )

    return recommendations
