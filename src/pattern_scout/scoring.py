"""Aggregation and confidence scoring.

Observations from every sampled file are folded into per-category tallies,
then turned into ranked ``PatternRecord``s. Two scoring strategies exist:

- occurrence share: count / all observations in the category. Used where a
  single file yields many events (imports, hooks).
- file share: count / files sampled. Used for per-file presence tests.

Custom hook names get a fixed confidence instead of a computed share.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .detectors import (
    CATEGORIES,
    COMPONENTS,
    ERROR_HANDLING,
    HOOKS,
    IMPORTS,
    NAMING,
    STATE_MANAGEMENT,
    STYLING,
    PatternObservation,
)

MAX_EXAMPLES = 3
CUSTOM_HOOK_CONFIDENCE = 0.8


class Scoring(Enum):
    OCCURRENCE_SHARE = "occurrence-share"
    FILE_SHARE = "file-share"


CATEGORY_SCORING: dict[str, Scoring] = {
    IMPORTS: Scoring.OCCURRENCE_SHARE,
    HOOKS: Scoring.OCCURRENCE_SHARE,
    COMPONENTS: Scoring.FILE_SHARE,
    STATE_MANAGEMENT: Scoring.FILE_SHARE,
    ERROR_HANDLING: Scoring.FILE_SHARE,
    STYLING: Scoring.FILE_SHARE,
    NAMING: Scoring.FILE_SHARE,
}

# Keyed by observation kind; overrides the category strategy.
FIXED_CONFIDENCE: dict[str, float] = {
    "custom-hook": CUSTOM_HOOK_CONFIDENCE,
}


@dataclass(frozen=True)
class PatternRecord:
    """Aggregated, ranked summary of one convention within a category."""

    category: str
    pattern: str
    kind: str
    frequency: int
    confidence: float
    examples: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "pattern": self.pattern,
            "kind": self.kind,
            "frequency": self.frequency,
            "confidence": round(self.confidence, 4),
            "examples": list(self.examples),
        }


@dataclass
class CategoryTally:
    """Counts and examples for one category, in first-observed order."""

    counts: dict[str, int] = field(default_factory=dict)
    examples: dict[str, list[str]] = field(default_factory=dict)
    kinds: dict[str, str] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(self.counts.values())


def aggregate(
    per_file: Iterable[Iterable[PatternObservation]],
) -> dict[str, CategoryTally]:
    """Fold observations from all files into per-category tallies.

    Dict insertion order records the first time each pattern was seen,
    which is what ties are broken by later.
    """
    tallies = {category: CategoryTally() for category in CATEGORIES}

    for observations in per_file:
        for obs in observations:
            tally = tallies.setdefault(obs.category, CategoryTally())
            tally.counts[obs.pattern] = tally.counts.get(obs.pattern, 0) + 1
            tally.kinds.setdefault(obs.pattern, obs.kind)

            examples = tally.examples.setdefault(obs.pattern, [])
            if (
                obs.example
                and len(examples) < MAX_EXAMPLES
                and obs.example not in examples
            ):
                examples.append(obs.example)

    return tallies


def confidence_for(
    category: str,
    kind: str,
    count: int,
    tally_total: int,
    files_sampled: int,
) -> float:
    """Confidence of one pattern under its category's scoring strategy."""
    if kind in FIXED_CONFIDENCE:
        return FIXED_CONFIDENCE[kind]

    strategy = CATEGORY_SCORING.get(category, Scoring.FILE_SHARE)
    denominator = tally_total if strategy is Scoring.OCCURRENCE_SHARE else files_sampled
    if denominator <= 0:
        return 0.0
    return max(0.0, min(1.0, count / denominator))


def score(
    tallies: dict[str, CategoryTally],
    files_sampled: int,
) -> dict[str, list[PatternRecord]]:
    """Rank each category's patterns by frequency, highest first.

    ``sorted`` is stable, so equal frequencies keep first-observed order.
    """
    ranked: dict[str, list[PatternRecord]] = {}
    for category, tally in tallies.items():
        total = tally.total
        records = [
            PatternRecord(
                category=category,
                pattern=pattern,
                kind=tally.kinds[pattern],
                frequency=count,
                confidence=confidence_for(
                    category, tally.kinds[pattern], count, total, files_sampled
                ),
                examples=tuple(tally.examples.get(pattern, ())),
            )
            for pattern, count in tally.counts.items()
        ]
        ranked[category] = sorted(records, key=lambda r: -r.frequency)
    return ranked
