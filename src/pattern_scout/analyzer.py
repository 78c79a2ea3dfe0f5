"""Pattern detection engine.

Resolves the files of one type under a directory, runs every applicable
detector over a bounded sample of them, scores what was found and derives
recommendations. Best-effort: problems are reported in the result, never
raised.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .detectors import CATEGORIES, DEFAULT_DETECTORS, Detector, detectors_for
from .files import resolve_files
from .logging import log_operation, logger
from .recommendations import synthesize
from .scoring import PatternRecord, aggregate, score
from .techstack import TechStackInfo

# Content detectors only look at the first N files (sorted) of a category
DEFAULT_SAMPLE_SIZE = 50


@dataclass(frozen=True)
class AnalysisRun:
    """Result of one pattern detection run."""

    directory: str
    file_type: str
    categories: dict[str, list[PatternRecord]] = field(
        default_factory=lambda: {category: [] for category in CATEGORIES}
    )
    recommendations: list[str] = field(default_factory=list)
    files_matched: int = 0
    files_sampled: int = 0

    def top(self, category: str) -> PatternRecord | None:
        """Highest-ranked record of a category, if any."""
        records = self.categories.get(category) or []
        return records[0] if records else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "directory": self.directory,
            "file_type": self.file_type,
            "files_matched": self.files_matched,
            "files_sampled": self.files_sampled,
            "patterns": {
                category: [r.to_dict() for r in records]
                for category, records in self.categories.items()
            },
            "recommendations": list(self.recommendations),
        }


def _read_sample(root: Path, files: list[Path]) -> list[tuple[str, str]]:
    """Read files as (relative path, content), skipping unreadable ones."""
    sources = []
    for fpath in files:
        try:
            content = fpath.read_text(errors="replace")
        except OSError as e:
            logger.debug("Skipping unreadable file %s: %s", fpath, e)
            continue
        sources.append((fpath.relative_to(root).as_posix(), content))
    return sources


def _run(
    directory: str,
    file_type: str,
    sample_size: int,
    detectors: tuple[Detector, ...],
) -> AnalysisRun:
    root = Path(directory)
    files = resolve_files(root, file_type)
    if not files:
        return AnalysisRun(
            directory=directory,
            file_type=file_type,
            recommendations=[f"No {file_type} files found in {directory}"],
        )

    sources = _read_sample(root, files[:sample_size])
    active = detectors_for(file_type, detectors)
    tallies = aggregate(
        [obs for detector in active for obs in detector.detect(content, rel_path)]
        for rel_path, content in sources
    )
    categories = score(tallies, files_sampled=len(sources))

    return AnalysisRun(
        directory=directory,
        file_type=file_type,
        categories=categories,
        recommendations=synthesize(categories),
        files_matched=len(files),
        files_sampled=len(sources),
    )


def detect_patterns(
    directory: str | Path,
    file_type: str,
    sample_size: int = DEFAULT_SAMPLE_SIZE,
    detectors: tuple[Detector, ...] = DEFAULT_DETECTORS,
) -> AnalysisRun:
    """Detect the conventions used by ``file_type`` files under ``directory``.

    Never raises: an unexpected failure becomes a single
    ``Error analyzing directory: ...`` recommendation on an empty run.
    """
    # Reported as given; Path is only used for file-system access
    directory = os.fspath(directory)
    try:
        with log_operation("detect_patterns", {"directory": directory, "file_type": file_type}):
            return _run(directory, file_type, sample_size, detectors)
    except Exception as e:
        return AnalysisRun(
            directory=directory,
            file_type=file_type,
            recommendations=[f"Error analyzing directory: {e}"],
        )


def combined_report(
    run: AnalysisRun,
    tech_stack: TechStackInfo | None = None,
) -> dict[str, Any]:
    """Merge a pattern run and a tech stack scan into one report dict."""
    report = run.to_dict()
    report["tech_stack"] = (tech_stack or TechStackInfo()).to_dict()
    return report
