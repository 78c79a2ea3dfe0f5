"""pattern-scout - detect the conventions a codebase already follows."""

__version__ = "0.1.0"

from .analyzer import AnalysisRun, combined_report, detect_patterns
from .scoring import PatternRecord
from .techstack import TechStackInfo, detect_tech_stack

__all__ = [
    "AnalysisRun",
    "PatternRecord",
    "TechStackInfo",
    "combined_report",
    "detect_patterns",
    "detect_tech_stack",
]
