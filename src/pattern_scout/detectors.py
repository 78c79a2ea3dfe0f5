"""Signature-based convention detectors.

One detector per concern. Each takes raw file content (and the file path,
used for examples and naming) and returns the pattern observations it found.
Nothing here parses syntax; every rule is a textual signature.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import PurePath

# Category names, in the order results are reported
IMPORTS = "imports"
COMPONENTS = "components"
HOOKS = "hooks"
STATE_MANAGEMENT = "state_management"
ERROR_HANDLING = "error_handling"
STYLING = "styling"
NAMING = "naming"

CATEGORIES = (
    IMPORTS, COMPONENTS, HOOKS, STATE_MANAGEMENT, ERROR_HANDLING, STYLING, NAMING,
)


@dataclass(frozen=True)
class PatternObservation:
    """A single detected instance of a convention in one file."""

    category: str
    pattern: str
    kind: str
    example: str | None = None


def _line_at(content: str, pos: int) -> str:
    """Return the trimmed source line containing offset ``pos``."""
    start = content.rfind("\n", 0, pos) + 1
    end = content.find("\n", pos)
    if end == -1:
        end = len(content)
    return content[start:end].strip()


class Detector:
    """Base class for category detectors."""

    category: str = ""
    kind: str = ""

    def applies_to(self, file_type: str) -> bool:
        return True

    def detect(self, content: str, path: str = "") -> list[PatternObservation]:
        raise NotImplementedError

    def _observe(self, pattern: str, example: str | None = None, kind: str | None = None) -> PatternObservation:
        return PatternObservation(
            category=self.category,
            pattern=pattern,
            kind=kind or self.kind,
            example=example,
        )


class PresenceDetector(Detector):
    """Detector whose signatures are tested once per file.

    ``signatures`` maps a pattern name to its regex. Each pattern present
    contributes a single observation no matter how often its signature
    repeats.
    """

    signatures: dict[str, re.Pattern[str]] = {}

    def detect(self, content: str, path: str = "") -> list[PatternObservation]:
        observations = []
        for pattern, signature in self.signatures.items():
            match = signature.search(content)
            if match:
                observations.append(
                    self._observe(pattern, self._example(pattern, content, match))
                )
        return observations

    def _example(self, pattern: str, content: str, match: re.Match[str]) -> str | None:
        return _line_at(content, match.start())


# --- Imports ---

IMPORT_STATEMENT = re.compile(
    r"^[ \t]*import\s+([^;'\"]+?)\s+from\s+['\"]([^'\"]+)['\"]",
    re.MULTILINE,
)


class ImportDetector(Detector):
    """Classifies every ``import ... from '...'`` statement independently.

    Priority per statement: namespace > named > type-only > default.
    """

    category = IMPORTS
    kind = "import-style"

    def detect(self, content: str, path: str = "") -> list[PatternObservation]:
        observations = []
        for match in IMPORT_STATEMENT.finditer(content):
            clause = match.group(1)
            if "* as" in clause:
                style = "namespace"
            elif "{" in clause:
                style = "named"
            elif re.match(r"type\s", clause):
                style = "type-only"
            else:
                style = "default"
            statement = " ".join(match.group(0).split())
            observations.append(self._observe(style, statement))
        return observations


# --- Components ---

TYPED_COMPONENT = re.compile(r"const\s+\w+\s*:\s*(React\.)?(FC|FunctionComponent)\b")
FUNCTION_COMPONENT = re.compile(
    r"function\s+\w+\s*(<[^>]*>)?\s*\([^)]*\)\s*(:\s*[^{]+)?\{"
)
ARROW_COMPONENT = re.compile(
    r"const\s+\w+\s*=\s*(async\s*)?\([^)]*\)\s*(:\s*[^=]+)?=>"
)
INTERFACE_PROPS = re.compile(r"\binterface\s+\w*Props\b")
TYPE_PROPS = re.compile(r"\btype\s+\w*Props\s*(<[^>]*>)?\s*=")
DEFAULT_EXPORT = re.compile(r"\bexport\s+default\b")
NAMED_EXPORT = re.compile(r"\bexport\s*\{|\bexport\s+(const|function|class)\s+\w+")


class ComponentDetector(Detector):
    """Component declaration, props and export shape, once per file each.

    Only active when analysing ``component`` files. Examples are file paths.
    """

    category = COMPONENTS
    kind = "component-structure"

    shape_chain = (
        ("React.FC", TYPED_COMPONENT),
        ("function-declaration", FUNCTION_COMPONENT),
        ("arrow-function", ARROW_COMPONENT),
    )
    props_chain = (
        ("interface-props", INTERFACE_PROPS),
        ("type-props", TYPE_PROPS),
    )
    export_chain = (
        ("default-export", DEFAULT_EXPORT),
        ("named-export", NAMED_EXPORT),
    )

    def applies_to(self, file_type: str) -> bool:
        return file_type == "component"

    def detect(self, content: str, path: str = "") -> list[PatternObservation]:
        observations = []
        for chain in (self.shape_chain, self.props_chain, self.export_chain):
            for pattern, signature in chain:
                if signature.search(content):
                    observations.append(self._observe(pattern, path or None))
                    break
        return observations


# Declaration shapes only; the components category also holds props and export records
COMPONENT_SHAPES = tuple(pattern for pattern, _ in ComponentDetector.shape_chain)


# --- Hooks ---

BUILT_IN_HOOKS = (
    "useState", "useEffect", "useContext", "useReducer",
    "useCallback", "useMemo", "useRef", "useLayoutEffect",
)
HOOK_TOKEN = re.compile(r"\buse[A-Z][a-zA-Z]+")


class HookDetector(Detector):
    """Counts every hook occurrence; custom ``useX`` names are their own patterns."""

    category = HOOKS
    kind = "built-in-hook"

    def detect(self, content: str, path: str = "") -> list[PatternObservation]:
        observations = []
        for match in HOOK_TOKEN.finditer(content):
            name = match.group(0)
            if name in BUILT_IN_HOOKS:
                observations.append(
                    self._observe(name, _line_at(content, match.start()))
                )
            else:
                observations.append(self._observe(name, name, kind="custom-hook"))
        return observations


# --- State management ---


class StateDetector(PresenceDetector):
    category = STATE_MANAGEMENT
    kind = "state-management"

    signatures = {
        "local-state": re.compile(r"\buseState\b"),
        "reducer": re.compile(r"\buseReducer\b"),
        "context": re.compile(r"\b(useContext|createContext)\b"),
        "redux": re.compile(r"\b(useSelector|useDispatch)\b"),
        "zustand": re.compile(r"\bzustand\b[\s\S]*\buseStore\b|\buseStore\b[\s\S]*\bzustand\b"),
        "recoil": re.compile(r"\buseRecoilState\b"),
    }


# --- Error handling ---


class ErrorDetector(PresenceDetector):
    category = ERROR_HANDLING
    kind = "error-handling"

    signatures = {
        "try-catch": re.compile(r"\btry\s*\{[\s\S]*?\bcatch\b"),
        "promise-catch": re.compile(r"\.\s*catch\s*\("),
        "error-boundary": re.compile(r"\b(componentDidCatch|ErrorBoundary)\b"),
        "loading-state": re.compile(r"isLoading|loading"),
        "error-state": re.compile(r"error(?=[\s\S]*\breturn\b)|\breturn\b(?=[\s\S]*error)"),
    }

    descriptions = {
        "try-catch": "try-catch blocks",
        "promise-catch": ".catch() on promises",
        "error-boundary": "React Error Boundary",
        "loading-state": "Loading state handling",
        "error-state": "Error state handling",
    }

    def _example(self, pattern: str, content: str, match: re.Match[str]) -> str | None:
        return self.descriptions[pattern]


# --- Styling ---


class StyleDetector(PresenceDetector):
    category = STYLING
    kind = "styling"

    signatures = {
        "css-modules": re.compile(r"\bstyles\.|\.module\.css"),
        "styled-components": re.compile(r"\bstyled(\.|\()"),
        "tailwind": re.compile(
            r"className\s*=\s*[\"'][^\"']*\b(flex|grid|p-|m-|bg-|text-)"
        ),
        "inline-styles": re.compile(r"style=\{"),
        "emotion": re.compile(r"@emotion|\bcss`"),
    }


# --- File naming ---

NAMING_RULES = (
    ("PascalCase", re.compile(r"^[A-Z][a-zA-Z0-9]*$")),
    ("camelCase", re.compile(r"^[a-z][a-z0-9]*[A-Z][a-zA-Z0-9]*$")),
    ("kebab-case", re.compile(r"^[a-z0-9]+(-[a-z0-9]+)+$")),
    ("snake_case", re.compile(r"^[a-z0-9]+(_[a-z0-9]+)+$")),
)


class NamingDetector(Detector):
    """Classifies the file's base name (without any extensions)."""

    category = NAMING
    kind = "naming"

    def detect(self, content: str, path: str = "") -> list[PatternObservation]:
        if not path:
            return []
        name = PurePath(path).name
        stem = name.split(".", 1)[0]
        for pattern, rule in NAMING_RULES:
            if rule.match(stem):
                return [self._observe(pattern, name)]
        return []


DEFAULT_DETECTORS: tuple[Detector, ...] = (
    ImportDetector(),
    ComponentDetector(),
    HookDetector(),
    StateDetector(),
    ErrorDetector(),
    StyleDetector(),
    NamingDetector(),
)


def detectors_for(file_type: str, detectors: tuple[Detector, ...] = DEFAULT_DETECTORS) -> list[Detector]:
    """Detectors active for ``file_type``."""
    return [d for d in detectors if d.applies_to(file_type)]
