"""Tech stack detection from a package.json manifest."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .logging import logger

MANIFEST_NAME = "package.json"
DEPENDENCY_SECTIONS = ("dependencies", "devDependencies")

# Package name -> label. Order here is the order labels are reported in.
KNOWN_PACKAGES = {
    "react": "React",
    "typescript": "TypeScript",
    "tailwindcss": "TailwindCSS",
    "vite": "Vite",
    "next": "Next.js",
    "vue": "Vue.js",
    "svelte": "Svelte",
    "@sveltejs/kit": "SvelteKit",
    "@angular/core": "Angular",
    "nuxt": "Nuxt.js",
    "react-native": "React Native",
    "gatsby": "Gatsby",
    "remix": "Remix",
    "astro": "Astro",
    "express": "Express",
    "fastify": "Fastify",
    "koa": "Koa",
    "redux": "Redux",
    "@reduxjs/toolkit": "Redux Toolkit",
    "zustand": "Zustand",
    "recoil": "Recoil",
    "styled-components": "styled-components",
    "@emotion/react": "Emotion",
    "prisma": "Prisma",
    "drizzle-orm": "Drizzle ORM",
    "webpack": "Webpack",
    "jest": "Jest",
    "vitest": "Vitest",
    "@testing-library/react": "Testing Library",
    "playwright": "Playwright",
    "cypress": "Cypress",
}


@dataclass
class TechStackInfo:
    """Frameworks detected in a manifest, and the versions they were declared at."""

    detected: list[str] = field(default_factory=list)
    versions: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"detected": list(self.detected), "versions": dict(self.versions)}


def _read_dependencies(manifest: Path) -> dict[str, Any]:
    """Merge production and development dependency sections.

    Raises ValueError if the manifest or one of its sections is not a mapping.
    """
    pkg = json.loads(manifest.read_text(errors="replace"))
    if not isinstance(pkg, dict):
        raise ValueError("manifest root is not an object")

    deps: dict[str, Any] = {}
    for section in DEPENDENCY_SECTIONS:
        entries = pkg.get(section) or {}
        if not isinstance(entries, dict):
            raise ValueError(f"{section} is not an object")
        deps.update(entries)
    return deps


def detect_tech_stack(manifest: str | Path) -> TechStackInfo:
    """Detect known frameworks from a package.json.

    ``manifest`` may be the manifest file itself or the project directory
    containing it. A missing or malformed manifest gives an empty result.
    """
    path = Path(manifest)
    if path.is_dir():
        path = path / MANIFEST_NAME

    info = TechStackInfo()
    if not path.is_file():
        logger.debug("No manifest at %s", path)
        return info

    try:
        deps = _read_dependencies(path)
    except (OSError, ValueError) as e:
        # json.JSONDecodeError is a ValueError
        logger.warning("Failed to analyze %s: %s", path, e)
        return info

    for package, label in KNOWN_PACKAGES.items():
        if package in deps:
            if label not in info.detected:
                info.detected.append(label)
            info.versions[package] = str(deps[package])

    return info
