"""Tests for candidate file discovery."""

import os

import pytest

from pattern_scout.files import DEFAULT_SUFFIXES, resolve_files, suffixes_for


@pytest.fixture
def sample_tree(tmp_path):
    """Create a small frontend tree with files that should and shouldn't match."""
    src = tmp_path / "src"
    (src / "components" / "forms").mkdir(parents=True)
    (src / "hooks").mkdir()
    (src / "components" / "Button.tsx").write_text("export default function Button() {}\n")
    (src / "components" / "Card.jsx").write_text("export default function Card() {}\n")
    (src / "components" / "forms" / "Input.tsx").write_text("export const Input = () => null\n")
    (src / "components" / "Button.test.tsx").write_text("test('renders', () => {})\n")
    (src / "hooks" / "useAuth.ts").write_text("export function useAuth() {}\n")
    (src / "hooks" / "useAuth.spec.ts").write_text("it('works', () => {})\n")
    (src / "styles.css").write_text("body {}\n")

    # Should be skipped
    nm = tmp_path / "node_modules" / "react"
    nm.mkdir(parents=True)
    (nm / "index.jsx").write_text("")
    hidden = tmp_path / ".storybook"
    hidden.mkdir()
    (hidden / "Preview.tsx").write_text("")
    (src / "components" / ".Draft.tsx").write_text("")
    dist = tmp_path / "dist"
    dist.mkdir()
    (dist / "Bundle.jsx").write_text("")

    return tmp_path


def _rel(root, paths):
    return [p.relative_to(root).as_posix() for p in paths]


class TestResolveFiles:
    def test_component_files(self, sample_tree):
        files = resolve_files(sample_tree, "component")
        assert _rel(sample_tree, files) == [
            "src/components/Button.test.tsx",
            "src/components/Button.tsx",
            "src/components/Card.jsx",
            "src/components/forms/Input.tsx",
        ]

    def test_skips_hidden_and_dependency_dirs(self, sample_tree):
        rel = _rel(sample_tree, resolve_files(sample_tree, "hook"))
        assert not any(p.startswith("node_modules") for p in rel)
        assert not any(p.startswith(".storybook") for p in rel)
        assert not any(p.startswith("dist") for p in rel)
        assert "src/components/.Draft.tsx" not in rel

    def test_test_files_match_compound_suffix(self, sample_tree):
        rel = _rel(sample_tree, resolve_files(sample_tree, "test"))
        assert rel == [
            "src/components/Button.test.tsx",
            "src/hooks/useAuth.spec.ts",
        ]

    def test_service_files(self, sample_tree):
        rel = _rel(sample_tree, resolve_files(sample_tree, "service"))
        assert rel == ["src/hooks/useAuth.spec.ts", "src/hooks/useAuth.ts"]

    def test_sorted_output(self, sample_tree):
        files = resolve_files(sample_tree, "hook")
        posix = [p.as_posix() for p in files]
        assert posix == sorted(posix)

    def test_no_matches(self, tmp_path):
        (tmp_path / "README.md").write_text("# nothing\n")
        assert resolve_files(tmp_path, "component") == []

    def test_missing_root(self, tmp_path):
        with pytest.raises(NotADirectoryError, match="Not a directory"):
            resolve_files(tmp_path / "missing", "component")

    @pytest.mark.skipif(
        not hasattr(os, "geteuid") or os.geteuid() == 0,
        reason="root can read any directory",
    )
    def test_unreadable_subdir_is_skipped(self, sample_tree):
        locked = sample_tree / "src" / "locked"
        locked.mkdir()
        (locked / "Secret.tsx").write_text("")
        locked.chmod(0)
        try:
            rel = _rel(sample_tree, resolve_files(sample_tree, "component"))
        finally:
            locked.chmod(0o755)
        assert "src/locked/Secret.tsx" not in rel
        assert "src/components/Button.tsx" in rel


class TestSuffixesFor:
    def test_known_type(self):
        assert suffixes_for("component") == (".tsx", ".jsx")

    def test_unknown_type_falls_back(self, caplog):
        assert suffixes_for("widget") == DEFAULT_SUFFIXES
        assert "Unknown file type" in caplog.text
