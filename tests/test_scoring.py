"""Tests for aggregation and confidence scoring."""

import pytest

from pattern_scout.detectors import PatternObservation
from pattern_scout.scoring import (
    CUSTOM_HOOK_CONFIDENCE,
    MAX_EXAMPLES,
    PatternRecord,
    Scoring,
    CATEGORY_SCORING,
    aggregate,
    score,
)


def obs(category, pattern, example=None, kind="test"):
    return PatternObservation(category=category, pattern=pattern, kind=kind, example=example)


class TestAggregate:
    def test_counts_across_files(self):
        tallies = aggregate([
            [obs("imports", "named"), obs("imports", "default")],
            [obs("imports", "named")],
        ])
        assert tallies["imports"].counts == {"named": 2, "default": 1}
        assert tallies["imports"].total == 3

    def test_every_category_present(self):
        tallies = aggregate([])
        assert set(tallies) == set(CATEGORY_SCORING)
        assert all(t.total == 0 for t in tallies.values())

    def test_examples_bounded_and_deduplicated(self):
        tallies = aggregate([
            [obs("imports", "named", "a"), obs("imports", "named", "a")],
            [obs("imports", "named", "b"), obs("imports", "named", None)],
            [obs("imports", "named", "c"), obs("imports", "named", "d")],
        ])
        assert tallies["imports"].examples["named"] == ["a", "b", "c"]
        assert len(tallies["imports"].examples["named"]) == MAX_EXAMPLES

    def test_first_observed_order(self):
        tallies = aggregate([[obs("styling", "tailwind")], [obs("styling", "css-modules")]])
        assert list(tallies["styling"].counts) == ["tailwind", "css-modules"]

    def test_does_not_share_state_between_calls(self):
        first = aggregate([[obs("imports", "named")]])
        second = aggregate([[obs("imports", "named")]])
        assert first["imports"].counts == second["imports"].counts == {"named": 1}


class TestScore:
    def test_occurrence_share(self):
        per_file = [
            [obs("imports", "named")] * 6,
            [obs("imports", "default")] * 3,
            [obs("imports", "namespace")],
        ]
        records = score(aggregate(per_file), files_sampled=3)["imports"]
        assert [(r.pattern, r.frequency) for r in records] == [
            ("named", 6), ("default", 3), ("namespace", 1),
        ]
        assert [r.confidence for r in records] == pytest.approx([0.6, 0.3, 0.1])

    def test_file_share(self):
        per_file = [[obs("styling", "tailwind")], [obs("styling", "tailwind")], [], []]
        record = score(aggregate(per_file), files_sampled=4)["styling"][0]
        assert record.frequency == 2
        assert record.confidence == pytest.approx(0.5)

    def test_strategy_table(self):
        assert CATEGORY_SCORING["imports"] is Scoring.OCCURRENCE_SHARE
        assert CATEGORY_SCORING["hooks"] is Scoring.OCCURRENCE_SHARE
        assert CATEGORY_SCORING["components"] is Scoring.FILE_SHARE
        assert CATEGORY_SCORING["error_handling"] is Scoring.FILE_SHARE

    def test_custom_hook_fixed_confidence(self):
        per_file = [[
            obs("hooks", "useState", kind="built-in-hook"),
            obs("hooks", "useState", kind="built-in-hook"),
            obs("hooks", "useAuth", kind="custom-hook"),
        ]]
        records = {r.pattern: r for r in score(aggregate(per_file), files_sampled=1)["hooks"]}
        assert records["useState"].confidence == pytest.approx(2 / 3)
        assert records["useAuth"].confidence == CUSTOM_HOOK_CONFIDENCE
        assert records["useAuth"].frequency == 1

    def test_ties_keep_first_observed_order(self):
        per_file = [
            [obs("state_management", "context")],
            [obs("state_management", "local-state"), obs("state_management", "reducer")],
            [obs("state_management", "reducer")],
        ]
        records = score(aggregate(per_file), files_sampled=3)["state_management"]
        assert [r.pattern for r in records] == ["reducer", "context", "local-state"]

    def test_confidence_bounds_and_frequency(self):
        per_file = [[obs("components", "arrow-function")]] * 5
        records = score(aggregate(per_file), files_sampled=2)
        for category_records in records.values():
            for r in category_records:
                assert 0.0 <= r.confidence <= 1.0
                assert r.frequency >= 1

    def test_zero_files_sampled(self):
        records = score(aggregate([[obs("styling", "tailwind")]]), files_sampled=0)
        assert records["styling"][0].confidence == 0.0


class TestPatternRecord:
    def test_to_dict(self):
        record = PatternRecord(
            category="imports", pattern="named", kind="import-style",
            frequency=6, confidence=0.6, examples=("import { a } from 'b'",),
        )
        d = record.to_dict()
        assert d["pattern"] == "named"
        assert d["frequency"] == 6
        assert d["confidence"] == 0.6
        assert d["examples"] == ["import { a } from 'b'"]

    def test_immutable(self):
        record = PatternRecord(category="x", pattern="y", kind="z", frequency=1, confidence=1.0)
        with pytest.raises(AttributeError):
            record.frequency = 2
