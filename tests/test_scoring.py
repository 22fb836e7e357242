"""Tests for section scoring."""

import pytest

from shipready.errors import ScoringError
from shipready.launch.models import ChecklistSection, CheckStatus
from shipready.launch.scoring import (
    STATUS_POINTS,
    build_section,
    calculate_section_score,
    round_half_up,
)


class TestCalculateSectionScore:
    def test_empty_section_scores_100(self):
        assert calculate_section_score([]) == 100

    def test_all_pass_scores_100(self, make_item):
        items = [make_item(CheckStatus.PASS) for _ in range(4)]
        assert calculate_section_score(items) == 100

    def test_all_fail_scores_0(self, make_item):
        items = [make_item(CheckStatus.FAIL) for _ in range(3)]
        assert calculate_section_score(items) == 0

    def test_mixed_statuses_round_to_nearest(self, make_item):
        items = [
            make_item(CheckStatus.PASS),
            make_item(CheckStatus.WARNING),
            make_item(CheckStatus.SKIP),
            make_item(CheckStatus.FAIL),
        ]
        # (100 + 50 + 75 + 0) / 4 = 56.25
        assert calculate_section_score(items) == 56

    def test_skip_scores_above_warning(self, make_item):
        assert calculate_section_score([make_item(CheckStatus.SKIP)]) == 75
        assert calculate_section_score([make_item(CheckStatus.WARNING)]) == 50

    def test_half_rounds_up(self, make_item):
        # (100 + 75) / 2 = 87.5
        items = [make_item(CheckStatus.PASS), make_item(CheckStatus.SKIP)]
        assert calculate_section_score(items) == 88

    def test_accepts_plain_string_status(self, make_item):
        item = make_item("warning")
        assert calculate_section_score([item]) == 50

    def test_custom_points(self, make_item):
        points = dict(STATUS_POINTS)
        points[CheckStatus.SKIP] = 100
        assert calculate_section_score([make_item(CheckStatus.SKIP)], points) == 100


class TestValidatePoints:
    def test_missing_status_rejected(self, make_item):
        points = {CheckStatus.PASS: 100, CheckStatus.FAIL: 0}
        with pytest.raises(ScoringError):
            calculate_section_score([make_item()], points)

    @pytest.mark.parametrize("bad", [-1, 101, float("nan"), "100", True])
    def test_out_of_range_rejected(self, make_item, bad):
        points = dict(STATUS_POINTS)
        points[CheckStatus.WARNING] = bad
        with pytest.raises(ScoringError):
            calculate_section_score([make_item()], points)

    def test_scoring_error_is_value_error(self):
        assert issubclass(ScoringError, ValueError)


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        "value, expected",
        [(56.25, 56), (56.5, 57), (87.5, 88), (0.0, 0), (99.4999, 99)],
    )
    def test_rounding(self, value, expected):
        assert round_half_up(value) == expected


class TestBuildSection:
    def test_score_derived_from_items(self, make_item):
        section = build_section("SEO", [make_item(CheckStatus.PASS), make_item(CheckStatus.FAIL)])
        assert section.name == "SEO"
        assert section.score == 50
        assert section.required is True

    def test_empty_section(self):
        section = build_section("Nothing", [], required=False)
        assert section.score == 100
        assert section.items == []
        assert section.required is False

    def test_directly_built_section_scores_its_items(self, make_item):
        section = ChecklistSection(name="Handmade", items=[make_item(CheckStatus.FAIL)])
        assert section.score == 0

    def test_stale_score_in_json_is_recomputed(self):
        data = (
            '{"name": "SEO", "score": 100, "required": true, "items": ['
            '{"id": "robots", "name": "robots.txt", "status": "fail", "required": true}]}'
        )

        section = ChecklistSection.model_validate_json(data)

        assert section.score == 0
        assert '"score":0' in section.to_json(indent=None)
