"""Tests for the readiness evaluator."""

import pytest

from shipready.errors import ScoringError
from shipready.launch.checks.base import check_provider
from shipready.launch.evaluator import (
    ReadinessEvaluator,
    get_quick_status,
    provider_label,
    run_launch_checklist,
)
from shipready.launch.models import ChecklistSection, CheckStatus
from shipready.launch.scoring import build_section


@pytest.fixture
def evaluator(fixed_now):
    return ReadinessEvaluator(clock=lambda: fixed_now)


class TestEvaluate:
    def test_no_sections(self, evaluator):
        checklist = evaluator.evaluate([])
        assert checklist.overall_score == 100
        assert checklist.ready_to_launch is True
        assert checklist.critical_issues == []

    def test_overall_is_unweighted_mean(self, evaluator, make_item):
        small = build_section("Small", [make_item(CheckStatus.FAIL)])
        large = build_section("Large", [make_item(CheckStatus.PASS) for _ in range(20)])

        checklist = evaluator.evaluate([small, large])

        assert checklist.overall_score == 50

    def test_required_failure_blocks_launch(self, evaluator, make_item):
        items = [make_item(CheckStatus.PASS) for _ in range(9)]
        items.append(make_item(CheckStatus.FAIL, required=True, id="favicon"))
        checklist = evaluator.evaluate([build_section("Assets", items)])

        assert checklist.overall_score == 90
        assert checklist.ready_to_launch is False
        assert [i.id for i in checklist.critical_issues] == ["favicon"]

    def test_low_score_blocks_launch_without_critical_issues(self, evaluator, make_item):
        items = [make_item(CheckStatus.WARNING) for _ in range(3)]
        checklist = evaluator.evaluate([build_section("Perf", items)])

        assert checklist.critical_issues == []
        assert checklist.overall_score == 50
        assert checklist.ready_to_launch is False

    def test_threshold_is_inclusive(self, make_item):
        # (100 + 50 + 75 + 50 + 75) / 5 = 70
        items = [
            make_item(CheckStatus.PASS),
            make_item(CheckStatus.WARNING),
            make_item(CheckStatus.SKIP),
            make_item(CheckStatus.WARNING),
            make_item(CheckStatus.SKIP),
        ]
        checklist = ReadinessEvaluator().evaluate([build_section("S", items)])
        assert checklist.overall_score == 70
        assert checklist.ready_to_launch is True

    def test_optional_failure_is_not_critical(self, evaluator, make_item):
        items = [make_item(CheckStatus.PASS) for _ in range(9)]
        items.append(make_item(CheckStatus.FAIL, required=False))
        checklist = evaluator.evaluate([build_section("S", items)])

        assert checklist.critical_issues == []
        assert checklist.warnings == []
        assert checklist.ready_to_launch is True

    def test_issue_order_follows_sections_then_items(self, evaluator, make_item):
        first = build_section("First", [
            make_item(CheckStatus.WARNING, id="w1"),
            make_item(CheckStatus.FAIL, required=True, id="c1"),
        ])
        second = build_section("Second", [
            make_item(CheckStatus.FAIL, required=True, id="c2"),
            make_item(CheckStatus.WARNING, id="w2"),
        ])

        checklist = evaluator.evaluate([first, second])

        assert [i.id for i in checklist.critical_issues] == ["c1", "c2"]
        assert [i.id for i in checklist.warnings] == ["w1", "w2"]

    def test_uses_clock_for_timestamp(self, evaluator, fixed_now):
        assert evaluator.evaluate([]).timestamp == fixed_now

    def test_evaluation_is_idempotent_apart_from_timestamp(self, make_item):
        sections = [
            build_section("A", [make_item(CheckStatus.PASS, id="a"), make_item(CheckStatus.SKIP, id="b")]),
            build_section("B", [make_item(CheckStatus.WARNING, id="c", message="slow")]),
        ]
        evaluator = ReadinessEvaluator()

        first = evaluator.evaluate(sections).model_dump(mode="json", by_alias=True)
        second = evaluator.evaluate(sections).model_dump(mode="json", by_alias=True)
        first.pop("timestamp")
        second.pop("timestamp")

        assert first == second

    @pytest.mark.parametrize("threshold", [-1, 101, 70.5, True])
    def test_invalid_threshold_rejected(self, threshold):
        with pytest.raises(ScoringError):
            ReadinessEvaluator(ready_threshold=threshold)


class TestRunProviders:
    @pytest.mark.asyncio
    async def test_provider_exception_becomes_failed_item(self, tmp_path, evaluator, make_item):
        @check_provider("Broken Stuff")
        async def broken(project_root):
            raise RuntimeError("disk on fire")

        async def fine(project_root):
            return build_section("Fine", [make_item(CheckStatus.PASS)])

        checklist = await evaluator.run(tmp_path, [broken, fine])

        assert [s.name for s in checklist.sections] == ["Broken Stuff", "Fine"]
        error_item = checklist.sections[0].items[0]
        assert error_item.id == "broken-stuff-error"
        assert error_item.status == CheckStatus.FAIL
        assert error_item.required is False
        assert error_item.message == "disk on fire"
        assert checklist.sections[0].score == 0
        assert checklist.critical_issues == []

    @pytest.mark.asyncio
    async def test_hand_built_section_cannot_claim_full_score(self, tmp_path, evaluator, make_item):
        async def handmade(project_root):
            return ChecklistSection(name="Handmade", items=[make_item(CheckStatus.FAIL)])

        checklist = await evaluator.run(tmp_path, [handmade])

        assert checklist.sections[0].score == 0
        assert checklist.overall_score == 0
        assert checklist.ready_to_launch is False

    @pytest.mark.asyncio
    async def test_malformed_return_becomes_failed_item(self, tmp_path, evaluator):
        async def check_cache_headers(project_root):
            return {"status": "pass"}

        sections = await evaluator.run_providers(tmp_path, [check_cache_headers])

        assert len(sections) == 1
        assert isinstance(sections[0], ChecklistSection)
        assert sections[0].name == "Cache Headers"
        assert "dict" in sections[0].items[0].message

    @pytest.mark.asyncio
    async def test_providers_see_project_root(self, tmp_path, evaluator):
        seen = []

        async def record(project_root):
            seen.append(project_root)
            return build_section("Record", [])

        await evaluator.run_providers(str(tmp_path), [record])

        assert seen == [tmp_path]


class TestProviderLabel:
    def test_uses_section_name(self):
        @check_provider("SEO Optimization")
        async def check_seo(project_root):
            pass

        assert provider_label(check_seo) == "SEO Optimization"

    def test_falls_back_to_function_name(self):
        async def check_legal_pages(project_root):
            pass

        assert provider_label(check_legal_pages) == "Legal Pages"


class TestRunLaunchChecklist:
    @pytest.mark.asyncio
    async def test_empty_project_is_not_ready(self, empty_project):
        checklist = await run_launch_checklist(empty_project)

        assert checklist.ready_to_launch is False
        critical = {i.id for i in checklist.critical_issues}
        assert {"favicon", "og-images", "sitemap", "robots"} <= critical

    @pytest.mark.asyncio
    async def test_complete_project_is_ready(self, ready_project):
        checklist = await run_launch_checklist(ready_project)

        assert checklist.critical_issues == []
        assert checklist.overall_score == 84
        assert checklist.ready_to_launch is True
        assert len(checklist.sections) == 8

    @pytest.mark.asyncio
    async def test_quick_status(self, empty_project):
        status = await get_quick_status(empty_project)

        assert status["ready"] is False
        assert 0 <= status["score"] <= 100
        assert "Favicon generated" in status["missing"]
