"""Tests for the workflow orchestrator."""

import io
import json
from datetime import timedelta

import pytest
from rich.console import Console

from shipready.workflow.models import (
    DeploymentResult,
    StepStatus,
    WorkflowConfig,
    WorkflowStatus,
)
from shipready.workflow.orchestrator import WorkflowOrchestrator, quick_complete
from shipready.workflow.runner import StepDefinition
from shipready.workflow.state import WorkflowStateStore


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=120, color_system=None)


def counting_steps(calls, fail=()):
    def make(step_id):
        async def run(project_root, config):
            calls.append(step_id)
            if step_id in fail:
                raise RuntimeError(f"{step_id} broke")
            return {"step": step_id}
        return run

    return [StepDefinition(id=s, name=s.title(), run=make(s)) for s in ("one", "two", "three")]


class TestRun:
    @pytest.mark.asyncio
    async def test_persists_state_and_history(self, tmp_path, console):
        calls = []
        orchestrator = WorkflowOrchestrator(tmp_path, console=console, steps=counting_steps(calls))

        result = await orchestrator.run()

        assert calls == ["one", "two", "three"]
        assert result.overall_success is True

        state = orchestrator.store.load()
        assert state.status == WorkflowStatus.COMPLETED
        assert state.current_step == 3
        assert [s.id for s in state.steps] == ["one", "two", "three"]
        assert len(orchestrator.store.load_history()) == 1

    @pytest.mark.asyncio
    async def test_failed_step_still_produces_summary(self, tmp_path, console):
        calls = []
        orchestrator = WorkflowOrchestrator(tmp_path, console=console, steps=counting_steps(calls, fail={"two"}))

        result = await orchestrator.run()

        assert calls == ["one", "two", "three"]
        assert result.overall_success is False
        assert orchestrator.store.load().status == WorkflowStatus.FAILED
        output = console.file.getvalue()
        assert "Workflow Summary" in output
        assert "two broke" in output

    @pytest.mark.asyncio
    async def test_state_is_saved_after_each_step(self, tmp_path, console):
        store = WorkflowStateStore(tmp_path)
        seen = []

        def make(step_id):
            async def run(project_root, config):
                state = store.load()
                seen.append((step_id, state.current_step))
            return run

        steps = [StepDefinition(id=s, name=s, run=make(s)) for s in ("a", "b", "c")]
        await WorkflowOrchestrator(tmp_path, console=console, store=store, steps=steps).run()

        assert seen == [("a", 0), ("b", 1), ("c", 2)]


class TestResume:
    @pytest.mark.asyncio
    async def test_resume_skips_finished_steps(self, tmp_path, console):
        calls = []
        store = WorkflowStateStore(tmp_path)
        steps = counting_steps(calls)

        # Simulate a run interrupted after the first step.
        state = store.create(3, WorkflowConfig(target_score=80))
        first = steps[0].new_step()
        first.mark_running(state.start_time)
        first.mark_finished(StepStatus.COMPLETED, state.start_time)
        store.update(state, first)
        store.save(state)

        orchestrator = WorkflowOrchestrator(tmp_path, console=console, store=store, steps=steps)
        result = await orchestrator.run(resume=True)

        assert calls == ["two", "three"]
        assert [s.id for s in result.steps] == ["one", "two", "three"]
        saved = store.load()
        assert saved.id == state.id
        assert saved.status == WorkflowStatus.COMPLETED
        assert saved.config.target_score == 80
        assert "Resuming workflow" in console.file.getvalue()

    @pytest.mark.asyncio
    async def test_resume_uses_saved_config(self, tmp_path, console):
        store = WorkflowStateStore(tmp_path)
        received = []

        async def run(project_root, config):
            received.append(config)

        state = store.create(1, WorkflowConfig(production=True))
        store.save(state)

        steps = [StepDefinition(id="only", name="Only", run=run)]
        await WorkflowOrchestrator(
            tmp_path, config=WorkflowConfig(), console=console, store=store, steps=steps,
        ).run(resume=True)

        assert received[0].production is True

    @pytest.mark.asyncio
    async def test_stale_state_starts_over(self, tmp_path, console, clock):
        calls = []
        store = WorkflowStateStore(tmp_path, clock=clock)
        steps = counting_steps(calls)

        state = store.create(3)
        first = steps[0].new_step()
        first.mark_finished(StepStatus.COMPLETED, state.start_time)
        store.update(state, first)
        store.save(state)
        clock.now += timedelta(hours=25)

        orchestrator = WorkflowOrchestrator(tmp_path, console=console, store=store, steps=steps)
        await orchestrator.run(resume=True)

        assert calls == ["one", "two", "three"]
        assert store.load().id != state.id

    @pytest.mark.asyncio
    async def test_finished_state_is_not_resumed(self, tmp_path, console):
        calls = []
        steps = counting_steps(calls)
        await WorkflowOrchestrator(tmp_path, console=console, steps=steps).run()
        calls.clear()

        await WorkflowOrchestrator(tmp_path, console=console, steps=steps).run(resume=True)

        assert calls == ["one", "two", "three"]

    @pytest.mark.asyncio
    async def test_resume_state_with_naive_timestamps(self, tmp_path, console, clock):
        calls = []
        store = WorkflowStateStore(tmp_path, clock=clock)
        state = store.create(3)
        data = json.loads(state.to_json())
        data["startTime"] = "2026-03-01T12:00:00"
        data["lastUpdate"] = "2026-03-01T12:00:00"
        store.state_dir.mkdir(parents=True)
        store.state_file.write_text(json.dumps(data), encoding="utf-8")

        orchestrator = WorkflowOrchestrator(tmp_path, console=console, store=store, steps=counting_steps(calls))
        await orchestrator.run(resume=True)

        assert calls == ["one", "two", "three"]
        assert store.load().id == state.id

    @pytest.mark.asyncio
    async def test_resume_without_state_runs_fresh(self, tmp_path, console):
        calls = []
        await WorkflowOrchestrator(tmp_path, console=console, steps=counting_steps(calls)).run(resume=True)

        assert calls == ["one", "two", "three"]


class TestBuiltInWorkflow:
    @pytest.mark.asyncio
    async def test_ready_project(self, ready_project, console):
        orchestrator = WorkflowOrchestrator(ready_project, WorkflowConfig(skip_deploy=False), console=console)

        result = await orchestrator.run()

        assert [s.id for s in result.steps] == [
            "assets", "seo", "performance", "launch-checklist", "deployment",
        ]
        assert result.overall_success is True
        assert result.summary.ready_to_launch is True
        assert result.summary.seo_score == 100
        assert result.summary.performance_score == 100
        assert result.summary.launch_score == result.launch_checklist.overall_score

        deployment = result.steps[-1]
        assert deployment.status == StepStatus.SKIPPED
        assert isinstance(deployment.result, DeploymentResult)

    @pytest.mark.asyncio
    async def test_deploy_not_run_when_not_ready(self, empty_project, console):
        orchestrator = WorkflowOrchestrator(empty_project, WorkflowConfig(skip_deploy=False), console=console)

        result = await orchestrator.run()

        deployment = result.steps[-1]
        assert deployment.id == "deployment"
        assert deployment.status == StepStatus.SKIPPED
        assert deployment.result is None
        assert result.summary.ready_to_launch is False

    @pytest.mark.asyncio
    async def test_skip_flags(self, empty_project, console):
        config = WorkflowConfig(skip_assets=True, skip_seo=True, skip_perf=True)

        result = await WorkflowOrchestrator(empty_project, config, console=console).run()

        assert [s.id for s in result.steps] == ["launch-checklist"]

    @pytest.mark.asyncio
    async def test_quick_complete(self, ready_project, console):
        assert await quick_complete(ready_project, console=console) is True

        history = WorkflowStateStore(ready_project).load_history()
        assert "deployment" not in [s.id for s in history[0].steps]
