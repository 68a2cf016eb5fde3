"""Tests for mutation plans."""

from __future__ import annotations

from s3dirfs._plan import Action, MutationPlan, StepStatus


def _plan() -> MutationPlan:
    plan = MutationPlan("rename", "/src", "/dst")
    plan.add(Action.COPY, "src/a", dest_key="dst/a")
    plan.add(Action.DELETE, "src/a")
    plan.add(Action.COPY, "src/b", dest_key="dst/b")
    return plan


class TestMutationPlan:
    def test_add_preserves_order(self) -> None:
        plan = _plan()
        assert [s.action for s in plan.steps] == [Action.COPY, Action.DELETE, Action.COPY]
        assert len(plan) == 3

    def test_new_steps_pending(self) -> None:
        plan = _plan()
        assert len(plan.pending) == 3
        assert plan.completed == []
        assert plan.is_complete is False

    def test_progress(self) -> None:
        plan = _plan()
        plan.steps[0].status = StepStatus.DONE
        plan.steps[1].status = StepStatus.FAILED
        assert plan.completed == [plan.steps[0]]
        assert plan.failed == [plan.steps[1]]
        assert plan.pending == [plan.steps[2]]

    def test_complete(self) -> None:
        plan = _plan()
        for step in plan.steps:
            step.status = StepStatus.DONE
        assert plan.is_complete is True

    def test_empty_plan_is_complete(self) -> None:
        assert MutationPlan("delete", "/nothing").is_complete is True


class TestPlanStepStr:
    def test_copy(self) -> None:
        assert str(_plan().steps[0]) == "copy 'src/a' -> 'dst/a'"

    def test_delete(self) -> None:
        assert str(_plan().steps[1]) == "delete 'src/a'"

    def test_batch(self) -> None:
        plan = MutationPlan("delete", "/d")
        step = plan.add(Action.DELETE_BATCH, "d", keys=("d/a", "d/b"))
        assert str(step) == "delete_batch 2 key(s) under 'd'"
