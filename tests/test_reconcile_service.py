"""
Tests for toggling records and assigning gaps to a task.
"""

import pytest

from app.domain.errors import InvalidSelectionError
from app.services.reconcile_service import ReconcileService


@pytest.fixture
def reconciler(graph):
    return ReconcileService(graph)


def first_gap(graph):
    return next(graph.gaps())


class TestToggleDisabled:

    def test_toggle_flips_flag(self, graph, reconciler):
        record = graph.records[0]
        assert not record.disabled
        reconciler.toggle_disabled(record.id)
        assert record.disabled

    def test_toggle_twice_restores_state(self, graph, reconciler):
        before = [r.model_dump() for r in graph.records]
        gap = first_gap(graph)
        reconciler.toggle_disabled(gap.id)
        reconciler.toggle_disabled(gap.id)
        assert [r.model_dump() for r in graph.records] == before

    def test_toggle_changes_nothing_else(self, graph, reconciler):
        gap = first_gap(graph)
        order = [r.id for r in graph.records]
        reconciler.toggle_disabled(gap.id)
        assert gap.task_id is None
        assert [r.id for r in graph.records] == order

    def test_unknown_record(self, reconciler):
        with pytest.raises(InvalidSelectionError):
            reconciler.toggle_disabled(9999)


class TestAssignGaps:

    def test_enabled_gaps_become_task_records(self, graph, reconciler):
        gap = first_gap(graph)
        reconciler.toggle_disabled(gap.id)

        assigned = reconciler.assign_gaps_to_task("t-admin")

        assert assigned == [gap]
        assert gap.task_id == "t-admin"
        assert not gap.is_gap
        assert graph.tasks["t-admin"].record_ids[-1] == gap.id
        assert gap in graph.records_of(graph.tasks["t-admin"])

    def test_disabled_gaps_are_untouched(self, graph, reconciler):
        assigned = reconciler.assign_gaps_to_task("t-admin")
        assert assigned == []
        assert len(list(graph.gaps())) == 2
        assert len(graph.tasks["t-admin"].record_ids) == 1

    def test_only_enabled_gaps_move(self, graph, reconciler):
        gaps = list(graph.gaps())
        reconciler.toggle_disabled(gaps[1].id)
        reconciler.assign_gaps_to_task("t-dev")
        assert gaps[0].is_gap and gaps[0].disabled
        assert gaps[1].task_id == "t-dev"

    def test_assignment_is_permanent(self, graph, reconciler):
        gap = first_gap(graph)
        reconciler.toggle_disabled(gap.id)
        reconciler.assign_gaps_to_task("t-admin")
        assert reconciler.assign_gaps_to_task("t-dev") == []
        assert gap.task_id == "t-admin"

    def test_record_list_stays_sorted(self, graph, reconciler):
        for gap in list(graph.gaps()):
            reconciler.toggle_disabled(gap.id)
        reconciler.assign_gaps_to_task("t-meet")
        starts = [r.start for r in graph.records]
        assert starts == sorted(starts)

    @pytest.mark.parametrize("task_id", [None, "", "t-missing", "g-work"])
    def test_invalid_destination(self, graph, reconciler, task_id):
        gap = first_gap(graph)
        reconciler.toggle_disabled(gap.id)
        with pytest.raises(InvalidSelectionError):
            reconciler.assign_gaps_to_task(task_id)
        assert gap.is_gap
