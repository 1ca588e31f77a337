"""Unit tests for view state and its derived values."""

import pytest

from pixelmedic.view_state import ViewStateStore


@pytest.fixture
def view() -> ViewStateStore:
    return ViewStateStore()


@pytest.fixture
def mixed_result(make_result):
    """2 critical, 1 warning, 1 suggestion"""
    return make_result(("a", "critical"), ("b", "warning"), ("c", "suggestion"), ("d", "critical"))


class TestDerivedValues:
    def test_empty_without_result(self, view):
        assert view.filtered_issues == []
        assert view.critical_count == 0
        assert view.warning_count == 0
        assert view.selected_issue is None

    def test_filter_all_keeps_order(self, view, mixed_result):
        view.apply_result(mixed_result)
        assert [issue.id for issue in view.filtered_issues] == ["a", "b", "c", "d"]

    def test_filter_critical(self, view, mixed_result):
        view.apply_result(mixed_result)
        view.set_filter("critical")

        assert len(view.filtered_issues) == 2
        assert [issue.id for issue in view.filtered_issues] == ["a", "d"]
        assert view.critical_count == 2

    def test_counts_ignore_filter(self, view, mixed_result):
        view.apply_result(mixed_result)
        view.set_filter("warning")

        assert [issue.id for issue in view.filtered_issues] == ["b"]
        assert view.critical_count == 2
        assert view.warning_count == 1

    def test_recomputed_after_result_change(self, view, mixed_result, make_result):
        view.apply_result(mixed_result)
        view.apply_result(make_result(("z", "warning")))

        assert view.critical_count == 0
        assert view.warning_count == 1
        assert [issue.id for issue in view.filtered_issues] == ["z"]


class TestSelectImage:
    def test_clears_everything(self, view, mixed_result):
        view.select_image("data:image/png;base64,AAA")
        view.apply_result(mixed_result)
        view.set_filter("warning")
        view.toggle_selection("b")

        view.select_image("data:image/png;base64,BBB")

        assert view.image == "data:image/png;base64,BBB"
        assert view.result is None
        assert view.selected_issue_id is None
        assert view.filter == "all"

    def test_from_fresh_state(self, view):
        view.select_image("img")
        assert view.result is None
        assert view.selected_issue_id is None
        assert view.filter == "all"

    def test_bumps_generation(self, view):
        before = view.generation
        view.select_image("img")
        assert view.generation == before + 1


class TestApplyResult:
    def test_selects_first_critical(self, view, make_result):
        view.apply_result(make_result(("i1", "warning"), ("i2", "critical"), ("i3", "critical")))
        assert view.selected_issue_id == "i2"
        assert view.selected_issue.id == "i2"

    def test_no_critical_leaves_selection_unset(self, view, make_result):
        view.apply_result(make_result(("i1", "warning"), ("i2", "suggestion")))
        assert view.selected_issue_id is None

    def test_no_critical_leaves_selection_unchanged(self, view, make_result):
        view.apply_result(make_result(("i1", "warning"), ("i2", "suggestion")))
        view.toggle_selection("i2")

        view.apply_result(make_result(("i1", "warning"), ("i2", "suggestion"), score=90))

        assert view.selected_issue_id == "i2"

    def test_stale_generation_is_discarded(self, view, mixed_result):
        view.select_image("first")
        started_under = view.generation
        view.select_image("second")

        applied = view.apply_result(mixed_result, generation=started_under)

        assert applied is False
        assert view.result is None
        assert view.selected_issue_id is None

    def test_current_generation_is_applied(self, view, mixed_result):
        view.select_image("first")
        assert view.apply_result(mixed_result, generation=view.generation) is True
        assert view.result is mixed_result


class TestToggleSelection:
    def test_toggle_twice_restores(self, view, mixed_result):
        view.apply_result(mixed_result)
        original = view.selected_issue_id

        view.toggle_selection("b")
        view.toggle_selection("b")

        assert view.selected_issue_id == original

    def test_toggle_selected_clears(self, view, mixed_result):
        view.apply_result(mixed_result)
        assert view.selected_issue_id == "a"

        view.toggle_selection("a")
        assert view.selected_issue_id is None

    def test_single_selection(self, view, mixed_result):
        view.apply_result(mixed_result)
        view.toggle_selection("c")
        assert view.selected_issue_id == "c"

    def test_unknown_id_is_ignored(self, view, mixed_result):
        view.apply_result(mixed_result)
        view.toggle_selection("nope")
        assert view.selected_issue_id == "a"

    def test_without_result_is_ignored(self, view):
        view.toggle_selection("a")
        assert view.selected_issue_id is None


class TestSetFilter:
    def test_keeps_selection_when_filtered_out(self, view, mixed_result):
        view.apply_result(mixed_result)
        view.set_filter("warning")

        assert view.selected_issue_id == "a"
        assert view.selected_issue not in view.filtered_issues

    def test_rejects_unknown_filter(self, view):
        with pytest.raises(ValueError, match="Unknown filter"):
            view.set_filter("suggestion")
        assert view.filter == "all"


class TestReset:
    def test_clears_all_state(self, view, mixed_result):
        view.select_image("img")
        view.apply_result(mixed_result)
        view.set_filter("critical")

        view.reset()

        assert view.image is None
        assert view.result is None
        assert view.selected_issue_id is None
        assert view.filter == "all"
