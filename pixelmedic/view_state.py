"""
View State

Holds what the user is looking at: the loaded image, the latest result,
the selected issue and the severity filter. Derived values (filtered
issues, severity counts) are computed from that state on every read, so
they can never disagree with it.
"""

from typing import Optional

from .models import SEVERITY_FILTERS, AnalysisResult, Issue, SeverityFilter


class ViewStateStore:
    """
    Single owner of the view state; mutate it only through these methods.

    ``generation`` increases whenever the image changes or the view is
    reset. A result computed for an older generation is refused by
    :meth:`apply_result`, so a slow analysis of a previous image cannot
    overwrite the current one.
    """

    def __init__(self):
        self.image: Optional[str] = None
        self.result: Optional[AnalysisResult] = None
        self.selected_issue_id: Optional[str] = None
        self.filter: SeverityFilter = "all"
        self.generation = 0

    @property
    def issues(self) -> list[Issue]:
        return list(self.result.issues) if self.result else []

    @property
    def filtered_issues(self) -> list[Issue]:
        """Issues matching the active filter, in result order"""
        if self.filter == "all":
            return self.issues
        return [issue for issue in self.issues if issue.severity == self.filter]

    @property
    def critical_count(self) -> int:
        return self.result.count("critical") if self.result else 0

    @property
    def warning_count(self) -> int:
        return self.result.count("warning") if self.result else 0

    @property
    def selected_issue(self) -> Optional[Issue]:
        for issue in self.issues:
            if issue.id == self.selected_issue_id:
                return issue
        return None

    def select_image(self, image: str) -> None:
        """Load a new image and drop everything derived from the old one"""
        self.image = image
        self._clear_analysis()

    def apply_result(self, result: AnalysisResult, generation: Optional[int] = None) -> bool:
        """
        Show a new analysis result.

        The first critical issue, if any, becomes the selection; otherwise
        the selection is left as it was.

        Args:
            result: Result to display
            generation: Generation the analysis was started under. When
                        given and no longer current, the result is stale
                        and discarded.

        Returns:
            True if the result was applied, False if it was discarded
        """
        if generation is not None and generation != self.generation:
            return False

        self.result = result
        first_critical = next(
            (issue for issue in result.issues if issue.severity == "critical"),
            None
        )
        if first_critical is not None:
            self.selected_issue_id = first_critical.id
        return True

    def toggle_selection(self, issue_id: str) -> None:
        """Select an issue, or deselect it if it is already selected"""
        if self.selected_issue_id == issue_id:
            self.selected_issue_id = None
        elif any(issue.id == issue_id for issue in self.issues):
            self.selected_issue_id = issue_id

    def set_filter(self, severity_filter: SeverityFilter) -> None:
        """Change the severity filter; the selection is left untouched"""
        if severity_filter not in SEVERITY_FILTERS:
            raise ValueError(
                f"Unknown filter: {severity_filter}. "
                f"Choose from: {', '.join(SEVERITY_FILTERS)}"
            )
        self.filter = severity_filter

    def reset(self) -> None:
        self.image = None
        self._clear_analysis()

    def _clear_analysis(self) -> None:
        self.result = None
        self.selected_issue_id = None
        self.filter = "all"
        self.generation += 1
