"""
Critique Session Orchestrator

Ties the analysis client to the view state the way an application shell
does: the user picks an image, triggers an analysis, and browses the
issues of the result.
"""

import logging
from typing import Optional

from .client import AnalysisClient
from .errors import AnalysisError
from .models import AnalysisResult, SeverityFilter
from .view_state import ViewStateStore


logger = logging.getLogger(__name__)


class CritiqueSession:
    """
    One user's critique workflow.

    Failed analyses are not re-raised here: the message is already on
    ``client.error`` for display, and the user retries by calling
    :meth:`analyze_current` again.

    Example:
        session = CritiqueSession(client)
        session.select_image(load_image(Path("screen.png")))
        result = await session.analyze_current()
        for issue in session.view.filtered_issues:
            print(issue)
    """

    def __init__(self, client: AnalysisClient, view: Optional[ViewStateStore] = None):
        self.client = client
        self.view = view or ViewStateStore()

    def select_image(self, image: str) -> None:
        self.view.select_image(image)

    def reset(self) -> None:
        self.view.reset()

    def toggle_issue(self, issue_id: str) -> None:
        self.view.toggle_selection(issue_id)

    def set_filter(self, severity_filter: SeverityFilter) -> None:
        self.view.set_filter(severity_filter)

    def dismiss_error(self) -> None:
        self.client.dismiss_error()

    async def analyze_current(self) -> Optional[AnalysisResult]:
        """
        Analyze the currently loaded image and show the result.

        Returns:
            The applied result, or None if there is no image, the analysis
            failed, or the image changed while the request was running
        """
        image = self.view.image
        if image is None:
            return None

        generation = self.view.generation
        try:
            result = await self.client.analyze(image)
        except AnalysisError:
            return None

        if not self.view.apply_result(result, generation=generation):
            logger.info("Discarding analysis result for a replaced image")
            return None
        return result
