"""
PixelMedic - Screenshot UI Critique

Sends a screenshot to a vision model and turns its reply into located,
categorized UI issues with code fixes and an overall score.

Supports multiple vision providers:
- Google Gemini (default)
- Anthropic Claude
- OpenAI GPT-4o
"""

from .client import AnalysisClient
from .credentials import CredentialStore
from .errors import AnalysisError, MalformedResult, TransportFailure, Unconfigured
from .models import AnalysisResult, Issue, IssueFix, IssueLocation
from .session import CritiqueSession
from .validator import parse_analysis
from .view_state import ViewStateStore

__version__ = "0.1.0"
__all__ = [
    "AnalysisClient",
    "AnalysisError",
    "AnalysisResult",
    "CredentialStore",
    "CritiqueSession",
    "Issue",
    "IssueFix",
    "IssueLocation",
    "MalformedResult",
    "TransportFailure",
    "Unconfigured",
    "ViewStateStore",
    "parse_analysis",
]
