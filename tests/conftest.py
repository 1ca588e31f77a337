"""
Shared fixtures for the PixelMedic test suite.

Provides:
- Issue / result payload builders in the provider's wire format
- A fake vision provider that records requests instead of calling out
- Client and session wiring around the fake provider
"""

import json

import pytest

from pixelmedic.client import AnalysisClient
from pixelmedic.credentials import CredentialStore
from pixelmedic.errors import TransportFailure
from pixelmedic.models import AnalysisResult
from pixelmedic.session import CritiqueSession

from tests.fakes import FakeProvider


@pytest.fixture
def issue_payload():
    """Build one issue in wire format, overriding any field"""

    def _build(issue_id: str = "issue-1", severity: str = "warning", **overrides) -> dict:
        payload = {
            "id": issue_id,
            "type": "accessibility",
            "severity": severity,
            "title": f"Problem {issue_id}",
            "description": "Button text has low contrast against its background",
            "whyItMatters": "Low-vision users cannot read the label",
            "location": {"x": 10, "y": 20, "width": 30, "height": 15},
            "fix": {
                "html": "<button class=\"btn\">Save</button>",
                "css": ".btn { color: #111; }",
            },
        }
        payload.update(overrides)
        return payload

    return _build


@pytest.fixture
def result_payload(issue_payload):
    """Build a full analysis result in wire format from (id, severity) pairs"""

    def _build(*issues: tuple, summary: str = "Mostly solid layout", score: int = 72) -> dict:
        return {
            "issues": [issue_payload(issue_id, severity) for issue_id, severity in issues],
            "summary": summary,
            "overallScore": score,
        }

    return _build


@pytest.fixture
def make_result(result_payload):
    """Build a validated AnalysisResult from (id, severity) pairs"""

    def _build(*issues: tuple, **kwargs) -> AnalysisResult:
        return AnalysisResult.model_validate(result_payload(*issues, **kwargs))

    return _build


@pytest.fixture
def valid_reply(result_payload) -> str:
    return json.dumps(result_payload(("issue-1", "critical"), ("issue-2", "warning")))


@pytest.fixture
def fake_provider(valid_reply) -> FakeProvider:
    return FakeProvider(reply=valid_reply)


@pytest.fixture
def credentials() -> CredentialStore:
    return CredentialStore("test-key")


@pytest.fixture
def client(credentials, fake_provider) -> AnalysisClient:
    built_with = []

    def factory(key: str) -> FakeProvider:
        built_with.append(key)
        return fake_provider

    client = AnalysisClient(credentials, factory)
    client.built_with = built_with
    return client


@pytest.fixture
def session(client) -> CritiqueSession:
    return CritiqueSession(client)


@pytest.fixture
def failing_provider() -> FakeProvider:
    return FakeProvider(error=TransportFailure("503 Service Unavailable"))
