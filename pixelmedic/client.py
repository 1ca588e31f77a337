"""
Analysis Client

Owns the lifecycle of an analysis request: credential gate, payload
preparation, the provider call, response validation and the observable
state a UI reads while a request runs (analyzing flag, last error, last
result).
"""

import logging
from typing import Callable, Optional

from .credentials import CredentialStore
from .errors import AnalysisError, TransportFailure, Unconfigured
from .models import AnalysisResult
from .providers.base import ANALYSIS_PROMPT, VisionProvider
from .validator import parse_analysis


logger = logging.getLogger(__name__)

ProviderFactory = Callable[[str], VisionProvider]


def strip_data_uri(image: str) -> str:
    """
    Drop a leading ``<scheme>,`` prefix from an image payload.

    Only the part after the first comma is kept; payloads without a comma
    are already raw base64 and pass through unchanged.
    """
    if "," in image:
        return image.split(",", 1)[1]
    return image


class AnalysisClient:
    """
    Runs screenshot analyses against a vision provider.

    The provider is built per call from the credential held at that
    moment, so replacing the credential only affects later requests.
    Callers are expected to serialize calls on one client.

    Every call ends with exactly one of ``error`` set or ``last_result``
    updated, and ``is_analyzing`` is False once it settles, whatever
    the outcome.

    Example:
        store = CredentialStore()
        client = AnalysisClient(store, lambda key: get_provider("gemini", key))
        store.set_credential("AIza...")
        result = await client.analyze(image_data_uri)
    """

    def __init__(
        self,
        credentials: CredentialStore,
        provider_factory: ProviderFactory,
        prompt: str = ANALYSIS_PROMPT
    ):
        """
        Initialize analysis client.

        Args:
            credentials: Store holding the API key for the provider
            provider_factory: Builds a provider from an API key
            prompt: Instruction text sent with every image
        """
        self.credentials = credentials
        self.provider_factory = provider_factory
        self.prompt = prompt

        self.is_analyzing = False
        self.error: Optional[str] = None
        self.last_result: Optional[AnalysisResult] = None

        credentials.subscribe(self._on_credential_changed)

    @property
    def is_configured(self) -> bool:
        return self.credentials.is_configured()

    def dismiss_error(self) -> None:
        self.error = None

    async def analyze(self, image: str) -> AnalysisResult:
        """
        Analyze one screenshot.

        Args:
            image: Raw base64 PNG data or a data URI

        Returns:
            Validated AnalysisResult, also stored as ``last_result``

        Raises:
            Unconfigured: If no credential is set (no request is made)
            TransportFailure: If the provider call fails
            MalformedResult: If the reply is not a valid analysis result
        """
        if not self.credentials.is_configured():
            error = Unconfigured()
            self.error = str(error)
            logger.warning("Analysis refused: %s", error)
            raise error

        self.is_analyzing = True
        self.error = None

        try:
            provider = self.provider_factory(self.credentials.credential)
            logger.info("Starting analysis with %s (%s)", provider.name, provider.model)
            image_data = strip_data_uri(image)
            raw_text = await provider.generate(self.prompt, image_data)
            result = parse_analysis(raw_text)
        except AnalysisError as e:
            self.error = str(e)
            logger.warning("Analysis failed: %s", e)
            raise
        except Exception as e:
            self.error = str(e) or "Analysis failed"
            logger.exception("Analysis failed unexpectedly")
            raise TransportFailure(self.error) from e
        finally:
            self.is_analyzing = False

        self.last_result = result
        logger.info(
            "Analysis complete: %d issues, score %d",
            len(result.issues),
            result.overall_score
        )
        return result

    def _on_credential_changed(self, _credential: Optional[str]) -> None:
        self.error = None
