"""
Base Vision Provider Interface

Abstract base class defining the contract for vision model providers.
A provider only moves bytes: it sends the prompt and the image and hands
back whatever text the model produced. Parsing is the validator's job.
"""

from abc import ABC, abstractmethod


IMAGE_MIME_TYPE = "image/png"

ANALYSIS_PROMPT = """You are an expert UI/UX reviewer and accessibility specialist. Analyze this screenshot and identify:

1. **Layout Issues**: Alignment problems, spacing inconsistencies, overflow issues, responsive design problems
2. **Accessibility Issues**: Missing alt text indicators, poor contrast, small touch targets, missing focus states, ARIA concerns
3. **Design Issues**: Typography problems, color inconsistencies, visual hierarchy issues, component styling problems

For each issue found, provide:
- A unique ID (issue-1, issue-2, etc.)
- Type (layout, accessibility, design, or performance)
- Severity (critical, warning, or suggestion)
- Clear title
- Detailed description of what's wrong
- Why it matters (impact on users)
- Approximate location as percentage coordinates (x, y, width, height as 0-100 values representing percentage of image)
- Code fix with HTML, CSS, and/or Angular code snippets

Respond ONLY with valid JSON in this exact format:
{
  "issues": [
    {
      "id": "issue-1",
      "type": "accessibility",
      "severity": "critical",
      "title": "Issue title",
      "description": "What's wrong",
      "whyItMatters": "Impact explanation",
      "location": { "x": 10, "y": 20, "width": 30, "height": 15 },
      "fix": {
        "html": "<button aria-label=\\"Close\\">X</button>",
        "css": ".btn { min-height: 44px; }",
        "angular": "@Component({ ... })"
      }
    }
  ],
  "summary": "Brief overall assessment",
  "overallScore": 75
}

Be thorough but practical. Focus on actionable issues. Score from 0-100 where 100 is perfect."""


class VisionProvider(ABC):
    """
    Abstract base class for vision model providers.

    Subclasses must implement:
    - generate(): Send one user message (prompt text + PNG image) and
      return the model's raw text reply
    - name: Property returning provider name

    Implementations raise TransportFailure for anything that goes wrong
    before a reply is received.
    """

    model: str

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Provider name for logging and identification.

        Returns:
            Provider name (e.g., "gemini", "anthropic", "openai")
        """
        pass

    @abstractmethod
    async def generate(self, prompt: str, image_base64: str) -> str:
        """
        Send a multimodal request and return the raw reply text.

        The request is a single "user" message with two parts, in order:
        the prompt text, then the image as inline PNG data.

        Args:
            prompt: Instruction text
            image_base64: Base64 image data without a data-URI prefix

        Returns:
            Raw text produced by the model (may contain prose around JSON)

        Raises:
            TransportFailure: If the request fails or the provider errors
        """
        pass
