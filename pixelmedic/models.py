"""
Data Models for PixelMedic

Pydantic models for analysis results and configuration.
Wire names (``type``, ``whyItMatters``, ``overallScore``) are kept as
aliases so provider output validates directly into these types.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


Category = Literal["layout", "accessibility", "design", "performance"]
Severity = Literal["critical", "warning", "suggestion"]
SeverityFilter = Literal["all", "critical", "warning"]

SEVERITY_ORDER: dict[str, int] = {"critical": 0, "warning": 1, "suggestion": 2}
SEVERITY_FILTERS: tuple[str, ...] = ("all", "critical", "warning")

PROVIDERS: tuple[str, ...] = ("gemini", "anthropic", "openai")


class IssueLocation(BaseModel):
    """
    Axis-aligned region of the screenshot an issue refers to.

    All values are percentages of the image dimensions (0-100).
    """

    x: float = Field(ge=0, le=100, strict=True)
    y: float = Field(ge=0, le=100, strict=True)
    width: float = Field(ge=0, le=100, strict=True)
    height: float = Field(ge=0, le=100, strict=True)


class IssueFix(BaseModel):
    """
    Code snippets that fix an issue, keyed by target surface.

    ``html``, ``css`` and ``angular`` are the surfaces the prompt asks for;
    any other surface the model returns is kept as an extra field. Extra
    surfaces must hold a string or null, like the known ones.
    """

    model_config = ConfigDict(extra="allow")

    __pydantic_extra__: dict[str, Optional[str]]

    html: Optional[str] = None
    css: Optional[str] = None
    angular: Optional[str] = None

    def available(self) -> dict[str, str]:
        """Non-empty snippets, known surfaces first"""
        snippets = {}
        for surface, code in self.model_dump().items():
            if code and code.strip():
                snippets[surface] = code
        return snippets

    def has_any(self) -> bool:
        return bool(self.available())


class Issue(BaseModel):
    """
    One located UI problem found in a screenshot.

    Attributes:
        id: Identifier, unique within its result only
        category: Which aspect of the UI is affected (wire key ``type``)
        severity: critical > warning > suggestion
        title: Short headline
        description: What is wrong
        why_it_matters: Impact on users (wire key ``whyItMatters``)
        location: Percentage bounding box on the image
        fix: Suggested code per surface
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    category: Category = Field(alias="type")
    severity: Severity
    title: str
    description: str
    why_it_matters: str = Field(alias="whyItMatters")
    location: IssueLocation
    fix: IssueFix = Field(default_factory=IssueFix)

    @property
    def severity_rank(self) -> int:
        """Sort key for triage, lower is more severe"""
        return SEVERITY_ORDER[self.severity]

    def __str__(self) -> str:
        return f"[{self.severity}] [{self.category}] {self.title}"


class AnalysisResult(BaseModel):
    """
    Complete structured output of one analysis call.

    Issues keep the order the model returned them in. A result with no
    issues is valid.
    """

    model_config = ConfigDict(populate_by_name=True)

    issues: list[Issue]
    summary: str
    overall_score: int = Field(alias="overallScore", ge=0, le=100, strict=True)

    @model_validator(mode="after")
    def check_unique_ids(self) -> "AnalysisResult":
        seen = set()
        for issue in self.issues:
            if issue.id in seen:
                raise ValueError(f"duplicate issue id '{issue.id}'")
            seen.add(issue.id)
        return self

    def count(self, severity: str) -> int:
        return sum(1 for issue in self.issues if issue.severity == severity)

    def rating(self) -> str:
        """Human label for the overall score"""
        if self.overall_score >= 90:
            return "Excellent"
        elif self.overall_score >= 70:
            return "Good"
        elif self.overall_score >= 50:
            return "Needs Work"
        else:
            return "Poor"

    def to_wire(self) -> dict:
        """Serialize with the provider's field names"""
        return self.model_dump(by_alias=True, exclude_none=True)


class Config(BaseModel):
    """
    Configuration for PixelMedic.

    Loaded from .env file and environment variables.

    Attributes:
        gemini_api_key: Google Gemini API key (optional)
        anthropic_api_key: Anthropic API key (optional)
        openai_api_key: OpenAI API key (optional)
        vision_provider: Which provider to use by default
        model: Model override for the chosen provider
        credentials_file: Where ``pixelmedic configure`` persists keys
    """

    gemini_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    vision_provider: Literal["gemini", "anthropic", "openai"] = "gemini"
    model: Optional[str] = None
    credentials_file: Optional[str] = None

    def api_key_for(self, provider: str) -> Optional[str]:
        """API key configured for a provider, None when unset or empty"""
        if provider not in PROVIDERS:
            raise ValueError(f"Unknown provider: {provider}")
        key = getattr(self, f"{provider}_api_key")
        return key or None
