"""
Response Validation

Turns the raw text a vision model returns into a typed AnalysisResult.

Models are asked for JSON only, but they often wrap the object in prose
or markdown fences. The validator takes everything from the first ``{``
to the last ``}`` and parses that. The whole result is rejected on any
schema violation; issues are never dropped or patched up.
"""

import json
import logging
from typing import Optional

from pydantic import ValidationError

from .errors import MalformedResult
from .models import AnalysisResult


logger = logging.getLogger(__name__)

MAX_ERRORS_REPORTED = 5


def extract_json_region(text: str) -> Optional[str]:
    """
    Extract the candidate JSON object from free-form model output.

    Args:
        text: Raw response text

    Returns:
        Substring from the first '{' to the last '}', or None if the text
        holds no such region

    Example:
        extract_json_region('Sure!\\n```json\\n{"a": 1}\\n```')  # '{"a": 1}'
    """
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        return None
    return text[start:end + 1]


def parse_analysis(text: Optional[str]) -> AnalysisResult:
    """
    Parse and validate a raw model response.

    Args:
        text: Raw response text (may be None when the provider returned
              no text part at all)

    Returns:
        Validated AnalysisResult

    Raises:
        MalformedResult: If no JSON object is found, the JSON does not
                         decode, or the decoded value violates the schema.
                         The message names the failing check.
    """
    region = extract_json_region(text or "")
    if region is None:
        raise MalformedResult("Failed to parse analysis response: no JSON object found")

    try:
        data = json.loads(region)
    except json.JSONDecodeError as e:
        raise MalformedResult(f"Failed to parse analysis response: invalid JSON ({e})") from e

    if not isinstance(data, dict):
        raise MalformedResult(
            f"Invalid analysis response: expected a JSON object, got {type(data).__name__}"
        )

    try:
        result = AnalysisResult.model_validate(data)
    except ValidationError as e:
        raise MalformedResult(f"Invalid analysis response: {_describe(e)}") from e

    logger.debug("Validated analysis result with %d issues", len(result.issues))
    return result


def _describe(error: ValidationError) -> str:
    """Compact 'path: message' list of the first few schema violations"""
    problems = []
    for item in error.errors()[:MAX_ERRORS_REPORTED]:
        path = ".".join(str(part) for part in item["loc"]) or "<root>"
        problems.append(f"{path}: {item['msg']}")

    remaining = error.error_count() - len(problems)
    if remaining > 0:
        problems.append(f"... and {remaining} more")

    return "; ".join(problems)
