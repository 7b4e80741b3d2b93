import json
import logging
import math
import numbers
import re
from typing import Any, Dict, Optional

from app.core.models import ClassificationResult, Label

logger = logging.getLogger(__name__)

INVALID_JSON_PREFIX = "Model did not return valid JSON. Raw output was: "
DEFAULT_EXPLANATION = "No explanation provided by the model."

_JSON_FENCE = re.compile(r"```json", re.IGNORECASE)
_BARE_FENCE = "```"
_OUTER_BRACES = re.compile(r"\{[\s\S]*\}")


def _reject_constant(name: str):
    # NaN / Infinity are not JSON
    raise ValueError(f"Invalid JSON constant: {name}")


def _load_object(text: str) -> Optional[Dict[str, Any]]:
    try:
        value = json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return None
    return value if isinstance(value, dict) else None


def clean_completion(raw_text: Optional[str]) -> str:
    """
    Strips Markdown code fences and surrounding prose from a model completion.

    Keeps the span from the first '{' to the last '}' when there is one, so a
    completion without any braces is returned as-is and fails parsing later.
    """
    text = (raw_text or "").strip()
    text = _JSON_FENCE.sub("", text)
    text = text.replace(_BARE_FENCE, "").strip()

    match = _OUTER_BRACES.search(text)
    if match:
        text = match.group(0)
    return text


def _normalize_label(value: Any) -> Label:
    if not value or not isinstance(value, str):
        return Label.UNCERTAIN
    try:
        return Label(value.strip().lower())
    except ValueError:
        return Label.UNCERTAIN


def _normalize_confidence(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return 0.0
    try:
        confidence = float(value)
    except OverflowError:
        return 0.0
    # json.loads turns overflowing literals like 1e400 into inf
    if not math.isfinite(confidence):
        return 0.0
    return confidence


def _normalize_explanation(value: Any) -> str:
    if not value:
        return DEFAULT_EXPLANATION
    return value if isinstance(value, str) else str(value)


def normalize(raw_text: Optional[str]) -> ClassificationResult:
    """
    Converts a raw model completion into a fully populated ClassificationResult.

    Never raises: output that cannot be parsed as a JSON object degrades to an
    'uncertain' result whose explanation carries the raw completion, and
    missing or invalid fields are replaced with defaults.

    Args:
        raw_text: The complete text returned by the model (None is treated as "").

    Returns:
        ClassificationResult with label, confidence and explanation set.
    """
    raw = raw_text or ""

    # An already valid object is taken verbatim so fence-like text inside
    # string values survives re-normalization.
    parsed = _load_object(raw.strip())
    if parsed is None:
        parsed = _load_object(clean_completion(raw))

    if parsed is None:
        logger.warning(f"Model did not return valid JSON: {raw[:200]!r}")
        parsed = {
            "label": Label.UNCERTAIN.value,
            "confidence": 0.0,
            "explanation": INVALID_JSON_PREFIX + raw,
        }
    else:
        logger.debug(f"Parsed model output with keys: {sorted(parsed)}")

    return ClassificationResult(
        label=_normalize_label(parsed.get("label")),
        confidence=_normalize_confidence(parsed.get("confidence")),
        explanation=_normalize_explanation(parsed.get("explanation")),
    )
