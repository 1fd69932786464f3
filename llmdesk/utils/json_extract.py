"""
Helpers for pulling structured data out of free-text model output.

Local models rarely answer with bare JSON: they wrap it in prose, markdown
fences or trailing remarks. ``extract_json`` takes the widest brace-delimited
span of the text and tries to decode it as a JSON object.
"""
import json
import re
from typing import Any, Dict

# Greedy on purpose: first "{" to last "}" so nested objects stay intact
JSON_BLOCK_PATTERN = re.compile(r"\{.*\}", re.DOTALL)


class JSONExtractionError(ValueError):
    """Raised when no JSON object can be recovered from model output"""


def extract_json(text: str) -> Dict[str, Any]:
    """Return the JSON object embedded in ``text``.

    Raises:
        JSONExtractionError: no brace-delimited block, or a block that is not
            valid JSON.
    """
    if not text:
        raise JSONExtractionError("Empty model response")

    match = JSON_BLOCK_PATTERN.search(text)
    if not match:
        raise JSONExtractionError("No JSON object found in model response")

    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise JSONExtractionError(f"Invalid JSON in model response: {e}") from e

    return data
