"""JSON parsing and validation utilities for LLM responses.

Contains:
- parse_json_response: Parse raw LLM response as JSON
- validate_response: Validate parsed JSON against a pydantic model
"""

import json
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from autocommit.llm.exceptions import JSONParseError

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_json_response(raw_response: str) -> dict:
    """Parse the LLM response as JSON.

    Args:
        raw_response: The raw text response from the LLM.

    Returns:
        The parsed JSON as a dictionary.

    Raises:
        JSONParseError: If parsing fails.
    """
    cleaned = (raw_response or "").strip()

    # Remove markdown code fences if the model included them despite instructions
    if cleaned.startswith("```"):
        lines = cleaned.split("\n")
        lines = lines[1:]
        if lines and lines[-1].strip().startswith("```"):
            lines = lines[:-1]
        cleaned = "\n".join(lines)

    # Keep only the outermost JSON object if there's extra content
    first_brace = cleaned.find("{")
    last_brace = cleaned.rfind("}")

    if first_brace != -1 and last_brace != -1 and last_brace > first_brace:
        cleaned = cleaned[first_brace:last_brace + 1]

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise JSONParseError(
            f"Failed to parse LLM response as JSON.\n"
            f"Error: {e}\n"
            f"Raw response:\n{raw_response}"
        )

    if not isinstance(parsed, dict):
        raise JSONParseError(f"Expected a JSON object, got: {raw_response}")
    return parsed


def validate_response(parsed: dict, model_cls: type[ModelT]) -> ModelT:
    """Validate parsed JSON against a response schema.

    Args:
        parsed: The parsed JSON dictionary.
        model_cls: Pydantic model describing the expected response.

    Returns:
        A validated model instance.

    Raises:
        JSONParseError: If validation fails.
    """
    try:
        return model_cls.model_validate(parsed)
    except ValidationError as e:
        raise JSONParseError(
            f"LLM response does not match expected schema.\n"
            f"Error: {e}\n"
            f"Parsed JSON: {parsed}"
        )
