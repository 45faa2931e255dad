import json
from typing import Any

from utils.types import FileRecord, GeneratedOutput, ParseError

FILE_RECORD_FIELDS = ("filename", "language", "code")


def isFileRecord(value: Any) -> bool:
    # the reply is untyped third-party JSON: anything that isn't a populated
    # object with the three text fields is rejected rather than coerced
    if not value or not isinstance(value, dict):
        return False
    return all(isinstance(value.get(field), str) for field in FILE_RECORD_FIELDS)


def normalize(raw_text: str) -> GeneratedOutput:
    """
    Parses the model reply and keeps only well-formed file records.

    Raises ParseError when the text is not JSON or not a JSON object. Code
    fences are not stripped here; see utils.helpers.stripCodeFences.
    Malformed entries are dropped silently and key order follows the reply.
    """
    try:
        parsed = json.loads(raw_text.strip())
    except json.JSONDecodeError as e:
        raise ParseError(f"reply is not valid JSON: {e}") from e

    if not isinstance(parsed, dict):
        raise ParseError(f"expected a JSON object, got {type(parsed).__name__}")

    output: GeneratedOutput = {}
    for key, value in parsed.items():
        if isFileRecord(value):
            output[key] = FileRecord(
                filename=value["filename"], language=value["language"], code=value["code"]
            )
    return output
