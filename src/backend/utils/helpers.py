import json
import re

_FENCE_PATTERN = re.compile(r"^```[\w-]*\s*\n?(.*?)\n?```$", re.DOTALL)


def formatSSEMessage(event) -> str:
    return f"data: {json.dumps(event)}\n\n"


def stripCodeFences(text: str) -> str:
    # the prompt asks for bare JSON but models still wrap replies in ```json fences
    # now and then. normalize() treats fenced text as malformed, so callers that
    # want to be lenient run the reply through this first
    stripped = text.strip()
    match = _FENCE_PATTERN.match(stripped)
    if match:
        return match.group(1).strip()
    return stripped
