import copy
from typing import Any, Dict, Iterable, Tuple

from config import HDL_GENERATION_PROMPT
from langchain_core.prompts import PromptTemplate
from utils.types import DeliverableKind

FILE_RECORD_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "filename": {
            "type": "string",
            "description": "The filename for the code, e.g., 'counter.v' or 'spec.md'.",
        },
        "language": {
            "type": "string",
            "description": "The programming/markup language, e.g., 'Verilog', 'SystemVerilog', 'Markdown'.",
        },
        "code": {
            "type": "string",
            "description": "The complete, syntactically correct code or document content.",
        },
    },
    "required": ["filename", "language", "code"],
}


def resolveDeliverablePhrase(deliverable_id: str, hdl_language: str) -> str:
    kind = DeliverableKind.fromId(deliverable_id)
    if kind is None:
        # unknown ids are passed through as their own phrase
        return deliverable_id
    return kind.phrase.format(language=hdl_language)


def buildDeliverableClause(requested_deliverables: Iterable[str], hdl_language: str) -> str:
    return ", ".join(resolveDeliverablePhrase(d, hdl_language) for d in requested_deliverables)


def buildOutputSchema() -> Dict[str, Any]:
    """
    Response-shape constraint sent with every request: one optional file
    object per known deliverable. It never depends on what was requested,
    the prompt text alone tells the model which keys to fill.
    """
    return {
        "type": "object",
        "properties": {kind.id: copy.deepcopy(FILE_RECORD_SCHEMA) for kind in DeliverableKind},
    }


def compose(
    description: str, hdl_language: str, requested_deliverables: Iterable[str]
) -> Tuple[str, Dict[str, Any]]:
    """
    Builds the instruction text and the structured-output schema for one
    generation request. Pure and never fails; an empty deliverable set simply
    produces a prompt that asks for nothing.
    """
    prompt_template = PromptTemplate(
        template=HDL_GENERATION_PROMPT,
        input_variables=["description", "hdl_language", "deliverables"],
    )
    prompt_text = prompt_template.format(
        description=description,
        hdl_language=hdl_language,
        deliverables=buildDeliverableClause(requested_deliverables, hdl_language),
    )
    return prompt_text, buildOutputSchema()
