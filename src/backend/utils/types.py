# types.py
from __future__ import annotations

from enum import Enum
from typing import Any, Awaitable, Callable, Dict, NamedTuple, Optional, Tuple, TypedDict

sse_headers = {
        "Content-Type": "text/event-stream; charset=utf-8",
        "X-Accel-Buffering": "no",
        "Cache-Control": "no-cache",
        "Connection": "keep-alive",
    }

EventCallback = Callable[[str, Dict[str, Any]], Awaitable[None]]


class Status(Enum):
    PENDING = "pending"
    RUNNING = "running"
    SUCCESS = "success"
    ERROR = "error"


class HdlLanguage(str, Enum):
    VHDL = "VHDL"
    VERILOG = "Verilog"


class DeliverableKind(Enum):
    """
    The fixed set of artifacts a user may request. Each member carries its
    identifier, the label shown on the form, the phrase used in the prompt
    (``{language}`` is filled with the target HDL) and whether the form
    starts with it checked.
    """

    RTL_CODE = ("rtlCode", "RTL Code", "RTL Code in {language}", True)
    TESTBENCH = ("testbench", "UVM Testbench", "SystemVerilog/UVM Testbench", True)
    TEST_CASES = ("testCases", "Test Cases", "Test Cases Description (in Markdown)", False)
    DESIGN_SPEC = ("designSpec", "Design Specification", "Design Specification (in Markdown)", False)

    def __init__(self, id: str, label: str, phrase: str, default_checked: bool):
        self.id = id
        self.label = label
        self.phrase = phrase
        self.default_checked = default_checked

    @classmethod
    def fromId(cls, deliverable_id: str) -> Optional["DeliverableKind"]:
        for kind in cls:
            if kind.id == deliverable_id:
                return kind
        return None


class Deliverable(NamedTuple):
    id: str
    name: str
    checked: bool


class DesignRequest(NamedTuple):
    description: str
    hdl_language: str
    requested_deliverables: Tuple[str, ...]


class FileRecord(TypedDict):
    filename: str
    language: str
    code: str


# deliverable id -> file; a missing key means "not produced"
GeneratedOutput = Dict[str, FileRecord]


class ParseError(ValueError):
    """Raised when the model reply is not a JSON object."""


class AgentResponse:
    def __init__(self, response: Any, status: Status, err_message: Optional[str] = None):
        self.response = response
        self.status = status
        self.err_message = err_message
