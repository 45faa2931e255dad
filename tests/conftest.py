"""Shared fakes for the HDL assistant tests.

Provides:
- FakeAgent: scripted agent whose run() can be held open with an asyncio.Event
- FakeModel: BaseModel whose structured runnable returns a canned reply
- helpers building file records and agent responses
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional

import pytest
from langchain_core.messages import AIMessage
from langchain_core.runnables import RunnableLambda

from agents.BaseAgent import BaseAgent
from models.BaseModel import BaseModel
from utils.types import AgentResponse, DesignRequest, Status
from utils.usage import UsageTracker


def file_record(filename: str, language: str = "Verilog", code: str = "module m; endmodule") -> Dict[str, str]:
    return {"filename": filename, "language": language, "code": code}


def success(output: Dict[str, Any]) -> AgentResponse:
    return AgentResponse(response=output, status=Status.SUCCESS)


def failure(message: Optional[str]) -> AgentResponse:
    return AgentResponse(response=None, status=Status.ERROR, err_message=message)


class FakeAgent(BaseAgent):
    def __init__(self, responses: Optional[List[Any]] = None):
        super().__init__(UsageTracker())
        self.responses = list(responses or [])
        self.requests: List[DesignRequest] = []
        self.release: Optional[asyncio.Event] = None

    async def run(self, request: DesignRequest) -> AgentResponse:
        self.requests.append(request)
        if self.release is not None:
            await self.release.wait()
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class FakeModel(BaseModel):
    def __init__(self, reply: str = "{}", error: Optional[Exception] = None):
        super().__init__("fake-model", 0.0)
        self.reply = reply
        self.error = error
        self.schema: Optional[Dict[str, Any]] = None
        self.schema_name: Optional[str] = None
        self.prompts: List[str] = []

    def getModel(self):
        return RunnableLambda(self._respond)

    def getStructuredModel(self, schema, schema_name):
        self.schema = schema
        self.schema_name = schema_name
        return RunnableLambda(self._respond)

    def _respond(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return AIMessage(content=self.reply)


class RecordingCallback:
    def __init__(self):
        self.events: List[Dict[str, Any]] = []

    async def __call__(self, event_type: str, payload: Dict[str, Any]):
        self.events.append({"type": event_type, **payload})

    def types(self) -> List[str]:
        return [e["type"] for e in self.events]


@pytest.fixture
def recorder() -> RecordingCallback:
    return RecordingCallback()
