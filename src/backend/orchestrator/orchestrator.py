import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from agents.BaseAgent import BaseAgent
from config import (
    DEFAULT_DESCRIPTION,
    DEFAULT_HDL_LANGUAGE,
    GENERATION_CANCELLED_MESSAGE,
    GENERATION_FAILED_LABEL,
    IDLE_MESSAGE,
    LOADING_MESSAGE_INTERVAL_S,
    LOADING_MESSAGES,
    UNKNOWN_ERROR_MESSAGE,
)
from utils.types import (
    Deliverable,
    DeliverableKind,
    DesignRequest,
    EventCallback,
    GeneratedOutput,
    HdlLanguage,
    Status,
)

logger = logging.getLogger(__name__)


def defaultDeliverables() -> List[Deliverable]:
    return [Deliverable(id=k.id, name=k.label, checked=k.default_checked) for k in DeliverableKind]


class GenerationOrchestrator:
    """
    Owns the form and result state for the HDL generator and runs one
    generation at a time.

    status moves PENDING (idle) -> RUNNING -> SUCCESS | ERROR. A new call to
    generate() is dropped while one is RUNNING or when the description is
    blank; otherwise it clears the previous error and result before the model
    is called. Subscribers are told about every change via the update callback.
    """

    def __init__(
        self,
        agent: BaseAgent,
        updateCallback: Optional[EventCallback] = None,
        loading_messages: Optional[List[str]] = None,
        loading_interval_s: float = LOADING_MESSAGE_INTERVAL_S,
    ):
        self.agent = agent
        self.updateCallback = updateCallback
        self.loading_messages = loading_messages or LOADING_MESSAGES
        self.loading_interval_s = loading_interval_s

        # form state
        self.description: str = DEFAULT_DESCRIPTION
        self.hdlLanguage: str = DEFAULT_HDL_LANGUAGE
        self.deliverables: List[Deliverable] = defaultDeliverables()

        # generation state
        self.status = Status.PENDING
        self.error: Optional[str] = None
        self.generatedOutput: Optional[GeneratedOutput] = None
        self.activeTab: Optional[str] = None
        self.loadingMessage: str = IDLE_MESSAGE
        self._loadingTask: Optional[asyncio.Task] = None

    @property
    def isLoading(self) -> bool:
        return self.status == Status.RUNNING

    @property
    def selectedDeliverables(self) -> List[str]:
        return [d.id for d in self.deliverables if d.checked]

    @property
    def outputFiles(self) -> List[Dict[str, Any]]:
        if not self.generatedOutput:
            return []
        return [{"key": key, **record} for key, record in self.generatedOutput.items()]

    def snapshot(self) -> Dict[str, Any]:
        return {
            "description": self.description,
            "hdlLanguage": self.hdlLanguage,
            "deliverables": [d._asdict() for d in self.deliverables],
            "status": self.status.value,
            "isLoading": self.isLoading,
            "loadingMessage": self.loadingMessage,
            "error": self.error,
            "generatedOutput": self.generatedOutput,
            "outputFiles": self.outputFiles,
            "activeTab": self.activeTab,
        }

    async def _emit(self, event_type: str):
        if self.updateCallback is None:
            return
        await self.updateCallback(
            event_type,
            {
                "type": event_type,
                "state": self.snapshot(),
                "ts": datetime.now(timezone.utc).isoformat(),
            },
        )

    # ------------------------------------------------------------------ #
    # Form edits
    # ------------------------------------------------------------------ #
    def setDescription(self, description: str):
        self.description = description

    def setHdlLanguage(self, hdl_language: str):
        # raises ValueError for anything other than VHDL / Verilog
        self.hdlLanguage = HdlLanguage(hdl_language).value

    def toggleDeliverable(self, index: int) -> List[Deliverable]:
        if index < 0 or index >= len(self.deliverables):
            raise IndexError(f"no deliverable at index {index}")
        updated = list(self.deliverables)
        updated[index] = updated[index]._replace(checked=not updated[index].checked)
        self.deliverables = updated
        return self.deliverables

    def setActiveTab(self, key: str):
        if not self.generatedOutput or key not in self.generatedOutput:
            raise KeyError(key)
        self.activeTab = key

    # ------------------------------------------------------------------ #
    # Status message rotation
    # ------------------------------------------------------------------ #
    async def _rotateLoadingMessages(self):
        i = 0
        while True:
            await asyncio.sleep(self.loading_interval_s)
            i = (i + 1) % len(self.loading_messages)
            self.loadingMessage = self.loading_messages[i]
            await self._emit("loading_message")

    def _startLoading(self):
        self.status = Status.RUNNING
        self.loadingMessage = self.loading_messages[0]
        self._loadingTask = asyncio.create_task(self._rotateLoadingMessages())

    async def _stopLoading(self):
        task, self._loadingTask = self._loadingTask, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        except Exception:
            logger.exception("Status message rotation failed")

    # ------------------------------------------------------------------ #
    # Generation
    # ------------------------------------------------------------------ #
    async def generate(self) -> bool:
        """
        Runs one generation. Returns False without touching any state when a
        generation is already running or the description is blank, True once
        a started generation has finished (successfully or not). Cancelling it
        still publishes an ERROR state before the cancellation propagates.
        """
        if self.isLoading or not self.description.strip():
            return False

        # everything up to the first await runs atomically, so a second
        # caller already sees RUNNING
        self._startLoading()
        self.error = None
        self.generatedOutput = None
        self.activeTab = None

        request = DesignRequest(
            description=self.description,
            hdl_language=self.hdlLanguage,
            requested_deliverables=tuple(self.selectedDeliverables),
        )

        status = Status.ERROR
        try:
            await self._emit("generation_started")
            agent_response = await self.agent.run(request)
            if agent_response.status == Status.SUCCESS:
                self._storeOutput(agent_response.response)
                status = Status.SUCCESS
            else:
                self._storeError(agent_response.err_message)
        except asyncio.CancelledError:
            self._storeError(GENERATION_CANCELLED_MESSAGE)
            raise
        except Exception as e:
            logger.exception("Error generating HDL")
            self._storeError(str(e))
        finally:
            # stays RUNNING until the rotation has actually stopped
            await self._stopLoading()
            self.status = status
            await self._emit("state_changed")

        return True

    def _storeOutput(self, generated_output: GeneratedOutput):
        self.generatedOutput = generated_output
        first_key = next(iter(generated_output), None)
        if first_key:
            self.activeTab = first_key
        logger.info("Generated %d file(s)", len(generated_output))

    def _storeError(self, message: Optional[str]):
        self.error = f"{GENERATION_FAILED_LABEL} {message or UNKNOWN_ERROR_MESSAGE}"
        logger.error(self.error)
