import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional, Set

from agents.HdlAgent import HdlAgent
from fastapi import FastAPI, HTTPException
from fastapi.responses import StreamingResponse
from orchestrator.orchestrator import GenerationOrchestrator
from pydantic import BaseModel
from utils.helpers import formatSSEMessage
from utils.types import HdlLanguage, sse_headers
from utils.usage import UsageTracker

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    logger.info("Usage for this session:\n%s", tracker.formatReport())


app = FastAPI(title="HDL Assistant API", lifespan=lifespan)

# every open /events stream owns one queue, grouped under its client_id
event_queues: Dict[str, Set[asyncio.Queue]] = {}


class GenerateBody(BaseModel):
    description: Optional[str] = None
    hdlLanguage: Optional[HdlLanguage] = None


# the orchestrator calls this on every state change; we fan the event out to
# every subscriber queue and event_stream turns it into a server-sent event
async def broadcast(event_type: str, payload: Dict[str, Any]):
    for queues in list(event_queues.values()):
        for queue in list(queues):
            await queue.put({"type": event_type, **payload})


tracker = UsageTracker()
orchestrator = GenerationOrchestrator(HdlAgent(tracker), updateCallback=broadcast)


async def event_stream(client_id: str):
    queue: asyncio.Queue = asyncio.Queue()
    event_queues.setdefault(client_id, set()).add(queue)
    try:
        yield formatSSEMessage({"type": "snapshot", "state": orchestrator.snapshot()})
        while True:
            event = await queue.get()
            yield formatSSEMessage(event)
    finally:
        queues = event_queues.get(client_id)
        if queues is not None:
            queues.discard(queue)
            if not queues:
                del event_queues[client_id]


@app.get("/deliverables")
async def list_deliverables():
    return [d._asdict() for d in orchestrator.deliverables]


@app.post("/deliverables/{index}/toggle")
async def toggle_deliverable(index: int):
    try:
        deliverables = orchestrator.toggleDeliverable(index)
    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return [d._asdict() for d in deliverables]


@app.get("/state")
async def get_state():
    return orchestrator.snapshot()


@app.post("/generate")
async def generate(body: Optional[GenerateBody] = None):
    """
    Optionally updates the description / language, then runs a generation and
    returns the final state. While another generation is running, or when the
    description is blank, nothing happens and `started` is false. A body of
    the wrong shape is rejected with 422 before any state is touched.
    """
    if body is not None and not orchestrator.isLoading:
        if body.description is not None:
            orchestrator.setDescription(body.description)
        if body.hdlLanguage is not None:
            orchestrator.setHdlLanguage(body.hdlLanguage.value)

    started = await orchestrator.generate()
    if not started:
        logger.info("Generation request skipped (busy or empty description)")
    return {"started": started, "state": orchestrator.snapshot()}


@app.post("/tabs/{key}")
async def set_active_tab(key: str):
    try:
        orchestrator.setActiveTab(key)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"no generated file for '{key}'")
    return orchestrator.snapshot()


@app.get("/events/{client_id}")
async def events(client_id: str):
    return StreamingResponse(event_stream(client_id), headers=sse_headers)


@app.get("/usage")
async def usage():
    return {"agents": tracker.agents, "total": tracker.totalReport()}
