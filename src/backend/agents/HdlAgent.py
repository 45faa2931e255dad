import asyncio
import logging
from typing import Callable, Optional

from agents.BaseAgent import BaseAgent
from config import OPENAI_API_KEY, OPENAI_MODEL, OPENAI_TEMPERATURE
from langchain_core.output_parsers import StrOutputParser
from models.BaseModel import BaseModel
from models.OpenAIModel import OpenAIModel
from openai import OpenAIError, RateLimitError
from utils.composer import compose
from utils.helpers import stripCodeFences
from utils.normalizer import normalize
from utils.types import AgentResponse, DesignRequest, ParseError, Status
from utils.usage import UsageTracker

logger = logging.getLogger(__name__)

AGENT_NAME = "hdl_generation"


class HdlAgent(BaseAgent):
    """
    Turns a design request into RTL, testbench and documentation files.

    One call per run: the composed prompt goes out with the output schema as
    a structured-response constraint, and the reply text is normalized into
    a mapping of deliverable id to file record. Nothing is retried.
    """

    def __init__(
        self,
        usage_tracker: UsageTracker,
        model_name: str = OPENAI_MODEL,
        temperature: float = OPENAI_TEMPERATURE,
        model_factory: Optional[Callable[[str, float], BaseModel]] = None,
    ):
        super().__init__(usage_tracker)
        self.model_name = model_name
        self.temperature = temperature
        self.model_factory = model_factory

    def _buildModel(self) -> BaseModel:
        if self.model_factory is not None:
            return self.model_factory(self.model_name, self.temperature)
        if not OPENAI_API_KEY:
            raise OpenAIError("OPENAI_API_KEY environment variable not set")
        return OpenAIModel(self.model_name, self.temperature, api_key=OPENAI_API_KEY)

    async def run(self, request: DesignRequest) -> AgentResponse:
        prompt_text, output_schema = compose(
            request.description, request.hdl_language, request.requested_deliverables
        )
        logger.info(
            "Requesting %s from %s",
            ", ".join(request.requested_deliverables) or "nothing",
            self.model_name,
        )

        try:
            llm = self._buildModel().getStructuredModel(output_schema, "generated_output")
            chain = llm | StrOutputParser()
            with self.usage_tracker.agent(AGENT_NAME):
                raw_text = await asyncio.to_thread(chain.invoke, prompt_text)
        except RateLimitError as e:
            err_message = f"OpenAI quota exceeded with message: {e}"
            logger.error("RateLimitError: %s", e)
            return AgentResponse(response=None, status=Status.ERROR, err_message=err_message)
        except OpenAIError as e:
            err_message = f"Encountered OpenAI error with message {e}"
            logger.error("OpenAI API Error: %s", e)
            return AgentResponse(response=None, status=Status.ERROR, err_message=err_message)

        try:
            generated_output = normalize(stripCodeFences(raw_text))
        except ParseError as e:
            logger.error("Unparseable model reply: %s", e)
            return AgentResponse(
                response=None,
                status=Status.ERROR,
                err_message=f"The AI model failed to generate a valid response: {e}",
            )

        dropped = set(request.requested_deliverables) - set(generated_output)
        if dropped:
            logger.warning("Model did not return usable output for: %s", ", ".join(sorted(dropped)))

        return AgentResponse(response=generated_output, status=Status.SUCCESS)
