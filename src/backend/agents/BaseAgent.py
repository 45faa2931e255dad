from abc import ABC as AbstractBaseClass, abstractmethod
from utils.usage import UsageTracker
from utils.types import AgentResponse, DesignRequest

class BaseAgent(AbstractBaseClass):
    def __init__(self, usage_tracker: UsageTracker):
        self.usage_tracker = usage_tracker

    @abstractmethod
    async def run(self, request: DesignRequest) -> AgentResponse:
        """
        Sends one request to the language model and returns the outcome wrapped in an AgentResponse.
        Provider and parse failures are reported through the response status rather than raised.
        """
        pass
