from abc import ABC as AbstractBaseClass
from abc import abstractmethod
from typing import Any, Dict


class BaseModel(AbstractBaseClass):
    """
    Abstract base class for LLM models.
    """

    def __init__(self, model_name, temperature):
        self.model_name = model_name
        self.temperature = temperature

    @abstractmethod
    def getModel(self):
        """
        Should return a BaseChatModel that you can call like so:

        ```python
        model = DerivedModel(model_name, temperature)
        llm = model.getModel()
        llm.invoke()
        ```
        """
        pass

    @abstractmethod
    def getStructuredModel(self, schema: Dict[str, Any], schema_name: str):
        """
        Same as getModel, but the returned runnable asks the provider to reply
        with JSON matching `schema`. The reply is still a message whose
        content is the raw JSON text; parsing is left to the caller.
        """
        pass
