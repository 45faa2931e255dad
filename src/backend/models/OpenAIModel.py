from typing import Any, Dict

from langchain_openai import ChatOpenAI

from models.BaseModel import BaseModel


class OpenAIModel(BaseModel):
    """
    Implementation of BaseModel for OpenAI LLMs using langchain_openai.ChatOpenAI.
    """

    def __init__(self, model_name="gpt-4o-mini", temperature=0.2, api_key=None):
        super().__init__(model_name, temperature)
        self.llm = ChatOpenAI(model=self.model_name, temperature=self.temperature, api_key=api_key)

    def getModel(self):
        return self.llm

    def getStructuredModel(self, schema: Dict[str, Any], schema_name: str = "generated_output"):
        # strict mode requires every property, and every deliverable here is optional
        return self.getModel().bind(
            response_format={
                "type": "json_schema",
                "json_schema": {"name": schema_name, "schema": schema, "strict": False},
            }
        )
