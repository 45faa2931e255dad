import os


def _float(key: str, default: float) -> float:
    return float(os.getenv(key, str(default)))


def _int(key: str, default: int) -> int:
    return int(os.getenv(key, str(default)))


OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
OPENAI_TEMPERATURE = _float("OPENAI_TEMPERATURE", 0.2)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
HOST = os.getenv("HOST", "127.0.0.1")
PORT = _int("PORT", 8000)

# seconds between status messages while a generation is pending
LOADING_MESSAGE_INTERVAL_S = _float("LOADING_MESSAGE_INTERVAL_S", 2.5)

LOADING_MESSAGES = [
    "Synthesizing RTL...",
    "Building UVM environment...",
    "Generating test cases...",
    "Running simulations...",
    "Analyzing coverage...",
    "Finalizing documentation...",
]
IDLE_MESSAGE = "Initializing AI assistant..."

DEFAULT_DESCRIPTION = "Design a 4-bit synchronous up-counter with an active-high reset."
DEFAULT_HDL_LANGUAGE = "Verilog"

UNKNOWN_ERROR_MESSAGE = "An unknown error occurred. Please check the logs for details."
GENERATION_FAILED_LABEL = "Failed to generate HDL content."
GENERATION_CANCELLED_MESSAGE = "The generation was cancelled before the model replied."


HDL_GENERATION_PROMPT = """
You are an expert Hardware Design and Verification Engineer AI assistant. Your role is to help users develop, verify, and test digital designs.
Follow best practices for synthesizable, modular, and well-documented code.

User's Design Request:
"{description}"

Generation Task:
- Target RTL Language: {hdl_language}
- Verification Environment: SystemVerilog with UVM.
- Required Deliverables: {deliverables}.

Instructions:
1. Analyze the user's request and generate all the required deliverables.
2. Ensure all generated code is syntactically correct and complete.
3. For testbenches, create a comprehensive UVM-based environment.
4. For documentation (like specs or test cases), use Markdown format.
5. Return the output as a single, valid JSON object that adheres to the provided schema. Do not include any text, markdown formatting, or code blocks before or after the JSON object.
6. Only generate properties in the JSON for the deliverables that were explicitly requested.
"""
