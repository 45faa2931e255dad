from contextlib import AbstractContextManager
from typing import Any, Dict

from langchain_community.callbacks import get_openai_callback


def _emptyReport() -> Dict[str, Any]:
    return {
        "prompt_tokens": 0,
        "completion_tokens": 0,
        "total_tokens": 0,
        "total_cost": 0.0,
        "calls": 0,
    }


# we use OpenAICallback to give us the up-to-date numbers like tokens per model and so on.
# as the name suggests, only works for OpenAI models
class _OpenAICallback(AbstractContextManager):
    def __init__(self, tracker: "UsageTracker", agent_name: str):
        self.tracker = tracker
        self.agent_name = agent_name
        self._ctx = None
        self._handler = None

    def __enter__(self):
        self._ctx = get_openai_callback()
        self._handler = self._ctx.__enter__()
        return self._handler

    def __exit__(self, exc_type, exc, tb):
        self._ctx.__exit__(exc_type, exc, tb)
        # failed calls are counted too
        report = self.tracker.agents.setdefault(self.agent_name, _emptyReport())
        report["prompt_tokens"] += int(getattr(self._handler, "prompt_tokens", 0) or 0)
        report["completion_tokens"] += int(getattr(self._handler, "completion_tokens", 0) or 0)
        report["total_tokens"] += int(getattr(self._handler, "total_tokens", 0) or 0)
        report["total_cost"] += float(getattr(self._handler, "total_cost", 0.0) or 0.0)
        report["calls"] += 1
        return False


# tracks token usage and cost per agent across the lifetime of the process
class UsageTracker:
    def __init__(self):
        self.agents: Dict[str, Dict[str, Any]] = {}

    def agent(self, agent_name: str, provider: str = "openai") -> AbstractContextManager:
        if provider == "openai":
            return _OpenAICallback(self, agent_name)
        raise ValueError(f"unsupported provider: {provider}")

    def getTokenReportForAgent(self, agent_name: str) -> Dict[str, Any]:
        return dict(self.agents.get(agent_name, _emptyReport()))

    def totalReport(self) -> Dict[str, Any]:
        return {
            "prompt_tokens": sum(v["prompt_tokens"] for v in self.agents.values()),
            "completion_tokens": sum(v["completion_tokens"] for v in self.agents.values()),
            "total_tokens": sum(v["total_tokens"] for v in self.agents.values()),
            "total_cost": round(sum(float(v["total_cost"]) for v in self.agents.values()), 6),
            "calls": sum(v["calls"] for v in self.agents.values()),
        }

    def formatReport(self) -> str:
        lines = []
        lines.append("Per-agent usage:")
        for agent, data in self.agents.items():
            lines.append(
                f"  {agent}: "
                f"{data['prompt_tokens']} in / "
                f"{data['completion_tokens']} out "
                f"(total {data['total_tokens']} tokens, "
                f"${data['total_cost']:.6f}, {data['calls']} call(s))"
            )
        totals = self.totalReport()
        lines.append("Totals:")
        lines.append(
            f"  {totals['prompt_tokens']} in / "
            f"{totals['completion_tokens']} out "
            f"(total {totals['total_tokens']} tokens, "
            f"${totals['total_cost']:.6f})"
        )
        return "\n".join(lines)
