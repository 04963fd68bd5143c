"""
Unit tests for the task extraction agent
"""
import asyncio
import json

from unittest.mock import patch
from agents.llm import LLMError
from agents.task_agent import FALLBACK_TASKS, TaskExtractionAgent

TRANSCRIPT = "John will prepare the Q3 proposal by Friday. Sarah reviews the budget ASAP."


class FakeLLM:
    """Stands in for agents.llm.LLM."""

    def __init__(self, reply=None, error=None, delay=0.0):
        self.reply = reply
        self.error = error
        self.delay = delay
        self.prompts = []

    async def generate_async(self, prompt):
        self.prompts.append(prompt)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.reply

    def test_connection(self):
        return self.error is None


class TestTaskExtractionAgent:
    """Test cases for TaskExtractionAgent."""

    def test_extracts_tasks_from_llm(self):
        """A well-formed reply is parsed and reported as coming from the LLM."""
        reply = json.dumps([
            {"title": "Prepare Q3 proposal", "description": "John prepares the proposal by Friday",
             "priority": "HIGH", "tags": ["proposal", "john"]},
            {"title": "Review budget", "description": "Sarah reviews the budget",
             "priority": "urgent", "tags": ["budget"]},
        ])
        llm = FakeLLM(reply=reply)
        agent = TaskExtractionAgent(llm=llm, timeout=5)

        tasks, source = asyncio.run(agent.extract_tasks(TRANSCRIPT))

        assert source == "llm"
        assert [t.title for t in tasks] == ["Prepare Q3 proposal", "Review budget"]
        assert tasks[1].priority == "URGENT"
        assert TRANSCRIPT in llm.prompts[0]

    def test_empty_reply_array_means_no_tasks(self):
        """An empty array from the model is not replaced by the fallback."""
        agent = TaskExtractionAgent(llm=FakeLLM(reply="[]"), timeout=5)

        tasks, source = asyncio.run(agent.extract_tasks(TRANSCRIPT))

        assert tasks == []
        assert source == "llm"

    def test_fallback_on_llm_error(self):
        """A failed call yields the fallback task set."""
        agent = TaskExtractionAgent(llm=FakeLLM(error=LLMError("API quota exceeded")), timeout=5)

        tasks, source = asyncio.run(agent.extract_tasks(TRANSCRIPT))

        assert source == "fallback"
        assert [t.title for t in tasks] == ["Prep", "Rev", "Sched"]
        assert [t.priority for t in tasks] == ["HIGH", "MEDIUM", "MEDIUM"]

    def test_fallback_on_unparseable_reply(self):
        """A reply without JSON yields the fallback task set."""
        agent = TaskExtractionAgent(llm=FakeLLM(reply="I am not sure what to do here."), timeout=5)

        tasks, source = asyncio.run(agent.extract_tasks(TRANSCRIPT))

        assert source == "fallback"
        assert len(tasks) == 3

    def test_fallback_on_timeout(self):
        """A slow model is abandoned after the timeout."""
        agent = TaskExtractionAgent(llm=FakeLLM(reply="[]", delay=1.0), timeout=0.05)

        tasks, source = asyncio.run(agent.extract_tasks(TRANSCRIPT))

        assert source == "fallback"

    def test_fallback_copies_are_independent(self):
        """Mutating returned fallback tasks leaves the constant untouched."""
        agent = TaskExtractionAgent(llm=FakeLLM(error=LLMError("down")), timeout=5)

        tasks, _ = asyncio.run(agent.extract_tasks(TRANSCRIPT))
        tasks[0].tags.append("mutated")

        assert "mutated" not in FALLBACK_TASKS[0].tags

    def test_missing_transcript(self):
        """An empty transcript is a failed response."""
        agent = TaskExtractionAgent(llm=FakeLLM(reply="[]"), timeout=5)

        resp = asyncio.run(agent.process({"transcript": ""}))

        assert resp.success is False
        assert resp.content == "Transcript missing"

    def test_missing_api_key_falls_back(self):
        """Without credentials the LLM cannot be built, so the fallback is used."""
        with patch.dict('os.environ', {'LLM_PROVIDER': 'gemini', 'GEMINI_API_KEY': ''}):
            agent = TaskExtractionAgent(timeout=5)
            tasks, source = asyncio.run(agent.extract_tasks(TRANSCRIPT))

        assert source == "fallback"
        assert len(tasks) == 3

    def test_status(self):
        """Status reports the agent name."""
        agent = TaskExtractionAgent(llm=FakeLLM(reply="[]"))
        status = agent.get_status()

        assert status["name"] == "task_extractor"
        assert status["is_active"] is True
        assert agent.test_connection() is True
