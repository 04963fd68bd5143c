# agents/base_agent.py
"""Base agent class with a standard response type, per-agent logging and timeouts."""
from abc import ABC, abstractmethod
from typing import Dict, Any, Optional
import asyncio
import logging
import time
from pydantic import BaseModel, Field


class AgentResponse(BaseModel):
    """Standardized response format for all agents."""
    success: bool = Field(..., description="Whether the operation was successful")
    content: Any = Field(..., description="The response content")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Additional metadata")


class BaseAgent(ABC):
    """
    Base class for agents.

    Features:
      - async abstract process() method
      - process_with_timeout() turning timeouts and exceptions into failed responses
      - per-agent logger
      - convenience factories for success/failure AgentResponse
    """

    def __init__(self, name: str, description: str, timeout: Optional[float] = None, logger: Optional[logging.Logger] = None):
        self.name = name
        self.description = description
        self.is_active = True
        self._timeout = timeout  # default per-agent timeout in seconds (can be overridden per-call)
        self.logger = logger or logging.getLogger(f"insightboard.agent.{self.name}")

    @abstractmethod
    async def process(self, input_data: Any, context: Optional[Dict[str, Any]] = None) -> AgentResponse:
        """
        Process the input and return an AgentResponse.

        Subclasses MUST implement this as an async method.
        """
        raise NotImplementedError()

    async def process_with_timeout(self, input_data: Any, context: Optional[Dict[str, Any]] = None,
                                   timeout: Optional[float] = None) -> AgentResponse:
        """Run process() with an optional timeout, logging how long it took.

        Never raises: a timeout or an exception becomes a failed AgentResponse.
        """
        t = timeout if timeout is not None else self._timeout
        start = time.time()
        self.logger.info(f"Starting processing in {self.name}")
        try:
            if t:
                resp = await asyncio.wait_for(self.process(input_data, context), timeout=t)
            else:
                resp = await self.process(input_data, context)
        except asyncio.TimeoutError:
            self.logger.error(f"Process timed out after {t} seconds")
            return self.failure_response("Operation timed out")
        except Exception as e:
            elapsed = time.time() - start
            self.logger.error(f"{self.name} failed after {elapsed:.2f}s: {str(e)}", exc_info=True)
            return self.failure_response(f"Processing failed: {str(e)}")

        elapsed = time.time() - start
        status = "succeeded" if resp.success else "failed"
        self.logger.info(f"{self.name} {status} in {elapsed:.2f}s")
        return resp

    def success_response(self, content: Any, metadata: Optional[Dict[str, Any]] = None) -> AgentResponse:
        """Convenience to create a successful AgentResponse."""
        return AgentResponse(success=True, content=content, metadata=metadata or {})

    def failure_response(self, content: Any, metadata: Optional[Dict[str, Any]] = None) -> AgentResponse:
        """Convenience to create a failed AgentResponse."""
        return AgentResponse(success=False, content=content, metadata=metadata or {})

    def get_status(self) -> Dict[str, Any]:
        """Return the current status of the agent (for health endpoints / dashboards)."""
        return {
            "name": self.name,
            "description": self.description,
            "is_active": self.is_active
        }
