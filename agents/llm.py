# agents/llm.py
import asyncio
import logging
from typing import Optional

from google import genai
from google.genai import types
from groq import Groq
from langchain_core.messages import HumanMessage
from langchain_ollama import ChatOllama

from agents.config import config

logger = logging.getLogger(__name__)

MODEL_ENV_VARS = {
    "gemini": "GEMINI_MODEL",
    "ollama": "OLLAMA_MODEL",
    "groq": "GROQ_MODEL",
}


class LLMError(RuntimeError):
    """Raised when the language model cannot produce a usable reply."""


class LLM:
    """Simple LLM wrapper over the supported providers (gemini, ollama, groq)."""

    def __init__(
        self,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        temperature: float = 0.0,
        **kwargs
    ):
        self.provider = (provider or config.llm_provider).lower()
        if self.provider not in MODEL_ENV_VARS:
            raise LLMError(f"Unsupported LLM provider: {self.provider}")
        self.model = model or config.get(MODEL_ENV_VARS[self.provider])
        self.temperature = temperature
        self.client = self._build_client(**kwargs)

    def _build_client(self, **kwargs):
        if self.provider == "gemini":
            api_key = config.get("GEMINI_API_KEY")
            if not api_key:
                raise LLMError("GEMINI_API_KEY environment variable is required")
            return genai.Client(api_key=api_key)

        if self.provider == "groq":
            api_key = config.get("GROQ_API_KEY")
            if not api_key:
                raise LLMError("GROQ_API_KEY environment variable is required")
            return Groq(api_key=api_key)

        return ChatOllama(
            model=self.model,
            temperature=self.temperature,
            base_url=config.get("OLLAMA_HOST"),
            **kwargs
        )

    def _complete(self, prompt: str) -> Optional[str]:
        if self.provider == "gemini":
            response = self.client.models.generate_content(
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(temperature=self.temperature),
            )
            return response.text

        if self.provider == "groq":
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
            )
            return response.choices[0].message.content

        response = self.client.invoke([HumanMessage(content=prompt)])
        return response.content

    def generate(self, prompt: str) -> str:
        """Synchronous generation."""
        logger.info(f"Sending {len(prompt)} character prompt to {self.provider}/{self.model}")
        try:
            text = self._complete(prompt)
        except Exception as e:
            raise LLMError(self._describe_error(e)) from e

        if not text:
            raise LLMError("No response from LLM service")

        logger.info(f"LLM response received ({len(text)} characters)")
        return text.strip()

    async def generate_async(self, prompt: str) -> str:
        """Asynchronous generation."""
        return await asyncio.to_thread(self.generate, prompt)

    def test_connection(self) -> bool:
        """Send a trivial prompt and check the model answers with OK."""
        try:
            text = self.generate('Hello, just testing the connection. Respond with "OK".')
        except LLMError as e:
            logger.error(f"LLM connection test failed: {e}")
            return False

        connected = "OK" in text
        logger.info(f"Connection test {'passed' if connected else 'failed'}")
        return connected

    def _describe_error(self, error: Exception) -> str:
        message = str(error)
        if "API key" in message or "api_key" in message:
            return "Invalid or missing API key"
        if "quota" in message.lower():
            return "API quota exceeded"
        if "model" in message.lower():
            return "Model not available or invalid"
        return f"LLM request failed: {message}"
