"""Text Tailor: rewrite resume text for a user-described target via Claude."""

from __future__ import annotations

import logging

from resume_builder.clients.llm_client import DEFAULT_MODEL, LLMClient

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a helpful assistant that tailors resume text based on user input."

USER_PROMPT = "Tailor my resume for: {instruction}"


class TailoringError(RuntimeError):
    """The AI collaborator could not produce tailored text."""


class TextTailor:
    def __init__(
        self,
        llm: LLMClient,
        model: str = DEFAULT_MODEL,
        temperature: float = 0.3,
        max_tokens: int = 2048,
    ):
        self.llm = llm
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def tailor(self, instruction: str) -> str:
        """Return the completion for the instruction, as opaque text."""
        instruction = (instruction or "").strip()
        if not instruction:
            raise TailoringError("Please describe what to tailor your resume for")
        try:
            response = await self.llm.generate(
                prompt=USER_PROMPT.format(instruction=instruction),
                system=SYSTEM_PROMPT,
                model=self.model,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except Exception as e:
            raise TailoringError("AI generation failed") from e
        text = response.text.strip()
        logger.info("Tailored text: %d chars", len(text))
        return text
