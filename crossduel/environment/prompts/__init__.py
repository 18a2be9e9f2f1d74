"""Prompt templates for the LLM word source."""

from .word_prompt import WORD_SYSTEM_PROMPT, build_word_prompt

__all__ = [
    "WORD_SYSTEM_PROMPT",
    "build_word_prompt",
]
