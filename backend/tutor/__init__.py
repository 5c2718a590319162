"""Tutor module - AI tutor chat contextualized to the selected topic."""

from .index import build_system_instruction, chat_with_tutor

__all__ = ["build_system_instruction", "chat_with_tutor"]
