"""
Centralized Prompt Templates
All LLM prompts are defined here for better maintainability and consistency.
"""
from typing import Dict, List

from .breakdown import BreakdownPrompts


class Prompts:
    """Centralized prompt templates organized by category"""

    # ==========================================
    # TASK BREAKDOWN PROMPTS
    # ==========================================

    @staticmethod
    def get_breakdown_system_prompt() -> str:
        """Get system prompt for task breakdown"""
        return BreakdownPrompts.get_system_prompt()

    @staticmethod
    def get_breakdown_user_prompt_template() -> str:
        """Get the user message template for task breakdown"""
        return BreakdownPrompts.get_user_prompt_template()

    @staticmethod
    def build_breakdown_messages(description: str) -> List[Dict[str, str]]:
        """Build system and user messages for a task breakdown request"""
        return BreakdownPrompts.build_messages(description)


__all__ = ["Prompts", "BreakdownPrompts"]
