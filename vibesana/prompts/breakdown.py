"""
Task Breakdown Prompts
Prompts for decomposing a free-text project description into a JSON task list.
"""
from typing import Dict, List


class BreakdownPrompts:
    """Prompts for AI task breakdown"""

    @staticmethod
    def get_system_prompt() -> str:
        """Get the system prompt encoding the task list output contract"""
        return """You are a project management expert. Break down user project descriptions into specific, actionable tasks.

Return your response as a JSON array of task objects with this exact structure:
[
  {
    "title": "Task title (concise, actionable)",
    "description": "Detailed description of what needs to be done",
    "priority": "low" | "medium" | "high",
    "status": "todo"
  }
]

Guidelines:
- Create 5-10 tasks maximum
- Make tasks specific and actionable
- Use appropriate priority levels (high for critical path, medium for important, low for nice-to-have)
- All tasks should start with status "todo"
- Focus on technical implementation steps
- Order tasks logically (dependencies first)

Return only the JSON array, no additional text."""

    @staticmethod
    def get_user_prompt_template() -> str:
        """Get the template for the user message"""
        return "Break down this project: {description}"

    @staticmethod
    def build_messages(description: str) -> List[Dict[str, str]]:
        """
        Build the chat messages for a breakdown request

        Args:
            description: Free-text project description, used verbatim

        Returns:
            System message followed by the user message
        """
        # str.format would choke on braces inside the description
        user_prompt = BreakdownPrompts.get_user_prompt_template().replace("{description}", description)
        return [
            {"role": "system", "content": BreakdownPrompts.get_system_prompt()},
            {"role": "user", "content": user_prompt}
        ]
