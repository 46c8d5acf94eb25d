"""Test doubles shared by unit and integration tests."""

from typing import Any, Dict, List

from utils.llm_service import LLMReply

ADVICE_JSON = (
    '{"analysis": "Strong backend foundation.",'
    ' "shortTerm": ["Lead code reviews"],'
    ' "mediumTerm": ["Run a small project"],'
    ' "longTerm": ["Manage a team"],'
    ' "motivation": "Keep going!",'
    ' "fullMarkdown": "# Plan"}'
)

LINKEDIN_ARGS = {
    "headline": "Backend Developer | Go & Python | Aspiring Engineering Manager",
    "about": "I build payment systems and mentor developers.",
    "experienceTips": ["Quantify the impact of the payments migration"],
    "skillsToHighlight": ["Go", "Mentoring"],
}


class FakeLLM:
    """Returns scripted replies; an Exception in the script is raised instead."""

    def __init__(self, *replies: Any):
        self.replies = list(replies)
        self.calls: List[Dict[str, Any]] = []

    def invoke_with_tools(self, system_prompt, human_prompt, tools, schema) -> LLMReply:
        self.calls.append(
            {"system_prompt": system_prompt, "human_prompt": human_prompt, "tools": tools, "schema": schema}
        )
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply
