"""
Career advice generator.

Builds a prompt from the user's data, asks the LLM for a structured JSON
reply (advertising the Notion and LinkedIn tools), and validates whatever
comes back against ``services.advice_schemas``.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from config.settings import Settings
from models import Education, Goal, Profile, Skill
from services.advice_schemas import (
    ADVICE_TOOLS,
    CREATE_NOTION_PAGE,
    OPTIMIZE_LINKEDIN_PROFILE,
    RESPONSE_SCHEMAS,
    AdviceResponse,
    AdviceTask,
    CareerAdvice,
    LinkedInOptimization,
    tool_invocations_adapter,
)
from utils.exceptions import ParseError
from utils.prompt_loader import PromptLoader

logger = logging.getLogger(__name__)

KNOWN_TOOLS = {CREATE_NOTION_PAGE, OPTIMIZE_LINKEDIN_PROFILE}

TEMPLATES = {
    AdviceTask.ADVICE: "career_advice",
    AdviceTask.LINKEDIN_OPTIMIZE: "linkedin_optimize",
}


@dataclass
class CareerSnapshot:
    """Everything the model sees about the user."""
    profile: Profile
    skills: List[Skill] = field(default_factory=list)
    education: List[Education] = field(default_factory=list)
    goals: List[Goal] = field(default_factory=list)
    notion_connected: bool = False


def format_skills(skills: List[Skill]) -> str:
    return ", ".join(f"{s.name} (Level: {s.level}/5)" for s in skills) or "-"


def format_education(education: List[Education]) -> str:
    return ", ".join(f"{e.degree or '-'} - {e.institution}" for e in education) or "-"


def format_goals(goals: List[Goal]) -> str:
    return ", ".join(f"{g.title} ({g.status})" for g in goals) or "-"


def _strip_code_fences(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else ""
        if text.rstrip().endswith("```"):
            text = text.rstrip()[:-3]
    return text.strip()


def _load_json_object(text: str) -> Dict[str, Any]:
    try:
        data = json.loads(_strip_code_fences(text))
    except json.JSONDecodeError as e:
        raise ParseError(f"Model reply is not valid JSON: {e}")
    if not isinstance(data, dict):
        raise ParseError("Model reply is not a JSON object")
    return data


class AdviceGenerator:
    """
    Calls the LLM and turns its reply into an ``AdviceResponse``.

    Args:
        settings: Application settings (used to build the LLM on first use)
        llm: Object with ``invoke_with_tools(system_prompt, human_prompt, tools, schema)``;
            defaults to ``LLMService``
        prompt_loader: Template loader
    """

    def __init__(
        self,
        settings: Settings,
        llm: Optional[Any] = None,
        prompt_loader: Optional[PromptLoader] = None,
    ):
        self.settings = settings
        self._llm = llm
        self.prompts = prompt_loader or PromptLoader()

    @property
    def llm(self):
        if self._llm is None:
            # Imported lazily so the API starts without provider credentials
            from utils.llm_service import LLMService
            self._llm = LLMService(self.settings)
        return self._llm

    def build_prompt(self, snapshot: CareerSnapshot, task: AdviceTask) -> str:
        profile = snapshot.profile
        values = {
            "full_name": profile.full_name or "",
            "current_role": profile.current_role or "",
            "target_role": profile.target_role or "",
            "bio": profile.bio or "",
            "skills": format_skills(snapshot.skills),
            "education": format_education(snapshot.education),
            "goals": format_goals(snapshot.goals),
            "notion_status": "Connected" if snapshot.notion_connected else "Not connected",
        }
        return self.prompts.load_advice(TEMPLATES[task], **values)

    def parse_response(
        self,
        task: AdviceTask,
        text: str,
        raw_tool_calls: List[Dict[str, Any]],
    ) -> AdviceResponse:
        """
        Validate the model reply for ``task``.

        Tool calls with unknown names are dropped; known tools must carry
        valid arguments.

        Raises:
            ParseError: Invalid JSON, schema mismatch, or no usable payload
        """
        known_calls = []
        for call in raw_tool_calls:
            if call.get("name") in KNOWN_TOOLS:
                known_calls.append(call)
            else:
                logger.warning("Ignoring unknown tool call: %s", call.get("name"))

        try:
            tool_calls = tool_invocations_adapter.validate_python(known_calls)
        except PydanticValidationError as e:
            raise ParseError(f"Tool call arguments do not match the declared schema: {e}")

        response = AdviceResponse(task=task, tool_calls=tool_calls)
        has_text = bool(text and text.strip())

        try:
            if task == AdviceTask.ADVICE:
                if has_text:
                    response.advice = CareerAdvice.model_validate(_load_json_object(text))
                elif not tool_calls:
                    raise ParseError("Model returned neither advice nor tool calls")
            else:
                linkedin_calls = response.calls_named(OPTIMIZE_LINKEDIN_PROFILE)
                if linkedin_calls:
                    response.linkedin = linkedin_calls[0].args
                elif has_text:
                    response.linkedin = LinkedInOptimization.model_validate(_load_json_object(text))
                else:
                    raise ParseError("Model returned no LinkedIn optimization")
        except PydanticValidationError as e:
            raise ParseError(f"Model reply does not match the {task.value} schema: {e}")

        return response

    def generate(self, snapshot: CareerSnapshot, task: AdviceTask = AdviceTask.ADVICE) -> Optional[AdviceResponse]:
        """
        Run one advice request.

        Returns:
            The validated response, or None if anything failed (the LLM
            call, JSON parsing, schema validation). Callers treat None as
            "advice unavailable".
        """
        try:
            system_prompt = self.prompts.load_advice("system")
            prompt = self.build_prompt(snapshot, task)
            reply = self.llm.invoke_with_tools(
                system_prompt=system_prompt,
                human_prompt=prompt,
                tools=ADVICE_TOOLS,
                schema=RESPONSE_SCHEMAS[task],
            )
            return self.parse_response(task, reply.text, reply.tool_calls)
        except ParseError as e:
            logger.error("Could not parse %s response: %s", task.value, e)
            return None
        except Exception:
            logger.exception("LLM call failed for %s", task.value)
            return None
