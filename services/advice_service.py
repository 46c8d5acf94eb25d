"""
Advice orchestration.

Gathers the user's data, runs the generator and performs the side
effects for the tools the model invoked (a ``createNotionPage`` call
becomes a Notion export).
"""

import logging
from typing import Any, Dict, List

from repositories.education_repository import EducationRepository
from repositories.goal_repository import GoalRepository
from repositories.skill_repository import SkillRepository
from services.advice_generator import AdviceGenerator, CareerSnapshot
from services.advice_schemas import CREATE_NOTION_PAGE, AdviceResponse, AdviceTask
from services.notion_exporter import NotionExporter, plan_to_advice
from services.profile_service import ProfileService
from utils.exceptions import CareerAssistantError, ExternalServiceError

logger = logging.getLogger(__name__)


class AdviceService:
    """Runs advice requests end to end."""

    def __init__(
        self,
        profile_service: ProfileService,
        skills: SkillRepository,
        education: EducationRepository,
        goals: GoalRepository,
        generator: AdviceGenerator,
        exporter: NotionExporter,
    ):
        self.profile_service = profile_service
        self.skills = skills
        self.education = education
        self.goals = goals
        self.generator = generator
        self.exporter = exporter

    def snapshot(self) -> CareerSnapshot:
        profile = self.profile_service.get()
        return CareerSnapshot(
            profile=profile,
            skills=self.skills.list_all(),
            education=self.education.list_all(),
            goals=self.goals.list_all(),
            notion_connected=bool(profile.notion_token),
        )

    def run(self, task: AdviceTask = AdviceTask.ADVICE) -> Dict[str, Any]:
        """
        Generate advice and act on tool invocations.

        Returns:
            Dict with ``task``, ``advice``, ``linkedin_optimization``,
            ``tool_calls`` and ``notion_exports``

        Raises:
            ExternalServiceError: The generator produced no usable result
        """
        snapshot = self.snapshot()
        response = self.generator.generate(snapshot, task)
        if response is None:
            raise ExternalServiceError("Advice is currently unavailable. Please try again later.", service="llm")

        exports = self._run_notion_exports(response, snapshot.notion_connected)

        return {
            "task": response.task.value,
            "advice": response.advice.model_dump(by_alias=True) if response.advice else None,
            "linkedin_optimization": (
                response.linkedin.model_dump(by_alias=True) if response.linkedin else None
            ),
            "tool_calls": [call.model_dump(by_alias=True) for call in response.tool_calls],
            "notion_exports": exports,
        }

    def _run_notion_exports(self, response: AdviceResponse, notion_connected: bool) -> List[Dict[str, Any]]:
        results = []
        for call in response.calls_named(CREATE_NOTION_PAGE):
            if not notion_connected:
                logger.warning("Model requested a Notion page but Notion is not connected")
                results.append({"title": call.args.title, "success": False, "error": "Notion not connected"})
                continue
            try:
                page = self.exporter.export(plan_to_advice(call.args.plan_content), call.args.title)
                results.append({"title": call.args.title, "success": True, "page_id": page.get("id")})
            except CareerAssistantError as e:
                logger.error("Automatic Notion export failed: %s", e.message)
                results.append({"title": call.args.title, "success": False, "error": e.message})
        return results
