"""
Unit tests for AdviceGenerator: prompt building and strict reply parsing.
"""

import sys
from pathlib import Path

# Add project root to Python path (for direct invocation)
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import json

import pytest

from models import Education, Goal, Profile, Skill
from services.advice_generator import (
    AdviceGenerator,
    CareerSnapshot,
    format_education,
    format_goals,
    format_skills,
)
from services.advice_schemas import (
    ADVICE_TOOLS,
    CAREER_ADVICE_SCHEMA,
    LINKEDIN_OPTIMIZATION_SCHEMA,
    AdviceTask,
)
from tests.helpers import ADVICE_JSON, LINKEDIN_ARGS, FakeLLM
from utils.exceptions import ParseError
from utils.llm_service import LLMReply


def make_snapshot(notion_connected=False):
    return CareerSnapshot(
        profile=Profile(
            full_name="Budi",
            current_role="Backend Developer",
            target_role="Engineering Manager",
            bio="Payments",
        ),
        skills=[Skill(name="Go", level=4, category="Teknik")],
        education=[Education(institution="ITB", degree="BSc")],
        goals=[Goal(title="Lead a team", status="pending")],
        notion_connected=notion_connected,
    )


@pytest.fixture
def generator(settings):
    return AdviceGenerator(settings, llm=FakeLLM())


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

class TestFormatting:

    def test_skills(self):
        skills = [Skill(name="Go", level=4), Skill(name="SQL", level=2)]
        assert format_skills(skills) == "Go (Level: 4/5), SQL (Level: 2/5)"

    def test_education_and_goals(self):
        assert format_education([Education(institution="ITB", degree="BSc")]) == "BSc - ITB"
        assert format_goals([Goal(title="Lead", status="completed")]) == "Lead (completed)"

    def test_empty_collections(self):
        assert format_skills([]) == "-"
        assert format_education([]) == "-"
        assert format_goals([]) == "-"


class TestBuildPrompt:

    def test_advice_prompt_includes_user_data(self, generator):
        prompt = generator.build_prompt(make_snapshot(notion_connected=True), AdviceTask.ADVICE)

        assert "Go (Level: 4/5)" in prompt
        assert "Engineering Manager" in prompt
        assert "Lead a team (pending)" in prompt
        assert "Notion Connection Status: Connected" in prompt

    def test_linkedin_prompt(self, generator):
        prompt = generator.build_prompt(make_snapshot(), AdviceTask.LINKEDIN_OPTIMIZE)
        assert "Budi" in prompt
        assert "optimizeLinkedInProfile" in prompt


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

class TestParseResponse:

    def test_advice_json(self, generator):
        response = generator.parse_response(AdviceTask.ADVICE, ADVICE_JSON, [])

        assert response.advice.analysis == "Strong backend foundation."
        assert response.advice.short_term == ["Lead code reviews"]
        assert response.tool_calls == []

    def test_code_fenced_json(self, generator):
        response = generator.parse_response(AdviceTask.ADVICE, f"```json\n{ADVICE_JSON}\n```", [])
        assert response.advice.long_term == ["Manage a team"]

    def test_invalid_json(self, generator):
        with pytest.raises(ParseError):
            generator.parse_response(AdviceTask.ADVICE, "Here is your advice: be great", [])

    def test_schema_mismatch(self, generator):
        with pytest.raises(ParseError):
            generator.parse_response(AdviceTask.ADVICE, '{"analysis": "only this"}', [])

    def test_missing_full_markdown(self, generator):
        reply = (
            '{"analysis": "a", "shortTerm": ["s"], "mediumTerm": ["m"],'
            ' "longTerm": ["l"], "motivation": "m"}'
        )
        with pytest.raises(ParseError):
            generator.parse_response(AdviceTask.ADVICE, reply, [])

    def test_json_array_is_rejected(self, generator):
        with pytest.raises(ParseError):
            generator.parse_response(AdviceTask.ADVICE, "[1, 2]", [])

    def test_notion_tool_call(self, generator):
        calls = [{"name": "createNotionPage", "args": {"title": "Roadmap", "planContent": "1. Learn"}}]

        response = generator.parse_response(AdviceTask.ADVICE, ADVICE_JSON, calls)

        assert len(response.tool_calls) == 1
        assert response.tool_calls[0].args.title == "Roadmap"
        assert response.tool_calls[0].args.plan_content == "1. Learn"

    def test_tool_call_without_text(self, generator):
        calls = [{"name": "createNotionPage", "args": {"title": "Roadmap", "planContent": "1. Learn"}}]
        response = generator.parse_response(AdviceTask.ADVICE, "", calls)
        assert response.advice is None
        assert len(response.tool_calls) == 1

    def test_unknown_tool_is_dropped(self, generator):
        calls = [{"name": "deleteEverything", "args": {}}]
        response = generator.parse_response(AdviceTask.ADVICE, ADVICE_JSON, calls)
        assert response.tool_calls == []

    def test_known_tool_with_bad_args(self, generator):
        calls = [{"name": "createNotionPage", "args": {"title": "Roadmap"}}]
        with pytest.raises(ParseError):
            generator.parse_response(AdviceTask.ADVICE, ADVICE_JSON, calls)

    def test_empty_advice_reply(self, generator):
        with pytest.raises(ParseError):
            generator.parse_response(AdviceTask.ADVICE, "   ", [])

    def test_linkedin_from_tool_call(self, generator):
        calls = [{"name": "optimizeLinkedInProfile", "args": LINKEDIN_ARGS}]

        response = generator.parse_response(AdviceTask.LINKEDIN_OPTIMIZE, "", calls)

        assert response.linkedin.headline == LINKEDIN_ARGS["headline"]
        assert response.linkedin.skills_to_highlight == ["Go", "Mentoring"]

    def test_linkedin_from_text(self, generator):
        response = generator.parse_response(AdviceTask.LINKEDIN_OPTIMIZE, json.dumps(LINKEDIN_ARGS), [])
        assert response.linkedin.about == LINKEDIN_ARGS["about"]

    def test_linkedin_without_payload(self, generator):
        with pytest.raises(ParseError):
            generator.parse_response(AdviceTask.LINKEDIN_OPTIMIZE, "", [])


# ---------------------------------------------------------------------------
# generate()
# ---------------------------------------------------------------------------

class TestGenerate:

    def test_passes_tools_and_schema(self, settings):
        llm = FakeLLM(LLMReply(text=ADVICE_JSON))
        generator = AdviceGenerator(settings, llm=llm)

        response = generator.generate(make_snapshot(), AdviceTask.ADVICE)

        assert response.advice.motivation == "Keep going!"
        call = llm.calls[0]
        assert call["tools"] == ADVICE_TOOLS
        assert call["schema"] == CAREER_ADVICE_SCHEMA
        assert "Personal Career Assistant" in call["system_prompt"]
        assert "Go (Level: 4/5)" in call["human_prompt"]

    def test_linkedin_task_uses_linkedin_schema(self, settings):
        llm = FakeLLM(LLMReply(text="", tool_calls=[{"name": "optimizeLinkedInProfile", "args": LINKEDIN_ARGS}]))

        response = AdviceGenerator(settings, llm=llm).generate(make_snapshot(), AdviceTask.LINKEDIN_OPTIMIZE)

        assert response.linkedin.headline == LINKEDIN_ARGS["headline"]
        assert llm.calls[0]["schema"] == LINKEDIN_OPTIMIZATION_SCHEMA

    def test_llm_failure_returns_none(self, settings):
        llm = FakeLLM(RuntimeError("quota exceeded"))
        assert AdviceGenerator(settings, llm=llm).generate(make_snapshot()) is None

    def test_unparseable_reply_returns_none(self, settings):
        llm = FakeLLM(LLMReply(text="I think you should learn Rust."))
        assert AdviceGenerator(settings, llm=llm).generate(make_snapshot()) is None
