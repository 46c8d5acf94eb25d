"""
Structured contracts for the career advice model.

The model's reply is validated against these schemas before anything else
touches it; a reply that does not fit is a ParseError, never a partial
result.
"""

from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class AdviceTask(str, Enum):
    """What the model is asked to do"""
    ADVICE = "advice"
    LINKEDIN_OPTIMIZE = "linkedin_optimize"


CREATE_NOTION_PAGE = "createNotionPage"
OPTIMIZE_LINKEDIN_PROFILE = "optimizeLinkedInProfile"


class CareerAdvice(BaseModel):
    """Structured advice. Field names follow the JSON contract the model is given."""
    model_config = ConfigDict(populate_by_name=True)

    analysis: str
    short_term: List[str] = Field(alias="shortTerm")
    medium_term: List[str] = Field(alias="mediumTerm")
    long_term: List[str] = Field(alias="longTerm")
    motivation: str
    full_markdown: str = Field(alias="fullMarkdown")


class LinkedInOptimization(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    headline: str
    about: str
    experience_tips: List[str] = Field(alias="experienceTips")
    skills_to_highlight: List[str] = Field(alias="skillsToHighlight")


class CreateNotionPageArgs(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    plan_content: str = Field(alias="planContent")


class CreateNotionPageCall(BaseModel):
    name: Literal["createNotionPage"]
    args: CreateNotionPageArgs


class OptimizeLinkedInProfileCall(BaseModel):
    name: Literal["optimizeLinkedInProfile"]
    args: LinkedInOptimization


ToolInvocation = Annotated[
    Union[CreateNotionPageCall, OptimizeLinkedInProfileCall],
    Field(discriminator="name"),
]

tool_invocations_adapter = TypeAdapter(List[ToolInvocation])


class AdviceResponse(BaseModel):
    """
    Parsed model reply: the structured payload for the task plus any tool
    invocations the model asked for.
    """
    task: AdviceTask
    advice: Optional[CareerAdvice] = None
    linkedin: Optional[LinkedInOptimization] = None
    tool_calls: List[ToolInvocation] = Field(default_factory=list)

    def calls_named(self, name: str) -> List[Any]:
        return [call for call in self.tool_calls if call.name == name]


# ---------------------------------------------------------------------
# JSON schemas given to the model
# ---------------------------------------------------------------------

CAREER_ADVICE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "analysis": {"type": "string"},
        "shortTerm": {"type": "array", "items": {"type": "string"}},
        "mediumTerm": {"type": "array", "items": {"type": "string"}},
        "longTerm": {"type": "array", "items": {"type": "string"}},
        "motivation": {"type": "string"},
        "fullMarkdown": {"type": "string"},
    },
    "required": ["analysis", "shortTerm", "mediumTerm", "longTerm", "motivation", "fullMarkdown"],
}

LINKEDIN_OPTIMIZATION_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "headline": {"type": "string", "description": "Suggested LinkedIn headline"},
        "about": {"type": "string", "description": "Suggested LinkedIn 'About' text"},
        "experienceTips": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Tips for improving the experience section",
        },
        "skillsToHighlight": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Keywords / skills to put forward",
        },
    },
    "required": ["headline", "about", "experienceTips", "skillsToHighlight"],
}

CREATE_NOTION_PAGE_TOOL: Dict[str, Any] = {
    "name": CREATE_NOTION_PAGE,
    "description": (
        "Creates a new career plan page in Notion. "
        "Only use this when the user has connected Notion."
    ),
    "parameters": {
        "type": "object",
        "properties": {
            "title": {"type": "string", "description": "Title of the Notion page"},
            "planContent": {
                "type": "string",
                "description": "Detailed career plan content to put on the page.",
            },
        },
        "required": ["title", "planContent"],
    },
}

OPTIMIZE_LINKEDIN_PROFILE_TOOL: Dict[str, Any] = {
    "name": OPTIMIZE_LINKEDIN_PROFILE,
    "description": "Optimizes the user's LinkedIn profile based on their data.",
    "parameters": LINKEDIN_OPTIMIZATION_SCHEMA,
}

ADVICE_TOOLS = [CREATE_NOTION_PAGE_TOOL, OPTIMIZE_LINKEDIN_PROFILE_TOOL]

RESPONSE_SCHEMAS = {
    AdviceTask.ADVICE: CAREER_ADVICE_SCHEMA,
    AdviceTask.LINKEDIN_OPTIMIZE: LINKEDIN_OPTIMIZATION_SCHEMA,
}
