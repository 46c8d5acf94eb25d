import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_openai import ChatOpenAI

from config.settings import Settings, settings as default_settings
from utils.langfuse_config import get_langfuse_callbacks

logger = logging.getLogger(__name__)


class LLMProvider(Enum):
    GEMINI = "gemini"
    OPENAI = "openai"
    OPENROUTER = "openrouter"
    OLLAMA = "ollama"


@dataclass
class LLMReply:
    """Text content plus any tool calls from a single model turn."""
    text: str
    tool_calls: List[Dict[str, Any]] = field(default_factory=list)


def _content_to_text(content: Any) -> str:
    # LangChain models return text in different formats
    if isinstance(content, str):
        return content
    parts = []
    for part in content or []:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type", "text") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)


class LLMService:
    """
    Provider-agnostic LLM wrapper that supports:
    - Gemini (default)
    - OpenAI
    - OpenRouter (OpenAI-compatible)
    - Ollama (local, OpenAI-compatible)
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        provider: Optional[str] = None,
        model_name: Optional[str] = None,
        temperature: Optional[float] = None,
    ):
        self.settings = settings or default_settings
        self.provider = (provider or self.settings.LLM_PROVIDER).lower()
        self.model_name = model_name or self.settings.LLM_MODEL
        self.temperature = self.settings.LLM_TEMPERATURE if temperature is None else temperature

        self.model = self._load_provider_model()

    # ---------------------------------------------------------------------
    # Provider Loader
    # ---------------------------------------------------------------------
    def _load_provider_model(self):
        provider = self.provider

        # ★ GOOGLE GEMINI
        if provider == LLMProvider.GEMINI.value:
            return ChatGoogleGenerativeAI(
                model=self.model_name,
                temperature=self.temperature,
                google_api_key=self.settings.GEMINI_API_KEY,
            )

        # ★ OPENAI (native)
        if provider == LLMProvider.OPENAI.value:
            return ChatOpenAI(
                api_key=self.settings.OPENAI_API_KEY,
                model=self.model_name,
                temperature=self.temperature,
            )

        # ★ OPENROUTER (OpenAI-compatible API)
        if provider == LLMProvider.OPENROUTER.value:
            return ChatOpenAI(
                api_key=self.settings.OPENROUTER_API_KEY,
                base_url="https://openrouter.ai/api/v1",
                model=self.model_name,
                temperature=self.temperature,
            )

        # ★ OLLAMA (OpenAI-compatible)
        if provider == LLMProvider.OLLAMA.value:
            return ChatOpenAI(
                api_key="ollama",  # not used
                base_url="http://localhost:11434/v1",
                model=self.model_name,
                temperature=self.temperature,
            )

        raise ValueError(f"Unsupported LLM provider: {provider}")

    # ---------------------------------------------------------------------
    # JSON + tools
    # ---------------------------------------------------------------------
    def invoke_with_tools(
        self,
        system_prompt: str,
        human_prompt: str,
        tools: List[Dict[str, Any]],
        schema: Dict[str, Any],
    ) -> LLMReply:
        """
        Ask for a JSON reply matching ``schema`` while advertising ``tools``.

        Args:
            system_prompt: System instruction
            human_prompt: User prompt
            tools: Function declarations (name / description / parameters)
            schema: JSON schema the text reply must follow

        Returns:
            LLMReply with the raw text and the tool calls as
            ``{"name": ..., "args": {...}}`` dicts

        Raises:
            Whatever the provider client raises; callers decide the policy.
        """
        messages = [
            SystemMessage(content=self._inject_json_rules(system_prompt, schema)),
            HumanMessage(content=human_prompt),
        ]

        bound = self.model.bind_tools([{"type": "function", "function": tool} for tool in tools])
        response = bound.invoke(messages, config={"callbacks": get_langfuse_callbacks(self.settings)})

        tool_calls = [
            {"name": call.get("name"), "args": call.get("args") or {}}
            for call in (getattr(response, "tool_calls", None) or [])
        ]
        return LLMReply(text=_content_to_text(response.content), tool_calls=tool_calls)

    # ---------------------------------------------------------------------
    # JSON Enforcement Layer
    # ---------------------------------------------------------------------
    def _inject_json_rules(self, system_prompt: str, schema: Dict[str, Any]) -> str:
        """
        Ensures all providers return the correct JSON, whether or not they
        support a native JSON response mode alongside tools.
        """

        return f"""
{system_prompt}

Unless you are calling a tool, you MUST return ONLY valid JSON matching this schema:

{json.dumps(schema, indent=2)}

Rules:
- Output **only** a JSON object.
- No commentary, no markdown, no code fences.
- Do not explain the JSON, only output it.
- Keys and structure must match the schema exactly.
"""
