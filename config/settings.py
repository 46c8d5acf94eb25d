from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from dotenv import load_dotenv

# Load .env file into os.environ BEFORE pydantic reads it
# This ensures ALL environment variables are available to both:
# - pydantic-settings (reads from os.environ)
# - Langfuse SDK (reads from os.environ)
# - LangChain provider clients (GOOGLE_API_KEY / OPENAI_API_KEY)
load_dotenv()


class Settings(BaseSettings):
    # Database (embedded SQLite file by default)
    DATABASE_URL: str = "sqlite:///career_assistant.db"

    # Public base address of this app, used to build OAuth callback URLs
    APP_URL: Optional[str] = None

    # API server
    API_HOST: str = "127.0.0.1"
    API_PORT: int = 8000
    ALLOWED_ORIGINS: str = "*"

    # Where the Streamlit UI reaches the API
    API_BASE_URL: str = "http://127.0.0.1:8000"

    # Notion (note service)
    NOTION_CLIENT_ID: Optional[str] = None
    NOTION_CLIENT_SECRET: Optional[str] = None
    # Pre-provisioned integration secret, backfilled as the profile token
    NOTION_INTERNAL_SECRET: Optional[str] = None
    NOTION_API_VERSION: str = "2022-06-28"

    # GitHub (code host)
    GITHUB_CLIENT_ID: Optional[str] = None
    GITHUB_CLIENT_SECRET: Optional[str] = None

    # LinkedIn (professional network, simulated)
    LINKEDIN_CLIENT_ID: str = "MOCK_ID"

    # LLM Configuration
    LLM_PROVIDER: str = "gemini"
    LLM_MODEL: str = "gemini-2.5-flash"
    LLM_TEMPERATURE: float = 0.7

    # Provider keys
    GEMINI_API_KEY: Optional[str] = None
    OPENAI_API_KEY: Optional[str] = None
    OPENROUTER_API_KEY: Optional[str] = None

    # Langfuse Observability
    LANGFUSE_PUBLIC_KEY: Optional[str] = None
    LANGFUSE_SECRET_KEY: Optional[str] = None
    LANGFUSE_HOST: str = "https://cloud.langfuse.com"
    LANGFUSE_ENABLED: bool = False

    # Outbound HTTP
    HTTP_TIMEOUT_SECONDS: float = 30.0

    LOG_LEVEL: str = "INFO"

    # pydantic-settings v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",  # ignore unknown env vars instead of raising errors
    )

    def get_secret(self, name: str) -> Optional[str]:
        """Return a configured string value with surrounding whitespace removed, or None if blank."""
        value = getattr(self, name, None)
        if value is None:
            return None
        value = str(value).strip()
        return value or None


settings = Settings()
