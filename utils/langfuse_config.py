"""
Langfuse configuration.

When enabled, LLM calls carry a Langfuse ``CallbackHandler`` so every
advice request shows up as a trace.

How it works:
1. config/settings.py loads .env into os.environ via load_dotenv()
2. Langfuse SDK auto-discovers credentials from os.environ
3. CallbackHandler() can be created without passing credentials

Usage:
    callbacks = get_langfuse_callbacks(settings)
    model.invoke(messages, config={"callbacks": callbacks})
"""

import logging
from typing import Any, List

from config.settings import Settings

logger = logging.getLogger(__name__)

_initialized = False


def is_langfuse_enabled(settings: Settings) -> bool:
    """
    Check if Langfuse observability is enabled.

    Returns:
        bool: True if enabled and configured, False otherwise
    """
    if not settings.LANGFUSE_ENABLED:
        return False

    if not settings.LANGFUSE_PUBLIC_KEY or not settings.LANGFUSE_SECRET_KEY:
        logger.warning("LANGFUSE_ENABLED=true but credentials missing in .env")
        return False

    return True


def get_langfuse_callbacks(settings: Settings) -> List[Any]:
    """Return ``[CallbackHandler()]`` when Langfuse is enabled, else an empty list."""
    global _initialized

    if not is_langfuse_enabled(settings):
        return []

    from langfuse import Langfuse
    from langfuse.langchain import CallbackHandler

    if not _initialized:
        # Initialize singleton (credentials auto-discovered from os.environ)
        Langfuse()
        _initialized = True
        logger.info("Langfuse initialized (host: %s)", settings.LANGFUSE_HOST)

    return [CallbackHandler()]
