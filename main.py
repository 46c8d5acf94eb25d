"""
Main entry point for the Career Assistant API.

Runs the FastAPI app with uvicorn. The Streamlit dashboard is started
separately with `streamlit run ui/app.py`.
"""

import uvicorn

from config.settings import settings
from utils.logging_config import configure_logging


def main():
    configure_logging(settings.LOG_LEVEL)
    uvicorn.run(
        "api.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
