"""Main application entry point.

Runs FastAPI with NiceGUI mounted for the chat interface.
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def main() -> None:
    """Run FastAPI with NiceGUI mounted on the same server."""
    import uvicorn
    from nicegui import ui

    from verdict.api.app import create_app
    from verdict.config import get_config
    from verdict.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    config = get_config()
    app = create_app()

    # Mount NiceGUI onto FastAPI
    ui.run_with(
        app,
        title=config.app_name,
        favicon="💬",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "verdict-chat-secret"),
    )

    port = int(os.getenv("PORT", "8080"))
    logger.info(f"Starting {config.app_name} on http://localhost:{port}")
    logger.info(f"Analysis service: {config.api_base_url}")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    main()
