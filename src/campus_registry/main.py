"""
Entry point for the Campus Registry backend
"""

import logging
from dotenv import load_dotenv

from campus_registry.config.settings import get_settings
from campus_registry.app import create_app


def main():
    # Load environment variables from .env file
    load_dotenv()

    settings = get_settings()
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))
    logger = logging.getLogger(__name__)

    import uvicorn
    logger.info(f"Starting Campus Registry on port {settings.port} ({settings.backend} backend)")
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
