"""
Rookie Draft Board - Main Entry Point

Serves the draft board HTTP API with aiohttp.
"""
import logging
import os
from logging.handlers import RotatingFileHandler

from aiohttp import web

from config import get_config
from api.server import create_app
from services.live_draft_service import LiveDraftService
from services.player_store import PlayerStore


def setup_logging():
    """Configure hybrid logging: human-readable console + structured JSON files."""
    from utils.logging import JSONFormatter

    config = get_config()
    os.makedirs(config.log_dir, exist_ok=True)

    logger = logging.getLogger('draft_board')
    logger.setLevel(getattr(logging, config.log_level.upper()))

    # Console handler - detailed format for development debugging
    console_handler = logging.StreamHandler()
    console_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
    )
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    # JSON file handler - structured logging for monitoring and analysis
    json_handler = RotatingFileHandler(
        os.path.join(config.log_dir, 'draft_board.json'),
        maxBytes=5 * 1024 * 1024,  # 5MB
        backupCount=5
    )
    json_handler.setFormatter(JSONFormatter())
    logger.addHandler(json_handler)

    # Module loggers (services.*, api.*, utils.*) and aiohttp log through root
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, config.log_level.upper()))
    if not root_logger.handlers:
        root_logger.addHandler(console_handler)
        root_logger.addHandler(json_handler)

    logger.propagate = False

    return logger


def build_app() -> web.Application:
    """Create the store, draft session and web app from configuration."""
    config = get_config()
    store = PlayerStore()
    if config.seed_sample_data:
        store.seed_sample_data()

    draft = LiveDraftService(store)
    return create_app(store=store, draft=draft)


def main():
    """Main entry point."""
    logger = setup_logging()

    config = get_config()
    logger.info("Starting Rookie Draft Board")
    logger.info(f"Environment: {config.environment}")
    logger.info(
        f"Draft: {config.draft_team_count} teams, {config.draft_rounds} rounds, {config.draft_mode} order"
    )

    try:
        web.run_app(build_app(), host=config.server_host, port=config.server_port)
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        raise
    finally:
        logger.info("Draft board stopped")


if __name__ == "__main__":
    main()
