import logging
from typing import Optional

from flask import Flask

from src.presentation_assembly.config import Settings, check_environment, load_settings
from src.presentation_assembly.routes import slides_bp
from src.presentation_assembly.store import DocumentStore

logger = logging.getLogger(__name__)


def create_app(store: Optional[DocumentStore] = None, settings: Optional[Settings] = None) -> Flask:
    """Build the Flask app; the Google store is created on first use unless given."""
    settings = settings or load_settings()
    app = Flask(__name__)
    app.config["SETTINGS"] = settings
    app.config["DOCUMENT_STORE"] = store
    # slide payloads can be large
    app.config["MAX_CONTENT_LENGTH"] = 2 * 1024 * 1024
    app.register_blueprint(slides_bp)
    return app


def main() -> None:
    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    check_environment(settings)
    app = create_app(settings=settings)
    logger.info("Google Slides MCP server running at http://%s:%s", settings.host, settings.port)
    logger.info("POST /slides - create presentation from content, returns editUrl")
    logger.info("POST /mcp - MCP JSON-RPC endpoint (tools/list, tools/call, initialize)")
    logger.info("GET /tools, POST /tools/call - list and execute tools as plain JSON")
    app.run(host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
