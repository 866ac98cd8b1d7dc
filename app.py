import json
import logging

from flask import Flask
from flask_cors import CORS

import config
from controllers.list_api_controller import ListApiController
from controllers.list_controller import ListController
from models.record import Record
from routes import init_routes

logger = logging.getLogger(__name__)


def load_records(path):
    """Read a JSON array of records from disk."""
    with open(path, encoding="utf-8") as f:
        records = json.load(f)
    if not isinstance(records, list):
        raise ValueError(f"{path} must contain a JSON array of records")
    return records


def create_app(records=None, page_size=None):
    """Application factory pattern for better testing and configuration.

    Args:
        records: Optional initial records. If not provided, config.LIST_DATA_FILE
            is loaded when set.
        page_size: Optional page size override. If not provided, uses config default.
    """
    app = Flask(__name__)
    app.config["SECRET_KEY"] = config.SECRET_KEY

    # Enable CORS for all routes
    CORS(app)

    list_controller = ListController(Record, row_per_page=page_size)
    if records is None and config.LIST_DATA_FILE:
        records = load_records(config.LIST_DATA_FILE)
        logger.info(f"Loaded {len(records)} records from {config.LIST_DATA_FILE}")
    if records is not None:
        list_controller.list = records

    api_controller = ListApiController(list_controller)
    app.extensions["list_api_controller"] = api_controller

    # Initialize routes
    init_routes(app, api_controller)

    return app


# === Main ===
if __name__ == "__main__":
    import os
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    debug_mode = os.getenv('FLASK_ENV') != 'production'
    create_app().run(host=config.HOST, port=config.PORT, debug=debug_mode)
