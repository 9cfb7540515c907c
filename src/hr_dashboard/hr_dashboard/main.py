from __future__ import annotations

import importlib
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.log import configure_logging
from .container import Container, build_container
from .core.constants import DEFAULT_PAGE_SIZE
from .settings.controller import register as register_settings


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["PAGE_SIZE"] = getattr(settings, "PAGE_SIZE", DEFAULT_PAGE_SIZE)

    logger = configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    api_config = getattr(settings, "API_CONFIG")
    if app.config["DEBUG"]:
        logger.info("settings=%s api=%s", settings_module, api_config.get("base_url"))

    if container is None:
        container = build_container(api_config=api_config)

    register_settings(app, container)

    return app
