from __future__ import annotations

import atexit
import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .allowances.controller import register as register_allowances
from .container import build_container
from .core.constants import DEFAULT_IMPORT_WORKERS
from .database.bootstrap import apply_schema, list_tables
from .imports.controller import register as register_imports
from .leaves.controller import register as register_leaves
from .payroll.controller import register as register_payroll

logger = logging.getLogger(__name__)


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info(
        "[payroll-system] settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(db_config, schema_path=schema_path)
        logger.info("[payroll-system] schema ready (tables=%s)", len(list_tables(db_config)))

    container = build_container(
        db_config=db_config,
        import_workers=int(getattr(settings, "IMPORT_WORKERS", DEFAULT_IMPORT_WORKERS)),
    )
    app.extensions["payroll_container"] = container
    atexit.register(container.import_runner.shutdown)

    register_payroll(app, container)
    register_imports(app, container)
    register_leaves(app, container)
    register_allowances(app, container)

    return app
