# File: /wpquery/main.py | Version: 2.0 | Title: FastAPI App (work package queries + saved queries)
from __future__ import annotations

import importlib
import importlib.util

from fastapi import FastAPI

from wpquery.core.config import settings
from wpquery.core.error_handlers import register_query_error_handlers
from wpquery.core.logging import configure_logging
from wpquery.observability.sentry import init_sentry_if_configured

# Initialize logging & observability
configure_logging()
init_sentry_if_configured()

# App
app = FastAPI(title="Work Package Query API")


def include_if_exists(module_path: str, attr_name: str = "router") -> bool:
    spec = importlib.util.find_spec(module_path)
    if not spec:
        return False
    mod = importlib.import_module(module_path)
    router = getattr(mod, attr_name, None)
    if router is not None:
        app.include_router(router)
        return True
    return False


include_if_exists("wpquery.routers.health")
include_if_exists("wpquery.routers.work_packages")
include_if_exists("wpquery.routers.queries")

register_query_error_handlers(app)

# Optional standardized error responses
if getattr(settings, "ENABLE_STD_ERRORS", False):
    from wpquery.core.error_handlers import register_exception_handlers

    register_exception_handlers(app)
