import logging

import uvicorn
from fastapi import FastAPI

from ajaxkit.config import Settings, settings
from ajaxkit.context import AjaxContext, build_context
from ajaxkit.exception_handlers import register_exception_handlers
from ajaxkit.log import configure_logging
from ajaxkit.routes import router as ajax_router

logger = logging.getLogger(__name__)


def create_app(app_settings: Settings = settings, context: AjaxContext | None = None) -> FastAPI:
    """Create the FastAPI application."""
    configure_logging(json_output=app_settings.log_json, level=logging.DEBUG if app_settings.debug else logging.INFO)

    app = FastAPI(
        title=app_settings.app_name,
        description="AJAX endpoint and page bootstrap code",
        debug=app_settings.debug,
    )

    context = context or build_context(app_settings)
    # The client library posts its calls to the AJAX route unless configured otherwise
    if not context.options.get("core.request.uri"):
        context.options.set("core.request.uri", app_settings.request_path)
    app.state.ajax = context

    register_exception_handlers(app)
    app.include_router(ajax_router, prefix=app_settings.request_path, tags=["Ajax"])

    if app_settings.debug:
        logger.info("Running in debug mode")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=settings.debug)
