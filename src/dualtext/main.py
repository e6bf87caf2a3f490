"""
Main entry points for DualText Translator: the local HTTP service and the CLI.
"""

import asyncio
import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
import httpx
import structlog
import uvicorn

from . import __version__
from .api.routes import router as api_router
from .config import AppConfig, load_config
from .plugin import DualTextTranslator, StaticSelection
from .presentation import ConsolePresenter
from .stores import BaseSettingsStore, FileSettingsStore, SettingsStoreError
from .translator import TranslationClient, TranslationFailure


# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.dev.ConsoleRenderer(colors=False),
    ],
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger(__name__)


def configure_logging(debug: bool = False, level: int = logging.INFO) -> None:
    """Set up stdlib logging that structlog renders through."""
    logging.basicConfig(
        level=logging.DEBUG if debug else level,
        format="%(message)s",
        stream=sys.stderr,
    )


def build_translator(
    config: AppConfig,
    store: Optional[BaseSettingsStore] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> DualTextTranslator:
    """Wire the settings store and translation client together."""
    return DualTextTranslator(
        store=store or FileSettingsStore.from_config(config),
        client=TranslationClient.from_config(config, transport=transport),
    )


def create_app(
    config: Optional[AppConfig] = None,
    store: Optional[BaseSettingsStore] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        config: Application configuration (loaded on startup if omitted)
        store: Settings store override
        transport: HTTP transport override for the translation endpoint
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan manager for FastAPI application."""
        logger.info("Starting DualText Translator service")

        app_config = config or load_config()
        translator = build_translator(app_config, store=store, transport=transport)
        try:
            await translator.load()
        except SettingsStoreError as e:
            logger.error("Failed to load settings", error=str(e))
            raise

        app.state.config = app_config
        app.state.translator = translator
        logger.info("Service startup completed", endpoint=app_config.endpoint_url)
        try:
            yield
        finally:
            logger.info("Shutting down DualText Translator service")
            await translator.unload()

    app = FastAPI(
        title="DualText Translator",
        description="Translate text selections and show them alongside the original",
        version=__version__,
        lifespan=lifespan,
    )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler."""
        logger.error(
            "Unhandled exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "message": "Internal server error",
                    "type": "internal_error",
                    "code": "internal_error",
                }
            },
        )

    @app.get("/health")
    async def health_check(request: Request):
        """Health check endpoint."""
        translator = getattr(request.app.state, "translator", None)
        return {
            "status": "healthy" if translator and translator.loaded else "starting",
            "version": __version__,
            "configured": bool(translator and translator.settings.is_configured()),
        }

    @app.get("/")
    async def root():
        """Root endpoint with API information."""
        return {
            "name": "DualText Translator",
            "version": __version__,
            "endpoints": {
                "health": "/health",
                "translate": "/v1/translate",
                "settings": "/v1/settings",
            },
        }

    app.include_router(api_router, prefix="/v1")
    return app


async def run_translate(config: AppConfig, text: str, presenter: Optional[ConsolePresenter] = None) -> int:
    """Translate ``text`` once and print it; returns a process exit code."""
    translator = build_translator(config)
    await translator.load()
    try:
        outcome = await translator.translate_selection(StaticSelection(text), presenter or ConsolePresenter())
    finally:
        await translator.unload()

    if outcome is None or isinstance(outcome, TranslationFailure):
        return 1
    return 0


async def run_settings(config: AppConfig, args: Any, stream=None) -> int:
    """Show or update stored settings."""
    stream = stream or sys.stdout
    translator = build_translator(config)
    await translator.load()
    try:
        changes = {
            "source_language": args.source_language,
            "target_language": args.target_language,
            "api_key": args.api_key,
        }
        if any(value is not None for value in changes.values()):
            await translator.update_settings(**changes)

        for key, value in translator.settings.masked().items():
            stream.write(f"{key}: {value}\n")
    finally:
        await translator.unload()
    return 0


def parse_args(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    import argparse

    parser = argparse.ArgumentParser(prog="dualtext", description="DualText Translator")
    parser.add_argument(
        "--config",
        type=str,
        help="Path to configuration file",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the local translation service")
    serve.add_argument("--host", type=str, help="Host to bind the server to (overrides config)")
    serve.add_argument("--port", type=int, help="Port to run the server on (overrides config)")

    translate = subparsers.add_parser("translate", help="Translate text (reads stdin if no text is given)")
    translate.add_argument("text", nargs="*", help="Text to translate")

    settings = subparsers.add_parser("settings", help="Show or change translation settings")
    settings.add_argument("--source-language", type=str, help="Language of the original text, e.g. en")
    settings.add_argument("--target-language", type=str, help="Language to translate into, e.g. fr")
    settings.add_argument("--api-key", type=str, help="API key for the translation service")

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    args = parse_args(argv)
    # One-shot commands only report warnings unless debugging
    configure_logging(args.debug, logging.INFO if args.command == "serve" else logging.WARNING)

    config = load_config(args.config)
    if args.debug:
        config = config.model_copy(update={"debug": True})

    if args.command == "serve":
        uvicorn.run(
            create_app(config),
            host=args.host or config.host,
            port=args.port or config.port,
            log_config=None,
            access_log=config.debug,
        )
        return 0

    try:
        if args.command == "translate":
            text = " ".join(args.text) if args.text else sys.stdin.read()
            return asyncio.run(run_translate(config, text))

        return asyncio.run(run_settings(config, args))
    except SettingsStoreError as e:
        print(f"Settings error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
