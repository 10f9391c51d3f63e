"""CLI entry point for clippy-server.

This module provides the command-line interface for starting the clippy-server.
It can be invoked as `clippy-server` (via the script entry point) or
`python -m clippy_server`.
"""

import argparse
import logging
import sys

import uvicorn

from clippy_server import __version__, create_app
from clippy_server.config import ClippyServerSettings


def main() -> None:
    """Main entry point for the clippy-server CLI.

    Parses command-line arguments and starts the uvicorn server with the
    FastAPI application.
    """
    parser = argparse.ArgumentParser(
        prog="clippy-server",
        description="Headless FastAPI server for tool-augmented LLM conversations via Ollama",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"clippy-server {__version__}",
    )

    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Host to bind the server to (default: 127.0.0.1, can be set via CLIPPY_HOST)",
    )

    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to bind the server to (default: 8080, can be set via CLIPPY_PORT)",
    )

    parser.add_argument(
        "--ollama-host",
        type=str,
        default=None,
        help="Ollama server URL (default: http://localhost:11434, can be set via CLIPPY_OLLAMA_HOST)",
    )

    parser.add_argument(
        "--reply-model",
        type=str,
        default=None,
        help="Model used for replies; must support tool calling (can be set via CLIPPY_REPLY_MODEL)",
    )

    parser.add_argument(
        "--title-model",
        type=str,
        default=None,
        help="Model used for conversation titles (can be set via CLIPPY_TITLE_MODEL)",
    )

    parser.add_argument(
        "--data-dir",
        type=str,
        default=None,
        help="Base directory for all data (default: ., can be set via CLIPPY_DATA_DIR)",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO, can be set via CLIPPY_LOG_LEVEL)",
    )

    args = parser.parse_args()

    # Build settings, CLI args override environment variables
    settings_kwargs = {}
    if args.host is not None:
        settings_kwargs["host"] = args.host
    if args.port is not None:
        settings_kwargs["port"] = args.port
    if args.ollama_host is not None:
        settings_kwargs["ollama_host"] = args.ollama_host
    if args.reply_model is not None:
        settings_kwargs["reply_model"] = args.reply_model
    if args.title_model is not None:
        settings_kwargs["title_model"] = args.title_model
    if args.data_dir is not None:
        settings_kwargs["data_dir"] = args.data_dir
    if args.log_level is not None:
        settings_kwargs["log_level"] = args.log_level

    settings = ClippyServerSettings(**settings_kwargs)

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    sys.exit(main())
