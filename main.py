#!/usr/bin/env python3
"""Entry point for the Crawl4AI bridge (MCP over stdio, or HTTP)."""

import argparse
import asyncio
import sys

from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from utils.logger import get_logger

logger = get_logger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Crawl4AI bridge exposing the crawl_urls tool")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="stdio serves MCP to a host process; http starts the FastAPI server",
    )
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind to (http only)")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to (http only)")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload (http only)")
    return parser.parse_args(argv)


def serve_stdio() -> int:
    from server.mcp_server import run_stdio
    from tools.crawl import create_crawl_service_from_env

    try:
        service = create_crawl_service_from_env()
    except ValueError as e:
        logger.error(f"Cannot start crawl bridge: {e}")
        return 1

    try:
        asyncio.run(run_stdio(service))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    return 0


def serve_http(host: str, port: int, reload: bool) -> int:
    import uvicorn

    uvicorn.run(
        "server.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level="info",
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    if args.transport == "http":
        return serve_http(args.host, args.port, args.reload)
    return serve_stdio()


if __name__ == "__main__":
    sys.exit(main())
