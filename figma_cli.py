#!/usr/bin/env python3
"""
Figma MCP Server
Exposes the Figma simplification tools over MCP (JSON-RPC) on stdio or HTTP
"""
import sys
import signal
import logging
import argparse
from config import Config


def setup_logging(level: str, log_file=None):
    """Log to stderr, stdout carries protocol messages in stdio mode"""
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True
    )


def run_stdio():
    from figma_mcp import StdioServer
    StdioServer().serve()


def run_http(host: str, port: int):
    import uvicorn
    from figma_mcp import create_app

    def signal_handler(signum, frame):
        logging.getLogger(__name__).info(f"Received signal {signum}, shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGTERM, signal_handler)

    logging.getLogger(__name__).info(f"Figma MCP HTTP Server is running on http://{host}:{port}")
    uvicorn.run(create_app(), host=host, port=port, log_config=None)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Figma MCP Server - Figma document simplification over MCP")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="Transport: stdio (default) or http"
    )
    parser.add_argument(
        "--host",
        default=None,
        help=f"HTTP host address (default: {Config.HTTP_HOST})"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help=f"HTTP port (default: {Config.HTTP_PORT})"
    )
    parser.add_argument(
        "--config",
        default=None,
        help=f"JSON config file (default: {Config.CONFIG_FILE})"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Log level (default: LOG_LEVEL or INFO)"
    )

    args = parser.parse_args(argv)

    Config.load(args.config)
    if args.log_level:
        Config.LOG_LEVEL = args.log_level
    setup_logging(Config.LOG_LEVEL, Config.LOG_FILE)

    if args.transport == "http":
        run_http(args.host or Config.HTTP_HOST, args.port or Config.HTTP_PORT)
    else:
        run_stdio()


if __name__ == "__main__":
    main()
