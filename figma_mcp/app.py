"""
FastAPI application configuration
"""
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from config import Config
from . import endpoints
from .dispatcher import RequestDispatcher


def create_app(dispatcher: Optional[RequestDispatcher] = None) -> FastAPI:
    """
    Create FastAPI application

    Args:
        dispatcher: Dispatcher to serve, a default one is created lazily otherwise

    Returns:
        FastAPI application instance
    """
    if dispatcher is not None:
        endpoints.dispatcher = dispatcher

    app = FastAPI(title="Figma MCP Server", version=Config.SERVER_VERSION)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(endpoints.router)

    return app
