"""
MCP server module
"""
from .framer import MessageFramer, FramedMessage
from .dispatcher import RequestDispatcher
from .tools import FigmaToolbox
from .stdio import StdioServer
from .app import create_app

__all__ = ['MessageFramer', 'FramedMessage', 'RequestDispatcher', 'FigmaToolbox', 'StdioServer', 'create_app']
