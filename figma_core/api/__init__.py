"""
Figma API client module
"""
from .client import FigmaAPIClient
from .node_fetcher import NodeFetcher, StrategyTrace

__all__ = ['FigmaAPIClient', 'NodeFetcher', 'StrategyTrace']
