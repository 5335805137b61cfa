"""
Core functionality module
"""
from .api import FigmaAPIClient, NodeFetcher, StrategyTrace
from .color import rgb_to_hex
from .simplify import (
    NodeSimplifier,
    TreeAnnotator,
    find_image_nodes,
    parse_bold_ranges,
    simplify_document
)
from .url_parser import parse_figma_url, FigmaLocation

__all__ = [
    'FigmaAPIClient',
    'NodeFetcher',
    'StrategyTrace',
    'rgb_to_hex',
    'NodeSimplifier',
    'TreeAnnotator',
    'find_image_nodes',
    'parse_bold_ranges',
    'simplify_document',
    'parse_figma_url',
    'FigmaLocation'
]
