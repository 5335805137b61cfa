"""
Tree simplification module
"""
from .bold_ranges import parse_bold_ranges, is_bold_style
from .simplifier import NodeSimplifier
from .image_nodes import find_image_nodes, TreeAnnotator, IMAGE_NODE_RULES
from .pipeline import simplify_document

__all__ = [
    'parse_bold_ranges',
    'is_bold_style',
    'NodeSimplifier',
    'find_image_nodes',
    'TreeAnnotator',
    'IMAGE_NODE_RULES',
    'simplify_document'
]
