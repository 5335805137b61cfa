"""
Simplify-and-annotate pipeline over raw document JSON
"""
import logging
from typing import Optional, Dict, Any
from pydantic import ValidationError
from ..errors import NodeContractError
from ..models import RawNode
from .simplifier import NodeSimplifier
from .image_nodes import TreeAnnotator

logger = logging.getLogger(__name__)


def simplify_document(raw: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """
    Simplify a raw Figma node and mark its image nodes

    Args:
        raw: Node JSON as returned by the Figma API

    Returns:
        Simplified tree as a plain dict, None when the root is hidden

    Validation goes through pydantic's recursion guard, so a tree nested
    deeper than about 255 levels is rejected as a NodeContractError. Figma
    documents stay far below that.

    Raises:
        NodeContractError: raw does not validate as a node, or a text node
            has no style block
        AnnotationMismatchError: annotation walk diverged
    """
    try:
        original = RawNode.model_validate(raw)
    except ValidationError as e:
        node_id = raw.get("id") if isinstance(raw, dict) else None
        raise NodeContractError(node_id, f"invalid node data: {e}") from e

    simplified = NodeSimplifier().simplify(original)
    if simplified is None:
        logger.info(f"[Pipeline] Node {original.id} is hidden, nothing to simplify")
        return None

    TreeAnnotator().annotate(simplified, original)
    return simplified.to_dict()
