"""
Image node classification and annotation

An image node is a node that can be exported as a bitmap on its own:

1. name starts with ``exp_``: the whole subtree is one export unit
2. a visible IMAGE fill
3. name starts with ``ic/`` or ``icon/``
"""
from typing import Optional, List, Set, Tuple
from ..errors import AnnotationMismatchError
from ..models import RawNode, SimplifiedNode
from .simplifier import is_icon_name, is_export_name, collapses_into_child

IMAGE_NODE_RULES = [
    "Node name starts with 'exp_' (export group, the whole node is one image)",
    "Node has a visible IMAGE fill",
    "Node name starts with 'ic/' or 'icon/' (icon node)"
]


def has_image_fill(node: RawNode) -> bool:
    return any(fill.type == "IMAGE" and fill.visible for fill in node.fills)


def find_image_nodes(node: Optional[RawNode]) -> List[RawNode]:
    """
    查找所有可下载的图片节点

    Args:
        node: Root of the raw subtree

    Returns:
        Matching nodes in pre-order. A node matching both the fill rule and
        the icon rule appears twice.
    """
    nodes: List[RawNode] = []
    if node is None or node.is_hidden:
        return nodes

    if is_export_name(node.name):
        nodes.append(node)
        return nodes

    if has_image_fill(node):
        nodes.append(node)

    if is_icon_name(node.name):
        nodes.append(node)

    for child in node.children or []:
        nodes.extend(find_image_nodes(child))
    return nodes


def _resolve(node: RawNode) -> Optional[Tuple[RawNode, List[str]]]:
    """
    Follow the simplifier's group collapse from ``node``.

    Returns:
        (node the simplified output was built from, ids of collapsed groups),
        or None when the simplifier drops the node
    """
    wrapper_ids: List[str] = []
    while not node.is_hidden and collapses_into_child(node):
        wrapper_ids.append(node.id)
        node = node.children[0]
    if node.is_hidden:
        return None
    return node, wrapper_ids


class TreeAnnotator:
    """Stamps isImageNode onto a simplified tree"""

    def annotate(self, simplified: Optional[SimplifiedNode], original: Optional[RawNode]):
        """
        在简化后的数据中标记可下载的图片节点

        Args:
            simplified: Output of NodeSimplifier.simplify(original), mutated in place
            original: Raw node the tree was simplified from

        Raises:
            AnnotationMismatchError: the two trees do not line up
        """
        if simplified is None or original is None:
            return

        image_node_ids = {node.id for node in find_image_nodes(original)}

        resolved = _resolve(original)
        if resolved is None:
            raise AnnotationMismatchError(simplified.id, original.id, "Original root is hidden but was simplified")
        self._mark(simplified, resolved[0], resolved[1], image_node_ids)

    def _mark(self, simplified: SimplifiedNode, original: RawNode, wrapper_ids: List[str], image_node_ids: Set[str]):
        if simplified.id != original.id:
            raise AnnotationMismatchError(simplified.id, original.id)

        # A collapsed exp_ group is classified under its own id
        if original.id in image_node_ids or any(wrapper_id in image_node_ids for wrapper_id in wrapper_ids):
            simplified.is_image_node = True

        if not simplified.children:
            return

        counterparts = [r for r in map(_resolve, original.children or []) if r is not None]
        if len(counterparts) != len(simplified.children):
            raise AnnotationMismatchError(
                simplified.id,
                original.id,
                f"Node {original.id} has {len(counterparts)} visible children "
                f"but its simplified form has {len(simplified.children)}"
            )

        for child, (raw_child, child_wrappers) in zip(simplified.children, counterparts):
            self._mark(child, raw_child, child_wrappers, image_node_ids)
