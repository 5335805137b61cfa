"""
Node simplification module
"""
from typing import Optional, List
from ..color import rgb_to_hex
from ..errors import NodeContractError
from ..models import (
    RawNode,
    Paint,
    SimplifiedNode,
    Frame,
    Layout,
    Padding,
    GradientFill,
    Stroke,
    TextStyle,
    StyleOverride
)
from .bold_ranges import parse_bold_ranges

ICON_PREFIXES = ("ic/", "icon/")
EXPORT_PREFIX = "exp_"
FILL_TYPES = ("SOLID", "IMAGE", "GRADIENT_LINEAR")


def is_icon_name(name: Optional[str]) -> bool:
    return bool(name) and name.startswith(ICON_PREFIXES)


def is_export_name(name: Optional[str]) -> bool:
    return bool(name) and name.startswith(EXPORT_PREFIX)


def collapses_into_child(node: RawNode) -> bool:
    """A GROUP with exactly one child is replaced by that child"""
    return node.type == "GROUP" and bool(node.children) and len(node.children) == 1


def first_visible_paint(paints: List[Paint], types) -> Optional[Paint]:
    for paint in paints:
        if paint.visible and paint.type in types:
            return paint
    return None


class NodeSimplifier:
    """Turns raw Figma nodes into the compact SimplifiedNode projection"""

    def simplify(self, node: Optional[RawNode]) -> Optional[SimplifiedNode]:
        """
        Simplify a node and its visible descendants

        Args:
            node: Raw node, may be None

        Returns:
            Simplified node, or None for a missing or hidden node
        """
        if node is None or node.is_hidden:
            return None

        if collapses_into_child(node):
            return self.simplify(node.children[0])

        result = SimplifiedNode(id=node.id, name=node.name, type=node.type)

        if node.absolute_bounding_box:
            box = node.absolute_bounding_box
            result.frame = Frame(x=box.x, y=box.y, width=box.width, height=box.height)

        if node.layout_mode:
            result.layout = Layout(
                mode=node.layout_mode,
                spacing=node.item_spacing,
                padding=Padding(
                    top=node.padding_top,
                    right=node.padding_right,
                    bottom=node.padding_bottom,
                    left=node.padding_left
                ),
                alignment=node.primary_axis_align_items
            )

        self._apply_fill(node, result)

        stroke = first_visible_paint(node.strokes, ("SOLID",))
        if stroke is not None and stroke.color is not None:
            result.stroke = Stroke(color=rgb_to_hex(stroke.color), weight=node.stroke_weight)

        # 0 and unset look the same in the document JSON, so 0 is dropped
        if node.corner_radius:
            result.corner_radius = node.corner_radius

        if node.characters:
            self._apply_text(node, result)

        if node.children and not (is_icon_name(node.name) or is_export_name(node.name)):
            children = [self.simplify(child) for child in node.children]
            children = [child for child in children if child is not None]
            if children:
                result.children = children

        if node.component_id:
            result.component_id = node.component_id

        return result

    def _apply_fill(self, node: RawNode, result: SimplifiedNode):
        """First visible SOLID / IMAGE / GRADIENT_LINEAR fill wins"""
        fill = first_visible_paint(node.fills, FILL_TYPES)
        if fill is None:
            return

        if fill.type == "SOLID" and fill.color is not None:
            result.fill = rgb_to_hex(fill.color)
        elif fill.type == "GRADIENT_LINEAR":
            result.gradient_fill = GradientFill(
                type="GRADIENT_LINEAR",
                colors=[rgb_to_hex(stop.color) for stop in fill.gradient_stops]
            )
        elif fill.type == "IMAGE":
            result.fill_type = "IMAGE"

    def _apply_text(self, node: RawNode, result: SimplifiedNode):
        if node.style is None:
            raise NodeContractError(node.id, "text node has characters but no style block")

        result.text = node.characters.strip()

        # Resolved separately from the node fill: an IMAGE fill may win there
        # while the text colour still comes from the first visible SOLID
        text_fill = first_visible_paint(node.fills, ("SOLID",))
        color = rgb_to_hex(text_fill.color) if text_fill is not None and text_fill.color is not None else None

        result.text_style = TextStyle(
            font_size=node.style.font_size,
            font_weight=node.style.font_weight,
            color=color,
            text_align_horizontal=node.style.text_align_horizontal,
            text_align_vertical=node.style.text_align_vertical
        )

        if node.character_style_overrides:
            result.character_style_overrides = list(node.character_style_overrides)

        if node.style_override_table:
            result.style_override_table = {
                key: StyleOverride(
                    font_family=style.font_family,
                    font_style=style.font_style,
                    font_weight=style.font_weight,
                    font_size=style.font_size
                )
                for key, style in node.style_override_table.items()
            }

        if node.character_style_overrides and node.style_override_table:
            bold_ranges = parse_bold_ranges(
                node.characters,
                node.character_style_overrides,
                node.style_override_table
            )
            if bold_ranges:
                result.bold_ranges = bold_ranges
