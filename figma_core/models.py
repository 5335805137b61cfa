"""
Pydantic模型定义

Raw models mirror the subset of the Figma REST document schema read by the
simplifier. Output models serialise with camelCase keys and never emit null.
"""
from typing import Optional, List, Dict, Any, Union
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

Number = Union[int, float]
OverrideKey = Union[int, str]


class FigmaModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


# Raw document models
class Color(FigmaModel):
    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 1.0


class GradientStop(FigmaModel):
    color: Color
    position: float = 0.0


class Paint(FigmaModel):
    type: str
    visible: bool = True
    color: Optional[Color] = None
    gradient_stops: List[GradientStop] = []
    image_ref: Optional[str] = None


class BoundingBox(FigmaModel):
    x: Number = 0
    y: Number = 0
    width: Number = 0
    height: Number = 0


class TypeStyle(FigmaModel):
    font_family: Optional[str] = None
    font_style: Optional[str] = None
    font_weight: Optional[Number] = None
    font_size: Optional[Number] = None
    text_align_horizontal: Optional[str] = None
    text_align_vertical: Optional[str] = None


class RawNode(FigmaModel):
    id: str
    name: str = ""
    type: str = ""
    visible: bool = True
    children: Optional[List["RawNode"]] = None

    # geometry
    absolute_bounding_box: Optional[BoundingBox] = None
    corner_radius: Optional[Number] = None

    # paints
    fills: List[Paint] = []
    strokes: List[Paint] = []
    stroke_weight: Optional[Number] = None

    # auto layout
    layout_mode: Optional[str] = None
    item_spacing: Optional[Number] = None
    padding_top: Optional[Number] = None
    padding_right: Optional[Number] = None
    padding_bottom: Optional[Number] = None
    padding_left: Optional[Number] = None
    primary_axis_align_items: Optional[str] = None

    # text, only meaningful when characters is set
    characters: Optional[str] = None
    style: Optional[TypeStyle] = None
    character_style_overrides: Optional[List[Optional[OverrideKey]]] = None
    style_override_table: Optional[Dict[str, TypeStyle]] = None

    component_id: Optional[str] = None

    @property
    def is_hidden(self) -> bool:
        return self.visible is False


# Output models
class OutputModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> Dict[str, Any]:
        """Serialise with camelCase keys, dropping unset fields instead of writing null"""
        return self.model_dump(by_alias=True, exclude_none=True)


class Frame(OutputModel):
    x: Number
    y: Number
    width: Number
    height: Number


class Padding(OutputModel):
    top: Optional[Number] = None
    right: Optional[Number] = None
    bottom: Optional[Number] = None
    left: Optional[Number] = None


class Layout(OutputModel):
    mode: str
    spacing: Optional[Number] = None
    padding: Padding
    alignment: Optional[str] = None


class GradientFill(OutputModel):
    type: str
    colors: List[str]


class Stroke(OutputModel):
    color: str
    weight: Optional[Number] = None


class TextStyle(OutputModel):
    font_size: Optional[Number] = None
    font_weight: Optional[Number] = None
    color: Optional[str] = None
    text_align_horizontal: Optional[str] = None
    text_align_vertical: Optional[str] = None


class StyleOverride(OutputModel):
    font_family: Optional[str] = None
    font_style: Optional[str] = None
    font_weight: Optional[Number] = None
    font_size: Optional[Number] = None


class BoldRange(OutputModel):
    start: int
    end: int
    text: str
    font_weight: Optional[Number] = None
    font_style: Optional[str] = None


class SimplifiedNode(OutputModel):
    id: str
    name: str
    type: str
    frame: Optional[Frame] = None
    layout: Optional[Layout] = None
    fill: Optional[str] = None
    gradient_fill: Optional[GradientFill] = None
    fill_type: Optional[str] = None
    stroke: Optional[Stroke] = None
    corner_radius: Optional[Number] = None
    text: Optional[str] = None
    text_style: Optional[TextStyle] = None
    character_style_overrides: Optional[List[Optional[OverrideKey]]] = None
    style_override_table: Optional[Dict[str, StyleOverride]] = None
    bold_ranges: Optional[List[BoldRange]] = None
    children: Optional[List["SimplifiedNode"]] = None
    component_id: Optional[str] = None
    is_image_node: Optional[bool] = None


RawNode.model_rebuild()
SimplifiedNode.model_rebuild()
