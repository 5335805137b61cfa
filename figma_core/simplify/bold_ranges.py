"""
Bold range extraction for text nodes
"""
from typing import Optional, List, Mapping, Sequence
from ..models import TypeStyle, BoldRange, OverrideKey

BOLD_WEIGHT_THRESHOLD = 500
BOLD_STYLE_MARKERS = ("Bold", "Medium")


def is_bold_style(style: TypeStyle) -> bool:
    """Weight >= 500, or a font style name containing Bold/Medium"""
    if style.font_weight is not None and style.font_weight >= BOLD_WEIGHT_THRESHOLD:
        return True
    if style.font_style:
        return any(marker in style.font_style for marker in BOLD_STYLE_MARKERS)
    return False


def _lookup(key: Optional[OverrideKey], table: Mapping[str, TypeStyle]) -> Optional[TypeStyle]:
    # Figma uses 0 for "no override" and string keys in the table
    if not key:
        return None
    return table.get(str(key))


def parse_bold_ranges(
    text: str,
    override_indices: Sequence[Optional[OverrideKey]],
    override_table: Mapping[str, TypeStyle]
) -> List[BoldRange]:
    """
    解析文本中的加粗范围

    Walks the characters that have an override index and groups consecutive
    bold characters into one range. ``start``/``end`` are inclusive indices
    into the untrimmed text; characters past the end of the shorter of
    ``text`` and ``override_indices`` count as not overridden.

    Args:
        text: Text content
        override_indices: Per-character override keys (``characterStyleOverrides``)
        override_table: Override key to style (``styleOverrideTable``)

    Returns:
        Bold ranges in left-to-right order, never None
    """
    if not text or not override_indices or not override_table:
        return []

    ranges: List[BoldRange] = []
    start: Optional[int] = None
    end = 0
    run_style: Optional[TypeStyle] = None

    def close_run():
        ranges.append(BoldRange(
            start=start,
            end=end,
            text=text[start:end + 1],
            font_weight=run_style.font_weight,
            font_style=run_style.font_style
        ))

    for i in range(min(len(text), len(override_indices))):
        style = _lookup(override_indices[i], override_table)
        if style is not None and is_bold_style(style):
            if start is None:
                start, run_style = i, style
            end = i
        elif start is not None:
            close_run()
            start, run_style = None, None

    if start is not None:
        close_run()

    return ranges
