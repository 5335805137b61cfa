"""
Figma URL parsing
"""
import re
from typing import Optional, NamedTuple
from urllib.parse import urlparse, parse_qs

FIGMA_URL_PATTERN = re.compile(r"^https?://(www\.)?figma\.com/(design|file)/([^/]+)/[^?]*(\?.*)?$")


class FigmaLocation(NamedTuple):
    file_key: Optional[str]
    node_id: Optional[str]
    is_url: bool


def parse_figma_url(value: Optional[str]) -> FigmaLocation:
    """
    从 Figma URL 中提取 fileKey 和 nodeId

    Supported forms:
        https://www.figma.com/design/{fileKey}/{fileName}?node-id={nodeId}
        https://figma.com/file/{fileKey}/{fileName}?node-id={nodeId}

    Anything that is not such a URL is returned as a bare node id.

    Args:
        value: Figma URL or node id

    Returns:
        FigmaLocation; node ids use the API form ("4:419", not "4-419")
    """
    if not value or not isinstance(value, str):
        return FigmaLocation(None, None, False)

    if not value.startswith(("http://", "https://")):
        return FigmaLocation(None, value, False)

    match = FIGMA_URL_PATTERN.match(value)
    if not match:
        return FigmaLocation(None, value, False)

    node_id = None
    node_id_values = parse_qs(urlparse(value).query).get("node-id")
    if node_id_values and node_id_values[0]:
        node_id = node_id_values[0].replace("-", ":")

    return FigmaLocation(match.group(3), node_id, True)
