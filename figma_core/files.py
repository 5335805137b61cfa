"""
Output file helpers
"""
import os
import re
import json
import logging
from typing import Dict, Any, List

logger = logging.getLogger(__name__)

SIMPLIFIED_PREFIX = "sim-"
IMAGE_FILE_PATTERN = re.compile(r"\.(png|jpg|jpeg|gif|webp)$", re.IGNORECASE)


def sanitize_name(name: str) -> str:
    """Lower-case name made of [a-z0-9_] only"""
    name = re.sub(r"[\s/]", "_", name or "")
    return re.sub(r"[^a-zA-Z0-9_]", "", name).lower()


def sanitize_node_id(node_id: str) -> str:
    return node_id.replace(":", "-")


def suggested_image_filename(node_id: str, node_name: str, extension: str = "png") -> str:
    return f"{sanitize_name(node_name)}_{sanitize_node_id(node_id)}.{extension}"


def save_simplified(tree: Dict[str, Any], node_id: str, node_name: str, output_dir: str) -> str:
    """
    Write a simplified tree as ``sim-<name>_<id>.json``

    Returns:
        Path of the written file
    """
    os.makedirs(output_dir, exist_ok=True)
    filename = f"{SIMPLIFIED_PREFIX}{sanitize_name(node_name)}_{sanitize_node_id(node_id)}.json"
    filepath = os.path.join(output_dir, filename)
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(tree, f, ensure_ascii=False, indent=2)
    logger.info(f"[Files] Saved simplified tree to {filepath}")
    return filepath


def list_output_files(output_dir: str) -> Dict[str, List[str]]:
    """列出输出目录中的简化 JSON 文件和图片文件"""
    if not os.path.isdir(output_dir):
        return {"jsonFiles": [], "imageFiles": []}

    entries = os.listdir(output_dir)
    json_files = sorted(f for f in entries if f.startswith(SIMPLIFIED_PREFIX) and f.endswith(".json"))
    image_files = sorted(f for f in entries if IMAGE_FILE_PATTERN.search(f))
    return {"jsonFiles": json_files, "imageFiles": image_files}
