"""
Node lookup with API call accounting

Strategy 1 asks the nodes endpoint for the id directly (one call). Strategy 2
is the fallback: load the file, find the id among pages and their top-level
children, then fetch the whole page (two calls).
"""
import logging
from typing import Optional, List, Dict, Any
from ..errors import FigmaError, NodeNotFoundError
from .client import FigmaAPIClient

logger = logging.getLogger(__name__)

DIRECT_STRATEGY = "getNodeData"
FILE_STRATEGY = "getFile"


class StrategyTrace:
    """Records strategies and API calls made while resolving one node"""

    def __init__(self, node_id: str):
        self.node_id = node_id
        self.strategies: List[Dict[str, Any]] = []
        self.api_calls: List[str] = []
        self.errors: List[str] = []

    @property
    def used_get_file(self) -> bool:
        return FILE_STRATEGY in self.api_calls

    def attempt(self, name: str, description: str) -> Dict[str, Any]:
        entry = {"name": name, "description": description, "status": "attempting"}
        self.strategies.append(entry)
        return entry

    def call(self, api_method: str):
        self.api_calls.append(api_method)

    def fail(self, entry: Dict[str, Any], error: str):
        entry["status"] = "failed"
        entry["error"] = error
        self.errors.append(error)

    def summary(self) -> str:
        succeeded = sum(1 for s in self.strategies if s["status"] == "success")
        failed = sum(1 for s in self.strategies if s["status"] == "failed")
        return f"Attempted {len(self.strategies)} strategies: {succeeded} succeeded, {failed} failed"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodeId": self.node_id,
            "strategiesAttempted": self.strategies,
            "apiCalls": self.api_calls,
            "apiCallCount": len(self.api_calls),
            "usedGetFile": self.used_get_file,
            "errors": self.errors,
            "summary": self.summary()
        }


class NodeFetcher:
    """Resolves a node id to its raw document JSON"""

    def __init__(self, api: FigmaAPIClient):
        self.api = api

    def fetch(self, node_id: str, trace: Optional[StrategyTrace] = None) -> Dict[str, Any]:
        """
        Fetch the raw document of a node

        Args:
            node_id: Page, frame or any node id
            trace: Trace to record into

        Returns:
            Raw node JSON

        Raises:
            FigmaAPIError: Both strategies failed, the last API error is raised
            NodeNotFoundError: The node does not exist
        """
        trace = trace or StrategyTrace(node_id)

        entry = trace.attempt(DIRECT_STRATEGY, "Query the node directly via the nodes endpoint (1 API call)")
        try:
            trace.call("getNodeData")
            nodes = self.api.get_node_data(node_id)
            document = (nodes.get(node_id) or {}).get("document")
            if document:
                entry["status"] = "success"
                return document
            trace.fail(entry, "Direct query returned no node data")
        except FigmaError as e:
            logger.warning(f"[NodeFetcher] Direct query for {node_id} failed: {e}")
            trace.fail(entry, f"Direct query failed: {e}")

        entry = trace.attempt(FILE_STRATEGY, "Locate the node in the file tree, then fetch its page (2 API calls)")
        try:
            document = self._fetch_via_file(node_id, trace)
        except FigmaError as e:
            if entry["status"] == "attempting":
                trace.fail(entry, f"getFile strategy failed: {e}")
            raise
        entry["status"] = "success"
        return document

    def _fetch_via_file(self, node_id: str, trace: StrategyTrace) -> Dict[str, Any]:
        trace.call("getFile")
        file_data = self.api.get_file()

        parent_page = None
        is_page = False
        for page in file_data.get("document", {}).get("children", []):
            if page.get("id") == node_id:
                parent_page, is_page = page, True
                break
            if any(child.get("id") == node_id for child in page.get("children", [])):
                parent_page = page
                break

        if parent_page is None:
            raise NodeNotFoundError(node_id)

        trace.call("getNodeData")
        page_data = self.api.get_node_data(parent_page["id"])
        full_page = (page_data.get(parent_page["id"]) or {}).get("document")
        if not full_page:
            raise NodeNotFoundError(node_id, f"Could not fetch full data for page {parent_page['id']}")

        if is_page:
            return full_page

        for child in full_page.get("children", []):
            if child.get("id") == node_id:
                return child
        raise NodeNotFoundError(node_id, f"Could not find node data for {node_id} within the page data.")
