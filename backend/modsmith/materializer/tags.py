"""
Tag Files - additive contributions to shared tag files

Every tag file this project writes sets "replace": false and keeps its values
sorted and deduplicated. Writing into a tree that already holds the same tag
file merges values instead of overwriting them.
"""
import json
from typing import Any, Dict, Iterable, List

from modsmith.schemas import TagContribution

RESOURCES_PREFIX = "src/main/resources/"


def tag_document(values: Iterable[str]) -> Dict[str, Any]:
    return {"replace": False, "values": sorted(set(values))}


def tag_path(contribution: TagContribution) -> str:
    return RESOURCES_PREFIX + contribution.path


def is_shared_tag_path(path: str) -> bool:
    return "/tags/" in path and path.endswith(".json")


def merge_tag_documents(existing: Dict[str, Any], incoming: Dict[str, Any]) -> Dict[str, Any]:
    """
    Union two tag documents

    Values from both sides survive; the result is sorted and never replaces.
    """
    values: List[str] = []
    for doc in (existing, incoming):
        values.extend(v for v in doc.get("values", []) if isinstance(v, str))
    return tag_document(values)


def merge_tag_text(existing_text: str, incoming_text: str) -> str:
    """Merge serialized tag files; unparseable existing content is replaced by the incoming values."""
    incoming = json.loads(incoming_text)
    try:
        existing = json.loads(existing_text)
    except json.JSONDecodeError:
        existing = {}
    if not isinstance(existing, dict):
        existing = {}
    return json.dumps(merge_tag_documents(existing, incoming), indent=2) + "\n"


__all__ = [
    "RESOURCES_PREFIX",
    "tag_document",
    "tag_path",
    "is_shared_tag_path",
    "merge_tag_documents",
    "merge_tag_text",
]
