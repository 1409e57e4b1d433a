"""
Spec Manager - Persists the canonical Content Specification

Responsibilities:
- Persist content_spec.json as the camelCase wire document
- Track versions with a short content hash per snapshot
- Provide spec history/audit trail and rollback

This is the only contract between the pipeline and its persistence layer.
"""
import hashlib
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from modsmith.schemas import ContentSpec

logger = logging.getLogger(__name__)


class SpecVersion(BaseModel):
    """A versioned snapshot of the spec"""
    version: str
    spec: ContentSpec
    timestamp: datetime
    spec_hash: str
    notes: Optional[str] = None


class SpecManager:
    """Persists the canonical Content Specification with versioning"""

    def __init__(self, spec_dir: Path):
        """
        Initialize Spec Manager

        Args:
            spec_dir: Directory that holds content_spec.json and history/
        """
        self.spec_dir = Path(spec_dir)
        self.spec_dir.mkdir(parents=True, exist_ok=True)

        self.current_spec_path = self.spec_dir / "content_spec.json"
        self.history_dir = self.spec_dir / "history"
        self.history_dir.mkdir(exist_ok=True)

        self._current_spec: Optional[ContentSpec] = None
        self._version_counter = self._load_version_counter()

    def save(self, spec: ContentSpec, notes: str = "Specification saved") -> str:
        """
        Persist a spec as the current version

        Args:
            spec: Content Specification to persist
            notes: Version notes

        Returns:
            Version ID (e.g., "v1")
        """
        self._current_spec = spec
        return self._save_version(notes)

    def load_current_spec(self) -> Optional[ContentSpec]:
        """Load the current spec from disk"""
        if self.current_spec_path.exists():
            spec_data = json.loads(self.current_spec_path.read_text())
            self._current_spec = ContentSpec.model_validate(spec_data)
            return self._current_spec
        return None

    def get_current_spec(self) -> Optional[ContentSpec]:
        """Get the current spec (from memory or disk)"""
        if self._current_spec is None:
            return self.load_current_spec()
        return self._current_spec

    def _load_version_counter(self) -> int:
        """Initialize version counter based on existing history files."""
        counters = []
        for version_file in self.history_dir.glob("v*.json"):
            try:
                counters.append(int(version_file.stem.lstrip("v")))
            except ValueError:
                continue
        return max(counters, default=0)

    def _save_version(self, notes: str) -> str:
        if self._current_spec is None:
            raise ValueError("No current spec to save")

        self._version_counter += 1
        version_id = f"v{self._version_counter}"
        timestamp = datetime.now(timezone.utc)

        spec_dict = self._current_spec.to_document()
        self.current_spec_path.write_text(json.dumps(spec_dict, indent=2))

        history_entry = {
            "version": version_id,
            "timestamp": timestamp.isoformat(),
            "spec_hash": self._hash_spec(spec_dict),
            "notes": notes,
            "spec": spec_dict,
        }
        (self.history_dir / f"{version_id}.json").write_text(json.dumps(history_entry, indent=2))

        logger.info(f"[SpecManager] ✓ Saved {version_id}: {notes}")
        return version_id

    def _hash_spec(self, spec_dict: Dict) -> str:
        """Compute hash of spec for change detection"""
        spec_str = json.dumps(spec_dict, sort_keys=True)
        return hashlib.sha256(spec_str.encode()).hexdigest()[:16]

    def get_version_history(self) -> List[Dict[str, Any]]:
        """Get list of all spec versions, oldest first"""
        history = []
        version_files = sorted(self.history_dir.glob("v*.json"), key=lambda p: int(p.stem.lstrip("v")))
        for version_file in version_files:
            with open(version_file, "r") as f:
                history.append(json.load(f))
        return history

    def get_version(self, version_id: str) -> SpecVersion:
        """
        Load one snapshot

        Raises:
            FileNotFoundError: If version doesn't exist
        """
        version_file = self.history_dir / f"{version_id}.json"
        if not version_file.exists():
            raise FileNotFoundError(f"Version {version_id} not found")

        with open(version_file, "r") as f:
            data = json.load(f)
        return SpecVersion(
            version=data["version"],
            spec=ContentSpec.model_validate(data["spec"]),
            timestamp=datetime.fromisoformat(data["timestamp"]),
            spec_hash=data["spec_hash"],
            notes=data.get("notes"),
        )

    def rollback_to_version(self, version_id: str) -> ContentSpec:
        """
        Rollback to a previous version

        Args:
            version_id: Version to roll back to (e.g., "v3")

        Returns:
            The rolled-back spec

        Raises:
            FileNotFoundError: If version doesn't exist
        """
        snapshot = self.get_version(version_id)
        self._current_spec = snapshot.spec
        self._save_version(f"Rollback to {version_id}")
        return self._current_spec


# Export
__all__ = ["SpecManager", "SpecVersion"]
