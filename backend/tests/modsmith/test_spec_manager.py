"""
Tests for SpecManager

The SpecManager persists the canonical Content Specification with versioning.
"""
import pytest
import tempfile
import shutil
import json
from pathlib import Path

from modsmith.core.spec_manager import SpecManager
from modsmith.schemas import ContentSpec, ModItem, WoodType


class TestSpecManager:
    """Test suite for SpecManager"""

    @pytest.fixture
    def temp_dir(self):
        """Create temporary directory for specs"""
        temp = Path(tempfile.mkdtemp())
        yield temp
        if temp.exists():
            shutil.rmtree(temp)

    @pytest.fixture
    def spec_manager(self, temp_dir):
        """Create SpecManager instance"""
        return SpecManager(spec_dir=temp_dir)

    @pytest.fixture
    def sample_spec(self):
        """Create a sample Content Specification"""
        return ContentSpec(
            mod_name="Ruby Mod",
            items=[ModItem(id="ruby", name="Ruby", color_hint="red")],
        )

    def test_spec_manager_initialization(self, spec_manager, temp_dir):
        """Test that SpecManager initializes correctly"""
        assert spec_manager.spec_dir == temp_dir
        assert spec_manager.current_spec_path.name == "content_spec.json"
        assert spec_manager.history_dir.name == "history"

    def test_get_current_spec_none(self, spec_manager):
        """Test getting spec when none exists"""
        assert spec_manager.get_current_spec() is None

    def test_save_returns_version(self, spec_manager, sample_spec):
        """Test that the first save is v1"""
        assert spec_manager.save(sample_spec) == "v1"
        assert spec_manager.save(sample_spec, notes="again") == "v2"

    def test_failed_save_does_not_consume_version(self, spec_manager, sample_spec):
        """Test that saving without a current spec raises and leaves numbering intact"""
        with pytest.raises(ValueError):
            spec_manager._save_version("nothing to save")

        assert spec_manager.get_version_history() == []
        assert spec_manager.save(sample_spec) == "v1"

    def test_saved_document_is_camel_case(self, spec_manager, sample_spec):
        """Test that the persisted document uses wire names"""
        spec_manager.save(sample_spec)
        document = json.loads(spec_manager.current_spec_path.read_text())

        assert document["schemaVersion"] == 1
        assert document["modName"] == "Ruby Mod"
        assert document["items"][0]["colorHint"] == "red"

    def test_spec_persistence(self, spec_manager, sample_spec):
        """Test that specs are persisted to disk"""
        spec_manager.save(sample_spec)

        # Create new manager instance
        new_manager = SpecManager(spec_dir=spec_manager.spec_dir)
        loaded_spec = new_manager.get_current_spec()

        assert loaded_spec == sample_spec

    def test_version_counter_resumes(self, spec_manager, sample_spec):
        """Test that a new manager continues numbering from history"""
        spec_manager.save(sample_spec)
        spec_manager.save(sample_spec)

        new_manager = SpecManager(spec_dir=spec_manager.spec_dir)
        assert new_manager.save(sample_spec) == "v3"

    def test_version_history_order(self, spec_manager, sample_spec):
        """Test that history sorts numerically, oldest first"""
        for n in range(11):
            spec_manager.save(sample_spec, notes=f"save {n}")

        history = spec_manager.get_version_history()
        assert [entry["version"] for entry in history] == [f"v{n}" for n in range(1, 12)]
        assert history[0]["notes"] == "save 0"
        assert len(history[0]["spec_hash"]) == 16

    def test_get_missing_version(self, spec_manager):
        """Test that an unknown version raises"""
        with pytest.raises(FileNotFoundError):
            spec_manager.get_version("v99")

    def test_rollback(self, spec_manager, sample_spec):
        """Test rolling back to an earlier snapshot"""
        spec_manager.save(sample_spec)
        wood_spec = ContentSpec(wood_types=[WoodType(id="maple", display_name="Maple")])
        spec_manager.save(wood_spec)

        restored = spec_manager.rollback_to_version("v1")

        assert restored == sample_spec
        assert spec_manager.get_current_spec() == sample_spec
        history = spec_manager.get_version_history()
        assert history[-1]["version"] == "v3"
        assert history[-1]["notes"] == "Rollback to v1"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
