"""
Writer - write-once emission of a materialized file set

Responsibilities:
- Write every file under the output root
- Merge shared tag files additively instead of overwriting them
- Scaffold PNGs from '.texture.json' sidecars by rasterizing the stored plan
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List

from modsmith.schemas import MaterializedFile
from modsmith.materializer.tags import is_shared_tag_path, merge_tag_text
from modsmith.materializer.textures import SIDECAR_SUFFIX, png_path_for_sidecar, render_sidecar

logger = logging.getLogger(__name__)


def write_materialized_files(files: Iterable[MaterializedFile], root: Path) -> Dict[str, Any]:
    """
    Write a file set under root

    Args:
        files: Materialized files (paths relative to root)
        root: Output directory

    Returns:
        Dictionary with the written paths and merged tag files
    """
    root = Path(root)
    written: List[str] = []
    merged: List[str] = []

    for f in files:
        target = root / f.path
        target.parent.mkdir(parents=True, exist_ok=True)

        if f.is_binary:
            target.write_bytes(f.contents)
            written.append(f.path)
            continue

        contents = f.contents
        if is_shared_tag_path(f.path) and target.exists():
            contents = merge_tag_text(target.read_text(), contents)
            merged.append(f.path)
        target.write_text(contents)
        written.append(f.path)

        if f.path.endswith(SIDECAR_SUFFIX):
            png_path = png_path_for_sidecar(f.path)
            (root / png_path).write_bytes(render_sidecar(json.loads(contents)))
            written.append(png_path)

    if merged:
        logger.info(f"[Writer] Merged {len(merged)} existing tag files")
    logger.info(f"[Writer] ✓ Wrote {len(written)} files to {root}")

    return {
        "status": "success",
        "root": str(root),
        "written": written,
        "merged_tags": merged,
    }


__all__ = ["write_materialized_files"]
