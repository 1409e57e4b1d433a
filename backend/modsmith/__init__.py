"""
modsmith - deterministic content compilation for Fabric mods

text -> intent -> Content Specification -> expanded family -> execution plan
-> texture plan -> materialized file set
"""
import logging
from typing import Optional

__version__ = "0.1.0"


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Attach a single stream handler to the 'modsmith' logger

    Args:
        level: Level name; defaults to config.LOG_LEVEL

    Returns:
        The configured 'modsmith' logger
    """
    from config import LOG_LEVEL

    logger = logging.getLogger("modsmith")
    logger.setLevel((level or LOG_LEVEL).upper())
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
    return logger


from .pipeline import ContentPipeline, PipelineResult, PipelineStatus, PipelineError, generate_from_prompt  # noqa: E402

__all__ = [
    "__version__",
    "configure_logging",
    "ContentPipeline",
    "PipelineResult",
    "PipelineStatus",
    "PipelineError",
    "generate_from_prompt",
]
