"""Custom verifications that can be registered on a BackupMirror."""

import os
import logging
from typing import Tuple

from ..utils.formatters import format_file_size

logger = logging.getLogger(__name__)


def _tree_totals(root: str) -> Tuple[int, int]:
    """Count files and bytes below a directory, skipping unreadable entries."""
    file_count = 0
    total_size = 0
    for directory, _, files in os.walk(root):
        for name in files:
            try:
                total_size += os.path.getsize(os.path.join(directory, name))
                file_count += 1
            except OSError as e:
                logger.debug(f"Skipping {name}: {e}")
    return file_count, total_size


def log_summary(source: str, target: str, debug: bool) -> None:
    """Log file counts and total sizes of the source and target trees."""
    logger.info("Summary:")
    source_files, source_size = _tree_totals(source)
    target_files, target_size = _tree_totals(target)
    logger.info(f"Source: {source} ({source_files} files, {format_file_size(source_size)})")
    logger.info(f"Target: {target} ({target_files} files, {format_file_size(target_size)})")
    if debug:
        logger.debug(f"Size difference: {target_size - source_size} bytes")
