#!/usr/bin/env python3
"""
cli.py
------
Shared CLI utilities and statistics for OneDiary commands.

Functions:
    setup_logger: Initialize DiaryLogger for CLI operations

Classes:
    ConversionStats: Counters for a txt or pdf import run

Usage:
    from onediary.core.cli import setup_logger, ConversionStats

    logger = setup_logger(log_dir, "pdf2md")
    stats = ConversionStats()
    stats.entries_created += 1
    print(stats.summary())
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Any, Optional

# --- Local imports ---
from onediary.core.logging_manager import DiaryLogger


# ═══════════════════════════════════════════════════════════════════════════
# LOGGER SETUP
# ═══════════════════════════════════════════════════════════════════════════

def setup_logger(log_dir: Path, component_name: str) -> DiaryLogger:
    """
    Setup logging for CLI operations.

    Args:
        log_dir: Base log directory (typically from paths.LOG_DIR)
        component_name: Component identifier for logging (e.g., 'txt2md')

    Returns:
        Configured DiaryLogger writing under <log_dir>/operations
    """
    operations_log_dir = log_dir / "operations"
    operations_log_dir.mkdir(parents=True, exist_ok=True)
    return DiaryLogger(operations_log_dir, component_name=component_name)


# ═══════════════════════════════════════════════════════════════════════════
# STATISTICS
# ═══════════════════════════════════════════════════════════════════════════

_COUNTERS = (
    "files_processed",
    "entries_parsed",
    "entries_created",
    "entries_updated",
    "entries_skipped",
    "images_imported",
    "parse_warnings",
    "errors",
)


@dataclass
class ConversionStats:
    """
    Statistics for an import run.

    Attributes:
        files_processed: Export files fully handled
        entries_parsed: Entries produced by the parser
        entries_created: New notes written
        entries_updated: Existing notes merged with new content
        entries_skipped: Existing notes left untouched (nothing to add)
        images_imported: Image attachments written
        parse_warnings: Non-fatal parser diagnostics
        errors: Entry, image or file failures
        start_time: Operation start timestamp
    """
    files_processed: int = 0
    entries_parsed: int = 0
    entries_created: int = 0
    entries_updated: int = 0
    entries_skipped: int = 0
    images_imported: int = 0
    parse_warnings: int = 0
    errors: int = 0
    start_time: datetime = field(default_factory=datetime.now)
    _duration_cached: Optional[float] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate statistics on initialization."""
        for name in _COUNTERS:
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")

    def duration(self) -> float:
        """Seconds elapsed since start_time (cached after first call)."""
        if self._duration_cached is None:
            self._duration_cached = (datetime.now() - self.start_time).total_seconds()
        return self._duration_cached

    def merge(self, other: ConversionStats) -> None:
        """Add another run's counters to this one."""
        for name in _COUNTERS:
            setattr(self, name, getattr(self, name) + getattr(other, name))

    def summary(self) -> str:
        """Get formatted summary with entry metrics."""
        parts = [
            f"{self.files_processed} files processed",
            f"{self.entries_parsed} parsed",
            f"{self.entries_created} created",
            f"{self.entries_updated} updated",
            f"{self.entries_skipped} skipped",
        ]
        if self.images_imported:
            parts.append(f"{self.images_imported} images")
        if self.parse_warnings:
            parts.append(f"{self.parse_warnings} warnings")
        parts.append(f"{self.errors} errors")
        parts.append(f"{self.duration():.2f}s")
        return ", ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        d: Dict[str, Any] = {name: getattr(self, name) for name in _COUNTERS}
        d["duration"] = self.duration()
        return d
