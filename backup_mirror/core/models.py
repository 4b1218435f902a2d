"""Data models for backup mirroring."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


@dataclass
class MirrorConfig:
    """Resolved settings handed to the copy-and-verify engine."""
    source: str
    target: str
    debug: bool = False
    max_passes: Optional[int] = None
    repair_overwrite: bool = False


class LostReason(Enum):
    """Why a file was found lost during a verification pass."""
    MISSING = "missing"
    SIZE_MISMATCH = "size mismatch"


@dataclass
class LostFile:
    """A source file whose mirror is missing or differs in length."""
    path: str
    reason: LostReason
    source_size: int
    target_size: Optional[int] = None


@dataclass
class VerificationResult:
    """Outcome of a verification run."""
    passes: int
    clean: bool
    lost_files: List[LostFile] = field(default_factory=list)
    repairs_attempted: int = 0
    repairs_succeeded: int = 0
