"""Core copy-and-verify functionality."""

from .mirror import BackupMirror
from .cloner import Cloner
from .verifier import Verifier
from .paths import MirrorIO
from .models import MirrorConfig, LostFile, LostReason, VerificationResult
from .verifications import log_summary

__all__ = [
    "BackupMirror",
    "Cloner",
    "Verifier",
    "MirrorIO",
    "MirrorConfig",
    "LostFile",
    "LostReason",
    "VerificationResult",
    "log_summary",
]
