"""
Backup Mirror - Mirror a directory tree and verify the copy.

This package provides tools for copying a source directory into a target directory,
verifying the copy by file length and repairing files that went missing or were
only partially copied.
"""

__version__ = "1.0.0"
__author__ = "Your Name"
__email__ = "your.email@example.com"

from .core.mirror import BackupMirror
from .core.cloner import Cloner
from .core.verifier import Verifier

__all__ = ["BackupMirror", "Cloner", "Verifier"]
