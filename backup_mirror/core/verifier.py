"""Verification of a mirror and repair of lost files."""

import os
from typing import List, Optional

from .models import LostFile, LostReason, VerificationResult
from .paths import MirrorIO


class Verifier(MirrorIO):
    """Checks that every source file was copied and repairs the ones that were not.

    A file counts as copied when its mirror exists and has the same length.
    Contents are not compared.
    """

    def __init__(self, source: str, target: str, debug: bool = False,
                 max_passes: Optional[int] = None, repair_overwrite: bool = False):
        """Initialize verifier.

        Args:
            source: The source directory.
            target: The target directory.
            debug: Whether additional debug output is enabled.
            max_passes: Give up after this many passes. None keeps verifying
                        until a pass finds nothing to repair.
            repair_overwrite: Whether repairs replace mirrors that differ in length.
        """
        super().__init__(source, target, debug)
        if max_passes is not None and max_passes < 1:
            raise ValueError(f"max_passes must be at least 1, got {max_passes}")
        self.max_passes = max_passes
        self.repair_overwrite = repair_overwrite
        self.file_count = 0

    def verify(self, pass_number: int = 1) -> VerificationResult:
        """Verify that each file was copied correctly.

        Every pass walks the whole source tree. Lost files are repaired and a
        new pass is started until one finds no lost files, or until
        ``max_passes`` passes have run.

        Args:
            pass_number: Number of the first pass.

        Returns:
            VerificationResult describing the final pass.
        """
        repairs_attempted = 0
        repairs_succeeded = 0
        passes = 0

        while True:
            passes += 1
            lost_files = self.verify_pass(pass_number)

            if not lost_files:
                self.logger.info("Everything okay!")
                return VerificationResult(
                    passes=passes,
                    clean=True,
                    repairs_attempted=repairs_attempted,
                    repairs_succeeded=repairs_succeeded
                )

            self.logger.info(f"Found {len(lost_files)} issues!")
            for lost in lost_files:
                repairs_attempted += 1
                if self.repair(lost):
                    repairs_succeeded += 1

            if self.max_passes is not None and passes >= self.max_passes:
                self.logger.error(
                    f"Giving up after {passes} passes, {len(lost_files)} files could not be verified"
                )
                return VerificationResult(
                    passes=passes,
                    clean=False,
                    lost_files=lost_files,
                    repairs_attempted=repairs_attempted,
                    repairs_succeeded=repairs_succeeded
                )

            pass_number += 1

    def verify_pass(self, pass_number: int = 1) -> List[LostFile]:
        """Run a single traversal and collect the lost files.

        Args:
            pass_number: The iteration, used for display only.

        Returns:
            Lost files in the order they were found.
        """
        self.logger.info(f"Starting Verification (Pass: {pass_number})...")

        if self.debug:
            if pass_number == 1:
                self.logger.debug("Indexing files...")
                self.file_count = self.count_files()
            self.logger.debug(f"Processing {self.file_count} files.")

        lost_files = []

        for _, subdirs, files in self.walk():
            if self.debug:
                for subdir in subdirs:
                    self.logger.debug(f'Verifying directory "{subdir}"...')

            for file in files:
                if self.debug:
                    self.logger.debug(f'Verifying file "{file}".')
                lost = self._check_file(file)
                if lost:
                    lost_files.append(lost)

        return lost_files

    def _check_file(self, file: str) -> Optional[LostFile]:
        """Compare a source file with its mirror."""
        try:
            source_size = os.path.getsize(file)
        except FileNotFoundError:
            self.logger.error(f'File "{os.path.abspath(file)}" does not exist anymore!')
            return None

        mirror = self.mirror_path(file)
        if not os.path.isfile(mirror):
            self.logger.warning(f'Detected issue: "{file}" was not copied.')
            return LostFile(path=file, reason=LostReason.MISSING, source_size=source_size)

        target_size = os.path.getsize(mirror)

        if source_size != target_size:
            self.logger.warning(f'Detected issue: "{file}" differs in length from its clone.')
            return LostFile(
                path=file,
                reason=LostReason.SIZE_MISMATCH,
                source_size=source_size,
                target_size=target_size
            )

        return None

    def repair(self, lost: LostFile) -> bool:
        """Attempt to copy a lost file again.

        Args:
            lost: The lost file.

        Returns:
            Whether the file was copied.
        """
        if lost.reason is LostReason.MISSING:
            self.logger.error(f'File "{lost.path}" is missing!')
        else:
            self.logger.error(f'File "{lost.path}" has {lost.target_size} bytes instead of {lost.source_size}!')
        self.logger.warning("Attempting to fix issue")

        overwrite = self.repair_overwrite and lost.reason is LostReason.SIZE_MISMATCH
        if self.copy_file(lost.path, overwrite):
            self.logger.info("Success!")
            return True

        self.logger.error("Failed to resolve issue")
        return False
