"""Path mapping, single-file copying and tree traversal shared by the cloner and verifier."""

import os
import shutil
import logging
from typing import Iterator, List, Tuple

# Listing failures that skip a directory instead of aborting the traversal
TRAVERSAL_ERRORS = (PermissionError, FileNotFoundError, NotADirectoryError)


class MirrorIO:
    """Base class for IO operations between a source root and its mirror."""

    def __init__(self, source: str, target: str, debug: bool = False):
        """Initialize mirror IO.

        Args:
            source: The source directory.
            target: The target directory.
            debug: Whether additional debug output is enabled.
        """
        self.source = os.path.abspath(source)
        self.target = os.path.abspath(target)
        self.debug = debug
        self.logger = logging.getLogger(self.__class__.__module__)

    @property
    def _source_prefix(self) -> str:
        return self.source if self.source.endswith(os.sep) else self.source + os.sep

    def mirror_path(self, path: str) -> str:
        """Map a source-rooted path to its target-rooted mirror.

        The mapping is a plain prefix substitution of the source root by the
        target root.

        Args:
            path: Path of a file or directory under the source root.

        Returns:
            The mirrored path under the target root.

        Raises:
            ValueError: If the path does not lie under the source root.
        """
        absolute = os.path.abspath(path)
        if absolute == self.source:
            return self.target
        if not absolute.startswith(self._source_prefix):
            raise ValueError(f"Path is not inside the source directory: {path}")
        return os.path.join(self.target, absolute[len(self._source_prefix):])

    def copy_file(self, source_file: str, overwrite: bool = False) -> bool:
        """Copy a file from source to the mirrored location at target.

        Args:
            source_file: The file to copy.
            overwrite: Whether an existing mirror file should be replaced.

        Returns:
            Whether the file was copied.
        """
        mirror = self.mirror_path(source_file)

        if not os.path.isfile(source_file):
            self.logger.error(f'File "{os.path.abspath(source_file)}" does not exist anymore!')
            return False

        if os.path.isdir(mirror) and not os.path.islink(mirror):
            raise IsADirectoryError(f"Mirror path is a directory: {mirror}")

        if os.path.lexists(mirror):
            if not overwrite:
                return False
            os.remove(mirror)

        try:
            shutil.copy2(source_file, mirror)
        except FileNotFoundError:
            parent = os.path.dirname(mirror)
            if os.path.isdir(parent):
                raise
            os.makedirs(parent, exist_ok=True)
            if self.debug:
                self.logger.debug(f'Created directory "{parent}".')
            shutil.copy2(source_file, mirror)

        if self.debug:
            self.logger.debug(f'Copied file "{source_file}".')
        return True

    def walk(self) -> Iterator[Tuple[str, List[str], List[str]]]:
        """Traverse the source tree depth-first using an explicit stack.

        Subdirectories of each directory are pushed before it is yielded.
        Directories that cannot be listed are logged and skipped together
        with their whole subtree.

        Yields:
            Tuples of (directory, subdirectories, files).
        """
        dirs = [self.source]

        while dirs:
            current_dir = dirs.pop()
            try:
                with os.scandir(current_dir) as it:
                    entries = list(it)
            except TRAVERSAL_ERRORS as e:
                self.logger.error(str(e))
                continue

            subdirs = []
            files = []
            for entry in entries:
                try:
                    if entry.is_dir(follow_symlinks=False):
                        subdirs.append(entry.path)
                    elif entry.is_file():
                        files.append(entry.path)
                except OSError as e:
                    self.logger.debug(f"Skipping {entry.path}: {e}")

            dirs.extend(subdirs)
            yield current_dir, subdirs, files

    def count_files(self) -> int:
        """Count every file below the source root."""
        return sum(len(files) for _, _, files in os.walk(self.source))
