"""Copying of a source tree into its mirror."""

from .paths import MirrorIO


class Cloner(MirrorIO):
    """Traverses the source tree and copies each file to the target."""

    def backup(self, overwrite: bool = False) -> None:
        """Copy every file and folder from source to target.

        Args:
            overwrite: Whether existing files in the target should be replaced.
        """
        self.logger.info("Starting Backup...")

        if self.debug:
            self.logger.debug("Indexing files...")
            self.logger.debug(f"Processing {self.count_files()} files.")

        for _, subdirs, files in self.walk():
            if self.debug:
                for subdir in subdirs:
                    self.logger.debug(f'Added directory "{subdir}" to Stack.')

            for file in files:
                self.copy_file(file, overwrite)

        self.logger.info("Backup finished")
