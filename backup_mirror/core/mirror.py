"""Main backup mirror class."""

import logging
from typing import Callable, List, Optional

from .cloner import Cloner
from .verifier import Verifier
from .models import MirrorConfig, VerificationResult
from ..config.config_validator import ConfigValidator

# Custom verification run after the standard one: (source, target, debug)
Verification = Callable[[str, str, bool], None]


class BackupMirror:
    """Controls the backup and verification of a source/target pair."""

    def __init__(self, config: MirrorConfig, verifications: Optional[List[Verification]] = None):
        """Initialize backup mirror.

        Args:
            config: Resolved source, target and run settings.
            verifications: Optional custom verifications to run after the standard one.

        Raises:
            RootValidationError: If the source and target cannot be used together.
        """
        self.config = config
        self.logger = logging.getLogger(__name__)
        self.verifications: List[Verification] = list(verifications or [])

        validator = ConfigValidator()
        validator.validate_roots(config.source, config.target)
        self.source = validator.validate_directory(config.source)
        self.target = validator.validate_directory(config.target, test_write=True)

        self.logger.info(f'Used source: "{self.source}"')
        self.logger.info(f'Used target: "{self.target}"')

        self.cloner = Cloner(self.source, self.target, config.debug)
        self.verifier = Verifier(
            self.source,
            self.target,
            config.debug,
            max_passes=config.max_passes,
            repair_overwrite=config.repair_overwrite
        )

    def add_verification(self, verification: Verification) -> None:
        """Add a custom verification to the verification process."""
        self.verifications.append(verification)

    def reset_verifications(self) -> None:
        """Remove custom verifications so only the standard verification runs."""
        self.verifications = []

    def start_backup(self, overwrite: bool = False) -> None:
        """Start the backup process.

        Args:
            overwrite: Whether to overwrite existing files in the target directory.
        """
        self.cloner.backup(overwrite)

    def verify(self) -> VerificationResult:
        """Run the standard verification followed by the custom verifications.

        Returns:
            Result of the standard verification.
        """
        result = self.verifier.verify()

        for verification in self.verifications:
            verification(self.source, self.target, self.config.debug)

        return result
