"""Configuration and root directory validation for backup mirror."""

import os
import hashlib
from typing import Dict, Any, Optional


class RootValidationError(ValueError):
    """Raised when the source or target directory cannot be used."""


class RootNestingError(RootValidationError):
    """Raised when the source and target directories overlap."""


class ConfigValidator:
    """Validates backup mirror configuration and the source/target pair."""

    ROOT_KEYS = ['source', 'target']
    OPTIONAL_SECTIONS = ['verification', 'logging']

    def validate(self, config: Dict[str, Any]) -> None:
        """Validate configuration data.

        Args:
            config: Configuration dictionary to validate.

        Raises:
            ValueError: If configuration is invalid.
        """
        if not isinstance(config, dict):
            raise ValueError("Configuration must be a mapping")

        for key in self.ROOT_KEYS:
            value = config.get(key)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"Configuration value '{key}' must be a path")

        for section in self.OPTIONAL_SECTIONS:
            if section in config and not isinstance(config[section], dict):
                raise ValueError(f"Configuration section '{section}' must be a mapping")

        if 'verification' in config:
            self._validate_verification_config(config['verification'])

    def _validate_verification_config(self, verification: Dict[str, Any]) -> None:
        """Validate verification configuration.

        Args:
            verification: Verification configuration dictionary.

        Raises:
            ValueError: If verification configuration is invalid.
        """
        max_passes = verification.get('max_passes')
        if max_passes is not None:
            if isinstance(max_passes, bool) or not isinstance(max_passes, int) or max_passes < 1:
                raise ValueError(f"Verification max_passes must be a positive integer: {max_passes}")

        repair_overwrite = verification.get('repair_overwrite', False)
        if not isinstance(repair_overwrite, bool):
            raise ValueError(f"Verification repair_overwrite must be true or false: {repair_overwrite}")

    def validate_directory(self, path: str, test_write: bool = False) -> str:
        """Check that a path is an accessible directory.

        Args:
            path: Directory to check.
            test_write: Whether write access should be tested as well.

        Returns:
            The absolute directory path.

        Raises:
            RootValidationError: If the directory is missing or not accessible.
        """
        directory = os.path.abspath(path)
        if not os.path.isdir(directory):
            raise RootValidationError(f'The path "{path}" could not be found or is not a directory')

        try:
            self.test_access(directory, test_write)
        except PermissionError:
            raise RootValidationError(
                f'Unauthorized path "{path}"! Please choose another directory '
                f'or run this program as an authorized user.'
            )
        except OSError as e:
            raise RootValidationError(f'The path "{path}" cannot be used: {e}')

        return directory

    @staticmethod
    def test_access(directory: str, test_write: bool = False) -> None:
        """Probe a directory for read and optionally write access.

        Raises:
            OSError: If the access fails.
        """
        os.listdir(directory)

        if test_write:
            probe_name = hashlib.sha1(b"testReadWrite").hexdigest()
            probe_dir = os.path.join(directory, probe_name)
            os.makedirs(probe_dir, exist_ok=True)
            os.rmdir(probe_dir)
            probe_file = os.path.join(directory, probe_name + ".txt")
            open(probe_file, 'w').close()
            os.remove(probe_file)

    def validate_roots(self, source: Optional[str], target: Optional[str]) -> None:
        """Validate the source/target pair.

        Args:
            source: The source directory.
            target: The target directory.

        Raises:
            RootValidationError: If either root is missing or they overlap.
        """
        if not source or not target:
            raise RootValidationError(
                "Please specify both a valid source directory and a valid target directory!"
            )

        source = os.path.normcase(os.path.abspath(source))
        target = os.path.normcase(os.path.abspath(target))

        if source == target:
            raise RootNestingError("The target directory must not be equal to the source directory!")
        if self._is_nested(target, source):
            raise RootNestingError("The target directory must not be inside the source directory!")
        if self._is_nested(source, target):
            raise RootNestingError("The source directory must not be inside the target directory!")

    @staticmethod
    def _is_nested(path: str, parent: str) -> bool:
        return os.path.commonpath([path, parent]) == parent
