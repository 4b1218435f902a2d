"""Configuration management for the backup mirror."""

import os
import yaml
from typing import Dict, Any, Optional
from .config_validator import ConfigValidator


class ConfigManager:
    """Loads and saves the stored source/target directories and run settings."""

    DEFAULT_CONFIG_FILE = "backup-mirror.yaml"

    DEFAULT_CONFIG_LOCATIONS = [
        "backup-mirror.yaml",
        "backup-mirror.yml",
        os.path.expanduser("~/.backup-mirror/config.yaml"),
    ]

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration manager.

        Args:
            config_path: Optional path to config file. If not provided,
                        will search in default locations.
        """
        self.config_path = config_path
        self.config_file: Optional[str] = None
        self.config_data: Dict[str, Any] = {}
        self.validator = ConfigValidator()

    def load_config(self) -> Dict[str, Any]:
        """Load configuration from file.

        A missing or empty file leaves both roots unset.

        Returns:
            Dictionary containing configuration data.

        Raises:
            ValueError: If config file is invalid or names a directory that does not exist.
        """
        self.config_file = self._find_config_file()
        self.config_data = {}

        if os.path.exists(self.config_file) and os.path.getsize(self.config_file) > 0:
            try:
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    self.config_data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Could not deserialize config file {self.config_file}: {e}")

        self.validator.validate(self.config_data)

        for key in ConfigValidator.ROOT_KEYS:
            path = self.config_data.get(key)
            if path is None:
                continue
            path = os.path.abspath(path)
            if not os.path.isdir(path):
                raise ValueError(
                    f"Could not load {key} from config file...\n"
                    f"Please take a look at '{self.config_file}'"
                )
            self.config_data[key] = path

        self._set_defaults()

        return self.config_data

    def save_config(self) -> None:
        """Write the current configuration back to the config file."""
        if self.config_file is None:
            self.config_file = self._find_config_file()

        directory = os.path.dirname(os.path.abspath(self.config_file))
        os.makedirs(directory, exist_ok=True)

        with open(self.config_file, 'w', encoding='utf-8') as f:
            yaml.safe_dump(self.config_data, f, default_flow_style=False, sort_keys=False)

    def _find_config_file(self) -> str:
        """Find the configuration file.

        Returns:
            Path of the first existing file in the default locations, or the
            default file name in the working directory if none exists.
        """
        if self.config_path:
            return self.config_path

        for location in self.DEFAULT_CONFIG_LOCATIONS:
            if os.path.exists(location):
                return location

        return self.DEFAULT_CONFIG_FILE

    def _set_defaults(self):
        """Set default values for optional configuration parameters."""
        self.config_data.setdefault('source', None)
        self.config_data.setdefault('target', None)

        defaults = {
            'verification': {
                'max_passes': None,
                'repair_overwrite': False
            },
            'logging': {
                'level': 'INFO',
                'file': None
            }
        }

        # Merge defaults with existing config
        for section, section_defaults in defaults.items():
            if section not in self.config_data:
                self.config_data[section] = {}
            for key, value in section_defaults.items():
                if key not in self.config_data[section]:
                    self.config_data[section][key] = value

    @property
    def source(self) -> Optional[str]:
        return self.config_data.get('source')

    @source.setter
    def source(self, value: Optional[str]):
        self.config_data['source'] = value
        self.save_config()

    @property
    def target(self) -> Optional[str]:
        return self.config_data.get('target')

    @target.setter
    def target(self, value: Optional[str]):
        self.config_data['target'] = value
        self.save_config()

    def clear_roots(self) -> None:
        """Forget both stored directories."""
        self.config_data['source'] = None
        self.config_data['target'] = None
        self.save_config()

    def get_verification_config(self) -> Dict[str, Any]:
        """Get verification configuration.

        Returns:
            Verification configuration dictionary.
        """
        return self.config_data.get('verification', {})

    def get_logging_config(self) -> Dict[str, Any]:
        """Get logging configuration.

        Returns:
            Logging configuration dictionary.
        """
        return self.config_data.get('logging', {})
