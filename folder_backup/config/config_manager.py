"""Configuration management for folder backups."""

import os
import yaml
from typing import Dict, List, Any, Optional

from .config_validator import ConfigValidator
from ..core.models import BackupUnit


class ConfigManager:
    """Manages configuration loading and validation for folder backups."""

    DEFAULT_CONFIG_LOCATIONS = [
        "backup.yaml",
        "backup.yml",
        os.path.expanduser("~/.folder-backup/config.yaml"),
        os.path.expanduser("~/.folder-backup/config.yml"),
        "/etc/folder-backup/config.yaml",
        "/etc/folder-backup/config.yml"
    ]

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration manager.

        Args:
            config_path: Optional path to config file. If not provided,
                        will search in default locations.
        """
        self.config_path = config_path
        self.config_data: Dict[str, Any] = {}
        self.validator = ConfigValidator()

    def load_config(self) -> Dict[str, Any]:
        """Load configuration from file.

        Returns:
            Dictionary containing configuration data.

        Raises:
            FileNotFoundError: If config file cannot be found.
            ValueError: If config file is invalid.
        """
        config_file = self._find_config_file()

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                self.config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file {config_file}: {e}")
        except OSError as e:
            raise ValueError(f"Error reading config file {config_file}: {e}")

        self.validator.validate(self.config_data)

        self._set_defaults()

        return self.config_data

    def _find_config_file(self) -> str:
        """Find configuration file in default locations.

        Returns:
            Path to configuration file.

        Raises:
            FileNotFoundError: If no config file is found.
        """
        if self.config_path:
            if os.path.exists(self.config_path):
                return self.config_path
            else:
                raise FileNotFoundError(f"Config file not found: {self.config_path}")

        for location in self.DEFAULT_CONFIG_LOCATIONS:
            if os.path.exists(location):
                return location

        raise FileNotFoundError(
            f"Configuration file not found in any of these locations:\n" +
            "\n".join(f"  - {loc}" for loc in self.DEFAULT_CONFIG_LOCATIONS) +
            "\n\nPlease copy config.example.yaml to backup.yaml and customize it."
        )

    def _set_defaults(self):
        """Set default values for optional configuration parameters."""
        defaults = {
            'backup': {
                'phase_delay_seconds': 2,
                'buffer_size': 1024
            },
            'logging': {
                'level': 'INFO',
                'file': 'folder_backup.log',
                'max_size_mb': 10,
                'backup_count': 5
            },
            'display': {
                'progress': True
            }
        }

        # Merge defaults with existing config
        for section, section_defaults in defaults.items():
            if not isinstance(self.config_data.get(section), dict):
                self.config_data[section] = {}
            for key, value in section_defaults.items():
                if key not in self.config_data[section]:
                    self.config_data[section][key] = value

    def get_backup_units(self) -> List[BackupUnit]:
        """Get all configured backup units.

        Returns:
            List of backup units in configuration order.
        """
        return [
            BackupUnit(
                source=os.path.expanduser(unit['source']),
                temp_folder=os.path.expanduser(unit['temp_folder']),
                destination=os.path.expanduser(unit['destination'])
            )
            for unit in self.config_data.get('backup_units', [])
        ]

    def get_backup_config(self) -> Dict[str, Any]:
        """Get backup phase configuration.

        Returns:
            Backup configuration dictionary.
        """
        return self.config_data.get('backup', {})

    def get_logging_config(self) -> Dict[str, Any]:
        """Get logging configuration.

        Returns:
            Logging configuration dictionary.
        """
        return self.config_data.get('logging', {})

    def get_display_config(self) -> Dict[str, Any]:
        """Get console display configuration.

        Returns:
            Display configuration dictionary.
        """
        return self.config_data.get('display', {})
