"""Configuration validation for folder backups."""

from typing import Dict, List, Any


class ConfigValidator:
    """Validates folder backup configuration."""

    REQUIRED_SECTIONS = ['backup_units']
    REQUIRED_UNIT_FIELDS = ['source', 'temp_folder', 'destination']
    LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']

    def validate(self, config: Dict[str, Any]) -> None:
        """Validate configuration data.

        Args:
            config: Configuration dictionary to validate.

        Raises:
            ValueError: If configuration is invalid.
        """
        if not isinstance(config, dict):
            raise ValueError("Configuration must be a mapping")

        self._validate_structure(config)
        self._validate_backup_units(config.get('backup_units'))

        if config.get('backup') is not None:
            self._validate_backup_settings(config['backup'])

        if config.get('logging') is not None:
            self._validate_logging_settings(config['logging'])

        if config.get('display') is not None:
            self._validate_display_settings(config['display'])

    def _validate_structure(self, config: Dict[str, Any]) -> None:
        """Validate basic configuration structure.

        Args:
            config: Configuration dictionary.

        Raises:
            ValueError: If required sections are missing.
        """
        missing_sections = []
        for section in self.REQUIRED_SECTIONS:
            if section not in config:
                missing_sections.append(section)

        if missing_sections:
            raise ValueError(f"Missing required configuration sections: {missing_sections}")

    def _validate_backup_units(self, units: List[Dict[str, Any]]) -> None:
        """Validate backup units configuration.

        Args:
            units: List of backup unit configurations.

        Raises:
            ValueError: If backup units are invalid.
        """
        if not isinstance(units, list) or not units:
            raise ValueError("At least one backup unit must be configured")

        for i, unit in enumerate(units):
            if not isinstance(unit, dict):
                raise ValueError(f"Backup unit {i} must be a dictionary")

            missing_fields = [field for field in self.REQUIRED_UNIT_FIELDS if field not in unit]
            if missing_fields:
                raise ValueError(f"Backup unit {i} missing required fields: {missing_fields}")

            for field in self.REQUIRED_UNIT_FIELDS:
                value = unit[field]
                if not isinstance(value, str) or not value.strip():
                    raise ValueError(f"Backup unit {i} {field} must be a non-empty path")

    def _validate_backup_settings(self, settings: Dict[str, Any]) -> None:
        """Validate the backup section.

        Args:
            settings: Backup settings dictionary.

        Raises:
            ValueError: If a setting has an invalid value.
        """
        if not isinstance(settings, dict):
            raise ValueError("Backup settings must be a dictionary")

        if 'phase_delay_seconds' in settings:
            try:
                delay = float(settings['phase_delay_seconds'])
                if delay < 0:
                    raise ValueError()
            except (ValueError, TypeError):
                raise ValueError(f"Backup settings have invalid phase_delay_seconds: "
                                 f"{settings['phase_delay_seconds']}")

        if 'buffer_size' in settings:
            try:
                size = int(settings['buffer_size'])
                if size <= 0:
                    raise ValueError()
            except (ValueError, TypeError):
                raise ValueError(f"Backup settings have invalid buffer_size: {settings['buffer_size']}")

    def _validate_logging_settings(self, settings: Dict[str, Any]) -> None:
        """Validate the logging section.

        Args:
            settings: Logging settings dictionary.

        Raises:
            ValueError: If a setting has an invalid value.
        """
        if not isinstance(settings, dict):
            raise ValueError("Logging settings must be a dictionary")

        level = settings.get('level')
        if level is not None and str(level).upper() not in self.LOG_LEVELS:
            raise ValueError(f"Logging configuration has invalid level: {level}")

        log_file = settings.get('file')
        if log_file is not None and not isinstance(log_file, str):
            raise ValueError(f"Logging configuration has invalid file: {log_file}")

        for key, minimum in (('max_size_mb', 1), ('backup_count', 0)):
            if key not in settings:
                continue
            value = settings[key]
            if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
                raise ValueError(f"Logging configuration has invalid {key}: {value} "
                                 f"(expected an integer >= {minimum})")

    def _validate_display_settings(self, settings: Dict[str, Any]) -> None:
        """Validate the display section.

        Args:
            settings: Display settings dictionary.

        Raises:
            ValueError: If a setting has an invalid value.
        """
        if not isinstance(settings, dict):
            raise ValueError("Display settings must be a dictionary")

        if 'progress' in settings and not isinstance(settings['progress'], bool):
            raise ValueError(f"Display configuration progress must be true or false: "
                             f"{settings['progress']}")
