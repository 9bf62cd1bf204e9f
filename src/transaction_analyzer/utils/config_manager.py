"""Configuration management for the transaction analyzer."""

import json
import os
import yaml
from dataclasses import asdict, fields
from typing import Dict, Any, Optional
import logging

from ..models.core import AnalyzerConfig, ReportConfig


logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages loading and validation of analyzer configuration"""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration manager

        Args:
            config_path: Path to configuration file. If None, searches for default locations.
        """
        self.config_path = config_path
        self._config_cache: Optional[AnalyzerConfig] = None

    def load_config(self, force_reload: bool = False) -> AnalyzerConfig:
        """Load analyzer configuration from file or return default

        Args:
            force_reload: Force reload from file even if cached

        Returns:
            AnalyzerConfig instance with loaded or default configuration
        """
        if self._config_cache is not None and not force_reload:
            return self._config_cache

        config_data = self._load_config_file()

        try:
            self._config_cache = AnalyzerConfig(
                input_file=config_data.get('input_file', 'transaction.json'),
                log_directory=config_data.get('log_directory', 'logs'),
                date_formats=config_data.get('date_formats'),
                report=ReportConfig(**config_data.get('report', {}))
            )

            logger.info(f"Configuration loaded successfully from {self.config_path or 'defaults'}")
            return self._config_cache

        except (TypeError, ValueError) as e:
            logger.warning(f"Error loading configuration: {e}. Using defaults.")
            self._config_cache = AnalyzerConfig()
            return self._config_cache

    def _load_config_file(self) -> Dict[str, Any]:
        """Load configuration from file

        Returns:
            Dictionary with configuration data or empty dict if no file found
        """
        config_file = self._find_config_file()

        if not config_file or not os.path.exists(config_file):
            logger.info("No configuration file found, using defaults")
            return {}

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                if config_file.endswith('.json'):
                    data = json.load(f)
                elif config_file.endswith(('.yml', '.yaml')):
                    data = yaml.safe_load(f)
                else:
                    logger.warning(f"Unsupported config file format: {config_file}")
                    return {}

            self._validate_config_data(data)
            logger.info(f"Configuration loaded from {config_file}")
            return data

        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.error(f"Error reading configuration file {config_file}: {e}")
            return {}

    def _find_config_file(self) -> Optional[str]:
        """Find configuration file in standard locations

        Returns:
            Path to configuration file or None if not found
        """
        if self.config_path:
            return self.config_path

        search_paths = [
            'analyzer_config.json',
            'analyzer_config.yml',
            'analyzer_config.yaml',
            'config/analyzer_config.json',
            'config/analyzer_config.yml',
            'config/analyzer_config.yaml',
            os.path.expanduser('~/.transaction_analyzer/config.json'),
            os.path.expanduser('~/.transaction_analyzer/config.yml'),
        ]

        for path in search_paths:
            if os.path.exists(path):
                return path

        return None

    def _validate_config_data(self, data: Dict[str, Any]) -> None:
        """Validate configuration data structure

        Args:
            data: Configuration data to validate

        Raises:
            ValueError: If configuration data is invalid
        """
        if not isinstance(data, dict):
            raise ValueError("Configuration must be a dictionary")

        for path_key in ['input_file', 'log_directory']:
            if path_key in data:
                if not isinstance(data[path_key], str):
                    raise ValueError(f"{path_key} must be a string")
                if not data[path_key].strip():
                    raise ValueError(f"{path_key} cannot be empty")

        if 'date_formats' in data:
            if not isinstance(data['date_formats'], list):
                raise ValueError("date_formats must be a list")
            if not data['date_formats']:
                raise ValueError("date_formats cannot be empty")
            for fmt in data['date_formats']:
                if not isinstance(fmt, str):
                    raise ValueError("All date formats must be strings")

        if 'report' in data:
            self._validate_report_config(data['report'])

    def _validate_report_config(self, report: Any) -> None:
        """Validate the sample query arguments used by the report

        Raises:
            ValueError: If report configuration is invalid
        """
        if not isinstance(report, dict):
            raise ValueError("report must be a dictionary")

        known_keys = {f.name for f in fields(ReportConfig)}
        for key in report:
            if key not in known_keys:
                raise ValueError(f"Unknown report setting: {key}")

        for int_key in ['year', 'month', 'day']:
            if int_key in report and (not isinstance(report[int_key], int) or isinstance(report[int_key], bool)):
                raise ValueError(f"report.{int_key} must be an integer")

        for amount_key in ['min_amount', 'max_amount']:
            value = report.get(amount_key)
            if amount_key in report and (not isinstance(value, (int, float)) or isinstance(value, bool)):
                raise ValueError(f"report.{amount_key} must be a number")

        if 'transaction_types' in report:
            types = report['transaction_types']
            if not isinstance(types, list) or not all(isinstance(t, str) for t in types):
                raise ValueError("report.transaction_types must be a list of strings")

        for str_key in ['range_start', 'range_end', 'merchant', 'before_date', 'transaction_id']:
            if str_key in report and not isinstance(report[str_key], str):
                raise ValueError(f"report.{str_key} must be a string")

    def save_config_template(self, output_path: str) -> None:
        """Generate and save a configuration file template

        Args:
            output_path: Path where to save the template
        """
        template = asdict(AnalyzerConfig())

        try:
            output_dir = os.path.dirname(output_path)
            if output_dir:
                os.makedirs(output_dir, exist_ok=True)

            with open(output_path, 'w', encoding='utf-8') as f:
                if output_path.endswith(('.yml', '.yaml')):
                    yaml.dump(template, f, default_flow_style=False, indent=2, sort_keys=False)
                else:
                    json.dump(template, f, indent=2)

            logger.info(f"Configuration template saved to {output_path}")

        except OSError as e:
            logger.error(f"Error saving configuration template: {e}")
            raise

    def reset_config(self) -> None:
        """Reset configuration cache, forcing reload on next access"""
        self._config_cache = None
        logger.debug("Configuration cache reset")


def get_default_config_manager() -> ConfigManager:
    """Get a default configuration manager instance

    Returns:
        ConfigManager instance with default settings
    """
    return ConfigManager()
