"""
Configuration management for the baycheck listing monitor.
"""

import json
import os
from typing import Any, Dict, Optional

import yaml

from ..models.config import DEFAULT_POLL_INTERVAL, DEFAULT_SEARCH_URL_TEMPLATE, Configuration
from ..models.criteria import ListingType, SearchConfig, SearchCriteria
from ..models.listing import Duration
from ..utils.error_handling import ConfigurationError


class ConfigurationManager:
    """Manages loading, validation, and saving of system configuration."""

    CONFIG_LOCATIONS = [
        "config/config.yaml",
        "config/config.yml",
        "config/config.json",
        "config.yaml",
        "config.yml",
        "config.json",
    ]

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the configuration file. If None, uses default paths.
        """
        self.config_path = config_path or self._find_config_file()
        self._config: Optional[Configuration] = None
        self._last_modified: Optional[float] = None

    def _find_config_file(self) -> str:
        """Find the configuration file in standard locations."""
        for path in self.CONFIG_LOCATIONS:
            if os.path.exists(path):
                return path

        if os.path.exists("config/config.example.yaml"):
            raise ConfigurationError(
                "No configuration file found. Please copy 'config/config.example.yaml' "
                "to 'config/config.yaml' and customize it for your needs."
            )

        raise ConfigurationError(
            "No configuration file found. Please create a configuration file "
            "at one of these locations: " + ", ".join(self.CONFIG_LOCATIONS)
        )

    def load_config(self) -> Configuration:
        """
        Load configuration from file.

        Returns:
            Configuration object with validated settings.

        Raises:
            ConfigurationError: If configuration is invalid or cannot be read.
        """
        if not os.path.exists(self.config_path):
            raise ConfigurationError(f"Configuration file not found: {self.config_path}")

        try:
            raw_config = self._read_file(self.config_path)
            raw_config = self._expand_env_vars(raw_config)

            config = self._parse_config(raw_config)
            config.validate()

        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in configuration file: {e}")
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in configuration file: {e}")
        except ConfigurationError:
            raise
        except (ValueError, TypeError, OSError) as e:
            raise ConfigurationError(f"Error loading configuration: {e}")

        self._config = config
        self._last_modified = os.path.getmtime(self.config_path)
        return config

    def _read_file(self, path: str) -> Dict[str, Any]:
        with open(path, "r", encoding="utf-8") as f:
            if path.endswith(".json"):
                raw_config = json.load(f)
            else:
                raw_config = yaml.safe_load(f)

        if not isinstance(raw_config, dict):
            raise ConfigurationError("Configuration file must contain a mapping")
        return raw_config

    def _expand_env_vars(self, obj: Any) -> Any:
        """Recursively expand ``${VAR_NAME}`` values from the environment."""
        if isinstance(obj, dict):
            return {key: self._expand_env_vars(value) for key, value in obj.items()}
        elif isinstance(obj, list):
            return [self._expand_env_vars(item) for item in obj]
        elif isinstance(obj, str):
            if obj.startswith("${") and obj.endswith("}"):
                var_name = obj[2:-1]
                env_value = os.getenv(var_name)
                if env_value is None:
                    raise ConfigurationError(
                        f"Environment variable '{var_name}' not found"
                    )
                return env_value
            return obj
        else:
            return obj

    def _parse_config(self, raw_config: Dict[str, Any]) -> Configuration:
        """Parse raw configuration dictionary into Configuration object."""
        raw_searches = raw_config.get("searches", [])
        if not isinstance(raw_searches, list):
            raise ConfigurationError("'searches' must be a list")

        searches = [self._parse_search(item, index) for index, item in enumerate(raw_searches)]

        system_data = raw_config.get("system") or {}
        if not isinstance(system_data, dict):
            raise ConfigurationError("'system' must be a mapping")

        # Accept the interval at top level as older configuration files did
        interval = system_data.get(
            "check_interval_seconds",
            raw_config.get("check_interval_seconds", DEFAULT_POLL_INTERVAL),
        )

        return Configuration(
            searches=searches,
            poll_interval_seconds=0 if interval is None else interval,
            findings_file=system_data.get("findings_file", "findings.json"),
            daily_log_dir=system_data.get("daily_log_dir", "logs"),
            restore_seen_on_start=self._flag(
                system_data.get("restore_seen_on_start", False), "restore_seen_on_start"
            ),
            request_timeout=system_data.get("request_timeout", 30),
            max_retries=system_data.get("max_retries", 3),
            search_url_template=system_data.get(
                "search_url_template", DEFAULT_SEARCH_URL_TEMPLATE
            ),
        )

    def _parse_search(self, data: Any, index: int) -> SearchConfig:
        if not isinstance(data, dict):
            raise ConfigurationError(f"Search #{index + 1} must be a mapping")

        query = data.get("query")
        if not isinstance(query, str):
            raise ConfigurationError(
                f"Invalid search #{index + 1}: query must be a string, got {query!r}"
            )

        try:
            max_time_left = data.get("max_time_left")
            criteria = SearchCriteria(
                listing_type=ListingType.from_config(data.get("listing_type")),
                min_price=self._optional_price(data.get("min_price")),
                max_price=self._optional_price(data.get("max_price")),
                min_watchers=self._watcher_bound(data.get("min_watchers")),
                max_watchers=self._watcher_bound(data.get("max_watchers")),
                max_time_remaining=self._time_limit(max_time_left),
            )
        except (ValueError, TypeError) as e:
            raise ConfigurationError(f"Invalid search #{index + 1}: {e}")

        return SearchConfig(query=query.strip(), criteria=criteria)

    @staticmethod
    def _time_limit(value: Any) -> Optional[Duration]:
        """
        ``DD:HH:MM`` text, or the ``{"Days": .., "Hours": .., "Minutes": ..}``
        mapping written by older configuration files.
        """
        if value is None or value == "":
            return None
        if isinstance(value, dict):
            return Duration.from_mapping(value)
        return Duration.from_string(value)

    @staticmethod
    def _flag(value: Any, name: str) -> bool:
        """Booleans, or "true"/"false" text as produced by ${VAR} expansion."""
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in ("true", "false"):
            return value.strip().lower() == "true"
        raise ConfigurationError(f"'{name}' must be true or false, got {value!r}")

    @staticmethod
    def _optional_price(value: Any) -> Optional[float]:
        """Negative prices meant "no limit" in older configuration files."""
        if value is None or value == "":
            return None
        price = float(value)
        return None if price < 0 else price

    @staticmethod
    def _watcher_bound(value: Any) -> int:
        if value is None or value == "":
            return 0
        if isinstance(value, bool):
            raise ValueError(f"Invalid watcher bound: {value!r}")
        return int(value)

    def get_config(self) -> Configuration:
        """Get current configuration, loading if necessary."""
        if self._config is None:
            return self.load_config()
        return self._config

    def reload_if_changed(self) -> bool:
        """
        Reload configuration if file has been modified.

        Returns:
            True if configuration was reloaded, False otherwise.
        """
        if not os.path.exists(self.config_path):
            return False

        current_modified = os.path.getmtime(self.config_path)

        if self._last_modified is None or current_modified > self._last_modified:
            try:
                self.load_config()
                return True
            except ConfigurationError:
                # If reload fails, keep current config
                return False

        return False

    def save_config(self, config: Configuration, path: Optional[str] = None) -> str:
        """
        Write a configuration to disk in the loadable layout.

        Args:
            config: Configuration to save
            path: Target path, defaults to the managed config path

        Returns:
            Path the configuration was written to
        """
        config.validate()
        target = path or self.config_path

        data = {
            "searches": [search.to_dict() for search in config.searches],
            "system": {
                "check_interval_seconds": config.poll_interval_seconds,
                "findings_file": config.findings_file,
                "daily_log_dir": config.daily_log_dir,
                "restore_seen_on_start": config.restore_seen_on_start,
                "request_timeout": config.request_timeout,
                "max_retries": config.max_retries,
                "search_url_template": config.search_url_template,
            },
        }

        directory = os.path.dirname(target)
        if directory:
            os.makedirs(directory, exist_ok=True)

        with open(target, "w", encoding="utf-8") as f:
            if target.endswith(".json"):
                json.dump(data, f, indent=4)
            else:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)

        return target

    @staticmethod
    def get_config_template() -> Dict[str, Any]:
        """
        Get a template configuration dictionary.

        Returns:
            Dictionary with example configuration structure.
        """
        return {
            "searches": [
                {
                    "query": "nintendo switch",
                    "listing_type": "auction",
                    "min_price": 50.0,
                    "max_price": 200.0,
                    "min_watchers": 0,
                    "max_watchers": 0,
                    "max_time_left": "00:01:00",
                },
                {
                    "query": "thinkpad x220",
                    "listing_type": "buy_now",
                    "max_price": 150.0,
                },
            ],
            "system": {
                "check_interval_seconds": 300,
                "findings_file": "findings.json",
                "daily_log_dir": "logs",
                "restore_seen_on_start": False,
                "request_timeout": 30,
                "max_retries": 3,
            },
        }
