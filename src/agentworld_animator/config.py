"""
Configuration for the animated view controller.

Values are resolved in priority order:
1. Defaults (``AnimatorConfig.DEFAULTS``)
2. JSON config file (keys starting with ``_`` are treated as comments)
3. Environment variables ``ANIMATOR_<KEY>`` (highest priority)

Usage:
    from agentworld_animator.config import get_config

    config = get_config()
    config.default_transition_time
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


logger = logging.getLogger(__name__)


class AnimatorConfig:
    """Layered configuration: defaults < JSON file < environment."""

    ENV_PREFIX = 'ANIMATOR_'

    DEFAULTS: Dict[str, Any] = {
        # General settings
        'debug_mode': False,
        'verbose_logging': False,

        # Camera defaults (used by reset())
        'default_eye': [5.0, 5.0, 10.0],
        'default_focus': [0.0, 0.0, 0.0],
        'default_up': [0.0, 0.0, 1.0],
        'fixed_up': True,
        'attached_frame': 'map',
        'mouse_enabled': True,

        # Transitions
        'default_transition_time': 0.5,
        'min_transition_duration': 0.001,
        'min_view_separation': 1e-4,

        # Movement queue
        'queue_initial_capacity': 100,
        'queue_capacity_increment': 20,

        # Frame-by-frame rendering
        'target_fps': 60,
        'publish_view_images': False,

        # Logging
        'log_camera_operations': False,
    }

    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        self._config: Dict[str, Any] = {}
        self._config_file = Path(config_file) if config_file else None
        self._load_configuration()

    def _load_configuration(self):
        """Load configuration from all sources in priority order."""
        self._config = {key: list(value) if isinstance(value, list) else value
                        for key, value in self.DEFAULTS.items()}
        self._load_from_json_config()
        self._load_from_environment()
        self._validate_config()

        if self.debug_mode:
            logger.info(f"Animator configuration loaded ({len(self._config)} settings)")

    def _load_from_json_config(self):
        """Load configuration from the JSON config file, if one was given."""
        if self._config_file is None:
            return
        if not self._config_file.exists():
            logger.debug(f"No config file found at {self._config_file}")
            return

        try:
            with open(self._config_file, 'r') as f:
                json_config = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Failed to load JSON config from {self._config_file}: {e}")
            return

        # Monolithic files keep our settings under an 'animator' section
        section = json_config.get('animator', json_config)
        filtered_config = {k: v for k, v in section.items() if not k.startswith('_')}
        self._config.update(filtered_config)
        logger.debug(f"Loaded JSON config from {self._config_file}")

    def _load_from_environment(self):
        """Load configuration from environment variables."""
        for key in list(self._config.keys()):
            env_key = f"{self.ENV_PREFIX}{key.upper()}"
            env_value = os.getenv(env_key)
            if env_value is None:
                continue
            converted_value = self._convert_env_value(env_value, self._config[key])
            self._config[key] = converted_value
            logger.debug(f"Loaded environment variable: {env_key} = {converted_value}")

    def _convert_env_value(self, env_value: str, default_value: Any) -> Any:
        """Convert environment variable string to the type of the current value."""
        if isinstance(default_value, bool):
            return env_value.lower() in ('true', '1', 'yes', 'on')
        elif isinstance(default_value, int):
            try:
                return int(env_value)
            except ValueError:
                logger.warning(f"Invalid integer value in environment: {env_value}")
                return default_value
        elif isinstance(default_value, float):
            try:
                return float(env_value)
            except ValueError:
                logger.warning(f"Invalid float value in environment: {env_value}")
                return default_value
        elif isinstance(default_value, list):
            items = [item.strip() for item in env_value.split(',')]
            try:
                return [float(item) for item in items]
            except ValueError:
                logger.warning(f"Invalid vector value in environment: {env_value}")
                return default_value
        return env_value

    def _validate_config(self):
        """Reset values that would break the transition engine back to defaults."""
        positive_keys = (
            'default_transition_time',
            'min_transition_duration',
            'min_view_separation',
            'target_fps',
            'queue_initial_capacity',
            'queue_capacity_increment',
        )
        for key in positive_keys:
            value = self._config.get(key)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                logger.warning(f"Invalid {key} {value!r}, using {self.DEFAULTS[key]}")
                self._config[key] = self.DEFAULTS[key]

        for key in ('default_eye', 'default_focus', 'default_up'):
            value = self._config.get(key)
            if not isinstance(value, (list, tuple)) or len(value) != 3:
                logger.warning(f"Invalid {key} {value!r}, using {self.DEFAULTS[key]}")
                self._config[key] = list(self.DEFAULTS[key])

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value."""
        return self._config.get(key, default)

    def set(self, key: str, value: Any):
        """Set configuration value (runtime only)."""
        self._config[key] = value

    def get_all(self) -> Dict[str, Any]:
        """Get all configuration values."""
        return self._config.copy()

    def reload(self):
        """Reload configuration from all sources."""
        self._load_configuration()

    # General properties
    @property
    def debug_mode(self) -> bool:
        return self._config.get('debug_mode', False)

    @property
    def verbose_logging(self) -> bool:
        return self._config.get('verbose_logging', False)

    # Camera properties
    @property
    def default_eye(self) -> List[float]:
        return self._config.get('default_eye', [5.0, 5.0, 10.0])

    @property
    def default_focus(self) -> List[float]:
        return self._config.get('default_focus', [0.0, 0.0, 0.0])

    @property
    def default_up(self) -> List[float]:
        return self._config.get('default_up', [0.0, 0.0, 1.0])

    @property
    def fixed_up(self) -> bool:
        return self._config.get('fixed_up', True)

    @property
    def attached_frame(self) -> str:
        return self._config.get('attached_frame', 'map')

    @property
    def mouse_enabled(self) -> bool:
        return self._config.get('mouse_enabled', True)

    # Transition properties
    @property
    def default_transition_time(self) -> float:
        return self._config.get('default_transition_time', 0.5)

    @property
    def min_transition_duration(self) -> float:
        return self._config.get('min_transition_duration', 0.001)

    @property
    def min_view_separation(self) -> float:
        return self._config.get('min_view_separation', 1e-4)

    # Queue properties
    @property
    def queue_initial_capacity(self) -> int:
        return self._config.get('queue_initial_capacity', 100)

    @property
    def queue_capacity_increment(self) -> int:
        return self._config.get('queue_capacity_increment', 20)

    # Frame-by-frame properties
    @property
    def target_fps(self) -> int:
        return self._config.get('target_fps', 60)

    @property
    def publish_view_images(self) -> bool:
        return self._config.get('publish_view_images', False)

    @property
    def log_camera_operations(self) -> bool:
        return self._config.get('log_camera_operations', False)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}: {len(self._config)} settings>"


_global_config_instance = None


def get_config() -> AnimatorConfig:
    """Get the global animator configuration instance.

    The config file path is taken from ``ANIMATOR_CONFIG_FILE`` when set.
    """
    global _global_config_instance
    if _global_config_instance is None:
        _global_config_instance = AnimatorConfig(os.getenv('ANIMATOR_CONFIG_FILE'))
    return _global_config_instance
