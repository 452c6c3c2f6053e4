"""Configuration persistence manager for the spiral portrait application.

This module handles loading and saving of spiral parameters to/from JSON files.
"""

import json
from dataclasses import asdict, fields, replace
from pathlib import Path
from typing import Optional, Tuple

from loguru import logger

from models import CONFIG_FILE, SpiralParameters


class ConfigManager:
    """Handles loading and saving of spiral parameters."""

    def __init__(self, config_path: Path = CONFIG_FILE):
        """Initialize config manager.

        Args:
            config_path: Path to configuration file (defaults to ~/.spiral_portrait_config.json)
        """
        self.config_path = config_path

    def load(self) -> SpiralParameters:
        """Load parameters from file, returning defaults if not found.

        Returns:
            SpiralParameters with loaded or default values
        """
        params = SpiralParameters()

        try:
            if self.config_path.exists():
                with open(self.config_path, "r") as f:
                    data = json.load(f)
                # Only known keys, cast to the type of the default value
                updates = {}
                for field in fields(SpiralParameters):
                    if field.name in data:
                        default = getattr(params, field.name)
                        value = data[field.name]
                        # Flags must already be JSON booleans
                        if isinstance(default, bool) and not isinstance(value, bool):
                            raise TypeError(
                                f"{field.name} must be true or false, got {value!r}"
                            )
                        updates[field.name] = type(default)(value)
                params = replace(params, **updates)
                logger.info(f"Loaded configuration from {self.config_path}")
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Could not load config file: {e}")
            params = SpiralParameters()

        return params

    def save(self, params: SpiralParameters) -> Tuple[bool, Optional[str]]:
        """Save parameters to file.

        Args:
            params: SpiralParameters to save

        Returns:
            Tuple of (success: bool, error_message: Optional[str])
        """
        try:
            with open(self.config_path, "w") as f:
                json.dump(asdict(params), f, indent=2)
            return True, None
        except (OSError, TypeError) as e:
            logger.warning(f"Could not save config file: {e}")
            return False, str(e)

    def reset(self) -> SpiralParameters:
        """Restore and persist the default parameters."""
        params = SpiralParameters()
        self.save(params)
        return params
