import logging
import yaml
from pathlib import Path
from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict, ValidationError, model_validator

from .constants import (APP_NAME, DEFAULT_RANGE, DIFF_MAX_DB, DIFF_MIN_DB,
                        MATCH_TOLERANCE_RATIO, MIN_SEPARATION_HZ)

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_FILE = Path.home() / ".ancband_settings.yaml"

class AppSettings(BaseModel):
    """
    Pydantic Model representing the persistent application state.
    """
    # File I/O
    last_directory: str = str(Path.home())

    # Band Selection
    default_range_start: float = Field(default=DEFAULT_RANGE[0], gt=0)
    default_range_end: float = Field(default=DEFAULT_RANGE[1], gt=0)
    min_separation_hz: float = Field(default=MIN_SEPARATION_HZ, gt=0)
    handle_grab_px: float = Field(default=8.0, gt=0)

    # Difference Curve
    match_tolerance_ratio: float = Field(default=MATCH_TOLERANCE_RATIO, gt=0, lt=1)
    diff_min_db: float = DIFF_MIN_DB
    diff_max_db: float = DIFF_MAX_DB

    # Plot Scaling Settings
    plot_autoscale: bool = True
    plot_ymin: float = 30.0
    plot_ymax: float = 110.0

    log_level: str = "INFO"

    # Allow extra fields in YAML without crashing
    model_config = ConfigDict(extra='ignore', validate_assignment=True)

    @model_validator(mode='after')
    def _check_windows(self):
        if self.default_range_start >= self.default_range_end:
            raise ValueError("default_range_start must be below default_range_end")
        if self.plot_ymin >= self.plot_ymax:
            raise ValueError("plot_ymin must be below plot_ymax")
        if self.diff_min_db >= self.diff_max_db:
            raise ValueError("diff_min_db must be below diff_max_db")
        return self

class SettingsManager:
    """Handles loading and saving AppSettings to a YAML file using Pydantic."""
    def __init__(self, default_path: Path = DEFAULT_SETTINGS_FILE):
        self.default_path = default_path

    def load(self, filepath: Path = None) -> AppSettings | None:
        """
        Loads settings from `filepath`, or from the default file.

        The default file falls back to defaults when it is missing or
        invalid. An explicitly chosen file that cannot be read or validated
        gives None, so the caller can keep its current settings.
        """
        explicit = filepath is not None
        path_to_load = filepath if explicit else self.default_path
        fallback = None if explicit else AppSettings()

        if not path_to_load.exists():
            if explicit:
                logger.warning("Settings file %s does not exist", path_to_load)
            return fallback

        try:
            with open(path_to_load, 'r') as f:
                data = yaml.safe_load(f)
            if not data:
                return AppSettings()
            return AppSettings.model_validate(data)
        except (OSError, yaml.YAMLError, ValidationError) as e:
            logger.warning("Error loading settings from %s: %s", path_to_load, e)
            return fallback

    def save(self, settings: AppSettings, filepath: Path = None) -> bool:
        path_to_save = filepath if filepath else self.default_path
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")

        try:
            settings_dict = settings.model_dump(mode='json')

            with open(path_to_save, 'w') as f:
                f.write(f"# Saved by {APP_NAME} on {timestamp}\n")
                yaml.dump(settings_dict, f, default_flow_style=False)
            return True
        except OSError as e:
            logger.error("Error saving settings to %s: %s", path_to_save, e)
            return False
