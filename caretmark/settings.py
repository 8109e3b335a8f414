"""Persistent user settings for the affinity marker and resolver.

Settings are stored as JSON in the user's config directory and survive
application restarts.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import AffinityConstants
from .indicator import MarkerOffsets
from .resolver import ResolverOptions

logger = logging.getLogger(__name__)


@dataclass
class AffinitySettings:
    # Marker offsets in terminal cells
    left_offset: int = AffinityConstants.CELL_LEFT_OFFSET
    baseline_offset: int = AffinityConstants.CELL_BASELINE_OFFSET
    marker_glyph: str = AffinityConstants.MARKER_GLYPH
    sibling_contains_quirk: bool = False

    def marker_offsets(self) -> MarkerOffsets:
        return MarkerOffsets(self.left_offset, self.baseline_offset)

    def resolver_options(self) -> ResolverOptions:
        return ResolverOptions(sibling_contains_quirk=self.sibling_contains_quirk)


def validate_setting(key: str, value: Any) -> bool:
    """Check a single setting value.

    Unknown keys are rejected; callers drop them.
    """
    if key in ('left_offset', 'baseline_offset'):
        # bool is an int subclass; reject it explicitly
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if key == 'marker_glyph':
        return isinstance(value, str) and len(value) == 1
    if key == 'sibling_contains_quirk':
        return isinstance(value, bool)
    return False


class SettingsPersistence:
    """Loads and saves AffinitySettings in a JSON file."""

    def __init__(self, config_dir: Optional[Path] = None):
        self._config_dir = Path(config_dir or platformdirs.user_config_dir(AffinityConstants.APP_NAME))
        self._settings_file = self._config_dir / AffinityConstants.SETTINGS_FILENAME
        self._settings_cache: Optional[AffinitySettings] = None

    @property
    def settings_file(self) -> Path:
        return self._settings_file

    def _ensure_config_dir(self) -> None:
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Could not create config directory {self._config_dir}: {e}")

    def _read_raw(self) -> Dict[str, Any]:
        if not self._settings_file.exists():
            return {}
        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load settings from {self._settings_file}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            return {}
        return data

    def load_settings(self) -> AffinitySettings:
        """Load settings, falling back to defaults for anything missing or invalid."""
        if self._settings_cache is not None:
            return self._settings_cache

        known = {f.name for f in fields(AffinitySettings)}
        values: Dict[str, Any] = {}
        for key, value in self._read_raw().items():
            if key not in known:
                logger.warning(f"Ignoring unknown setting {key!r}")
            elif not validate_setting(key, value):
                logger.warning(f"Ignoring invalid value for {key!r}: {value!r}")
            else:
                values[key] = value

        self._settings_cache = AffinitySettings(**values)
        return self._settings_cache

    def save_settings(self, settings: AffinitySettings) -> bool:
        """Save settings atomically (temp file + rename).

        Returns:
            True if save was successful, False otherwise.
        """
        for key, value in asdict(settings).items():
            if not validate_setting(key, value):
                raise ValueError(f"Invalid value for {key!r}: {value!r}")

        self._ensure_config_dir()
        temp_file = self._settings_file.with_suffix('.tmp')
        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(asdict(settings), f, indent=2)
            temp_file.replace(self._settings_file)
        except OSError as e:
            logger.warning(f"Could not save settings to {self._settings_file}: {e}")
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError:
                pass
            return False

        self._settings_cache = settings
        return True

    def clear_cache(self) -> None:
        self._settings_cache = None


_persistence: Optional[SettingsPersistence] = None


def get_persistence() -> SettingsPersistence:
    """Get the process-wide SettingsPersistence instance."""
    global _persistence
    if _persistence is None:
        _persistence = SettingsPersistence()
    return _persistence
