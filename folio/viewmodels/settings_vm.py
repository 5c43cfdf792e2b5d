from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Callable, Dict, Mapping, Optional

from ..utils.logging import env_forces_debug

ZOOM_MIN = 50
ZOOM_MAX = 100
ZOOM_STEP = 5
DEFAULT_AUTOSAVE_DELAY_MS = 1500

_TRUE_WORDS = {"1", "true", "yes", "on"}


@dataclass
class SettingsConfig:
    """Typed UI preferences that persist via StorageLocal."""

    ui_dark: Optional[bool] = None
    """``None`` follows the system appearance."""
    autosave: bool = False
    autosave_delay_ms: int = DEFAULT_AUTOSAVE_DELAY_MS
    zoom: int = ZOOM_MAX
    last_portfolio_path: Optional[str] = None
    has_run: bool = False


def snap_zoom(value: Any) -> int:
    """Clamp to 50-100 % and round to the nearest multiple of 5."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return ZOOM_MAX
    snapped = int(round(number / ZOOM_STEP) * ZOOM_STEP)
    return max(ZOOM_MIN, min(ZOOM_MAX, snapped))


def as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_WORDS
    return bool(value)


def as_optional_bool(value: Any) -> Optional[bool]:
    return None if value is None else as_bool(value)


def as_delay_ms(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError("autosave_delay_ms must be an integer.")
    try:
        number = int(value.strip()) if isinstance(value, str) else int(value)
    except ValueError as exc:
        raise ValueError("autosave_delay_ms must be an integer.") from exc
    if number < 0:
        raise ValueError("autosave_delay_ms must be non-negative.")
    return number


def as_optional_path(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError("last_portfolio_path must be a string path.")
    return value.strip() or None


# persisted key -> coercion applied before it reaches SettingsConfig
_COERCERS: Dict[str, Callable[[Any], Any]] = {
    "ui_dark": as_optional_bool,
    "autosave": as_bool,
    "autosave_delay_ms": as_delay_ms,
    "zoom": snap_zoom,
    "last_portfolio_path": as_optional_path,
    "has_run": as_bool,
}
CONFIG_KEYS = tuple(f.name for f in fields(SettingsConfig))


class SettingsVM:
    """Preference state and validation for the preferences dialog; no I/O."""

    def __init__(
        self,
        *,
        config: Optional[SettingsConfig] = None,
        on_save: Optional[Callable[[dict], None]] = None,
    ) -> None:
        self.config = config or SettingsConfig()
        self.on_save = on_save
        # Not part of SettingsConfig: the environment can force it on.
        self.debug_logging: bool = env_forces_debug()

    def _set(self, key: str, value: Any) -> None:
        self.config = replace(self.config, **{key: _COERCERS[key](value)})

    @property
    def ui_dark(self) -> Optional[bool]:
        return self.config.ui_dark

    @ui_dark.setter
    def ui_dark(self, value: Any) -> None:
        self._set("ui_dark", value)

    @property
    def autosave(self) -> bool:
        return self.config.autosave

    @autosave.setter
    def autosave(self, value: Any) -> None:
        self._set("autosave", value)

    @property
    def autosave_delay_ms(self) -> int:
        return self.config.autosave_delay_ms

    @autosave_delay_ms.setter
    def autosave_delay_ms(self, value: Any) -> None:
        self._set("autosave_delay_ms", value)

    @property
    def zoom(self) -> int:
        return self.config.zoom

    @zoom.setter
    def zoom(self, value: Any) -> None:
        self._set("zoom", value)

    @property
    def last_portfolio_path(self) -> Optional[str]:
        return self.config.last_portfolio_path

    @last_portfolio_path.setter
    def last_portfolio_path(self, value: Any) -> None:
        self._set("last_portfolio_path", value)

    @property
    def has_run(self) -> bool:
        return self.config.has_run

    @has_run.setter
    def has_run(self, value: Any) -> None:
        self._set("has_run", value)

    # ------------------------------------------------------------------
    def apply_dict(self, payload: Mapping[str, Any]) -> None:
        """Apply a flat preferences dict; unknown keys raise ``ValueError``.

        Values are coerced first, so a bad value leaves the config untouched.
        """
        if not isinstance(payload, Mapping):
            raise ValueError("Preferences payload must be a mapping.")
        unknown = sorted(str(key) for key in payload if key not in CONFIG_KEYS and key != "debug_logging")
        if unknown:
            raise ValueError(f"Unsupported settings keys: {', '.join(unknown)}")

        coerced = {key: _COERCERS[key](payload[key]) for key in CONFIG_KEYS if key in payload}
        if coerced:
            self.config = replace(self.config, **coerced)
        if "debug_logging" in payload:
            self.debug_logging = as_bool(payload["debug_logging"])

    def to_dict(self) -> dict:
        return {**asdict(self.config), "debug_logging": bool(self.debug_logging)}

    def cmd_save(self) -> None:
        if self.on_save:
            self.on_save(self.to_dict())

    def zoom_in(self) -> int:
        self.zoom = self.zoom + ZOOM_STEP
        return self.zoom

    def zoom_out(self) -> int:
        self.zoom = self.zoom - ZOOM_STEP
        return self.zoom

    def effective_dark(self, system_dark: bool = False) -> bool:
        return system_dark if self.ui_dark is None else self.ui_dark


def default_settings_payload() -> dict:
    return SettingsVM().to_dict()


__all__ = ["SettingsConfig", "SettingsVM", "default_settings_payload", "snap_zoom"]
