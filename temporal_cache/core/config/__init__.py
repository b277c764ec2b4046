from .settings import (
    ExtensionSettings,
    ScopingStrategy,
    SettingsError,
    TimingStrategy,
    load_settings,
    settings_from_mapping,
)

__all__ = [
    "ExtensionSettings",
    "ScopingStrategy",
    "SettingsError",
    "TimingStrategy",
    "load_settings",
    "settings_from_mapping",
]
