class SettingsError(Exception):
    """Base exception for all settings-related errors."""


class SettingsStoreError(SettingsError):
    """Raised when a remote settings call fails."""


class SettingsLoadError(SettingsError):
    """Raised when the settings bundle cannot be loaded."""


class UnknownProviderError(SettingsLoadError):
    """Raised when the stored AI provider tag is not recognized."""


class SettingsSaveError(SettingsError):
    """Raised when settings cannot be written back to the store."""
