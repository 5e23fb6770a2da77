import os
from pathlib import Path

try:
    import tomllib
except ModuleNotFoundError:
    import tomli as tomllib  # pyright: ignore[reportMissingImports]


# Settings key constants
SETTING_OUTPUT_DIRECTORY = 'output.directory'
SETTING_SORT_HASHES = 'output.sort_hashes'
SETTING_LOG_DIRECTORY = 'logging.directory'
SETTING_CONSOLE_LEVEL = 'logging.console_level'
SETTING_FILE_LEVEL = 'logging.file_level'

DEFAULT_SETTINGS_FILE = 'hashreport.toml'
SETTINGS_ENVIRONMENT_VARIABLE = 'HASHREPORT_CONFIG'


class ReportSettings:
    """Settings manager for report runs.

    Provides a read-only key-value interface to settings loaded from a TOML file. This
    class does not interpret the values; callers apply their own defaults and validation.
    Command-line options take precedence over anything read here.

    Example:
        settings = ReportSettings(Path('hashreport.toml'))
        output_dir = settings.get(SETTING_OUTPUT_DIRECTORY, '.')
        sort_hashes = settings.get(SETTING_SORT_HASHES, False)
    """

    def __init__(self, settings_file: Path | None = None):
        """Initialize settings from a TOML file.

        Args:
            settings_file: TOML file to load. None means no settings, and every get()
                returns its default.

        Raises:
            FileNotFoundError: settings_file does not exist
            tomllib.TOMLDecodeError: settings_file is not valid TOML
        """
        self._settings_file = settings_file
        self._settings = {}

        if settings_file is not None:
            with open(settings_file, 'rb') as f:
                self._settings = tomllib.load(f)

    @classmethod
    def locate(cls, explicit_path: str | os.PathLike | None = None) -> 'ReportSettings':
        """Load settings from the first available source.

        Sources in order: explicit_path, the HASHREPORT_CONFIG environment variable, and
        hashreport.toml in the current working directory if present. Explicit paths must
        exist; the working directory file is optional.
        """
        if explicit_path is None:
            explicit_path = os.environ.get(SETTINGS_ENVIRONMENT_VARIABLE) or None

        if explicit_path is not None:
            return cls(Path(explicit_path).absolute())

        default_file = Path.cwd() / DEFAULT_SETTINGS_FILE
        if default_file.is_file():
            return cls(default_file)

        return cls()

    @property
    def settings_file(self) -> Path | None:
        return self._settings_file

    def get(self, key: str, default=None):
        """Get a setting value by key with optional default.

        Supports dot notation for nested keys (e.g., 'logging.directory' accesses
        settings['logging']['directory']). Returns the default value if the key path does
        not exist or if any intermediate value is not a table.

        Examples:
            >>> settings.get(SETTING_SORT_HASHES, False)
            True
            >>> settings.get('nonexistent.key', 'fallback')
            'fallback'
        """
        keys = key.split('.')
        value = self._settings

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def get_typed(self, key: str, expected_type: type, default=None):
        """Get a setting value like get(), requiring it to be of expected_type when present.

        Raises:
            ValueError: The setting exists but holds a value of another type
        """
        value = self.get(key, default)
        if value is not None and not isinstance(value, expected_type):
            raise ValueError(
                f"{key} must be a {expected_type.__name__}, found {type(value).__name__} {value!r}"
                + (f" in {self._settings_file}" if self._settings_file is not None else ""))
        return value
