"""Location shortcuts file path constants and utilities."""

import os
import re
from typing import Mapping, Optional

from location_shortcuts.errors import ConfigDirCreateFailed, HomeDirectoryError


# Config file lives next to the PowerShell profile so existing installs keep working
CONFIG_DIR_NAME = "PowerShell"
CONFIG_FILE_NAME = "LocationShortcuts.json"

# Environment override for the full config file path
CONFIG_PATH_ENV = "LOCATION_SHORTCUTS_CONFIG"

# User Shell Folders value name for the Documents folder
DOCUMENTS_FOLDER_KEY = "Personal"
DEFAULT_DOCUMENTS_SUBPATH = "Documents"

# Matches "\OneDrive\", "\OneDrive - Contoso" and a trailing "\OneDrive"
_CLOUD_REDIRECT_RE = re.compile(r"[\\/]OneDrive(?:[\\/]| - |[\\/]?$)", re.IGNORECASE)

# %VAR% (registry values), ${VAR} and $VAR (user-dirs.dirs)
_ENV_REF_RE = re.compile(r"%([^%]+)%|\$\{([^}]+)\}|\$([A-Za-z_][A-Za-z0-9_]*)")


def get_home_directory() -> str:
    """Get the current user's home directory.

    Raises:
        HomeDirectoryError: If no home directory can be determined at all
    """
    home = os.path.expanduser("~")
    if not home or home == "~":
        raise HomeDirectoryError("Unable to determine the home directory")
    return home


def is_cloud_redirected(path: str) -> bool:
    """Check if a folder path points into a OneDrive-synced location."""
    return bool(_CLOUD_REDIRECT_RE.search(path or ""))


def expand_environment(value: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """Expand %VAR%, ${VAR} and $VAR references.

    Unknown variables are left as-is. %VAR% lookups ignore case like Windows does.
    """
    env = os.environ if environ is None else environ

    def _sub(match):
        windows_name = match.group(1)
        name = windows_name or match.group(2) or match.group(3)
        if name in env:
            return env[name]
        if windows_name:
            for key, found in env.items():
                if key.upper() == name.upper():
                    return found
        return match.group(0)

    return _ENV_REF_RE.sub(_sub, value)


def to_absolute_path(path: str, cwd: Optional[str] = None) -> str:
    """Make a user-supplied path absolute and normalized.

    Relative paths resolve against `cwd` (current working directory by default).
    Symlinks are not followed.
    """
    expanded = os.path.expanduser(path.strip())
    if not os.path.isabs(expanded):
        expanded = os.path.join(cwd or os.getcwd(), expanded)
    return os.path.normpath(expanded)


def ensure_config_dir(config_path: str) -> None:
    """Ensure the directory holding the config file exists.

    Raises:
        ConfigDirCreateFailed: If the directory could not be created
    """
    config_dir = os.path.dirname(config_path)
    try:
        os.makedirs(config_dir, exist_ok=True)
    except OSError as e:
        raise ConfigDirCreateFailed(f"Could not create config directory {config_dir}: {e}") from e
