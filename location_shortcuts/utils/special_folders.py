"""
Special folder resolution.

Special folders (Documents, Downloads, Pictures, ...) can be redirected away
from their default location, most often by OneDrive. The real location is
kept in an OS indirection store:

- Windows: HKCU "User Shell Folders" (raw REG_EXPAND_SZ values)
- Linux: the freedesktop user-dirs.dirs file
- everything else: no store, always the home-relative default

Lookups are best effort. Any failure degrades to `home/<fallback>`.
"""
import logging
import os
import sys
from abc import ABC, abstractmethod
from typing import Dict, Mapping, Optional

from location_shortcuts.errors import IndirectionLookupFailed
from location_shortcuts.utils.paths import expand_environment, get_home_directory

logger = logging.getLogger(__name__)

USER_SHELL_FOLDERS_KEY = r"Software\Microsoft\Windows\CurrentVersion\Explorer\User Shell Folders"

# Downloads has no legacy value name, only its known-folder GUID
DOWNLOADS_FOLDER_KEY = "{374DE290-123F-4565-9164-39C4925E467B}"

# User Shell Folders value name -> user-dirs.dirs variable
XDG_KEY_MAP = {
    "Personal": "XDG_DOCUMENTS_DIR",
    DOWNLOADS_FOLDER_KEY: "XDG_DOWNLOAD_DIR",
    "My Pictures": "XDG_PICTURES_DIR",
    "My Music": "XDG_MUSIC_DIR",
    "My Video": "XDG_VIDEOS_DIR",
}


class IndirectionStore(ABC):
    """
    Key/value facility that knows where redirected special folders live.

    Implementations return the raw stored value; environment references are
    expanded by the resolver.
    """

    @abstractmethod
    def is_available(self) -> bool:
        """Return True if the store can be queried on this host."""
        pass

    @abstractmethod
    def lookup(self, key: str) -> Optional[str]:
        """
        Look up the value stored under `key`.

        Returns:
            The raw value, or None if the key is not set.

        Raises:
            IndirectionLookupFailed: If the store could not be read.
        """
        pass


class NullIndirectionStore(IndirectionStore):
    """Store for hosts without any indirection facility"""

    def is_available(self) -> bool:
        return False

    def lookup(self, key: str) -> Optional[str]:
        return None


class RegistryIndirectionStore(IndirectionStore):
    """Windows registry User Shell Folders"""

    def __init__(self, subkey: str = USER_SHELL_FOLDERS_KEY):
        self.subkey = subkey

    def is_available(self) -> bool:
        return sys.platform == "win32"

    def lookup(self, key: str) -> Optional[str]:
        import winreg

        try:
            with winreg.OpenKey(winreg.HKEY_CURRENT_USER, self.subkey) as handle:
                value, _value_type = winreg.QueryValueEx(handle, key)
        except FileNotFoundError:
            return None
        except OSError as e:
            raise IndirectionLookupFailed(f"Registry lookup for '{key}' failed: {e}") from e

        return value if isinstance(value, str) else None


class XdgUserDirsStore(IndirectionStore):
    """
    freedesktop user-dirs.dirs, the Linux counterpart of User Shell Folders.

    The file holds shell-style assignments such as
    XDG_DOCUMENTS_DIR="$HOME/Documents". Registry value names are translated
    through XDG_KEY_MAP; keys without an XDG equivalent are never found.
    """

    def __init__(self, home: Optional[str] = None, environ: Optional[Mapping[str, str]] = None):
        self._home = home
        self.environ = os.environ if environ is None else environ

    @property
    def home(self) -> str:
        return self._home or get_home_directory()

    @property
    def path(self) -> str:
        config_home = self.environ.get("XDG_CONFIG_HOME") or os.path.join(self.home, ".config")
        return os.path.join(config_home, "user-dirs.dirs")

    def is_available(self) -> bool:
        return os.path.isfile(self.path)

    def lookup(self, key: str) -> Optional[str]:
        xdg_key = XDG_KEY_MAP.get(key)
        if xdg_key is None:
            return None

        value = self._read_entries().get(xdg_key)
        if value is None:
            return None

        # $HOME must be the store's home, not whatever the process has
        for token in ("${HOME}", "$HOME"):
            value = value.replace(token, self.home)
        return value

    def _read_entries(self) -> Dict[str, str]:
        try:
            with open(self.path, "r", encoding="utf-8", errors="replace") as f:
                lines = f.readlines()
        except OSError as e:
            raise IndirectionLookupFailed(f"Could not read {self.path}: {e}") from e

        entries = {}
        for line in lines:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            name, value = line.split("=", 1)
            entries[name.strip()] = value.strip().strip('"')
        return entries


def get_default_indirection_store(home: Optional[str] = None,
                                  environ: Optional[Mapping[str, str]] = None) -> IndirectionStore:
    """Pick the indirection store for the running platform."""
    if sys.platform == "win32":
        return RegistryIndirectionStore()
    if sys.platform.startswith("linux"):
        return XdgUserDirsStore(home=home, environ=environ)
    return NullIndirectionStore()


class SpecialFolderResolver:
    """Resolves special folders through an indirection store with a home fallback"""

    def __init__(self, store: Optional[IndirectionStore] = None, home: Optional[str] = None,
                 environ: Optional[Mapping[str, str]] = None):
        self._home = home
        self.environ = environ
        self.store = store if store is not None else get_default_indirection_store(home, environ)

    @property
    def home(self) -> str:
        """Home directory. Raises HomeDirectoryError when it cannot be determined."""
        return self._home or get_home_directory()

    def resolve(self, indirection_key: Optional[str], fallback_relative_path: str) -> str:
        """Resolve a special folder to an absolute path.

        Args:
            indirection_key: Value name in the indirection store, or None to
                skip the lookup
            fallback_relative_path: Path under the home directory used when
                the lookup is skipped, fails, or yields an unusable path

        Returns:
            Absolute path. The fallback is returned whether it exists or not.
        """
        if indirection_key:
            found = self._lookup(indirection_key)
            if found:
                return found
        return os.path.join(self.home, fallback_relative_path)

    def _lookup(self, key: str) -> Optional[str]:
        """Query the store and validate the value. Never raises."""
        try:
            if not self.store.is_available():
                return None
            value = self.store.lookup(key)
        except (IndirectionLookupFailed, OSError) as e:
            logger.debug(f"[Resolver] Lookup for '{key}' failed, using fallback: {e}")
            return None

        if not value:
            return None

        expanded = expand_environment(value, self.environ)
        if not os.path.isabs(expanded) or not os.path.exists(expanded):
            logger.debug(f"[Resolver] Ignoring '{key}' -> '{expanded}' (not an existing absolute path)")
            return None

        return os.path.normpath(expanded)
