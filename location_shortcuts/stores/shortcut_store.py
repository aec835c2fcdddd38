"""
Shortcut store with JSON storage.

The config file is a flat JSON object of shortcut name -> absolute path:

    {"Home": "/home/alice", "Projects": "/home/alice/Projects"}

There is no locking between processes. Two invocations that both load,
change and save race, and the later save wins. The temp-file swap in save()
only keeps the file from being torn; it does not serialize writers.
"""
import json
import logging
import os
import tempfile
from typing import Any, Mapping, Optional

from location_shortcuts.errors import (
    ConfigMalformed,
    ConfigUnreadable,
    ConfigWriteError,
    DuplicateName,
    InvalidName,
    ShortcutError,
    UnknownName,
)
from location_shortcuts.stores.shortcut_map import ShortcutMap, is_valid_name
from location_shortcuts.utils.config_locator import ConfigLocator

logger = logging.getLogger(__name__)


class ShortcutStore:
    """
    Loads and saves the shortcut map.

    The config path is recomputed on every load and save since redirection
    can change between invocations. add/edit/remove only touch the map they
    are given; callers persist with save().
    """

    def __init__(self, locator: Optional[ConfigLocator] = None, defaults=None):
        # Imported here, the defaults registry itself builds ShortcutMaps
        from location_shortcuts.registry.default_shortcuts import DefaultShortcutSet

        self.locator = locator or ConfigLocator()
        self.defaults = defaults or DefaultShortcutSet(resolver=self.locator.resolver)
        # Error recovered by the last load(), None when it went cleanly
        self.last_error: Optional[ShortcutError] = None

    @property
    def config_path(self) -> str:
        return self.locator.get_config_file_path()

    def load(self) -> ShortcutMap:
        """Load the shortcut map. Never raises for a bad config file.

        - no file: defaults are generated, saved and returned
        - unreadable or malformed file: the error is logged and kept in
          `last_error`, an empty map is returned and the file is left alone
        """
        self.last_error = None
        config_path = self.config_path

        if not os.path.exists(config_path):
            logger.info(f"[ShortcutStore] No config at {config_path}, creating defaults")
            shortcuts = self.defaults.generate()
            try:
                self._write(config_path, shortcuts)
            except ConfigWriteError as e:
                logger.error(f"[ShortcutStore] {e}")
                self.last_error = e
            return shortcuts

        try:
            shortcuts = self._read(config_path)
        except (ConfigUnreadable, ConfigMalformed) as e:
            logger.error(f"[ShortcutStore] {e}")
            self.last_error = e
            return ShortcutMap()

        logger.debug(f"[ShortcutStore] Loaded {len(shortcuts)} shortcuts from {config_path}")
        return shortcuts

    def save(self, shortcuts: Mapping[str, str]) -> str:
        """Persist the map, overwriting the config file.

        Returns:
            The path written to

        Raises:
            ConfigWriteError: If the file could not be written
        """
        config_path = self.config_path
        self._write(config_path, shortcuts)
        return config_path

    def create_defaults(self) -> ShortcutMap:
        """Replace the config with freshly generated defaults. No confirmation."""
        shortcuts = self.defaults.generate()
        self.save(shortcuts)
        return shortcuts

    @staticmethod
    def exists(shortcuts: Mapping[str, str], name: str) -> Optional[str]:
        """Case-insensitive lookup. Returns the stored casing, or None."""
        if isinstance(shortcuts, ShortcutMap):
            return shortcuts.canonical_name(name)

        wanted = name.lower()
        for stored in shortcuts:
            if stored.lower() == wanted:
                return stored
        return None

    def add(self, shortcuts: ShortcutMap, name: str, path: str) -> str:
        if not is_valid_name(name):
            raise InvalidName(f"'{name}' is not a valid shortcut name (letters, digits, '_' and '-' only)")

        existing = self.exists(shortcuts, name)
        if existing is not None:
            raise DuplicateName(f"Shortcut '{existing}' already exists")

        shortcuts[name] = path
        return name

    def edit(self, shortcuts: ShortcutMap, name: str, new_path: str) -> str:
        """Point an existing shortcut elsewhere, keeping its stored casing."""
        existing = self.exists(shortcuts, name)
        if existing is None:
            raise UnknownName(f"Shortcut '{name}' does not exist")

        shortcuts[existing] = new_path
        return existing

    def remove(self, shortcuts: ShortcutMap, name: str) -> str:
        existing = self.exists(shortcuts, name)
        if existing is None:
            raise UnknownName(f"Shortcut '{name}' does not exist")

        del shortcuts[existing]
        return existing

    def _read(self, config_path: str) -> ShortcutMap:
        # utf-8-sig: Windows PowerShell 5 writes a BOM
        try:
            with open(config_path, 'r', encoding='utf-8-sig') as f:
                data = json.load(f)
        except ValueError as e:
            raise ConfigMalformed(f"Config file {config_path} is not valid JSON: {e}") from e
        except OSError as e:
            raise ConfigUnreadable(f"Could not read config file {config_path}: {e}") from e

        return self._validate(config_path, data)

    def _validate(self, config_path: str, data: Any) -> ShortcutMap:
        if not isinstance(data, dict):
            raise ConfigMalformed(
                f"Config file {config_path} must hold a JSON object, got {type(data).__name__}"
            )

        shortcuts = ShortcutMap()
        for name, path in data.items():
            if not isinstance(path, str):
                raise ConfigMalformed(
                    f"Config file {config_path}: path of '{name}' must be a string, got {type(path).__name__}"
                )
            existing = shortcuts.canonical_name(name)
            if existing is not None:
                raise ConfigMalformed(f"Config file {config_path}: '{name}' duplicates '{existing}'")
            if not is_valid_name(name):
                logger.warning(f"[ShortcutStore] Keeping shortcut with invalid name '{name}'")
            shortcuts[name] = path

        return shortcuts

    def _write(self, config_path: str, shortcuts: Mapping[str, str]) -> None:
        """Write via temp file + rename, falling back to a direct overwrite."""
        try:
            payload = (json.dumps(dict(shortcuts.items()), indent=2, ensure_ascii=False) + "\n").encode('utf-8')
        except UnicodeEncodeError as e:
            # Undecodable filename bytes come back from the OS as lone surrogates
            raise ConfigWriteError(f"Could not encode shortcuts for {config_path} as UTF-8: {e}") from e

        dir_name = os.path.dirname(config_path)
        tmp_path = None

        try:
            with tempfile.NamedTemporaryFile(mode='wb', dir=dir_name, delete=False,
                                             prefix='.LocationShortcuts.', suffix='.tmp') as tmp:
                tmp_path = tmp.name
                tmp.write(payload)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_path, config_path)
            tmp_path = None
            logger.info(f"[ShortcutStore] Saved {len(shortcuts)} shortcuts to {config_path}")
            return
        except OSError as e:
            logger.warning(f"[ShortcutStore] Atomic write failed, falling back: {e}")
        finally:
            if tmp_path and os.path.exists(tmp_path):
                try:
                    os.remove(tmp_path)
                except OSError as cleanup_error:
                    logger.debug(f"[ShortcutStore] Could not remove {tmp_path}: {cleanup_error}")

        try:
            with open(config_path, 'wb') as f:
                f.write(payload)
        except OSError as e:
            raise ConfigWriteError(f"Could not write config file {config_path}: {e}") from e

        logger.info(f"[ShortcutStore] Saved {len(shortcuts)} shortcuts to {config_path}")
