"""Location shortcuts manager.

Operations the command layer calls. Each returns a result dict:

    {'success': True, ...}
    {'success': False, 'error': 'errors.duplicateName', 'message': ..., 'severity': 'warning'}

Nothing here raises except HomeDirectoryError.
"""

import fnmatch
import logging
import os
from typing import Any, Dict, Optional

from location_shortcuts.errors import (
    ConfigMalformed,
    ConfigUnreadable,
    InvalidPath,
    ShortcutError,
    TargetMissing,
    UnknownShortcut,
)
from location_shortcuts.stores.shortcut_map import ShortcutMap
from location_shortcuts.stores.shortcut_store import ShortcutStore
from location_shortcuts.utils.paths import to_absolute_path

logger = logging.getLogger(__name__)


class ShortcutsManager:
    """Add, edit, remove, list and navigate location shortcuts"""

    def __init__(self, store: Optional[ShortcutStore] = None, cwd: Optional[str] = None):
        self.store = store or ShortcutStore()
        # Relative paths resolve against this, or the process cwd at call time
        self.cwd = cwd

    def _with_warnings(self, result: Dict[str, Any]) -> Dict[str, Any]:
        """Attach a config directory problem from the last path lookup, if any."""
        error = self.store.locator.last_error
        if error is not None:
            result['warnings'] = [{'error': error.code, 'message': str(error), 'severity': error.severity}]
        return result

    def _failure(self, error: ShortcutError) -> Dict[str, Any]:
        logger.log(error.level, f"[Shortcuts] {error}")
        return self._with_warnings(error.to_result())

    def _load_for_update(self) -> ShortcutMap:
        """Load the map, refusing to go on if the config file is broken.

        Saving over a file we could not read would destroy it.
        """
        shortcuts = self.store.load()
        error = self.store.last_error
        if isinstance(error, (ConfigUnreadable, ConfigMalformed)):
            raise error
        return shortcuts

    def _resolve_target(self, path: str) -> str:
        if not path or not path.strip():
            raise InvalidPath("No path given")

        target = to_absolute_path(path, self.cwd)
        if not os.path.exists(target):
            raise InvalidPath(f"Path '{target}' does not exist")
        try:
            target.encode('utf-8')
        except UnicodeEncodeError:
            # Undecodable filename bytes, the config file is UTF-8 JSON
            raise InvalidPath(f"Path {target!r} is not valid UTF-8 and cannot be stored") from None
        return target

    def get_shortcuts(self) -> Dict[str, Any]:
        """Get all shortcuts. A recovered load error still comes with a (possibly empty) map."""
        shortcuts = self.store.load()
        error = self.store.last_error
        if error is not None:
            return self._with_warnings({**error.to_result(), 'shortcuts': shortcuts.to_dict()})
        return self._with_warnings({'success': True, 'shortcuts': shortcuts.to_dict()})

    def create_defaults(self, passthrough: bool = False) -> Dict[str, Any]:
        """Overwrite the config with generated defaults.

        Args:
            passthrough: Include the generated shortcuts in the result
        """
        try:
            shortcuts = self.store.create_defaults()
        except ShortcutError as e:
            return self._failure(e)

        logger.info(f"[Shortcuts] Created {len(shortcuts)} default shortcuts")
        result = {'success': True, 'count': len(shortcuts)}
        if passthrough:
            result['shortcuts'] = shortcuts.to_dict()
        return self._with_warnings(result)

    def add_shortcut(self, name: str, path: str) -> Dict[str, Any]:
        try:
            target = self._resolve_target(path)
            shortcuts = self._load_for_update()
            stored = self.store.add(shortcuts, name, target)
            self.store.save(shortcuts)
        except ShortcutError as e:
            return self._failure(e)

        logger.info(f"[Shortcuts] Added {stored} -> {target}")
        return self._with_warnings({'success': True, 'name': stored, 'path': target})

    def edit_shortcut(self, name: str, new_path: str) -> Dict[str, Any]:
        try:
            target = self._resolve_target(new_path)
            shortcuts = self._load_for_update()
            stored = self.store.edit(shortcuts, name, target)
            self.store.save(shortcuts)
        except ShortcutError as e:
            return self._failure(e)

        logger.info(f"[Shortcuts] Updated {stored} -> {target}")
        return self._with_warnings({'success': True, 'name': stored, 'path': target})

    def remove_shortcut(self, name: str) -> Dict[str, Any]:
        try:
            shortcuts = self._load_for_update()
            path = shortcuts.get(name)
            stored = self.store.remove(shortcuts, name)
            self.store.save(shortcuts)
        except ShortcutError as e:
            return self._failure(e)

        logger.info(f"[Shortcuts] Removed {stored}")
        return self._with_warnings({'success': True, 'name': stored, 'path': path})

    def navigate_to(self, name: str) -> Dict[str, Any]:
        """Look up where a shortcut points. The caller does the actual cd."""
        try:
            shortcuts = self._load_for_update()
            stored = self.store.exists(shortcuts, name)
            if stored is None:
                raise UnknownShortcut(f"Shortcut '{name}' does not exist")

            path = shortcuts[stored]
            if not os.path.exists(path):
                raise TargetMissing(f"Shortcut '{stored}' points to '{path}', which no longer exists")
        except ShortcutError as e:
            return self._failure(e)

        return self._with_warnings({'success': True, 'name': stored, 'path': path})

    def find_shortcuts(self, pattern: str = '*') -> Dict[str, Any]:
        """List shortcuts whose names match a wildcard pattern, sorted by name.

        Matching ignores case. Each entry also says whether its target still exists.
        """
        result = self.get_shortcuts()
        wanted = (pattern or '*').lower()
        matches = [
            {'name': name, 'path': path, 'exists': os.path.exists(path)}
            for name, path in result['shortcuts'].items()
            if fnmatch.fnmatchcase(name.lower(), wanted)
        ]
        matches.sort(key=lambda entry: entry['name'].lower())
        result['shortcuts'] = matches
        return result

    def prune_missing(self) -> Dict[str, Any]:
        """Remove every shortcut whose target no longer exists."""
        try:
            shortcuts = self._load_for_update()
            removed = sorted(
                (name for name, path in shortcuts.items() if not os.path.exists(path)),
                key=str.lower,
            )
            for name in removed:
                self.store.remove(shortcuts, name)
            if removed:
                self.store.save(shortcuts)
        except ShortcutError as e:
            return self._failure(e)

        if removed:
            logger.info(f"[Shortcuts] Pruned {len(removed)} missing shortcuts: {', '.join(removed)}")
        return self._with_warnings({'success': True, 'removed': removed, 'kept': len(shortcuts)})
