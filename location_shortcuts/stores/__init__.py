# Stores package
from .shortcut_map import ShortcutMap, SHORTCUT_NAME_PATTERN, is_valid_name
from .shortcut_store import ShortcutStore
