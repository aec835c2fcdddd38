# Controllers package
from .shortcuts_manager import ShortcutsManager
