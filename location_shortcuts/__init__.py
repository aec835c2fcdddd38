# Location Shortcuts
# Named directory bookmarks persisted in a JSON file under the (possibly OneDrive-redirected) Documents folder.

from .controllers import ShortcutsManager
from .stores import ShortcutMap, ShortcutStore
