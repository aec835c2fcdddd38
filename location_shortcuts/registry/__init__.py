# Default shortcut registry
from .default_shortcuts import (
    DefaultShortcutSet,
    SpecialFolderCandidate,
    RESOLVED_FOLDER_CANDIDATES,
)
