"""
Default shortcut catalogue.

Two kinds of candidates:
- user folders, resolved through SpecialFolderResolver (may be redirected)
- static locations taken from the environment (system dirs, temp, root)

Only candidates whose path exists on this host make it into the generated
map, so the defaults differ from machine to machine.
"""
import logging
import os
import tempfile
from dataclasses import dataclass
from typing import List, Mapping, Optional, Tuple

from location_shortcuts.stores.shortcut_map import ShortcutMap
from location_shortcuts.utils.special_folders import DOWNLOADS_FOLDER_KEY, SpecialFolderResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpecialFolderCandidate:
    """A default shortcut resolved through the indirection store"""
    name: str
    indirection_key: Optional[str]  # None = home-relative only
    fallback_subpath: str


RESOLVED_FOLDER_CANDIDATES = (
    SpecialFolderCandidate("Downloads", DOWNLOADS_FOLDER_KEY, "Downloads"),
    SpecialFolderCandidate("Documents", "Personal", "Documents"),
    SpecialFolderCandidate("Pictures", "My Pictures", "Pictures"),
    SpecialFolderCandidate("Music", "My Music", "Music"),
    SpecialFolderCandidate("Videos", "My Video", "Videos"),
    SpecialFolderCandidate("Scripts", None, "Scripts"),
    SpecialFolderCandidate("Projects", None, "Projects"),
)

# Linux Steam installs, checked when there is no Program Files (x86)
STEAM_LIBRARY_SUBPATHS = (
    os.path.join(".steam", "steam", "steamapps", "common"),
    os.path.join(".local", "share", "Steam", "steamapps", "common"),
)


class DefaultShortcutSet:
    """Generates the default shortcuts for the current host"""

    def __init__(self, resolver: Optional[SpecialFolderResolver] = None,
                 environ: Optional[Mapping[str, str]] = None):
        self.resolver = resolver or SpecialFolderResolver(environ=environ)
        if environ is None:
            environ = self.resolver.environ
        self.environ = os.environ if environ is None else environ

    def generate(self) -> ShortcutMap:
        """Build the default map, keeping only paths that exist right now."""
        shortcuts = ShortcutMap()
        for name, path in self._candidate_paths():
            if path and os.path.exists(path):
                shortcuts[name] = path
            else:
                logger.debug(f"[Defaults] Skipping {name}: {path or 'not available'}")

        logger.info(f"[Defaults] Generated {len(shortcuts)} default shortcuts")
        return shortcuts

    def _candidate_paths(self) -> List[Tuple[str, Optional[str]]]:
        candidates = [
            (candidate.name, self.resolver.resolve(candidate.indirection_key, candidate.fallback_subpath))
            for candidate in RESOLVED_FOLDER_CANDIDATES
        ]
        return candidates + self._static_paths()

    def _static_paths(self) -> List[Tuple[str, Optional[str]]]:
        home = self.resolver.home
        env = self.environ

        system_root = env.get("SystemRoot")
        programs32 = env.get("ProgramFiles(x86)")
        system_drive = env.get("SystemDrive")

        return [
            ("Home", home),
            ("System", os.path.join(system_root, "System32") if system_root else None),
            ("Programs", env.get("ProgramFiles")),
            ("Programs32", programs32),
            ("ProgramData", env.get("ProgramData")),
            ("Steam", self._steam_library(home, programs32)),
            ("Temp", self._temp_directory()),
            # os.path.join("C:", "Temp") would be drive-relative
            ("CTemp", f"{system_drive}{os.sep}Temp" if system_drive else None),
            ("Root", os.path.splitdrive(home)[0] + os.sep),
        ]

    def _steam_library(self, home: str, programs32: Optional[str]) -> Optional[str]:
        if programs32:
            return os.path.join(programs32, "Steam", "steamapps", "common")

        for subpath in STEAM_LIBRARY_SUBPATHS:
            path = os.path.join(home, subpath)
            if os.path.exists(path):
                return path
        return None

    def _temp_directory(self) -> str:
        for var in ("TEMP", "TMP", "TMPDIR"):
            if self.environ.get(var):
                return self.environ[var]
        return tempfile.gettempdir()
