from __future__ import annotations

from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from location_shortcuts.controllers.shortcuts_manager import ShortcutsManager
from location_shortcuts.registry.default_shortcuts import DefaultShortcutSet
from location_shortcuts.stores.shortcut_store import ShortcutStore
from location_shortcuts.utils.config_locator import ConfigLocator
from location_shortcuts.utils.special_folders import NullIndirectionStore, SpecialFolderResolver


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """A fake home directory."""
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def environ() -> dict:
    """An isolated environment with none of the Windows folder variables."""
    return {}


@pytest.fixture
def resolver(home: Path, environ: dict) -> SpecialFolderResolver:
    return SpecialFolderResolver(store=NullIndirectionStore(), home=str(home), environ=environ)


@pytest.fixture
def shortcut_store(resolver: SpecialFolderResolver, environ: dict) -> ShortcutStore:
    locator = ConfigLocator(resolver=resolver, environ=environ)
    defaults = DefaultShortcutSet(resolver=resolver, environ=environ)
    return ShortcutStore(locator=locator, defaults=defaults)


@pytest.fixture
def config_path(home: Path) -> Path:
    return home / "Documents" / "PowerShell" / "LocationShortcuts.json"


@pytest.fixture
def manager(shortcut_store: ShortcutStore, tmp_path: Path) -> ShortcutsManager:
    return ShortcutsManager(store=shortcut_store, cwd=str(tmp_path))
