"""
Tests for config file location and OneDrive redirection gating.
"""
from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import Mock, patch

from location_shortcuts.errors import ConfigDirCreateFailed
from location_shortcuts.utils.config_locator import ConfigLocator
from location_shortcuts.utils.special_folders import IndirectionStore, SpecialFolderResolver


def _locator(home: Path, documents: str, environ=None) -> ConfigLocator:
    store = Mock(spec=IndirectionStore)
    store.is_available.return_value = True
    store.lookup.return_value = documents
    resolver = SpecialFolderResolver(store=store, home=str(home), environ={})
    return ConfigLocator(resolver=resolver, environ=environ or {})


def test_default_location(home: Path, resolver: SpecialFolderResolver) -> None:
    locator = ConfigLocator(resolver=resolver, environ={})
    path = locator.get_config_file_path()

    assert path == os.path.join(str(home), "Documents", "PowerShell", "LocationShortcuts.json")
    assert os.path.isdir(os.path.dirname(path))
    assert locator.last_error is None


def test_onedrive_redirection_is_honored(home: Path) -> None:
    onedrive_docs = home / "OneDrive - Contoso" / "Documents"
    onedrive_docs.mkdir(parents=True)

    path = _locator(home, str(onedrive_docs)).get_config_file_path()

    assert path == os.path.join(str(onedrive_docs), "PowerShell", "LocationShortcuts.json")


def test_other_redirection_is_ignored(home: Path, tmp_path: Path) -> None:
    elsewhere = tmp_path / "D" / "MyDocs"
    elsewhere.mkdir(parents=True)
    locator = _locator(home, str(elsewhere))

    assert locator.get_documents_directory() == str(elsewhere)
    assert locator.get_base_directory() == os.path.join(str(home), "Documents")
    assert not (elsewhere / "PowerShell").exists()


def test_path_is_recomputed_each_call(home: Path) -> None:
    onedrive_docs = home / "OneDrive" / "Documents"
    onedrive_docs.mkdir(parents=True)
    locator = _locator(home, str(onedrive_docs))

    first = locator.get_config_file_path()
    locator.resolver.store.lookup.return_value = None
    second = locator.get_config_file_path()

    assert first.startswith(str(onedrive_docs))
    assert second == os.path.join(str(home), "Documents", "PowerShell", "LocationShortcuts.json")


def test_environment_override(resolver: SpecialFolderResolver, tmp_path: Path) -> None:
    target = tmp_path / "custom" / "shortcuts.json"
    locator = ConfigLocator(resolver=resolver, environ={"LOCATION_SHORTCUTS_CONFIG": str(target)})

    assert locator.get_config_file_path() == str(target)
    assert target.parent.is_dir()


def test_directory_creation_failure_still_returns_path(resolver: SpecialFolderResolver, home: Path) -> None:
    locator = ConfigLocator(resolver=resolver, environ={})

    with patch("location_shortcuts.utils.paths.os.makedirs", side_effect=PermissionError("denied")):
        path = locator.get_config_file_path()

    assert path == os.path.join(str(home), "Documents", "PowerShell", "LocationShortcuts.json")
    assert isinstance(locator.last_error, ConfigDirCreateFailed)
