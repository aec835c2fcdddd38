"""Locates the shortcuts config file.

The file lives under the Documents folder. Documents redirection is honored
only when it points into OneDrive; any other redirected location is ignored
and the plain home/Documents is used instead.
"""
import logging
import os
from typing import Mapping, Optional

from location_shortcuts.errors import ConfigDirCreateFailed
from location_shortcuts.utils.paths import (
    CONFIG_DIR_NAME,
    CONFIG_FILE_NAME,
    CONFIG_PATH_ENV,
    DEFAULT_DOCUMENTS_SUBPATH,
    DOCUMENTS_FOLDER_KEY,
    ensure_config_dir,
    is_cloud_redirected,
    to_absolute_path,
)
from location_shortcuts.utils.special_folders import SpecialFolderResolver

logger = logging.getLogger(__name__)


class ConfigLocator:
    """Computes the config file path. Nothing is cached between calls."""

    def __init__(self, resolver: Optional[SpecialFolderResolver] = None,
                 environ: Optional[Mapping[str, str]] = None):
        self.resolver = resolver or SpecialFolderResolver(environ=environ)
        self.environ = os.environ if environ is None else environ
        # Set when the last get_config_file_path() could not create the directory
        self.last_error: Optional[ConfigDirCreateFailed] = None

    def get_documents_directory(self) -> str:
        """Documents folder as reported by the indirection store (or the default)."""
        return self.resolver.resolve(DOCUMENTS_FOLDER_KEY, DEFAULT_DOCUMENTS_SUBPATH)

    def get_base_directory(self) -> str:
        documents = self.get_documents_directory()
        if is_cloud_redirected(documents):
            logger.debug(f"[ConfigLocator] Documents redirected to OneDrive: {documents}")
            return documents
        return os.path.join(self.resolver.home, DEFAULT_DOCUMENTS_SUBPATH)

    def get_config_file_path(self) -> str:
        """Get the config file path, creating its directory if needed.

        A directory that cannot be created is logged and recorded in
        `last_error`; the path is returned anyway so the real failure shows up
        on the read or write that follows.
        """
        override = self.environ.get(CONFIG_PATH_ENV)
        if override:
            config_path = to_absolute_path(override)
        else:
            config_path = os.path.join(self.get_base_directory(), CONFIG_DIR_NAME, CONFIG_FILE_NAME)

        self.last_error = None
        try:
            ensure_config_dir(config_path)
        except ConfigDirCreateFailed as e:
            logger.warning(f"[ConfigLocator] {e}")
            self.last_error = e

        return config_path
