# Utils package
from .paths import (
    get_home_directory,
    is_cloud_redirected,
    expand_environment,
    to_absolute_path,
    ensure_config_dir,
    CONFIG_DIR_NAME,
    CONFIG_FILE_NAME,
    CONFIG_PATH_ENV,
    DOCUMENTS_FOLDER_KEY,
    DEFAULT_DOCUMENTS_SUBPATH,
)
from .special_folders import (
    IndirectionStore,
    NullIndirectionStore,
    RegistryIndirectionStore,
    XdgUserDirsStore,
    SpecialFolderResolver,
    get_default_indirection_store,
    DOWNLOADS_FOLDER_KEY,
)
from .config_locator import ConfigLocator

__all__ = [
    'get_home_directory',
    'is_cloud_redirected',
    'expand_environment',
    'to_absolute_path',
    'ensure_config_dir',
    'CONFIG_DIR_NAME',
    'CONFIG_FILE_NAME',
    'CONFIG_PATH_ENV',
    'DOCUMENTS_FOLDER_KEY',
    'DEFAULT_DOCUMENTS_SUBPATH',
    'IndirectionStore',
    'NullIndirectionStore',
    'RegistryIndirectionStore',
    'XdgUserDirsStore',
    'SpecialFolderResolver',
    'get_default_indirection_store',
    'DOWNLOADS_FOLDER_KEY',
    'ConfigLocator',
]
