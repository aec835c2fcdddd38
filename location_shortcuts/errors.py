"""
Error taxonomy for location shortcuts.

Components raise these; the controller layer turns them into result dicts
so the CLI never has to catch anything. Each class carries a stable `code`
(returned to callers as the 'error' field) and a `severity` used for logging.
"""
import logging
from typing import Any, Dict


class ShortcutError(Exception):
    """Base class for every recoverable shortcut error"""
    code = 'errors.shortcut'
    severity = 'error'

    @property
    def level(self) -> int:
        """Logging level matching the severity"""
        return {
            'debug': logging.DEBUG,
            'warning': logging.WARNING,
        }.get(self.severity, logging.ERROR)

    def to_result(self) -> Dict[str, Any]:
        return {
            'success': False,
            'error': self.code,
            'message': str(self),
            'severity': self.severity,
        }


class HomeDirectoryError(RuntimeError):
    """The home directory cannot be determined. Fatal, never converted."""


class IndirectionLookupFailed(ShortcutError):
    code = 'errors.indirectionLookupFailed'
    severity = 'debug'


class ConfigDirCreateFailed(ShortcutError):
    code = 'errors.configDirCreateFailed'
    severity = 'warning'


class ConfigUnreadable(ShortcutError):
    code = 'errors.configUnreadable'


class ConfigMalformed(ShortcutError):
    code = 'errors.configMalformed'


class ConfigWriteError(ShortcutError):
    code = 'errors.configWriteError'


class InvalidName(ShortcutError):
    code = 'errors.invalidName'


class DuplicateName(ShortcutError):
    code = 'errors.duplicateName'
    severity = 'warning'


class UnknownName(ShortcutError):
    code = 'errors.unknownName'
    severity = 'warning'


class UnknownShortcut(UnknownName):
    code = 'errors.unknownShortcut'


class InvalidPath(ShortcutError):
    code = 'errors.invalidPath'


class TargetMissing(ShortcutError):
    code = 'errors.targetMissing'
    severity = 'warning'
