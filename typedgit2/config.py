"""Git configuration"""

from ctypes import byref
from os import PathLike, fspath
from typing import Optional, Union

from ._wrappers.native_adaptation import git_config_entry_p, git_config_level_t, lib
from .exc import NotFoundError
from .wrapper import NativeHandle, decode_text, encode_text, invoke

ConfigValue = Union[bool, int, str, bytes, PathLike]


class Config(NativeHandle):
    """Represent a git configuration, with all its levels merged.

    Values are always read as strings, like ``git config --get`` does.
    """

    _libgit2_native_finalizer = "git_config_free"

    def _get_entry(self, key: str) -> git_config_entry_p:
        native = git_config_entry_p()
        invoke(lib.git_config_get_entry, byref(native), self._native, encode_text(key))
        return native

    def __contains__(self, key: str) -> bool:
        try:
            native = self._get_entry(key)
        except NotFoundError:
            return False
        lib.git_config_entry_free(native)
        return True

    def __getitem__(self, key: str) -> str:
        native = self._get_entry(key)
        try:
            return decode_text(native.contents.value)
        finally:
            lib.git_config_entry_free(native)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        try:
            return self[key]
        except NotFoundError:
            return default

    def level_of(self, key: str) -> git_config_level_t:
        """The level of the configuration file the value comes from."""
        native = self._get_entry(key)
        try:
            return git_config_level_t(native.contents.level)
        finally:
            lib.git_config_entry_free(native)

    def __setitem__(self, key: str, value: ConfigValue) -> None:
        key = encode_text(key)

        if isinstance(value, bool):
            invoke(lib.git_config_set_bool, self._native, key, value)
        elif isinstance(value, int):
            invoke(lib.git_config_set_int64, self._native, key, value)
        else:
            value = fspath(value)
            invoke(lib.git_config_set_string, self._native, key, encode_text(value))

    def __delitem__(self, key: str) -> None:
        invoke(lib.git_config_delete_entry, self._native, encode_text(key))
