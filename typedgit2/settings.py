"""Global libgit2 options"""

from ctypes import c_int
from typing import Union

from ._wrappers.native_adaptation import git_config_level_t, git_libgit2_opt_t, lib
from .abi import to_native
from .buf import Buf
from .wrapper import LibraryUser, decode_path, encode_path, invoke


class SearchPathList(LibraryUser):
    """Where libgit2 looks for configuration files, indexed by config level.

    Setting a path to None resets it to the default.
    """

    def __getitem__(self, level: git_config_level_t) -> str:
        buf = Buf()
        invoke(
            lib.git_libgit2_opts, git_libgit2_opt_t.GET_SEARCH_PATH, c_int(level), to_native(buf)
        )
        return decode_path(buf.consume_bytes())

    def __setitem__(self, level: git_config_level_t, value: Union[str, bytes, None]) -> None:
        if value is not None:
            value = encode_path(value)
        invoke(lib.git_libgit2_opts, git_libgit2_opt_t.SET_SEARCH_PATH, c_int(level), value)


search_path = SearchPathList()
