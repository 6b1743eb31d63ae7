"""The index, i.e. the staging area"""

from collections.abc import Collection
from ctypes import byref
from os import PathLike
from typing import Any, Callable, Optional, Union

from ._wrappers.native_adaptation import git_index_matched_path_cb, lib
from .abi import to_native
from .callbacks import NO_USER_DATA, invoke_foreach, make_trampoline, to_path
from .oid import Oid
from .str_array import StrArray
from .wrapper import NativeHandle, encode_path, invoke

PathType = Union[PathLike, str, bytes]

# Called with (path, matched_pathspec), return 0 to add, a positive value to
# skip the path or a negative one to abort.
MatchedPathCallback = Callable[..., Optional[int]]


class Index(NativeHandle):
    """Represent the git index."""

    _libgit2_native_finalizer = "git_index_free"

    def __len__(self) -> int:
        return lib.git_index_entrycount(self._native)

    def write(self) -> None:
        invoke(lib.git_index_write, self._native)

    def write_tree(self) -> Oid:
        oid = Oid()
        invoke(lib.git_index_write_tree, to_native(oid), self._native)
        return oid

    def add(self, path: PathType) -> None:
        invoke(lib.git_index_add_bypath, self._native, encode_path(path))

    def remove(self, path: PathType) -> None:
        invoke(lib.git_index_remove_bypath, self._native, encode_path(path))

    def add_all(
        self,
        pathspecs: Optional[Collection[PathType]] = None,
        callback: Optional[MatchedPathCallback] = None,
        user_data: Any = NO_USER_DATA,
    ) -> None:
        """Add or update all index entries matching pathspecs.

        Without pathspecs all files are added. The callback is called with
        the path and the pathspec it matched (and user_data if given).
        """
        native_pathspecs = StrArray.from_sequence(pathspecs or ())

        if callback is None:
            invoke(
                lib.git_index_add_all,
                self._native,
                to_native(native_pathspecs),
                0,
                git_index_matched_path_cb(),
                None,
            )
            return

        trampoline = make_trampoline(
            git_index_matched_path_cb, callback, (to_path, to_path), user_data
        )
        invoke_foreach(
            lib.git_index_add_all, trampoline, self._native, to_native(native_pathspecs), 0
        )
