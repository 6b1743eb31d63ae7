"""The object database of a repository"""

from ctypes import byref, c_int, c_size_t
from typing import NamedTuple

from ._wrappers.native_adaptation import git_object_t, lib
from .abi import to_native
from .oid import Oid, OidTypes
from .wrapper import NativeHandle, invoke, invoke_with_return


class OdbHeader(NamedTuple):
    size: int
    type: git_object_t


class Odb(NativeHandle):
    """Represent the object database backing a repository.

    Obtained from Repository.odb(), the handle needs its own deinit().
    """

    _libgit2_native_finalizer = "git_odb_free"

    def __contains__(self, oid: OidTypes) -> bool:
        oid = Oid._from_oid(oid)
        return invoke_with_return(lib.git_odb_exists, self._native, to_native(oid)) == 1

    def read_header(self, oid: OidTypes) -> OdbHeader:
        """Size and type of an object, without reading its contents."""
        oid = Oid._from_oid(oid)
        size = c_size_t()
        object_t = c_int()
        invoke(lib.git_odb_read_header, byref(size), byref(object_t), self._native, to_native(oid))
        return OdbHeader(size=size.value, type=git_object_t(object_t.value))

    def refresh(self) -> None:
        """Pick up objects other processes have packed since."""
        invoke(lib.git_odb_refresh, self._native)
