"""The reference database of a repository"""

from ._wrappers.native_adaptation import lib
from .wrapper import NativeHandle, invoke


class RefDb(NativeHandle):
    _libgit2_native_finalizer = "git_refdb_free"

    def compress(self) -> None:
        """Pack loose references, like git pack-refs does."""
        invoke(lib.git_refdb_compress, self._native)
