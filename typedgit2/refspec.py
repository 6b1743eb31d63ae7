"""Refspecs, the mapping between remote and local reference names"""

from ctypes import byref

from ._wrappers.native_adaptation import git_direction, git_refspec_p, lib
from .abi import to_native
from .buf import Buf
from .wrapper import NativeHandle, decode_path, encode_path, invoke

Direction = git_direction


class Refspec(NativeHandle):
    _libgit2_native_finalizer = "git_refspec_free"

    @classmethod
    def parse(cls, refspec: str, *, is_fetch: bool = True) -> "Refspec":
        """Parse a refspec string, for fetching unless is_fetch is False."""
        native = git_refspec_p()
        invoke(lib.git_refspec_parse, byref(native), encode_path(refspec), is_fetch)
        return cls._from_native(native)

    def __repr__(self) -> str:
        return f"{type(self).__name__}.parse({self.string!r})"

    @property
    def source(self) -> str:
        return decode_path(lib.git_refspec_src(self._native))

    @property
    def destination(self) -> str:
        return decode_path(lib.git_refspec_dst(self._native))

    @property
    def string(self) -> str:
        return decode_path(lib.git_refspec_string(self._native))

    @property
    def is_force_update(self) -> bool:
        return lib.git_refspec_force(self._native) != 0

    @property
    def direction(self) -> Direction:
        return lib.git_refspec_direction(self._native)

    def src_matches(self, refname: str) -> bool:
        return lib.git_refspec_src_matches(self._native, encode_path(refname)) != 0

    def dst_matches(self, refname: str) -> bool:
        return lib.git_refspec_dst_matches(self._native, encode_path(refname)) != 0

    def transform(self, name: str) -> str:
        """Transform a reference name from the source to the destination side."""
        buf = Buf()
        invoke(lib.git_refspec_transform, to_native(buf), self._native, encode_path(name))
        return decode_path(buf.consume_bytes())

    def rtransform(self, name: str) -> str:
        """Transform a reference name from the destination to the source side."""
        buf = Buf()
        invoke(lib.git_refspec_rtransform, to_native(buf), self._native, encode_path(name))
        return decode_path(buf.consume_bytes())
