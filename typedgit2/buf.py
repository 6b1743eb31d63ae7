"""Buffers filled by libgit2"""

from ctypes import POINTER, Structure, c_char, c_size_t, string_at

from ._wrappers.native_adaptation import git_buf, lib
from .abi import abi_mirror, to_native


@abi_mirror(git_buf)
class Buf(Structure):
    """A buffer which libgit2 allocates and fills.

    Its memory is owned by libgit2 and must be released with deinit().
    """

    _fields_ = (
        ("ptr", POINTER(c_char)),
        ("reserved", c_size_t),
        ("size", c_size_t),
    )

    def __bytes__(self) -> bytes:
        if not self.ptr or not self.size:
            return b""
        return string_at(self.ptr, self.size)

    def deinit(self) -> None:
        lib.git_buf_dispose(to_native(self))

    def consume_bytes(self) -> bytes:
        """Copy the contents out and release the buffer."""
        try:
            return bytes(self)
        finally:
            self.deinit()

    def consume(self, encoding: str = "utf-8", errors: str = "replace") -> str:
        return self.consume_bytes().decode(encoding, errors=errors)
