"""String arrays exchanged with libgit2"""

from collections.abc import Iterable
from ctypes import POINTER, Structure, c_char_p, c_size_t, cast
from typing import Union

from ._wrappers.common import LibSymbolNotFoundError
from ._wrappers.native_adaptation import available_optional_funcs, git_strarray, lib
from .abi import abi_mirror, to_native
from .wrapper import decode_path, encode_path, invoke


@abi_mirror(git_strarray)
class StrArray(Structure):
    """An array of NUL-terminated strings.

    An instance is either foreign-owned, i.e. filled by libgit2 and released
    with deinit(), or caller-owned, i.e. built by from_sequence() and
    referencing memory held by the instance itself. Caller-owned arrays
    must never be handed to deinit().
    """

    _fields_ = (
        ("strings", POINTER(c_char_p)),
        ("count", c_size_t),
    )

    _caller_owned = False

    @classmethod
    def from_sequence(cls, items: Iterable[Union[str, bytes]]) -> "StrArray":
        encoded = [encode_path(item) for item in items]
        backing = (c_char_p * len(encoded))(*encoded)

        self = cls(strings=cast(backing, POINTER(c_char_p)), count=len(encoded))
        self._backing = backing
        self._caller_owned = True
        return self

    @property
    def caller_owned(self) -> bool:
        return self._caller_owned

    def __len__(self) -> int:
        return self.count

    def __getitem__(self, index: int) -> str:
        if not 0 <= index < self.count:
            raise IndexError(index)
        return decode_path(self.strings[index])

    def to_list(self) -> list[str]:
        return [self[index] for index in range(self.count)]

    def __repr__(self) -> str:
        owner = "caller" if self._caller_owned else "libgit2"
        return f"{type(self).__name__}({self.to_list()!r}, owner={owner})"

    def copy(self) -> "StrArray":
        """Deep-copy the array through libgit2, the copy is foreign-owned."""
        if "git_strarray_copy" not in available_optional_funcs:
            raise LibSymbolNotFoundError("git_strarray_copy not available in this libgit2 build")

        target = StrArray()
        invoke(lib.git_strarray_copy, to_native(target), to_native(self))
        return target

    def deinit(self) -> None:
        assert not self._caller_owned, "caller-owned StrArray must not be disposed by libgit2"
        lib.git_strarray_dispose(to_native(self))
