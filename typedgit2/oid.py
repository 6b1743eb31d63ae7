"""Object ids"""

from ctypes import Structure, c_ubyte
from typing import Union

from ._wrappers.native_adaptation import git_oid
from .abi import abi_mirror, from_native
from .constants import GIT_OID_HEXSZ, GIT_OID_RAWSZ

OidTypes = Union["Oid", str, bytes]


@abi_mirror(git_oid)
class Oid(Structure):
    """Represent a git object id.

    Oids are plain values: they are copied out of libgit2 memory and need no
    deinit.
    """

    _fields_ = (("id", c_ubyte * GIT_OID_RAWSZ),)

    @classmethod
    def from_raw(cls, raw: bytes) -> "Oid":
        if len(raw) != GIT_OID_RAWSZ:
            raise ValueError(f"Raw oid must have {GIT_OID_RAWSZ} bytes, not {len(raw)}")
        return cls.from_buffer_copy(raw)

    @classmethod
    def from_hex(cls, hex: Union[str, bytes]) -> "Oid":
        if isinstance(hex, bytes):
            hex = hex.decode("ascii")
        if len(hex) != GIT_OID_HEXSZ:
            raise ValueError(f"Hex oid must have {GIT_OID_HEXSZ} digits: {hex!r}")
        return cls.from_raw(bytes.fromhex(hex))

    @classmethod
    def _from_oid(cls, oid: OidTypes) -> "Oid":
        if isinstance(oid, Oid):
            return oid
        if isinstance(oid, bytes) and len(oid) == GIT_OID_RAWSZ:
            return cls.from_raw(oid)
        return cls.from_hex(oid)

    @classmethod
    def _from_native_ptr(cls, native) -> "Oid":
        """Copy an oid out of memory owned by libgit2."""
        return cls.from_buffer_copy(from_native(native, cls))

    @classmethod
    def zero(cls) -> "Oid":
        return cls()

    @property
    def raw(self) -> bytes:
        return bytes(self.id)

    @property
    def hex(self) -> str:
        return self.raw.hex()

    @property
    def is_zero(self) -> bool:
        return not any(self.id)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Oid):
            return self.raw == other.raw
        if isinstance(other, str):
            return self.hex == other
        if isinstance(other, bytes):
            return self.raw == other or self.hex.encode("ascii") == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.raw)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}.from_hex({self.hex!r})"

    def __str__(self) -> str:
        return self.hex
