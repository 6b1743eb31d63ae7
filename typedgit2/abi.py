"""Semantic types sharing their memory layout with native libgit2 types

Types decorated with abi_mirror() are declared independently of the native
declarations but promise the identical layout, so values can be handed to
libgit2 (and received from it) by reinterpreting pointers instead of copying.
check_abi_mirror() verifies the promise and runs over all registered mirrors
in the test suite.

Bit fields are allocated starting from the least significant bit, which is
what GCC and Clang do on the platforms libgit2 is commonly built for.
"""

import logging
from ctypes import POINTER, Structure, _SimpleCData, alignment, cast, pointer, sizeof
from typing import Any, Iterator, TypeVar

log = logging.getLogger(__name__)

ABI_MIRRORS: dict[type, type] = {}

MirrorType = TypeVar("MirrorType")


class AbiMismatchError(TypeError):
    pass


def abi_mirror(native_type: type):
    """Register the decorated class as layout-compatible with native_type."""

    def decorator(cls: type) -> type:
        cls._native_type_ = native_type
        ABI_MIRRORS[cls] = native_type
        return cls

    return decorator


def _bit_width(ctype: type) -> int:
    fields = getattr(ctype, "_fields_", None)
    if fields is None:
        return sizeof(ctype) * 8
    return sum(field[2] if len(field) > 2 else _bit_width(field[1]) for field in fields)


def _field_layout(ctype: type) -> list[tuple[int, int]]:
    """Offsets and sizes of the storage units of all fields."""
    return [
        (getattr(ctype, field[0]).offset, getattr(ctype, field[0]).size)
        for field in getattr(ctype, "_fields_", ())
    ]


def check_abi_mirror(cls: type) -> None:
    """Verify that a registered mirror has its native type’s layout.

    :raises AbiMismatchError: if size, alignment, field layout or total bit
        width differ
    """
    native_type = ABI_MIRRORS[cls]
    name = f"{cls.__name__} ↔ {native_type.__name__}"

    if sizeof(cls) != sizeof(native_type):
        raise AbiMismatchError(f"{name}: size {sizeof(cls)} != {sizeof(native_type)}")

    if alignment(cls) != alignment(native_type):
        raise AbiMismatchError(
            f"{name}: alignment {alignment(cls)} != {alignment(native_type)}"
        )

    if _bit_width(cls) != _bit_width(native_type):
        raise AbiMismatchError(
            f"{name}: bit width {_bit_width(cls)} != {_bit_width(native_type)}"
        )

    # Bit flags map onto a plain integer, only their overall width matters.
    if issubclass(native_type, Structure) and _field_layout(cls) != _field_layout(native_type):
        raise AbiMismatchError(f"{name}: field layout differs")


def to_native(obj: Any) -> Any:
    """Reinterpret a mirror instance as a pointer to its native type.

    The pointer borrows obj’s memory, obj has to stay alive while it’s used.
    """
    return cast(pointer(obj), POINTER(type(obj)._native_type_))


def from_native(ptr: Any, cls: type[MirrorType]) -> MirrorType:
    """Reinterpret a pointer to a native type as its mirror, without copying."""
    if ABI_MIRRORS.get(cls) is not ptr._type_:
        raise AbiMismatchError(f"{cls.__name__} doesn’t mirror {ptr._type_.__name__}")
    return cast(ptr, POINTER(cls)).contents


class BitFlags(Structure):
    """Named boolean flags packed into a native unsigned integer.

    Subclasses declare all bits of the native integer as one-bit fields,
    bits without a name are covered by fields whose name starts with
    "z_padding". Padding bits survive conversions but aren’t shown, compared
    or iterated over.
    """

    _native_type_: type[_SimpleCData]

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls._flag_names_ = tuple(
            field[0] for field in cls.__dict__.get("_fields_", ()) if not is_padding(field[0])
        )

    @classmethod
    def from_native(cls, value: int) -> "BitFlags":
        return cls.from_buffer_copy(cls._native_type_(value))

    def to_native(self) -> int:
        return self._native_type_.from_buffer_copy(self).value

    def __int__(self) -> int:
        return self.to_native()

    @classmethod
    def bit_size(cls) -> int:
        return _bit_width(cls)

    def __iter__(self) -> Iterator[str]:
        """Iterate over the names of all set flags."""
        return (name for name in self._flag_names_ if getattr(self, name))

    def as_dict(self) -> dict[str, bool]:
        return {name: bool(getattr(self, name)) for name in self._flag_names_}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __or__(self, other: "BitFlags") -> "BitFlags":
        if not isinstance(other, type(self)):
            return NotImplemented
        return self.from_native(self.to_native() | other.to_native())

    def __bool__(self) -> bool:
        return any(True for _ in self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(f'{name}=True' for name in self)})"


def is_padding(field_name: str) -> bool:
    return field_name.startswith("z_padding")
