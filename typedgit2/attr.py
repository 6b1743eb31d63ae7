"""Git attributes"""

from ctypes import c_char_p, c_uint32, cast
from enum import IntEnum
from typing import NamedTuple, Optional, Union

from ._wrappers.native_adaptation import git_attr_options, git_attr_value_t, lib, version_tuple
from .abi import BitFlags, abi_mirror, to_native
from .constants import GIT_ATTR_OPTIONS_VERSION
from .oid import Oid
from .wrapper import decode_text

AttributeValueKind = git_attr_value_t


class AttributeLocation(IntEnum):
    """Where to look for .gitattributes files first."""

    FILE_THEN_INDEX = 0
    INDEX_THEN_FILE = 1
    INDEX_ONLY = 2


if version_tuple >= (1, 2):
    _COMMIT_FLAG_FIELDS = (("include_commit", c_uint32, 1), ("z_padding2", c_uint32, 27))
else:  # pragma: no cover
    _COMMIT_FLAG_FIELDS = (("z_padding2", c_uint32, 28),)


@abi_mirror(c_uint32)
class AttributeExtendedFlags(BitFlags):
    """Lookup flags stored above the two location bits."""

    _fields_ = (
        ("z_padding1", c_uint32, 2),
        ("no_system", c_uint32, 1),
        ("include_head", c_uint32, 1),
    ) + _COMMIT_FLAG_FIELDS


class AttributeFlags(NamedTuple):
    location: AttributeLocation = AttributeLocation.FILE_THEN_INDEX
    extended: AttributeExtendedFlags = AttributeExtendedFlags()

    def to_native(self) -> int:
        return int(self.location) | self.extended.to_native()


class Attribute(NamedTuple):
    """The value of one attribute for a path.

    value is True or False for set or unset attributes, a str for attributes
    with a value and None if the attribute isn’t specified.
    """

    kind: AttributeValueKind
    value: Union[bool, str, None]

    @classmethod
    def _from_native(cls, native: Optional[int]) -> "Attribute":
        # libgit2 tells set and unset values apart by pointer identity.
        kind = lib.git_attr_value(native)
        if kind == AttributeValueKind.TRUE:
            value = True
        elif kind == AttributeValueKind.FALSE:
            value = False
        elif kind == AttributeValueKind.STRING:
            value = decode_text(cast(native, c_char_p).value)
        else:
            value = None
        return cls(kind=kind, value=value)

    @property
    def is_specified(self) -> bool:
        return self.kind != AttributeValueKind.UNSPECIFIED


class AttributeOptions(NamedTuple):
    """Options of the extended attribute lookups, needs libgit2 1.2 or later."""

    flags: AttributeFlags = AttributeFlags()
    commit_id: Optional[Oid] = None

    def _to_native(self) -> git_attr_options:
        native = git_attr_options(version=GIT_ATTR_OPTIONS_VERSION, flags=self.flags.to_native())
        if self.commit_id is not None:
            if version_tuple >= (1, 4):
                native.attr_commit_id = to_native(self.commit_id).contents
            else:  # pragma: no cover
                native.commit_id = to_native(self.commit_id)
        return native
