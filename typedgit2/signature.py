"""Signatures of commit authors and committers"""

from typing import NamedTuple

from ._wrappers.native_adaptation import git_signature_p
from .wrapper import decode_text


class Signature(NamedTuple):
    """Copy of an action signature owned by another libgit2 object."""

    name: str
    email: str
    time: int
    offset: int

    @classmethod
    def _from_native_ptr(cls, native: git_signature_p) -> "Signature":
        contents = native.contents
        return cls(
            name=decode_text(contents.name),
            email=decode_text(contents.email),
            time=contents.when.time,
            offset=contents.when.offset,
        )

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"
