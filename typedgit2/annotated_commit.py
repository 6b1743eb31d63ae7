"""Annotated commits, commits along with how they were found"""

from ctypes import byref
from typing import Optional

from ._wrappers.native_adaptation import git_annotated_commit_p, lib
from .abi import to_native
from .oid import Oid, OidTypes
from .wrapper import NativeHandle, decode_path, encode_path, encode_text, invoke


class AnnotatedCommit(NativeHandle):
    """A commit plus the reference or revspec it was looked up through.

    Merges, rebases and branch creation use these to produce better
    reflog messages.
    """

    _libgit2_native_finalizer = "git_annotated_commit_free"

    @classmethod
    def from_fetchhead(
        cls, repo_native, branch_name: str, remote_url: str, oid: OidTypes
    ) -> "AnnotatedCommit":
        native = git_annotated_commit_p()
        invoke(
            lib.git_annotated_commit_from_fetchhead,
            byref(native),
            repo_native,
            encode_path(branch_name),
            encode_text(remote_url),
            to_native(Oid._from_oid(oid)),
        )
        return cls._from_native(native)

    @classmethod
    def lookup(cls, repo_native, oid: OidTypes) -> "AnnotatedCommit":
        native = git_annotated_commit_p()
        invoke(
            lib.git_annotated_commit_lookup,
            byref(native),
            repo_native,
            to_native(Oid._from_oid(oid)),
        )
        return cls._from_native(native)

    @classmethod
    def from_revspec(cls, repo_native, revspec: str) -> "AnnotatedCommit":
        native = git_annotated_commit_p()
        invoke(
            lib.git_annotated_commit_from_revspec, byref(native), repo_native, encode_text(revspec)
        )
        return cls._from_native(native)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id.hex!r}, ref={self.ref!r})"

    @property
    def id(self) -> Oid:
        return Oid._from_native_ptr(lib.git_annotated_commit_id(self._native))

    @property
    def ref(self) -> Optional[str]:
        """The reference name it was looked up through, if any."""
        return decode_path(lib.git_annotated_commit_ref(self._native))
