"""Commits"""

from ctypes import byref

from ._wrappers.native_adaptation import git_commit_p, git_object_t, git_tree_p, lib
from .object_ import Object
from .oid import Oid
from .signature import Signature
from .tree import Tree
from .wrapper import decode_text, invoke


class Commit(Object):
    """Represent a git commit."""

    _libgit2_native_finalizer = "git_commit_free"

    _object_type = git_commit_p
    _object_t = git_object_t.COMMIT

    @property
    def message(self) -> str:
        return decode_text(lib.git_commit_message(self._native))

    @property
    def summary(self) -> str:
        return decode_text(lib.git_commit_summary(self._native))

    @property
    def author(self) -> Signature:
        return Signature._from_native_ptr(lib.git_commit_author(self._native))

    @property
    def committer(self) -> Signature:
        return Signature._from_native_ptr(lib.git_commit_committer(self._native))

    @property
    def parent_ids(self) -> list[Oid]:
        return [
            Oid._from_native_ptr(lib.git_commit_parent_id(self._native, index))
            for index in range(lib.git_commit_parentcount(self._native))
        ]

    def tree(self) -> Tree:
        """Look up the commit’s tree, which needs its own deinit()."""
        native = git_tree_p()
        invoke(lib.git_commit_tree, byref(native), self._native)
        return Tree._from_native(native)
