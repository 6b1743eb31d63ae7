"""Branches"""

from ctypes import byref, c_char_p, c_int
from typing import Optional

from ._wrappers.native_adaptation import git_branch_iterator_p, git_branch_t, git_reference_p, lib
from .exc import IterOverError
from .reference import Reference
from .wrapper import NativeHandle, decode_path, invoke, invoke_with_return

BranchType = git_branch_t


class BranchIterator(NativeHandle):
    """Iterate over the branches of a repository.

    Yields (Reference, BranchType) pairs, every reference needs its own
    deinit(). The iterator itself has to be deinitialized as well, whether
    it’s exhausted or not.
    """

    _libgit2_native_finalizer = "git_branch_iterator_free"

    @classmethod
    def new(cls, repo_native, branch_type: BranchType = BranchType.ALL) -> "BranchIterator":
        native = git_branch_iterator_p()
        invoke(lib.git_branch_iterator_new, byref(native), repo_native, branch_type)
        return cls._from_native(native)

    def __iter__(self) -> "BranchIterator":
        return self

    def __next__(self) -> tuple[Reference, BranchType]:
        ref_native = git_reference_p()
        branch_type = c_int()
        try:
            invoke(lib.git_branch_next, byref(ref_native), byref(branch_type), self._native)
        except IterOverError:
            raise StopIteration from None
        return Reference._from_native(ref_native), BranchType(branch_type.value)


def branch_name(ref: Reference) -> Optional[str]:
    """The short name of a branch reference, e.g. main for refs/heads/main."""
    name = c_char_p()
    invoke(lib.git_branch_name, byref(name), ref._native)
    return decode_path(name.value)


def branch_is_head(ref: Reference) -> bool:
    return invoke_with_return(lib.git_branch_is_head, ref._native) == 1
