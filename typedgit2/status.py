"""File status in the index and working directory"""

from collections.abc import Iterator, Sequence
from ctypes import byref, c_uint
from typing import TYPE_CHECKING, NamedTuple, Optional

from ._wrappers.native_adaptation import (
    git_status_list_p,
    git_status_options,
    git_status_show_t,
    lib,
)
from .abi import BitFlags, abi_mirror, to_native
from .constants import GIT_STATUS_OPTIONS_VERSION
from .diff import DiffDelta
from .str_array import StrArray
from .wrapper import NativeHandle, invoke

if TYPE_CHECKING:
    from .tree import Tree

StatusShow = git_status_show_t


@abi_mirror(c_uint)
class FileStatus(BitFlags):
    """The status of a file, an empty set means it’s unchanged."""

    _fields_ = (
        ("index_new", c_uint, 1),
        ("index_modified", c_uint, 1),
        ("index_deleted", c_uint, 1),
        ("index_renamed", c_uint, 1),
        ("index_typechange", c_uint, 1),
        ("z_padding1", c_uint, 2),
        ("wt_new", c_uint, 1),
        ("wt_modified", c_uint, 1),
        ("wt_deleted", c_uint, 1),
        ("wt_typechange", c_uint, 1),
        ("wt_renamed", c_uint, 1),
        ("wt_unreadable", c_uint, 1),
        ("z_padding2", c_uint, 1),
        ("ignored", c_uint, 1),
        ("conflicted", c_uint, 1),
        ("z_padding3", c_uint, 16),
    )

    @property
    def is_current(self) -> bool:
        return not self


@abi_mirror(c_uint)
class StatusOptionsFlags(BitFlags):
    _fields_ = (
        ("include_untracked", c_uint, 1),
        ("include_ignored", c_uint, 1),
        ("include_unmodified", c_uint, 1),
        ("exclude_submodules", c_uint, 1),
        ("recurse_untracked_dirs", c_uint, 1),
        ("disable_pathspec_match", c_uint, 1),
        ("recurse_ignored_dirs", c_uint, 1),
        ("renames_head_to_index", c_uint, 1),
        ("renames_index_to_workdir", c_uint, 1),
        ("sort_case_sensitively", c_uint, 1),
        ("sort_case_insensitively", c_uint, 1),
        ("renames_from_rewrites", c_uint, 1),
        ("no_refresh", c_uint, 1),
        ("update_index", c_uint, 1),
        ("include_unreadable", c_uint, 1),
        ("include_unreadable_as_untracked", c_uint, 1),
        ("z_padding", c_uint, 16),
    )

    @classmethod
    def default(cls) -> "StatusOptionsFlags":
        """The flags ``git status`` uses, and libgit2 if no options are given."""
        return cls(include_ignored=True, include_untracked=True, recurse_untracked_dirs=True)


class StatusOptions(NamedTuple):
    """Options controlling which files get a status.

    If pathspec is given, rename detection may miss renames because only the
    matching paths are considered.
    """

    show: StatusShow = StatusShow.INDEX_AND_WORKDIR
    flags: Optional[StatusOptionsFlags] = None
    pathspec: Sequence[str] = ()
    baseline: Optional["Tree"] = None

    def _to_native(self) -> tuple[git_status_options, Optional[StrArray]]:
        """Build the native options, the StrArray must outlive their use."""
        native = git_status_options()
        invoke(lib.git_status_options_init, byref(native), GIT_STATUS_OPTIONS_VERSION)

        native.show = self.show
        flags = self.flags if self.flags is not None else StatusOptionsFlags.default()
        native.flags = flags.to_native()

        pathspec = None
        if self.pathspec:
            pathspec = StrArray.from_sequence(self.pathspec)
            native.pathspec = to_native(pathspec).contents

        if self.baseline is not None:
            native.baseline = self.baseline._native

        return native, pathspec


class StatusEntry(NamedTuple):
    status: FileStatus
    head_to_index: Optional[DiffDelta]
    index_to_workdir: Optional[DiffDelta]

    @property
    def path(self) -> Optional[str]:
        for delta in (self.index_to_workdir, self.head_to_index):
            if delta is not None:
                return delta.new_file.path or delta.old_file.path

    @classmethod
    def _from_native_ptr(cls, native) -> "StatusEntry":
        contents = native.contents
        return cls(
            status=FileStatus.from_native(contents.status),
            head_to_index=DiffDelta._from_native_ptr(contents.head_to_index),
            index_to_workdir=DiffDelta._from_native_ptr(contents.index_to_workdir),
        )


class StatusList(NativeHandle, Sequence):
    """A snapshot of file statuses, entries are copied out on access."""

    _libgit2_native_finalizer = "git_status_list_free"

    @classmethod
    def new(cls, repo_native, options: Optional[StatusOptions] = None) -> "StatusList":
        native_options, _pathspec = (options or StatusOptions())._to_native()
        native = git_status_list_p()
        invoke(lib.git_status_list_new, byref(native), repo_native, byref(native_options))
        return cls._from_native(native)

    def __len__(self) -> int:
        return lib.git_status_list_entrycount(self._native)

    def __getitem__(self, index: int) -> StatusEntry:
        if index < 0:
            index += len(self)
        if not 0 <= index < len(self):
            raise IndexError(index)
        native = lib.git_status_byindex(self._native, index)
        return StatusEntry._from_native_ptr(self.check_pointer(native, "git_status_byindex"))

    def __iter__(self) -> Iterator[StatusEntry]:
        for index in range(len(self)):
            yield self[index]

    def by_path(self) -> dict[str, FileStatus]:
        return {entry.path: entry.status for entry in self}

