"""Diffs, deltas and hunks"""

from collections.abc import Iterator
from ctypes import byref
from typing import NamedTuple, Optional, Union

from ._wrappers.native_adaptation import (
    git_delta_t,
    git_diff_delta,
    git_diff_file,
    git_diff_format_t,
    git_diff_p,
    git_diff_stats_p,
    git_filemode_t,
    lib,
)
from .abi import to_native
from .buf import Buf
from .oid import Oid
from .wrapper import NativeHandle, decode_path, decode_text, encode_text, invoke

DeltaStatus = git_delta_t


class DiffFile(NamedTuple):
    id: Oid
    path: Optional[str]
    size: int
    flags: int
    mode: git_filemode_t

    @classmethod
    def _from_native(cls, native: git_diff_file) -> "DiffFile":
        return cls(
            id=Oid.from_buffer_copy(native.id),
            path=decode_path(native.path),
            size=native.size,
            flags=native.flags,
            mode=git_filemode_t(native.mode),
        )


class DiffDelta(NamedTuple):
    """Copy of a delta, it stays valid after its diff is gone."""

    status: DeltaStatus
    flags: int
    similarity: int
    nfiles: int
    old_file: DiffFile
    new_file: DiffFile

    @classmethod
    def _from_native(cls, native: git_diff_delta) -> "DiffDelta":
        return cls(
            status=DeltaStatus(native.status),
            flags=native.flags,
            similarity=native.similarity,
            nfiles=native.nfiles,
            old_file=DiffFile._from_native(native.old_file),
            new_file=DiffFile._from_native(native.new_file),
        )

    @classmethod
    def _from_native_ptr(cls, native) -> Optional["DiffDelta"]:
        if not native:
            return None
        return cls._from_native(native.contents)


class DiffHunk(NamedTuple):
    old_start: int
    old_lines: int
    new_start: int
    new_lines: int
    header: str

    @classmethod
    def _from_native_ptr(cls, native) -> "DiffHunk":
        contents = native.contents
        return cls(
            old_start=contents.old_start,
            old_lines=contents.old_lines,
            new_start=contents.new_start,
            new_lines=contents.new_lines,
            header=decode_text(contents.header[: contents.header_len]),
        )


class DiffStats(NamedTuple):
    files_changed: int
    insertions: int
    deletions: int


class Diff(NativeHandle):
    """Represent a diff."""

    _libgit2_native_finalizer = "git_diff_free"

    @classmethod
    def from_buffer(cls, content: Union[str, bytes]) -> "Diff":
        """Parse a patch in unified diff format.

        Diffs made this way have no repository attached, which restricts what
        can be done with them. Applying them works.
        """
        content = encode_text(content)
        native = git_diff_p()
        invoke(lib.git_diff_from_buffer, byref(native), content, len(content))
        return cls._from_native(native)

    def __len__(self) -> int:
        return lib.git_diff_num_deltas(self._native)

    @property
    def deltas(self) -> Iterator[DiffDelta]:
        for index in range(len(self)):
            yield DiffDelta._from_native_ptr(lib.git_diff_get_delta(self._native, index))

    def stats(self) -> DiffStats:
        native = git_diff_stats_p()
        invoke(lib.git_diff_get_stats, byref(native), self._native)
        try:
            return DiffStats(
                files_changed=lib.git_diff_stats_files_changed(native),
                insertions=lib.git_diff_stats_insertions(native),
                deletions=lib.git_diff_stats_deletions(native),
            )
        finally:
            lib.git_diff_stats_free(native)

    def to_text(self, format: git_diff_format_t = git_diff_format_t.PATCH) -> str:
        buf = Buf()
        invoke(lib.git_diff_to_buf, to_native(buf), self._native, format)
        return buf.consume()

    @property
    def patch(self) -> str:
        return self.to_text(git_diff_format_t.PATCH)
