"""Blame, who changed which lines last"""

from collections.abc import Iterator
from ctypes import byref, c_uint32
from typing import NamedTuple, Optional

from ._wrappers.native_adaptation import git_blame_options, git_blame_p, lib, version_tuple
from .abi import BitFlags, abi_mirror, to_native
from .constants import GIT_BLAME_OPTIONS_VERSION
from .oid import Oid
from .signature import Signature
from .wrapper import NativeHandle, decode_path, decode_text, encode_path, invoke


@abi_mirror(c_uint32)
class BlameFlags(BitFlags):
    _fields_ = (
        ("track_copies_same_file", c_uint32, 1),
        ("track_copies_same_commit_moves", c_uint32, 1),
        ("track_copies_same_commit_copies", c_uint32, 1),
        ("track_copies_any_commit_copies", c_uint32, 1),
        ("first_parent", c_uint32, 1),
        ("use_mailmap", c_uint32, 1),
        ("ignore_whitespace", c_uint32, 1),
        ("z_padding", c_uint32, 25),
    )


class BlameOptions(NamedTuple):
    """Restrict what blame looks at.

    newest_commit defaults to HEAD, oldest_commit to the first commit
    without parents. Line numbers are 1-based and 0 means unrestricted.
    """

    flags: BlameFlags = BlameFlags()
    min_match_characters: int = 0
    newest_commit: Optional[Oid] = None
    oldest_commit: Optional[Oid] = None
    min_line: int = 0
    max_line: int = 0

    def _to_native(self) -> git_blame_options:
        native = git_blame_options()
        invoke(lib.git_blame_options_init, byref(native), GIT_BLAME_OPTIONS_VERSION)
        native.flags = self.flags.to_native()
        native.min_match_characters = self.min_match_characters
        if self.newest_commit is not None:
            native.newest_commit = to_native(self.newest_commit).contents
        if self.oldest_commit is not None:
            native.oldest_commit = to_native(self.oldest_commit).contents
        native.min_line = self.min_line
        native.max_line = self.max_line
        return native


class BlameHunk(NamedTuple):
    """Copy of a blame hunk, independent of the blame it came from."""

    lines_in_hunk: int
    final_commit_id: Oid
    final_start_line_number: int
    final_signature: Optional[Signature]
    orig_commit_id: Oid
    orig_path: Optional[str]
    orig_start_line_number: int
    orig_signature: Optional[Signature]
    boundary: bool
    summary: Optional[str] = None

    @classmethod
    def _from_native_ptr(cls, native) -> "BlameHunk":
        contents = native.contents

        def signature(sig_p) -> Optional[Signature]:
            return Signature._from_native_ptr(sig_p) if sig_p else None

        return cls(
            lines_in_hunk=contents.lines_in_hunk,
            final_commit_id=Oid.from_buffer_copy(contents.final_commit_id),
            final_start_line_number=contents.final_start_line_number,
            final_signature=signature(contents.final_signature),
            orig_commit_id=Oid.from_buffer_copy(contents.orig_commit_id),
            orig_path=decode_path(contents.orig_path),
            orig_start_line_number=contents.orig_start_line_number,
            orig_signature=signature(contents.orig_signature),
            boundary=contents.boundary == b"\x01",
            summary=decode_text(contents.summary) if version_tuple >= (1, 9) else None,
        )


class Blame(NativeHandle):
    _libgit2_native_finalizer = "git_blame_free"

    @classmethod
    def file(cls, repo_native, path: str, options: Optional[BlameOptions] = None) -> "Blame":
        """Blame a file, without options libgit2 uses its defaults."""
        native = git_blame_p()
        options_p = byref(options._to_native()) if options is not None else None
        invoke(lib.git_blame_file, byref(native), repo_native, encode_path(path), options_p)
        return cls._from_native(native)

    @property
    def hunk_count(self) -> int:
        return lib.git_blame_get_hunk_count(self._native)

    def __len__(self) -> int:
        return self.hunk_count

    @property
    def hunks(self) -> Iterator[BlameHunk]:
        for index in range(self.hunk_count):
            hunk_p = lib.git_blame_get_hunk_byindex(self._native, index)
            self.check_pointer(hunk_p, "git_blame_get_hunk_byindex")
            yield BlameHunk._from_native_ptr(hunk_p)

    def hunk_for_line(self, lineno: int) -> Optional[BlameHunk]:
        """The hunk containing the 1-based line number, None if out of range."""
        hunk_p = lib.git_blame_get_hunk_byline(self._native, lineno)
        if not hunk_p:
            return None
        return BlameHunk._from_native_ptr(hunk_p)
