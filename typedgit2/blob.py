"""Blobs"""

from ctypes import byref
from os import PathLike
from typing import TYPE_CHECKING, Iterable, Union

from ._wrappers.native_adaptation import git_blob_p, git_object_t, git_writestream_p, lib
from .abi import to_native
from .constants import GIT_OID_MINPREFIXLEN
from .oid import Oid, OidTypes
from .object_ import Object
from .wrapper import encode_path, invoke

if TYPE_CHECKING:
    from .repository import Repository


class Blob(Object):
    """Represent a git blob."""

    _libgit2_native_finalizer = "git_blob_free"

    _object_type = git_blob_p
    _object_t = git_object_t.BLOB

    @classmethod
    def lookup_prefix(cls, repo: "Repository", prefix: str) -> "Blob":
        """Look up a blob by an abbreviated hex id."""
        if len(prefix) < GIT_OID_MINPREFIXLEN:
            raise ValueError(f"Prefix must have at least {GIT_OID_MINPREFIXLEN} digits")
        padded = Oid.from_hex(prefix.ljust(40, "0"))
        native = git_blob_p()
        invoke(
            lib.git_blob_lookup_prefix, byref(native), repo._native, to_native(padded), len(prefix)
        )
        return cls._from_native(native)

    @property
    def size(self) -> int:
        return lib.git_blob_rawsize(self._native)

    @property
    def data(self) -> bytes:
        """A copy of the blob content, the content itself belongs to libgit2."""
        size = self.size
        if not size:
            return b""
        content_p = lib.git_blob_rawcontent(self._native)
        self.check_pointer(content_p, "git_blob_rawcontent")
        return self.read_bytes(content_p, size)

    @property
    def is_binary(self) -> bool:
        return lib.git_blob_is_binary(self._native) == 1


def create_from_buffer(repo: "Repository", data: bytes) -> Oid:
    oid = Oid()
    invoke(lib.git_blob_create_from_buffer, to_native(oid), repo._native, data, len(data))
    return oid


def create_from_disk(repo: "Repository", path: Union[str, PathLike]) -> Oid:
    oid = Oid()
    invoke(lib.git_blob_create_from_disk, to_native(oid), repo._native, encode_path(path))
    return oid


def create_from_workdir(repo: "Repository", relative_path: Union[str, PathLike]) -> Oid:
    oid = Oid()
    invoke(
        lib.git_blob_create_from_workdir, to_native(oid), repo._native, encode_path(relative_path)
    )
    return oid


def create_from_stream(
    repo: "Repository", chunks: Iterable[bytes], hint_path: Union[str, PathLike, None] = None
) -> Oid:
    """Write a blob from chunks of data.

    hint_path lets libgit2 pick the filters to apply, as if the data was
    read from that path in the working directory.
    """
    stream = git_writestream_p()
    invoke(
        lib.git_blob_create_from_stream,
        byref(stream),
        repo._native,
        encode_path(hint_path) if hint_path is not None else None,
    )

    try:
        for chunk in chunks:
            invoke(stream.contents.write, stream, chunk, len(chunk))
    except BaseException:
        stream.contents.free(stream)
        raise

    oid = Oid()
    # Frees the stream.
    invoke(lib.git_blob_create_from_stream_commit, to_native(oid), stream)
    return oid
