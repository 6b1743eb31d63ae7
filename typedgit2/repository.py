"""Repositories"""

from collections.abc import Iterable, Sequence
from ctypes import byref, c_char_p, c_int, c_uint, c_void_p
from os import PathLike
from typing import Any, Callable, NamedTuple, Optional, Union

from . import blob
from ._wrappers.native_adaptation import (
    git_attr_foreach_cb,
    git_config_p,
    git_index_p,
    git_object_p,
    git_object_t,
    git_odb_p,
    git_refdb_p,
    git_reference_p,
    git_repository_fetchhead_foreach_cb,
    git_repository_init_flag_t,
    git_repository_init_options,
    git_repository_item_t,
    git_repository_mergehead_foreach_cb,
    git_repository_open_flag_t,
    git_repository_p,
    git_repository_state_t,
    git_status_cb,
    lib,
)
from .abi import to_native
from .annotated_commit import AnnotatedCommit
from .apply import ApplyLocation, ApplyOptions, apply_diff, apply_diff_to_tree
from .attr import Attribute, AttributeFlags
from .blame import Blame, BlameOptions
from .blob import Blob
from .branch import BranchIterator, BranchType
from .buf import Buf
from .callbacks import (
    NO_USER_DATA,
    invoke_foreach,
    make_trampoline,
    to_bool,
    to_flags,
    to_oid,
    to_path,
    to_text,
)
from .capabilities import CAPABILITIES
from .commit import Commit
from .config import Config
from .constants import GIT_REPOSITORY_INIT_OPTIONS_VERSION
from .describe import DescribeOptions, DescribeResult
from .diff import Diff
from .index import Index
from .object_ import Object
from .odb import Odb
from .oid import Oid, OidTypes
from .refdb import RefDb
from .reference import Reference
from .status import FileStatus, StatusList, StatusOptions
from .str_array import StrArray
from .tree import Tree
from .wrapper import (
    NativeHandle,
    decode_path,
    decode_text,
    encode_path,
    encode_text,
    invoke,
    invoke_with_return,
)

PathType = Union[str, bytes, PathLike]

RepositoryState = git_repository_state_t
RepositoryItem = git_repository_item_t
RepositoryOpenFlags = git_repository_open_flag_t
RepositoryInitFlags = git_repository_init_flag_t

# Callbacks return None or 0 to continue, anything else stops the iteration.
ForeachCallback = Callable[..., Optional[int]]


class Identity(NamedTuple):
    """The identity used for reflog entries, None means taken from the config."""

    name: Optional[str] = None
    email: Optional[str] = None


class Repository(NativeHandle, *CAPABILITIES):
    """Represent a git repository.

    Everything obtained from a repository (references, objects, indexes, …)
    has to be deinitialized separately and must not be used after the
    repository is deinitialized.
    """

    _libgit2_native_finalizer = "git_repository_free"

    @classmethod
    def open(cls, path: PathType) -> "Repository":
        """Open the repository at path, which must be the .git directory or the work tree."""
        native = git_repository_p()
        invoke(lib.git_repository_open, byref(native), encode_path(path))
        return cls._from_native(native)

    @classmethod
    def open_ext(
        cls,
        path: Optional[PathType] = None,
        flags: RepositoryOpenFlags = RepositoryOpenFlags(0),
        ceiling_dirs: Optional[Sequence[PathType]] = None,
    ) -> "Repository":
        """Find and open a repository, searching upwards from path.

        Without path, libgit2 uses the GIT_DIR environment variable. The
        search stops at any of ceiling_dirs.
        """
        native = git_repository_p()
        native_ceiling_dirs = None
        if ceiling_dirs:
            native_ceiling_dirs = b":".join(encode_path(ceiling) for ceiling in ceiling_dirs)
        invoke(
            lib.git_repository_open_ext,
            byref(native),
            encode_path(path) if path is not None else None,
            flags,
            native_ceiling_dirs,
        )
        return cls._from_native(native)

    @classmethod
    def init_repository(
        cls,
        path: PathType,
        *,
        flags: RepositoryInitFlags = RepositoryInitFlags.MKPATH,
        initial_head: Optional[str] = None,
        workdir_path: Optional[PathType] = None,
        description: Optional[str] = None,
        origin_url: Optional[str] = None,
    ) -> "Repository":
        options = git_repository_init_options()
        invoke(
            lib.git_repository_init_options_init,
            byref(options),
            GIT_REPOSITORY_INIT_OPTIONS_VERSION,
        )

        options.flags = flags
        if initial_head:
            options.initial_head = encode_path(initial_head)
        if workdir_path:
            options.workdir_path = encode_path(workdir_path)
        if description:
            options.description = encode_text(description)
        if origin_url:
            options.origin_url = encode_text(origin_url)

        native = git_repository_p()
        invoke(lib.git_repository_init_ext, byref(native), encode_path(path), byref(options))
        return cls._from_native(native)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(path={self.path!r})"

    @staticmethod
    def supports(capability: type) -> bool:
        """Whether the loaded libgit2 offers the operations of a capability mixin."""
        return capability in CAPABILITIES

    # State and settings

    @property
    def state(self) -> RepositoryState:
        """The operation in progress, e.g. a merge or rebase."""
        return RepositoryState(invoke_with_return(lib.git_repository_state, self._native))

    def state_cleanup(self) -> None:
        """Remove the metadata of an operation in progress, e.g. MERGE_HEAD."""
        invoke(lib.git_repository_state_cleanup, self._native)

    @property
    def identity(self) -> Identity:
        name = c_char_p()
        email = c_char_p()
        invoke(lib.git_repository_ident, byref(name), byref(email), self._native)
        return Identity(name=decode_text(name.value), email=decode_text(email.value))

    def set_identity(self, identity: Identity) -> None:
        invoke(
            lib.git_repository_set_ident,
            self._native,
            encode_text(identity.name) if identity.name is not None else None,
            encode_text(identity.email) if identity.email is not None else None,
        )

    @property
    def namespace(self) -> Optional[str]:
        return decode_path(lib.git_repository_get_namespace(self._native))

    def set_namespace(self, namespace: Optional[str]) -> None:
        invoke(
            lib.git_repository_set_namespace,
            self._native,
            encode_path(namespace) if namespace is not None else None,
        )

    # HEAD

    @property
    def is_head_detached(self) -> bool:
        return invoke_with_return(lib.git_repository_head_detached, self._native) == 1

    @property
    def is_head_unborn(self) -> bool:
        return invoke_with_return(lib.git_repository_head_unborn, self._native) == 1

    def head(self) -> Reference:
        """Resolve HEAD, the reference needs its own deinit()."""
        native = git_reference_p()
        invoke(lib.git_repository_head, byref(native), self._native)
        return Reference._from_native(native)

    def set_head(self, refname: str) -> None:
        invoke(lib.git_repository_set_head, self._native, encode_path(refname))

    def set_head_detached(self, oid: OidTypes) -> None:
        invoke(lib.git_repository_set_head_detached, self._native, to_native(Oid._from_oid(oid)))

    def set_head_detached_from_annotated(self, commit: AnnotatedCommit) -> None:
        invoke(lib.git_repository_set_head_detached_from_annotated, self._native, commit._native)

    def detach_head(self) -> None:
        invoke(lib.git_repository_detach_head, self._native)

    def is_head_detached_for_worktree(self, name: str) -> bool:
        return (
            invoke_with_return(
                lib.git_repository_head_detached_for_worktree, self._native, encode_path(name)
            )
            == 1
        )

    def head_for_worktree(self, name: str) -> Reference:
        native = git_reference_p()
        invoke(
            lib.git_repository_head_for_worktree, byref(native), self._native, encode_path(name)
        )
        return Reference._from_native(native)

    # Kind

    @property
    def is_shallow(self) -> bool:
        return invoke_with_return(lib.git_repository_is_shallow, self._native) == 1

    @property
    def is_empty(self) -> bool:
        return invoke_with_return(lib.git_repository_is_empty, self._native) == 1

    @property
    def is_bare(self) -> bool:
        return invoke_with_return(lib.git_repository_is_bare, self._native) == 1

    @property
    def is_worktree(self) -> bool:
        return invoke_with_return(lib.git_repository_is_worktree, self._native) == 1

    # Paths

    def item_path(self, item: RepositoryItem) -> str:
        """The location of a repository item, e.g. the hooks directory."""
        buf = Buf()
        invoke(lib.git_repository_item_path, to_native(buf), self._native, item)
        return decode_path(buf.consume_bytes())

    @property
    def path(self) -> str:
        return decode_path(lib.git_repository_path(self._native))

    @property
    def workdir(self) -> Optional[str]:
        return decode_path(lib.git_repository_workdir(self._native))

    def set_workdir(self, workdir: PathType, update_gitlink: bool = False) -> None:
        invoke(lib.git_repository_set_workdir, self._native, encode_path(workdir), update_gitlink)

    @property
    def commondir(self) -> str:
        return decode_path(lib.git_repository_commondir(self._native))

    # Subresources

    def config(self) -> Config:
        native = git_config_p()
        invoke(lib.git_repository_config, byref(native), self._native)
        return Config._from_native(native)

    def config_snapshot(self) -> Config:
        """A read-only snapshot of the configuration, consistent across reads."""
        native = git_config_p()
        invoke(lib.git_repository_config_snapshot, byref(native), self._native)
        return Config._from_native(native)

    def index(self) -> Index:
        native = git_index_p()
        invoke(lib.git_repository_index, byref(native), self._native)
        return Index._from_native(native)

    def odb(self) -> Odb:
        native = git_odb_p()
        invoke(lib.git_repository_odb, byref(native), self._native)
        return Odb._from_native(native)

    def refdb(self) -> RefDb:
        native = git_refdb_p()
        invoke(lib.git_repository_refdb, byref(native), self._native)
        return RefDb._from_native(native)

    def prepared_message(self) -> str:
        """The message prepared for the next commit, e.g. by a failed merge."""
        buf = Buf()
        invoke(lib.git_repository_message, to_native(buf), self._native)
        return buf.consume()

    def remove_prepared_message(self) -> None:
        invoke(lib.git_repository_message_remove, self._native)

    # FETCH_HEAD and MERGE_HEAD

    def _fetchhead_foreach(self, callback: ForeachCallback, user_data: Any) -> int:
        trampoline = make_trampoline(
            git_repository_fetchhead_foreach_cb,
            callback,
            (to_path, to_text, to_oid, to_bool),
            user_data,
        )
        return invoke_foreach(lib.git_repository_fetchhead_foreach, trampoline, self._native)

    def fetchhead_foreach(self, callback: ForeachCallback) -> int:
        """Call callback(ref_name, remote_url, oid, is_merge) for each FETCH_HEAD entry.

        Returns 0 if all entries were visited, else what the callback
        returned to stop.
        """
        return self._fetchhead_foreach(callback, NO_USER_DATA)

    def fetchhead_foreach_with_user_data(self, user_data: Any, callback: ForeachCallback) -> int:
        """Like fetchhead_foreach(), user_data is passed as the last argument."""
        return self._fetchhead_foreach(callback, user_data)

    def _mergehead_foreach(self, callback: ForeachCallback, user_data: Any) -> int:
        trampoline = make_trampoline(
            git_repository_mergehead_foreach_cb, callback, (to_oid,), user_data
        )
        return invoke_foreach(lib.git_repository_mergehead_foreach, trampoline, self._native)

    def mergehead_foreach(self, callback: ForeachCallback) -> int:
        """Call callback(oid) for each commit in MERGE_HEAD."""
        return self._mergehead_foreach(callback, NO_USER_DATA)

    def mergehead_foreach_with_user_data(self, user_data: Any, callback: ForeachCallback) -> int:
        return self._mergehead_foreach(callback, user_data)

    # Status

    def hash_file(
        self,
        path: PathType,
        object_type: git_object_t = git_object_t.BLOB,
        as_path: Optional[PathType] = None,
    ) -> Oid:
        """Hash a file as if it were added, applying the filters for as_path.

        With as_path unset the filters for path apply. Pass an empty string
        to skip filtering.
        """
        if as_path is None:
            as_path = path
        oid = Oid()
        invoke(
            lib.git_repository_hashfile,
            to_native(oid),
            self._native,
            encode_path(path),
            object_type,
            encode_path(as_path),
        )
        return oid

    def status_file(self, path: PathType) -> FileStatus:
        flags = c_uint()
        invoke(lib.git_status_file, byref(flags), self._native, encode_path(path))
        return FileStatus.from_native(flags.value)

    def _status_foreach(self, callback: ForeachCallback, user_data: Any) -> int:
        trampoline = make_trampoline(
            git_status_cb, callback, (to_path, to_flags(FileStatus)), user_data
        )
        return invoke_foreach(lib.git_status_foreach, trampoline, self._native)

    def status_foreach(self, callback: ForeachCallback) -> int:
        """Call callback(path, status) for every file which isn’t current."""
        return self._status_foreach(callback, NO_USER_DATA)

    def status_foreach_with_user_data(self, user_data: Any, callback: ForeachCallback) -> int:
        return self._status_foreach(callback, user_data)

    def _status_foreach_ext(
        self, options: StatusOptions, callback: ForeachCallback, user_data: Any
    ) -> int:
        native_options, _pathspec = options._to_native()
        trampoline = make_trampoline(
            git_status_cb, callback, (to_path, to_flags(FileStatus)), user_data
        )
        return invoke_foreach(
            lib.git_status_foreach_ext, trampoline, self._native, byref(native_options)
        )

    def status_foreach_ext(self, options: StatusOptions, callback: ForeachCallback) -> int:
        return self._status_foreach_ext(options, callback, NO_USER_DATA)

    def status_foreach_ext_with_user_data(
        self, options: StatusOptions, user_data: Any, callback: ForeachCallback
    ) -> int:
        return self._status_foreach_ext(options, callback, user_data)

    def status_list(self, options: Optional[StatusOptions] = None) -> StatusList:
        return StatusList.new(self._native, options)

    def status(self, options: Optional[StatusOptions] = None) -> dict[str, FileStatus]:
        """A mapping of paths to status of all files which aren’t current."""
        with self.status_list(options) as status_list:
            return status_list.by_path()

    def status_should_ignore(self, path: PathType) -> bool:
        ignored = c_int()
        invoke(lib.git_status_should_ignore, byref(ignored), self._native, encode_path(path))
        return ignored.value == 1

    # Annotated commits

    def annotated_commit_from_fetchhead(
        self, branch_name: str, remote_url: str, oid: OidTypes
    ) -> AnnotatedCommit:
        return AnnotatedCommit.from_fetchhead(self._native, branch_name, remote_url, oid)

    def annotated_commit_lookup(self, oid: OidTypes) -> AnnotatedCommit:
        return AnnotatedCommit.lookup(self._native, oid)

    def annotated_commit_from_revspec(self, revspec: str) -> AnnotatedCommit:
        return AnnotatedCommit.from_revspec(self._native, revspec)

    # Applying diffs

    def apply_diff(
        self,
        diff: Diff,
        location: ApplyLocation = ApplyLocation.WORKDIR,
        options: Optional[ApplyOptions] = None,
    ) -> None:
        apply_diff(self._native, diff, location, options)

    def apply_diff_to_tree(
        self, preimage: Tree, diff: Diff, options: Optional[ApplyOptions] = None
    ) -> Index:
        return apply_diff_to_tree(self._native, preimage, diff, options)

    # Attributes

    def attribute(
        self, path: PathType, name: str, flags: AttributeFlags = AttributeFlags()
    ) -> Attribute:
        value = c_void_p()
        invoke(
            lib.git_attr_get,
            byref(value),
            self._native,
            flags.to_native(),
            encode_path(path),
            encode_text(name),
        )
        return Attribute._from_native(value.value)

    def attribute_many(
        self, path: PathType, names: Sequence[str], flags: AttributeFlags = AttributeFlags()
    ) -> list[Attribute]:
        """Look up several attributes of path at once, in the order of names."""
        if not names:
            return []

        native_names = (c_char_p * len(names))(*(encode_text(name) for name in names))
        values = (c_void_p * len(names))()
        invoke(
            lib.git_attr_get_many,
            values,
            self._native,
            flags.to_native(),
            encode_path(path),
            len(names),
            native_names,
        )
        return [Attribute._from_native(value) for value in values]

    def _attribute_foreach(
        self, path: PathType, callback: ForeachCallback, user_data: Any, flags: AttributeFlags
    ) -> int:
        trampoline = make_trampoline(
            git_attr_foreach_cb, callback, (to_text, Attribute._from_native), user_data
        )
        return invoke_foreach(
            lib.git_attr_foreach, trampoline, self._native, flags.to_native(), encode_path(path)
        )

    def attribute_foreach(
        self, path: PathType, callback: ForeachCallback, flags: AttributeFlags = AttributeFlags()
    ) -> int:
        """Call callback(name, attribute) for every attribute set on path."""
        return self._attribute_foreach(path, callback, NO_USER_DATA, flags)

    def attribute_foreach_with_user_data(
        self,
        path: PathType,
        user_data: Any,
        callback: ForeachCallback,
        flags: AttributeFlags = AttributeFlags(),
    ) -> int:
        return self._attribute_foreach(path, callback, user_data, flags)

    def attribute_cache_flush(self) -> None:
        invoke(lib.git_attr_cache_flush, self._native)

    def attribute_add_macro(self, name: str, values: str) -> None:
        """Define an attribute macro, like ``[attr]binary -diff -merge -text``."""
        invoke(lib.git_attr_add_macro, self._native, encode_text(name), encode_text(values))

    # Blame

    def blame_file(self, path: PathType, options: Optional[BlameOptions] = None) -> Blame:
        return Blame.file(self._native, path, options)

    # Blobs

    def blob_lookup(self, oid: OidTypes) -> Blob:
        return Blob.lookup(self, oid)

    def blob_lookup_prefix(self, prefix: str) -> Blob:
        return Blob.lookup_prefix(self, prefix)

    def blob_from_buffer(self, data: bytes) -> Oid:
        return blob.create_from_buffer(self, data)

    def blob_from_stream(
        self, chunks: Iterable[bytes], hint_path: Optional[PathType] = None
    ) -> Oid:
        return blob.create_from_stream(self, chunks, hint_path)

    def blob_from_disk(self, path: PathType) -> Oid:
        return blob.create_from_disk(self, path)

    def blob_from_workdir(self, relative_path: PathType) -> Oid:
        return blob.create_from_workdir(self, relative_path)

    # Branches

    def branch_create(self, name: str, target: Commit, force: bool = False) -> Reference:
        native = git_reference_p()
        invoke(
            lib.git_branch_create,
            byref(native),
            self._native,
            encode_path(name),
            target._native,
            force,
        )
        return Reference._from_native(native)

    def branch_create_from_annotated(
        self, name: str, target: AnnotatedCommit, force: bool = False
    ) -> Reference:
        native = git_reference_p()
        invoke(
            lib.git_branch_create_from_annotated,
            byref(native),
            self._native,
            encode_path(name),
            target._native,
            force,
        )
        return Reference._from_native(native)

    def iterate_branches(self, branch_type: BranchType = BranchType.ALL) -> BranchIterator:
        return BranchIterator.new(self._native, branch_type)

    def branch_lookup(self, name: str, branch_type: BranchType = BranchType.LOCAL) -> Reference:
        native = git_reference_p()
        invoke(
            lib.git_branch_lookup, byref(native), self._native, encode_path(name), branch_type
        )
        return Reference._from_native(native)

    def _branch_buf(self, func, refname: str) -> str:
        buf = Buf()
        invoke(func, to_native(buf), self._native, encode_path(refname))
        return decode_path(buf.consume_bytes())

    def branch_remote_name(self, refname: str) -> str:
        """The name of the remote a remote-tracking branch belongs to."""
        return self._branch_buf(lib.git_branch_remote_name, refname)

    def branch_upstream_remote(self, refname: str) -> str:
        """The remote configured as upstream of a local branch."""
        return self._branch_buf(lib.git_branch_upstream_remote, refname)

    def branch_upstream_name(self, refname: str) -> str:
        """The remote-tracking reference a local branch follows."""
        return self._branch_buf(lib.git_branch_upstream_name, refname)

    # References and objects

    def lookup_reference(self, name: str) -> Reference:
        return Reference.lookup(self, name)

    def reference_names(self) -> list[str]:
        names = StrArray()
        invoke(lib.git_reference_list, to_native(names), self._native)
        try:
            return names.to_list()
        finally:
            names.deinit()

    def revparse_single(self, revision: str) -> Object:
        native = git_object_p()
        invoke(lib.git_revparse_single, byref(native), self._native, encode_text(revision))
        return Object._from_native(native)

    def __getitem__(self, oid: OidTypes) -> Object:
        return Object.lookup(self, oid)

    def commit_lookup(self, oid: OidTypes) -> Commit:
        return Commit.lookup(self, oid)

    def describe_workdir(self, options: Optional[DescribeOptions] = None) -> DescribeResult:
        return DescribeResult.of_workdir(self._native, options)
