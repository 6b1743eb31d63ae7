"""Native declarations of the libgit2 ABI

Types, enumerations and function prototypes in this module follow the C
declarations of libgit2 closely. Semantic counterparts live in the rest of
the package.
"""

import logging
from ctypes import (
    CDLL,
    CFUNCTYPE,
    POINTER,
    Structure,
    c_char,
    c_char_p,
    c_int,
    c_int64,
    c_size_t,
    c_uint,
    c_uint16,
    c_uint32,
    c_uint64,
    c_void_p,
)
from enum import IntEnum, IntFlag, auto
from typing import Optional

from .common import IntEnumMixin, LibError, install_func_decls, load_lib

log = logging.getLogger(__name__)

lib: Optional[CDLL] = None
soname: Optional[str] = None
version: Optional[str] = None
load_error: Optional[Exception] = None
available_optional_funcs: frozenset[str] = frozenset()

LIBGIT2_KNOWN_VERSIONS = tuple((1, minor) for minor in range(1, 10))

# Layouts are declared for the newest known version unless the loaded
# library says otherwise.
version_tuple: tuple[int] = LIBGIT2_KNOWN_VERSIONS[-1]

try:
    lib, soname, version, version_tuple = load_lib("git2", known_versions=LIBGIT2_KNOWN_VERSIONS)
except (OSError, LibError) as exc:
    load_error = exc
    log.debug("libgit2 not available: %s", exc)


# Simple types

git_object_size_t = c_uint64
git_off_t = c_int64
git_time_t = c_int64


class git_error_code(IntEnumMixin, IntEnum):
    # @staticmethod
    def _generate_next_value_(name, start, count, last_values):
        return min(last_values) - 1

    OK = 0
    ERROR = auto()

    ENOTFOUND = -3
    EEXISTS = auto()
    EAMBIGUOUS = auto()
    EBUFS = auto()

    EUSER = auto()

    EBAREREPO = auto()
    EUNBORNBRANCH = auto()
    EUNMERGED = auto()
    ENONFASTFORWARD = auto()
    EINVALIDSPEC = auto()
    ECONFLICT = auto()
    ELOCKED = auto()
    EMODIFIED = auto()
    EAUTH = auto()
    ECERTIFICATE = auto()
    EAPPLIED = auto()
    EPEEL = auto()
    EEOF = auto()
    EINVALID = auto()
    EUNCOMMITTED = auto()
    EDIRECTORY = auto()
    EMERGECONFLICT = auto()

    PASSTHROUGH = -30
    ITEROVER = auto()
    RETRY = auto()
    EMISMATCH = auto()
    EINDEXDIRTY = auto()
    EAPPLYFAIL = auto()
    EOWNER = auto()
    TIMEOUT = auto()
    EUNCHANGED = auto()
    ENOTSUPPORTED = auto()
    EREADONLY = auto()


class git_repository_item_t(IntEnumMixin, IntEnum):
    GITDIR = 0
    WORKDIR = auto()
    COMMONDIR = auto()
    INDEX = auto()
    OBJECTS = auto()
    REFS = auto()
    PACKED_REFS = auto()
    REMOTES = auto()
    CONFIG = auto()
    INFO = auto()
    HOOKS = auto()
    LOGS = auto()
    MODULES = auto()
    WORKTREES = auto()
    if version_tuple >= (1, 8):  # pragma: no cover
        WORKTREE_CONFIG = auto()


class git_repository_open_flag_t(IntEnumMixin, IntFlag):
    NO_SEARCH = 1 << 0
    CROSS_FS = auto()
    BARE = auto()
    NO_DOTGIT = auto()
    FROM_ENV = auto()


class git_repository_init_flag_t(IntEnumMixin, IntFlag):
    BARE = 1 << 0
    NO_REINIT = auto()

    MKDIR = 1 << 3
    MKPATH = auto()
    EXTERNAL_TEMPLATE = auto()
    RELATIVE_GITLINK = auto()


class git_repository_state_t(IntEnumMixin, IntEnum):
    NONE = 0
    MERGE = auto()
    REVERT = auto()
    REVERT_SEQUENCE = auto()
    CHERRYPICK = auto()
    CHERRYPICK_SEQUENCE = auto()
    BISECT = auto()
    REBASE = auto()
    REBASE_INTERACTIVE = auto()
    REBASE_MERGE = auto()
    APPLY_MAILBOX = auto()
    APPLY_MAILBOX_OR_REBASE = auto()


class git_reference_t(IntEnumMixin, IntFlag):
    INVALID = 0
    DIRECT = auto()
    SYMBOLIC = auto()
    ALL = 3


class git_object_t(IntEnumMixin, IntEnum):
    ANY = -2
    INVALID = -1
    COMMIT = 1
    TREE = auto()
    BLOB = auto()
    TAG = auto()
    OFS_DELTA = 6
    REF_DELTA = auto()


class git_branch_t(IntEnumMixin, IntEnum):
    LOCAL = 1
    REMOTE = 2
    ALL = LOCAL | REMOTE


class git_direction(IntEnumMixin, IntEnum):
    FETCH = 0
    PUSH = auto()


class git_filemode_t(IntEnumMixin, IntEnum):
    UNREADABLE = 0
    TREE = 0o40000
    BLOB = 0o100644
    BLOB_EXECUTABLE = 0o100755
    LINK = 0o120000
    COMMIT = 0o160000


class git_delta_t(IntEnumMixin, IntEnum):
    UNMODIFIED = 0
    ADDED = auto()
    DELETED = auto()
    MODIFIED = auto()
    RENAMED = auto()
    COPIED = auto()
    IGNORED = auto()
    UNTRACKED = auto()
    TYPECHANGE = auto()
    UNREADABLE = auto()
    CONFLICTED = auto()


class git_diff_format_t(IntEnumMixin, IntEnum):
    PATCH = 1
    PATCH_HEADER = auto()
    RAW = auto()
    NAME_ONLY = auto()
    NAME_STATUS = auto()
    PATCH_ID = auto()


class git_status_show_t(IntEnumMixin, IntEnum):
    INDEX_AND_WORKDIR = 0
    INDEX_ONLY = auto()
    WORKDIR_ONLY = auto()


class git_apply_location_t(IntEnumMixin, IntEnum):
    WORKDIR = 0
    INDEX = auto()
    BOTH = auto()


class git_attr_value_t(IntEnumMixin, IntEnum):
    UNSPECIFIED = 0
    TRUE = auto()
    FALSE = auto()
    STRING = auto()


class git_describe_strategy_t(IntEnumMixin, IntEnum):
    DEFAULT = 0
    TAGS = auto()
    ALL = auto()


class git_config_level_t(IntEnumMixin, IntEnum):  # pragma: no cover
    PROGRAMDATA = 1
    SYSTEM = auto()
    XDG = auto()
    GLOBAL = auto()
    LOCAL = auto()
    if version_tuple >= (1, 8):
        WORKTREE = auto()
    APP = auto()
    HIGHEST = -1


class git_libgit2_opt_t(IntEnumMixin, IntEnum):
    # This is abridged.
    GET_SEARCH_PATH = 4
    SET_SEARCH_PATH = 5


class git_feature_t(IntEnumMixin, IntFlag):
    THREADS = 1 << 0
    HTTPS = auto()
    SSH = auto()
    NSEC = auto()


# Compound types


class git_error(Structure):
    _fields_ = (
        ("message", c_char_p),
        ("klass", c_int),
    )


git_error_p = POINTER(git_error)


class git_buf(Structure):
    _fields_ = (
        ("ptr", POINTER(c_char)),
        ("reserved", c_size_t),
        ("size", c_size_t),
    )


git_buf_p = POINTER(git_buf)


class git_strarray(Structure):
    _fields_ = (
        ("strings", POINTER(c_char_p)),
        ("count", c_size_t),
    )


git_strarray_p = POINTER(git_strarray)


class git_oid(Structure):
    _fields_ = (("id", c_char * 20),)


git_oid_p = POINTER(git_oid)


def _opaque(name: str) -> tuple[type, type, type]:
    struct = type(name, (Structure,), {})
    struct_p = POINTER(struct)
    return struct, struct_p, POINTER(struct_p)


git_repository, git_repository_p, git_repository_p_p = _opaque("git_repository")
git_reference, git_reference_p, git_reference_p_p = _opaque("git_reference")
git_object, git_object_p, git_object_p_p = _opaque("git_object")
git_commit, git_commit_p, git_commit_p_p = _opaque("git_commit")
git_tree, git_tree_p, git_tree_p_p = _opaque("git_tree")
git_tree_entry, git_tree_entry_p, git_tree_entry_p_p = _opaque("git_tree_entry")
git_blob, git_blob_p, git_blob_p_p = _opaque("git_blob")
git_index, git_index_p, git_index_p_p = _opaque("git_index")
git_config, git_config_p, git_config_p_p = _opaque("git_config")
git_odb, git_odb_p, git_odb_p_p = _opaque("git_odb")
git_refdb, git_refdb_p, git_refdb_p_p = _opaque("git_refdb")
git_refspec, git_refspec_p, git_refspec_p_p = _opaque("git_refspec")
git_annotated_commit, git_annotated_commit_p, git_annotated_commit_p_p = _opaque(
    "git_annotated_commit"
)
git_branch_iterator, git_branch_iterator_p, git_branch_iterator_p_p = _opaque(
    "git_branch_iterator"
)
git_status_list, git_status_list_p, git_status_list_p_p = _opaque("git_status_list")
git_blame, git_blame_p, git_blame_p_p = _opaque("git_blame")
git_diff, git_diff_p, git_diff_p_p = _opaque("git_diff")
git_diff_stats, git_diff_stats_p, git_diff_stats_p_p = _opaque("git_diff_stats")
git_describe_result, git_describe_result_p, git_describe_result_p_p = _opaque(
    "git_describe_result"
)


class git_time(Structure):
    _fields_ = (
        ("time", git_time_t),
        ("offset", c_int),
        ("sign", c_char),
    )


class git_signature(Structure):
    _fields_ = (
        ("name", c_char_p),
        ("email", c_char_p),
        ("when", git_time),
    )


git_signature_p = POINTER(git_signature)


class git_config_entry(Structure):
    _fields_ = tuple(
        (fname, ftype)
        for fname, ftype in (
            ("name", c_char_p),
            ("value", c_char_p),
            ("backend_type", c_char_p),  # Added in libgit2 v1.8.0
            ("origin_path", c_char_p),  # Added in libgit2 v1.8.0
            ("include_depth", c_uint),
            ("level", c_int),  # really git_config_level_t
        )
        if fname not in ("backend_type", "origin_path") or version_tuple >= (1, 8)
    )


git_config_entry_p = POINTER(git_config_entry)
git_config_entry_p_p = POINTER(git_config_entry_p)


class git_diff_file(Structure):
    _fields_ = (
        ("id", git_oid),
        ("path", c_char_p),
        ("size", git_object_size_t),
        ("flags", c_uint32),
        ("mode", c_uint16),
        ("id_abbrev", c_uint16),
    )


class git_diff_delta(Structure):
    _fields_ = (
        ("status", c_uint),  # really git_delta_t
        ("flags", c_uint32),
        ("similarity", c_uint16),
        ("nfiles", c_uint16),
        ("old_file", git_diff_file),
        ("new_file", git_diff_file),
    )


git_diff_delta_p = POINTER(git_diff_delta)


class git_diff_hunk(Structure):
    _fields_ = (
        ("old_start", c_int),
        ("old_lines", c_int),
        ("new_start", c_int),
        ("new_lines", c_int),
        ("header_len", c_size_t),
        ("header", c_char * 128),
    )


git_diff_hunk_p = POINTER(git_diff_hunk)


class git_status_options(Structure):
    _fields_ = (
        ("version", c_uint),
        ("show", c_uint),  # really git_status_show_t
        ("flags", c_uint),  # really git_status_opt_t
        ("pathspec", git_strarray),
        ("baseline", git_tree_p),
        ("rename_threshold", c_uint16),
    )


git_status_options_p = POINTER(git_status_options)


class git_status_entry(Structure):
    _fields_ = (
        ("status", c_uint),  # really git_status_t
        ("head_to_index", git_diff_delta_p),
        ("index_to_workdir", git_diff_delta_p),
    )


git_status_entry_p = POINTER(git_status_entry)


class git_repository_init_options(Structure):
    _fields_ = (
        ("version", c_uint),
        ("flags", c_uint32),  # really git_repository_init_flag_t
        ("mode", c_uint32),
        ("workdir_path", c_char_p),
        ("description", c_char_p),
        ("template_path", c_char_p),
        ("initial_head", c_char_p),
        ("origin_url", c_char_p),
    )


git_repository_init_options_p = POINTER(git_repository_init_options)


git_apply_delta_cb = CFUNCTYPE(c_int, git_diff_delta_p, c_void_p)
git_apply_hunk_cb = CFUNCTYPE(c_int, git_diff_hunk_p, c_void_p)


class git_apply_options(Structure):
    _fields_ = (
        ("version", c_uint),
        ("delta_cb", git_apply_delta_cb),
        ("hunk_cb", git_apply_hunk_cb),
        ("payload", c_void_p),
        ("flags", c_uint),  # really git_apply_flags_t
    )


git_apply_options_p = POINTER(git_apply_options)


class git_attr_options(Structure):
    _fields_ = tuple(
        (fname, ftype)
        for fname, ftype in (
            ("version", c_uint),
            ("flags", c_uint),
            ("commit_id", git_oid_p),
            ("attr_commit_id", git_oid),  # Added in libgit2 v1.4.0
        )
        if fname != "attr_commit_id" or version_tuple >= (1, 4)
    )


git_attr_options_p = POINTER(git_attr_options)


class git_blame_options(Structure):
    _fields_ = (
        ("version", c_uint),
        ("flags", c_uint32),
        ("min_match_characters", c_uint16),
        ("newest_commit", git_oid),
        ("oldest_commit", git_oid),
        ("min_line", c_size_t),
        ("max_line", c_size_t),
    )


git_blame_options_p = POINTER(git_blame_options)


class git_blame_hunk(Structure):
    _fields_ = tuple(
        (fname, ftype)
        for fname, ftype in (
            ("lines_in_hunk", c_size_t),
            ("final_commit_id", git_oid),
            ("final_start_line_number", c_size_t),
            ("final_signature", git_signature_p),
            ("final_committer", git_signature_p),  # Added in libgit2 v1.9.0
            ("orig_commit_id", git_oid),
            ("orig_path", c_char_p),
            ("orig_start_line_number", c_size_t),
            ("orig_signature", git_signature_p),
            ("orig_committer", git_signature_p),  # Added in libgit2 v1.9.0
            ("summary", c_char_p),  # Added in libgit2 v1.9.0
            ("boundary", c_char),
        )
        if fname not in ("final_committer", "orig_committer", "summary")
        or version_tuple >= (1, 9)
    )


git_blame_hunk_p = POINTER(git_blame_hunk)


class git_describe_options(Structure):
    _fields_ = (
        ("version", c_uint),
        ("max_candidates_tags", c_uint),
        ("describe_strategy", c_uint),  # really git_describe_strategy_t
        ("pattern", c_char_p),
        ("only_follow_first_parent", c_int),
        ("show_commit_oid_as_fallback", c_int),
    )


git_describe_options_p = POINTER(git_describe_options)


class git_describe_format_options(Structure):
    _fields_ = (
        ("version", c_uint),
        ("abbreviated_size", c_uint),
        ("always_use_long_format", c_int),
        ("dirty_suffix", c_char_p),
    )


git_describe_format_options_p = POINTER(git_describe_format_options)


class git_writestream(Structure):
    pass


git_writestream_p = POINTER(git_writestream)
git_writestream_p_p = POINTER(git_writestream_p)

git_writestream._fields_ = (
    ("write", CFUNCTYPE(c_int, git_writestream_p, c_char_p, c_size_t)),
    ("close", CFUNCTYPE(c_int, git_writestream_p)),
    ("free", CFUNCTYPE(None, git_writestream_p)),
)


# Callback types

git_repository_fetchhead_foreach_cb = CFUNCTYPE(
    c_int, c_char_p, c_char_p, git_oid_p, c_uint, c_void_p
)
git_repository_mergehead_foreach_cb = CFUNCTYPE(c_int, git_oid_p, c_void_p)
git_status_cb = CFUNCTYPE(c_int, c_char_p, c_uint, c_void_p)
git_attr_foreach_cb = CFUNCTYPE(c_int, c_char_p, c_void_p, c_void_p)
git_index_matched_path_cb = CFUNCTYPE(c_int, c_char_p, c_char_p, c_void_p)


# Native function declarations

FUNC_DECLS = {
    "git_annotated_commit_free": (None, (git_annotated_commit_p,)),
    "git_annotated_commit_from_fetchhead": (
        c_int,
        (git_annotated_commit_p_p, git_repository_p, c_char_p, c_char_p, git_oid_p),
    ),
    "git_annotated_commit_from_revspec": (
        c_int,
        (git_annotated_commit_p_p, git_repository_p, c_char_p),
    ),
    "git_annotated_commit_id": (git_oid_p, (git_annotated_commit_p,)),
    "git_annotated_commit_lookup": (
        c_int,
        (git_annotated_commit_p_p, git_repository_p, git_oid_p),
    ),
    "git_annotated_commit_ref": (c_char_p, (git_annotated_commit_p,)),
    "git_apply": (
        c_int,
        (git_repository_p, git_diff_p, git_apply_location_t, git_apply_options_p),
    ),
    "git_apply_options_init": (c_int, (git_apply_options_p, c_uint)),
    "git_apply_to_tree": (
        c_int,
        (git_index_p_p, git_repository_p, git_tree_p, git_diff_p, git_apply_options_p),
    ),
    "git_attr_add_macro": (c_int, (git_repository_p, c_char_p, c_char_p)),
    "git_attr_cache_flush": (c_int, (git_repository_p,)),
    "git_attr_foreach": (
        c_int,
        (git_repository_p, c_uint32, c_char_p, git_attr_foreach_cb, c_void_p),
    ),
    "git_attr_get": (c_int, (POINTER(c_void_p), git_repository_p, c_uint32, c_char_p, c_char_p)),
    "git_attr_get_many": (
        c_int,
        (POINTER(c_void_p), git_repository_p, c_uint32, c_char_p, c_size_t, POINTER(c_char_p)),
    ),
    "git_attr_value": (git_attr_value_t, (c_void_p,)),
    "git_blame_file": (
        c_int,
        (git_blame_p_p, git_repository_p, c_char_p, git_blame_options_p),
    ),
    "git_blame_free": (None, (git_blame_p,)),
    "git_blame_get_hunk_byindex": (git_blame_hunk_p, (git_blame_p, c_uint32)),
    "git_blame_get_hunk_byline": (git_blame_hunk_p, (git_blame_p, c_size_t)),
    "git_blame_get_hunk_count": (c_uint32, (git_blame_p,)),
    "git_blame_options_init": (c_int, (git_blame_options_p, c_uint)),
    "git_blob_create_from_buffer": (c_int, (git_oid_p, git_repository_p, c_void_p, c_size_t)),
    "git_blob_create_from_disk": (c_int, (git_oid_p, git_repository_p, c_char_p)),
    "git_blob_create_from_stream": (
        c_int,
        (git_writestream_p_p, git_repository_p, c_char_p),
    ),
    "git_blob_create_from_stream_commit": (c_int, (git_oid_p, git_writestream_p)),
    "git_blob_create_from_workdir": (c_int, (git_oid_p, git_repository_p, c_char_p)),
    "git_blob_free": (None, (git_blob_p,)),
    "git_blob_is_binary": (c_int, (git_blob_p,)),
    "git_blob_lookup": (c_int, (git_blob_p_p, git_repository_p, git_oid_p)),
    "git_blob_lookup_prefix": (c_int, (git_blob_p_p, git_repository_p, git_oid_p, c_size_t)),
    "git_blob_rawcontent": (c_void_p, (git_blob_p,)),
    "git_blob_rawsize": (git_object_size_t, (git_blob_p,)),
    "git_branch_create": (
        c_int,
        (git_reference_p_p, git_repository_p, c_char_p, git_commit_p, c_int),
    ),
    "git_branch_create_from_annotated": (
        c_int,
        (git_reference_p_p, git_repository_p, c_char_p, git_annotated_commit_p, c_int),
    ),
    "git_branch_is_head": (c_int, (git_reference_p,)),
    "git_branch_iterator_free": (None, (git_branch_iterator_p,)),
    "git_branch_iterator_new": (
        c_int,
        (git_branch_iterator_p_p, git_repository_p, git_branch_t),
    ),
    "git_branch_lookup": (
        c_int,
        (git_reference_p_p, git_repository_p, c_char_p, git_branch_t),
    ),
    "git_branch_name": (c_int, (POINTER(c_char_p), git_reference_p)),
    "git_branch_next": (
        c_int,
        (git_reference_p_p, POINTER(c_int), git_branch_iterator_p),
    ),
    "git_branch_remote_name": (c_int, (git_buf_p, git_repository_p, c_char_p)),
    "git_branch_upstream_name": (c_int, (git_buf_p, git_repository_p, c_char_p)),
    "git_branch_upstream_remote": (c_int, (git_buf_p, git_repository_p, c_char_p)),
    "git_buf_dispose": (None, (git_buf_p,)),
    "git_commit_author": (git_signature_p, (git_commit_p,)),
    "git_commit_committer": (git_signature_p, (git_commit_p,)),
    "git_commit_free": (None, (git_commit_p,)),
    "git_commit_id": (git_oid_p, (git_commit_p,)),
    "git_commit_lookup": (c_int, (git_commit_p_p, git_repository_p, git_oid_p)),
    "git_commit_message": (c_char_p, (git_commit_p,)),
    "git_commit_parent_id": (git_oid_p, (git_commit_p, c_uint)),
    "git_commit_parentcount": (c_uint, (git_commit_p,)),
    "git_commit_summary": (c_char_p, (git_commit_p,)),
    "git_commit_tree": (c_int, (git_tree_p_p, git_commit_p)),
    "git_config_delete_entry": (c_int, (git_config_p, c_char_p)),
    "git_config_entry_free": (None, (git_config_entry_p,)),
    "git_config_free": (None, (git_config_p,)),
    "git_config_get_entry": (c_int, (git_config_entry_p_p, git_config_p, c_char_p)),
    "git_config_set_bool": (c_int, (git_config_p, c_char_p, c_int)),
    "git_config_set_int64": (c_int, (git_config_p, c_char_p, c_int64)),
    "git_config_set_string": (c_int, (git_config_p, c_char_p, c_char_p)),
    "git_describe_commit": (
        c_int,
        (git_describe_result_p_p, git_object_p, git_describe_options_p),
    ),
    "git_describe_format": (
        c_int,
        (git_buf_p, git_describe_result_p, git_describe_format_options_p),
    ),
    "git_describe_format_options_init": (c_int, (git_describe_format_options_p, c_uint)),
    "git_describe_options_init": (c_int, (git_describe_options_p, c_uint)),
    "git_describe_result_free": (None, (git_describe_result_p,)),
    "git_describe_workdir": (
        c_int,
        (git_describe_result_p_p, git_repository_p, git_describe_options_p),
    ),
    "git_diff_free": (None, (git_diff_p,)),
    "git_diff_from_buffer": (c_int, (git_diff_p_p, c_char_p, c_size_t)),
    "git_diff_get_delta": (git_diff_delta_p, (git_diff_p, c_size_t)),
    "git_diff_get_stats": (c_int, (git_diff_stats_p_p, git_diff_p)),
    "git_diff_num_deltas": (c_size_t, (git_diff_p,)),
    "git_diff_stats_deletions": (c_size_t, (git_diff_stats_p,)),
    "git_diff_stats_files_changed": (c_size_t, (git_diff_stats_p,)),
    "git_diff_stats_free": (None, (git_diff_stats_p,)),
    "git_diff_stats_insertions": (c_size_t, (git_diff_stats_p,)),
    "git_diff_to_buf": (c_int, (git_buf_p, git_diff_p, git_diff_format_t)),
    "git_error_last": (git_error_p, ()),
    "git_index_add_all": (
        c_int,
        (git_index_p, git_strarray_p, c_uint, git_index_matched_path_cb, c_void_p),
    ),
    "git_index_add_bypath": (c_int, (git_index_p, c_char_p)),
    "git_index_entrycount": (c_size_t, (git_index_p,)),
    "git_index_free": (None, (git_index_p,)),
    "git_index_remove_bypath": (c_int, (git_index_p, c_char_p)),
    "git_index_write": (c_int, (git_index_p,)),
    "git_index_write_tree": (c_int, (git_oid_p, git_index_p)),
    "git_libgit2_features": (c_int, ()),
    "git_libgit2_init": (c_int, ()),
    "git_libgit2_opts": (c_int, (c_int,)),  # variadic
    "git_libgit2_shutdown": (c_int, ()),
    "git_libgit2_version": (c_int, (POINTER(c_int), POINTER(c_int), POINTER(c_int))),
    "git_object_free": (None, (git_object_p,)),
    "git_object_id": (git_oid_p, (git_object_p,)),
    "git_object_lookup": (c_int, (git_object_p_p, git_repository_p, git_oid_p, git_object_t)),
    "git_object_peel": (c_int, (git_object_p_p, git_object_p, git_object_t)),
    "git_object_short_id": (c_int, (git_buf_p, git_object_p)),
    "git_object_type": (git_object_t, (git_object_p,)),
    "git_odb_exists": (c_int, (git_odb_p, git_oid_p)),
    "git_odb_free": (None, (git_odb_p,)),
    "git_odb_read_header": (
        c_int,
        (POINTER(c_size_t), POINTER(c_int), git_odb_p, git_oid_p),
    ),
    "git_odb_refresh": (c_int, (git_odb_p,)),
    "git_refdb_compress": (c_int, (git_refdb_p,)),
    "git_refdb_free": (None, (git_refdb_p,)),
    "git_reference_free": (None, (git_reference_p,)),
    "git_reference_list": (c_int, (git_strarray_p, git_repository_p)),
    "git_reference_lookup": (c_int, (git_reference_p_p, git_repository_p, c_char_p)),
    "git_reference_name": (c_char_p, (git_reference_p,)),
    "git_reference_peel": (c_int, (git_object_p_p, git_reference_p, git_object_t)),
    "git_reference_resolve": (c_int, (git_reference_p_p, git_reference_p)),
    "git_reference_shorthand": (c_char_p, (git_reference_p,)),
    "git_reference_symbolic_target": (c_char_p, (git_reference_p,)),
    "git_reference_target": (git_oid_p, (git_reference_p,)),
    "git_reference_type": (git_reference_t, (git_reference_p,)),
    "git_refspec_direction": (git_direction, (git_refspec_p,)),
    "git_refspec_dst": (c_char_p, (git_refspec_p,)),
    "git_refspec_dst_matches": (c_int, (git_refspec_p, c_char_p)),
    "git_refspec_force": (c_int, (git_refspec_p,)),
    "git_refspec_free": (None, (git_refspec_p,)),
    "git_refspec_parse": (c_int, (git_refspec_p_p, c_char_p, c_int)),
    "git_refspec_rtransform": (c_int, (git_buf_p, git_refspec_p, c_char_p)),
    "git_refspec_src": (c_char_p, (git_refspec_p,)),
    "git_refspec_src_matches": (c_int, (git_refspec_p, c_char_p)),
    "git_refspec_string": (c_char_p, (git_refspec_p,)),
    "git_refspec_transform": (c_int, (git_buf_p, git_refspec_p, c_char_p)),
    "git_repository_commondir": (c_char_p, (git_repository_p,)),
    "git_repository_config": (c_int, (git_config_p_p, git_repository_p)),
    "git_repository_config_snapshot": (c_int, (git_config_p_p, git_repository_p)),
    "git_repository_detach_head": (c_int, (git_repository_p,)),
    "git_repository_fetchhead_foreach": (
        c_int,
        (git_repository_p, git_repository_fetchhead_foreach_cb, c_void_p),
    ),
    "git_repository_free": (None, (git_repository_p,)),
    "git_repository_get_namespace": (c_char_p, (git_repository_p,)),
    "git_repository_hashfile": (
        c_int,
        (git_oid_p, git_repository_p, c_char_p, git_object_t, c_char_p),
    ),
    "git_repository_head": (c_int, (git_reference_p_p, git_repository_p)),
    "git_repository_head_detached": (c_int, (git_repository_p,)),
    "git_repository_head_detached_for_worktree": (c_int, (git_repository_p, c_char_p)),
    "git_repository_head_for_worktree": (
        c_int,
        (git_reference_p_p, git_repository_p, c_char_p),
    ),
    "git_repository_head_unborn": (c_int, (git_repository_p,)),
    "git_repository_ident": (c_int, (POINTER(c_char_p), POINTER(c_char_p), git_repository_p)),
    "git_repository_index": (c_int, (git_index_p_p, git_repository_p)),
    "git_repository_init_ext": (
        c_int,
        (git_repository_p_p, c_char_p, git_repository_init_options_p),
    ),
    "git_repository_init_options_init": (c_int, (git_repository_init_options_p, c_uint)),
    "git_repository_is_bare": (c_int, (git_repository_p,)),
    "git_repository_is_empty": (c_int, (git_repository_p,)),
    "git_repository_is_shallow": (c_int, (git_repository_p,)),
    "git_repository_is_worktree": (c_int, (git_repository_p,)),
    "git_repository_item_path": (c_int, (git_buf_p, git_repository_p, git_repository_item_t)),
    "git_repository_mergehead_foreach": (
        c_int,
        (git_repository_p, git_repository_mergehead_foreach_cb, c_void_p),
    ),
    "git_repository_message": (c_int, (git_buf_p, git_repository_p)),
    "git_repository_message_remove": (c_int, (git_repository_p,)),
    "git_repository_odb": (c_int, (git_odb_p_p, git_repository_p)),
    "git_repository_open": (c_int, (git_repository_p_p, c_char_p)),
    "git_repository_open_ext": (c_int, (git_repository_p_p, c_char_p, c_uint, c_char_p)),
    "git_repository_path": (c_char_p, (git_repository_p,)),
    "git_repository_refdb": (c_int, (git_refdb_p_p, git_repository_p)),
    "git_repository_set_head": (c_int, (git_repository_p, c_char_p)),
    "git_repository_set_head_detached": (c_int, (git_repository_p, git_oid_p)),
    "git_repository_set_head_detached_from_annotated": (
        c_int,
        (git_repository_p, git_annotated_commit_p),
    ),
    "git_repository_set_ident": (c_int, (git_repository_p, c_char_p, c_char_p)),
    "git_repository_set_namespace": (c_int, (git_repository_p, c_char_p)),
    "git_repository_set_workdir": (c_int, (git_repository_p, c_char_p, c_int)),
    "git_repository_state": (c_int, (git_repository_p,)),
    "git_repository_state_cleanup": (c_int, (git_repository_p,)),
    "git_repository_workdir": (c_char_p, (git_repository_p,)),
    "git_revparse_single": (c_int, (git_object_p_p, git_repository_p, c_char_p)),
    "git_status_byindex": (git_status_entry_p, (git_status_list_p, c_size_t)),
    "git_status_file": (c_int, (POINTER(c_uint), git_repository_p, c_char_p)),
    "git_status_foreach": (c_int, (git_repository_p, git_status_cb, c_void_p)),
    "git_status_foreach_ext": (
        c_int,
        (git_repository_p, git_status_options_p, git_status_cb, c_void_p),
    ),
    "git_status_list_entrycount": (c_size_t, (git_status_list_p,)),
    "git_status_list_free": (None, (git_status_list_p,)),
    "git_status_list_new": (c_int, (git_status_list_p_p, git_repository_p, git_status_options_p)),
    "git_status_options_init": (c_int, (git_status_options_p, c_uint)),
    "git_status_should_ignore": (c_int, (POINTER(c_int), git_repository_p, c_char_p)),
    "git_strarray_dispose": (None, (git_strarray_p,)),
    "git_tree_entry_byindex": (git_tree_entry_p, (git_tree_p, c_size_t)),
    "git_tree_entry_byname": (git_tree_entry_p, (git_tree_p, c_char_p)),
    "git_tree_entry_filemode": (git_filemode_t, (git_tree_entry_p,)),
    "git_tree_entry_id": (git_oid_p, (git_tree_entry_p,)),
    "git_tree_entry_name": (c_char_p, (git_tree_entry_p,)),
    "git_tree_entrycount": (c_size_t, (git_tree_p,)),
    "git_tree_free": (None, (git_tree_p,)),
}

# Functions added in libgit2 v1.2.0
FUNC_DECLS_1_2 = {
    "git_attr_foreach_ext": (
        c_int,
        (git_repository_p, git_attr_options_p, c_char_p, git_attr_foreach_cb, c_void_p),
    ),
    "git_attr_get_ext": (
        c_int,
        (POINTER(c_void_p), git_repository_p, git_attr_options_p, c_char_p, c_char_p),
    ),
    "git_attr_get_many_ext": (
        c_int,
        (
            POINTER(c_void_p),
            git_repository_p,
            git_attr_options_p,
            c_char_p,
            c_size_t,
            POINTER(c_char_p),
        ),
    ),
    "git_branch_upstream_merge": (c_int, (git_buf_p, git_repository_p, c_char_p)),
}

# Functions which builds may leave out, e.g. deprecated ones
OPTIONAL_FUNC_DECLS = {
    "git_strarray_copy": (c_int, (git_strarray_p, git_strarray_p)),
}


# Set up native function argument types.

if lib is not None:
    try:
        install_func_decls(lib, FUNC_DECLS)
        if version_tuple >= (1, 2):
            install_func_decls(lib, FUNC_DECLS_1_2)
    except LibError as exc:  # pragma: no cover
        raise ImportError from exc

    available_optional_funcs = frozenset(
        install_func_decls(lib, OPTIONAL_FUNC_DECLS, optional=True)
    )
