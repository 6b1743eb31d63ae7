"""Describing commits like ``git describe``"""

from ctypes import byref
from typing import NamedTuple, Optional

from ._wrappers.native_adaptation import (
    git_describe_format_options,
    git_describe_options,
    git_describe_result_p,
    git_describe_strategy_t,
    lib,
)
from .abi import to_native
from .buf import Buf
from .constants import (
    GIT_DESCRIBE_DEFAULT_ABBREVIATED_SIZE,
    GIT_DESCRIBE_DEFAULT_MAX_CANDIDATES_TAGS,
    GIT_DESCRIBE_FORMAT_OPTIONS_VERSION,
    GIT_DESCRIBE_OPTIONS_VERSION,
)
from .wrapper import NativeHandle, encode_text, invoke

DescribeStrategy = git_describe_strategy_t


class DescribeOptions(NamedTuple):
    max_candidates_tags: int = GIT_DESCRIBE_DEFAULT_MAX_CANDIDATES_TAGS
    strategy: DescribeStrategy = DescribeStrategy.DEFAULT
    pattern: Optional[str] = None
    only_follow_first_parent: bool = False
    show_commit_oid_as_fallback: bool = False

    def _to_native(self) -> git_describe_options:
        native = git_describe_options()
        invoke(lib.git_describe_options_init, byref(native), GIT_DESCRIBE_OPTIONS_VERSION)
        native.max_candidates_tags = self.max_candidates_tags
        native.describe_strategy = self.strategy
        if self.pattern is not None:
            native.pattern = encode_text(self.pattern)
        native.only_follow_first_parent = self.only_follow_first_parent
        native.show_commit_oid_as_fallback = self.show_commit_oid_as_fallback
        return native


class DescribeFormatOptions(NamedTuple):
    abbreviated_size: int = GIT_DESCRIBE_DEFAULT_ABBREVIATED_SIZE
    always_use_long_format: bool = False
    dirty_suffix: Optional[str] = None

    def _to_native(self) -> git_describe_format_options:
        native = git_describe_format_options()
        invoke(
            lib.git_describe_format_options_init,
            byref(native),
            GIT_DESCRIBE_FORMAT_OPTIONS_VERSION,
        )
        native.abbreviated_size = self.abbreviated_size
        native.always_use_long_format = self.always_use_long_format
        if self.dirty_suffix is not None:
            native.dirty_suffix = encode_text(self.dirty_suffix)
        return native


class DescribeResult(NativeHandle):
    """The outcome of describing an object or the working directory."""

    _libgit2_native_finalizer = "git_describe_result_free"

    @classmethod
    def of_object(cls, object_native, options: Optional[DescribeOptions] = None):
        native = git_describe_result_p()
        native_options = (options or DescribeOptions())._to_native()
        invoke(lib.git_describe_commit, byref(native), object_native, byref(native_options))
        return cls._from_native(native)

    @classmethod
    def of_workdir(cls, repo_native, options: Optional[DescribeOptions] = None):
        native = git_describe_result_p()
        native_options = (options or DescribeOptions())._to_native()
        invoke(lib.git_describe_workdir, byref(native), repo_native, byref(native_options))
        return cls._from_native(native)

    def format(self, options: Optional[DescribeFormatOptions] = None) -> str:
        native_options = (options or DescribeFormatOptions())._to_native()
        buf = Buf()
        invoke(lib.git_describe_format, to_native(buf), self._native, byref(native_options))
        return buf.consume()
