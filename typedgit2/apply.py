"""Applying diffs to the working directory, the index or a tree"""

from contextlib import ExitStack
from ctypes import byref, c_uint
from typing import TYPE_CHECKING, Any, Callable, NamedTuple, Optional

from ._wrappers.native_adaptation import (
    git_apply_delta_cb,
    git_apply_hunk_cb,
    git_apply_location_t,
    git_apply_options,
    git_index_p,
    lib,
)
from .abi import BitFlags, abi_mirror
from .callbacks import NO_USER_DATA, Trampoline, make_trampoline, to_view
from .constants import GIT_APPLY_OPTIONS_VERSION
from .diff import Diff, DiffDelta, DiffHunk
from .index import Index
from .wrapper import invoke

if TYPE_CHECKING:
    from .tree import Tree

ApplyLocation = git_apply_location_t

# Return 0 to apply, a positive value to skip, a negative one to abort.
DeltaCallback = Callable[..., Optional[int]]
HunkCallback = Callable[..., Optional[int]]


@abi_mirror(c_uint)
class ApplyOptionsFlags(BitFlags):
    _fields_ = (
        ("check", c_uint, 1),
        ("z_padding", c_uint, 31),
    )


class ApplyOptions(NamedTuple):
    """Options for applying a diff.

    The callbacks receive a DiffDelta or DiffHunk respectively, followed by
    user_data unless that is left at NO_USER_DATA. With the check flag set,
    nothing is changed and only applicability is tested.
    """

    delta_callback: Optional[DeltaCallback] = None
    hunk_callback: Optional[HunkCallback] = None
    flags: ApplyOptionsFlags = ApplyOptionsFlags()
    user_data: Any = NO_USER_DATA

    def _to_native(self) -> tuple[git_apply_options, list[Trampoline]]:
        """Build the native options, the trampolines must outlive their use."""
        native = git_apply_options()
        invoke(lib.git_apply_options_init, byref(native), GIT_APPLY_OPTIONS_VERSION)
        native.flags = self.flags.to_native()

        trampolines = []
        if self.delta_callback is not None:
            trampoline = make_trampoline(
                git_apply_delta_cb, self.delta_callback, (to_view(DiffDelta),), self.user_data
            )
            native.delta_cb = trampoline.native
            trampolines.append(trampoline)
        if self.hunk_callback is not None:
            trampoline = make_trampoline(
                git_apply_hunk_cb, self.hunk_callback, (to_view(DiffHunk),), self.user_data
            )
            native.hunk_cb = trampoline.native
            trampolines.append(trampoline)

        # Both trampolines box the same user data, either payload will do.
        if trampolines:
            native.payload = trampolines[0].payload

        return native, trampolines


def apply_diff(
    repo_native, diff: Diff, location: ApplyLocation, options: Optional[ApplyOptions] = None
) -> None:
    native_options, trampolines = (options or ApplyOptions())._to_native()
    with ExitStack() as stack:
        for trampoline in trampolines:
            stack.enter_context(trampoline)
        invoke(lib.git_apply, repo_native, diff._native, location, byref(native_options))


def apply_diff_to_tree(
    repo_native, preimage: "Tree", diff: Diff, options: Optional[ApplyOptions] = None
) -> Index:
    """Apply a diff to a tree, the result is an in-memory index."""
    native_options, trampolines = (options or ApplyOptions())._to_native()
    native = git_index_p()
    with ExitStack() as stack:
        for trampoline in trampolines:
            stack.enter_context(trampoline)
        invoke(
            lib.git_apply_to_tree,
            byref(native),
            repo_native,
            preimage._native,
            diff._native,
            byref(native_options),
        )
    return Index._from_native(native)
