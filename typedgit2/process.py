"""Process-wide initialization of libgit2

libgit2 keeps global state which has to be set up before, and torn down
after, any other use. init() and LibraryHandle.deinit() strictly alternate:
a second init() without deinit() in between, or deinit() without init(), is
a programming error. The state is kept behind a lock so that threads racing
each other can’t both pass the check. The checks are assertions and go away
under ``python -O``, in which case callers are trusted.
"""

import logging
import threading
from ctypes import byref, c_int
from enum import Enum, auto
from os import PathLike
from typing import Union

from ._wrappers import native_adaptation
from ._wrappers.common import LibNotFoundError
from ._wrappers.native_adaptation import git_feature_t, lib
from .exc import GitError, InternalInvariantError
from .repository import Repository
from .wrapper import invoke, invoke_with_return

log = logging.getLogger(__name__)


class LibraryState(Enum):
    UNINITIALIZED = auto()
    INITIALIZED = auto()


_state_lock = threading.Lock()
_state = LibraryState.UNINITIALIZED


def state() -> LibraryState:
    return _state


def init() -> "LibraryHandle":
    """Initialize libgit2 and return the handle proving it.

    :raises LibNotFoundError: if libgit2 couldn’t be loaded
    :raises GitError: if libgit2 fails to initialize
    """
    global _state

    if lib is None:
        raise LibNotFoundError("libgit2 couldn’t be loaded") from native_adaptation.load_error

    with _state_lock:
        assert _state is LibraryState.UNINITIALIZED, "libgit2 initialized twice without deinit()"
        invoke_with_return(lib.git_libgit2_init)
        _state = LibraryState.INITIALIZED

    log.info("Initialized libgit2 %s (%s)", native_adaptation.version, native_adaptation.soname)

    return LibraryHandle()


class LibraryHandle:
    """Marker that libgit2 is initialized, obtained from init()."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} libgit2 {native_adaptation.version}>"

    def __enter__(self) -> "LibraryHandle":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.deinit()

    def deinit(self) -> None:
        """Shut libgit2 down again."""
        global _state

        with _state_lock:
            assert _state is LibraryState.INITIALIZED, "libgit2 deinit() without init()"
            try:
                invoke_with_return(lib.git_libgit2_shutdown)
            except GitError as exc:
                log.critical("Shutting down libgit2 failed: %s", exc)
                raise InternalInvariantError("libgit2 failed to shut down") from exc
            _state = LibraryState.UNINITIALIZED

        log.debug("Shut down libgit2")

    @staticmethod
    def version() -> tuple[int, int, int]:
        """The version of the loaded libgit2, as it reports it."""
        major, minor, rev = c_int(), c_int(), c_int()
        invoke(lib.git_libgit2_version, byref(major), byref(minor), byref(rev))
        return major.value, minor.value, rev.value

    @staticmethod
    def features() -> git_feature_t:
        return git_feature_t(lib.git_libgit2_features())

    def open_repository(self, path: Union[str, bytes, PathLike]) -> Repository:
        """Open the repository at path, see Repository.open()."""
        return Repository.open(path)

