"""Typed wrapper for libgit2

Application code calls libgit2 through handles with explicit ownership,
typed errors and typed callbacks instead of raw pointers, result codes and
C function pointers. Call process.init() before anything else and deinit()
the handle it returns when done.
"""

from . import settings
from .blob import Blob
from .commit import Commit
from .exc import ErrorKind, GitError, classify
from .object_ import Object
from .oid import Oid
from .process import LibraryHandle, init
from .reference import Reference
from .repository import Repository
from .tree import Tree
from .version import __version__
