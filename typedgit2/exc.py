"""Exceptions and the classification of libgit2 error codes"""

import logging
from enum import Enum
from typing import Optional

from ._wrappers.common import LibError
from ._wrappers.native_adaptation import git_error_code

log = logging.getLogger(__name__)


class ErrorKind(Enum):
    """The closed set of failure kinds libgit2 reports."""

    GENERIC = git_error_code.ERROR
    NOT_FOUND = git_error_code.ENOTFOUND
    EXISTS = git_error_code.EEXISTS
    AMBIGUOUS = git_error_code.EAMBIGUOUS
    BUFFER_TOO_SHORT = git_error_code.EBUFS
    USER = git_error_code.EUSER
    BARE_REPO = git_error_code.EBAREREPO
    UNBORN_BRANCH = git_error_code.EUNBORNBRANCH
    UNMERGED = git_error_code.EUNMERGED
    NON_FAST_FORWARD = git_error_code.ENONFASTFORWARD
    INVALID_SPEC = git_error_code.EINVALIDSPEC
    CONFLICT = git_error_code.ECONFLICT
    LOCKED = git_error_code.ELOCKED
    MODIFIED = git_error_code.EMODIFIED
    AUTH = git_error_code.EAUTH
    CERTIFICATE = git_error_code.ECERTIFICATE
    APPLIED = git_error_code.EAPPLIED
    PEEL = git_error_code.EPEEL
    END_OF_FILE = git_error_code.EEOF
    INVALID = git_error_code.EINVALID
    UNCOMMITTED = git_error_code.EUNCOMMITTED
    DIRECTORY = git_error_code.EDIRECTORY
    MERGE_CONFLICT = git_error_code.EMERGECONFLICT
    PASSTHROUGH = git_error_code.PASSTHROUGH
    ITER_OVER = git_error_code.ITEROVER
    RETRY = git_error_code.RETRY
    MISMATCH = git_error_code.EMISMATCH
    INDEX_DIRTY = git_error_code.EINDEXDIRTY
    APPLY_FAIL = git_error_code.EAPPLYFAIL
    OWNER = git_error_code.EOWNER
    TIMEOUT = git_error_code.TIMEOUT
    UNCHANGED = git_error_code.EUNCHANGED
    NOT_SUPPORTED = git_error_code.ENOTSUPPORTED
    READ_ONLY = git_error_code.EREADONLY


class InternalInvariantError(LibError):
    """The binding and the loaded library disagree about something they must
    agree upon. This is a bug, not a condition to handle."""


class UnknownErrorCodeError(InternalInvariantError):
    def __init__(self, code: int) -> None:
        super().__init__(f"libgit2 returned unknown error code {code}")
        self.code = code


def classify(code: int) -> ErrorKind:
    """Map a negative libgit2 return code onto its error kind.

    Codes outside of the known set mean that the binding doesn’t match the
    library and raise UnknownErrorCodeError.
    """
    try:
        return ErrorKind(code)
    except ValueError:
        log.critical("Unknown libgit2 error code %d, binding and library don’t match", code)
        raise UnknownErrorCodeError(code) from None


class GitError(Exception):
    """A libgit2 function failed.

    :ivar kind: the ErrorKind of the failure
    :ivar code: the raw return code
    """

    kind: Optional[ErrorKind] = None

    _kind_to_exc_class: dict[ErrorKind, type["GitError"]] = {}

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        if cls.kind is not None:
            GitError._kind_to_exc_class[cls.kind] = cls

    def __init__(self, message: str, kind: Optional[ErrorKind] = None) -> None:
        super().__init__(message)
        if kind is not None:
            self.kind = kind
        elif self.kind is None:
            self.kind = ErrorKind.GENERIC
        self.message = message

    @property
    def code(self) -> int:
        return int(self.kind.value)

    def __str__(self) -> str:
        return self.message


def error_for(kind: ErrorKind, message: str) -> GitError:
    """Instantiate the exception matching an error kind."""
    exc_class = GitError._kind_to_exc_class.get(kind, GitError)
    return exc_class(message, kind=kind)


# KeyError and ValueError are mixed in where callers would expect them.


class NotFoundError(GitError, KeyError):
    kind = ErrorKind.NOT_FOUND


class AlreadyExistsError(GitError, ValueError):
    kind = ErrorKind.EXISTS


class AmbiguousError(GitError, ValueError):
    kind = ErrorKind.AMBIGUOUS


class BufferTooShortError(GitError, ValueError):
    kind = ErrorKind.BUFFER_TOO_SHORT


class UserError(GitError):
    kind = ErrorKind.USER


class BareRepoError(GitError):
    kind = ErrorKind.BARE_REPO


class UnbornBranchError(GitError):
    kind = ErrorKind.UNBORN_BRANCH


class UnmergedError(GitError):
    kind = ErrorKind.UNMERGED


class NonFastForwardError(GitError):
    kind = ErrorKind.NON_FAST_FORWARD


class InvalidSpecError(GitError, ValueError):
    kind = ErrorKind.INVALID_SPEC


class ConflictError(GitError):
    kind = ErrorKind.CONFLICT


class LockedError(GitError):
    kind = ErrorKind.LOCKED


class ModifiedError(GitError):
    kind = ErrorKind.MODIFIED


class AuthError(GitError):
    kind = ErrorKind.AUTH


class CertificateError(GitError):
    kind = ErrorKind.CERTIFICATE


class AppliedError(GitError):
    kind = ErrorKind.APPLIED


class PeelError(GitError):
    kind = ErrorKind.PEEL


class EndOfFileError(GitError):
    kind = ErrorKind.END_OF_FILE


class InvalidError(GitError, ValueError):
    kind = ErrorKind.INVALID


class UncommittedError(GitError):
    kind = ErrorKind.UNCOMMITTED


class DirectoryError(GitError):
    kind = ErrorKind.DIRECTORY


class MergeConflictError(GitError):
    kind = ErrorKind.MERGE_CONFLICT


class PassthroughError(GitError):
    kind = ErrorKind.PASSTHROUGH


class IterOverError(GitError):
    kind = ErrorKind.ITER_OVER


class RetryError(GitError):
    kind = ErrorKind.RETRY


class MismatchError(GitError):
    kind = ErrorKind.MISMATCH


class IndexDirtyError(GitError):
    kind = ErrorKind.INDEX_DIRTY


class ApplyFailError(GitError):
    kind = ErrorKind.APPLY_FAIL


class OwnerError(GitError):
    kind = ErrorKind.OWNER


class OperationTimeoutError(GitError):
    kind = ErrorKind.TIMEOUT


class UnchangedError(GitError):
    kind = ErrorKind.UNCHANGED


class NotSupportedError(GitError):
    kind = ErrorKind.NOT_SUPPORTED


class ReadOnlyError(GitError):
    kind = ErrorKind.READ_ONLY
