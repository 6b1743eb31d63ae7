"""Calling libgit2 functions and wrapping the pointers they hand out"""

import logging
from ctypes import _CFuncPtr, _Pointer, string_at
from os import PathLike, fsencode
from sys import getfilesystemencodeerrors, getfilesystemencoding
from typing import Any, Callable, Optional, TypeVar, Union

from ._wrappers.native_adaptation import lib
from .exc import ErrorKind, GitError, classify, error_for

log = logging.getLogger(__name__)

NO_ERROR_INFO = "(No error information given)"

HandleType = TypeVar("HandleType", bound="NativeHandle")


def last_error_message() -> str:
    """Retrieve the message of the last error libgit2 recorded on this thread."""
    if lib is None:
        return NO_ERROR_INFO

    error_p = lib.git_error_last()
    if not error_p or not error_p.contents.message:
        return NO_ERROR_INFO
    return error_p.contents.message.decode("utf-8", errors="replace")


def _func_name(func: Callable) -> str:
    return getattr(func, "__name__", None) or repr(func)


def invoke_with_return(func: Callable[..., int], *args: Any) -> int:
    """Call a libgit2 function and return its non-negative result.

    Negative results are classified and raised as the matching GitError
    subclass. Non-negative results are returned as is, they can be booleans,
    counts or the value a callback used to stop an iteration.
    """
    name = _func_name(func)
    result = func(*args)

    if result < 0:
        kind = classify(result)
        log.debug("%s: failed with %s (%d)", name, kind.name, result)
        raise error_for(kind, last_error_message())

    log.debug("%s: ok (%d)", name, result)
    return result


def invoke(func: Callable[..., int], *args: Any) -> None:
    """Call a libgit2 function, raising a GitError if it fails."""
    invoke_with_return(func, *args)


def encode_path(path: Union[str, bytes, PathLike]) -> bytes:
    if isinstance(path, PathLike):
        return fsencode(path)
    if isinstance(path, str):
        return path.encode(encoding=getfilesystemencoding(), errors=getfilesystemencodeerrors())
    return path


def decode_path(encoded: Optional[bytes]) -> Optional[str]:
    if encoded is None:
        return None
    return encoded.decode(encoding=getfilesystemencoding(), errors=getfilesystemencodeerrors())


def encode_text(text: Union[str, bytes]) -> bytes:
    if isinstance(text, str):
        return text.encode("utf-8")
    return text


def decode_text(encoded: Optional[bytes]) -> Optional[str]:
    if encoded is None:
        return None
    return encoded.decode("utf-8", errors="replace")


class LibraryUser:
    """Mixin for classes calling into libgit2."""

    @staticmethod
    def check_pointer(ptr: Any, func_name: str) -> Any:
        """Some functions signal failure only by returning NULL."""
        if not ptr:
            log.debug("%s: returned NULL", func_name)
            message = last_error_message()
            if message == NO_ERROR_INFO:
                message = f"{func_name}() returned NULL"
            raise GitError(message, kind=ErrorKind.GENERIC)
        return ptr

    @staticmethod
    def read_bytes(ptr: Any, size: int) -> bytes:
        if not size:
            return b""
        return string_at(ptr, size)


class NativeHandle(LibraryUser):
    """Base class of handles which own exactly one libgit2 object.

    A handle is valid from the moment it is returned until deinit() is
    called. Calling deinit() more than once or using the handle afterwards
    hands a dangling pointer to libgit2, the handle doesn’t guard against
    that. Nothing frees the native object implicitly, not even garbage
    collection.
    """

    # Name of the libgit2 function freeing the native object, resolved on
    # first use.
    _libgit2_native_finalizer: Optional[Union[_CFuncPtr, str]] = None

    _native: Optional[_Pointer] = None

    def __init__(self, native: _Pointer) -> None:
        self._native = native

    @classmethod
    def _from_native(cls: type[HandleType], native: _Pointer) -> HandleType:
        self = cls.__new__(cls)
        NativeHandle.__init__(self, native)
        return self

    def __repr__(self) -> str:
        return f"<{type(self).__name__} at {id(self):#x}>"

    def __enter__(self: HandleType) -> HandleType:
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.deinit()

    @classmethod
    def _finalizer(cls) -> _CFuncPtr:
        finalizer = cls._libgit2_native_finalizer
        if isinstance(finalizer, str):
            cls._libgit2_native_finalizer = finalizer = getattr(lib, finalizer)
        return finalizer

    def deinit(self) -> None:
        """Release the native object."""
        finalizer = self._finalizer()
        log.debug("%s: deinit via %s", type(self).__name__, _func_name(finalizer))
        finalizer(self._native)

