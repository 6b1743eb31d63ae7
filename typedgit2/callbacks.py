"""Trampolines letting libgit2 call typed Python callables

libgit2 accepts a C function pointer plus one untyped payload pointer
wherever it calls back into its user. A Trampoline builds the C function
for one call site: it converts each native argument into its semantic
counterpart, recovers the user data object from the payload and calls the
typed callback with both.

Iteration protocol: a callback returning non-zero makes libgit2 stop
iterating, and the wrapping call returns that value as its successful
result. Returning None or 0 continues.

An exception raised by the callback can’t travel through the C frames of
libgit2. It is stored, GIT_EUSER is returned to stop the iteration and the
exception is raised again when the trampoline’s context is left.
"""

import logging
from ctypes import POINTER, c_void_p, cast, pointer, py_object
from typing import Any, Callable, Optional, Sequence

from ._wrappers.native_adaptation import git_error_code
from .oid import Oid
from .wrapper import decode_path, decode_text, invoke_with_return

log = logging.getLogger(__name__)

Converter = Callable[[Any], Any]


class _NoUserData:
    def __repr__(self) -> str:
        return "<no user data>"


NO_USER_DATA = _NoUserData()


class Trampoline:
    """Adapter between a typed callback and a native callback type.

    :param native_cb_type: the CFUNCTYPE libgit2 expects, its last argument
        is the payload pointer
    :param callback: the typed callable
    :param converters: one converter per native argument except the payload
    :param user_data: any object, passed as the last argument to callback

    The payload handed to libgit2 points to a box holding user_data. Reading
    it back relies on libgit2 passing the payload through untouched, which
    is what its API promises.
    """

    def __init__(
        self,
        native_cb_type: type,
        callback: Callable[..., Optional[int]],
        converters: Sequence[Converter],
        user_data: Any,
        *,
        pass_user_data: bool = True,
    ) -> None:
        self.callback = callback
        self.converters = tuple(converters)
        self.pass_user_data = pass_user_data
        self.exception: Optional[Exception] = None

        self._user_data_box = py_object(user_data)
        self.payload = cast(pointer(self._user_data_box), c_void_p)
        self.native = native_cb_type(self._dispatch)

    @classmethod
    def without_user_data(
        cls,
        native_cb_type: type,
        callback: Callable[..., Optional[int]],
        converters: Sequence[Converter],
    ) -> "Trampoline":
        return cls(native_cb_type, callback, converters, NO_USER_DATA, pass_user_data=False)

    @staticmethod
    def user_data_from_payload(payload: Optional[int]) -> Any:
        return cast(payload, POINTER(py_object)).contents.value

    def _dispatch(self, *native_args: Any) -> int:
        *args, payload = native_args
        try:
            values = [convert(arg) for convert, arg in zip(self.converters, args)]
            if self.pass_user_data:
                values.append(self.user_data_from_payload(payload))
            result = self.callback(*values)
        except Exception as exc:
            log.debug("Callback %r raised %r, stopping", self.callback, exc)
            self.exception = exc
            return git_error_code.EUSER

        if result is None:
            return 0
        return int(result)

    def __enter__(self) -> "Trampoline":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        if self.exception is not None:
            exception, self.exception = self.exception, None
            raise exception


def make_trampoline(
    native_cb_type: type,
    callback: Callable[..., Optional[int]],
    converters: Sequence[Converter],
    user_data: Any = NO_USER_DATA,
) -> Trampoline:
    """Build a trampoline, passing user_data on unless it is NO_USER_DATA."""
    if user_data is NO_USER_DATA:
        return Trampoline.without_user_data(native_cb_type, callback, converters)
    return Trampoline(native_cb_type, callback, converters, user_data)


def invoke_foreach(func: Callable[..., int], trampoline: Trampoline, *args: Any) -> int:
    """Call a libgit2 iteration function with the trampoline and its payload appended.

    Returns 0 if the iteration ran to completion, otherwise the non-zero
    value the callback stopped it with.
    """
    with trampoline:
        return invoke_with_return(func, *args, trampoline.native, trampoline.payload)


# Converters from native callback arguments


def to_text(value: Optional[bytes]) -> Optional[str]:
    return decode_text(value)


def to_path(value: Optional[bytes]) -> Optional[str]:
    return decode_path(value)


def to_bool(value: int) -> bool:
    return value == 1


def to_oid(value) -> Oid:
    return Oid._from_native_ptr(value)


def to_enum(enum_cls: type) -> Converter:
    return enum_cls


def to_flags(flags_cls: type) -> Converter:
    return flags_cls.from_native


def to_view(view_cls: type) -> Converter:
    """Non-owning view of a struct libgit2 passes by pointer."""
    return view_cls._from_native_ptr
