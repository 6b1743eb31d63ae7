"""References"""

from ctypes import byref
from typing import TYPE_CHECKING, Optional, Type, Union

from ._wrappers.native_adaptation import (
    git_object_p,
    git_object_t,
    git_reference_p,
    git_reference_t,
    lib,
)
from .object_ import Object
from .oid import Oid
from .wrapper import NativeHandle, decode_path, encode_path, invoke

if TYPE_CHECKING:
    from .repository import Repository


class Reference(NativeHandle):
    """Represent a git reference.

    References are independent of the repository they come from as far as
    freeing goes, but must not be used after it is deinitialized.
    """

    _libgit2_native_finalizer = "git_reference_free"

    @classmethod
    def lookup(cls, repo: "Repository", name: str) -> "Reference":
        native = git_reference_p()
        invoke(lib.git_reference_lookup, byref(native), repo._native, encode_path(name))
        return cls._from_native(native)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"

    @property
    def name(self) -> str:
        return decode_path(lib.git_reference_name(self._native))

    @property
    def shorthand(self) -> str:
        return decode_path(lib.git_reference_shorthand(self._native))

    @property
    def type(self) -> git_reference_t:
        return lib.git_reference_type(self._native)

    @property
    def target(self) -> Union[Oid, str]:
        """The oid of a direct, or the name targeted by a symbolic reference."""
        if self.type == git_reference_t.DIRECT:
            return Oid._from_native_ptr(lib.git_reference_target(self._native))

        if not (name := lib.git_reference_symbolic_target(self._native)):
            raise ValueError("no target available")

        return decode_path(name)

    def resolve(self) -> "Reference":
        """Follow symbolic references, the result needs its own deinit()."""
        native = git_reference_p()
        invoke(lib.git_reference_resolve, byref(native), self._native)
        return Reference._from_native(native)

    def peel(self, target_type: Optional[Union[git_object_t, Type[Object]]] = None) -> Object:
        if not target_type:
            target_type = git_object_t.ANY
        elif isinstance(target_type, type) and issubclass(target_type, Object):
            target_type = target_type._object_t

        peeled = git_object_p()
        invoke(lib.git_reference_peel, byref(peeled), self._native, target_type)
        return Object._from_native(peeled)
