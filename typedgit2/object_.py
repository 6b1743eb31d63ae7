"""Git objects"""

from ctypes import byref, cast
from typing import TYPE_CHECKING, Optional, Type, Union

from ._wrappers.native_adaptation import git_object_p, git_object_t, lib
from .abi import to_native
from .buf import Buf
from .describe import DescribeOptions, DescribeResult
from .oid import Oid, OidTypes
from .wrapper import NativeHandle, invoke

if TYPE_CHECKING:
    from .repository import Repository


class Object(NativeHandle):
    """Represent a generic git object.

    Objects are cached by the repository they’re looked up from: deinit()
    must always be called, but whether and when libgit2 releases the memory
    is up to its cache. Objects must not be used after their repository is
    deinitialized.
    """

    _libgit2_native_finalizer = "git_object_free"

    _object_type: type = git_object_p
    _object_t: git_object_t = git_object_t.ANY
    _object_t_to_cls: dict[git_object_t, type["Object"]] = {}

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        if cls._object_t in cls._object_t_to_cls:  # pragma: no cover
            raise TypeError(f"Object type already registered: {cls._object_t.name}")
        cls._object_t_to_cls[cls._object_t] = cls

    @classmethod
    def _from_native(cls, native) -> "Object":
        object_t = lib.git_object_type(cast(native, git_object_p))
        concrete_cls = cls._object_t_to_cls.get(object_t, Object)
        return super(Object, concrete_cls)._from_native(cast(native, concrete_cls._object_type))

    @classmethod
    def lookup(cls, repo: "Repository", oid: OidTypes) -> "Object":
        """Look up an object of this class’s type, any type for Object."""
        native = git_object_p()
        oid = Oid._from_oid(oid)
        invoke(lib.git_object_lookup, byref(native), repo._native, to_native(oid), cls._object_t)
        return cls._from_native(native)

    @property
    def _object_native(self):
        return cast(self._native, git_object_p)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(oid={self.id.hex!r})"

    @property
    def id(self) -> Oid:
        return Oid._from_native_ptr(lib.git_object_id(self._object_native))

    @property
    def type(self) -> git_object_t:
        return lib.git_object_type(self._object_native)

    @property
    def short_id(self) -> str:
        buf = Buf()
        invoke(lib.git_object_short_id, to_native(buf), self._object_native)
        return buf.consume("ascii")

    def peel(self, target_type: Optional[Union[git_object_t, Type["Object"]]] = None) -> "Object":
        """Peel the object until it has target_type.

        The result is a new handle and needs its own deinit().
        """
        if not target_type:
            target_type = git_object_t.ANY
        elif isinstance(target_type, type) and issubclass(target_type, Object):
            target_type = target_type._object_t

        peeled = git_object_p()
        invoke(lib.git_object_peel, byref(peeled), self._object_native, target_type)
        return Object._from_native(peeled)

    def describe(self, options: Optional[DescribeOptions] = None) -> DescribeResult:
        """Describe a commit-ish in terms of the references reachable from it."""
        return DescribeResult.of_object(self._object_native, options)
