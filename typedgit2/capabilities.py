"""Operations which only newer libgit2 versions offer

Each capability is a mixin class. Repository inherits from those the loaded
libgit2 supports, so calling an unsupported operation fails with an
AttributeError instead of a missing symbol deep down. Use
Repository.supports() to check beforehand.
"""

from collections.abc import Sequence
from ctypes import byref, c_char_p, c_void_p
from os import PathLike
from typing import Any, Callable, Optional, Union

from ._wrappers.native_adaptation import git_attr_foreach_cb, lib, version_tuple
from .abi import to_native
from .attr import Attribute, AttributeOptions
from .buf import Buf
from .callbacks import NO_USER_DATA, invoke_foreach, make_trampoline, to_text
from .wrapper import decode_text, encode_path, encode_text, invoke

AttributeCallback = Callable[..., Optional[int]]


class ExtendedAttributes:
    """Attribute lookups with options, e.g. reading .gitattributes from a commit."""

    min_version = (1, 2)

    def attribute_ext(
        self,
        path: Union[str, PathLike],
        name: str,
        options: Optional[AttributeOptions] = None,
    ) -> Attribute:
        native_options = (options or AttributeOptions())._to_native()
        value = c_void_p()
        invoke(
            lib.git_attr_get_ext,
            byref(value),
            self._native,
            byref(native_options),
            encode_path(path),
            encode_text(name),
        )
        return Attribute._from_native(value.value)

    def attribute_many_ext(
        self,
        path: Union[str, PathLike],
        names: Sequence[str],
        options: Optional[AttributeOptions] = None,
    ) -> list[Attribute]:
        if not names:
            return []

        native_options = (options or AttributeOptions())._to_native()
        native_names = (c_char_p * len(names))(*(encode_text(name) for name in names))
        values = (c_void_p * len(names))()
        invoke(
            lib.git_attr_get_many_ext,
            values,
            self._native,
            byref(native_options),
            encode_path(path),
            len(names),
            native_names,
        )
        return [Attribute._from_native(value) for value in values]

    def _attribute_foreach_ext(
        self,
        path: Union[str, PathLike],
        callback: AttributeCallback,
        user_data: Any,
        options: Optional[AttributeOptions],
    ) -> int:
        native_options = (options or AttributeOptions())._to_native()
        trampoline = make_trampoline(
            git_attr_foreach_cb, callback, (to_text, Attribute._from_native), user_data
        )
        return invoke_foreach(
            lib.git_attr_foreach_ext,
            trampoline,
            self._native,
            byref(native_options),
            encode_path(path),
        )

    def attribute_foreach_ext(
        self,
        path: Union[str, PathLike],
        callback: AttributeCallback,
        options: Optional[AttributeOptions] = None,
    ) -> int:
        """Call callback(name, attribute) for every attribute set on path."""
        return self._attribute_foreach_ext(path, callback, NO_USER_DATA, options)

    def attribute_foreach_ext_with_user_data(
        self,
        path: Union[str, PathLike],
        user_data: Any,
        callback: AttributeCallback,
        options: Optional[AttributeOptions] = None,
    ) -> int:
        return self._attribute_foreach_ext(path, callback, user_data, options)


class UpstreamMerge:
    min_version = (1, 2)

    def branch_upstream_merge(self, refname: str) -> str:
        """The merge configuration of a local branch’s upstream, e.g. refs/heads/main."""
        buf = Buf()
        invoke(lib.git_branch_upstream_merge, to_native(buf), self._native, encode_path(refname))
        return decode_text(buf.consume_bytes())


ALL_CAPABILITIES = (ExtendedAttributes, UpstreamMerge)

CAPABILITIES = tuple(
    capability for capability in ALL_CAPABILITIES if version_tuple >= capability.min_version
)
