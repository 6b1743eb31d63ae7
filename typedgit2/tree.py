"""Trees"""

from typing import Iterator, NamedTuple

from ._wrappers.native_adaptation import git_filemode_t, git_object_t, git_tree_p, lib
from .object_ import Object
from .oid import Oid
from .wrapper import decode_path, encode_path


class TreeEntry(NamedTuple):
    name: str
    id: Oid
    filemode: git_filemode_t

    @classmethod
    def _from_native_ptr(cls, native) -> "TreeEntry":
        return cls(
            name=decode_path(lib.git_tree_entry_name(native)),
            id=Oid._from_native_ptr(lib.git_tree_entry_id(native)),
            filemode=lib.git_tree_entry_filemode(native),
        )


class Tree(Object):
    """Represent a git tree.

    Entries are copied out, they stay valid after the tree is deinitialized.
    """

    _libgit2_native_finalizer = "git_tree_free"

    _object_type = git_tree_p
    _object_t = git_object_t.TREE

    def __len__(self) -> int:
        return lib.git_tree_entrycount(self._native)

    def __iter__(self) -> Iterator[TreeEntry]:
        for index in range(len(self)):
            yield TreeEntry._from_native_ptr(lib.git_tree_entry_byindex(self._native, index))

    def __contains__(self, name: str) -> bool:
        return bool(lib.git_tree_entry_byname(self._native, encode_path(name)))

    def __getitem__(self, name: str) -> TreeEntry:
        native = lib.git_tree_entry_byname(self._native, encode_path(name))
        if not native:
            raise KeyError(name)
        return TreeEntry._from_native_ptr(native)
