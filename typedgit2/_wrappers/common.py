"""Helpers for loading shared libraries and declaring their functions"""

import logging
import re
from collections.abc import Iterable, Sequence
from ctypes import CDLL
from ctypes.util import find_library
from typing import Optional
from warnings import warn

log = logging.getLogger(__name__)


class LibError(Exception):
    pass


class LibNotFoundError(LibError):
    pass


class LibVersionError(LibError):
    pass


class LibSymbolNotFoundError(LibError, AttributeError):
    pass


class LibWarning(UserWarning):
    pass


class LibVersionWarning(LibWarning):
    pass


class IntEnumMixin:
    @classmethod
    def from_param(cls, obj):
        return int(obj)


def version_str(version_tuple: Iterable[int]) -> str:
    return ".".join(str(num) for num in version_tuple)


def _load_known(name: str, known_versions: Sequence[tuple[int]]) -> Optional[tuple]:
    # Newest known version wins.
    for version_tuple in reversed(known_versions):
        version = version_str(version_tuple)
        soname = f"lib{name}.so.{version}"
        try:
            lib = CDLL(soname)
        except OSError:
            continue
        return lib, soname, version, version_tuple


def _check_version(
    name: str,
    version: str,
    version_tuple: tuple[int],
    known_versions: Sequence[tuple[int]],
    load_unknown: bool,
) -> None:
    lowest, highest = known_versions[0], known_versions[-1]

    if version_tuple < lowest:
        raise LibVersionError(
            f"Version {version} of lib{name} too low (must be ≥ {version_str(lowest)})"
        )

    if version_tuple[: len(highest)] > highest:
        msg = f"Version {version} of lib{name} is unknown (latest known is {version_str(highest)})."
        if not load_unknown:
            raise LibVersionError(msg)
        warn(msg, LibVersionWarning)


def load_lib(
    name: str, *, known_versions: Optional[Sequence[tuple[int]]] = None, load_unknown: bool = True
) -> (CDLL, str, str, tuple[int]):
    """Load a shared library, preferring known versions

    :param name: Name of the library (without "lib")
    :param known_versions: Sequence of version tuples which should be loaded
        preferentially, ordered from old to new
    :param load_unknown: If unknown newer versions than the known should be
        loaded

    :return: Tuple of: library object, soname, version string and tuple
    """
    if known_versions and (found := _load_known(name, known_versions)):
        log.debug("Loaded %s by its known soname", found[1])
        return found

    soname = find_library(name)
    if not soname:
        raise LibNotFoundError(f"lib{name} not found")

    if not (match := re.match(rf"lib{name}\.so\.(?P<version>\d+(?:\.\d+)*)", soname)):
        raise LibVersionError(f"Can’t parse lib{name} version: {soname}")

    version = match.group("version")
    version_tuple = tuple(int(num) for num in version.split("."))

    if known_versions:
        _check_version(name, version, version_tuple, known_versions, load_unknown)

    log.debug("Loading %s found on the library search path", soname)
    return CDLL(soname), soname, version, version_tuple


def install_func_decls(lib: CDLL, decls: dict[str, tuple], *, optional: bool = False) -> set[str]:
    """Set result and argument types of native functions

    :param lib: The loaded library
    :param decls: Mapping of function names to (restype, argtypes) tuples
    :param optional: Whether to skip functions missing from the library
        instead of failing

    :return: The names of the functions which were installed
    """
    installed = set()

    for func_name, (restype, argtypes) in decls.items():
        try:
            func = getattr(lib, func_name)
        except AttributeError as exc:
            if not optional:
                raise LibSymbolNotFoundError(f"Symbol {func_name} not found") from exc
            log.debug("Optional symbol %s not available", func_name)
            continue
        func.restype = restype
        func.argtypes = argtypes
        installed.add(func_name)

    return installed
