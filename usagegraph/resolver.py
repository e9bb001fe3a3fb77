"""Resolve relative import specifiers to files present in a repo map."""

from __future__ import annotations

import posixpath
from typing import Container, Optional, Sequence

DEFAULT_EXTENSIONS: tuple[str, ...] = (".js", ".ts", ".jsx", ".tsx", ".mjs", ".cjs")


def is_relative_specifier(specifier: str) -> bool:
    """Return True for specifiers that point inside the repository."""
    return specifier.startswith(".") or specifier.startswith("/")


def resolve_import_source(
    importer_path: str,
    specifier: str,
    files: Container[str],
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
) -> Optional[str]:
    """Map ``specifier`` imported from ``importer_path`` to a repo map key.

    Bare specifiers (packages) are never resolved. Relative ones are joined
    onto the importer's directory and tried as an exact key, then with each
    extension appended, then as a directory holding ``index<ext>``.
    """
    if not specifier or not is_relative_specifier(specifier):
        return None

    # Plain concatenation: a leading "/" stays relative to the importer's directory.
    importer_dir = posixpath.dirname(importer_path.replace("\\", "/")) or "."
    relative = specifier.replace("\\", "/")
    candidate = posixpath.normpath(f"{importer_dir}/{relative}")

    if candidate in files:
        return candidate

    for ext in extensions:
        with_ext = candidate + ext
        if with_ext in files:
            return with_ext

    for ext in extensions:
        index_path = f"{candidate}/index{ext}"
        if index_path in files:
            return index_path

    return None


def module_stem(path: str) -> str:
    """Return the base name of ``path`` with its last extension removed."""
    basename = posixpath.basename(path.replace("\\", "/"))
    stem, dot, _ = basename.rpartition(".")
    return stem if dot and stem else basename


__all__ = [
    "DEFAULT_EXTENSIONS",
    "is_relative_specifier",
    "module_stem",
    "resolve_import_source",
]
