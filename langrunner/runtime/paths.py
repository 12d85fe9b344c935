# Copyright (c) Meta Platforms, Inc. and affiliates.
# Modifications copyright (c) 2025 Logan Martel.
# Adapted from https://github.com/meta-pytorch/KernelAgent (Apache-2.0).

"""Pure string helpers for path-like values (local paths and URIs)."""

from __future__ import annotations

import posixpath

from typing import Optional, Sequence

from langrunner.constants import (
    COMPOUND_PATH_SEPARATOR,
    CONTENT_SCHEME,
    FILE_SCHEME,
    REMOTE_SCHEMES,
)


def extname(filename: Optional[str]) -> str:
    """Extension after the last dot, lowercased, without the dot."""

    if not filename:
        return ""
    base = posixpath.basename(filename)
    dot = base.rfind(".")
    if dot == -1:
        return ""
    return base[dot + 1 :].lower()


def stem(filename: str) -> str:
    """Filename without its final extension."""

    dot = filename.rfind(".")
    if dot <= 0 or "/" in filename[dot:]:
        return filename
    return filename[:dot]


def dirname(path: str) -> str:
    return posixpath.dirname(path.rstrip("/")) or "/"


def join(*parts: str) -> str:
    return posixpath.join(*parts)


def strip_file_scheme(uri: str) -> str:
    if uri.startswith(FILE_SCHEME):
        return uri[len(FILE_SCHEME) :]
    return uri


def is_local_uri(uri: Optional[str]) -> bool:
    """True when ``uri`` addresses something the toolchain can read."""

    if not uri:
        return False
    if uri.startswith(CONTENT_SCHEME) or COMPOUND_PATH_SEPARATOR in uri:
        return False
    return not uri.startswith(REMOTE_SCHEMES)


def is_within(path: str, prefixes: Sequence[str]) -> bool:
    return any(prefix and prefix in path for prefix in prefixes)


__all__ = [
    "dirname",
    "extname",
    "is_local_uri",
    "is_within",
    "join",
    "stem",
    "strip_file_scheme",
]
