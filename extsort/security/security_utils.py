#!/usr/bin/env python3
# -*-coding: utf-8-*-
"""Extension Sorter - Path safety validation.

Keeps planned destinations inside the organized root and rejects entry names
that could address anything other than a direct child.
"""

import os
import logging
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)


class SecurityError(Exception):
    """Base class for safety-relevant errors."""
    pass


class InvalidPathError(SecurityError):
    """Error for invalid or unsafe paths."""
    pass


def sanitize_path(path: str) -> str:
    """Normalize a user-supplied path, keeping its original separator style."""
    if not path:
        return ""

    orig_sep = '/' if '/' in path and '\\' not in path else os.path.sep

    sanitized = os.path.normpath(os.path.expanduser(path))

    if orig_sep == '/' and os.path.sep == '\\':
        sanitized = sanitized.replace('\\', '/')

    return sanitized


def is_safe_entry_name(name: str) -> bool:
    """True if ``name`` denotes a single direct child of a directory."""
    if not name or name in (".", ".."):
        return False
    if "/" in name or "\\" in name or "\x00" in name:
        return False
    return True


def is_within_directory(path: Union[str, Path], base_dir: Union[str, Path]) -> bool:
    """Lexical containment check; symlinks are not followed."""
    target = Path(os.path.normpath(os.path.abspath(str(path))))
    base = Path(os.path.normpath(os.path.abspath(str(base_dir))))
    try:
        target.relative_to(base)
    except ValueError:
        return False
    return target != base


def validate_file_operation(file_path: Union[str, Path],
                            base_dir: Union[str, Path]) -> bool:
    """Validate that ``file_path`` lies strictly inside ``base_dir``.

    Raises:
        InvalidPathError: if the path escapes the base directory or its final
            component is not a plain entry name.
    """
    file_path = Path(file_path)

    if not is_safe_entry_name(file_path.name):
        logger.warning("Security warning: unsafe entry name: %r", file_path.name)
        raise InvalidPathError(f"Unsafe entry name: {file_path.name!r}")

    if not is_within_directory(file_path, base_dir):
        logger.warning("Security warning: file access outside base directory denied: %s", file_path)
        raise InvalidPathError(f"File access outside allowed directory: {file_path}")

    return True
