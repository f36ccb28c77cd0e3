#!/usr/bin/env python3
# -*-coding: utf-8-*-
"""Extension Sorter security package: path sanitizing and containment checks."""

from .security_utils import (
    SecurityError,
    InvalidPathError,
    is_safe_entry_name,
    is_within_directory,
    sanitize_path,
    validate_file_operation,
)

__all__ = [
    'SecurityError',
    'InvalidPathError',
    'is_safe_entry_name',
    'is_within_directory',
    'sanitize_path',
    'validate_file_operation',
]
