#!/usr/bin/env python3
# -*-coding: utf-8-*-
"""
Extension Sorter - Consolidated Exception Classes

This module contains all exception classes used in the project,
centralized in one place to avoid duplication and improve consistency.
"""

from datetime import datetime
from typing import Dict, Any, Optional


class BaseError(Exception):
    """Base class for all project-specific errors."""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.error_code = error_code or "ERROR"
        self.details = details or {}
        self.timestamp = datetime.now()

    def to_dict(self) -> Dict[str, Any]:
        """Converts the exception to a dictionary for structured logging."""
        return {
            'error_code': self.error_code,
            'message': str(self),
            'details': self.details,
            'timestamp': self.timestamp.isoformat()
        }


# =====================================================================================================
# Configuration-related errors
# =====================================================================================================

class ConfigurationError(BaseError):
    """Base class for configuration errors."""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 file_path: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        config_details = details or {}
        if file_path:
            config_details['file_path'] = str(file_path)
        super().__init__(message, error_code or "CONFIG_ERROR", config_details)


class ValidationError(ConfigurationError):
    """Raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 file_path: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        validation_details = details or {}
        if field_name:
            validation_details['field_name'] = field_name
        super().__init__(message, "VALIDATION_ERROR", file_path, validation_details)


# =====================================================================================================
# Scan errors (fatal: raised before any mutation)
# =====================================================================================================

class ScannerError(BaseError):
    """Raised when the scan root cannot be listed."""

    def __init__(self, message: str, root_path: Optional[str] = None,
                 error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        scanner_details = details or {}
        if root_path:
            scanner_details['root_path'] = str(root_path)
        super().__init__(message, error_code or "SCANNER_ERROR", scanner_details)
        self.root_path = root_path


class NotFoundError(ScannerError):
    """Raised when the scan root does not exist."""

    def __init__(self, message: str, root_path: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, root_path, "ROOT_NOT_FOUND", details)


class RootNotADirectoryError(ScannerError):
    """Raised when the scan root exists but is not a directory."""

    def __init__(self, message: str, root_path: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, root_path, "ROOT_NOT_A_DIRECTORY", details)


class ScanPermissionError(ScannerError):
    """Raised when the scan root cannot be read."""

    def __init__(self, message: str, root_path: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, root_path, "SCAN_PERMISSION_DENIED", details)


# =====================================================================================================
# File operation errors (recovered per entry / per key during execute)
# =====================================================================================================

class FileOperationError(BaseError):
    """Raised when file operation errors occur."""

    def __init__(self, message: str, file_path: Optional[str] = None,
                 operation: Optional[str] = None,
                 error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        file_details = details or {}
        if file_path:
            file_details['file_path'] = str(file_path)
        if operation:
            file_details['operation'] = operation
        super().__init__(message, error_code or "FILE_OP_ERROR", file_details)
        self.reason = message


class MoveFailure(FileOperationError):
    """A single entry could not be relocated."""

    def __init__(self, message: str, file_path: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, file_path, "move", "MOVE_FAILED", details)


class DirectoryCreateFailure(FileOperationError):
    """The bucket directory for a classification key could not be created."""

    def __init__(self, message: str, file_path: Optional[str] = None,
                 key: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        dir_details = details or {}
        if key:
            dir_details['key'] = key
        super().__init__(message, file_path, "mkdir", "DIR_CREATE_FAILED", dir_details)
        self.key = key
