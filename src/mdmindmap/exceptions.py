#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the mdmindmap library.

This module defines the exception classes raised by the markdown-to-tree
pipeline. Only a handful of conditions are fatal; everything else in the
pipeline degrades gracefully and returns safe defaults.

Exception Hierarchy
-------------------
- MindmapError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidArgumentError (None markdown, bad payloads, unknown options)

  - ConfigurationError (node class unavailable in the host environment)

  - InvalidNodeError (non-node objects attached to the tree)

"""

from typing import Any


class MindmapError(Exception):
    """Base exception class for all mdmindmap-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(MindmapError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    Attributes
    ----------
    parameter_name : str or None
        The name of the problematic parameter
    parameter_value : any
        The value that caused the error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidArgumentError(ValidationError):
    """Exception raised when an entry point receives an unusable argument.

    The canonical case is ``parse_markdown_to_tree(None)``: an empty string is
    a valid document, a missing document is not.

    Parameters
    ----------
    message : str
        Description of the problem
    parameter_name : str, optional
        Name of the offending argument
    parameter_value : any, optional
        The value that was rejected
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid argument error."""
        super().__init__(
            message,
            parameter_name=parameter_name,
            parameter_value=parameter_value,
            original_error=original_error,
        )


class ConfigurationError(MindmapError):
    """Exception raised when the tree node class is not usable.

    The tree builder constructs every node through a configurable node class.
    When that class is missing or is not a ``TreeNode`` subclass, no tree can
    be built and this error is raised before any input is read.

    Parameters
    ----------
    message : str
        Description of the configuration problem
    node_class : any, optional
        The node class that was supplied
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, node_class: Any = None, original_error: Exception | None = None):
        """Initialize the configuration error."""
        super().__init__(message, original_error=original_error)
        self.node_class = node_class


class InvalidNodeError(MindmapError, TypeError):
    """Exception raised when a non-node object is attached to a tree.

    Parameters
    ----------
    received_type : type
        The type of the rejected object
    message : str, optional
        Custom error message. If not provided, generates a default message

    """

    def __init__(self, received_type: type, message: str | None = None):
        """Initialize the invalid node error."""
        if message is None:
            message = f"Child must be a TreeNode instance, got '{received_type.__name__}'"
        super().__init__(message)
        self.received_type = received_type


__all__ = [
    "MindmapError",
    "ValidationError",
    "InvalidArgumentError",
    "ConfigurationError",
    "InvalidNodeError",
]
