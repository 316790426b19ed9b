"""Base exceptions for neo-loaders.

This module defines the base exception hierarchy for the neo-loaders library.
All exceptions inherit from NeoLoadersError and carry an error code and
structured details for logging.
"""

from typing import Any, Dict, Optional


class NeoLoadersError(Exception):
    """Base exception for all neo-loaders errors.
    
    All exceptions in the neo-loaders library inherit from this base class
    and include structured error information for better debugging.
    """
    
    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        *args,
        **kwargs
    ):
        super().__init__(message, *args, **kwargs)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
