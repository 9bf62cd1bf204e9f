"""Utility functions and helpers"""

from .validation import ValidationEngine
from .config_manager import ConfigManager, get_default_config_manager
from .error_handler import ErrorHandler, ErrorCategory, ErrorSeverity, handle_load_error, handle_analysis_error

__all__ = [
    'ValidationEngine',
    'ConfigManager',
    'get_default_config_manager',
    'ErrorHandler',
    'ErrorCategory',
    'ErrorSeverity',
    'handle_load_error',
    'handle_analysis_error',
]
