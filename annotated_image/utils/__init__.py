"""
Utility functions and helpers.
"""
from .paths import get_app_data_dir, get_log_dir

__all__ = [
    'get_app_data_dir',
    'get_log_dir',
]
