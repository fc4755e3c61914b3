"""
Per-user directories for stored block properties and logs.
"""
import os
import sys
from pathlib import Path

from annotated_image.config import APP_NAME


def get_app_data_dir(app_name: str = APP_NAME) -> Path:
    """
    Get the application data directory for storing user data.

    Args:
        app_name: Name of the application

    Returns:
        Path to the app data directory
    """
    if os.name == 'nt':  # Windows
        base_dir = os.environ.get('APPDATA', os.path.expanduser('~'))
    elif sys.platform == 'darwin':  # macOS
        base_dir = os.path.expanduser('~/Library/Application Support')
    else:  # Linux and others
        base_dir = os.path.expanduser('~/.local/share')

    app_dir = Path(base_dir) / app_name
    app_dir.mkdir(parents=True, exist_ok=True)

    return app_dir


def get_log_dir(app_name: str = APP_NAME) -> Path:
    """
    Get the directory for log files.

    Args:
        app_name: Name of the application

    Returns:
        Path to the log directory
    """
    if sys.platform == 'darwin':
        log_dir = Path.home() / "Library" / "Logs" / app_name
    else:
        log_dir = get_app_data_dir(app_name) / "logs"

    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir
