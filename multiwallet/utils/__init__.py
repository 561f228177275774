from .logging import configure_logging
from .pidfile import setup_pid_file, remove_pid_file

__all__ = [
    'configure_logging',
    'setup_pid_file',
    'remove_pid_file'
]
