import os
import logging
from pathlib import Path

import psutil

logger = logging.getLogger(__name__)

class PIDManager:
    """PID file management"""
    
    @staticmethod
    def setup_pid_file(pidfile: str) -> str:
        """Write our PID, refusing to start over a live process"""
        pid_path = Path(pidfile)
        pid_path.parent.mkdir(parents=True, exist_ok=True)
        
        if pid_path.exists():
            try:
                existing_pid = int(pid_path.read_text().strip())
            except ValueError:
                existing_pid = None
            
            if existing_pid and existing_pid != os.getpid() and psutil.pid_exists(existing_pid):
                raise RuntimeError(f"Process already running with PID {existing_pid} ({pid_path})")
            
            logger.warning(f"Removing stale PID file {pid_path}")
            pid_path.unlink()
        
        pid_path.write_text(str(os.getpid()))
        return str(pid_path)
    
    @staticmethod
    def remove_pid_file(pidfile: str) -> bool:
        """Remove the PID file if it is ours"""
        pid_path = Path(pidfile)
        try:
            if pid_path.exists() and pid_path.read_text().strip() == str(os.getpid()):
                pid_path.unlink()
                return True
        except OSError as e:
            logger.error(f"Failed to remove PID file {pid_path}: {e}")
        return False

def setup_pid_file(pidfile: str) -> str:
    """Convenience wrapper for PID file setup"""
    return PIDManager.setup_pid_file(pidfile)

def remove_pid_file(pidfile: str) -> bool:
    """Convenience wrapper for PID file removal"""
    return PIDManager.remove_pid_file(pidfile)
