import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = '%(asctime)s.%(msecs)03d [%(levelname)-8s] %(name)s:%(lineno)d - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

def configure_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    component: str = "multiwallet",
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
    enable_console: bool = True
) -> logging.Logger:
    """
    Configure logging for a component
    
    Args:
        level: Logging level name
        log_file: Path to a rotating log file, or None for console only
        component: Name of the logger to configure
        max_bytes: Size at which the log file rotates
        backup_count: Number of rotated files to keep
        enable_console: Whether to log to stdout
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    
    logger = logging.getLogger(component)
    logger.setLevel(log_level)
    
    # Clear existing handlers
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    
    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)
    
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    
    logging.captureWarnings(True)
    
    logger.info(f"Logging configured - Level: {level}, File: {log_file}")
    return logger
