"""Centralized Logging Management for the TripIt Client

Handles log configuration, formatting, and output management.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional


ROOT_LOGGER_NAME = "tripit"


class ColoredFormatter(logging.Formatter):
    """Custom formatter that adds colors to console output."""
    
    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'        # Reset
    }
    
    def format(self, record):
        """Format log record with colors for console output."""
        log_message = super().format(record)
        return f"{self.COLORS.get(record.levelname, '')}{log_message}{self.COLORS['RESET']}"


class LoggingManager:
    """Centralized logging configuration for the ``tripit`` logger tree."""
    
    _instance: Optional['LoggingManager'] = None
    _initialized: bool = False
    
    def __new__(cls) -> 'LoggingManager':
        """Singleton pattern implementation."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance
    
    def __init__(self):
        """Initialize logging manager (only once)."""
        if self._initialized:
            return
        
        self.console_handler: Optional[logging.Handler] = None
        self.file_handler: Optional[logging.Handler] = None
        self._initialized = True
    
    def configure(self, level: str = "INFO", log_to_console: bool = True,
                  file_path: Optional[str] = None, max_bytes: int = 10 * 1024 * 1024,
                  backup_count: int = 5):
        """Configure handlers on the package logger.
        
        Args:
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_to_console: Whether to attach a colored stdout handler
            file_path: Optional path for a rotating log file
            max_bytes: Rotation size for the log file
            backup_count: Number of rotated files to keep
        """
        numeric_level = self._to_level(level)
        package_logger = logging.getLogger(ROOT_LOGGER_NAME)
        package_logger.setLevel(numeric_level)
        
        # Dropping handlers installed by a previous configure() call
        for handler in (self.console_handler, self.file_handler):
            if handler is not None:
                package_logger.removeHandler(handler)
                handler.close()
        self.console_handler = None
        self.file_handler = None
        
        if log_to_console:
            self.console_handler = logging.StreamHandler(sys.stdout)
            self.console_handler.setLevel(numeric_level)
            self.console_handler.setFormatter(ColoredFormatter(
                '%(asctime)s | %(name)s | %(levelname)s | %(message)s',
                datefmt='%H:%M:%S'
            ))
            package_logger.addHandler(self.console_handler)
        
        if file_path:
            log_file = Path(file_path)
            log_file.parent.mkdir(parents=True, exist_ok=True)
            self.file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=max_bytes,
                backupCount=backup_count
            )
            self.file_handler.setLevel(logging.DEBUG)
            self.file_handler.setFormatter(logging.Formatter(
                '%(asctime)s | %(name)s | %(levelname)s | %(funcName)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            package_logger.addHandler(self.file_handler)
    
    def configure_from(self, logging_config) -> None:
        """Configure from a ``LoggingConfig`` section."""
        self.configure(
            level=logging_config.level,
            log_to_console=logging_config.log_to_console,
            file_path=logging_config.file_path,
            backup_count=logging_config.backup_count
        )
    
    def set_log_level(self, level: str):
        """Set the logging level for the package logger and its console handler."""
        numeric_level = self._to_level(level)
        logging.getLogger(ROOT_LOGGER_NAME).setLevel(numeric_level)
        if self.console_handler is not None:
            self.console_handler.setLevel(numeric_level)
    
    @staticmethod
    def _to_level(level: str) -> int:
        numeric_level = getattr(logging, level.upper(), None)
        if not isinstance(numeric_level, int):
            raise ValueError(f'Invalid log level: {level}')
        return numeric_level
