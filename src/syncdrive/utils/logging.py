"""Logging configuration and utilities."""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

import structlog
import colorlog
from structlog.typing import Processor

from ..config.settings import get_settings


# Handlers installed by this module, replaced on every setup_logging() call
_console_handler: Optional[logging.Handler] = None
_file_handler: Optional[logging.Handler] = None


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    log_file: Optional[str] = None
) -> None:
    """Set up logging configuration.
    
    structlog renders each event once, as JSON or as plain key=value text.
    The console handler colours the rendered line by level; the file handler
    writes it unchanged, one event per line.
    """
    settings = get_settings()
    
    level = log_level or settings.logging.level
    format_type = log_format or settings.logging.format
    file_path = log_file or settings.logging.file_path
    
    logging.basicConfig(level=getattr(logging, level.upper()))
    logging.getLogger().setLevel(getattr(logging, level.upper()))
    
    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]
    
    if format_type == "json":
        processors.append(structlog.processors.JSONRenderer(ensure_ascii=False))
    else:
        # Colour comes from colorlog on the console; the file stays plain text
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
    
    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    
    setup_file_logging(file_path, level)
    setup_console_logging(level)


def _replace_handler(old: Optional[logging.Handler], new: Optional[logging.Handler]) -> None:
    root = logging.getLogger()
    
    if old is not None:
        root.removeHandler(old)
        old.close()
    
    if new is not None:
        root.addHandler(new)


def setup_file_logging(file_path: Optional[str], level: str) -> None:
    """Set up file logging with rotation, or remove it when no path is given."""
    global _file_handler
    
    file_handler = None
    if file_path:
        log_file = Path(file_path)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        
        file_handler = logging.handlers.RotatingFileHandler(
            file_path,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding="utf-8"
        )
        file_handler.setLevel(getattr(logging, level.upper()))
        
        # Records arrive already rendered by structlog
        file_handler.setFormatter(logging.Formatter("%(message)s"))
    
    _replace_handler(_file_handler, file_handler)
    _file_handler = file_handler


def setup_console_logging(level: str) -> None:
    """Set up colored console logging."""
    global _console_handler
    
    console_handler = colorlog.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, level.upper()))
    
    console_formatter = colorlog.ColoredFormatter(
        "%(log_color)s%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        reset=True,
        log_colors={
            'DEBUG': 'cyan',
            'INFO': 'green',
            'WARNING': 'yellow',
            'ERROR': 'red',
            'CRITICAL': 'red,bg_white',
        }
    )
    console_handler.setFormatter(console_formatter)
    
    _replace_handler(_console_handler, console_handler)
    _console_handler = console_handler


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


class LoggerMixin:
    """Mixin class to add logging capabilities to any class."""
    
    @property
    def logger(self) -> structlog.stdlib.BoundLogger:
        """Get logger instance for this class."""
        return get_logger(self.__class__.__name__)


def log_execution_time(func):
    """Decorator to log function execution time."""
    import time
    import functools
    
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger(func.__qualname__)
        start_time = time.time()
        
        try:
            result = func(*args, **kwargs)
            execution_time = time.time() - start_time
            logger.debug(
                "Function executed successfully",
                function=func.__qualname__,
                execution_time=f"{execution_time:.4f}s"
            )
            return result
        except Exception as e:
            execution_time = time.time() - start_time
            logger.error(
                "Function execution failed",
                function=func.__qualname__,
                execution_time=f"{execution_time:.4f}s",
                error=str(e)
            )
            raise
    
    return wrapper
