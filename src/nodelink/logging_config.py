"""
Centralized logging configuration.

``setup_logging`` configures the root logger once per process with:
- Console output on stdout
- Optional file output to ``$NODELINK_LOG_DIR/{service_name}.log``
- Fresh log file on each start unless ``LOG_APPEND=1``
- User-friendly mode that only shows warnings and errors, without timestamps
"""

import logging
import logging.handlers
import sys
import threading
from pathlib import Path
from typing import Optional

from .config import env_bool, env_str

# Thread-safe lock for logging configuration
_config_lock = threading.Lock()
_MODULE_LOGGER = logging.getLogger(__name__)

_TECHNICAL_FORMAT = "%(asctime)s.%(msecs)03d - %(name)s - %(levelname)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_NOISY_THIRD_PARTIES = ("asyncio", "websockets", "websockets.client")


def _should_skip_logging_configuration(root_logger: logging.Logger, service_name: Optional[str]) -> bool:
    if not root_logger.handlers:
        return False

    has_console = any(
        isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler) for handler in root_logger.handlers
    )
    if not service_name or _log_directory() is None:
        has_file = True
    else:
        has_file = any(isinstance(handler, logging.FileHandler) for handler in root_logger.handlers)
    return has_console and has_file


def _close_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        try:
            handler.close()
        except OSError as e:  # Best-effort cleanup operation
            _MODULE_LOGGER.debug("Handler close failed for logger '%s': %s", logger.name, e)
    logger.handlers = []


def _log_directory() -> Optional[Path]:
    configured = env_str("NODELINK_LOG_DIR")
    if not configured:
        return None
    return Path(configured).expanduser()


def _build_console_handler(user_friendly: bool) -> logging.Handler:
    if user_friendly:
        formatter = logging.Formatter("%(message)s")
    else:
        formatter = logging.Formatter(_TECHNICAL_FORMAT, _DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(logging.WARNING if user_friendly else logging.DEBUG)
    return console_handler


def _configure_file_handler(service_name: Optional[str]) -> Optional[logging.Handler]:
    logs_dir = _log_directory()
    if not service_name or logs_dir is None:
        return None

    logs_dir.mkdir(parents=True, exist_ok=True)
    log_path = logs_dir / f"{service_name}.log"
    file_mode = "a" if env_bool("LOG_APPEND", or_value=False) else "w"

    file_handler = logging.handlers.WatchedFileHandler(log_path, mode=file_mode)
    file_handler.setFormatter(logging.Formatter(_TECHNICAL_FORMAT, _DATE_FORMAT))
    file_handler.setLevel(logging.INFO)
    return file_handler


def _suppress_noisy_third_parties() -> None:
    for name in _NOISY_THIRD_PARTIES:
        logging.getLogger(name).setLevel(logging.WARNING)


def setup_logging(service_name: Optional[str] = None, user_friendly: bool = False, level: int = logging.INFO) -> None:
    """Configure logging for the application"""

    with _config_lock:
        root_logger = logging.getLogger()

        if _should_skip_logging_configuration(root_logger, service_name):
            return

        _close_handlers(root_logger)
        root_logger.addHandler(_build_console_handler(user_friendly))

        file_handler = _configure_file_handler(service_name)
        if file_handler:
            root_logger.addHandler(file_handler)

        root_logger.setLevel(level)
        _suppress_noisy_third_parties()
