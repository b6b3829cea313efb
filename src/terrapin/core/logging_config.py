"""
Terrapin Logging Configuration

Terrapin logs how many layers each selection and completeness filter keeps.
Nothing is printed unless the application configures the ``terrapin`` logger,
either through standard logging or with setup_logging below.
"""

import logging
import sys
import warnings
from pathlib import Path
from typing import Optional, Union

from .exceptions import EmptyResultWarning, NoSelectionWarning

PACKAGE_LOGGER = 'terrapin'

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Warning categories logged under terrapin.warnings when capture_warnings is set
_CAPTURED_CATEGORIES = (NoSelectionWarning, EmptyResultWarning)


def _coerce_level(level: Union[int, str], fallback: int) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), fallback)
    return level


def _capture_terrapin_warnings() -> None:
    """Wrap warnings.showwarning so terrapin warnings are logged instead of shown."""
    if hasattr(warnings.showwarning, '_terrapin_wrapped'):
        return
    show = warnings.showwarning

    def showwarning(message, category, filename, lineno, file=None, line=None):
        if issubclass(category, _CAPTURED_CATEGORIES):
            logging.getLogger(f'{PACKAGE_LOGGER}.warnings').warning(
                '%s:%s: %s: %s', filename, lineno, category.__name__, message
            )
        else:
            show(message, category, filename, lineno, file, line)

    showwarning._terrapin_wrapped = show
    warnings.showwarning = showwarning


def _release_terrapin_warnings() -> None:
    """Put back the showwarning replaced by _capture_terrapin_warnings."""
    original = getattr(warnings.showwarning, '_terrapin_wrapped', None)
    if original is not None:
        warnings.showwarning = original


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    format_string: Optional[str] = None,
    date_format: Optional[str] = None,
    capture_warnings: bool = False
) -> logging.Logger:
    """
    Send terrapin log records to stdout and optionally a file.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        level: Logging level name or constant; INFO reports the layers kept
            by each call, DEBUG adds derived fields and reference sets
        log_file: Also write records to this file (parent directories are
            created)
        format_string: Record format, DEFAULT_FORMAT if omitted
        date_format: Timestamp format, DEFAULT_DATE_FORMAT if omitted
        capture_warnings: Log NoSelectionWarning and EmptyResultWarning under
            ``terrapin.warnings`` instead of showing them; other warnings are
            shown as before

    Returns:
        logging.Logger: The ``terrapin`` logger

    Examples:
        >>> from terrapin import setup_logging
        >>> setup_logging(level='DEBUG')
        >>> setup_logging(log_file='/path/to/terrapin.log', capture_warnings=True)
    """
    level = _coerce_level(level, logging.INFO)
    formatter = logging.Formatter(
        format_string or DEFAULT_FORMAT,
        datefmt=date_format or DEFAULT_DATE_FORMAT
    )

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    logger.handlers.clear()

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    if capture_warnings:
        _capture_terrapin_warnings()
    else:
        _release_terrapin_warnings()

    # Records stop at the terrapin handlers
    logger.propagate = False

    if log_file:
        logger.info("Logging to file: %s", log_file)
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Return a logger under the ``terrapin`` namespace.

    Args:
        name: Module name, with or without the ``terrapin.`` prefix

    Returns:
        logging.Logger: Logger instance
    """
    if name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + '.'):
        return logging.getLogger(name)
    return logging.getLogger(f'{PACKAGE_LOGGER}.{name}')


# Silent by default: NullHandler, warnings and errors only
_default_logger = logging.getLogger(PACKAGE_LOGGER)
if not _default_logger.handlers:
    _default_logger.addHandler(logging.NullHandler())
_default_logger.setLevel(logging.WARNING)


def set_log_level(level: Union[int, str], module: Optional[str] = None) -> None:
    """
    Change the logging level of terrapin, or of one of its modules.

    Args:
        level: Logging level name or constant
        module: Restrict the change to one module, e.g. "temporal.selector"

    Examples:
        >>> from terrapin import set_log_level
        >>> set_log_level('INFO')                         # layers kept per call
        >>> set_log_level('DEBUG', 'temporal.completeness')
    """
    level = _coerce_level(level, logging.WARNING)

    if module is not None:
        get_logger(module).setLevel(level)
        return

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)
