"""
Logging configuration for the project.

This module provides a centralized configuration for the logging system.
It defines different log levels, formatters, and handlers for the numerical
core (model, Lagrange point solver, integrator, field sampler).

Usage:
    Import this module and call setup_logging() early in your application
    to configure the logging system:

    ```python
    from crtbp.logging_config import setup_logging
    setup_logging()
    ```
"""

import logging
import logging.config
from pathlib import Path


def setup_logging(default_level=logging.INFO, log_dir="logs", log_to_file=True):
    """
    Setup logging configuration for the project.

    Parameters
    ----------
    default_level : int, optional
        Default logging level. Default is logging.INFO.
    log_dir : str, optional
        Directory to store log files. Default is "logs".
    log_to_file : bool, optional
        Whether to attach the rotating file handlers. Default is True.

    Returns
    -------
    None
        The function configures the logging system directly.
    """
    handlers = {
        'console': {
            'class': 'logging.StreamHandler',
            'level': 'INFO',
            'formatter': 'standard',
            'stream': 'ext://sys.stdout',
        },
    }
    root_handlers = ['console']
    core_handlers = ['console']

    if log_to_file:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        handlers['file'] = {
            'class': 'logging.handlers.RotatingFileHandler',
            'level': 'DEBUG',
            'formatter': 'detailed',
            'filename': str(log_path / 'crtbp.log'),
            'maxBytes': 10485760,  # 10 MB
            'backupCount': 5,
            'encoding': 'utf8'
        }
        handlers['error_file'] = {
            'class': 'logging.handlers.RotatingFileHandler',
            'level': 'ERROR',
            'formatter': 'detailed',
            'filename': str(log_path / 'error.log'),
            'maxBytes': 10485760,  # 10 MB
            'backupCount': 5,
            'encoding': 'utf8'
        }
        root_handlers += ['file', 'error_file']
        core_handlers += ['file']

    config = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'standard': {
                'format': '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
                'datefmt': '%Y-%m-%d %H:%M:%S'
            },
            'detailed': {
                'format': '%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d): %(message)s',
                'datefmt': '%Y-%m-%d %H:%M:%S'
            },
        },
        'handlers': handlers,
        'loggers': {
            '': {  # root logger
                'handlers': root_handlers,
                'level': default_level,
                'propagate': True
            },
            'crtbp.algorithms': {
                'handlers': core_handlers,
                'level': 'DEBUG',
                'propagate': False
            },
            'crtbp.models': {
                'handlers': core_handlers,
                'level': 'INFO',
                'propagate': False
            },
            'crtbp.utils': {
                'handlers': core_handlers,
                'level': 'INFO',
                'propagate': False
            },
        }
    }

    # Apply the configuration
    logging.config.dictConfig(config)

    logger = logging.getLogger(__name__)
    logger.debug("Logging configuration applied")


if __name__ == "__main__":
    setup_logging()
