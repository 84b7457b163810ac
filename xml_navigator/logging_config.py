from __future__ import annotations

"""Central logging configuration for XML Navigator.

Import and call :func:`setup_logging` at application start-up.
"""

import logging
import logging.config
import os

from xml_navigator.config import ConfigManager

__all__ = ["setup_logging"]


def setup_logging() -> None:
    """Configure logging for the application using configuration from YAML files."""
    log_dir = os.environ.get("XMLNAV_LOG_DIR", "logs")
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, "app.log")

    try:
        config_manager = ConfigManager()
        logging_config = dict(config_manager.get_logging_config())

        if logging_config and logging_config.get("version"):
            # Update the filename dynamically
            handlers = logging_config.get("handlers") or {}
            if "file" in handlers:
                handlers["file"] = dict(handlers["file"], filename=log_file)
                logging_config["handlers"] = handlers

            logging.config.dictConfig(logging_config)
            logging.getLogger(__name__).info("===== Logging initialised from config files =====")
        else:
            # No valid config found, use minimal fallback
            _setup_minimal_logging()
    except (ValueError, TypeError, AttributeError, ImportError) as exc:
        # dictConfig reports bad configurations with these
        print(f"Error loading logging config: {exc}")
        _setup_minimal_logging()

    _apply_debug_overrides()


def _setup_minimal_logging() -> None:
    """Set up minimal console-only logging when config is unavailable."""
    minimal_config = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'simple': {
                'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            },
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'formatter': 'simple',
                'level': 'INFO',
            },
        },
        'root': {
            'level': 'INFO',
            'handlers': ['console'],
        },
    }

    logging.config.dictConfig(minimal_config)
    logging.getLogger(__name__).error("===== Logging initialised with minimal fallback (config error) =====")


def _apply_debug_overrides() -> None:
    """Apply environment-driven module-specific debug overrides.

    Supports:
    - XMLNAV_DEBUG_SEARCH=true  -> DEBUG for the search and projection services
    - XMLNAV_DEBUG_MODULES=comma,separated,logger,names -> DEBUG for listed loggers
    """
    debug_search = os.environ.get('XMLNAV_DEBUG_SEARCH', '').strip().lower() in {'1', 'true', 'yes', 'on'}
    extra_modules = os.environ.get('XMLNAV_DEBUG_MODULES', '').strip()
    targets = []
    if debug_search:
        targets.append('xml_navigator.core.services.search_service')
        targets.append('xml_navigator.core.services.projection_service')
        targets.append('xml_navigator.core.query')
    if extra_modules:
        targets.extend([m.strip() for m in extra_modules.split(',') if m.strip()])
    for name in targets:
        logger = logging.getLogger(name)
        logger.setLevel(logging.DEBUG)
        # Ensure at least one handler emits DEBUG for this logger
        has_debug_handler = any(
            h.level == logging.NOTSET or h.level <= logging.DEBUG for h in logger.handlers
        )
        if not has_debug_handler:
            h = logging.StreamHandler()
            h.setLevel(logging.DEBUG)
            h.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
            logger.addHandler(h)
        logger.info("Debug override active for logger '%s'", name)
