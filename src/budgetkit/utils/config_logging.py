"""Logging configuration for the budgetkit command line."""

import logging.config

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(levelname)s %(name)s: %(message)s"},
        "verbose": {
            "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": "WARNING",
            "formatter": "simple",
            "stream": "ext://sys.stderr",
        },
    },
    "loggers": {
        "budgetkit": {
            "level": "DEBUG",
            "handlers": ["console"],
            "propagate": False,
        },
        "sqlalchemy.engine": {"level": "WARNING", "propagate": True},
    },
}


def configure_logging(verbose: bool = False) -> None:
    """Apply LOGGING, switching the console to DEBUG output when verbose."""
    config = {
        **LOGGING,
        "handlers": {
            "console": {
                **LOGGING["handlers"]["console"],
                "level": "DEBUG" if verbose else "WARNING",
                "formatter": "verbose" if verbose else "simple",
            }
        },
    }
    logging.config.dictConfig(config)
