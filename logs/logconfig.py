import os
import logging
from logging.config import dictConfig
from typing import Optional
from config import settings


def configure_logging(session_id_run, log_file: Optional[str] = None):
    # Set the default logging level
    log_level = logging.INFO if settings.PROD else logging.DEBUG

    handlers = ['h', 'file'] if settings.PROD else ['h']
    log_file = log_file or settings.LOG_FILE

    LOGGING_CONFIG = dict(
        version=1,
        disable_existing_loggers=False,
        formatters={
            'f': {
                'format': f'%(asctime)s %(name)-12s %(levelname)-8s [SESSION_ID: {session_id_run}] %(message)s',
            },
        },
        handlers={
            'h': {
                'class': 'logging.StreamHandler',
                'formatter': 'f',
                'level': log_level,
            },
        },
        root={
            'handlers': handlers,
            'level': log_level,
        },
    )

    if settings.PROD:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        LOGGING_CONFIG['handlers']['file'] = {
            'class': 'logging.handlers.RotatingFileHandler',
            'filename': log_file,
            'formatter': 'f',
            'level': log_level,
            'maxBytes': settings.LOG_MAX_BYTES,
            'backupCount': settings.LOG_BACKUP_COUNT,
        }

    dictConfig(LOGGING_CONFIG)
    return LOGGING_CONFIG
