"""Development settings for Travel Nest.

This module extends the base settings with development specific
configuration, such as enabling debug, allowing all hosts and rendering
logs for a terminal. Do not use these settings in production!
"""

import os

from .base import *  # noqa: F401,F403

# Enable debug mode for development
DEBUG = True

# Allow all hosts in development
ALLOWED_HOSTS = ['*']

# Readable logs unless LOG_FORMAT asks otherwise
if 'LOG_FORMAT' not in os.environ:
    LOGGING['handlers']['console']['formatter'] = 'console'  # noqa: F405

# Plain static storage: no manifest needed for runserver and tests
STORAGES = {  # noqa: F405
    **STORAGES,  # noqa: F405
    'staticfiles': {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'},
}
