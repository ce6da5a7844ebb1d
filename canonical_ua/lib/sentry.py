import logging
from sys import modules

import sentry_sdk

from canonical_ua.config import NAME, VERSION
from canonical_ua.lib.pydantic_settings_integration import pydantic_settings_integration

SENTRY_DSN = ''
SENTRY_ENVIRONMENT = 'production'

pydantic_settings_integration(
    __name__, globals(), name_filter=lambda name: name.startswith('SENTRY_')
)

if SENTRY_DSN and 'pytest' not in modules:
    sentry_sdk.init(
        dsn=SENTRY_DSN,
        release=f'{NAME}@{VERSION}',
        environment=SENTRY_ENVIRONMENT,
        keep_alive=True,
    )
    logging.debug('Initialized Sentry SDK')
