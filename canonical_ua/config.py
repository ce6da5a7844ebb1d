from logging.config import dictConfig
from pathlib import Path
from typing import Annotated, Literal

from githead import githead
from pydantic import BeforeValidator, Field, FilePath

from canonical_ua.lib.pydantic_settings_integration import pydantic_settings_integration


def _upper(v) -> str:
    return str(v).upper()


type _LogLevel = Annotated[Literal['DEBUG', 'INFO', 'WARNING', 'ERROR'], BeforeValidator(_upper)]

# -------------------- System Configuration --------------------

LOG_LEVEL: _LogLevel = 'INFO'

# -------------------- User agent classification --------------------

# Longest genuine user agent seen so far: 255 chars (Facebook in-app on iOS)
USER_AGENT_MAX_LENGTH: int = Field(300, gt=0)
USER_AGENT_CACHE_MAX_SIZE: int = Field(5000, gt=0)
USER_AGENT_BASELINES_FILE: FilePath = (
    Path(__file__).parent.joinpath('data', 'user_agent_baselines.json')
)

pydantic_settings_integration(__name__, globals())

# -------------------- Constant or derived configuration --------------------

try:
    VERSION = 'git#' + githead()[:7]
except FileNotFoundError:
    VERSION = 'dev'  # pyright: ignore [reportConstantRedefinition]

NAME = 'canonical-ua'

# The longest canonical name that can be supported is XXXXXXXXXX/###.###.###
NORMALIZED_USER_AGENT_MAX_LENGTH = 22

# -------------------- Logging configuration --------------------

dictConfig({
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'default': {
            'format': '%(levelname)s | %(asctime)s | %(name)s %(message)s',
            'datefmt': '%Y-%m-%d %H:%M:%S',
        },
    },
    'handlers': {
        'default': {
            'formatter': 'default',
            'class': 'logging.StreamHandler',
            'stream': 'ext://sys.stderr',
        },
    },
    'loggers': {
        'root': {'handlers': ['default'], 'level': LOG_LEVEL},
        # reduce logging verbosity of some modules
        'urllib3': {'handlers': [], 'level': 'INFO'},
    },
})
