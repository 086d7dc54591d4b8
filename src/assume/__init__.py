from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from ._assume import assume as assume
from ._assume import assumption as assumption
from ._config import ENABLED_ENV_KEY as ENABLED_ENV_KEY
from ._config import AssumeConfig as AssumeConfig
from ._config import config as config
from ._config import disable as disable
from ._config import enable as enable
from ._config import get_handler as get_handler
from ._config import is_enabled as is_enabled
from ._config import override as override
from ._config import reset as reset
from ._config import reset_handler as reset_handler
from ._config import set_enabled as set_enabled
from ._config import set_handler as set_handler
from ._handler import SOURCE_UNAVAILABLE as SOURCE_UNAVAILABLE
from ._handler import Handler as Handler
from ._handler import default_handler as default_handler
from ._thunk import SourceLocation as SourceLocation
from ._thunk import Thunk as Thunk
from .errors import ArgumentError as ArgumentError
from .errors import AssumeError as AssumeError
from .errors import AssumptionFailed as AssumptionFailed
from .errors import InvalidHandler as InvalidHandler
from .logging import init_python_logging as init_python_logging
from .logging import log_handler as log_handler


try:
    __version__ = version(__name__)
except PackageNotFoundError:
    __version__ = "unknown"
