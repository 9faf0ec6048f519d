from importlib.metadata import PackageNotFoundError, version

from .config import Config
from .exceptions import (
    CleanupError,
    ConfigurationError,
    InputCancelledError,
    ResourceError,
    ShellError,
)
from .options import Option, is_blank

try:
    __version__ = version("opshell")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "CleanupError",
    "Config",
    "ConfigurationError",
    "InputCancelledError",
    "Option",
    "ResourceError",
    "ShellError",
    "__version__",
    "is_blank",
]
