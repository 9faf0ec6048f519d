"""
Terminal I/O: themed console, prompts and result renderers.
"""

from .console import SHELL_THEME, get_console

__all__ = ["SHELL_THEME", "get_console"]
