"""
opshell - interactive operator shell.

Usage:
    opshell
    opshell --config etc/opshell.yaml --log-level debug
"""

from __future__ import annotations

import argparse
import sys

from rich.markup import escape

import opshell

from ..commands import register_all
from ..config import Config, default_config_file
from ..exceptions import ConfigurationError
from ..log import LogConfig, LoggerFactory
from ..shell import Shell
from ..shell.shutdown import SIGINT_EXIT_CODE
from ..ui import get_console


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="opshell", description="Interactive shell for operator utilities."
    )
    parser.add_argument(
        "-c", "--config", help="YAML configuration file (default: $OPSHELL_CONFIG)"
    )
    parser.add_argument(
        "-l", "--log-level", help="log level: trace, debug, info, warning, error or false"
    )
    parser.add_argument("--no-color", action="store_true", help="disable coloured output")
    parser.add_argument("-v", "--version", action="version", version=f"opshell {opshell.__version__}")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the shell."""
    args = _parse_args(argv)
    console = get_console(no_color=True if args.no_color else None)

    try:
        config = Config(args.config or default_config_file())
        log_section = config.get("logging", {})
        if args.log_level is not None:
            log_section = {**log_section, "level": args.log_level}
        if args.no_color:
            log_section = {**log_section, "colors": False}
        lg = LoggerFactory.create_root(LogConfig.from_config({"logging": log_section}))
    except ConfigurationError as e:
        console.print(f"[error]{escape(str(e))}[/error]")
        return 1

    lg.debug("config loaded", extra={"file": config.path})
    shell = Shell(console, lg, prompt=config.get("shell.prompt", "opshell:>"))
    register_all(shell, config)

    try:
        return shell.run()
    except KeyboardInterrupt:
        return SIGINT_EXIT_CODE


if __name__ == "__main__":
    sys.exit(main())
