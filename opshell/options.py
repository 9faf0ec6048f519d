"""
Option resolution through an ordered chain of value providers.

A command parameter may come from the command line, an environment
variable, an interactive prompt, or nowhere at all. Option chains those
sources in priority order and picks the first one that yields text:

    url = (
        Option.of(args.url)
        .or_env("OPSHELL_DB_URL")
        .or_input("url: ", mask=False)
        .must("the database url could not be inferred")
    )

Blank values (empty or whitespace only) never satisfy an option, so an
empty explicit argument falls through to the next source.
"""

from __future__ import annotations

import os
from collections.abc import Callable

from .exceptions import ConfigurationError
from .ui import prompts

# A provider supplies a candidate value or None when it has nothing
Provider = Callable[[], "str | None"]

# Prompter signature: (message, default, mask) -> entered text or None
Prompter = Callable[[str, "str | None", bool], "str | None"]


def is_blank(value: str | None) -> bool:
    """Check if a value is absent, empty or whitespace only."""
    return value is None or not value.strip()


def _default_prompter(message: str, default: str | None, mask: bool) -> str | None:
    return prompts.ask(message, default=default, password=mask)


class Option:
    """
    Ordered list of providers evaluated lazily, first non-blank wins.

    Providers run only when resolution reaches them, so a prompt never
    appears if an earlier source already supplied the value.
    """

    def __init__(self, prompter: Prompter | None = None) -> None:
        """
        Initialize an empty option.

        Args:
            prompter: Interactive input function used by or_input
                (default: masked/unmasked terminal prompt)
        """
        self._providers: list[Provider] = []
        self._prompter = prompter if prompter is not None else _default_prompter

    @classmethod
    def of(cls, value: str | None, prompter: Prompter | None = None) -> Option:
        """Start a chain with an explicit value."""
        return cls(prompter).or_(lambda: value)

    def or_(self, provider: Provider) -> Option:
        """Append an arbitrary provider."""
        self._providers.append(provider)
        return self

    def or_value(self, value: str | None) -> Option:
        """Append a constant value."""
        return self.or_(lambda: value)

    def or_env(self, name: str | None) -> Option:
        """
        Append an environment variable lookup.

        The variable is read when the provider runs, not when it is added.
        A None name adds nothing.
        """
        if name:
            self._providers.append(lambda: os.environ.get(name))
        return self

    def or_input(
        self, prompt: str, default: str | None = None, mask: bool = True
    ) -> Option:
        """
        Append an interactive prompt.

        Args:
            prompt: Prompt text
            default: Value used when the user enters nothing
            mask: Hide typed characters (credentials)
        """
        self._providers.append(lambda: self._prompter(prompt, default, mask))
        return self

    def get(self) -> str | None:
        """
        Resolve the option.

        Returns:
            The first non-blank provider value, or None when every provider
            came up blank
        """
        for provider in self._providers:
            value = provider()
            if not is_blank(value):
                return value
        return None

    def must(self, message: str) -> str:
        """
        Resolve the option, failing when no provider supplies a value.

        Args:
            message: Error message for the failure

        Raises:
            ConfigurationError: With exactly the given message
        """
        value = self.get()
        if value is None:
            raise ConfigurationError(message)
        return value
