"""
Tests for shell/registry.py.

Tests command registration including:
- Name validation
- Duplicate detection
- Alias lookup
- Longest-prefix matching
"""

import pytest

from opshell.shell.command import Command
from opshell.shell.errors import CommandRegistrationError, DupCommandError
from opshell.shell.registry import MAX_COMMAND_NAME_LENGTH, CommandRegistry


def _noop(args):
    pass


def _cmd(name, **kwargs):
    return Command(name, _noop, **kwargs)


@pytest.mark.unit
class TestRegistration:
    """Test CommandRegistry.register()."""

    def test_register_and_get(self):
        """Test a registered command can be looked up by name."""
        registry = CommandRegistry()
        command = registry.register(_cmd("db connect"))

        assert registry.get("db connect") is command
        assert "db connect" in registry
        assert len(registry) == 1

    def test_duplicate_name(self):
        """Test registering the same name twice fails."""
        registry = CommandRegistry()
        registry.register(_cmd("help"))

        with pytest.raises(DupCommandError, match="already registered"):
            registry.register(_cmd("help"))

    @pytest.mark.parametrize(
        "name",
        ["", "DB connect", "db  connect", " db", "db connect ", "1db", "db/connect", "db_é"],
    )
    def test_invalid_names(self, name):
        """Test names must be lowercase words separated by single spaces."""
        with pytest.raises(CommandRegistrationError):
            CommandRegistry().register(_cmd(name))

    def test_name_too_long(self):
        """Test the maximum name length is enforced."""
        with pytest.raises(CommandRegistrationError, match="maximum length"):
            CommandRegistry().register(_cmd("a" * (MAX_COMMAND_NAME_LENGTH + 1)))

    def test_alias_lookup(self):
        """Test aliases resolve to their command."""
        registry = CommandRegistry()
        command = registry.register(_cmd("quit", aliases=["exit"]))

        assert registry.get("exit") is command
        assert registry.is_registered("exit")
        assert registry.list_commands() == [command]

    def test_alias_collision(self):
        """Test an alias may not shadow an existing name."""
        registry = CommandRegistry()
        registry.register(_cmd("exit"))

        with pytest.raises(CommandRegistrationError, match="Alias 'exit'"):
            registry.register(_cmd("quit", aliases=["exit"]))
        assert not registry.is_registered("quit")

    def test_registration_order_kept(self):
        """Test list_commands() keeps registration order."""
        registry = CommandRegistry()
        names = ["db connect", "db query", "help"]
        for name in names:
            registry.register(_cmd(name))

        assert [c.name for c in registry.list_commands()] == names


@pytest.mark.unit
class TestMatch:
    """Test CommandRegistry.match()."""

    @pytest.fixture
    def registry(self):
        registry = CommandRegistry()
        for name in ["db", "db query", "db query plan", "help"]:
            registry.register(_cmd(name))
        return registry

    def test_longest_prefix_wins(self, registry):
        """Test the longest registered name is matched."""
        command, rest = registry.match(["db", "query", "select", "1"])

        assert command.name == "db query"
        assert rest == ["select", "1"]

    def test_three_word_name(self, registry):
        """Test names longer than two words match."""
        command, rest = registry.match(["db", "query", "plan", "x"])

        assert command.name == "db query plan"
        assert rest == ["x"]

    def test_shorter_prefix_fallback(self, registry):
        """Test a shorter name matches when the longer one does not."""
        command, rest = registry.match(["db", "status"])

        assert command.name == "db"
        assert rest == ["status"]

    def test_no_match(self, registry):
        """Test unknown input matches nothing."""
        assert registry.match(["nope"]) is None
        assert registry.match([]) is None
