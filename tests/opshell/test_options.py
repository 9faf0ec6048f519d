"""
Tests for options.py.

Tests option resolution including:
- First non-blank provider wins
- Blank values fall through
- Lazy provider evaluation
- must() failure messages
- Environment and prompt providers
"""

import pytest

from opshell.exceptions import ConfigurationError
from opshell.options import Option, is_blank


@pytest.mark.unit
class TestIsBlank:
    """Test blank detection."""

    @pytest.mark.parametrize("value", [None, "", " ", "\t\n", "   "])
    def test_blank_values(self, value):
        """Test None, empty and whitespace-only values are blank."""
        assert is_blank(value)

    @pytest.mark.parametrize("value", ["x", " x ", "0", "false"])
    def test_non_blank_values(self, value):
        """Test any visible character makes a value non-blank."""
        assert not is_blank(value)


@pytest.mark.unit
class TestOptionGet:
    """Test Option.get()."""

    def test_first_non_blank_wins(self):
        """Test the first provider with text is returned."""
        option = Option().or_value("").or_value("x").or_value("y")

        assert option.get() == "x"

    def test_explicit_value_wins_over_env(self, monkeypatch):
        """Test an explicit value is preferred to the environment."""
        monkeypatch.setenv("OPSHELL_TEST_VALUE", "from-env")

        assert Option.of("explicit").or_env("OPSHELL_TEST_VALUE").get() == "explicit"

    def test_whitespace_explicit_falls_through_to_env(self, monkeypatch):
        """Test a whitespace-only explicit value does not satisfy the option."""
        monkeypatch.setenv("OPSHELL_TEST_VALUE", "from-env")

        assert Option.of("   ").or_env("OPSHELL_TEST_VALUE").get() == "from-env"

    def test_value_is_returned_unstripped(self):
        """Test the winning value is returned as provided."""
        assert Option.of("  padded ").get() == "  padded "

    def test_exhausted_without_must_is_none(self):
        """Test resolution yields None when nothing supplies a value."""
        assert Option.of(None).or_env("OPSHELL_UNSET_VARIABLE").get() is None

    def test_empty_option_is_none(self):
        """Test an option with no providers resolves to None."""
        assert Option().get() is None

    def test_providers_are_lazy(self):
        """Test providers after the winner are never called."""
        calls = []

        def provider(name, value):
            def supply():
                calls.append(name)
                return value

            return supply

        option = Option().or_(provider("a", None)).or_(provider("b", "b")).or_(
            provider("c", "c")
        )

        assert option.get() == "b"
        assert calls == ["a", "b"]

    def test_env_read_at_resolution_time(self, monkeypatch):
        """Test the environment is read when resolving, not when building."""
        option = Option.of(None).or_env("OPSHELL_LATE_VALUE")
        monkeypatch.setenv("OPSHELL_LATE_VALUE", "late")

        assert option.get() == "late"

    def test_or_env_with_no_name_adds_nothing(self):
        """Test or_env(None) is a no-op."""
        assert Option.of(None).or_env(None).or_value("x").get() == "x"


@pytest.mark.unit
class TestOptionInput:
    """Test the interactive prompt provider."""

    def test_prompt_used_when_earlier_sources_blank(self, prompter_factory):
        """Test the prompt supplies the value after explicit and env come up blank."""
        prompter = prompter_factory("typed")

        value = Option.of("", prompter).or_env("OPSHELL_UNSET").or_input("Password:").get()

        assert value == "typed"
        assert prompter.prompts == [("Password:", None, True)]

    def test_prompt_not_shown_when_value_known(self, prompter_factory):
        """Test the prompt is skipped when an earlier provider wins."""
        prompter = prompter_factory("typed")

        assert Option.of("given", prompter).or_input("Password:").get() == "given"
        assert prompter.prompts == []

    def test_unmasked_prompt_with_default(self, prompter_factory):
        """Test mask and default are passed to the prompter."""
        prompter = prompter_factory()

        value = Option(prompter).or_input("Region:", default="cn-hangzhou", mask=False).get()

        assert value == "cn-hangzhou"
        assert prompter.prompts == [("Region:", "cn-hangzhou", False)]

    def test_blank_prompt_answer_falls_through(self, prompter_factory):
        """Test an empty answer at the prompt does not satisfy the option."""
        prompter = prompter_factory("")

        with pytest.raises(ConfigurationError):
            Option(prompter).or_input("Password:").must("`password` cannot be inferred")

    def test_default_prompter_returns_default_when_not_interactive(self, monkeypatch):
        """Test the terminal prompter returns its default without a TTY."""
        monkeypatch.setenv("OPSHELL_NON_INTERACTIVE", "1")

        assert Option().or_input("Password:").get() is None
        assert Option().or_input("Region:", default="r1", mask=False).get() == "r1"


@pytest.mark.unit
class TestOptionMust:
    """Test Option.must()."""

    def test_must_returns_value(self):
        """Test must() returns the resolved value."""
        assert Option.of("x").must("unused") == "x"

    def test_must_raises_with_exact_message(self):
        """Test must() raises ConfigurationError carrying exactly the given message."""
        with pytest.raises(ConfigurationError) as exc_info:
            Option.of("").or_value("  ").must("`url` cannot be inferred")

        assert str(exc_info.value) == "`url` cannot be inferred"
        assert exc_info.value.message == "`url` cannot be inferred"

    def test_must_after_winner_does_not_raise(self):
        """Test must() is only reached when every provider is blank."""
        assert Option().or_value("").or_value("x").must("boom") == "x"
