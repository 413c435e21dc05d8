import pytest

from recordkit.config import Config, expand
from recordkit.exceptions import ConfigurationError


class TestExpand:
    def test_plain_value(self):
        assert expand("attr-value") == "attr-value"

    def test_value_from_environment(self, monkeypatch):
        monkeypatch.setenv("MISSING_TEXT", "n/a")

        assert expand("${MISSING_TEXT}") == "n/a"

    def test_default_value(self, monkeypatch):
        monkeypatch.delenv("MISSING_TEXT", raising=False)

        assert expand("${MISSING_TEXT|-}") == "-"

    def test_empty_default_value(self, monkeypatch):
        monkeypatch.delenv("MISSING_TEXT", raising=False)

        assert expand("${MISSING_TEXT|}") == ""

    def test_multiple_variables(self, monkeypatch):
        monkeypatch.setenv("FIRST", "a")
        monkeypatch.delenv("SECOND", raising=False)

        assert expand("${FIRST} ${SECOND|b}") == "a b"

    def test_mixed_with_static_text(self, monkeypatch):
        monkeypatch.setenv("REGION", "eu")

        assert expand("records-${REGION}") == "records-eu"

    def test_tables_and_lists(self, monkeypatch):
        monkeypatch.setenv("REGION", "eu")

        assert expand({"regions": ["${REGION}", 1], "flag": True}) == {
            "regions": ["eu", 1],
            "flag": True,
        }

    def test_unset_variable_without_default(self, monkeypatch):
        monkeypatch.delenv("UNSET_VARIABLE", raising=False)

        with pytest.raises(ConfigurationError) as exc:
            expand("${UNSET_VARIABLE}")

        assert exc.value.args[0] == "Environment variable UNSET_VARIABLE is not set"


class TestPlaceholdersInConfig:
    def test_nested_values_are_replaced(self, monkeypatch):
        monkeypatch.setenv("MISSING_TEXT", "n/a")

        config = Config.load_from_dict({"describe": {"missing": "${MISSING_TEXT}"}})

        assert config["describe"]["missing"] == "n/a"

    def test_boolean_settings_from_environment(self, monkeypatch):
        monkeypatch.setenv("SANITIZE", "False")

        config = Config.load_from_dict({"sanitize_strings": "${SANITIZE}"})

        assert config["sanitize_strings"] is False

    def test_non_string_values_are_untouched(self):
        config = Config.load_from_dict({"accessors": False})

        assert config["accessors"] is False
