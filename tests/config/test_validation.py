import pytest

from recordkit.config import Config
from recordkit.exceptions import ConfigurationError


def test_defaults():
    assert Config.load_from_dict() == {
        "sanitize_strings": True,
        "accessors": True,
        "describe": {"labels": "humanized", "missing": "<not set>"},
    }


@pytest.mark.parametrize("labels", ["humanized", "raw"])
def test_label_styles(labels):
    config = Config.load_from_dict({"describe": {"labels": labels}})

    assert config["describe"]["labels"] == labels


def test_unknown_label_style():
    with pytest.raises(ConfigurationError) as exc:
        Config.load_from_dict({"describe": {"labels": "shouting"}})

    assert exc.value.args[0] == (
        "`describe.labels` must be one of ['humanized', 'raw'], got `shouting`"
    )


@pytest.mark.parametrize("value, expected", [("true", True), ("FALSE", False)])
def test_boolean_words(value, expected):
    assert Config.load_from_dict({"accessors": value})["accessors"] is expected


@pytest.mark.parametrize("value", [1, "yes", None])
def test_non_boolean_values(value):
    with pytest.raises(ConfigurationError) as exc:
        Config.load_from_dict({"sanitize_strings": value})

    assert exc.value.args[0].startswith("`sanitize_strings` must be true or false")


def test_describe_must_be_a_table():
    with pytest.raises(ConfigurationError):
        Config.load_from_dict({"describe": "raw"})


def test_missing_text_must_be_a_string():
    with pytest.raises(ConfigurationError):
        Config.load_from_dict({"describe": {"missing": 0}})
