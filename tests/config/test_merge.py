from recordkit.config import Config, _default_config, merge


def test_nested_dicts_are_merged():
    merged = merge(
        {"describe": {"labels": "humanized", "missing": "<not set>"}},
        {"describe": {"missing": "-"}},
    )

    assert merged == {"describe": {"labels": "humanized", "missing": "-"}}


def test_that_values_replace_non_dict_values():
    assert merge({"describe": {}}, {"describe": 1}) == {"describe": 1}


def test_that_inputs_are_not_modified():
    first = {"describe": {"labels": "raw"}}
    merge(first, {"describe": {"labels": "humanized"}})

    assert first == {"describe": {"labels": "raw"}}


def test_that_defaults_are_fresh_copies():
    config = Config.load_from_dict()
    config["describe"]["missing"] = "-"

    assert _default_config()["describe"]["missing"] == "<not set>"
    assert Config.load_from_dict()["describe"]["missing"] == "<not set>"
