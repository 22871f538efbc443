"""Unit tests for configuration parsing and loading."""

import pytest

from ordered_map import BalanceStrategy, ConfigError, OrderedMapConfig, load_config


@pytest.mark.parametrize(
    "name, expected",
    [
        ("red_black", BalanceStrategy.RED_BLACK),
        ("RB", BalanceStrategy.RED_BLACK),
        ("red-black", BalanceStrategy.RED_BLACK),
        (" avl ", BalanceStrategy.AVL),
        (BalanceStrategy.AVL, BalanceStrategy.AVL),
    ],
)
def test_parse_strategy(name, expected):
    assert BalanceStrategy.parse(name) is expected


def test_parse_unknown_strategy():
    """Test unknown names raise a ConfigError, which is a ValueError."""
    with pytest.raises(ConfigError):
        BalanceStrategy.parse("splay")
    with pytest.raises(ValueError):
        BalanceStrategy.parse("treap")


def test_config_defaults():
    config = OrderedMapConfig()
    assert config.strategy is BalanceStrategy.RED_BLACK
    assert config.check_invariants is False


def test_config_accepts_strategy_names():
    assert OrderedMapConfig(strategy="avl").strategy is BalanceStrategy.AVL


def test_from_dict():
    config = OrderedMapConfig.from_dict({"strategy": "avl", "check_invariants": True})
    assert config.strategy is BalanceStrategy.AVL
    assert config.check_invariants is True


@pytest.mark.parametrize("value", ["false", "0", 0, 1, None])
def test_from_dict_rejects_non_boolean_check_invariants(value):
    """Test strings and numbers are not coerced into a debug switch."""
    with pytest.raises(ConfigError, match="check_invariants"):
        OrderedMapConfig.from_dict({"check_invariants": value})


def test_load_config_rejects_string_boolean(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('[ordered_map]\ncheck_invariants = "false"\n', encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(path)


def test_from_dict_rejects_unknown_keys():
    with pytest.raises(ConfigError, match="persist"):
        OrderedMapConfig.from_dict({"persist": True})


def test_load_config(tmp_path):
    """Test reading the [ordered_map] table from TOML."""
    path = tmp_path / "config.toml"
    path.write_text('[ordered_map]\nstrategy = "avl"\ncheck_invariants = true\n', encoding="utf-8")

    config = load_config(path)

    assert config.strategy is BalanceStrategy.AVL
    assert config.check_invariants is True


def test_load_config_without_table_uses_defaults(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('[other]\nvalue = 1\n', encoding="utf-8")

    assert load_config(path) == OrderedMapConfig()


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.toml")
