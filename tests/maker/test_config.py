import pytest

from callgen.maker.config import (GeneratorConfig, NamingStrategy, NAMING_STRATEGIES, DEFAULT_EMPTY_ENUM_VARIANTS,
                                  load_custom_naming)
from callgen.maker.utils import NameStyleConverterMixin, type_name, valid_name


@pytest.mark.parametrize(
    "name, expected",
    [
        ("indices.get", "IndicesGet"),
        ("wait_for", "WaitFor"),
        ("open", "Open"),
        ("_all", "All"),
        ("query-then-fetch", "QueryThenFetch"),
    ]
)
def test_pascal_naming(name, expected):
    assert NamingStrategy.pascal(name) == expected
    assert type_name(name) == expected


@pytest.mark.parametrize(
    "name, expected",
    [
        ("wait_for", "WAIT_FOR"),
        ("indices.get", "INDICES_GET"),
        ("WaitFor", "WAIT_FOR"),
    ]
)
def test_upper_snake_naming(name, expected):
    assert NamingStrategy.upper_snake(name) == expected


@pytest.mark.parametrize(
    "name, expected",
    [
        ("from", "from_"),
        ("type", "type"),
        ("if_seq_no", "if_seq_no"),
        ("_source", "source"),
        ("1st", "n1st"),
        ("", "unnamed"),
    ]
)
def test_valid_name(name, expected):
    assert valid_name(name) == expected
    assert NameStyleConverterMixin.safe_name(name) == expected


def test_default_config():
    config = GeneratorConfig()
    assert config.naming is NAMING_STRATEGIES["pascal"]
    assert config.wildcard_params == frozenset({"expand_wildcards"})
    assert config.empty_enum_variants == DEFAULT_EMPTY_ENUM_VARIANTS
    # 每个实例持有独立副本
    config.empty_enum_variants["level"] = "cluster"
    assert "level" not in GeneratorConfig().empty_enum_variants


def test_wildcard_params_converted():
    config = GeneratorConfig(wildcard_params=["metric", "expand_wildcards"])
    assert config.wildcard_params == frozenset({"metric", "expand_wildcards"})


def test_unknown_naming():
    with pytest.raises(ValueError):
        GeneratorConfig(naming="camel")


@pytest.mark.parametrize("workers", [0, -1])
def test_invalid_workers(workers):
    with pytest.raises(ValueError):
        GeneratorConfig(workers=workers)


def test_custom_naming_replaces_naming():
    config = GeneratorConfig(naming="upper_snake", custom_naming="callgen.maker.utils.type_name")
    assert config.naming is type_name


def test_load_custom_naming_invalid_path():
    assert load_custom_naming("no_dot") is None
    with pytest.raises(SystemExit):
        load_custom_naming("callgen.maker.utils.not_there")
    with pytest.raises(SystemExit):
        load_custom_naming("callgen.maker.config.DEFAULT_WILDCARD_PARAMS")
