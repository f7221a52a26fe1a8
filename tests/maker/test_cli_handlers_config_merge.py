import textwrap
import importlib
import yaml
import pytest

from callgen.maker import cli_handlers
from callgen.maker.cli_handlers import _resolve_gen_config, _build_generator_config
from callgen.maker.config import GeneratorConfig, NAMING_STRATEGIES, DEFAULT_WILDCARD_PARAMS


def _write_yaml(path, data: dict):
    path.write_text(yaml.safe_dump(data, allow_unicode=True), encoding="utf-8")


def _prepare_yaml(monkeypatch, tmp_path, generator_dict: dict):
    # 指定临时 callgen.yaml 并写入
    callgen_yaml = tmp_path / "callgen.yaml"
    _write_yaml(callgen_yaml, {"generator": generator_dict})
    # 替换被测模块中的常量路径为临时文件
    monkeypatch.setattr(cli_handlers, "CALLGEN_YAML_PATH", str(callgen_yaml))


def _prepare_custom_naming_module(monkeypatch, tmp_path, module_path="testpkg.naming", func_name="my_naming"):
    """
    在临时目录下创建 testpkg.naming 模块，并注入 sys.path 以便 importlib 导入。
    """
    pkg_dir = tmp_path / "testpkg"
    pkg_dir.mkdir()
    (pkg_dir / "__init__.py").write_text("", encoding="utf-8")
    naming_py = pkg_dir / "naming.py"
    naming_py.write_text(
        textwrap.dedent(f"""
        def {func_name}(name: str) -> str:
            return "X" + name.upper()
        """),
        encoding="utf-8"
    )
    monkeypatch.syspath_prepend(str(tmp_path))
    importlib.invalidate_caches()
    return f"{module_path}.{func_name}"


def test_cli_n_overrides_yaml_custom_naming(monkeypatch, tmp_path):
    """
    CLI 传 -n upper_snake，YAML 有 custom_naming；预期：忽略 YAML 的 custom_naming。
    """
    _prepare_yaml(monkeypatch, tmp_path, {
        "spec": "api",
        "tests": "yaml_tests",
        "naming": "pascal",
        "custom_naming": "conf.naming.custom_naming",
    })

    final = _resolve_gen_config(
        spec="cli_api", tests=None, output=None,
        naming="upper_snake", custom_naming=None, workers=None
    )
    assert final["final_spec"] == "cli_api"
    assert final["final_tests"] == "yaml_tests"
    assert final["final_naming"] == "upper_snake"
    assert final["final_custom_naming"] is None  # 被屏蔽

    config = _build_generator_config(final)
    assert config.naming is NAMING_STRATEGIES["upper_snake"]


def test_cli_cn_overrides_and_warns(monkeypatch, tmp_path):
    """
    同时传 -n 和 -cn，预期以 -cn 为准，并产生警告。
    """
    _prepare_yaml(monkeypatch, tmp_path, {"spec": "api", "tests": "yaml_tests"})
    cn_path = _prepare_custom_naming_module(monkeypatch, tmp_path)

    final = _resolve_gen_config(
        spec=None, tests=None, output=None,
        naming="upper_snake", custom_naming=cn_path, workers=None
    )
    assert final["final_custom_naming"] == cn_path
    assert any("已优先使用 -cn" in w for w in final["warnings"])

    config = _build_generator_config(final)
    assert config.naming is not NAMING_STRATEGIES["upper_snake"]
    assert config.naming.__name__ == cn_path.rsplit(".", 1)[-1]
    assert config.naming("wait_for") == "XWAIT_FOR"


def test_yaml_only_applies(monkeypatch, tmp_path):
    """
    不传 CLI 参数，预期完全采用 YAML 值。
    """
    _prepare_yaml(monkeypatch, tmp_path, {
        "spec": "yaml_api",
        "tests": "yaml_tests",
        "output": "out/calls.json",
        "naming": "upper_snake",
        "workers": 4,
        "wildcard_params": ["expand_wildcards", "metric"],
        "empty_enum_variants": {"refresh": "true"},
    })
    final = _resolve_gen_config(
        spec=None, tests=None, output=None,
        naming=None, custom_naming=None, workers=None
    )
    assert final["final_spec"] == "yaml_api"
    assert final["final_output"] == "out/calls.json"
    assert final["final_workers"] == 4
    assert final["warnings"] == []

    config = _build_generator_config(final)
    assert config.naming is NAMING_STRATEGIES["upper_snake"]
    assert config.workers == 4
    assert config.wildcard_params == frozenset({"expand_wildcards", "metric"})
    assert config.empty_enum_variants == {"refresh": "true"}


def test_cli_workers_overrides_yaml(monkeypatch, tmp_path):
    _prepare_yaml(monkeypatch, tmp_path, {"spec": "api", "tests": "tests", "workers": 4})
    final = _resolve_gen_config(
        spec=None, tests=None, output=None,
        naming=None, custom_naming=None, workers=2
    )
    assert final["final_workers"] == 2


def test_defaults_when_yaml_missing(monkeypatch, tmp_path):
    """
    没有 callgen.yaml 时，仅使用命令行参数，其余交由 GeneratorConfig 默认值生效。
    """
    monkeypatch.setattr(cli_handlers, "CALLGEN_YAML_PATH", str(tmp_path / "missing.yaml"))
    final = _resolve_gen_config(
        spec="api", tests="tests", output=None,
        naming=None, custom_naming=None, workers=None
    )
    config = _build_generator_config(final)
    assert config.naming is NAMING_STRATEGIES["pascal"]
    assert config.wildcard_params == DEFAULT_WILDCARD_PARAMS
    assert config.workers is None


def test_missing_spec_exits(monkeypatch, tmp_path):
    monkeypatch.setattr(cli_handlers, "CALLGEN_YAML_PATH", str(tmp_path / "missing.yaml"))
    with pytest.raises(SystemExit) as exc_info:
        _resolve_gen_config(
            spec=None, tests="tests", output=None,
            naming=None, custom_naming=None, workers=None
        )
    assert exc_info.value.code == 1


def test_generator_config_maps_naming_string():
    cfg = GeneratorConfig(naming="upper_snake")
    assert cfg.naming is NAMING_STRATEGIES["upper_snake"]
