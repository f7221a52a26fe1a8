import sys
import json
from pathlib import Path
from typing import Optional, Dict, Any, List

import yaml
from rich.console import Console
from rich.theme import Theme
from rich.table import Table
from rich.markup import escape

from callgen.path import CALLGEN_YAML_PATH
from callgen._constants import Conf
from callgen.exceptions import CallGenException
from callgen.utils.utils import load_yaml
from callgen.maker.config import GeneratorConfig, NAMING_STRATEGIES
from callgen.maker.schema import SchemaLoader
from callgen.maker.assembler import ApiCallMaker
from callgen.maker.batch import BatchGenerator, BatchResult, items_from_path
from callgen._printer import print_message, printer


custom_theme = Theme({
    "primary": "#7B61FF",
    "secondary": "#00C7BE",
    "success": "#34D399",
    "warning": "#FBBF24",
    "error": "#EF4444",
    "highlight": "#F472B6",
    "muted": "#94A3B8",
    "accent": "#38BDF8",
})


def _resolve_gen_config(
        spec: Optional[str],
        tests: Optional[str],
        output: Optional[str],
        naming: Optional[str],
        custom_naming: Optional[str],
        workers: Optional[int]
) -> Dict[str, Any]:
    generator_config = {}
    try:
        if Path(CALLGEN_YAML_PATH).exists():
            yaml_data = load_yaml(CALLGEN_YAML_PATH) or {}
            generator_config = yaml_data.get(Conf.GENERATOR_KEY, {}) or {}
    except Exception as e:
        print_message(f"❌ 读取配置文件失败: {e}", style="bold red")
        sys.exit(1)

    # 命令行参数优先级高于配置文件
    final_spec = spec or generator_config.get('spec')
    final_tests = tests or generator_config.get('tests')
    if not final_spec or not final_tests:
        print_message("❌  错误：必须在命令行参数或配置文件中提供spec和tests参数", style="bold red")
        sys.exit(1)

    warnings = []
    cli_n = naming is not None
    cli_cn = custom_naming is not None
    if cli_n and cli_cn:
        warnings.append("检测到同时传入 -n 和 -cn，已优先使用 -cn（自定义命名策略）")

    # 命名策略合并：-cn > -n；若仅传 -n，则忽略配置文件中的 custom_naming
    if cli_cn:
        final_custom_naming = custom_naming
    elif cli_n:
        final_custom_naming = None
    else:
        final_custom_naming = generator_config.get('custom_naming')

    return {
        "final_spec": final_spec,
        "final_tests": final_tests,
        "final_output": output or generator_config.get('output'),
        "final_naming": naming if cli_n else generator_config.get('naming'),
        "final_custom_naming": final_custom_naming,
        "final_workers": workers if workers is not None else generator_config.get('workers'),
        "final_wildcard_params": generator_config.get('wildcard_params'),
        "final_empty_enum_variants": generator_config.get('empty_enum_variants'),
        "warnings": warnings,
    }


def _build_generator_config(final_config: Dict[str, Any]) -> GeneratorConfig:
    # 仅在非None时传参，避免用None覆盖默认值
    config_kwargs = {}
    if final_config['final_naming'] in NAMING_STRATEGIES:
        config_kwargs["naming"] = NAMING_STRATEGIES[final_config['final_naming']]
    if final_config['final_custom_naming']:
        config_kwargs["custom_naming"] = final_config['final_custom_naming']
    if final_config['final_workers'] is not None:
        config_kwargs["workers"] = final_config['final_workers']
    if final_config['final_wildcard_params'] is not None:
        config_kwargs["wildcard_params"] = final_config['final_wildcard_params']
    if final_config['final_empty_enum_variants'] is not None:
        config_kwargs["empty_enum_variants"] = final_config['final_empty_enum_variants']
    return GeneratorConfig(**config_kwargs)


def _print_config_table(console: Console, final_config: Dict[str, Any]):
    table = Table(title="最终生效配置", show_header=True, header_style="bold magenta", show_edge=True,
                  border_style="green")
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")

    table.add_row("spec", str(final_config['final_spec']))
    table.add_row("tests", str(final_config['final_tests']))
    table.add_row("output", str(final_config['final_output'] or "-"))
    table.add_row("naming", str(final_config['final_naming'] or "pascal(default)"))
    table.add_row("custom_naming", str(final_config['final_custom_naming'] or "-"))
    table.add_row("workers", str(final_config['final_workers'] or 1))
    console.print(table)

    for w in final_config.get('warnings', []):
        console.print(f"[bold yellow]⚠️ {w}[/]")


def _print_errors(console: Console, results: List[BatchResult]):
    failed = [r for r in results if not r.ok]
    if not failed:
        return
    table = Table(title="生成失败的 do 步骤", show_header=True, header_style="bold red", border_style="red")
    table.add_column("Source", style="cyan")
    table.add_column("Errors", style="red")
    for result in failed:
        table.add_row(escape(result.source), escape("\n".join(result.errors)))
    console.print(table)


def _write_output(output: str, results: List[BatchResult]):
    output_path = Path(output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = [
        {
            "source": r.source,
            "step": r.step.model_dump(mode="json") if r.step else None,
            "errors": list(r.errors),
        }
        for r in results
    ]
    output_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")


@printer("开始生成调用描述...", "调用描述全部生成成功", "调用描述生成失败")
def handle_gen(spec: Optional[str],
               tests: Optional[str],
               output: Optional[str],
               naming: Optional[str],
               custom_naming: Optional[str],
               workers: Optional[int]) -> int:
    final_config = _resolve_gen_config(spec, tests, output, naming, custom_naming, workers)
    console = Console(theme=custom_theme)
    _print_config_table(console, final_config)
    config = _build_generator_config(final_config)

    try:
        with console.status("[primary]🔨 加载api定义...[/]", spinner="dots") as status:
            schema = SchemaLoader.from_path(final_config['final_spec'])
            status.update("[primary]🔨 解析yaml测试...[/]")
            items = items_from_path(final_config['final_tests'])
            status.update("[primary]⚡ 生成调用描述...[/]")
            generator = BatchGenerator(ApiCallMaker(schema, config), console=console)
            results = generator.run(items)
    except (CallGenException, yaml.YAMLError, json.JSONDecodeError) as e:
        print_message(f"❌ {e}", style="bold red")
        return 1

    _print_errors(console, results)
    if final_config['final_output']:
        _write_output(final_config['final_output'], results)
        print_message(f"已写入: {final_config['final_output']}")

    if all(r.ok for r in results):
        console.print("[success]🍺 [bold]All do steps generated![/][/]")
        return 0
    return 1
