# --coding:utf-8--
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Iterable, List, Optional, Tuple, Union

from attrs import define, field
from rich.console import Console

from callgen.log import logger
from callgen.exceptions import GenerationErrors
from callgen.maker.assembler import ApiCallMaker
from callgen.maker.models import DoStep
from callgen.maker.step import iter_do_steps, parse_do_step
from callgen.utils.utils import iter_files, load_yaml_documents


@define(frozen=True)
class BatchItem:
    source: str
    do: Any


@define(frozen=True)
class BatchResult:
    source: str
    step: Optional[DoStep] = None
    errors: Tuple[str, ...] = field(default=(), converter=tuple)

    @property
    def ok(self) -> bool:
        return not self.errors


def items_from_documents(source: str, documents: List[Any]) -> List[BatchItem]:
    return [
        BatchItem(source=f"{source}::{section}[{index}]", do=do)
        for section, index, do in iter_do_steps(documents)
    ]


def items_from_path(path: Union[str, Path]) -> List[BatchItem]:
    items = []
    for file in iter_files(path, suffixes={'.yml', '.yaml'}):
        items.extend(items_from_documents(str(file), load_yaml_documents(file)))
    return items


class BatchGenerator:
    """
    批量处理 do 步骤。每个步骤相互独立，只共享只读的 ApiSchema，可以并发执行；
    单个步骤失败不影响其他步骤，结果顺序与输入一致
    """

    def __init__(self, maker: ApiCallMaker, workers: Optional[int] = None, console: Console = None):
        self.maker = maker
        self.workers = workers if workers is not None else maker.config.workers
        self.console = console

    def run_one(self, item: BatchItem) -> BatchResult:
        try:
            step = parse_do_step(self.maker, item.do)
        except GenerationErrors as e:
            logger.debug(f"{item.source}: {e}")
            return BatchResult(source=item.source, errors=[str(err) for err in e])
        return BatchResult(source=item.source, step=step)

    def run(self, items: Iterable[BatchItem]) -> List[BatchResult]:
        items = list(items)
        if not self.workers or self.workers == 1:
            results = [self.run_one(item) for item in items]
        else:
            logger.info(f"多线程生成启动，线程数：{self.workers}")
            with ThreadPoolExecutor(max_workers=self.workers) as executor:
                results = list(executor.map(self.run_one, items))

        failed = sum(1 for r in results if not r.ok)
        if self.console:
            self.console.log(
                f"[bold green]✅ 已生成:[/] [cyan]{len(results) - failed}[/] "
                f"[dim]失败:[/] [red]{failed}[/] [dim]({len(results)} do steps)[/]"
            )
        return results
