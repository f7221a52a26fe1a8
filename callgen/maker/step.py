# --coding:utf-8--
from typing import Any, Iterator, List, Mapping, Optional, Tuple

from callgen.log import logger
from callgen._constants import Step
from callgen.exceptions import ErrorCollector, GenerationErrors, InvalidStep
from callgen.maker.assembler import ApiCallMaker
from callgen.maker.models import CallDescription, CallRecord, DoStep


def _parse_headers(value: Any) -> Tuple[Tuple[str, str], ...]:
    if not isinstance(value, Mapping):
        raise InvalidStep(f"expected mapping for `{Step.HEADERS}` but found {value!r}")
    return tuple((str(k), str(v)) for k, v in value.items())


def _parse_warnings(value: Any) -> Tuple[str, ...]:
    if not isinstance(value, (list, tuple)) or not all(isinstance(w, str) for w in value):
        raise InvalidStep(f"expected list of strings for `{Step.WARNINGS}` but found {value!r}")
    return tuple(value)


def parse_call_record(call: str, value: Any) -> CallRecord:
    if value is None:
        value = {}
    if not isinstance(value, Mapping):
        raise InvalidStep(f"expected mapping value for `{call}` but found {value!r}")
    for key in value:
        if not isinstance(key, str):
            raise InvalidStep(f"expected string key for `{call}` but found {key!r}")
    return CallRecord(call=call, args=dict(value))


def parse_do_step(maker: ApiCallMaker, do: Any) -> DoStep:
    """
    解析一个 do 步骤：
        do:
          catch: missing
          headers: {Content-Type: application/json}
          indices.get:
            index: test
    """
    if not isinstance(do, Mapping):
        raise GenerationErrors([InvalidStep(f"expected mapping for `{Step.DO}` but found {do!r}")])

    collector = ErrorCollector()
    api_call: Optional[CallDescription] = None
    catch = None
    headers: Tuple[Tuple[str, str], ...] = ()
    warnings: Tuple[str, ...] = ()

    for key, value in do.items():
        with collector.catch():
            if key == Step.CATCH:
                catch = None if value is None else str(value)
            elif key == Step.HEADERS:
                headers = _parse_headers(value)
            elif key == Step.WARNINGS:
                warnings = _parse_warnings(value)
            elif key == Step.NODE_SELECTOR:
                logger.debug(f"忽略 {Step.NODE_SELECTOR}: {value}")
            elif not isinstance(key, str):
                raise InvalidStep(f"expected string key but found {key!r}")
            elif api_call is not None:
                raise InvalidStep(f"more than one API call in do step: `{api_call.operation}`, `{key}`")
            else:
                api_call = maker.make(parse_call_record(key, value))

    if api_call is None and not collector:
        collector.add(InvalidStep("no API call found in do step"))
    collector.raise_if_any()
    return DoStep(api_call=api_call, catch=catch, headers=headers, warnings=warnings)


def iter_do_steps(documents: List[Any]) -> Iterator[Tuple[str, int, Any]]:
    """
    遍历yaml测试文件中的所有 do 步骤，产出 (所属段落名, 步骤序号, do内容)
    每个document形如 {setup|teardown|<用例名>: [step, ...]}
    """
    for document in documents:
        if not isinstance(document, dict):
            continue
        for section, steps in document.items():
            if not isinstance(steps, list):
                continue
            for index, step in enumerate(steps):
                if isinstance(step, Mapping) and Step.DO in step:
                    yield section, index, step[Step.DO]
