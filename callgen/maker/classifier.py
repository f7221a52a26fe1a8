# --coding:utf-8--
from typing import Any, Mapping, Optional

from callgen.log import logger
from callgen._constants import Arg
from callgen.exceptions import ErrorCollector, TypeCoercionFailure
from callgen.maker.models import ApiSchema, ClassifiedArgs, Endpoint


def parse_ignore(value: Any) -> Optional[int]:
    """ignore 可以是单个状态码或状态码列表，列表只保留第一个"""
    if isinstance(value, (list, tuple)):
        if not value:
            raise TypeCoercionFailure("expected at least one status code for `ignore` but found []")
        if len(value) > 1:
            logger.debug(f"ignore 只保留第一个状态码: {value}")
        value = value[0]
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeCoercionFailure(f"expected integer status code for `ignore` but found {value!r}")
    return value


def classify(schema: ApiSchema, endpoint: Endpoint, args: Mapping[str, Any],
             collector: Optional[ErrorCollector] = None) -> ClassifiedArgs:
    """
    把调用参数分为 url part、query 参数、body 和 ignore 四类，保持参数在yaml中的声明顺序。
    声明为参数（包括公共参数）的名称优先归为 query 参数，其余未知名称一律作为 url part 候选，交给模板匹配判定。
    传入collector时错误累积到其中，否则直接抛出
    """
    classified = ClassifiedArgs()
    owns_collector = collector is None
    if owns_collector:
        collector = ErrorCollector()
    for name, value in args.items():
        if schema.is_param(endpoint, name):
            classified.params.append((name, value))
        elif name == Arg.BODY:
            classified.body = value
            classified.has_body = True
        elif name == Arg.IGNORE:
            with collector.catch():
                classified.ignore = parse_ignore(value)
        else:
            classified.parts.append((name, value))

    logger.debug(
        f"{endpoint.name}: parts={[n for n, _ in classified.parts]} "
        f"params={[n for n, _ in classified.params]} body={classified.has_body}"
    )
    if owns_collector:
        collector.raise_if_any()
    return classified
