# --coding:utf-8--
from typing import Any, List, Mapping, Optional, Tuple

from callgen.log import logger
from callgen.exceptions import ErrorCollector, GenerationErrors, UnknownOperation
from callgen.maker.body import encode_body
from callgen.maker.classifier import classify
from callgen.maker.coercer import ValueCoercer
from callgen.maker.config import GeneratorConfig
from callgen.maker.models import (ApiSchema, CallDescription, CallRecord, EncodedBody, Endpoint,
                                  ParamAssignment, PartsSelector)
from callgen.maker.resolver import TemplateResolver
from callgen.maker.utils import valid_name


def assemble(record: CallRecord,
             parts: Optional[PartsSelector],
             params: List[ParamAssignment],
             body: Optional[EncodedBody],
             ignore: Optional[int] = None) -> CallDescription:
    return CallDescription(
        namespace=record.namespace,
        operation=record.call,
        function=tuple(record.call.split('.')),
        parts=parts,
        params=tuple(params),
        body=body,
        ignore=ignore,
    )


class ApiCallMaker:
    """
    把一个调用记录翻译为带类型的调用描述：
    classify -> resolve url template / coerce params / encode body -> assemble

    同一个调用记录中相互独立的错误会被全部收集后以 GenerationErrors 抛出，
    api不存在时直接失败。
    """

    def __init__(self, schema: ApiSchema, config: GeneratorConfig = None):
        self.schema = schema
        self.config = config or GeneratorConfig()
        self.coercer = ValueCoercer(self.config)
        self.resolver = TemplateResolver(self.coercer)

    def make(self, record: CallRecord) -> CallDescription:
        endpoint = self.schema.endpoint_for_api_call(record.call)
        if endpoint is None:
            raise GenerationErrors([UnknownOperation(record.call)])

        collector = ErrorCollector()
        classified = classify(self.schema, endpoint, record.args, collector=collector)

        parts = None
        with collector.catch():
            parts = self.resolver.resolve(endpoint, classified.parts)

        params = self.make_params(endpoint, classified.params, collector)

        body = None
        if classified.has_body:
            with collector.catch():
                body = encode_body(endpoint, classified.body)

        if collector:
            logger.debug(f"{record.call}: 生成失败，错误数 {len(collector.errors)}")
        collector.raise_if_any()
        return assemble(record, parts, params, body, classified.ignore)

    def make_call(self, call: str, args: Mapping[str, Any] = None) -> CallDescription:
        return self.make(CallRecord(call=call, args=dict(args or {})))

    def make_params(self, endpoint: Endpoint, params: List[Tuple[str, Any]],
                    collector: ErrorCollector) -> List[ParamAssignment]:
        assignments = []
        for name, value in params:
            param_type = self.schema.param_type(endpoint, name)
            with collector.catch():
                literal = self.coercer.coerce(name, value, param_type)
                assignments.append(ParamAssignment(name=name, ident=valid_name(name), value=literal))
        return assignments
