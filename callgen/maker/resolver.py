# --coding:utf-8--
from typing import Any, List, Optional, Sequence, Tuple

from callgen.log import logger
from callgen.exceptions import AmbiguousOrMissingTemplate, ErrorCollector, UnresolvedArgument
from callgen.maker.coercer import ValueCoercer
from callgen.maker.models import Endpoint, ParamType, PartsSelector, UrlTemplate


class TemplateResolver:
    """根据调用中出现的 url part 名称选出唯一的url模板，并按模板声明顺序生成part字面量"""

    NONE_VARIANT = "None"

    def __init__(self, coercer: ValueCoercer):
        self.coercer = coercer
        self.naming = coercer.config.naming

    def enum_name(self, endpoint: Endpoint) -> str:
        return f"{self.naming(endpoint.name)}Parts"

    def variant_name(self, template: UrlTemplate) -> str:
        if not template.params:
            return self.NONE_VARIANT
        return "".join(self.naming(p) for p in template.params)

    def select(self, endpoint: Endpoint, names: Sequence[str]) -> Optional[UrlTemplate]:
        """
        没有part时，只有存在无参数模板才合法，且仅有一个模板时不需要选择器（返回None）。
        有part时，候选模板的参数集合必须与传入的名称集合完全一致。
        """
        templates = endpoint.templates
        supplied = frozenset(names)

        if not supplied:
            if not any(not t.params for t in templates):
                raise AmbiguousOrMissingTemplate(f"no path for `{endpoint.name}` with no URL parts")
            if len(templates) == 1:
                return None
            return next(t for t in templates if not t.params)

        candidates = [
            t for t in templates
            if len(t.params) == len(supplied) and all(p in supplied for p in t.params)
        ]
        if len(candidates) == 1:
            return candidates[0]

        collector = ErrorCollector()
        for name in names:
            if name not in endpoint.part_names:
                collector.add(UnresolvedArgument(name))
        if candidates:
            collector.add(AmbiguousOrMissingTemplate(
                f"ambiguous path for `{endpoint.name}` with URL parts `{', '.join(names)}`: "
                f"{[t.path for t in candidates]}"
            ))
        else:
            collector.add(AmbiguousOrMissingTemplate(
                f"no path for `{endpoint.name}` with URL parts `{', '.join(names)}`"
            ))
        collector.raise_if_any()

    def resolve(self, endpoint: Endpoint, parts: List[Tuple[str, Any]]) -> Optional[PartsSelector]:
        template = self.select(endpoint, [name for name, _ in parts])
        if template is None:
            return None
        logger.debug(f"{endpoint.name}: 选中url模板 {template.path}")

        # 不依赖yaml中part的书写顺序，以模板中的声明顺序为准
        ordered = sorted(parts, key=lambda item: template.position(item[0]))
        collector = ErrorCollector()
        values = []
        for name, value in ordered:
            with collector.catch():
                values.append(self.coercer.coerce(name, value, template.parts.get(name, ParamType()), url_part=True))
        collector.raise_if_any()

        return PartsSelector(
            enum_name=self.enum_name(endpoint),
            variant=self.variant_name(template),
            path=template.path,
            params=template.params,
            values=tuple(values),
        )
