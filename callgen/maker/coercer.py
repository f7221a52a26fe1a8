# --coding:utf-8--
"""
把yaml中未声明类型的值转换为目标参数声明类型的字面量。

转换规则集中在 DISPATCH 表中：(RawKind, TypeKind) -> 转换函数，
每一种组合都显式登记，不支持的组合登记为 _mismatch / _unsupported。
"""
import math
import re
from typing import Any, Callable, Dict, List, Optional

from attrs import define

from callgen.log import logger
from callgen.exceptions import (ErrorCollector, EnumValidationFailure, TypeCoercionFailure,
                                UnsupportedValueShape)
from callgen.maker.config import GeneratorConfig
from callgen.maker.models import ParamType, RawKind, RawValue, TypeKind, ValueLiteral

INTEGER_PATTERN = re.compile(r'^[+-]?\d+$')
FLOAT_PATTERN = re.compile(r'^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$')


@define(frozen=True)
class CoercionContext:
    name: str
    param_type: ParamType
    enum_name: str
    naming: Callable[[str], str]
    url_part: bool = False
    wildcard: bool = False
    empty_variant: Optional[str] = None

    @property
    def ty(self) -> TypeKind:
        return self.param_type.ty


Handler = Callable[[CoercionContext, RawValue], ValueLiteral]


def _mismatch(ctx: CoercionContext, raw: RawValue) -> ValueLiteral:
    raise TypeCoercionFailure(
        f"cannot convert {raw.kind.value} value {raw} to {ctx.ty.value} for `{ctx.name}`"
    )


def _unsupported(ctx: CoercionContext, raw: RawValue) -> ValueLiteral:
    raise UnsupportedValueShape(f"unsupported value {raw} for `{ctx.name}`")


def enum_variant(ctx: CoercionContext, value: str) -> ValueLiteral:
    options = ctx.param_type.options
    if value == "":
        if ctx.empty_variant is None:
            raise EnumValidationFailure(options, value)
        return ValueLiteral.enum(ctx.enum_name, ctx.naming(ctx.empty_variant))
    if value in options:
        return ValueLiteral.enum(ctx.enum_name, ctx.naming(value))
    # 大小写/分词形式不同但规范化后相同，例如 Open 与 open
    normalized = ctx.naming(value)
    for option in options:
        if ctx.naming(option) == normalized:
            return ValueLiteral.enum(ctx.enum_name, normalized)
    raise EnumValidationFailure(options, value)


def _enum_variants(ctx: CoercionContext, values: List[str]) -> ValueLiteral:
    collector = ErrorCollector()
    variants = []
    for value in values:
        with collector.catch():
            variants.append(enum_variant(ctx, value))
    collector.raise_if_any()
    return ValueLiteral.list_of(variants)


def _string_items(ctx: CoercionContext, raw: RawValue) -> List[str]:
    """sequence中只支持字符串元素"""
    collector = ErrorCollector()
    items = []
    for item in raw.value:
        if item.kind == RawKind.STRING:
            items.append(item.value)
        else:
            collector.add(UnsupportedValueShape(f"unsupported array value {item} for `{ctx.name}`"))
    collector.raise_if_any()
    return items


def _int32(ctx: CoercionContext, value: int) -> ValueLiteral:
    try:
        return ValueLiteral.int32(value)
    except ValueError as e:
        raise TypeCoercionFailure(f"{e} for `{ctx.name}`") from e


def _int64(ctx: CoercionContext, value: int) -> ValueLiteral:
    try:
        return ValueLiteral.int64(value)
    except ValueError as e:
        raise TypeCoercionFailure(f"{e} for `{ctx.name}`") from e


def _float32(ctx: CoercionContext, value) -> ValueLiteral:
    try:
        return ValueLiteral.float32(value)
    except ValueError as e:
        raise TypeCoercionFailure(f"{e} for `{ctx.name}`") from e


def _float64(ctx: CoercionContext, value) -> ValueLiteral:
    try:
        return ValueLiteral.float64(value)
    except ValueError as e:
        raise TypeCoercionFailure(f"{e} for `{ctx.name}`") from e


def _parse_int(ctx: CoercionContext, raw: RawValue) -> int:
    if not INTEGER_PATTERN.match(raw.value):
        raise TypeCoercionFailure(f"cannot parse {raw} as {ctx.ty.value} for `{ctx.name}`")
    return int(raw.value)


def _parse_float(ctx: CoercionContext, raw: RawValue) -> float:
    if not FLOAT_PATTERN.match(raw.value):
        raise TypeCoercionFailure(f"cannot parse {raw} as {ctx.ty.value} for `{ctx.name}`")
    value = float(raw.value)
    if math.isinf(value):
        raise TypeCoercionFailure(f"{raw} does not fit in a 64-bit float for `{ctx.name}`")
    return value


# ---- string ----

def _string_to_string(ctx, raw):
    return ValueLiteral.string(raw.value)


def _string_to_enum(ctx, raw):
    if ctx.wildcard:
        return _enum_variants(ctx, raw.value.split(','))
    return enum_variant(ctx, raw.value)


def _string_to_list(ctx, raw):
    return ValueLiteral.list_of(ValueLiteral.string(v) for v in raw.value.split(','))


def _string_to_boolean(ctx, raw):
    if raw.value not in ('true', 'false'):
        raise TypeCoercionFailure(f"cannot parse {raw} as boolean for `{ctx.name}`")
    return ValueLiteral.boolean(raw.value == 'true')


def _string_to_int32(ctx, raw):
    return _int32(ctx, _parse_int(ctx, raw))


def _string_to_int64(ctx, raw):
    return _int64(ctx, _parse_int(ctx, raw))


def _string_to_float32(ctx, raw):
    return _float32(ctx, _parse_float(ctx, raw))


def _string_to_float64(ctx, raw):
    return _float64(ctx, _parse_float(ctx, raw))


# ---- boolean ----

def _boolean_passthrough(ctx, raw):
    return ValueLiteral.boolean(raw.value)


def _boolean_to_enum(ctx, raw):
    return enum_variant(ctx, str(raw.value).lower())


def _boolean_to_list(ctx, raw):
    # 类似 _source 的 true|false|字符串列表 联合类型，暂时只包装为单元素列表
    return ValueLiteral.list_of([ValueLiteral.string(str(raw.value).lower())])


def _boolean_to_string(ctx, raw):
    if ctx.url_part:
        return ValueLiteral.string(str(raw.value).lower())
    return ValueLiteral.boolean(raw.value)


# ---- integer ----

def _integer_to_int32(ctx, raw):
    return _int32(ctx, raw.value)


def _integer_to_int64(ctx, raw):
    return _int64(ctx, raw.value)


def _integer_to_float32(ctx, raw):
    return _float32(ctx, raw.value)


def _integer_to_float64(ctx, raw):
    return _float64(ctx, raw.value)


def _integer_to_string(ctx, raw):
    return ValueLiteral.string(str(raw.value))


# ---- sequence ----

def _sequence_to_enum(ctx, raw):
    return _enum_variants(ctx, _string_items(ctx, raw))


def _sequence_to_list(ctx, raw):
    return ValueLiteral.list_of(ValueLiteral.string(v) for v in _string_items(ctx, raw))


def _sequence_to_string(ctx, raw):
    # schema声明为string，但测试中按列表传入（例如 security.get_role_mapping 的 name）
    return ValueLiteral.string(','.join(_string_items(ctx, raw)))


DISPATCH: Dict[RawKind, Dict[TypeKind, Handler]] = {
    RawKind.STRING: {
        TypeKind.STRING: _string_to_string,
        TypeKind.ENUM: _string_to_enum,
        TypeKind.LIST: _string_to_list,
        TypeKind.BOOLEAN: _string_to_boolean,
        TypeKind.INTEGER: _string_to_int32,
        TypeKind.NUMBER: _string_to_int32,
        TypeKind.LONG: _string_to_int64,
        TypeKind.FLOAT: _string_to_float32,
        TypeKind.DOUBLE: _string_to_float64,
    },
    RawKind.BOOLEAN: {
        TypeKind.STRING: _boolean_to_string,
        TypeKind.ENUM: _boolean_to_enum,
        TypeKind.LIST: _boolean_to_list,
        TypeKind.BOOLEAN: _boolean_passthrough,
        TypeKind.INTEGER: _boolean_passthrough,
        TypeKind.NUMBER: _boolean_passthrough,
        TypeKind.LONG: _boolean_passthrough,
        TypeKind.FLOAT: _boolean_passthrough,
        TypeKind.DOUBLE: _boolean_passthrough,
    },
    RawKind.INTEGER: {
        TypeKind.STRING: _integer_to_string,
        TypeKind.ENUM: _mismatch,
        TypeKind.LIST: _mismatch,
        TypeKind.BOOLEAN: _mismatch,
        TypeKind.INTEGER: _integer_to_int32,
        TypeKind.NUMBER: _integer_to_int32,
        TypeKind.LONG: _integer_to_int64,
        TypeKind.FLOAT: _integer_to_float32,
        TypeKind.DOUBLE: _integer_to_float64,
    },
    RawKind.SEQUENCE: {
        TypeKind.STRING: _sequence_to_string,
        TypeKind.ENUM: _sequence_to_enum,
        TypeKind.LIST: _sequence_to_list,
        TypeKind.BOOLEAN: _mismatch,
        TypeKind.INTEGER: _mismatch,
        TypeKind.NUMBER: _mismatch,
        TypeKind.LONG: _mismatch,
        TypeKind.FLOAT: _mismatch,
        TypeKind.DOUBLE: _mismatch,
    },
    RawKind.MAPPING: {ty: _unsupported for ty in TypeKind},
}


class ValueCoercer:
    def __init__(self, config: GeneratorConfig = None):
        self.config = config or GeneratorConfig()

    def context(self, name: str, param_type: ParamType, url_part: bool = False) -> CoercionContext:
        naming = self.config.naming
        return CoercionContext(
            name=name,
            param_type=param_type,
            enum_name=naming(name),
            naming=naming,
            url_part=url_part,
            wildcard=name in self.config.wildcard_params,
            empty_variant=self.config.empty_enum_variants.get(name),
        )

    def coerce(self, name: str, value: Any, param_type: ParamType, url_part: bool = False) -> ValueLiteral:
        try:
            raw = RawValue.of(value)
        except UnsupportedValueShape as e:
            raise UnsupportedValueShape(f"{e} for `{name}`") from e
        ctx = self.context(name, param_type, url_part=url_part)
        handler = DISPATCH[raw.kind][param_type.ty]
        literal = handler(ctx, raw)
        logger.trace(f"{name}: {raw.kind.value} {raw} -> {param_type.ty.value} {literal.kind.value}")
        return literal
