# --coding:utf-8--
import struct
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from callgen.exceptions import UnsupportedValueShape


class TypeKind(str, Enum):
    """参数声明类型，闭集"""
    STRING = 'string'
    ENUM = 'enum'
    LIST = 'list'
    BOOLEAN = 'boolean'
    INTEGER = 'integer'
    LONG = 'long'
    FLOAT = 'float'
    DOUBLE = 'double'
    NUMBER = 'number'


class ParamType(BaseModel):
    ty: TypeKind = TypeKind.STRING
    options: Tuple[str, ...] = ()
    model_config = ConfigDict(frozen=True)


class BodyContract(str, Enum):
    SINGLE = 'single'
    MULTI = 'multi'


class UrlTemplate(BaseModel):
    """一个endpoint的一种url形态，params按url中出现的顺序排列"""
    path: str
    params: Tuple[str, ...] = ()
    parts: Dict[str, ParamType] = Field(default_factory=dict)
    model_config = ConfigDict(frozen=True)

    @property
    def param_set(self) -> FrozenSet[str]:
        return frozenset(self.params)

    def position(self, name: str) -> int:
        return self.params.index(name)


class Endpoint(BaseModel):
    name: str
    templates: Tuple[UrlTemplate, ...]
    params: Dict[str, ParamType] = Field(default_factory=dict)
    body: Optional[BodyContract] = None
    model_config = ConfigDict(frozen=True)

    @field_validator('templates')
    @classmethod
    def check_unique_param_sets(cls, templates: Tuple[UrlTemplate, ...]) -> Tuple[UrlTemplate, ...]:
        if not templates:
            raise ValueError("endpoint must declare at least one url template")
        seen = {}
        for template in templates:
            key = template.param_set
            if key in seen:
                raise ValueError(
                    f"url templates `{seen[key]}` and `{template.path}` declare the same parts {sorted(key)}"
                )
            seen[key] = template.path
        return templates

    @property
    def part_names(self) -> FrozenSet[str]:
        names = set()
        for template in self.templates:
            names.update(template.params)
        return frozenset(names)


class ApiSchema(BaseModel):
    endpoints: Dict[str, Endpoint] = Field(default_factory=dict)
    common_params: Dict[str, ParamType] = Field(default_factory=dict)
    model_config = ConfigDict(frozen=True)

    def endpoint_for_api_call(self, call: str) -> Optional[Endpoint]:
        return self.endpoints.get(call)

    def is_param(self, endpoint: Endpoint, name: str) -> bool:
        return name in endpoint.params or name in self.common_params

    def param_type(self, endpoint: Endpoint, name: str) -> Optional[ParamType]:
        """endpoint自身声明的参数优先于公共参数"""
        ty = endpoint.params.get(name)
        if ty is None:
            ty = self.common_params.get(name)
        return ty


class RawKind(str, Enum):
    STRING = 'string'
    BOOLEAN = 'boolean'
    INTEGER = 'integer'
    SEQUENCE = 'sequence'
    MAPPING = 'mapping'


class RawValue(BaseModel):
    """yaml中未声明类型的值；sequence的value是RawValue元组，mapping原样保留"""
    kind: RawKind
    value: Any = None
    model_config = ConfigDict(frozen=True)

    @classmethod
    def of(cls, value: Any) -> "RawValue":
        # bool是int的子类，必须先判断
        if isinstance(value, bool):
            return cls(kind=RawKind.BOOLEAN, value=value)
        if isinstance(value, int):
            return cls(kind=RawKind.INTEGER, value=value)
        if isinstance(value, str):
            return cls(kind=RawKind.STRING, value=value)
        if isinstance(value, (list, tuple)):
            return cls(kind=RawKind.SEQUENCE, value=tuple(cls.of(v) for v in value))
        if isinstance(value, dict):
            return cls(kind=RawKind.MAPPING, value=value)
        raise UnsupportedValueShape(f"unsupported value {value!r}")

    def to_native(self) -> Any:
        if self.kind == RawKind.SEQUENCE:
            return [item.to_native() for item in self.value]
        return self.value

    def __str__(self):
        return repr(self.to_native())


class LiteralKind(str, Enum):
    STRING = 'string'
    INT32 = 'i32'
    INT64 = 'i64'
    FLOAT32 = 'f32'
    FLOAT64 = 'f64'
    BOOLEAN = 'bool'
    ENUM = 'enum'
    LIST = 'list'
    JSON = 'json'


INT32_MIN, INT32_MAX = -2 ** 31, 2 ** 31 - 1
INT64_MIN, INT64_MAX = -2 ** 63, 2 ** 63 - 1


class ValueLiteral(BaseModel):
    """
    带类型的字面量，交给外部emitter渲染
    - enum: enum_name为枚举类型名，value为成员名
    - list: items为元素
    - json: value为规范化后的json文本
    """
    kind: LiteralKind
    value: Any = None
    enum_name: Optional[str] = None
    items: Tuple["ValueLiteral", ...] = ()
    model_config = ConfigDict(frozen=True)

    @classmethod
    def string(cls, value: str) -> "ValueLiteral":
        return cls(kind=LiteralKind.STRING, value=value)

    @classmethod
    def int32(cls, value: int) -> "ValueLiteral":
        if not INT32_MIN <= value <= INT32_MAX:
            raise ValueError(f"{value} does not fit in a 32-bit integer")
        return cls(kind=LiteralKind.INT32, value=value)

    @classmethod
    def int64(cls, value: int) -> "ValueLiteral":
        if not INT64_MIN <= value <= INT64_MAX:
            raise ValueError(f"{value} does not fit in a 64-bit integer")
        return cls(kind=LiteralKind.INT64, value=value)

    @classmethod
    def float32(cls, value: float) -> "ValueLiteral":
        try:
            narrowed = struct.unpack('f', struct.pack('f', float(value)))[0]
        except (OverflowError, struct.error) as e:
            raise ValueError(f"{value} does not fit in a 32-bit float") from e
        return cls(kind=LiteralKind.FLOAT32, value=narrowed)

    @classmethod
    def float64(cls, value: float) -> "ValueLiteral":
        try:
            value = float(value)
        except OverflowError as e:
            raise ValueError(f"{value} does not fit in a 64-bit float") from e
        return cls(kind=LiteralKind.FLOAT64, value=value)

    @classmethod
    def boolean(cls, value: bool) -> "ValueLiteral":
        return cls(kind=LiteralKind.BOOLEAN, value=value)

    @classmethod
    def enum(cls, enum_name: str, variant: str) -> "ValueLiteral":
        return cls(kind=LiteralKind.ENUM, enum_name=enum_name, value=variant)

    @classmethod
    def list_of(cls, items) -> "ValueLiteral":
        return cls(kind=LiteralKind.LIST, items=tuple(items))

    @classmethod
    def document(cls, text: str) -> "ValueLiteral":
        return cls(kind=LiteralKind.JSON, value=text)


ValueLiteral.model_rebuild()


class CallRecord(BaseModel):
    """一个do步骤中的api调用：调用名 + 参数映射（保持yaml中的声明顺序）"""
    call: str
    args: Dict[str, Any] = Field(default_factory=dict)

    @property
    def namespace(self) -> Optional[str]:
        if '.' in self.call:
            return self.call.split('.', 1)[0]
        return None


class ClassifiedArgs(BaseModel):
    parts: List[Tuple[str, Any]] = Field(default_factory=list)
    params: List[Tuple[str, Any]] = Field(default_factory=list)
    body: Any = None
    has_body: bool = False
    ignore: Optional[int] = None


class PartsSelector(BaseModel):
    """选中的url模板：enum_name::variant(values...)"""
    enum_name: str
    variant: str
    path: str
    params: Tuple[str, ...] = ()
    values: Tuple[ValueLiteral, ...] = ()
    model_config = ConfigDict(frozen=True)


class ParamAssignment(BaseModel):
    name: str
    ident: str
    value: ValueLiteral
    model_config = ConfigDict(frozen=True)


class EncodedBody(BaseModel):
    contract: BodyContract
    documents: Tuple[ValueLiteral, ...] = ()
    model_config = ConfigDict(frozen=True)


class CallDescription(BaseModel):
    namespace: Optional[str] = None
    operation: str
    function: Tuple[str, ...]
    parts: Optional[PartsSelector] = None
    params: Tuple[ParamAssignment, ...] = ()
    body: Optional[EncodedBody] = None
    ignore: Optional[int] = None
    model_config = ConfigDict(frozen=True)


class DoStep(BaseModel):
    api_call: CallDescription
    catch: Optional[str] = None
    headers: Tuple[Tuple[str, str], ...] = ()
    warnings: Tuple[str, ...] = ()
    model_config = ConfigDict(frozen=True)
