# --coding:utf-8--
import re
from pathlib import Path
from typing import Dict, Iterable, Optional, Union

from pydantic import ValidationError

from callgen.log import logger
from callgen._constants import Spec
from callgen.exceptions import SchemaError
from callgen.utils.utils import iter_files, load_json
from callgen.maker.models import ApiSchema, BodyContract, Endpoint, ParamType, TypeKind, UrlTemplate

TypeMap = {
    'string': TypeKind.STRING,
    'text': TypeKind.STRING,
    'time': TypeKind.STRING,
    'date': TypeKind.STRING,
    'enum': TypeKind.ENUM,
    'list': TypeKind.LIST,
    'boolean': TypeKind.BOOLEAN,
    'int': TypeKind.INTEGER,
    'integer': TypeKind.INTEGER,
    'long': TypeKind.LONG,
    'float': TypeKind.FLOAT,
    'double': TypeKind.DOUBLE,
    'number': TypeKind.NUMBER,
}

NUMERIC_TYPES = {TypeKind.INTEGER, TypeKind.LONG, TypeKind.FLOAT, TypeKind.DOUBLE, TypeKind.NUMBER}

PATH_PARAM_PATTERN = re.compile(r'\{([^}]+)\}')


def parse_param_type(name: str, raw: Dict) -> ParamType:
    raw_type = (raw or {}).get('type', 'string')
    if isinstance(raw_type, str) and '|' in raw_type:
        raw_type = _union_member(raw_type)
    ty = TypeMap.get(raw_type)
    if ty is None:
        logger.warning(f"参数 {name} 的类型 {raw_type!r} 不受支持，按 string 处理")
        ty = TypeKind.STRING
    options = tuple(_option_str(o) for o in (raw or {}).get('options', []) or [])
    if ty == TypeKind.ENUM and not options:
        raise SchemaError(f"枚举参数 {name} 未声明 options")
    return ParamType(ty=ty, options=options)


def _union_member(raw_type: str) -> str:
    """
    联合声明取第一个成员，例如 "enum|list" -> enum；
    boolean 与数值类型的联合取数值类型（"boolean|long" -> long），数值类型也接受布尔值
    """
    members = raw_type.split('|')
    if 'boolean' in members:
        numeric = [m for m in members if TypeMap.get(m) in NUMERIC_TYPES]
        if numeric:
            return numeric[0]
    return members[0]


def _option_str(option) -> str:
    if isinstance(option, bool):
        return str(option).lower()
    return str(option)


def parse_params(raw_params: Optional[Dict]) -> Dict[str, ParamType]:
    return {
        name: parse_param_type(name, raw)
        for name, raw in (raw_params or {}).items()
    }


def parse_url_template(endpoint_name: str, raw_path: Dict) -> UrlTemplate:
    path = raw_path.get('path')
    if not path:
        raise SchemaError(f"{endpoint_name} 存在未声明 path 的 url")
    params = tuple(PATH_PARAM_PATTERN.findall(path))
    raw_parts = raw_path.get('parts') or {}
    missing = [p for p in params if p not in raw_parts]
    if missing:
        raise SchemaError(f"{endpoint_name} 的 url {path} 中的参数 {missing} 未在 parts 中声明")
    parts = {name: parse_param_type(name, raw_parts[name]) for name in params}
    return UrlTemplate(path=path, params=params, parts=parts)


def parse_body(raw_body: Optional[Dict]) -> Optional[BodyContract]:
    if raw_body is None:
        return None
    if raw_body.get('serialize') == Spec.BULK_SERIALIZE:
        return BodyContract.MULTI
    return BodyContract.SINGLE


def parse_endpoint(name: str, raw: Dict) -> Endpoint:
    raw_paths = (raw.get('url') or {}).get('paths') or []
    templates = tuple(parse_url_template(name, p) for p in raw_paths)
    try:
        return Endpoint(
            name=name,
            templates=templates,
            params=parse_params(raw.get('params')),
            body=parse_body(raw.get('body')),
        )
    except ValidationError as e:
        raise SchemaError(f"{name} 定义不合法: {e}") from e


class SchemaLoader:
    """从 REST API spec 文档构建 ApiSchema：每个文件形如 {<api名>: {url, params, body}}，_common.json 提供公共参数"""

    def __init__(self):
        self.endpoints: Dict[str, Endpoint] = {}
        self.common_params: Dict[str, ParamType] = {}

    def add_common(self, doc: Dict) -> "SchemaLoader":
        self.common_params.update(parse_params(doc.get('params')))
        return self

    def add_document(self, doc: Dict) -> "SchemaLoader":
        for name, raw in doc.items():
            if name.startswith('_'):
                continue
            if name in self.endpoints:
                raise SchemaError(f"api {name} 重复定义")
            endpoint = parse_endpoint(name, raw)
            logger.debug(f"已解析api: {name}，url模板数：{len(endpoint.templates)}")
            self.endpoints[name] = endpoint
        return self

    def add_file(self, path: Union[str, Path]) -> "SchemaLoader":
        path = Path(path)
        doc = load_json(path)
        if path.name == Spec.COMMON_FILE:
            return self.add_common(doc)
        return self.add_document(doc)

    def build(self) -> ApiSchema:
        return ApiSchema(endpoints=dict(self.endpoints), common_params=dict(self.common_params))

    @classmethod
    def from_documents(cls, docs: Iterable[Dict], common: Optional[Dict] = None) -> ApiSchema:
        loader = cls()
        if common:
            loader.add_common(common)
        for doc in docs:
            loader.add_document(doc)
        return loader.build()

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> ApiSchema:
        loader = cls()
        for file in iter_files(path, suffixes={'.json'}):
            loader.add_file(file)
        logger.info(f"已加载api定义 {len(loader.endpoints)} 个，公共参数 {len(loader.common_params)} 个")
        return loader.build()
