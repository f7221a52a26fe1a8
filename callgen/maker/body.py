# --coding:utf-8--
import json
from datetime import date, datetime, time
from typing import Any

from callgen.log import logger
from callgen.exceptions import UnsupportedValueShape
from callgen.maker.models import BodyContract, EncodedBody, Endpoint, ValueLiteral


def _json_default(value: Any):
    # yaml.safe_load 会把形如 2020-01-01 的值解析为日期
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    raise TypeError(f"{value!r} is not JSON serializable")


def canonical_json(value: Any) -> str:
    """紧凑、key有序的json文本，同样的输入总是得到同样的输出"""
    try:
        return json.dumps(value, separators=(',', ':'), sort_keys=True, ensure_ascii=False,
                          default=_json_default)
    except (TypeError, ValueError) as e:
        raise UnsupportedValueShape(f"body cannot be encoded as json: {e}") from e


def body_contract(endpoint: Endpoint) -> BodyContract:
    if endpoint.body is None:
        logger.warning(f"{endpoint.name} 未声明body，按单个json文档处理")
        return BodyContract.SINGLE
    return endpoint.body


def encode_body(endpoint: Endpoint, value: Any) -> EncodedBody:
    """
    multi(bulk类接口):
        - 字符串包装为单元素序列
        - 列表中字符串元素视为已序列化的行，原样保留，其余元素编码为json文档
        - 单个mapping包装为单元素序列
    single:
        - 字符串原样作为文档
        - 其余值（包括列表）整体编码为一个json文档
    """
    contract = body_contract(endpoint)

    if contract == BodyContract.MULTI:
        if isinstance(value, str):
            documents = [ValueLiteral.string(value)]
        else:
            items = value if isinstance(value, (list, tuple)) else [value]
            documents = [
                ValueLiteral.string(item) if isinstance(item, str) else ValueLiteral.document(canonical_json(item))
                for item in items
            ]
        return EncodedBody(contract=contract, documents=tuple(documents))

    if isinstance(value, str):
        document = ValueLiteral.string(value)
    else:
        document = ValueLiteral.document(canonical_json(value))
    return EncodedBody(contract=contract, documents=(document,))
