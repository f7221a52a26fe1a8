# tests/conftest.py
import json
import sys
from pathlib import Path

import pytest

project_root_dir = Path(__file__).parent.parent
if str(project_root_dir) not in sys.path:
    sys.path.insert(0, str(project_root_dir))

from callgen.maker.assembler import ApiCallMaker
from callgen.maker.config import GeneratorConfig
from callgen.maker.schema import SchemaLoader


COMMON_DOC = {
    "documentation": {"description": "Parameters that are accepted by all API endpoints."},
    "params": {
        "pretty": {"type": "boolean"},
        "human": {"type": "boolean"},
        "error_trace": {"type": "boolean"},
        "filter_path": {"type": "list"},
    }
}

API_DOCS = [
    {
        "ping": {
            "url": {"paths": [{"path": "/", "methods": ["HEAD"]}]},
            "params": {},
        }
    },
    {
        "get": {
            "url": {"paths": [{
                "path": "/{index}/_doc/{id}",
                "methods": ["GET"],
                "parts": {"id": {"type": "string"}, "index": {"type": "string"}},
            }]},
            "params": {
                "realtime": {"type": "boolean"},
                "version": {"type": "long"},
                "_source": {"type": "list"},
            },
        }
    },
    {
        "index": {
            "url": {"paths": [
                {"path": "/{index}/_doc/{id}", "methods": ["PUT"],
                 "parts": {"id": {"type": "string"}, "index": {"type": "string"}}},
                {"path": "/{index}/_doc", "methods": ["POST"],
                 "parts": {"index": {"type": "string"}}},
            ]},
            "params": {
                "refresh": {"type": "enum", "options": ["true", "false", "wait_for"]},
                "routing": {"type": "string"},
            },
            "body": {"description": "The document", "required": True},
        }
    },
    {
        "search": {
            "url": {"paths": [
                {"path": "/_search", "methods": ["GET", "POST"]},
                {"path": "/{index}/_search", "methods": ["GET", "POST"],
                 "parts": {"index": {"type": "list"}}},
            ]},
            "params": {
                "from": {"type": "number"},
                "size": {"type": "number"},
                "expand_wildcards": {"type": "enum", "options": ["open", "closed", "hidden", "none", "all"]},
                "search_type": {"type": "enum", "options": ["query_then_fetch", "dfs_query_then_fetch"]},
                "track_total_hits": {"type": "boolean|long"},
                "min_score": {"type": "float"},
                "timeout": {"type": "time"},
                "q": {"type": "string"},
            },
            "body": {"description": "The search definition using the Query DSL"},
        }
    },
    {
        "bulk": {
            "url": {"paths": [
                {"path": "/_bulk", "methods": ["POST", "PUT"]},
                {"path": "/{index}/_bulk", "methods": ["POST", "PUT"],
                 "parts": {"index": {"type": "string"}}},
            ]},
            "params": {
                "refresh": {"type": "enum", "options": ["true", "false", "wait_for"]},
            },
            "body": {"description": "The operation definition and data", "required": True, "serialize": "bulk"},
        }
    },
    {
        "snapshot.create": {
            "url": {"paths": [{
                "path": "/_snapshot/{repository}/{snapshot}",
                "methods": ["PUT", "POST"],
                "parts": {"repository": {"type": "string"}, "snapshot": {"type": "string"}},
            }]},
            "params": {"wait_for_completion": {"type": "boolean"}},
            "body": {"description": "The snapshot definition"},
        }
    },
    {
        "cluster.health": {
            "url": {"paths": [
                {"path": "/_cluster/health", "methods": ["GET"]},
                {"path": "/_cluster/health/{index}", "methods": ["GET"],
                 "parts": {"index": {"type": "list"}}},
            ]},
            "params": {
                "level": {"type": "enum", "options": ["cluster", "indices", "shards"]},
                "wait_for_status": {"type": "enum", "options": ["green", "yellow", "red"]},
                "wait_for_active_shards": {"type": "string"},
                "timeout": {"type": "time"},
            },
        }
    },
    {
        "indices.delete": {
            "url": {"paths": [{
                "path": "/{index}",
                "methods": ["DELETE"],
                "parts": {"index": {"type": "list"}},
            }]},
            "params": {
                "expand_wildcards": {"type": "enum", "options": ["open", "closed", "hidden", "none", "all"]},
                "ignore_unavailable": {"type": "boolean"},
            },
        }
    },
]


@pytest.fixture
def common_doc():
    return json.loads(json.dumps(COMMON_DOC))


@pytest.fixture
def api_docs():
    return json.loads(json.dumps(API_DOCS))


@pytest.fixture
def schema(api_docs, common_doc):
    return SchemaLoader.from_documents(api_docs, common=common_doc)


@pytest.fixture
def config():
    return GeneratorConfig()


@pytest.fixture
def maker(schema, config):
    return ApiCallMaker(schema, config)


@pytest.fixture
def spec_dir(tmp_path, api_docs, common_doc):
    """按 REST API spec 的目录结构落盘：每个api一个json文件，外加 _common.json"""
    directory = tmp_path / "api"
    directory.mkdir()
    (directory / "_common.json").write_text(json.dumps(common_doc), encoding="utf-8")
    for doc in api_docs:
        name = next(iter(doc))
        (directory / f"{name}.json").write_text(json.dumps(doc), encoding="utf-8")
    return directory
