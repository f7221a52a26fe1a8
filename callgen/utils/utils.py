import json
from pathlib import Path
from typing import Any, Dict, Iterator, List, Union

import yaml

from callgen.exceptions import CallGenException


class FileNotFound(FileNotFoundError, CallGenException):
    def __init__(self, path):
        self.path = path

    def __str__(self):
        return f'文件未找到：{self.path}，请确保该文件存在'


def ensure_file_path(path: Union[str, Path]) -> Path:
    path = Path(path)
    if not path.exists():
        raise FileNotFound(path)
    return path


def load_yaml(yaml_file):
    with open(ensure_file_path(yaml_file), encoding='utf-8') as f:
        return yaml.safe_load(f)


def load_yaml_documents(yaml_file) -> List[Any]:
    """yaml测试文件通常由多个document组成（setup/teardown/用例）"""
    with open(ensure_file_path(yaml_file), encoding='utf-8') as f:
        return [doc for doc in yaml.safe_load_all(f) if doc is not None]


def load_json(json_file) -> Dict:
    with open(ensure_file_path(json_file), encoding='utf-8') as f:
        return json.load(f)


def iter_files(path: Union[str, Path], suffixes) -> Iterator[Path]:
    """path为文件时直接返回，为目录时按文件名排序递归遍历"""
    path = ensure_file_path(path)
    if path.is_file():
        yield path
        return
    for file in sorted(path.rglob("*")):
        if file.is_file() and file.suffix.lower() in suffixes:
            yield file
