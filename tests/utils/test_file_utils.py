import json

import pytest

from callgen.exceptions import CallGenException
from callgen.utils.utils import FileNotFound, iter_files, load_json, load_yaml, load_yaml_documents


def test_load_yaml_documents_skips_empty(tmp_path):
    file = tmp_path / "10_basic.yml"
    file.write_text("---\nsetup: []\n---\n---\n\"Basic\":\n  - do: {ping: {}}\n", encoding="utf-8")
    documents = load_yaml_documents(file)
    assert documents == [{"setup": []}, {"Basic": [{"do": {"ping": {}}}]}]


def test_load_yaml_and_json(tmp_path):
    yaml_file = tmp_path / "callgen.yaml"
    yaml_file.write_text("generator:\n  workers: 2\n", encoding="utf-8")
    json_file = tmp_path / "ping.json"
    json_file.write_text(json.dumps({"ping": {}}), encoding="utf-8")
    assert load_yaml(yaml_file) == {"generator": {"workers": 2}}
    assert load_json(json_file) == {"ping": {}}


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFound) as exc_info:
        load_json(tmp_path / "nope.json")
    assert isinstance(exc_info.value, CallGenException)
    assert isinstance(exc_info.value, FileNotFoundError)
    assert "nope.json" in str(exc_info.value)


def test_iter_files(tmp_path):
    (tmp_path / "b").mkdir()
    (tmp_path / "b" / "2.json").write_text("{}", encoding="utf-8")
    (tmp_path / "1.JSON").write_text("{}", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("", encoding="utf-8")
    files = list(iter_files(tmp_path, suffixes={".json"}))
    assert [f.name for f in files] == ["1.JSON", "2.json"]
    assert list(iter_files(tmp_path / "notes.txt", suffixes={".json"})) == [tmp_path / "notes.txt"]


def test_iter_files_missing(tmp_path):
    with pytest.raises(FileNotFound):
        list(iter_files(tmp_path / "missing", suffixes={".json"}))
