import json
from pathlib import Path

import yaml

JSON_SUFFIXES = (".json",)


def load_yaml(path):
    """读取 YAML；空文件返回 None"""
    text = Path(path).read_text(encoding="utf-8")
    return yaml.safe_load(text)


def dump_yaml(data, path):
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(yaml.safe_dump(data, sort_keys=False, allow_unicode=True), encoding="utf-8")
    return target


def load_document(path):
    """按扩展名读取配置快照：.json 用 json，其余按 YAML（JSON 的超集）解析"""
    path = Path(path)
    if path.suffix.lower() in JSON_SUFFIXES:
        return json.loads(path.read_text(encoding="utf-8"))
    return load_yaml(path)
