from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .diff.differ import DiffRecord, diff_json
from .model.viewer import ViewerConfig, build_viewer_config
from .utils.io import dump_yaml, load_document, load_yaml

logger = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, memoryview]
PathLike = Union[str, Path]
DocumentLike = Union[Dict[str, Any], PathLike, BytesLike]


def _load_any(source: DocumentLike) -> Any:
    if isinstance(source, dict):
        return source
    if isinstance(source, (bytes, bytearray, memoryview)):
        return yaml.safe_load(bytes(source).decode("utf-8"))
    if isinstance(source, (str, Path)):
        return load_document(source)
    raise ValueError(f"unsupported document source: {type(source).__name__}")


def diff_files(new: DocumentLike, old: DocumentLike) -> List[DiffRecord]:
    """读取两份配置快照（dict / 路径 / 字节）并对比，参数顺序与 diff_json 一致：先新后旧"""
    new_data = _load_any(new)
    old_data = _load_any(old)
    records = diff_json(new_data, old_data)
    logger.debug("diff produced %d records", len(records))
    return records


def load_viewer_config(source: Optional[Union[Dict[str, Any], PathLike]] = None) -> ViewerConfig:
    if source is None or isinstance(source, dict):
        return build_viewer_config(source)
    return build_viewer_config(load_yaml(source))


def dump_viewer_config(config: ViewerConfig, output: PathLike) -> Path:
    return dump_yaml(config.to_dict(), output)
