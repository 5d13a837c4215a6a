from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Optional

from ..constants import ROOT_KEY, DiffStatus
from ..utils.collation import collation_key
from ..utils.dicts import is_array, is_plain_object

logger = logging.getLogger(__name__)


class CyclicInputError(ValueError):
    """输入的对象图中存在环（对象直接或间接引用自身）"""


@dataclass(frozen=True)
class DiffRecord:
    key: str
    status: DiffStatus
    old_value: Optional[str] = None
    new_value: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"key": self.key, "status": self.status.value}
        if self.old_value is not None:
            data["oldValue"] = self.old_value
        if self.new_value is not None:
            data["newValue"] = self.new_value
        return data


def _enter(value, active: set):
    marker = id(value)
    if marker in active:
        raise CyclicInputError("cyclic reference detected in input object graph")
    active.add(marker)
    return marker


def _format_number(value) -> str:
    """数字文本与 JS 的 Number#toString 一致：1e-7 <= |x| < 1e21 用定点，其余用 e+N / e-N"""
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    # repr 给出可往返的最短有效数字
    sign, digits, exponent = Decimal(repr(value)).as_tuple()
    while len(digits) > 1 and digits[-1] == 0:
        digits = digits[:-1]
        exponent += 1
    s = "".join(str(d) for d in digits)
    k = len(s)
    n = k + exponent
    if k <= n <= 21:
        text = s + "0" * (n - k)
    elif 0 < n <= 21:
        text = s[:n] + "." + s[n:]
    elif -6 < n <= 0:
        text = "0." + "0" * (-n) + s
    else:
        e = n - 1
        mantissa = s if k == 1 else s[0] + "." + s[1:]
        text = f"{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"
    return "-" + text if sign else text


def _key_text(key) -> str:
    # YAML 允许非字符串键，按 JS 属性名的写法转成文本
    if isinstance(key, str):
        return key
    if key is None:
        return "null"
    return stringify(key)


def _encode(value, active: set) -> str:
    """与 JSON.stringify 一致的紧凑 JSON 文本；非有限数写作 null"""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_number(value) if math.isfinite(value) else "null"
    if isinstance(value, int):
        return str(value)
    if is_plain_object(value) or is_array(value):
        marker = _enter(value, active)
        try:
            if is_array(value):
                return "[" + ",".join(_encode(v, active) for v in value) + "]"
            items = (
                json.dumps(_key_text(k), ensure_ascii=False) + ":" + _encode(v, active)
                for k, v in value.items()
            )
            return "{" + ",".join(items) + "}"
        finally:
            active.discard(marker)
    return json.dumps(str(value), ensure_ascii=False)


def to_json_text(value) -> str:
    return _encode(value, set())


def stringify(value) -> str:
    """
    叶子值序列化：
    - None -> ""
    - 数组 -> 紧凑 JSON 文本（"[1,2,3]"）
    - 映射 -> 紧凑 JSON 文本（仅在根节点对比时出现）
    - 布尔 -> "true"/"false"；数字按自然十进制文本；字符串原样输出
    """
    if value is None:
        return ""
    if is_array(value) or is_plain_object(value):
        return to_json_text(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return _format_number(value)
    return str(value)


def flatten(obj, prefix: str = "", _active: Optional[set] = None) -> Dict[str, Any]:
    """
    将嵌套映射展开为 {"a.b.c": 叶子值}。数组整体作为一个叶子，不逐元素展开。
    """
    active = set() if _active is None else _active
    marker = _enter(obj, active)
    flat: Dict[str, Any] = {}
    try:
        for key, val in obj.items():
            name = _key_text(key)
            prefixed = f"{prefix}.{name}" if prefix else name
            if is_plain_object(val):
                flat.update(flatten(val, prefixed, active))
            else:
                flat[prefixed] = val
    finally:
        active.discard(marker)
    return flat


def _classify(key: str, flat_new: Dict[str, Any], flat_old: Dict[str, Any]) -> DiffRecord:
    if key not in flat_old:
        return DiffRecord(key, DiffStatus.ADDED, new_value=stringify(flat_new[key]))
    if key not in flat_new:
        return DiffRecord(key, DiffStatus.REMOVED, old_value=stringify(flat_old[key]))
    old_str = stringify(flat_old[key])
    new_str = stringify(flat_new[key])
    status = DiffStatus.CHANGED if old_str != new_str else DiffStatus.UNCHANGED
    return DiffRecord(key, status, old_value=old_str, new_value=new_str)


def diff_json(new_value, old_value) -> List[DiffRecord]:
    """
    对比两份 JSON 兼容的数据，返回按键排序的差异记录。
    只有两侧都是映射时才逐键展开；否则整体作为 "root" 的一条变更（相同则为空）。
    """
    if not is_plain_object(new_value) or not is_plain_object(old_value):
        old_str = stringify(old_value)
        new_str = stringify(new_value)
        if old_str == new_str:
            return []
        return [DiffRecord(ROOT_KEY, DiffStatus.CHANGED, old_value=old_str, new_value=new_str)]

    flat_new = flatten(new_value)
    flat_old = flatten(old_value)
    all_keys = set(flat_new) | set(flat_old)
    logger.debug("flattened %d new keys, %d old keys", len(flat_new), len(flat_old))

    records = [_classify(key, flat_new, flat_old) for key in all_keys]
    # 排序键相同（仅含可忽略字符的差异）时按原始字符串决胜，保证输出稳定
    records.sort(key=lambda r: (collation_key(r.key), r.key))
    return records


def summarize(records) -> Dict[DiffStatus, int]:
    counts = {status: 0 for status in DiffStatus}
    for record in records:
        counts[record.status] += 1
    return counts
