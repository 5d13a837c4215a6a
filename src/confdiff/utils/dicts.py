from collections.abc import Mapping
from copy import deepcopy


def is_plain_object(value):
    """键值映射（非 None、非数组）才会被递归展开"""
    return isinstance(value, Mapping)


def is_array(value):
    return isinstance(value, (list, tuple))


def deep_merge(defaults, overrides):
    """
    深度合并配置：
    - defaults 先复制，不修改调用方传入的对象
    - overrides 中为 None 的值视为“未提供”，保留默认
    - 两侧都是映射时递归合并，其余情况以 overrides 为准
    """
    if overrides is None:
        return deepcopy(defaults)
    if defaults is None or not is_plain_object(defaults) or not is_plain_object(overrides):
        return deepcopy(overrides)

    merged = deepcopy(dict(defaults))
    for key, val in overrides.items():
        if val is None:
            continue
        if is_plain_object(merged.get(key)) and is_plain_object(val):
            merged[key] = deep_merge(merged[key], val)
        else:
            merged[key] = deepcopy(val)
    return merged


__all__ = ["deep_merge", "is_array", "is_plain_object"]
