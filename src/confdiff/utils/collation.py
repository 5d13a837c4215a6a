from functools import lru_cache

from pyuca import Collator


@lru_cache(maxsize=1)
def _collator():
    # 加载 DUCET 表开销较大，进程内只构建一次
    return Collator()


def collation_key(text: str):
    """Unicode 排序规则（UCA）下的排序键，等价于 localeCompare 的根区域比较"""
    return _collator().sort_key(text)
