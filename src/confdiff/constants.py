from enum import Enum


class DiffStatus(str, Enum):
    ADDED = "ADDED"
    REMOVED = "REMOVED"
    CHANGED = "CHANGED"
    UNCHANGED = "UNCHANGED"


# 左栏显示旧值，右栏显示新值
class DiffSide(str, Enum):
    LEFT = "LEFT"
    RIGHT = "RIGHT"


# 非对象输入时整体对比使用的键名
ROOT_KEY = "root"

DEFAULT_OLD_VERSION_TITLE = "Original Version"
DEFAULT_NEW_VERSION_TITLE = "Modified Version"

# 文本报告中各状态的前缀
STATUS_MARKERS = {
    DiffStatus.ADDED: "[+]",
    DiffStatus.REMOVED: "[-]",
    DiffStatus.CHANGED: "[±]",
    DiffStatus.UNCHANGED: "[ ]",
}
