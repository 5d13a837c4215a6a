from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field, fields
from importlib import resources
from typing import Any, Dict, Optional

from colorama import Fore

from ..constants import DEFAULT_NEW_VERSION_TITLE, DEFAULT_OLD_VERSION_TITLE, DiffStatus
from ..utils.dicts import deep_merge, is_plain_object
from ..utils.io import load_yaml

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


def is_color_token(token) -> bool:
    """颜色记号：colorama Fore 的属性名（大小写不敏感）或 #RRGGBB"""
    if not isinstance(token, str):
        return False
    if _HEX_COLOR.match(token):
        return True
    return hasattr(Fore, token.upper())


def ansi_for(token: str) -> str:
    if _HEX_COLOR.match(token):
        r, g, b = (int(token[i:i + 2], 16) for i in (1, 3, 5))
        return f"\x1b[38;2;{r};{g};{b}m"
    return getattr(Fore, token.upper())


@dataclass(frozen=True)
class ViewerTheme:
    text_color: str = "RESET"
    diff_added_color: str = "GREEN"
    diff_removed_color: str = "RED"
    diff_changed_color: str = "YELLOW"
    diff_unchanged_color: str = "RESET"

    def color_for(self, status: DiffStatus) -> str:
        return {
            DiffStatus.ADDED: self.diff_added_color,
            DiffStatus.REMOVED: self.diff_removed_color,
            DiffStatus.CHANGED: self.diff_changed_color,
        }.get(status, self.diff_unchanged_color)


@dataclass(frozen=True)
class ViewerConfig:
    old_version_title: str = DEFAULT_OLD_VERSION_TITLE
    new_version_title: str = DEFAULT_NEW_VERSION_TITLE
    theme: ViewerTheme = field(default_factory=ViewerTheme)

    def color_for(self, status: DiffStatus) -> str:
        return self.theme.color_for(status)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "titles": {
                "old_version": self.old_version_title,
                "new_version": self.new_version_title,
            },
            "theme": asdict(self.theme),
        }


def load_default_settings() -> Dict[str, Any]:
    resource_path = resources.files("confdiff.data").joinpath("default_viewer.yaml")
    with resources.as_file(resource_path) as path:
        return load_yaml(path) or {}


def build_viewer_config(overrides: Optional[Dict[str, Any]] = None) -> ViewerConfig:
    """
    默认配置 + 用户覆盖（可只给部分字段）→ ViewerConfig。
    未知的主题字段或非法颜色记号直接报错，避免静默忽略拼写错误。
    """
    if overrides is not None and not is_plain_object(overrides):
        raise ValueError(f"viewer config must be a mapping, got {type(overrides).__name__}")
    settings = deep_merge(load_default_settings(), overrides)

    titles = settings.get("titles") or {}
    theme_raw = settings.get("theme") or {}
    if not is_plain_object(titles):
        raise ValueError(f"titles must be a mapping, got {type(titles).__name__}")
    if not is_plain_object(theme_raw):
        raise ValueError(f"theme must be a mapping, got {type(theme_raw).__name__}")
    known = {f.name for f in fields(ViewerTheme)}
    unknown = sorted(set(theme_raw) - known)
    if unknown:
        raise ValueError(f"unknown theme keys: {', '.join(unknown)}")
    for name, token in theme_raw.items():
        if not is_color_token(token):
            raise ValueError(f"invalid color token for {name}: {token!r}")

    return ViewerConfig(
        old_version_title=str(titles.get("old_version", DEFAULT_OLD_VERSION_TITLE)),
        new_version_title=str(titles.get("new_version", DEFAULT_NEW_VERSION_TITLE)),
        theme=ViewerTheme(**theme_raw),
    )
