import json
import shutil
import unicodedata

import click
from colorama import Style

from ..constants import STATUS_MARKERS, DiffSide, DiffStatus
from ..diff.differ import summarize
from ..model.viewer import ViewerConfig, ansi_for

ELLIPSIS = "…"
GUTTER = " │ "
MIN_COLUMN_WIDTH = 16


def _paint(text, token):
    return ansi_for(token) + text + Style.RESET_ALL


def _char_width(ch):
    if unicodedata.combining(ch):
        return 0
    return 2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1


def display_width(text):
    """终端显示宽度：全角/宽字符占两列，组合字符不占列"""
    return sum(_char_width(ch) for ch in text)


def _fit(text, width):
    # 单行显示，超宽截断；按显示宽度而不是字符数对齐
    if display_width(text) <= width:
        return text + " " * (width - display_width(text))
    budget = max(width - 1, 0)
    used = 0
    cut = 0
    for cut, ch in enumerate(text):
        w = _char_width(ch)
        if used + w > budget:
            break
        used += w
    return text[:cut] + ELLIPSIS + " " * (budget - used)


def side_value(record, side):
    return record.old_value if side == DiffSide.LEFT else record.new_value


def summary_line(records):
    counts = summarize(records)
    return (
        f"{counts[DiffStatus.ADDED]} added, {counts[DiffStatus.REMOVED]} removed, "
        f"{counts[DiffStatus.CHANGED]} changed, {counts[DiffStatus.UNCHANGED]} unchanged"
    )


def _text_lines(records, config):
    lines = []
    for r in records:
        marker = STATUS_MARKERS[r.status]
        if r.status == DiffStatus.ADDED:
            body = f"{marker} {r.key}: {r.new_value}"
        elif r.status == DiffStatus.REMOVED:
            body = f"{marker} {r.key}: {r.old_value}"
        elif r.status == DiffStatus.CHANGED:
            body = f"{marker} {r.key}: {r.old_value}  -->  {r.new_value}"
        else:
            body = f"{marker} {r.key}: {r.new_value}"
        lines.append(_paint(body, config.color_for(r.status)))
    lines.append(_paint(summary_line(records), config.theme.text_color))
    return lines


def _side_cell(record, index, side, number_width, width):
    value = side_value(record, side)
    if value is None:
        return " " * width
    label = f"{index + 1:>{number_width}}  {record.key}: {value}"
    return _fit(label, width)


def _side_lines(records, config, width):
    column = max((width - len(GUTTER)) // 2, MIN_COLUMN_WIDTH)
    number_width = len(str(len(records))) if records else 1
    text_color = config.theme.text_color

    header = _fit(config.old_version_title, column) + GUTTER + _fit(config.new_version_title, column)
    lines = [_paint(header, text_color), _paint("─" * column + "─┼─" + "─" * column, text_color)]
    for index, record in enumerate(records):
        token = config.color_for(record.status)
        left = _side_cell(record, index, DiffSide.LEFT, number_width, column)
        right = _side_cell(record, index, DiffSide.RIGHT, number_width, column)
        lines.append(_paint(left, token) + _paint(GUTTER, text_color) + _paint(right, token))
    lines.append(_paint(summary_line(records), text_color))
    return lines


def format_diff_report(records, fmt="text", config=None, *, hide_unchanged=False, width=None):
    """
    将差异记录渲染为若干行文本：
    - text：每条记录一行，带 [+]/[-]/[±]/[ ] 前缀
    - json：记录数组（JSON）
    - side：左右两栏（左旧右新），缺失一侧留空
    """
    config = config or ViewerConfig()
    if hide_unchanged:
        records = [r for r in records if r.status != DiffStatus.UNCHANGED]
    if fmt == "json":
        return [json.dumps([r.to_dict() for r in records], ensure_ascii=False, indent=2)]
    if fmt == "side":
        width = width or shutil.get_terminal_size().columns
        return _side_lines(records, config, width)
    if fmt == "text":
        return _text_lines(records, config)
    raise ValueError(f"unknown report format: {fmt}")


def print_diff_report(records, fmt="text", config=None, *, hide_unchanged=False, width=None, color=None):
    for line in format_diff_report(records, fmt, config, hide_unchanged=hide_unchanged, width=width):
        click.echo(line, color=color)
