import logging

import click
import yaml
from colorama import Fore, Style

from .api import diff_files, dump_viewer_config, load_viewer_config
from .constants import DiffStatus
from .emit.report import print_diff_report
from .utils.dicts import deep_merge

logger = logging.getLogger(__name__)


def _title_overrides(old_title, new_title):
    titles = {}
    if old_title:
        titles["old_version"] = old_title
    if new_title:
        titles["new_version"] = new_title
    return {"titles": titles} if titles else None


def _resolve_config(config_path, old_title, new_title):
    config = load_viewer_config(config_path)
    overrides = _title_overrides(old_title, new_title)
    if overrides:
        config = load_viewer_config(deep_merge(config.to_dict(), overrides))
    return config


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose):
    """confdiff: 对比两份 JSON/YAML 配置，标出新增/删除/变更/未变更的键"""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@main.command()
@click.argument("old_path", type=click.Path(exists=True, dir_okay=False))
@click.argument("new_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--fmt", type=click.Choice(["text", "json", "side"]), default="text")
@click.option("--config", "-c", "config_path", type=click.Path(exists=True, dir_okay=False),
              required=False, help="视图配置 YAML（标题/配色），与内置默认配置深度合并。")
@click.option("--old-title", type=str, required=False, help="左栏（旧版本）标题")
@click.option("--new-title", type=str, required=False, help="右栏（新版本）标题")
@click.option("--hide-unchanged", is_flag=True, default=False, help="不显示未变更的键")
@click.option("--width", type=click.IntRange(min=20), required=False, help="side 格式的总宽度（默认取终端宽度）")
@click.option("--exit-code", is_flag=True, default=False, help="存在差异时以状态码 1 退出")
def diff(old_path, new_path, fmt, config_path, old_title, new_title, hide_unchanged, width, exit_code):
    """对比 OLD_PATH 与 NEW_PATH（.json 按 JSON 读取，其余按 YAML）"""
    logger.debug("comparing %s -> %s", old_path, new_path)
    try:
        config = _resolve_config(config_path, old_title, new_title)
        records = diff_files(new_path, old_path)
    except (ValueError, yaml.YAMLError) as exc:
        raise click.ClickException(str(exc)) from exc
    print_diff_report(records, fmt=fmt, config=config, hide_unchanged=hide_unchanged, width=width)
    if exit_code and any(r.status != DiffStatus.UNCHANGED for r in records):
        click.get_current_context().exit(1)


@main.command("config")
@click.option("--config", "-c", "config_path", type=click.Path(exists=True, dir_okay=False), required=False)
@click.option("-o", "--output", default="viewer.yaml", help="Output YAML path.")
def export_config(config_path, output):
    """输出合并后的视图配置，便于在此基础上修改"""
    try:
        config = load_viewer_config(config_path)
    except (ValueError, yaml.YAMLError) as exc:
        raise click.ClickException(str(exc)) from exc
    path = dump_viewer_config(config, output)
    click.echo(Fore.GREEN + f"viewer config generated at: {path}" + Style.RESET_ALL)


if __name__ == "__main__":
    main()
