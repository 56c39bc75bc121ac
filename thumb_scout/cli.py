# === FILE: thumb_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа ThumbScout для командной строки.

Команды:
  lookup URL  Найти изображение на странице по ссылке и вывести JSON
  config      Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (только stderr, если не указан)
  --log-format FORMAT Формат логирования

Команда lookup опции:
  --selector, -s SEL  CSS-селектор (можно несколько, порядок важен)
  --json-key, -k KEY  Путь по JSON-ответу вместо селекторов
  --all               Вернуть все найденные URL
  --absolute          Разрешать относительные URL
  --pretty            Преформатировать JSON-вывод (отступ 2)

Пример:
  thumb_scout lookup http://example.com/post/1 -s "meta[property='og:image']" -s img.main
"""
import asyncio
import json
import sys
from pathlib import Path

import click

from thumb_scout import __version__
from thumb_scout.config import load_config
from thumb_scout.engine import lookup_image
from thumb_scout.exceptions import ProtocolDisallowed
from thumb_scout.logger import configure
from thumb_scout.rules import json_rule, selector_rule

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='ThumbScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (только stderr, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд ThumbScout CLI."""
    configure(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


def _json_path(keys):
    return [int(k) if k.lstrip('-').isdigit() else k for k in keys]


@cli.command('lookup', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.option('--selector', '-s', 'selectors', multiple=True, help='CSS-селектор (порядок важен)')
@click.option('--json-key', '-k', 'json_keys', multiple=True, help='Ключ или индекс в JSON-ответе')
@click.option('--all', 'collect_all', is_flag=True, help='Вернуть все найденные URL')
@click.option('--absolute', is_flag=True, help='Разрешать относительные URL')
@click.option('--pretty', is_flag=True, help='Преформатировать JSON-вывод (отступ 2)')
@click.pass_context
def lookup(ctx, url, selectors, json_keys, collect_all, absolute, pretty):
    """Найти изображение на странице URL."""
    cfg = ctx.obj['config']
    if json_keys:
        extract_fn = json_rule(*_json_path(json_keys))
    else:
        selectors = list(selectors) or list(cfg.selectors)
        if not selectors:
            print_error('Не заданы селекторы: используйте --selector или selectors в конфиге')
        extract_fn = selector_rule(
            selectors,
            attributes=cfg.attributes,
            absolute=absolute,
            collect_all=collect_all,
        )

    try:
        result = asyncio.run(lookup_image(cfg, url, extract_fn))
    except ProtocolDisallowed:
        print_error(f'Протокол URL не разрешён: {url}')
    except Exception as e:
        print_error(f'Ошибка при загрузке страницы: {e}')

    click.echo(json.dumps(result, ensure_ascii=False, indent=2 if pretty else None))


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
