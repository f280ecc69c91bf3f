# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""flatcache CLI — inspect and edit a cache directory from the shell."""

from __future__ import annotations

import json
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any, NoReturn

import click
from rich.markup import escape

from flatcache.cache.exceptions import CacheException
from flatcache.cache.store import CacheStore
from flatcache.cache.types import EMPTY, MISSING
from flatcache.cli.console import console, print_entry_table
from flatcache.config.properties.cache import CacheProperties
from flatcache.core.config import Config
from flatcache.logging.port import LoggingPort
from flatcache.logging.structlog_adapter import StructlogAdapter


def create_logging() -> LoggingPort:
    """Return the logging backend configured by every invocation."""
    return StructlogAdapter()


class CliSession:
    """Per-invocation state; the store is built on first use."""

    def __init__(self, config: Config, overrides: dict[str, Any], log: Any) -> None:
        self.config = config
        self.overrides = overrides
        self.log = log
        self._store: CacheStore | None = None

    @property
    def store(self) -> CacheStore:
        if self._store is None:
            try:
                properties = self.config.bind(CacheProperties).model_copy(update=self.overrides)
            except ValueError as exc:
                _fail(str(exc))
            with cache_errors():
                self._store = CacheStore.from_properties(properties)
        return self._store


def _fail(message: str) -> NoReturn:
    console.print(f"[error]✗[/error] {escape(message)}")
    raise SystemExit(1)


@contextmanager
def cache_errors() -> Iterator[None]:
    """Report cache failures on the console and exit with status 1."""
    try:
        yield
    except CacheException as exc:
        _fail(str(exc))


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="YAML or TOML file with a flatcache section.",
)
@click.option("--directory", "-d", default=None, help="Cache directory (overrides config).")
@click.option("--prefix", "-p", default=None, help="Key prefix (overrides config).")
@click.option("--compact", is_flag=True, default=False, help="Write single-line documents.")
@click.version_option(package_name="flatcache")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, directory: str | None, prefix: str | None, compact: bool) -> None:
    """flatcache — filesystem key-value cache."""
    config = Config.from_file(config_path) if config_path else Config({})
    logging_port = create_logging()
    logging_port.configure(config)
    log = logging_port.get_logger("flatcache.cli")

    if config_path and not config.loaded_sources:
        console.print(f"[warning]Config file not found, using defaults:[/warning] {escape(str(config_path))}")
    log.debug("configuration loaded", sources=config.loaded_sources)

    overrides: dict[str, Any] = {}
    if directory:
        overrides["directory"] = directory
    if prefix:
        overrides["prefix"] = prefix
    if compact:
        overrides["pretty_print"] = False
    ctx.obj = CliSession(config, overrides, log)


@cli.command("get")
@click.argument("key")
@click.pass_obj
def get_command(session: CliSession, key: str) -> None:
    """Print the value stored under KEY as JSON."""
    with cache_errors():
        value = session.store.get(key)
    if value is MISSING:
        console.print(f"[warning]No valid entry for[/warning] [key]{escape(key)}[/key]")
        raise SystemExit(1)
    if value is EMPTY:
        console.print(f"[dim]Entry {escape(key)} holds no value[/dim]")
        return
    click.echo(json.dumps(value, ensure_ascii=False))


@cli.command("set")
@click.argument("key")
@click.argument("value")
@click.option("--ttl", type=click.IntRange(min=0), default=None, help="Seconds until the value expires.")
@click.option("--lock/--no-lock", default=None, help="Lock or unlock the entry along with the write.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Parse VALUE as JSON.")
@click.pass_obj
def set_command(session: CliSession, key: str, value: str, ttl: int | None, lock: bool | None, as_json: bool) -> None:
    """Store VALUE under KEY."""
    payload: Any = value
    if as_json:
        try:
            payload = json.loads(value)
        except json.JSONDecodeError as exc:
            raise click.BadParameter(str(exc), param_hint="VALUE") from exc

    with cache_errors():
        written = session.store.resolve(key).try_set(payload, ttl=ttl, lock=lock)
    if not written:
        console.print(f"[warning]Entry[/warning] [key]{escape(key)}[/key] [warning]is locked; nothing written[/warning]")
        raise SystemExit(1)
    console.print(f"[success]Stored[/success] [key]{escape(key)}[/key]")


@cli.command("lock")
@click.argument("key")
@click.pass_obj
def lock_command(session: CliSession, key: str) -> None:
    """Lock KEY so later writes are skipped."""
    with cache_errors():
        session.store.resolve(key).lock()
    console.print(f"[success]Locked[/success] [key]{escape(key)}[/key]")


@cli.command("unlock")
@click.argument("key")
@click.pass_obj
def unlock_command(session: CliSession, key: str) -> None:
    """Unlock KEY."""
    with cache_errors():
        session.store.resolve(key).unlock()
    console.print(f"[success]Unlocked[/success] [key]{escape(key)}[/key]")


@cli.command("options")
@click.argument("key")
@click.pass_obj
def options_command(session: CliSession, key: str) -> None:
    """Show the files and options of KEY."""
    with cache_errors():
        print_entry_table(session.store.resolve(key))


@cli.command("destroy")
@click.argument("key")
@click.pass_obj
def destroy_command(session: CliSession, key: str) -> None:
    """Delete the value and options files of KEY."""
    with cache_errors():
        removed = session.store.destroy(key)
    session.log.info("entry destroyed", key=key, removed=removed)
    if removed:
        console.print(f"[success]Destroyed[/success] [key]{escape(key)}[/key]")
    else:
        console.print(f"[dim]Nothing stored under {escape(key)}[/dim]")


@cli.command("clear")
@click.confirmation_option(prompt="Delete every file in the cache directory?")
@click.pass_obj
def clear_command(session: CliSession) -> None:
    """Delete every file directly inside the cache directory."""
    with cache_errors():
        removed = session.store.clear_all()
    session.log.info("cache cleared", directory=str(session.store.directory), removed=removed)
    console.print(f"[success]Removed {removed} file(s)[/success] from [info]{session.store.directory}[/info]")
