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
"""Shared Rich console for CLI output."""

from __future__ import annotations

from datetime import datetime, timezone

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

from flatcache.cache.entry import Entry
from flatcache.cache.types import NEVER_EXPIRES

FLATCACHE_THEME = Theme({
    "info": "cyan",
    "success": "bold green",
    "warning": "bold yellow",
    "error": "bold red",
    "key": "bold magenta",
    "dim": "dim",
})

# Status messages go to stderr; stdout carries only values.
console = Console(theme=FLATCACHE_THEME, stderr=True)


def format_expiry(expiry: int) -> str:
    if expiry == NEVER_EXPIRES:
        return "never"
    stamp = datetime.fromtimestamp(expiry, tz=timezone.utc).isoformat()
    return f"{expiry} ({stamp})"


def print_entry_table(entry: Entry) -> None:
    """Print an entry's files and options."""
    table = Table(title=f"[key]{escape(entry.key)}[/key]", show_header=False, border_style="dim")
    table.add_column("Field", style="info")
    table.add_column("Value")
    table.add_row("Value file", str(entry.path))
    table.add_row("Options file", str(entry.options_path))
    table.add_row("Expiry", format_expiry(entry.options.expiry))
    table.add_row("Locked", "yes" if entry.options.lock else "no")
    table.add_row("Valid", "[success]yes[/success]" if entry.is_valid() else "[warning]no[/warning]")
    console.print(table)
