# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# regfile/cli/render.py
"""Output renderers for parsed exports (json / sig / table)."""
from __future__ import annotations

import io
from typing import List, Sequence

from rich.console import Console
from rich.table import Table

from ..core.utils import U
from ..parser.decoder import to_export_line
from ..parser.model import KeyAction, RegistryExport


def render_json(exports: Sequence[RegistryExport]) -> str:
    return U.json_dump([e.to_dict() for e in exports])


def render_sig(exports: Sequence[RegistryExport], *, include_root: bool = False) -> str:
    lines: List[str] = []
    for export in exports:
        for key, value in export.values():
            lines.append(to_export_line(key, value, include_root=include_root))
    return "\n".join(lines)


def build_table(export: RegistryExport, *, include_root: bool = False) -> Table:
    title = f"{export.filename or '<buffer>'} ({export.encoding.value}, {U.plural(len(export), 'key')})"
    table = Table(title=title, show_lines=False, expand=False)
    table.add_column("Key", overflow="fold")
    table.add_column("Action")
    table.add_column("Entry")
    table.add_column("Type")
    table.add_column("Value", overflow="fold")

    for key in export:
        path = key.full_path if include_root else key.path
        action = "[red]delete[/red]" if key.action is KeyAction.DELETE else "import"
        if not key.values:
            table.add_row(path, action, "", "", "")
            continue
        for i, value in enumerate(key.values):
            table.add_row(
                path if i == 0 else "",
                action if i == 0 else "",
                value.entry or "@",
                value.kind.value,
                U.one_line(value.value),
            )
    return table


def render_table(exports: Sequence[RegistryExport], *, include_root: bool = False, width: int = 160) -> str:
    buf = io.StringIO()
    console = Console(file=buf, width=width, force_terminal=False, color_system=None)
    for export in exports:
        console.print(build_table(export, include_root=include_root))
    return buf.getvalue().rstrip("\n")


def render(exports: Sequence[RegistryExport], fmt: str, *, include_root: bool = False) -> str:
    if fmt == "json":
        return render_json(exports)
    if fmt == "sig":
        return render_sig(exports, include_root=include_root)
    if fmt == "table":
        return render_table(exports, include_root=include_root)
    raise ValueError(f"unknown output format: {fmt}")
