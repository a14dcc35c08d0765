"""
Response rendering: table, json or text.

table and json end with a `Total: <n>` line: len(array) for arrays,
1 for an object, 0 otherwise. text echoes the body verbatim.
"""

import json
from typing import Any, Optional

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

FORMATS = ("table", "json", "text")


def count_of(value: Any) -> int:
    if isinstance(value, list):
        return len(value)
    if isinstance(value, dict):
        return 1
    return 0


def cell(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


class OutputRenderer:
    def __init__(self, console: Optional[Console] = None):
        self._console = console or Console()

    def render(self, text: str, fmt: str = "table", fields: Optional[list[str]] = None) -> None:
        """Render a raw response body. Bodies that are not JSON are echoed as text."""
        if not text:
            return
        if fmt == "text":
            self._echo(text)
            return
        try:
            value = json.loads(text)
        except ValueError:
            self._echo(text)
            return
        self.render_value(value, fmt, fields)

    def render_value(self, value: Any, fmt: str = "table", fields: Optional[list[str]] = None) -> None:
        if fmt == "text":
            self._echo(json.dumps(value, ensure_ascii=False))
            return
        if fmt == "table":
            table = self.to_table(value, fields)
            if table is not None and table.row_count:
                self._console.print(table)
        elif fmt == "json":
            self._echo(json.dumps(value, indent=2, ensure_ascii=False))
        else:
            raise ValueError(f"Unknown output format {fmt!r}, expected one of {', '.join(FORMATS)}")
        self._console.print(f"Total: {count_of(value)}", highlight=False)

    def to_table(self, value: Any, fields: Optional[list[str]] = None) -> Optional[Table]:
        if isinstance(value, list):
            rows = value
        elif isinstance(value, dict):
            rows = [value]
        else:
            return None

        if fields:
            table = _new_table(show_header=True)
            for f in fields:
                table.add_column(f)
            for obj in rows:
                if isinstance(obj, dict):
                    # Missing keys are dropped, not padded with a placeholder.
                    table.add_row(*[Text(cell(obj[f])) for f in fields if f in obj])
                else:
                    table.add_row()
            return table

        table = _new_table(show_header=False)
        table.add_column("KEY")
        table.add_column("VALUE")
        for obj in rows:
            if isinstance(value, list):
                table.add_row(_heading("KEY"), _heading("VALUE"))
            if isinstance(obj, dict):
                for k, v in obj.items():
                    table.add_row(Text(str(k)), Text(cell(v)))
        return table

    def _echo(self, text: str) -> None:
        self._console.out(text, highlight=False)


def _new_table(show_header: bool) -> Table:
    return Table(box=box.ROUNDED, show_header=show_header, show_lines=False)


def _heading(label: str) -> Text:
    return Text(label, style="green underline", justify="center")
