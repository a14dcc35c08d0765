"""click parameter types for JSON values and KEY=VALUE attributes."""

import json
from typing import Any

import click

JSON_USAGE = (
    "Don't miss `\"` if it contains String. You may need `'` for whole list / dict, "
    "or `\\` for `\"` inside list / dict"
)


def parse_json(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError as e:
        raise ValueError(f"Cannot parse to json - {e}\n{JSON_USAGE}")


def parse_key_value(text: str) -> dict[str, Any]:
    """`key=<json>` -> {key: value}. A non-JSON value is kept as a string
    unless it looks like a list or dict."""
    key, sep, raw = text.partition("=")
    if not sep:
        raise ValueError(f"invalid KEY=value: no `=` found in `{text}`")
    try:
        return {key: parse_json(raw)}
    except ValueError:
        if raw.startswith(("[", "{")):
            raise
        return {key: raw}


def split_csv(values: tuple[str, ...]) -> list[str]:
    """Accepts `a,b c` style lists: repeated and/or comma separated."""
    return [item for value in values for item in value.split(",") if item]


class JsonType(click.ParamType):
    name = "json"

    def convert(self, value: Any, param: Any, ctx: Any) -> Any:
        if not isinstance(value, str):
            return value
        try:
            return parse_json(value)
        except ValueError as e:
            self.fail(str(e), param, ctx)


class KeyValueType(click.ParamType):
    name = "key=value"

    def convert(self, value: Any, param: Any, ctx: Any) -> Any:
        if isinstance(value, dict):
            return value
        try:
            return parse_key_value(value)
        except ValueError as e:
            self.fail(str(e), param, ctx)


JSON = JsonType()
KEY_VALUE = KeyValueType()
