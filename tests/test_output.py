"""OutputRenderer: table / json / text and the Total line."""

import io
import json

import pytest
from rich.console import Console

from sdncli.output import OutputRenderer, count_of


def renderer() -> tuple[OutputRenderer, io.StringIO]:
    buf = io.StringIO()
    return OutputRenderer(Console(file=buf, width=160, color_system=None)), buf


@pytest.mark.parametrize("value, expected", [([], 0), ([{}, {}], 2), ({"a": 1}, 1), ("x", 0), (None, 0)])
def test_count_of(value, expected):
    assert count_of(value) == expected


@pytest.mark.parametrize("fmt", ["table", "json"])
def test_empty_array(fmt):
    r, buf = renderer()
    r.render("[]", fmt)
    lines = buf.getvalue().splitlines()
    assert lines[-1] == "Total: 0"
    if fmt == "table":
        assert lines == ["Total: 0"]


def test_table_with_fields():
    r, buf = renderer()
    r.render(json.dumps([{"id": "x", "name": "y"}]), "table", ["id"])
    out = buf.getvalue()
    assert '"x"' in out
    assert "y" not in out.replace("Total", "")
    assert " id " in out
    assert out.splitlines()[-1] == "Total: 1"


def test_table_fields_missing_keys_omitted():
    r, buf = renderer()
    r.render_value([{"id": "a", "name": "n1"}, {"id": "b"}], "table", ["id", "name"])
    out = buf.getvalue()
    assert '"n1"' in out and '"b"' in out
    assert "null" not in out
    assert out.splitlines()[-1] == "Total: 2"


def test_table_key_value_blocks_per_element():
    r, buf = renderer()
    r.render_value([{"id": "a", "admin_state_up": True}, {"id": "b"}], "table")
    out = buf.getvalue()
    assert out.count("KEY") == 2
    assert out.count("VALUE") == 2
    assert "admin_state_up" in out and "true" in out
    assert out.splitlines()[-1] == "Total: 2"


def test_table_single_object():
    r, buf = renderer()
    r.render_value({"id": "a", "tags": ["t1"]}, "table")
    out = buf.getvalue()
    assert "KEY" not in out
    assert '["t1"]' in out
    assert out.splitlines()[-1] == "Total: 1"


def test_table_scalar_has_no_rows():
    r, buf = renderer()
    r.render("42", "table")
    assert buf.getvalue() == "Total: 0\n"


def test_json_pretty():
    r, buf = renderer()
    r.render('{"id":"a","sub":{"k":[1,2]}}', "json")
    out = buf.getvalue()
    assert json.loads(out.rsplit("Total:", 1)[0]) == {"id": "a", "sub": {"k": [1, 2]}}
    assert '\n  "id": "a"' in out
    assert out.splitlines()[-1] == "Total: 1"


def test_text_verbatim_without_count():
    r, buf = renderer()
    r.render('[{"id": "a"}]', "text")
    assert buf.getvalue() == '[{"id": "a"}]\n'


@pytest.mark.parametrize("fmt", ["table", "json", "text"])
def test_non_json_is_echoed(fmt):
    r, buf = renderer()
    r.render("<NodeStatusUVE><a>link</a></NodeStatusUVE>", fmt)
    assert buf.getvalue() == "<NodeStatusUVE><a>link</a></NodeStatusUVE>\n"


def test_empty_body_prints_nothing():
    r, buf = renderer()
    r.render("", "table")
    assert buf.getvalue() == ""


def test_markup_in_values_is_literal():
    r, buf = renderer()
    r.render_value([{"name": "[bold]x[/bold]"}], "table", ["name"])
    assert "[bold]x[/bold]" in buf.getvalue()


def test_unknown_format():
    r, _ = renderer()
    with pytest.raises(ValueError):
        r.render_value([], "yaml")
