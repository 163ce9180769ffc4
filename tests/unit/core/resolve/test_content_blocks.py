"""Unit tests for core/resolve/content.py and the inline helpers it builds on"""

import pytest

from surfdoc.core.blocks import SYNTHETIC_SPAN, CalloutType, DataFormat, DecisionStatus, Trend
from surfdoc.core.resolve.content import (
    extract_assignee,
    parse_callout,
    parse_code,
    parse_columns,
    parse_data,
    parse_decision,
    parse_details,
    parse_divider,
    parse_faq,
    parse_figure,
    parse_metric,
    parse_pricing_table,
    parse_quote,
    parse_tabs,
    parse_tasks,
    parse_testimonial,
    parse_toc,
    split_headed,
)
from surfdoc.core.resolve.inline import attr_int, attr_string, is_table_separator, parse_table, split_row


# --- inline helpers ---

def test_parse_table():
    headers, rows = parse_table("| H1 | H2 |\n|---|---|\n| v1 | v2 |")
    assert headers == ["H1", "H2"]
    assert rows == [["v1", "v2"]]


@pytest.mark.parametrize("line,expected", [
    ("|---|---|", True),
    ("| :--- | ---: |", True),
    ("|   |", False),
    ("| a | - |", False),
])
def test_is_table_separator(line, expected):
    assert is_table_separator(line) is expected


def test_split_row_keeps_empty_inner_cells():
    assert split_row("| a |  | c |") == ["a", "", "c"]


def test_attr_string_renders_scalars():
    attrs = {"b": True, "f": 2.0, "n": None, "i": 3}
    assert attr_string(attrs, "b") == "true"
    assert attr_string(attrs, "f") == "2"
    assert attr_string(attrs, "n") is None
    assert attr_string(attrs, "i") == "3"


def test_attr_int_invalid(diagnostics):
    assert attr_int({"depth": "deep"}, "depth") is None
    assert attr_int({"depth": -2}, "depth") is None
    assert [d.code for d in diagnostics] == ["invalid-number", "invalid-number"]


# --- resolvers ---

def test_callout(diagnostics):
    block = parse_callout({"type": "Warning", "title": "Careful"}, "Body", SYNTHETIC_SPAN)
    assert block.callout_type == CalloutType.warning
    assert block.title == "Careful"
    assert block.content == "Body"
    assert diagnostics == []


def test_callout_unknown_type_defaults(diagnostics):
    block = parse_callout({"type": "shout"}, "", SYNTHETIC_SPAN)
    assert block.callout_type == CalloutType.info
    assert [d.code for d in diagnostics] == ["unknown-value"]


def test_data_table():
    block = parse_data({"id": "t1", "sortable": True}, "| A | B |\n|---|---|\n| 1 | 2 |", SYNTHETIC_SPAN)
    assert block.format == DataFormat.table
    assert block.id == "t1"
    assert block.sortable
    assert (block.headers, block.rows) == (["A", "B"], [["1", "2"]])


def test_data_csv():
    block = parse_data({"format": "csv"}, "a, b\n\n1,2\n", SYNTHETIC_SPAN)
    assert (block.headers, block.rows) == (["a", "b"], [["1", "2"]])


def test_data_json_keeps_raw():
    raw = '{"a": 1}'
    block = parse_data({"format": "json"}, raw, SYNTHETIC_SPAN)
    assert block.headers == [] and block.rows == []
    assert block.raw_content == raw


def test_code():
    block = parse_code({"lang": "rust", "file": "main.rs", "highlight": "1, 3-4"}, "fn main() {}", SYNTHETIC_SPAN)
    assert (block.lang, block.file) == ("rust", "main.rs")
    assert block.highlight == ["1", "3-4"]


def test_tasks_with_assignee():
    block = parse_tasks({}, "- [ ] Fix bug @brady\n- [x] Ship it\n- [X] Done too\nnot a task", SYNTHETIC_SPAN)
    first, second, third = block.items
    assert (first.done, first.text, first.assignee) == (False, "Fix bug", "brady")
    assert (second.done, second.text, second.assignee) == (True, "Ship it", None)
    assert third.done


@pytest.mark.parametrize("text,expected", [
    ("Fix bug @brady", ("Fix bug", "brady")),
    ("Email a@b.com", ("Email a@b.com", None)),
    ("@start only", ("@start only", None)),
])
def test_extract_assignee(text, expected):
    assert extract_assignee(text) == expected


def test_decision(diagnostics):
    block = parse_decision(
        {"status": "accepted", "date": "2024-05-01", "deciders": "ada, bob"}, "Use YAML.", SYNTHETIC_SPAN,
    )
    assert block.status == DecisionStatus.accepted
    assert block.deciders == ["ada", "bob"]
    assert block.date == "2024-05-01"
    assert diagnostics == []


def test_metric_case_insensitive_trend():
    block = parse_metric({"label": "MRR", "value": "$2K", "trend": "UP", "unit": "USD"}, "", SYNTHETIC_SPAN)
    assert (block.label, block.value, block.trend, block.unit) == ("MRR", "$2K", Trend.up, "USD")


def test_metric_numeric_value_is_text():
    assert parse_metric({"value": 42}, "", SYNTHETIC_SPAN).value == "42"


def test_figure():
    block = parse_figure({"src": "a.png", "caption": "Chart", "width": 80}, "", SYNTHETIC_SPAN)
    assert (block.src, block.caption, block.width) == ("a.png", "Chart", "80")


def test_split_headed_carries_preamble():
    """Lines before the first heading land in the first section."""
    preamble, sections = split_headed("intro\n### Q1\nA1\n### Q2\nA2", "### ")
    assert preamble == []
    assert sections == [("Q1", ["intro", "A1"]), ("Q2", ["A2"])]


def test_tabs():
    block = parse_tabs({}, "## One\nfirst\n\n### Two\nsecond", SYNTHETIC_SPAN)
    assert [(t.label, t.content) for t in block.tabs] == [("One", "first"), ("Two", "second")]


def test_tabs_without_headings_fall_back():
    block = parse_tabs({}, "just text", SYNTHETIC_SPAN)
    assert [(t.label, t.content) for t in block.tabs] == [("Tab 1", "just text")]
    assert parse_tabs({}, "  \n", SYNTHETIC_SPAN).tabs == []


def test_columns_nested_spans():
    content = ":::column\nA\n:::\n:::column\nB\n:::"
    assert [c.content for c in parse_columns({}, content, SYNTHETIC_SPAN).columns] == ["A", "B"]


def test_columns_rule_separator():
    assert [c.content for c in parse_columns({}, "A\n---\nB", SYNTHETIC_SPAN).columns] == ["A", "B"]


def test_columns_single():
    assert [c.content for c in parse_columns({}, "  only  ", SYNTHETIC_SPAN).columns] == ["only"]


def test_quote_and_testimonial_aliases():
    quote = parse_quote({"by": "Ada", "source": "Notes"}, "Be kind.", SYNTHETIC_SPAN)
    assert (quote.attribution, quote.cite) == ("Ada", "Notes")
    testimonial = parse_testimonial({"name": "Bob", "title": "CTO", "org": "Acme"}, "Great.", SYNTHETIC_SPAN)
    assert (testimonial.author, testimonial.role, testimonial.company) == ("Bob", "CTO", "Acme")


def test_faq():
    block = parse_faq({}, "### Why?\nBecause.\n\n### How?\nCarefully.", SYNTHETIC_SPAN)
    assert [(i.question, i.answer) for i in block.items] == [("Why?", "Because."), ("How?", "Carefully.")]


def test_pricing_table():
    block = parse_pricing_table({}, "| Plan | Price |\n|---|---|\n| Pro | $10 |", SYNTHETIC_SPAN)
    assert block.headers == ["Plan", "Price"]
    assert block.rows == [["Pro", "$10"]]


def test_details_and_divider():
    details = parse_details({"title": "More", "open": True}, "Hidden.", SYNTHETIC_SPAN)
    assert (details.title, details.open, details.content) == ("More", True, "Hidden.")
    assert parse_details({"open": "yes"}, "", SYNTHETIC_SPAN).open is False
    assert parse_divider({"label": "Break"}, "", SYNTHETIC_SPAN).label == "Break"


def test_toc_depth(diagnostics):
    assert parse_toc({}, "", SYNTHETIC_SPAN).depth == 3
    assert parse_toc({"depth": 2}, "", SYNTHETIC_SPAN).depth == 2
    assert parse_toc({"depth": "deep"}, "", SYNTHETIC_SPAN).depth == 3
    assert [d.code for d in diagnostics] == ["invalid-number"]


def test_columns_nested_one_level_deeper():
    """Inside a page or section the column markers carry one more colon."""
    content = "::::column\nA\n::::\n::::column\nB\n::::"
    assert [c.content for c in parse_columns({}, content, SYNTHETIC_SPAN).columns] == ["A", "B"]


def test_columns_keep_deeper_directives_in_column():
    content = ":::column\n::::callout\nX\n::::\n:::\n:::column\nB\n:::"
    columns = parse_columns({}, content, SYNTHETIC_SPAN).columns
    assert [c.content for c in columns] == ["::::callout\nX\n::::", "B"]
