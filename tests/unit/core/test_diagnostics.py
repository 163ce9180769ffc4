"""Unit tests for core/diagnostics.py"""

from surfdoc.core.diagnostics import DEFAULT_MAX_DEPTH, collecting, nested, report, warn
from surfdoc.core.models import Severity


def test_collecting_gathers_reports():
    with collecting() as diagnostics:
        report(Severity.error, "bad", code="x")
        warn("meh")
    assert [(d.severity, d.message, d.code) for d in diagnostics] == [
        (Severity.error, "bad", "x"),
        (Severity.warning, "meh", None),
    ]


def test_report_outside_collecting_is_dropped():
    report(Severity.info, "nobody listening")


def test_collecting_scopes_do_not_leak():
    with collecting() as outer:
        with collecting() as inner:
            warn("inner")
        warn("outer")
    assert [d.message for d in inner] == ["inner"]
    assert [d.message for d in outer] == ["outer"]


def test_nested_depth_limit():
    with collecting(max_depth=2):
        with nested() as first:
            with nested() as second:
                with nested() as third:
                    assert (first, second, third) == (True, True, False)
        with nested() as again:
            assert again


def test_default_depth_outside_collecting():
    """Without collecting() the default limit still applies."""
    def descend(level):
        with nested() as ok:
            return [ok] if level == DEFAULT_MAX_DEPTH + 1 else [ok, *descend(level + 1)]
    results = descend(1)
    assert results.count(True) == DEFAULT_MAX_DEPTH
    assert results[-1] is False


def test_severity_rank_order():
    assert Severity.error.rank > Severity.warning.rank > Severity.info.rank
