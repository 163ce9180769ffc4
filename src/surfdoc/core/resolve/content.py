"""Resolvers for document content blocks: callouts, data, tasks, decisions, and friends"""

from typing import Optional

from surfdoc.core.blocks import (
    Attrs,
    Callout,
    CalloutType,
    Code,
    ColumnContent,
    Columns,
    Data,
    DataFormat,
    Decision,
    DecisionStatus,
    Details,
    Divider,
    Faq,
    FaqItem,
    Figure,
    Metric,
    PricingTable,
    Quote,
    Span,
    Summary,
    TabPanel,
    Tabs,
    TaskItem,
    Tasks,
    Testimonial,
    Toc,
    Trend,
)
from surfdoc.core.resolve.inline import (
    attr_bool,
    attr_enum,
    attr_first,
    attr_int,
    attr_string,
    optional_enum,
    parse_table,
    split_list,
)
from surfdoc.core.scan import closing_directive_depth, opening_directive


TASK_PREFIXES = {"- [x] ": True, "- [X] ": True, "- [ ] ": False}


def split_headed(content: str, *prefixes: str) -> tuple[list[str], list[tuple[str, list[str]]]]:
    """Split content on heading lines into (preamble, [(heading, lines)]).

    Lines before the first heading are carried into the first section; the
    preamble is only returned on its own when no heading exists.
    """
    preamble: list[str] = []
    sections: list[tuple[str, list[str]]] = []
    for line in content.splitlines():
        trimmed = line.strip()
        heading = next((trimmed[len(p):].strip() for p in prefixes if trimmed.startswith(p)), None)
        if heading is not None:
            sections.append((heading, preamble if not sections else []))
            preamble = []
        elif sections:
            sections[-1][1].append(line)
        else:
            preamble.append(line)
    return preamble, sections


def joined(lines: list[str]) -> str:
    return "\n".join(lines).strip()


def parse_callout(attrs: Attrs, content: str, span: Span) -> Callout:
    return Callout(
        callout_type=attr_enum(attrs, "type", CalloutType, CalloutType.info, span),
        title=attr_string(attrs, "title"),
        content=content,
        span=span,
    )


def parse_csv(content: str) -> tuple[list[str], list[list[str]]]:
    """Parse comma-delimited rows; the first non-empty row is the header."""
    rows = [
        [cell.strip() for cell in line.strip().split(",")]
        for line in content.splitlines()
        if line.strip()
    ]
    return (rows[0], rows[1:]) if rows else ([], [])


def parse_data(attrs: Attrs, content: str, span: Span) -> Data:
    fmt = attr_enum(attrs, "format", DataFormat, DataFormat.table, span)
    if fmt == DataFormat.table:
        headers, rows = parse_table(content)
    elif fmt == DataFormat.csv:
        headers, rows = parse_csv(content)
    else:
        headers, rows = [], []
    return Data(
        id=attr_string(attrs, "id"),
        format=fmt,
        sortable=attr_bool(attrs, "sortable"),
        headers=headers,
        rows=rows,
        raw_content=content,
        span=span,
    )


def parse_code(attrs: Attrs, content: str, span: Span) -> Code:
    return Code(
        lang=attr_string(attrs, "lang"),
        file=attr_string(attrs, "file"),
        highlight=split_list(attr_string(attrs, "highlight")),
        content=content,
        span=span,
    )


def extract_assignee(text: str) -> tuple[str, Optional[str]]:
    """Split a trailing single-word `@name` off task text."""
    trimmed = text.rstrip()
    at = trimmed.rfind(" @")
    if at != -1:
        candidate = trimmed[at + 2:]
        if candidate and " " not in candidate:
            return trimmed[:at].rstrip(), candidate
    return text, None


def parse_tasks(attrs: Attrs, content: str, span: Span) -> Tasks:
    items = []
    for line in content.splitlines():
        trimmed = line.strip()
        prefix = next((p for p in TASK_PREFIXES if trimmed.startswith(p)), None)
        if prefix is None:
            continue
        text, assignee = extract_assignee(trimmed[len(prefix):])
        items.append(TaskItem(done=TASK_PREFIXES[prefix], text=text, assignee=assignee))
    return Tasks(items=items, span=span)


def parse_decision(attrs: Attrs, content: str, span: Span) -> Decision:
    return Decision(
        status=attr_enum(attrs, "status", DecisionStatus, DecisionStatus.proposed, span),
        date=attr_string(attrs, "date"),
        deciders=split_list(attr_string(attrs, "deciders")),
        content=content,
        span=span,
    )


def parse_metric(attrs: Attrs, content: str, span: Span) -> Metric:
    return Metric(
        label=attr_string(attrs, "label") or "",
        value=attr_string(attrs, "value") or "",
        trend=optional_enum(attrs, "trend", Trend, span),
        unit=attr_string(attrs, "unit"),
        span=span,
    )


def parse_summary(attrs: Attrs, content: str, span: Span) -> Summary:
    return Summary(content=content, span=span)


def parse_figure(attrs: Attrs, content: str, span: Span) -> Figure:
    return Figure(
        src=attr_string(attrs, "src") or "",
        caption=attr_string(attrs, "caption"),
        alt=attr_string(attrs, "alt"),
        width=attr_string(attrs, "width"),
        span=span,
    )


def parse_tabs(attrs: Attrs, content: str, span: Span) -> Tabs:
    preamble, sections = split_headed(content, "## ", "### ")
    tabs = [TabPanel(label=label, content=joined(lines)) for label, lines in sections]
    if not sections and joined(preamble):
        tabs.append(TabPanel(label="Tab 1", content=joined(preamble)))
    return Tabs(tabs=tabs, span=span)


def parse_columns(attrs: Attrs, content: str, span: Span) -> Columns:
    """Split on `:::column` spans (one colon deeper when nested), or on `---` rules."""
    columns: list[ColumnContent] = []
    current: list[str] = []
    found_separator = False
    column_depth: Optional[int] = None

    for line in content.splitlines():
        opener = opening_directive(line)
        closer = closing_directive_depth(line)
        if (
            opener is not None and opener.name == "column" and opener.depth >= 3
            and column_depth in (None, opener.depth)
            ):
            if current:
                columns.append(ColumnContent(content=joined(current)))
                current = []
            column_depth = opener.depth
            found_separator = True
        elif closer is not None and closer == column_depth:
            columns.append(ColumnContent(content=joined(current)))
            current = []
        elif closer is not None and column_depth is None and closer >= 3:
            continue
        elif line.strip() == "---" and not found_separator:
            columns.append(ColumnContent(content=joined(current)))
            current = []
            found_separator = True
        else:
            current.append(line)

    if joined(current):
        columns.append(ColumnContent(content=joined(current)))
    if not columns:
        columns.append(ColumnContent(content=content.strip()))
    return Columns(columns=columns, span=span)


def parse_quote(attrs: Attrs, content: str, span: Span) -> Quote:
    return Quote(
        content=content,
        attribution=attr_first(attrs, "by", "attribution", "author"),
        cite=attr_first(attrs, "cite", "source"),
        span=span,
    )


def parse_testimonial(attrs: Attrs, content: str, span: Span) -> Testimonial:
    return Testimonial(
        content=content,
        author=attr_first(attrs, "author", "name"),
        role=attr_first(attrs, "role", "title"),
        company=attr_first(attrs, "company", "org"),
        span=span,
    )


def parse_faq(attrs: Attrs, content: str, span: Span) -> Faq:
    _, sections = split_headed(content, "### ", "## ")
    items = [FaqItem(question=question, answer=joined(lines)) for question, lines in sections]
    return Faq(items=items, span=span)


def parse_pricing_table(attrs: Attrs, content: str, span: Span) -> PricingTable:
    headers, rows = parse_table(content)
    return PricingTable(headers=headers, rows=rows, span=span)


def parse_details(attrs: Attrs, content: str, span: Span) -> Details:
    return Details(
        title=attr_string(attrs, "title"),
        open=attr_bool(attrs, "open"),
        content=content,
        span=span,
    )


def parse_divider(attrs: Attrs, content: str, span: Span) -> Divider:
    return Divider(label=attr_string(attrs, "label"), span=span)


def parse_toc(attrs: Attrs, content: str, span: Span) -> Toc:
    depth = attr_int(attrs, "depth", span)
    return Toc(depth=3 if depth is None else depth, span=span)
