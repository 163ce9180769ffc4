"""Canonical SurfDoc serialization: the structural inverse of block resolution"""

from typing import Any, Callable, Optional

import yaml

from surfdoc.core.attrs import format_attrs, format_value, quoted
from surfdoc.core.blocks import (
    BeforeAfter, BeforeAfterItem, Block, Callout, Code, Columns, Comparison, Cta, Data,
    DataFormat, Decision, Details, Divider, Embed, Faq, Features, Figure, Footer, Form,
    FormFieldType, Gallery, Hero, HeroImage, Logo, Markdown, Metric, Nav, NavItem, Page,
    Pipeline, PricingTable, ProductCard, Quote, Section, Site, Stats, Steps, Style,
    StyleProperty, Summary, Tabs, Tasks, Testimonial, Toc, Unknown,
)
from surfdoc.core.models import FrontMatter, SurfDoc
from surfdoc.core.scan import closing_directive_depth, opening_directive, split_lines, trim_blank_lines


# --- helpers ---

def _opt(key: str, value: Optional[str]) -> list[str]:
    """A quoted attribute part, or nothing when value is None."""
    return [] if value is None else [quoted(key, value)]


def _bare(key: str, value: Optional[Any]) -> list[str]:
    """An unquoted attribute part (enum token or number), or nothing."""
    if value is None:
        return []
    return [f"{key}={getattr(value, 'value', value)}"]


def _flag(key: str, on: bool) -> list[str]:
    return [key] if on else []


def container(name: str, attrs: list[str], content: str = "") -> str:
    """`::name[attrs]` + content + closer; an empty body closes immediately."""
    head = f"::{name}{format_attrs(attrs)}"
    return f"{head}\n{content}\n::" if content else f"{head}\n::"


def table_rows(headers: list[str], rows: list[list[str]]) -> str:
    """Render a pipe table with a `---` separator under the header."""
    if not headers and not rows:
        return ""
    lines = []
    if headers:
        lines.append(f"| {' | '.join(headers)} |")
        lines.append(f"| {' | '.join('---' for _ in headers)} |")
    lines.extend(f"| {' | '.join(row)} |" for row in rows)
    return "\n".join(lines)


def _headed(level: str, items: list[tuple[str, str]]) -> str:
    parts = []
    for heading, body in items:
        parts.append(f"{level} {heading}")
        if body:
            parts.append(body)
    return "\n".join(parts)


def _link(item: NavItem) -> str:
    return f"[{item.label}]({item.href})"


# --- front matter ---

def front_matter_data(fm: FrontMatter) -> dict[str, Any]:
    """Front matter as a plain mapping in canonical key order."""
    data: dict[str, Any] = {}
    scalars = [
        ("title", fm.title), ("type", fm.doc_type), ("status", fm.status), ("scope", fm.scope),
        ("tags", fm.tags), ("created", fm.created), ("updated", fm.updated), ("author", fm.author),
        ("confidence", fm.confidence), ("version", fm.version), ("contributors", fm.contributors),
        ("description", fm.description), ("workspace", fm.workspace), ("decision", fm.decision),
    ]
    for key, value in scalars:
        if value is None or value == []:
            continue
        data[key] = getattr(value, "value", value)
    if fm.related:
        data["related"] = [{"path": r.path, "relationship": r.relationship.value} for r in fm.related]
    for key, value in fm.extra.items():
        data.setdefault(key, value)
    return data


def serialize_front_matter(fm: FrontMatter) -> str:
    data = front_matter_data(fm)
    if not data:
        return "---\n---"
    body = yaml.safe_dump(data, sort_keys=False, allow_unicode=True, default_flow_style=False)
    return f"---\n{body}---"


# --- per-type writers ---

def _markdown(b: Markdown) -> str:
    return trim_blank_lines(split_lines(b.content))


def _unknown(b: Unknown) -> str:
    return container(b.name, [format_value(k, v) for k, v in sorted(b.attrs.items())], b.content)


def _callout(b: Callout) -> str:
    return container("callout", _bare("type", b.callout_type) + _opt("title", b.title), b.content)


def _data(b: Data) -> str:
    attrs = _opt("id", b.id) + _bare("format", b.format) + _flag("sortable", b.sortable)
    if b.format == DataFormat.table:
        content = table_rows(b.headers, b.rows)
    elif b.format == DataFormat.csv:
        content = "\n".join(",".join(row) for row in ([b.headers] if b.headers else []) + b.rows)
    else:
        content = b.raw_content
    return container("data", attrs, content)


def _code(b: Code) -> str:
    attrs = (
        ([format_value("lang", b.lang)] if b.lang is not None else [])
        + _opt("file", b.file)
        + (_opt("highlight", ",".join(b.highlight)) if b.highlight else [])
    )
    return container("code", attrs, b.content)


def _tasks(b: Tasks) -> str:
    lines = []
    for item in b.items:
        check = "x" if item.done else " "
        suffix = f" @{item.assignee}" if item.assignee else ""
        lines.append(f"- [{check}] {item.text}{suffix}")
    return container("tasks", [], "\n".join(lines))


def _decision(b: Decision) -> str:
    attrs = (
        _bare("status", b.status)
        + _opt("date", b.date)
        + (_opt("deciders", ",".join(b.deciders)) if b.deciders else [])
    )
    return container("decision", attrs, b.content)


def _metric(b: Metric) -> str:
    attrs = [quoted("label", b.label), quoted("value", b.value)]
    return container("metric", attrs + _bare("trend", b.trend) + _opt("unit", b.unit))


def _summary(b: Summary) -> str:
    return container("summary", [], b.content)


def _figure(b: Figure) -> str:
    attrs = [quoted("src", b.src)] + _opt("caption", b.caption) + _opt("alt", b.alt) + _opt("width", b.width)
    return container("figure", attrs)


def _tabs(b: Tabs) -> str:
    return container("tabs", [], _headed("##", [(t.label, t.content) for t in b.tabs]))


def _columns(b: Columns) -> str:
    parts = []
    for col in b.columns:
        parts.extend([":::column", col.content, ":::"])
    return container("columns", [], "\n".join(parts))


def _quote(b: Quote) -> str:
    return container("quote", _opt("by", b.attribution) + _opt("cite", b.cite), b.content)


def _cta(b: Cta) -> str:
    attrs = [quoted("label", b.label), quoted("href", b.href)] + _flag("primary", b.primary) + _opt("icon", b.icon)
    return container("cta", attrs)


def _hero_image(b: HeroImage) -> str:
    return container("hero-image", [quoted("src", b.src)] + _opt("alt", b.alt))


def _testimonial(b: Testimonial) -> str:
    attrs = _opt("author", b.author) + _opt("role", b.role) + _opt("company", b.company)
    return container("testimonial", attrs, b.content)


def _properties(props: list[StyleProperty]) -> str:
    return "\n".join(f"{p.key}: {p.value}" for p in props)


def _style(b: Style) -> str:
    return container("style", [], _properties(b.properties))


def _faq(b: Faq) -> str:
    return container("faq", [], _headed("###", [(i.question, i.answer) for i in b.items]))


def _pricing_table(b: PricingTable) -> str:
    return container("pricing-table", [], table_rows(b.headers, b.rows))


def _site(b: Site) -> str:
    return container("site", _opt("domain", b.domain), _properties(b.properties))


def deepen(text: str) -> str:
    """Add one colon to every directive marker line so the text nests one level down."""
    lines = []
    for line in split_lines(text):
        if opening_directive(line) or closing_directive_depth(line) is not None:
            at = line.index(":")
            line = line[:at] + ":" + line[at:]
        lines.append(line)
    return "\n".join(lines)


def _children_source(children: list[Block]) -> str:
    """Render children one level below their container; leaves only exist at the top."""
    parts = []
    for child in children:
        text = _divider_container(child) if isinstance(child, Divider) else serialize_block(child)
        parts.append(text if isinstance(child, Markdown) else deepen(text))
    return "\n\n".join(parts)


def _page(b: Page) -> str:
    attrs = (
        [quoted("route", b.route)] + _opt("layout", b.layout) + _opt("title", b.title)
        + _flag("sidebar", b.sidebar)
    )
    return container("page", attrs, _children_source(b.children) or b.content)


def _nav(b: Nav) -> str:
    lines = []
    for item in b.items:
        icon = f" {{icon={item.icon}}}" if item.icon else ""
        lines.append(f"- {_link(item)}{icon}")
    return container("nav", _opt("logo", b.logo), "\n".join(lines))


def _embed(b: Embed) -> str:
    attrs = (
        [quoted("src", b.src)] + _bare("type", b.embed_type) + _opt("width", b.width)
        + _opt("height", b.height) + _opt("title", b.title)
    )
    return container("embed", attrs)


def _form(b: Form) -> str:
    lines = []
    for f in b.fields:
        star = " *" if f.required else ""
        if f.field_type == FormFieldType.select:
            lines.append(f"- {f.label} (select: {' | '.join(f.options)}){star}")
        elif f.placeholder is not None:
            lines.append(f'- {f.label} ({f.field_type.value}, "{f.placeholder}"){star}')
        else:
            lines.append(f"- {f.label} ({f.field_type.value}){star}")
    return container("form", _opt("submit", b.submit_label), "\n".join(lines))


def _gallery(b: Gallery) -> str:
    lines = []
    for item in b.items:
        line = f"![{item.alt or ''}]({item.src})"
        if item.category:
            line += f" {item.category}: {item.caption or ''}".rstrip()
        elif item.caption:
            line += f" : {item.caption}" if ":" in item.caption else f" {item.caption}"
        lines.append(line)
    return container("gallery", [], "\n".join(lines))


def _footer(b: Footer) -> str:
    lines = []
    for section in b.sections:
        lines.append(f"## {section.heading}")
        lines.extend(f"- {_link(link)}" if link.href else f"- {link.label}" for link in section.links)
    lines.extend(f"@{s.platform} {s.href}" for s in b.social)
    if b.copyright:
        lines.append(b.copyright)
    return container("footer", [], "\n".join(lines))


def _details(b: Details) -> str:
    return container("details", _opt("title", b.title) + _flag("open", b.open), b.content)


def _divider(b: Divider) -> str:
    return f"::divider{format_attrs(_opt('label', b.label))}"


def _divider_container(b: Divider) -> str:
    return container("divider", _opt("label", b.label))


def _hero_content(b: Hero) -> str:
    parts = []
    if b.headline:
        parts.append(f"# {b.headline}")
    if b.subtitle:
        parts.append(b.subtitle)
    if b.buttons:
        parts.append("\n".join(
            f"[{btn.label}]({btn.href}){'{primary}' if btn.primary else ''}" for btn in b.buttons
        ))
    return "\n\n".join(parts)


def _hero(b: Hero) -> str:
    attrs = (
        _opt("badge", b.badge)
        + ([] if b.align == "center" else [quoted("align", b.align)])
        + _opt("image", b.image)
    )
    return container("hero", attrs, b.content or _hero_content(b))


def _features(b: Features) -> str:
    cards = []
    for card in b.cards:
        lines = [f"### {card.title}" + (f" {{icon={card.icon}}}" if card.icon else "")]
        if card.body:
            lines.append(card.body)
        if card.link_label is not None:
            lines.append(f"[{card.link_label}]({card.link_href or ''})")
        cards.append("\n".join(lines))
    return container("features", _bare("cols", b.cols), "\n\n".join(cards))


def _steps(b: Steps) -> str:
    items = [
        (s.title + (f' {{time="{s.time}"}}' if s.time is not None else ""), s.body)
        for s in b.steps
    ]
    return container("steps", [], _headed("###", items))


def _stats(b: Stats) -> str:
    lines = []
    for item in b.items:
        color = f' color="{item.color}"' if item.color else ""
        lines.append(f'- {item.value} {{label="{item.label}"{color}}}')
    return container("stats", [], "\n".join(lines))


def _comparison(b: Comparison) -> str:
    return container("comparison", _opt("highlight", b.highlight), table_rows(b.headers, b.rows))


def _logo(b: Logo) -> str:
    return container("logo", [quoted("src", b.src)] + _opt("alt", b.alt) + _bare("size", b.size))


def _toc(b: Toc) -> str:
    return container("toc", [f"depth={b.depth}"])


def _pairs(items: list[BeforeAfterItem]) -> list[str]:
    return [f"- {i.label} | {i.detail}" for i in items]


def _before_after(b: BeforeAfter) -> str:
    lines = ["### Before", *_pairs(b.before_items), "", "### After", *_pairs(b.after_items)]
    return container("before-after", _opt("transition", b.transition), "\n".join(lines))


def _pipeline(b: Pipeline) -> str:
    lines = [f"- {s.label} | {s.description}" if s.description is not None else f"- {s.label}" for s in b.steps]
    return container("pipeline", [], "\n".join(lines))


def _section_content(b: Section) -> str:
    head = []
    if b.headline:
        head.append(f"## {b.headline}")
        if b.subtitle:
            head.append(b.subtitle)
    parts = ["\n".join(head)] if head else []
    if b.children:
        parts.append(_children_source(b.children))
    return "\n\n".join(parts)


def _section(b: Section) -> str:
    return container("section", _opt("bg", b.bg), _section_content(b) or b.content)


def _product_card(b: ProductCard) -> str:
    head = [f"## {b.title}"]
    if b.subtitle:
        head.append(b.subtitle)
    parts = ["\n".join(head)]
    if b.body:
        parts.append(b.body)
    tail = [f"- {f}" for f in b.features]
    if b.cta_label is not None:
        tail.append(f"[{b.cta_label}]({b.cta_href or ''})")
    if tail:
        parts.append("\n".join(tail))
    attrs = _opt("badge", b.badge) + _opt("badge-color", b.badge_color)
    return container("product-card", attrs, "\n\n".join(parts))


BLOCK_WRITERS: dict[type, Callable[[Any], str]] = {
    Markdown:     _markdown,
    Unknown:      _unknown,
    Callout:      _callout,
    Data:         _data,
    Code:         _code,
    Tasks:        _tasks,
    Decision:     _decision,
    Metric:       _metric,
    Summary:      _summary,
    Figure:       _figure,
    Tabs:         _tabs,
    Columns:      _columns,
    Quote:        _quote,
    Cta:          _cta,
    HeroImage:    _hero_image,
    Testimonial:  _testimonial,
    Style:        _style,
    Faq:          _faq,
    PricingTable: _pricing_table,
    Site:         _site,
    Page:         _page,
    Nav:          _nav,
    Embed:        _embed,
    Form:         _form,
    Gallery:      _gallery,
    Footer:       _footer,
    Details:      _details,
    Divider:      _divider,
    Hero:         _hero,
    Features:     _features,
    Steps:        _steps,
    Stats:        _stats,
    Comparison:   _comparison,
    Logo:         _logo,
    Toc:          _toc,
    BeforeAfter:  _before_after,
    Pipeline:     _pipeline,
    Section:      _section,
    ProductCard:  _product_card,
}


def serialize_block(block: Block) -> str:
    """Render one block without a trailing newline."""
    return BLOCK_WRITERS[type(block)](block)


def to_surf_source(doc: SurfDoc) -> str:
    """Serialize a document: front matter, then blocks separated by blank lines."""
    parts = []
    if doc.front_matter is not None:
        parts.append(serialize_front_matter(doc.front_matter))
    parts.extend(serialize_block(block) for block in doc.blocks)
    return "\n".join(part + "\n" for part in parts)

