"""Resolvers for landing-page blocks: hero, features, steps, stats, and product cards"""

import re
from typing import Optional

from surfdoc.core.blocks import (
    Attrs,
    BeforeAfter,
    BeforeAfterItem,
    Comparison,
    FeatureCard,
    Features,
    Hero,
    HeroButton,
    Pipeline,
    PipelineStep,
    ProductCard,
    Section,
    Span,
    StatItem,
    Stats,
    StepItem,
    Steps,
)
from surfdoc.core.resolve.content import joined, split_headed
from surfdoc.core.resolve.inline import (
    attr_int,
    attr_string,
    extract_quoted_attr,
    parse_link,
)
from surfdoc.core.scan import parse_children


_BUTTON_RE = re.compile(r'\[([^\]]*)\]\(([^)]*)\)(.*)')


def parse_hero(attrs: Attrs, content: str, span: Span) -> Hero:
    """`# headline`, subtitle lines, then `[Label](href){primary}` buttons."""
    headline = None
    subtitle_lines: list[str] = []
    buttons: list[HeroButton] = []

    for line in content.splitlines():
        trimmed = line.strip()
        if not trimmed:
            continue
        if trimmed.startswith("# "):
            headline = trimmed[2:].strip()
            continue
        m = _BUTTON_RE.fullmatch(trimmed)
        if m:
            label, href, suffix = m.groups()
            buttons.append(HeroButton(label=label, href=href, primary=suffix.strip() == "{primary}"))
            continue
        if headline is not None and not buttons:
            subtitle_lines.append(trimmed)

    return Hero(
        headline=headline,
        subtitle=" ".join(subtitle_lines) or None,
        badge=attr_string(attrs, "badge"),
        align=attr_string(attrs, "align") or "center",
        image=attr_string(attrs, "image"),
        buttons=buttons,
        content=content,
        span=span,
    )


def split_marker(heading: str, marker: str) -> tuple[str, Optional[str]]:
    """Split `Title {key=value}` on the last `{key=`; the value keeps no braces."""
    pos = heading.rfind(marker)
    if pos == -1:
        return heading, None
    return heading[:pos].strip(), heading[pos + len(marker):].rstrip("}")


def feature_card(heading: str, lines: list[str]) -> FeatureCard:
    """Build a card; a trailing Markdown-link line becomes the card link."""
    title, icon = split_marker(heading, "{icon=")
    body = list(lines)
    while body and not body[-1].strip():
        body.pop()
    link_label = link_href = None
    if body:
        link = parse_link(body[-1])
        if link:
            link_label, link_href = link
            body.pop()
    return FeatureCard(title=title, icon=icon, body=joined(body), link_label=link_label, link_href=link_href)


def parse_features(attrs: Attrs, content: str, span: Span) -> Features:
    _, sections = split_headed(content, "### ")
    cards = [feature_card(heading, lines) for heading, lines in sections]
    return Features(cards=cards, cols=attr_int(attrs, "cols", span), span=span)


def parse_steps(attrs: Attrs, content: str, span: Span) -> Steps:
    _, sections = split_headed(content, "### ", "## ")
    steps = []
    for heading, lines in sections:
        title, time = split_marker(heading, "{time=")
        steps.append(StepItem(title=title, time=time.strip('"') if time is not None else None, body=joined(lines)))
    return Steps(steps=steps, span=span)


def parse_stats(attrs: Attrs, content: str, span: Span) -> Stats:
    items = []
    for line in content.splitlines():
        text = line.strip().removeprefix("- ")
        brace = text.rfind("{")
        if not text or brace == -1:
            continue
        value = text[:brace].strip()
        inner = text[brace + 1:].rstrip("}")
        label = extract_quoted_attr(inner, "label") or ""
        if value and label:
            items.append(StatItem(value=value, label=label, color=extract_quoted_attr(inner, "color")))
    return Stats(items=items, span=span)


def parse_comparison(attrs: Attrs, content: str, span: Span) -> Comparison:
    headers: list[str] = []
    rows: list[list[str]] = []
    for line in content.splitlines():
        trimmed = line.strip()
        if not trimmed.startswith("|"):
            continue
        if all(c in "-| :" for c in trimmed.strip("|")):
            continue
        cells = [cell.strip() for cell in trimmed.split("|") if cell]
        if not headers:
            headers = cells
        else:
            rows.append(cells)
    return Comparison(headers=headers, rows=rows, highlight=attr_string(attrs, "highlight"), span=span)


def parse_before_after(attrs: Attrs, content: str, span: Span) -> BeforeAfter:
    before: list[BeforeAfterItem] = []
    after: list[BeforeAfterItem] = []
    target = before
    for line in content.splitlines():
        trimmed = line.strip()
        if trimmed.lower() == "### before":
            target = before
            continue
        if trimmed.lower() == "### after":
            target = after
            continue
        label, sep, detail = trimmed.removeprefix("- ").partition(" | ")
        if trimmed and sep:
            target.append(BeforeAfterItem(label=label.strip(), detail=detail.strip()))
    return BeforeAfter(
        before_items=before,
        after_items=after,
        transition=attr_string(attrs, "transition"),
        span=span,
    )


def parse_pipeline(attrs: Attrs, content: str, span: Span) -> Pipeline:
    steps = []
    for line in content.splitlines():
        trimmed = line.strip()
        if not trimmed:
            continue
        label, sep, description = trimmed.removeprefix("- ").partition(" | ")
        steps.append(PipelineStep(label=label.strip(), description=description.strip() if sep else None))
    return Pipeline(steps=steps, span=span)


def _is_subtitle(line: str) -> bool:
    return not line.startswith(("::", "#", "- "))


def parse_section(attrs: Attrs, content: str, span: Span) -> Section:
    """Optional `## headline` and subtitle line, then nested children."""
    lines = content.splitlines()
    headline = subtitle = None
    body_start = 0

    for i, line in enumerate(lines):
        trimmed = line.strip()
        if headline is None:
            if not trimmed:
                body_start = i + 1
                continue
            if trimmed.startswith("## "):
                headline = trimmed[3:].strip()
                body_start = i + 1
                continue
            break
        if trimmed and subtitle is None and _is_subtitle(trimmed):
            subtitle = trimmed
            body_start = i + 1
            continue
        body_start = i
        break

    remaining = "\n".join(lines[body_start:]).strip()
    return Section(
        bg=attr_string(attrs, "bg"),
        headline=headline,
        subtitle=subtitle,
        content=content,
        children=parse_children(remaining),
        span=span,
    )


def parse_product_card(attrs: Attrs, content: str, span: Span) -> ProductCard:
    """`## Title`, subtitle, blank line, body paragraphs, `- feature` list, `[cta](href)`."""
    title = ""
    subtitle = None
    body: list[str] = []
    features: list[str] = []
    cta = None
    state = "title"

    for line in content.splitlines():
        trimmed = line.strip()
        if state == "title":
            if trimmed.startswith("## "):
                title = trimmed[3:].strip()
                state = "subtitle"
            continue

        if trimmed.startswith("- "):
            features.append(trimmed[2:])
            state = "features"
        elif trimmed.startswith("[") and "](" in trimmed:
            cta = parse_link(trimmed) or cta
        elif state == "subtitle":
            if not trimmed:
                if subtitle is not None:
                    state = "body"
            elif subtitle is None:
                subtitle = trimmed
            else:
                body.append(trimmed)
                state = "body"
        elif state == "body":
            body.append(trimmed)

    return ProductCard(
        title=title,
        subtitle=subtitle,
        badge=attr_string(attrs, "badge"),
        badge_color=attr_string(attrs, "badge-color"),
        body=joined(body),
        features=features,
        cta_label=cta[0] if cta else None,
        cta_href=cta[1] if cta else None,
        span=span,
    )
