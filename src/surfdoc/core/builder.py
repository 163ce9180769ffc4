"""Fluent programmatic construction of SurfDoc documents"""

from typing import Any, Optional, Union

from surfdoc.core.blocks import (
    AttrValue, BeforeAfter, BeforeAfterItem, Block, Callout, CalloutType, Code, ColumnContent,
    Columns, Comparison, Cta, Decision, DecisionStatus, Details, Divider, Embed,
    EmbedType, Faq, FaqItem, FeatureCard, Features, Figure, Footer, FooterSection, Form,
    FormField, Gallery, GalleryItem, Hero, HeroButton, HeroImage, Logo, Markdown, Metric, Nav,
    NavItem, Pipeline, PipelineStep, PricingTable, ProductCard, Quote, Site, SocialLink, StatItem,
    Stats, StepItem, Steps, Style, StyleProperty, Summary, TabPanel, Tabs, TaskItem, Tasks,
    SYNTHETIC_SPAN, Testimonial, Toc, Trend, Unknown,
)
from surfdoc.core.models import DocStatus, DocType, FrontMatter, SurfDoc
from surfdoc.core.resolve.content import parse_data
from surfdoc.core.resolve.landing import parse_section
from surfdoc.core.resolve.site import gallery_columns, parse_page
from surfdoc.core.serialize import table_rows, to_surf_source


Properties = Union[dict[str, str], list[StyleProperty]]


def _properties(props: Properties) -> list[StyleProperty]:
    if isinstance(props, dict):
        return [StyleProperty(key=k, value=v) for k, v in props.items()]
    return list(props)


class SurfDocBuilder:
    """Append typed blocks and front matter, then build() a SurfDoc.

    Every method returns the builder. Blocks carry the synthetic span.
    Consecutive markdown()/heading() calls merge into one Markdown block,
    mirroring how the parser coalesces prose between directives.
    """

    def __init__(self) -> None:
        self._front_matter: Optional[FrontMatter] = None
        self._blocks: list[Block] = []

    # --- front matter ---

    def _set_front_matter(self, **fields: Any) -> "SurfDocBuilder":
        current = self._front_matter or FrontMatter()
        self._front_matter = current.model_copy(update=fields)
        return self

    def title(self, title: str) -> "SurfDocBuilder":
        return self._set_front_matter(title=title)

    def doc_type(self, doc_type: DocType) -> "SurfDocBuilder":
        return self._set_front_matter(doc_type=DocType(doc_type))

    def status(self, status: DocStatus) -> "SurfDocBuilder":
        return self._set_front_matter(status=DocStatus(status))

    def author(self, author: str) -> "SurfDocBuilder":
        return self._set_front_matter(author=author)

    def tags(self, tags: list[str]) -> "SurfDocBuilder":
        return self._set_front_matter(tags=list(tags))

    def description(self, description: str) -> "SurfDocBuilder":
        return self._set_front_matter(description=description)

    def front_matter(self, fm: FrontMatter) -> "SurfDocBuilder":
        self._front_matter = fm
        return self

    # --- blocks ---

    def block(self, block: Block) -> "SurfDocBuilder":
        """Append any pre-built block."""
        self._blocks.append(block)
        return self

    def markdown(self, content: str) -> "SurfDocBuilder":
        """Append prose; blank text is ignored and adjacent prose is merged."""
        content = content.strip("\n")
        if not content.strip():
            return self
        last = self._blocks[-1] if self._blocks else None
        if isinstance(last, Markdown):
            self._blocks[-1] = Markdown(content=f"{last.content}\n\n{content}")
            return self
        return self.block(Markdown(content=content))

    def heading(self, level: int, text: str) -> "SurfDocBuilder":
        level = min(max(level, 1), 6)
        return self.markdown(f"{'#' * level} {text}")

    def callout(
        self,
        callout_type: CalloutType,
        content: str,
        title: Optional[str] = None,
        ) -> "SurfDocBuilder":
        return self.block(Callout(callout_type=CalloutType(callout_type), title=title, content=content))

    def code(self, content: str, lang: Optional[str] = None, file: Optional[str] = None) -> "SurfDocBuilder":
        return self.block(Code(lang=lang, file=file, content=content))

    def data_table(self, headers: list[str], rows: list[list[str]]) -> "SurfDocBuilder":
        """Append a pipe-table data block; raw_content mirrors the rendered table."""
        return self.block(parse_data({"format": "table"}, table_rows(headers, rows), SYNTHETIC_SPAN))

    def task(self, text: str, done: bool = False, assignee: Optional[str] = None) -> "SurfDocBuilder":
        """Append one task, extending a trailing tasks block when there is one."""
        item = TaskItem(done=done, text=text, assignee=assignee)
        last = self._blocks[-1] if self._blocks else None
        if isinstance(last, Tasks):
            self._blocks[-1] = Tasks(items=[*last.items, item])
            return self
        return self.block(Tasks(items=[item]))

    def tasks(self, items: list[TaskItem]) -> "SurfDocBuilder":
        return self.block(Tasks(items=list(items)))

    def decision(
        self,
        status: DecisionStatus,
        content: str,
        date: Optional[str] = None,
        deciders: Optional[list[str]] = None,
        ) -> "SurfDocBuilder":
        return self.block(Decision(
            status=DecisionStatus(status), date=date, deciders=deciders or [], content=content,
        ))

    def metric(
        self,
        label: str,
        value: str,
        trend: Optional[Trend] = None,
        unit: Optional[str] = None,
        ) -> "SurfDocBuilder":
        return self.block(Metric(label=label, value=value, trend=trend, unit=unit))

    def summary(self, content: str) -> "SurfDocBuilder":
        return self.block(Summary(content=content))

    def figure(self, src: str, caption: Optional[str] = None, alt: Optional[str] = None) -> "SurfDocBuilder":
        return self.block(Figure(src=src, caption=caption, alt=alt))

    def quote(self, content: str, attribution: Optional[str] = None, cite: Optional[str] = None) -> "SurfDocBuilder":
        return self.block(Quote(content=content, attribution=attribution, cite=cite))

    def cta(self, label: str, href: str, primary: bool = False, icon: Optional[str] = None) -> "SurfDocBuilder":
        return self.block(Cta(label=label, href=href, primary=primary, icon=icon))

    def hero_image(self, src: str, alt: Optional[str] = None) -> "SurfDocBuilder":
        return self.block(HeroImage(src=src, alt=alt))

    def testimonial(
        self,
        content: str,
        author: Optional[str] = None,
        role: Optional[str] = None,
        company: Optional[str] = None,
        ) -> "SurfDocBuilder":
        return self.block(Testimonial(content=content, author=author, role=role, company=company))

    def style(self, properties: Properties) -> "SurfDocBuilder":
        return self.block(Style(properties=_properties(properties)))

    def faq(self, items: list[FaqItem]) -> "SurfDocBuilder":
        return self.block(Faq(items=list(items)))

    def pricing_table(self, headers: list[str], rows: list[list[str]]) -> "SurfDocBuilder":
        return self.block(PricingTable(headers=headers, rows=rows))

    def site(self, properties: Properties, domain: Optional[str] = None) -> "SurfDocBuilder":
        return self.block(Site(domain=domain, properties=_properties(properties)))

    def page(
        self,
        route: str,
        content: str,
        layout: Optional[str] = None,
        title: Optional[str] = None,
        sidebar: bool = False,
        ) -> "SurfDocBuilder":
        """Append a page; nested children are scanned from content."""
        attrs: dict[str, AttrValue] = {"route": route, "layout": layout, "title": title, "sidebar": sidebar}
        return self.block(parse_page(attrs, content, SYNTHETIC_SPAN))

    def nav(self, items: list[NavItem], logo: Optional[str] = None) -> "SurfDocBuilder":
        return self.block(Nav(items=list(items), logo=logo))

    def embed(
        self,
        src: str,
        embed_type: Optional[EmbedType] = None,
        title: Optional[str] = None,
        width: Optional[str] = None,
        height: Optional[str] = None,
        ) -> "SurfDocBuilder":
        return self.block(Embed(src=src, embed_type=embed_type, title=title, width=width, height=height))

    def form(self, fields: list[FormField], submit_label: Optional[str] = None) -> "SurfDocBuilder":
        return self.block(Form(fields=list(fields), submit_label=submit_label))

    def gallery(self, items: list[GalleryItem]) -> "SurfDocBuilder":
        return self.block(Gallery(items=list(items), columns=gallery_columns(len(items))))

    def footer(
        self,
        sections: list[FooterSection],
        copyright: Optional[str] = None,
        social: Optional[list[SocialLink]] = None,
        ) -> "SurfDocBuilder":
        return self.block(Footer(sections=list(sections), copyright=copyright, social=social or []))

    def tabs(self, tabs: list[TabPanel]) -> "SurfDocBuilder":
        return self.block(Tabs(tabs=list(tabs)))

    def columns(self, columns: list[Union[str, ColumnContent]]) -> "SurfDocBuilder":
        cols = [c if isinstance(c, ColumnContent) else ColumnContent(content=c) for c in columns]
        return self.block(Columns(columns=cols))

    def details(self, content: str, title: Optional[str] = None, open: bool = False) -> "SurfDocBuilder":
        return self.block(Details(title=title, open=open, content=content))

    def divider(self, label: Optional[str] = None) -> "SurfDocBuilder":
        return self.block(Divider(label=label))

    def hero(
        self,
        headline: str,
        subtitle: Optional[str] = None,
        buttons: Optional[list[HeroButton]] = None,
        badge: Optional[str] = None,
        image: Optional[str] = None,
        align: str = "center",
        ) -> "SurfDocBuilder":
        return self.block(Hero(
            headline=headline, subtitle=subtitle, buttons=buttons or [],
            badge=badge, image=image, align=align,
        ))

    def features(self, cards: list[FeatureCard], cols: Optional[int] = None) -> "SurfDocBuilder":
        return self.block(Features(cards=list(cards), cols=cols))

    def steps(self, steps: list[StepItem]) -> "SurfDocBuilder":
        return self.block(Steps(steps=list(steps)))

    def stats(self, items: list[StatItem]) -> "SurfDocBuilder":
        return self.block(Stats(items=list(items)))

    def comparison(
        self,
        headers: list[str],
        rows: list[list[str]],
        highlight: Optional[str] = None,
        ) -> "SurfDocBuilder":
        return self.block(Comparison(headers=headers, rows=rows, highlight=highlight))

    def logo(self, src: str, alt: Optional[str] = None, size: Optional[int] = None) -> "SurfDocBuilder":
        return self.block(Logo(src=src, alt=alt, size=size))

    def toc(self, depth: int = 3) -> "SurfDocBuilder":
        return self.block(Toc(depth=depth))

    def before_after(
        self,
        before: list[BeforeAfterItem],
        after: list[BeforeAfterItem],
        transition: Optional[str] = None,
        ) -> "SurfDocBuilder":
        return self.block(BeforeAfter(before_items=list(before), after_items=list(after), transition=transition))

    def pipeline(self, steps: list[Union[str, PipelineStep]]) -> "SurfDocBuilder":
        items = [s if isinstance(s, PipelineStep) else PipelineStep(label=s) for s in steps]
        return self.block(Pipeline(steps=items))

    def section(self, content: str, bg: Optional[str] = None) -> "SurfDocBuilder":
        """Append a section; headline, subtitle, and children are read from content."""
        return self.block(parse_section({"bg": bg}, content, SYNTHETIC_SPAN))

    def product_card(
        self,
        title: str,
        subtitle: Optional[str] = None,
        body: str = "",
        features: Optional[list[str]] = None,
        cta: Optional[tuple[str, str]] = None,
        badge: Optional[str] = None,
        badge_color: Optional[str] = None,
        ) -> "SurfDocBuilder":
        return self.block(ProductCard(
            title=title, subtitle=subtitle, body=body, features=features or [],
            cta_label=cta[0] if cta else None, cta_href=cta[1] if cta else None,
            badge=badge, badge_color=badge_color,
        ))

    def unknown(self, name: str, attrs: Optional[dict[str, AttrValue]] = None, content: str = "") -> "SurfDocBuilder":
        """Append a directive this library has no type for; it round-trips verbatim."""
        return self.block(Unknown(name=name, attrs=dict(sorted((attrs or {}).items())), content=content))

    def build(self) -> SurfDoc:
        """Produce the document; its source is its own canonical serialization."""
        doc = SurfDoc(front_matter=self._front_matter, blocks=list(self._blocks))
        return doc.model_copy(update={"source": to_surf_source(doc)})
