"""Typed block variants produced by directive resolution"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


AttrValue = Union[bool, int, float, str, None]
Attrs = dict[str, AttrValue]


class Span(BaseModel):
    """Source location of a block; all zeros for built or nested blocks."""
    model_config = ConfigDict(frozen=True)

    start_line:   int = 0       # 1-based
    end_line:     int = 0
    start_offset: int = 0       # UTF-8 byte offsets into the source
    end_offset:   int = 0

    @property
    def is_synthetic(self) -> bool:
        return self == SYNTHETIC_SPAN


SYNTHETIC_SPAN = Span()


# --- enums ---

class CalloutType(str, Enum):
    """Visual intent of a callout box."""
    info    = "info"
    warning = "warning"
    danger  = "danger"
    tip     = "tip"
    note    = "note"
    success = "success"


class DataFormat(str, Enum):
    """Encoding of a data block's content."""
    table = "table"
    csv   = "csv"
    json  = "json"


class DecisionStatus(str, Enum):
    """Lifecycle state of a recorded decision."""
    proposed   = "proposed"
    accepted   = "accepted"
    rejected   = "rejected"
    superseded = "superseded"


class Trend(str, Enum):
    """Direction indicator for a metric."""
    up   = "up"
    down = "down"
    flat = "flat"


class EmbedType(str, Enum):
    """Kind of external media behind an embed."""
    map     = "map"
    video   = "video"
    audio   = "audio"
    generic = "generic"


class FormFieldType(str, Enum):
    """Input control for a form field."""
    text     = "text"
    email    = "email"
    tel      = "tel"
    date     = "date"
    number   = "number"
    select   = "select"
    textarea = "textarea"


# --- item models ---

class _Item(BaseModel):
    model_config = ConfigDict(frozen=True)


class TaskItem(_Item):
    done: bool = False
    text: str
    assignee: Optional[str] = None


class TabPanel(_Item):
    label: str
    content: str = ""


class ColumnContent(_Item):
    content: str = ""


class FaqItem(_Item):
    question: str
    answer: str = ""


class StyleProperty(_Item):
    key: str
    value: str


class NavItem(_Item):
    label: str
    href: str = ""
    icon: Optional[str] = None


class FormField(_Item):
    label: str
    name: str
    field_type: FormFieldType = FormFieldType.text
    required: bool = False
    placeholder: Optional[str] = None
    options: list[str] = Field(default_factory=list)   # select only


class GalleryItem(_Item):
    src: str
    caption: Optional[str] = None
    alt: Optional[str] = None
    category: Optional[str] = None


class FooterSection(_Item):
    heading: str
    links: list[NavItem] = Field(default_factory=list)


class SocialLink(_Item):
    platform: str
    href: str


class HeroButton(_Item):
    label: str
    href: str
    primary: bool = False


class FeatureCard(_Item):
    title: str
    icon: Optional[str] = None
    body: str = ""
    link_label: Optional[str] = None
    link_href: Optional[str] = None


class StepItem(_Item):
    title: str
    time: Optional[str] = None
    body: str = ""


class StatItem(_Item):
    value: str
    label: str
    color: Optional[str] = None


class TocEntry(_Item):
    level: int
    text: str
    id: str


class BeforeAfterItem(_Item):
    label: str
    detail: str = ""


class PipelineStep(_Item):
    label: str
    description: Optional[str] = None


# --- blocks ---

class BaseBlock(BaseModel):
    """Fields shared by every block variant."""
    model_config = ConfigDict(frozen=True)

    span: Span = Field(default_factory=Span)


class Markdown(BaseBlock):
    """Plain prose between directives."""
    kind: Literal["markdown"] = "markdown"
    content: str


class Unknown(BaseBlock):
    """A directive with no registered resolver, preserved verbatim."""
    kind: Literal["unknown"] = "unknown"
    name: str
    attrs: Attrs = Field(default_factory=dict)
    content: str = ""


class Callout(BaseBlock):
    kind: Literal["callout"] = "callout"
    callout_type: CalloutType = CalloutType.info
    title: Optional[str] = None
    content: str = ""


class Data(BaseBlock):
    kind: Literal["data"] = "data"
    id: Optional[str] = None
    format: DataFormat = DataFormat.table
    sortable: bool = False
    headers: list[str] = Field(default_factory=list)
    rows: list[list[str]] = Field(default_factory=list)
    raw_content: str = ""


class Code(BaseBlock):
    kind: Literal["code"] = "code"
    lang: Optional[str] = None
    file: Optional[str] = None
    highlight: list[str] = Field(default_factory=list)
    content: str = ""


class Tasks(BaseBlock):
    kind: Literal["tasks"] = "tasks"
    items: list[TaskItem] = Field(default_factory=list)


class Decision(BaseBlock):
    kind: Literal["decision"] = "decision"
    status: DecisionStatus = DecisionStatus.proposed
    date: Optional[str] = None
    deciders: list[str] = Field(default_factory=list)
    content: str = ""


class Metric(BaseBlock):
    kind: Literal["metric"] = "metric"
    label: str = ""
    value: str = ""
    trend: Optional[Trend] = None
    unit: Optional[str] = None


class Summary(BaseBlock):
    kind: Literal["summary"] = "summary"
    content: str = ""


class Figure(BaseBlock):
    kind: Literal["figure"] = "figure"
    src: str = ""
    caption: Optional[str] = None
    alt: Optional[str] = None
    width: Optional[str] = None


class Tabs(BaseBlock):
    kind: Literal["tabs"] = "tabs"
    tabs: list[TabPanel] = Field(default_factory=list)


class Columns(BaseBlock):
    kind: Literal["columns"] = "columns"
    columns: list[ColumnContent] = Field(default_factory=list)


class Quote(BaseBlock):
    kind: Literal["quote"] = "quote"
    content: str = ""
    attribution: Optional[str] = None
    cite: Optional[str] = None


class Cta(BaseBlock):
    kind: Literal["cta"] = "cta"
    label: str = ""
    href: str = ""
    primary: bool = False
    icon: Optional[str] = None


class HeroImage(BaseBlock):
    kind: Literal["hero-image"] = "hero-image"
    src: str = ""
    alt: Optional[str] = None


class Testimonial(BaseBlock):
    kind: Literal["testimonial"] = "testimonial"
    content: str = ""
    author: Optional[str] = None
    role: Optional[str] = None
    company: Optional[str] = None


class Style(BaseBlock):
    kind: Literal["style"] = "style"
    properties: list[StyleProperty] = Field(default_factory=list)


class Faq(BaseBlock):
    kind: Literal["faq"] = "faq"
    items: list[FaqItem] = Field(default_factory=list)


class PricingTable(BaseBlock):
    kind: Literal["pricing-table"] = "pricing-table"
    headers: list[str] = Field(default_factory=list)
    rows: list[list[str]] = Field(default_factory=list)


class Site(BaseBlock):
    kind: Literal["site"] = "site"
    domain: Optional[str] = None
    properties: list[StyleProperty] = Field(default_factory=list)


class Page(BaseBlock):
    """A routed page whose content is scanned into nested children."""
    kind: Literal["page"] = "page"
    route: str = ""
    layout: Optional[str] = None
    title: Optional[str] = None
    sidebar: bool = False
    content: str = ""
    children: list["Block"] = Field(default_factory=list)


class Nav(BaseBlock):
    kind: Literal["nav"] = "nav"
    items: list[NavItem] = Field(default_factory=list)
    logo: Optional[str] = None


class Embed(BaseBlock):
    kind: Literal["embed"] = "embed"
    src: str = ""
    embed_type: Optional[EmbedType] = None
    width: Optional[str] = None
    height: Optional[str] = None
    title: Optional[str] = None


class Form(BaseBlock):
    kind: Literal["form"] = "form"
    fields: list[FormField] = Field(default_factory=list)
    submit_label: Optional[str] = None


class Gallery(BaseBlock):
    kind: Literal["gallery"] = "gallery"
    items: list[GalleryItem] = Field(default_factory=list)
    columns: Optional[int] = None


class Footer(BaseBlock):
    kind: Literal["footer"] = "footer"
    sections: list[FooterSection] = Field(default_factory=list)
    copyright: Optional[str] = None
    social: list[SocialLink] = Field(default_factory=list)


class Details(BaseBlock):
    kind: Literal["details"] = "details"
    title: Optional[str] = None
    open: bool = False
    content: str = ""


class Divider(BaseBlock):
    kind: Literal["divider"] = "divider"
    label: Optional[str] = None


class Hero(BaseBlock):
    kind: Literal["hero"] = "hero"
    headline: Optional[str] = None
    subtitle: Optional[str] = None
    badge: Optional[str] = None
    align: str = "center"
    image: Optional[str] = None
    buttons: list[HeroButton] = Field(default_factory=list)
    content: str = ""


class Features(BaseBlock):
    kind: Literal["features"] = "features"
    cards: list[FeatureCard] = Field(default_factory=list)
    cols: Optional[int] = None


class Steps(BaseBlock):
    kind: Literal["steps"] = "steps"
    steps: list[StepItem] = Field(default_factory=list)


class Stats(BaseBlock):
    kind: Literal["stats"] = "stats"
    items: list[StatItem] = Field(default_factory=list)


class Comparison(BaseBlock):
    kind: Literal["comparison"] = "comparison"
    headers: list[str] = Field(default_factory=list)
    rows: list[list[str]] = Field(default_factory=list)
    highlight: Optional[str] = None


class Logo(BaseBlock):
    kind: Literal["logo"] = "logo"
    src: str = ""
    alt: Optional[str] = None
    size: Optional[int] = None


class Toc(BaseBlock):
    kind: Literal["toc"] = "toc"
    depth: int = 3
    entries: list[TocEntry] = Field(default_factory=list)


class BeforeAfter(BaseBlock):
    kind: Literal["before-after"] = "before-after"
    before_items: list[BeforeAfterItem] = Field(default_factory=list)
    after_items: list[BeforeAfterItem] = Field(default_factory=list)
    transition: Optional[str] = None


class Pipeline(BaseBlock):
    kind: Literal["pipeline"] = "pipeline"
    steps: list[PipelineStep] = Field(default_factory=list)


class Section(BaseBlock):
    """A landing-page band with an optional headline over nested children."""
    kind: Literal["section"] = "section"
    bg: Optional[str] = None
    headline: Optional[str] = None
    subtitle: Optional[str] = None
    content: str = ""
    children: list["Block"] = Field(default_factory=list)


class ProductCard(BaseBlock):
    kind: Literal["product-card"] = "product-card"
    title: str = ""
    subtitle: Optional[str] = None
    badge: Optional[str] = None
    badge_color: Optional[str] = None
    body: str = ""
    features: list[str] = Field(default_factory=list)
    cta_label: Optional[str] = None
    cta_href: Optional[str] = None


Block = Annotated[
    Union[
        Markdown, Unknown, Callout, Data, Code, Tasks, Decision, Metric, Summary,
        Figure, Tabs, Columns, Quote, Cta, HeroImage, Testimonial, Style, Faq,
        PricingTable, Site, Page, Nav, Embed, Form, Gallery, Footer, Details,
        Divider, Hero, Features, Steps, Stats, Comparison, Logo, Toc, BeforeAfter,
        Pipeline, Section, ProductCard,
    ],
    Field(discriminator="kind"),
]

Page.model_rebuild()
Section.model_rebuild()
