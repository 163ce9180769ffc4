"""Unit tests for core/builder.py"""

import pytest

from surfdoc.core.blocks import (
    Callout, CalloutType, ColumnContent, Data, GalleryItem, Markdown, Page, PipelineStep, Section, Tasks,
    Unknown,
)
from surfdoc.core.builder import SurfDocBuilder
from surfdoc.core.models import DocStatus, DocType, FrontMatter
from surfdoc.core.serialize import to_surf_source


def test_builder_returns_self():
    builder = SurfDocBuilder()
    assert builder.title("T").markdown("x").divider() is builder


def test_front_matter_setters():
    doc = (
        SurfDocBuilder()
        .title("Plan")
        .doc_type("plan")
        .status(DocStatus.draft)
        .author("ada")
        .tags(["a", "b"])
        .description("About")
        .build()
    )
    fm = doc.front_matter
    assert (fm.title, fm.doc_type, fm.status, fm.author) == ("Plan", DocType.plan, DocStatus.draft, "ada")
    assert fm.tags == ["a", "b"]
    assert fm.description == "About"


def test_front_matter_replaced_wholesale():
    doc = SurfDocBuilder().title("Old").front_matter(FrontMatter(title="New")).build()
    assert doc.front_matter == FrontMatter(title="New")


def test_no_front_matter_by_default():
    assert SurfDocBuilder().markdown("x").build().front_matter is None


def test_markdown_and_headings_merge():
    doc = SurfDocBuilder().heading(2, "Intro").markdown("Body.").markdown("  \n").build()
    assert doc.blocks == [Markdown(content="## Intro\n\nBody.")]


def test_heading_level_clamped():
    doc = SurfDocBuilder().heading(9, "Deep").build()
    assert doc.blocks[0].content == "###### Deep"


def test_task_extends_trailing_tasks():
    doc = SurfDocBuilder().task("One").task("Two", done=True, assignee="bob").markdown("x").task("Three").build()
    first, _, last = doc.blocks
    assert isinstance(first, Tasks)
    assert [(t.text, t.done, t.assignee) for t in first.items] == [("One", False, None), ("Two", True, "bob")]
    assert [t.text for t in last.items] == ["Three"]


def test_callout_accepts_plain_string_type():
    (block,) = SurfDocBuilder().callout("tip", "Hi", title="T").build().blocks
    assert block == Callout(callout_type=CalloutType.tip, title="T", content="Hi")


def test_data_table_raw_content_matches_rows():
    (block,) = SurfDocBuilder().data_table(["A"], [["1"]]).build().blocks
    assert isinstance(block, Data)
    assert (block.headers, block.rows) == (["A"], [["1"]])
    assert block.raw_content == "| A |\n| --- |\n| 1 |"
    assert block.span.is_synthetic


def test_page_and_section_scan_children():
    doc = (
        SurfDocBuilder()
        .page("/docs", "Intro\n\n:::callout\nTip\n:::", title="Docs")
        .section("## Why\nBecause\n\n:::divider\n:::", bg="muted")
        .build()
    )
    page, section = doc.blocks
    assert isinstance(page, Page) and (page.route, page.title) == ("/docs", "Docs")
    assert [c.kind for c in page.children] == ["markdown", "callout"]
    assert isinstance(section, Section) and (section.headline, section.bg) == ("Why", "muted")
    assert [c.kind for c in section.children] == ["divider"]


def test_columns_and_pipeline_accept_strings():
    doc = (
        SurfDocBuilder()
        .columns(["A", ColumnContent(content="B")])
        .pipeline(["Parse", PipelineStep(label="Emit", description="write")])
        .build()
    )
    columns, pipeline = doc.blocks
    assert [c.content for c in columns.columns] == ["A", "B"]
    assert [(s.label, s.description) for s in pipeline.steps] == [("Parse", None), ("Emit", "write")]


def test_gallery_columns_from_count():
    items = [GalleryItem(src=f"{i}.png") for i in range(5)]
    (gallery,) = SurfDocBuilder().gallery(items).build().blocks
    assert gallery.columns == 3


def test_product_card_cta_pair():
    (card,) = SurfDocBuilder().product_card("Pro", cta=("Buy", "/buy"), features=["Fast"]).build().blocks
    assert (card.cta_label, card.cta_href, card.features) == ("Buy", "/buy", ["Fast"])


def test_unknown_attrs_sorted():
    (block,) = SurfDocBuilder().unknown("custom_x", {"z": 1, "a": "b"}, "raw").build().blocks
    assert isinstance(block, Unknown)
    assert list(block.attrs) == ["a", "z"]


def test_build_source_is_serialization():
    doc = SurfDocBuilder().title("T").markdown("# T").callout("info", "x").toc(2).build()
    assert doc.source == to_surf_source(doc)
    assert doc.source.startswith("---\ntitle: T\n---\n")


def test_build_rejects_multiline_attribute():
    with pytest.raises(ValueError, match="line break"):
        SurfDocBuilder().callout("info", "Body", title="Heads\nup").build()
