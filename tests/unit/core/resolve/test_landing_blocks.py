"""Unit tests for core/resolve/landing.py"""

from surfdoc.core.blocks import SYNTHETIC_SPAN, Callout, Markdown
from surfdoc.core.resolve.landing import (
    parse_before_after,
    parse_comparison,
    parse_features,
    parse_hero,
    parse_pipeline,
    parse_product_card,
    parse_section,
    parse_stats,
    parse_steps,
    split_marker,
)


def test_hero():
    content = "# Build faster\nShip today,\nnot tomorrow.\n\n[Start](/start){primary}\n[Docs](/docs)"
    block = parse_hero({"badge": "New", "align": "left"}, content, SYNTHETIC_SPAN)
    assert block.headline == "Build faster"
    assert block.subtitle == "Ship today, not tomorrow."
    assert [(b.label, b.href, b.primary) for b in block.buttons] == [("Start", "/start", True), ("Docs", "/docs", False)]
    assert (block.badge, block.align, block.content) == ("New", "left", content)


def test_hero_defaults():
    block = parse_hero({}, "", SYNTHETIC_SPAN)
    assert block.headline is None and block.subtitle is None
    assert block.align == "center"


def test_split_marker():
    assert split_marker("Fast {icon=bolt}", "{icon=") == ("Fast", "bolt")
    assert split_marker("Plain", "{icon=") == ("Plain", None)


def test_features():
    content = "### Fast {icon=bolt}\nQuick.\n[More](/fast)\n\n### Safe\nSecure.\nReally."
    block = parse_features({"cols": 3}, content, SYNTHETIC_SPAN)
    fast, safe = block.cards
    assert (fast.title, fast.icon, fast.body, fast.link_label, fast.link_href) == ("Fast", "bolt", "Quick.", "More", "/fast")
    assert (safe.title, safe.icon, safe.body, safe.link_label) == ("Safe", None, "Secure.\nReally.", None)
    assert block.cols == 3


def test_steps():
    content = '### Install {time="2 min"}\nRun pip.\n## Configure\nEdit surfdoc.yaml.'
    steps = parse_steps({}, content, SYNTHETIC_SPAN).steps
    assert [(s.title, s.time, s.body) for s in steps] == [
        ("Install", "2 min", "Run pip."),
        ("Configure", None, "Edit surfdoc.yaml."),
    ]


def test_stats():
    content = '- 99% {label="Uptime" color="green"}\n10k {label="Users"}\n- 5 {color="red"}\n- no braces'
    items = parse_stats({}, content, SYNTHETIC_SPAN).items
    assert [(i.value, i.label, i.color) for i in items] == [("99%", "Uptime", "green"), ("10k", "Users", None)]


def test_comparison():
    content = "| Feature | Us | Them |\n|---|:---:|---|\n| Speed | Fast | Slow |\nnot a row"
    block = parse_comparison({"highlight": "Us"}, content, SYNTHETIC_SPAN)
    assert block.headers == ["Feature", "Us", "Them"]
    assert block.rows == [["Speed", "Fast", "Slow"]]
    assert block.highlight == "Us"


def test_before_after():
    content = "- Ignored | no heading yet\n### Before\n- Manual | slow\n\n### After\n- Auto | fast\n- no detail"
    block = parse_before_after({"transition": "fade"}, content, SYNTHETIC_SPAN)
    assert [(i.label, i.detail) for i in block.before_items] == [("Ignored", "no heading yet"), ("Manual", "slow")]
    assert [(i.label, i.detail) for i in block.after_items] == [("Auto", "fast")]
    assert block.transition == "fade"


def test_pipeline():
    steps = parse_pipeline({}, "- Parse | read input\n\n- Emit\nCheck", SYNTHETIC_SPAN).steps
    assert [(s.label, s.description) for s in steps] == [("Parse", "read input"), ("Emit", None), ("Check", None)]


def test_section_headline_subtitle_children():
    content = "## Why us\nBecause it works.\n\n:::callout[type=info]\nTrusted\n:::\n\nClosing words."
    block = parse_section({"bg": "muted"}, content, SYNTHETIC_SPAN)
    assert (block.bg, block.headline, block.subtitle) == ("muted", "Why us", "Because it works.")
    assert [type(c) for c in block.children] == [Callout, Markdown]
    assert block.content == content


def test_section_blank_after_headline_ends_header():
    block = parse_section({}, "## Title\n\nBody text.", SYNTHETIC_SPAN)
    assert (block.headline, block.subtitle) == ("Title", None)
    assert [c.content for c in block.children] == ["Body text."]


def test_section_without_headline():
    block = parse_section({}, "Just prose.\n\n:::divider\n:::", SYNTHETIC_SPAN)
    assert block.headline is None
    assert [c.kind for c in block.children] == ["markdown", "divider"]


def test_section_list_is_not_subtitle():
    block = parse_section({}, "## Title\n- item", SYNTHETIC_SPAN)
    assert block.subtitle is None
    assert block.children[0].content == "- item"


def test_product_card():
    content = "## Pro\nFor teams\n\nEverything you need.\nAnd more.\n\n- Unlimited\n- Support\n[Buy](/buy)"
    block = parse_product_card({"badge": "Popular", "badge-color": "gold"}, content, SYNTHETIC_SPAN)
    assert (block.title, block.subtitle) == ("Pro", "For teams")
    assert block.body == "Everything you need.\nAnd more."
    assert block.features == ["Unlimited", "Support"]
    assert (block.cta_label, block.cta_href) == ("Buy", "/buy")
    assert (block.badge, block.badge_color) == ("Popular", "gold")


def test_product_card_without_title():
    block = parse_product_card({}, "no heading here", SYNTHETIC_SPAN)
    assert block.title == ""
    assert block.body == ""
