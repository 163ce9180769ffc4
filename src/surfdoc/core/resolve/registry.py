"""Directive name to resolver lookup table"""

import logging
from typing import Callable

from surfdoc.core.blocks import Attrs, Block, Span, Unknown
from surfdoc.core.resolve import content, landing, site


logger = logging.getLogger(__name__)

BlockParser = Callable[[Attrs, str, Span], Block]

BLOCK_PARSERS: dict[str, BlockParser] = {
    "callout":        content.parse_callout,
    "data":           content.parse_data,
    "code":           content.parse_code,
    "tasks":          content.parse_tasks,
    "decision":       content.parse_decision,
    "metric":         content.parse_metric,
    "summary":        content.parse_summary,
    "figure":         content.parse_figure,
    "tabs":           content.parse_tabs,
    "columns":        content.parse_columns,
    "quote":          content.parse_quote,
    "testimonial":    content.parse_testimonial,
    "faq":            content.parse_faq,
    "pricing-table":  content.parse_pricing_table,
    "details":        content.parse_details,
    "divider":        content.parse_divider,
    "toc":            content.parse_toc,
    "cta":            site.parse_cta,
    "hero-image":     site.parse_hero_image,
    "style":          site.parse_style,
    "site":           site.parse_site,
    "page":           site.parse_page,
    "nav":            site.parse_nav,
    "embed":          site.parse_embed,
    "form":           site.parse_form,
    "gallery":        site.parse_gallery,
    "footer":         site.parse_footer,
    "logo":           site.parse_logo,
    "hero":           landing.parse_hero,
    "features":       landing.parse_features,
    "steps":          landing.parse_steps,
    "stats":          landing.parse_stats,
    "comparison":     landing.parse_comparison,
    "before-after":   landing.parse_before_after,
    "pipeline":       landing.parse_pipeline,
    "section":        landing.parse_section,
    "product-card":   landing.parse_product_card,
}

# Directives whose meaning lives entirely in their attributes; a missing
# closer loses nothing for these.
ATTR_ONLY_BLOCKS = {"metric", "figure", "cta", "hero-image", "embed", "divider", "logo", "toc"}


def register_block_parser(name: str, parser: BlockParser) -> None:
    """Add or replace the resolver for a directive name."""
    BLOCK_PARSERS[name] = parser


def resolve_block(block: Block) -> Block:
    """Convert an Unknown directive into its typed variant; anything else is returned as is."""
    if not isinstance(block, Unknown):
        return block
    parser = BLOCK_PARSERS.get(block.name)
    if parser is None:
        logger.debug("no resolver for %r; keeping Unknown", block.name)
        return block
    return parser(block.attrs, block.content, block.span)
