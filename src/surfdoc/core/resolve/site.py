"""Resolvers for site chrome: pages, navigation, forms, galleries, footers"""

import re
from typing import Optional

from surfdoc.core.blocks import (
    Attrs,
    Cta,
    Embed,
    EmbedType,
    Footer,
    FooterSection,
    Form,
    FormField,
    FormFieldType,
    Gallery,
    GalleryItem,
    HeroImage,
    Logo,
    Nav,
    NavItem,
    Page,
    Site,
    SocialLink,
    Span,
    Style,
    StyleProperty,
)
from surfdoc.core.resolve.inline import (
    attr_bool,
    attr_int,
    attr_string,
    heading_text,
    optional_enum,
)
from surfdoc.core.scan import parse_children


_NAV_ICON_RE = re.compile(r'\s*\{icon=([^}]*)\}')
_IMAGE_RE = re.compile(r'!\[([^\]]*)\]\(([^)]*)\)')
_LIST_LINK_RE = re.compile(r'- \[(.*?)\]\(([^)]*)\)')

EMBED_HOSTS = [
    (EmbedType.map,   ("google.com/maps", "maps.google")),
    (EmbedType.video, ("youtube.com", "youtu.be", "vimeo.com")),
    (EmbedType.audio, ("soundcloud.com", "spotify.com")),
]

FIELD_TYPE_ALIASES = {
    "email":     FormFieldType.email,
    "tel":       FormFieldType.tel,
    "phone":     FormFieldType.tel,
    "date":      FormFieldType.date,
    "number":    FormFieldType.number,
    "select":    FormFieldType.select,
    "textarea":  FormFieldType.textarea,
    "multiline": FormFieldType.textarea,
}


def parse_properties(content: str) -> list[StyleProperty]:
    """Parse `key: value` lines, skipping anything with an empty side."""
    props = []
    for line in content.splitlines():
        key, sep, value = line.strip().partition(":")
        if sep and key.strip() and value.strip():
            props.append(StyleProperty(key=key.strip(), value=value.strip()))
    return props


def parse_style(attrs: Attrs, content: str, span: Span) -> Style:
    return Style(properties=parse_properties(content), span=span)


def parse_site(attrs: Attrs, content: str, span: Span) -> Site:
    return Site(domain=attr_string(attrs, "domain"), properties=parse_properties(content), span=span)


def parse_page(attrs: Attrs, content: str, span: Span) -> Page:
    return Page(
        route=attr_string(attrs, "route") or "",
        layout=attr_string(attrs, "layout"),
        title=attr_string(attrs, "title"),
        sidebar=attr_bool(attrs, "sidebar"),
        content=content,
        children=parse_children(content),
        span=span,
    )


def parse_nav(attrs: Attrs, content: str, span: Span) -> Nav:
    items = []
    for line in content.splitlines():
        m = _LIST_LINK_RE.match(line.strip())
        if not m:
            continue
        icon = _NAV_ICON_RE.match(line.strip()[m.end():])
        items.append(NavItem(label=m.group(1), href=m.group(2), icon=icon.group(1) if icon else None))
    return Nav(items=items, logo=attr_string(attrs, "logo"), span=span)


def detect_embed_type(src: str) -> Optional[EmbedType]:
    """Infer media kind from well-known hosts in the URL."""
    lowered = src.lower()
    for embed_type, needles in EMBED_HOSTS:
        if any(n in lowered for n in needles):
            return embed_type
    return None


def parse_embed(attrs: Attrs, content: str, span: Span) -> Embed:
    src = attr_string(attrs, "src") or ""
    embed_type = optional_enum(attrs, "type", EmbedType, span) or detect_embed_type(src)
    return Embed(
        src=src,
        embed_type=embed_type,
        width=attr_string(attrs, "width"),
        height=attr_string(attrs, "height"),
        title=attr_string(attrs, "title"),
        span=span,
    )


def field_name(label: str) -> str:
    """Machine-safe form field name: lowercase, non-alphanumerics to '_'."""
    return "".join(c if c.isalnum() else "_" for c in label.lower()).strip("_")


def parse_form_field(rest: str) -> FormField:
    """Parse the text after `- ` of a form field line."""
    rest = rest.strip()
    required = rest.endswith("*")
    paren = rest.find("(")
    if paren == -1:
        label = rest.removesuffix(" *").rstrip("*")
        return FormField(label=label, name=field_name(label), required=required)

    label = rest[:paren].strip()
    after = rest[paren + 1:]
    close = after.find(")")
    type_str = (after if close == -1 else after[:close]).strip()

    if type_str.startswith("select:"):
        options = [o.strip() for o in type_str[len("select:"):].split("|") if o.strip()]
        return FormField(
            label=label, name=field_name(label), field_type=FormFieldType.select,
            required=required, options=options,
        )

    type_name, sep, placeholder = type_str.partition(",")
    return FormField(
        label=label,
        name=field_name(label),
        field_type=FIELD_TYPE_ALIASES.get(type_name.strip(), FormFieldType.text),
        required=required,
        placeholder=placeholder.strip().strip('"') if sep else None,
    )


def parse_form(attrs: Attrs, content: str, span: Span) -> Form:
    fields = [
        parse_form_field(line.strip()[2:])
        for line in content.splitlines()
        if line.strip().startswith("- ")
    ]
    return Form(fields=fields, submit_label=attr_string(attrs, "submit"), span=span)


def gallery_columns(count: int) -> int:
    if count <= 2:
        return 2
    return 3 if count <= 6 else 4


def parse_gallery(attrs: Attrs, content: str, span: Span) -> Gallery:
    items = []
    for line in content.splitlines():
        m = _IMAGE_RE.match(line.strip())
        if not m:
            continue
        remainder = line.strip()[m.end():].strip()
        category, caption = None, remainder or None
        if ":" in remainder:
            cat, _, cap = remainder.partition(":")
            category, caption = cat.strip() or None, cap.strip() or None
        items.append(GalleryItem(src=m.group(2), alt=m.group(1) or None, category=category, caption=caption))
    return Gallery(items=items, columns=gallery_columns(len(items)), span=span)


def is_copyright(line: str) -> bool:
    return line.startswith(("(c)", "©")) or line.lower().startswith("copyright")


def parse_footer(attrs: Attrs, content: str, span: Span) -> Footer:
    """Footer content: `## ` sections of link lists, `@platform url` socials, copyright line."""
    sections: list[FooterSection] = []
    social: list[SocialLink] = []
    copyright = None
    heading = None
    links: list[NavItem] = []

    for line in content.splitlines():
        trimmed = line.strip()
        if not trimmed:
            continue
        if is_copyright(trimmed):
            copyright = trimmed
            continue
        if trimmed.startswith("@"):
            parts = trimmed[1:].split(None, 1)
            if len(parts) == 2:
                social.append(SocialLink(platform=parts[0], href=parts[1].strip()))
            continue

        title = heading_text(trimmed, "## ", "### ")
        if title is not None:
            if heading is not None:
                sections.append(FooterSection(heading=heading, links=links))
            heading, links = title, []
            continue

        if trimmed.startswith("- ["):
            m = _LIST_LINK_RE.match(trimmed)
            if m:
                links.append(NavItem(label=m.group(1), href=m.group(2)))
        elif trimmed.startswith("- "):
            links.append(NavItem(label=trimmed[2:].strip()))

    if heading is not None:
        sections.append(FooterSection(heading=heading, links=links))
    return Footer(sections=sections, copyright=copyright, social=social, span=span)


def parse_cta(attrs: Attrs, content: str, span: Span) -> Cta:
    return Cta(
        label=attr_string(attrs, "label") or "",
        href=attr_string(attrs, "href") or "",
        primary=attr_bool(attrs, "primary"),
        icon=attr_string(attrs, "icon"),
        span=span,
    )


def parse_hero_image(attrs: Attrs, content: str, span: Span) -> HeroImage:
    return HeroImage(src=attr_string(attrs, "src") or "", alt=attr_string(attrs, "alt"), span=span)


def parse_logo(attrs: Attrs, content: str, span: Span) -> Logo:
    return Logo(
        src=attr_string(attrs, "src") or "",
        alt=attr_string(attrs, "alt"),
        size=attr_int(attrs, "size", span),
        span=span,
    )
