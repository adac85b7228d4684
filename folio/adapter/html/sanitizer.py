"""Allow-list HTML sanitizer backed by nh3."""

import re

import nh3

from folio.domain.service.post_service import HtmlSanitizer

ALLOWED_TAGS = {
    "p", "br", "strong", "em", "u", "ul", "ol", "li",
    "h1", "h2", "h3", "h4", "blockquote", "a", "span", "img",
}

ALLOWED_ATTRIBUTES = {
    "a": {"href"},
    "img": {"src", "alt", "width", "height", "class"},
    "*": {"style"},
}

# Allowed inline style properties and the values they may take
ALLOWED_STYLES = {
    "text-align": re.compile(r"^(left|right|center|justify)$"),
    "font-size": re.compile(r"^\d+(\.\d+)?(px|em|rem|%)$"),
    "font-family": re.compile(r"^[\w\s\"',-]+$"),
}


def filter_style(value: str) -> str | None:
    """Keep only allow-listed style declarations with matching values."""
    kept = []
    for declaration in value.split(";"):
        name, sep, prop_value = declaration.partition(":")
        if not sep:
            continue
        name = name.strip().lower()
        prop_value = prop_value.strip()
        pattern = ALLOWED_STYLES.get(name)
        if pattern is not None and pattern.match(prop_value):
            kept.append(f"{name}:{prop_value}")
    return ";".join(kept) or None


def _attribute_filter(tag: str, attribute: str, value: str) -> str | None:
    if attribute == "style":
        return filter_style(value)
    return value


class Nh3HtmlSanitizer(HtmlSanitizer):
    """Sanitizes editor HTML; links open in a new tab with a safe rel."""

    def clean(self, html: str) -> str:
        return nh3.clean(
            html,
            tags=ALLOWED_TAGS,
            attributes=ALLOWED_ATTRIBUTES,
            attribute_filter=_attribute_filter,
            link_rel="noopener noreferrer",
            set_tag_attribute_values={"a": {"target": "_blank"}},
        )
