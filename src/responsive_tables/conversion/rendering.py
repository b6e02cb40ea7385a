"""Markup for converted tables.

:class:`HtmlRenderer` is the default implementation of :class:`Renderer`.  It
only formats: every item and block arrives already normalised.  Plain text is
escaped; blocks flagged ``markup`` (and header images) are inserted verbatim.
"""

from html import escape
from typing import Protocol

from responsive_tables.conversion.schema import BlockKind, ContentBlock, Item, OutputKind

ARROW_SVG = (
    '<svg class="arrow" viewBox="0 0 24 24">'
    '<path d="M7 10L12 15L17 10" stroke="currentColor" stroke-width="1.5" '
    'stroke-linecap="round" stroke-linejoin="round" fill="none"/></svg>'
)
PREV_SVG = (
    '<svg viewBox="0 0 24 24"><path d="M15 18l-6-6 6-6" stroke="currentColor" stroke-width="1.5" '
    'stroke-linecap="round" stroke-linejoin="round" fill="none"/></svg>'
)
NEXT_SVG = (
    '<svg viewBox="0 0 24 24"><path d="M9 6l6 6-6 6" stroke="currentColor" stroke-width="1.5" '
    'stroke-linecap="round" stroke-linejoin="round" fill="none"/></svg>'
)

ACCORDION_LABEL_CLASSES = {
    BlockKind.GROUP_HEADER: "label group",
    BlockKind.CATEGORY_HEADER: "label category",
}

LIST_CONTENT_CLASSES = {
    BlockKind.GROUP_HEADER: "list-content group-header",
    BlockKind.CATEGORY_HEADER: "list-content category-header",
    BlockKind.VALUE: "list-content value",
}


class Renderer(Protocol):
    """Turns extracted items into the markup placed inside the responsive container."""

    def render(self, items: list[Item], kind: OutputKind, heading: str | None = None) -> str: ...


def block_text(block: ContentBlock) -> str:
    return block.text if block.markup else escape(block.text)


class HtmlRenderer:
    """Accordion, list and carousel markup matching the site's component styles."""

    def render(self, items: list[Item], kind: OutputKind, heading: str | None = None) -> str:
        if kind == OutputKind.ACCORDION:
            return self.accordion(items, heading)
        if kind == OutputKind.LIST_LIKE_ACCORDION:
            return self.list_like_accordion(items)
        if kind == OutputKind.LIST:
            return self.clean_list(items)
        if kind == OutputKind.CAROUSEL:
            return self.carousel(items)
        raise ValueError(f"Nothing to render for output kind {kind.value!r}")

    # ─── Accordion ───────────────────────────────────────────────────────────

    def accordion(self, items: list[Item], heading: str | None = None) -> str:
        parts = ['<div class="accordion" data-accordion><div class="accordion-list">']
        if heading:
            parts.append(f'<div class="title">{escape(heading)}</div>')
        for item in items:
            parts.append('<div class="list-item"><div class="ec-head" data-accordion-trigger>')
            if item.header_image:
                parts.append(f'<div class="header-image">{item.header_image}</div>')
            if item.title:
                parts.append(f'<h3 class="article-header">{escape(item.title)}</h3>')
            parts.append(ARROW_SVG)
            parts.append('</div><div class="expanded-content">')
            parts.extend(self._info_groups(item.content))
            parts.append("</div></div>")
        parts.append("</div></div>")
        return "".join(parts)

    @staticmethod
    def _info_groups(blocks: tuple[ContentBlock, ...]) -> list[str]:
        groups = []
        for block in blocks:
            if block.kind in ACCORDION_LABEL_CLASSES:
                css = ACCORDION_LABEL_CLASSES[block.kind]
                groups.append(f'<div class="info-group"><div class="{css}">{escape(block.text)}</div></div>')
                continue
            # Multi-line values read better as one group per line
            lines = [block.text] if block.markup else [line for line in block.text.split("\n") if line.strip()]
            for line in lines:
                text = line if block.markup else escape(line)
                groups.append(f'<div class="info-group"><div class="value">{text}</div></div>')
        return groups

    # ─── Lists ───────────────────────────────────────────────────────────────

    def list_like_accordion(self, items: list[Item]) -> str:
        parts = ['<div class="responsive-list accordion-style">']
        for item in items:
            parts.append('<div class="list-item">')
            parts.append(
                f'<div class="list-content header"><span class="article-header">{escape(item.title)}</span></div>'
            )
            for block in item.content:
                parts.append(f'<div class="{LIST_CONTENT_CLASSES[block.kind]}">{block_text(block)}</div>')
            parts.append("</div>")
        parts.append("</div>")
        return "".join(parts)

    def clean_list(self, items: list[Item]) -> str:
        parts = ['<div class="responsive-list mobile-list-clean">']
        for item in items:
            parts.append('<div class="list-item">')
            if item.header_image:
                parts.append(f'<div class="list-image" style="text-align: center">{item.header_image}</div>')
            if item.title:
                parts.append(f'<div class="list-title">{escape(item.title)}</div>')
            for block in item.content:
                parts.append(f'<div class="list-content">{block_text(block)}</div>')
            parts.append("</div>")
        parts.append("</div>")
        return "".join(parts)

    # ─── Carousel ────────────────────────────────────────────────────────────

    def carousel(self, items: list[Item]) -> str:
        parts = ['<div class="carousel" data-carousel><div class="carousel-track" data-carousel-track>']
        for index, item in enumerate(items):
            active = ' data-active="true"' if index == 0 else ""
            parts.append(f'<div class="carousel-slide" data-carousel-slide{active}><div class="slide-content">')
            if item.header_image:
                parts.append(f'<div class="slide-image">{item.header_image}</div>')
            for block in item.content:
                css = "slide-header" if block.kind != BlockKind.VALUE else "slide-text"
                parts.append(f'<div class="{css}">{block_text(block)}</div>')
            parts.append("</div></div>")
        parts.append("</div>")
        if len(items) > 1:
            parts.append(self._carousel_controls(len(items)))
        parts.append("</div>")
        return "".join(parts)

    @staticmethod
    def _carousel_controls(count: int) -> str:
        dots = "".join(
            f'<button class="carousel-dot{" active" if i == 0 else ""}" data-carousel-dot="{i}" '
            f'aria-label="Go to slide {i + 1}"></button>'
            for i in range(count)
        )
        return (
            '<div class="carousel-controls">'
            f'<button class="carousel-btn prev" data-carousel-prev aria-label="Previous slide">{PREV_SVG}</button>'
            f'<div class="carousel-dots">{dots}</div>'
            f'<button class="carousel-btn next" data-carousel-next aria-label="Next slide">{NEXT_SVG}</button>'
            "</div>"
        )
