"""Unit tests for the HTML renderer."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import pytest
from bs4 import BeautifulSoup

from responsive_tables.conversion.rendering import HtmlRenderer
from responsive_tables.conversion.schema import Item, OutputKind, category_header, group_header, value


@pytest.fixture
def renderer():
    return HtmlRenderer()


def item(title="Lisbon", *blocks, image=None):
    return Item(title=title, header_image=image, content=tuple(blocks) or (value("100"),))


def soup_of(markup: str) -> BeautifulSoup:
    return BeautifulSoup(markup, "html.parser")


# ===========================================================================
# Accordion
# ===========================================================================


class TestAccordion:

    def test_structure(self, renderer):
        html = renderer.render(
            [item("Basic", group_header("Europe"), category_header("Weight"), value("23kg"))],
            OutputKind.ACCORDION,
            heading="Bags",
        )
        soup = soup_of(html)
        root = soup.find("div", class_="accordion")
        assert root.has_attr("data-accordion")
        assert soup.find("div", class_="title").get_text() == "Bags"
        assert soup.find("h3", class_="article-header").get_text() == "Basic"
        assert soup.find("div", class_="group").get_text() == "Europe"
        assert soup.find("div", class_="category").get_text() == "Weight"
        assert soup.find("div", class_="value").get_text() == "23kg"
        assert soup.find("svg", class_="arrow") is not None

    def test_no_heading(self, renderer):
        soup = soup_of(renderer.render([item()], OutputKind.ACCORDION))
        assert soup.find("div", class_="title") is None

    def test_text_is_escaped(self, renderer):
        html = renderer.render([item("<b>Fare</b>", value("a < b"))], OutputKind.ACCORDION)
        assert "&lt;b&gt;Fare&lt;/b&gt;" in html
        assert "a &lt; b" in html
        assert "<b>" not in html

    def test_markup_is_verbatim(self, renderer):
        html = renderer.render([item("Fare", value('<a href="/book">Book</a>', markup=True))], OutputKind.ACCORDION)
        assert '<a href="/book">Book</a>' in html

    def test_multi_line_value_split(self, renderer):
        soup = soup_of(renderer.render([item("Fare", value("Line one\nLine two"))], OutputKind.ACCORDION))
        assert [div.get_text() for div in soup.find_all("div", class_="value")] == ["Line one", "Line two"]

    def test_header_image(self, renderer):
        html = renderer.render([item("Lounge", image='<img src="l.png"/>')], OutputKind.ACCORDION)
        assert '<div class="header-image"><img src="l.png"/></div>' in html


# ===========================================================================
# Lists
# ===========================================================================


class TestLists:

    def test_list_like_accordion(self, renderer):
        html = renderer.render(
            [item("Fare", category_header("Adult"), value("100"))], OutputKind.LIST_LIKE_ACCORDION
        )
        soup = soup_of(html)
        assert soup.div["class"] == ["responsive-list", "accordion-style"]
        assert soup.find("span", class_="article-header").get_text() == "Fare"
        assert soup.find("div", class_="category-header").get_text() == "Adult"
        assert soup.find("div", class_="value").get_text() == "100"

    def test_clean_list(self, renderer):
        html = renderer.render([item("Lounge", value("Open"), image='<img src="l.png"/>')], OutputKind.LIST)
        soup = soup_of(html)
        assert soup.div["class"] == ["responsive-list", "mobile-list-clean"]
        assert soup.find("div", class_="list-image").img["src"] == "l.png"
        assert soup.find("div", class_="list-title").get_text() == "Lounge"
        assert soup.find("div", class_="list-content").get_text() == "Open"

    def test_clean_list_without_title(self, renderer):
        soup = soup_of(renderer.render([item("", value("Open"))], OutputKind.LIST))
        assert soup.find("div", class_="list-title") is None


# ===========================================================================
# Carousel
# ===========================================================================


class TestCarousel:

    def test_slides_and_controls(self, renderer):
        slides = [item("", value("A")), item("", category_header("B"), value("C"))]
        soup = soup_of(renderer.render(slides, OutputKind.CAROUSEL))
        rendered = soup.find_all("div", class_="carousel-slide")
        assert len(rendered) == 2
        assert rendered[0]["data-active"] == "true"
        assert not rendered[1].has_attr("data-active")
        assert rendered[1].find("div", class_="slide-header").get_text() == "B"
        assert [dot["data-carousel-dot"] for dot in soup.find_all("button", class_="carousel-dot")] == ["0", "1"]

    def test_single_slide_has_no_controls(self, renderer):
        soup = soup_of(renderer.render([item("", value("A"))], OutputKind.CAROUSEL))
        assert soup.find("div", class_="carousel-controls") is None


class TestDispatch:

    def test_no_conversion_is_not_renderable(self, renderer):
        with pytest.raises(ValueError):
            renderer.render([item()], OutputKind.NO_CONVERSION)
