"""Unit tests for list and carousel item harvesting."""

# pylint: disable=missing-class-docstring,missing-function-docstring

from responsive_tables.conversion.layouts import (
    COLUMN_BASED,
    ROW_BASED,
    carousel_layout,
    harvest_clean_list,
    harvest_slides,
)

CLEAN_LIST = (
    '<tr><td><img src="lounge.png"></td>'
    "<td><p><u>Lounge</u></p><p>Open</p><p>&nbsp;</p><ul><li>Wifi</li></ul></td></tr>"
    "<tr><td></td><td><p>No image here</p></td></tr>"
)

ROW_CAROUSEL = (
    '<tr><td><img src="a.png"></td><td><p>Lisbon</p><p><br></p></td></tr>'
    '<tr><td><img src="b.png"></td><td><ul><li>Porto</li></ul></td></tr>'
)

COLUMN_CAROUSEL = (
    '<tr><td><img src="a.png"></td><td><img src="b.png"></td></tr>'
    "<tr><td>Lisbon</td><td><p>Porto</p><p>Faro</p></td></tr>"
    "<tr><td>Lisbon</td><td>Porto</td></tr>"
)

ARTICLE_CAROUSEL = (
    '<tr><td><span class="ArticleHeader">Lisbon</span><a href="/lis">Book</a></td>'
    '<td><span class="ArticleHeader">Porto</span></td></tr>'
    '<tr><td><span class="ArticleHeader">Lisbon</span></td><td><p>Ignored</p></td></tr>'
)


def texts(item) -> list[str]:
    return [block.text for block in item.content]


# ===========================================================================
# Clean list
# ===========================================================================


class TestHarvestCleanList:

    def test_title_image_and_values(self, make_table):
        items = harvest_clean_list(make_table(CLEAN_LIST))
        first = items[0]
        assert first.title == "Lounge"
        assert 'src="lounge.png"' in first.header_image
        assert texts(first) == ["Open", "Wifi"]

    def test_row_without_image_or_title(self, make_table):
        items = harvest_clean_list(make_table(CLEAN_LIST))
        assert len(items) == 2
        assert items[1].title == ""
        assert items[1].header_image is None
        assert texts(items[1]) == ["No image here"]

    def test_source_is_not_modified(self, make_table):
        table = make_table(CLEAN_LIST)
        before = str(table.node)
        harvest_clean_list(table)
        assert str(table.node) == before

    def test_header_rows_skipped(self, make_table):
        assert not harvest_clean_list(make_table("<tr><th>Only headers</th></tr>"))


# ===========================================================================
# Carousel
# ===========================================================================


class TestCarouselLayout:

    def test_row_based(self, make_table):
        assert carousel_layout(make_table(ROW_CAROUSEL)) == ROW_BASED

    def test_column_based(self, make_table):
        assert carousel_layout(make_table(COLUMN_CAROUSEL)) == COLUMN_BASED

    def test_no_images(self, make_table):
        assert carousel_layout(make_table("<tr><td>a</td><td>b</td></tr>")) == COLUMN_BASED

    def test_empty_table(self, make_table):
        assert carousel_layout(make_table("<table></table>")) == COLUMN_BASED


class TestHarvestSlides:

    def test_row_slides(self, make_table):
        slides = harvest_slides(make_table(ROW_CAROUSEL))
        assert len(slides) == 2
        assert 'src="a.png"' in slides[0].header_image
        # Bare <br> paragraph dropped
        assert texts(slides[0]) == ["Lisbon"]
        assert slides[0].content[0].markup is True
        assert texts(slides[1]) == ["Porto"]

    def test_column_slides_deduplicate(self, make_table):
        slides = harvest_slides(make_table(COLUMN_CAROUSEL))
        assert len(slides) == 2
        assert 'src="a.png"' in slides[0].header_image
        assert texts(slides[0]) == ["Lisbon"]
        assert 'src="b.png"' in slides[1].header_image
        assert texts(slides[1]) == ["Porto", "Faro"]

    def test_article_header_slides(self, make_table):
        slides = harvest_slides(make_table(ARTICLE_CAROUSEL))
        first = slides[0]
        assert [block.kind.value for block in first.content] == ["categoryHeader", "value"]
        assert first.content[0].text == "Lisbon"
        assert first.content[1].markup is True
        assert 'href="/lis"' in first.content[1].text
        # Paragraphs are not read when the table uses article headers
        assert texts(slides[1]) == ["Porto"]

    def test_second_image_in_a_slide_becomes_content(self, make_table):
        table = make_table('<tr><td><img src="a.png"></td><td><img src="b.png"></td></tr>')
        slides = harvest_slides(table)
        # Column-based: each column has a single image
        assert [slide.content for slide in slides] == [(), ()]
        row_table = make_table(
            '<tr><td><img src="a.png"></td><td><p>Text</p></td><td><img src="b.png"></td></tr>'
        )
        (slide,) = harvest_slides(row_table)
        assert 'src="a.png"' in slide.header_image
        assert slide.content[-1].markup is True
        assert 'src="b.png"' in slide.content[-1].text
