"""One representative table per structural shape, shared by the conversion tests."""

import pytest

SAMPLES: dict[str, str] = {
    "empty": "<table></table>",
    "two_header": (
        "<table>"
        '<tr><td style="background-color:#003366">Economy</td><td style="background-color:#003366">Business</td></tr>'
        "<tr><td>Free snack</td><td>Full meal</td></tr>"
        '<tr><td colspan="2"><a href="/book">Book now</a></td></tr>'
        "</table>"
    ),
    "complex_hierarchical": (
        "<table>"
        '<tr><th scope="col">Bags</th><th scope="col">Europe</th><th scope="col">Americas</th></tr>'
        "<tr><td></td><td>Weight</td><td>Weight</td></tr>"
        '<tr><td>Basic</td><td rowspan="2">23kg</td><td>32kg</td></tr>'
        "<tr><td>Plus</td><td>40kg</td></tr>"
        "</table>"
    ),
    "route": (
        "<table>"
        '<tr><th colspan="2">Lisbon routes</th></tr>'
        "<tr><th>Destination</th><th>Duration</th></tr>"
        "<tr><td>Porto</td><td>1h</td></tr>"
        "<tr><td>Faro</td><td>1h 10m</td></tr>"
        "</table>"
    ),
    "structured_content": (
        '<table class="type-two-layout">'
        "<tr>"
        '<th><div class="content-cell"><span class="content-cell-text">Fare</span></div></th>'
        '<th><div class="content-cell"><span class="content-cell-text">Light</span></div></th>'
        '<th><div class="content-cell"><span class="content-cell-text">Classic</span></div></th>'
        "</tr>"
        "<tr>"
        '<td class="first"><div class="content-cell">'
        '<span class="content-cell-text">Hand</span><span class="content-cell-text">bag</span></div></td>'
        '<td><div class="content-cell"><span class="content-cell-text">8kg</span></div></td>'
        '<td><div class="content-cell"><span class="content-cell-text">10kg</span></div></td>'
        "</tr>"
        "<tr>"
        '<td class="first"><div class="content-cell"><span class="content-cell-text">Note</span></div></td>'
        '<td colspan="2"><div class="content-cell"><span class="content-cell-text">Ask staff</span></div></td>'
        "</tr>"
        "</table>"
    ),
    "grouped_headers": (
        "<table>"
        '<tr><th></th><th colspan="2">High season</th><th colspan="2">Low season</th></tr>'
        "<tr><th></th><th>Overweight</th><th>Oversize</th><th>Overweight</th><th>Oversize</th></tr>"
        '<tr><td class="first"><div class="content-cell"><span class="content-cell-text">Europe</span></div></td>'
        "<td>50</td><td>70</td><td>40</td><td>60</td></tr>"
        "</table>"
    ),
    "complex_mixed": (
        '<table class="shadow">'
        '<tr><th></th><th colspan="2"><div class="content-cell"><span class="content-cell-text">Fares</span></div></th></tr>'
        '<tr><td class="first"><div class="content-cell"><span class="content-cell-text">Basic</span></div></td>'
        "<td>10</td><td>20</td></tr>"
        '<tr><td class="first"><div class="content-cell"><span class="content-cell-text">Miles</span></div></td>'
        '<td colspan="3"><p>Earn miles</p><p>&nbsp;</p></td></tr>'
        "</table>"
    ),
    "image_vertical": (
        "<table>"
        '<tr><td><img src="lounge.png"></td><td><p><u>Lounge</u></p><p>Open 24h</p></td></tr>'
        '<tr><td><img src="wifi.png"></td><td><p><u>Wifi</u></p><p>Free on board</p></td></tr>'
        "</table>"
    ),
    "image_horizontal": (
        "<table>"
        '<tr><td><img src="a.png"></td><td><img src="b.png"></td></tr>'
        "<tr><td><p>Window seat</p></td><td>Aisle seat</td></tr>"
        "</table>"
    ),
    "rowspan": (
        "<table>"
        '<tr><th rowspan="2">Baggage</th><th>Cabin</th><td>8kg</td></tr>'
        "<tr><th>Hold</th><td>23kg</td></tr>"
        "</table>"
    ),
    "matrix": (
        "<table>"
        '<tr><th scope="row">Fare</th><th scope="col">Adult</th><th scope="col">Child</th></tr>'
        '<tr><th scope="row">Lisbon</th><td>100</td><td>50</td></tr>'
        '<tr><th scope="row">Porto</th><td>80</td><td>40</td></tr>'
        "</table>"
    ),
    "single_header_colspan": (
        "<table>"
        '<tr><th colspan="2">Fees</th></tr>'
        "<tr><td>10</td><td>20</td></tr>"
        "<tr><td>A</td><td>B</td></tr>"
        "</table>"
    ),
    "regular_with_colspan": (
        "<table>"
        "<tr><th>Fare</th><th>Adult</th><th>Child</th></tr>"
        '<tr><td>Lisbon</td><td colspan="2">Free</td></tr>'
        "<tr><td>Porto</td><td>10</td><td>5</td></tr>"
        "</table>"
    ),
    "single_header": (
        "<table>"
        "<tr><th>Fare</th><th>Adult</th><th>Child</th></tr>"
        "<tr><td>Lisbon</td><td>100</td><td>-</td></tr>"
        "</table>"
    ),
    "simple": "<table><tr><td>Name</td><td>Price</td></tr><tr><td>Tea</td><td>2</td></tr></table>",
    "article_header": (
        "<table>"
        '<tr><th scope="row"><span class="ArticleHeader">Check-in</span></th>'
        '<td><p><span class="ArticleHeader">Online</span></p><p>From 36h before</p></td></tr>'
        "</table>"
    ),
    "hierarchical_header": (
        "<table>"
        '<tr><th colspan="4">Fare rules</th></tr>'
        '<tr><th rowspan="2">Fare</th><th rowspan="2">Class</th><th colspan="2">Changes</th></tr>'
        "<tr><th>Before</th><th>After</th></tr>"
        "<tr><td>Basic</td><td>Y</td><td><p>50</p></td><td><p>100</p></td></tr>"
        "</table>"
    ),
    "nested_content": (
        "<table>"
        '<tr><th colspan="2">Services</th></tr>'
        '<tr><th colspan="2">Lounge</th></tr>'
        "<tr><td>Hours</td><td>24h</td></tr>"
        '<tr><th colspan="2">Wifi</th></tr>'
        "<tr><td>Free</td></tr>"
        "</table>"
    ),
    "regular": "<table><tr><th>Fare</th></tr><tr><td>Lisbon</td></tr></table>",
}


@pytest.fixture
def sample(make_table):
    """Factory fixture: sample name -> RawTable."""

    def _sample(name: str):
        return make_table(SAMPLES[name])

    return _sample
