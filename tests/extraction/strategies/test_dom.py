# ABOUTME: Tests for the generic <img> scanning strategy
# ABOUTME: Attribute precedence, metadata capture and budget handling

from webscrimg.extraction.document import Document
from webscrimg.extraction.strategies import DomScanStrategy

PAGE = """
<html><body>
  <img src="https://cdn.example.com/1.jpg" alt="First" width="640" height="480" class="result thumb">
  <img data-src="https://cdn.example.com/2.jpg" title="Second">
  <img data-lazy="/3.jpg" role="presentation">
  <img alt="no source at all">
  <img src="  " data-src="https://cdn.example.com/4.jpg">
</body></html>
"""


def _extract(budget=100, **kwargs):
    return list(DomScanStrategy(**kwargs).extract(Document("https://shop.example.com/", PAGE), budget))


class TestDomScanStrategy:
    def test_first_present_attribute_wins(self):
        urls = [candidate.url for candidate in _extract()]
        assert urls == [
            "https://cdn.example.com/1.jpg",
            "https://cdn.example.com/2.jpg",
            "/3.jpg",
            "https://cdn.example.com/4.jpg",
        ]

    def test_metadata_and_title(self):
        first, second, third, _ = _extract()

        assert first.title == "First"
        assert first.width == 640
        assert first.height == 480
        assert first.metadata.css_class == "result thumb"
        assert second.title == "Second"
        assert third.metadata.role == "presentation"

    def test_stops_at_budget(self):
        assert len(_extract(budget=2)) == 2

    def test_zero_budget_yields_nothing(self):
        assert _extract(budget=0) == []

    def test_custom_attribute_order(self):
        strategy_urls = [c.url for c in _extract(attributes=("data-src", "src"))]
        assert strategy_urls[:2] == ["https://cdn.example.com/1.jpg", "https://cdn.example.com/2.jpg"]
        assert "/3.jpg" not in strategy_urls

    def test_non_decimal_dimensions_are_ignored(self):
        page = '<img src="https://cdn.example.com/5.jpg" width="²" height="³00">'

        [candidate] = DomScanStrategy().extract(Document("https://shop.example.com/", page), 10)

        assert candidate.url == "https://cdn.example.com/5.jpg"
        assert candidate.width is None
        assert candidate.height is None
