# ABOUTME: Tests for the JSON records strategy used by image APIs such as DuckDuckGo's i.js
# ABOUTME: Key mapping, skipped records and non-JSON bodies

import json

from webscrimg.extraction.document import Document
from webscrimg.extraction.strategies import JsonRecordsStrategy

API_URL = "https://duckduckgo.com/i.js?o=json&q=pump"


def _document(payload) -> Document:
    return Document(API_URL, payload if isinstance(payload, str) else json.dumps(payload))


class TestJsonRecordsStrategy:
    def test_maps_result_fields(self):
        document = _document(
            {
                "results": [
                    {
                        "image": "https://img.example.com/pump.jpg",
                        "thumbnail": "https://tse1.mm.bing.net/th?id=OIP.pump",
                        "title": "Water pump",
                        "width": 1024,
                        "height": "768",
                    }
                ],
                "next": "i.js?q=pump&s=100",
            }
        )

        [candidate] = JsonRecordsStrategy().extract(document, 10)

        assert candidate.url == "https://img.example.com/pump.jpg"
        assert candidate.thumbnail == "https://tse1.mm.bing.net/th?id=OIP.pump"
        assert candidate.title == "Water pump"
        assert (candidate.width, candidate.height) == (1024, 768)

    def test_skips_records_without_image(self):
        document = _document(
            {"results": [{"title": "no image"}, "not a record", {"image": "https://img.example.com/ok.jpg"}]}
        )

        assert [c.url for c in JsonRecordsStrategy().extract(document, 10)] == ["https://img.example.com/ok.jpg"]

    def test_top_level_array(self):
        document = _document([{"image": "https://img.example.com/a.jpg"}])

        assert len(list(JsonRecordsStrategy().extract(document, 10))) == 1

    def test_custom_keys(self):
        document = _document({"hits": [{"src": "https://img.example.com/custom.jpg"}]})
        strategy = JsonRecordsStrategy(results_key="hits", url_key="src")

        assert [c.url for c in strategy.extract(document, 10)] == ["https://img.example.com/custom.jpg"]

    def test_stops_at_budget(self):
        document = _document({"results": [{"image": f"https://img.example.com/{i}.jpg"} for i in range(5)]})

        assert len(list(JsonRecordsStrategy().extract(document, 2))) == 2

    def test_html_body_yields_nothing(self):
        assert list(JsonRecordsStrategy().extract(_document("<html><img src='/a.jpg'></html>"), 10)) == []

    def test_missing_results_key_yields_nothing(self):
        assert list(JsonRecordsStrategy().extract(_document({"error": "rate limited"}), 10)) == []
