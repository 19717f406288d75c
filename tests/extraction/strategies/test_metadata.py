# ABOUTME: Tests for the embedded JSON metadata strategy (Bing-style a.iusc[m] blobs)
# ABOUTME: Malformed blobs and entries without a full-size URL are skipped

import json
from html import escape

from webscrimg.extraction.document import Document
from webscrimg.extraction.strategies import EmbeddedMetadataStrategy


def _anchor(payload) -> str:
    blob = payload if isinstance(payload, str) else json.dumps(payload)
    return f'<a class="iusc" m="{escape(blob, quote=True)}" href="#"></a>'


def _document(*payloads) -> Document:
    body = "".join(_anchor(payload) for payload in payloads)
    return Document("https://www.bing.com/images/search?q=pump", f"<html><body>{body}</body></html>")


class TestEmbeddedMetadataStrategy:
    def test_reads_murl_turl_and_dimensions(self):
        document = _document(
            {
                "murl": "https://img.example.com/pump.jpg",
                "turl": "https://th.example.com/p",
                "t": "Pump",
                "w": 1200,
                "h": "800",
            }
        )

        [candidate] = list(EmbeddedMetadataStrategy().extract(document, 10))

        assert candidate.url == "https://img.example.com/pump.jpg"
        assert candidate.thumbnail == "https://th.example.com/p"
        assert candidate.title == "Pump"
        assert candidate.width == 1200
        assert candidate.height == 800

    def test_skips_malformed_and_incomplete_blobs(self):
        document = _document(
            "{not json",
            {"turl": "https://th.example.com/only-thumb"},
            ["https://img.example.com/list.jpg"],
            {"murl": "https://img.example.com/ok.jpg"},
        )

        candidates = list(EmbeddedMetadataStrategy().extract(document, 10))

        assert [c.url for c in candidates] == ["https://img.example.com/ok.jpg"]

    def test_stops_at_budget(self):
        document = _document(*({"murl": f"https://img.example.com/{i}.jpg"} for i in range(5)))
        assert len(list(EmbeddedMetadataStrategy().extract(document, 3))) == 3

    def test_other_anchors_ignored(self):
        document = Document(
            "https://www.bing.com/", '<a class="other" m=\'{"murl": "https://img.example.com/x.jpg"}\'></a>'
        )
        assert list(EmbeddedMetadataStrategy().extract(document, 10)) == []

    def test_non_decimal_dimensions_are_ignored(self):
        document = _document({"murl": "https://img.example.com/sq.jpg", "w": "²", "h": "1¹"})

        [candidate] = EmbeddedMetadataStrategy().extract(document, 10)

        assert candidate.url == "https://img.example.com/sq.jpg"
        assert candidate.width is None
        assert candidate.height is None
