# ABOUTME: Image extraction from fetched search-result documents
# ABOUTME: Strategies, URL normalization and chrome-image classification

"""
Extraction Layer: Turn a fetched document into candidate image URLs

This layer handles:
- Parsing HTML and JSON response bodies
- Source-specific candidate extraction strategies
- URL normalization against the page URL
- Classification of UI chrome (logos, icons, tracking pixels)

Data Flow: Raw document → Raw candidates → core/ pipeline (dedupe, paginate)
"""

from .base import (
    DocumentParseError,
    ElementMetadata,
    ExtractionError,
    ExtractionStrategy,
    FetchConnectionError,
    FetchError,
    FetchStatusError,
    FetchTimeoutError,
    InvalidSourceError,
    RawCandidate,
)
from .classifier import ClassifierRules, ImageClassifier, is_system_image, is_tracking_pixel
from .document import Document
from .urls import normalize_url

__all__ = [
    "ClassifierRules",
    "Document",
    "DocumentParseError",
    "ElementMetadata",
    "ExtractionError",
    "ExtractionStrategy",
    "FetchConnectionError",
    "FetchError",
    "FetchStatusError",
    "FetchTimeoutError",
    "ImageClassifier",
    "InvalidSourceError",
    "RawCandidate",
    "is_system_image",
    "is_tracking_pixel",
    "normalize_url",
]
