# ABOUTME: Heuristic classifier separating content images from UI chrome and tracking pixels
# ABOUTME: One versioned rule set replaces the per-route keyword filters of older scrapers

from dataclasses import dataclass, field, replace
from urllib.parse import parse_qsl, urlsplit

from .base import ElementMetadata

# Bump whenever the built-in lists below change so heuristic drift is auditable
BLOCKLIST_VERSION = "2024.4"

BLOCKED_KEYWORDS: tuple[str, ...] = (
    "logo",
    "icon",
    "icons",
    "sprite",
    "favicon",
    "flag",
    "flags",
    "_next",
    "static",
    "assets",
    "branding",
    "header",
    "footer",
    "menu",
    "navbar",
    "ui",
    "brand",
    "region",
    "regions",
)

# Hosts and paths that only ever serve page chrome
BLOCKED_HOST_FRAGMENTS: tuple[str, ...] = (
    "mm.bing.net",
    "google.com/images",
    "duckduckgo.com/assets",
    "tia.png",
)

BLOCKED_EXTENSIONS: tuple[str, ...] = (".svg", ".ico", ".gif")

# Base64 runs seen in 1x1 transparent PNG/GIF placeholders
PIXEL_SIGNATURES: tuple[str, ...] = ("AAAAEAAAAB",)

METADATA_KEYWORDS: tuple[str, ...] = ("logo", "icon")

# Checked instead of the full rule set for URLs an engine serves as results
RESULT_CHROME_KEYWORDS: tuple[str, ...] = ("logo", "icon", "sprite")
RESULT_CHROME_EXTENSIONS: tuple[str, ...] = (".svg",)

DATA_URI_PREFIX = "data:image"
SHORT_DATA_URI_LENGTH = 200


@dataclass(frozen=True)
class ClassifierRules:
    """Tunable inputs of the chrome-image heuristics."""

    keywords: tuple[str, ...] = BLOCKED_KEYWORDS
    host_fragments: tuple[str, ...] = BLOCKED_HOST_FRAGMENTS
    extensions: tuple[str, ...] = BLOCKED_EXTENSIONS
    pixel_signatures: tuple[str, ...] = PIXEL_SIGNATURES
    metadata_keywords: tuple[str, ...] = METADATA_KEYWORDS
    result_keywords: tuple[str, ...] = RESULT_CHROME_KEYWORDS
    result_extensions: tuple[str, ...] = RESULT_CHROME_EXTENSIONS
    min_dimension: int = 100
    version: str = field(default=BLOCKLIST_VERSION)

    def extended(
        self,
        keywords: list[str] | None = None,
        host_fragments: list[str] | None = None,
        min_dimension: int | None = None,
    ) -> "ClassifierRules":
        """Return a copy with extra keywords/hosts and an optional new threshold."""
        return replace(
            self,
            keywords=self.keywords + tuple(k.lower() for k in keywords or () if k),
            host_fragments=self.host_fragments + tuple(h.lower() for h in host_fragments or () if h),
            min_dimension=self.min_dimension if min_dimension is None else min_dimension,
        )

    @classmethod
    def from_config(cls, config) -> "ClassifierRules":
        return cls().extended(
            keywords=config.extra_blocked_keywords,
            host_fragments=config.extra_blocked_hosts,
            min_dimension=config.min_image_dimension,
        )


class ImageClassifier:
    """Decides whether an image URL is system chrome that must be excluded.

    Rules run in order and stop at the first match: tracking-pixel data URI,
    chrome file extension, small ``w``/``h`` dimension hint, blocklisted
    keyword or host, and finally element metadata (class/alt/role).
    """

    def __init__(self, rules: ClassifierRules | None = None):
        self.rules = rules or ClassifierRules()

    def is_tracking_pixel(self, value: str) -> bool:
        if not value.lower().startswith(DATA_URI_PREFIX):
            return False
        return len(value) < SHORT_DATA_URI_LENGTH or any(sig in value for sig in self.rules.pixel_signatures)

    def has_chrome_extension(self, url: str) -> bool:
        return _path_of(url).lower().endswith(self.rules.extensions)

    def is_too_small(self, url: str) -> bool:
        """Whether a ``w=``/``h=`` query hint asks for an icon-sized rendition."""
        try:
            params = parse_qsl(urlsplit(url).query, keep_blank_values=True)
        except ValueError:
            return False
        for key, value in params:
            if key.lower() in ("w", "h") and value.isdecimal() and int(value) < self.rules.min_dimension:
                return True
        return False

    def matches_blocklist(self, url: str) -> bool:
        lowered = url.lower()
        if any(keyword in lowered for keyword in self.rules.keywords):
            return True
        return any(fragment in lowered for fragment in self.rules.host_fragments)

    def matches_metadata(self, metadata: ElementMetadata | None) -> bool:
        if metadata is None:
            return False
        css_class = (metadata.css_class or "").lower()
        alt = (metadata.alt or "").lower()
        if any(k in css_class or k in alt for k in self.rules.metadata_keywords):
            return True
        return (metadata.role or "").strip().lower() == "presentation"

    def is_system_image(self, url: str, metadata: ElementMetadata | None = None) -> bool:
        """Return True when the image is UI chrome rather than a search result."""
        return (
            self.is_tracking_pixel(url)
            or self.has_chrome_extension(url)
            or self.is_too_small(url)
            or self.matches_blocklist(url)
            or self.matches_metadata(metadata)
        )

    def is_result_chrome(self, url: str) -> bool:
        """Narrow check for URLs the engine marks as results, whose hosts would trip the keyword list."""
        lowered = url.lower()
        if any(keyword in lowered for keyword in self.rules.result_keywords):
            return True
        return _path_of(url).lower().endswith(self.rules.result_extensions)


def _path_of(url: str) -> str:
    try:
        return urlsplit(url).path
    except ValueError:
        return url


_default_classifier = ImageClassifier()


def is_system_image(url: str, metadata: ElementMetadata | None = None) -> bool:
    """Classify with the built-in rules."""
    return _default_classifier.is_system_image(url, metadata)


def is_tracking_pixel(value: str) -> bool:
    return _default_classifier.is_tracking_pixel(value)
