# ABOUTME: Named extraction strategy variants
# ABOUTME: Sources choose a variant by name instead of carrying their own pipeline

from ..base import ExtractionError, ExtractionStrategy
from .chain import ChainedStrategy
from .dom import DomScanStrategy
from .json_tree import JsonTreeStrategy
from .metadata import EmbeddedMetadataStrategy
from .records import JsonRecordsStrategy
from .script import ScriptRegexStrategy

STRATEGIES: dict[str, ExtractionStrategy] = {
    "dom": DomScanStrategy(),
    "metadata": EmbeddedMetadataStrategy(),
    "script": ScriptRegexStrategy(),
    "json": JsonTreeStrategy(),
    "records": JsonRecordsStrategy(),
    # Serialized result data first, lazy-loaded thumbnails last
    "google": ChainedStrategy(
        "google",
        [ScriptRegexStrategy(), JsonTreeStrategy(), DomScanStrategy(attributes=("data-src", "src"))],
    ),
}


def get_strategy(name: str) -> ExtractionStrategy:
    """Look up a strategy variant by name.

    Raises:
        ExtractionError: If no strategy is registered under ``name``
    """
    try:
        return STRATEGIES[name]
    except KeyError:
        raise ExtractionError(f"Unknown extraction strategy: {name}") from None


__all__ = [
    "STRATEGIES",
    "ChainedStrategy",
    "DomScanStrategy",
    "EmbeddedMetadataStrategy",
    "JsonRecordsStrategy",
    "JsonTreeStrategy",
    "ScriptRegexStrategy",
    "get_strategy",
]
