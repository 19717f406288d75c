# ABOUTME: Business logic and orchestration layer
# ABOUTME: Source registry, result pipeline and the fan-out service API

"""
Core Layer: Business logic and workflow orchestration

This layer handles:
- The registry of named search sources and their URL templates
- Fetching source documents over HTTP
- Filtering, de-duplication and pagination of extracted candidates
- Concurrent fan-out across many sources with per-source failure isolation

Data Flow: extraction/ candidates → Pipeline → EngineResult / FanOutReport
"""

from .models import EngineFailure, EngineResult, FanOutReport, ImageResult, Outcome, PaginationInfo
from .registry import SourceDescriptor, SourceRegistry, default_registry

# Import service on-demand to avoid pulling httpx into every import
# Use: from webscrimg.core.service import ImageExtractionService

__all__ = [
    "EngineFailure",
    "EngineResult",
    "FanOutReport",
    "ImageResult",
    "Outcome",
    "PaginationInfo",
    "SourceDescriptor",
    "SourceRegistry",
    "default_registry",
]
