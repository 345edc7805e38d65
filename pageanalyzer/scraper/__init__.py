"""Scraper package: page fetch & structural extraction."""

from pageanalyzer.scraper.extractor import analyze_markup, extract_features, parse_markup
from pageanalyzer.scraper.fetcher import build_client, fetch_page
from pageanalyzer.scraper.models import (
    AnalysisResult,
    ClassifiedLinks,
    RawPage,
    StructuralFeatures,
)

__all__ = [
    "fetch_page",
    "build_client",
    "parse_markup",
    "extract_features",
    "analyze_markup",
    "RawPage",
    "StructuralFeatures",
    "ClassifiedLinks",
    "AnalysisResult",
]
