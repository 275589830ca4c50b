"""Crawlers"""
from .folha import ScrapeResult, ScrapeStatus, fetch_headlines, parse_headlines, scrape

__all__ = ["ScrapeResult", "ScrapeStatus", "fetch_headlines", "parse_headlines", "scrape"]
