import asyncio
import json

import pytest

from sitepolish import competitors, database
from sitepolish.competitors import competitor_domain, research_competitors


@pytest.fixture
def fake_research(monkeypatch):
    calls = {"scraped": [], "prompts": []}

    async def fake_scrape(url):
        calls["scraped"].append(url)
        if "broken" in url:
            raise RuntimeError("navigation timeout")
        return {"title": f"Title of {url}", "headings": {"h1": ["Welcome"]}}

    async def fake_complete(system, content, max_tokens=4000, model=None):
        calls["prompts"].append(content)
        return 'Sure!\n```json\n{"designStyle": "minimal", "strengths": ["fast"]}\n```'

    monkeypatch.setattr(competitors, "scrape_with_browser", fake_scrape)
    monkeypatch.setattr(competitors, "complete_text", fake_complete)
    return calls


@pytest.mark.parametrize("url,expected", [
    ("https://www.rival.com/about", "rival.com"),
    ("http://shop.rival.co.uk", "shop.rival.co.uk"),
])
def test_competitor_domain(url, expected):
    assert competitor_domain(url) == expected


def test_competitor_domain_without_host():
    with pytest.raises(ValueError):
        competitor_domain("not a url")


def test_research_analyzes_and_caches(fake_db, fake_research):
    results = asyncio.run(research_competitors(["https://www.rival.com"], "dental-practice"))

    assert len(results) == 1
    assert results[0]["url"] == "https://www.rival.com"
    assert results[0]["analysis"] == {"designStyle": "minimal", "strengths": ["fast"]}
    assert "https://www.rival.com" in fake_research["prompts"][0]

    cached = fake_db.rows("competitor_cache")
    assert len(cached) == 1
    assert cached[0]["domain"] == "rival.com"
    assert cached[0]["industry"] == "dental-practice"


def test_research_reuses_cache(fake_db, fake_research):
    asyncio.run(database.cache_competitor("rival.com", "general", {"url": "cached", "analysis": {}}))

    results = asyncio.run(research_competitors(["https://rival.com/pricing"]))

    assert results == [{"url": "cached", "analysis": {}}]
    assert fake_research["scraped"] == [], "Cached domains are not scraped again"


def test_research_limits_and_isolates_failures(fake_db, fake_research, monkeypatch):
    monkeypatch.setenv("MAX_COMPETITORS", "2")
    urls = ["https://broken.com", "https://ok.com", "https://skipped.com"]

    results = asyncio.run(research_competitors(urls))

    assert len(results) == 2
    assert results[0] == {"url": "https://broken.com", "error": "Failed to analyze competitor"}
    assert results[1]["analysis"]["designStyle"] == "minimal"
    assert "https://skipped.com" not in fake_research["scraped"]


def test_unparseable_analysis_is_kept_as_placeholder(fake_db, fake_research, monkeypatch):
    async def prose(*args, **kwargs):
        return "This site looks nice."

    monkeypatch.setattr(competitors, "complete_text", prose)
    results = asyncio.run(research_competitors(["https://rival.com"]))

    assert results[0]["analysis"] == {"designStyle": "Unable to analyze", "error": "Failed to parse analysis"}
    assert json.dumps(results[0])
