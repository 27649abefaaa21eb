"""
Competitor research: browser-scrape each competitor site and ask Claude for a
design analysis. Results are cached per domain.
"""

import json
from urllib.parse import urlparse

from sitepolish import database
from sitepolish.browser_scraper import scrape_with_browser
from sitepolish.config import get_settings
from sitepolish.llm import complete_text, extract_json_object


ANALYSIS_SYSTEM_PROMPT = "You are a web design analyst. Return ONLY valid JSON."

ANALYSIS_PROMPT = """Analyze this competitor website and provide design insights:

Website: {url}
Content Summary: {summary}

Return a JSON object with:
- designStyle: overall approach (modern, minimal, bold, corporate, ...)
- colorPalette: main colors used
- typography: font choices and hierarchy
- layoutApproach: layout patterns (grid, asymmetric, full-width, ...)
- uniqueFeatures: standout design elements
- strengths: what works well
- weaknesses: design gaps or opportunities
- recommendations: how to differentiate from this competitor"""

UNPARSEABLE_ANALYSIS = {"designStyle": "Unable to analyze", "error": "Failed to parse analysis"}


def competitor_domain(url: str) -> str:
    """Hostname without a leading www. Raises ValueError for a URL with no host."""
    host = urlparse(url).hostname
    if not host:
        raise ValueError(f"Invalid competitor URL: {url}")
    return host[4:] if host.startswith("www.") else host


async def analyze_competitor(url: str, scraped: dict) -> dict:
    prompt = ANALYSIS_PROMPT.format(url=url, summary=json.dumps(scraped)[:3000])
    text = await complete_text(ANALYSIS_SYSTEM_PROMPT, prompt, max_tokens=2048)
    try:
        return extract_json_object(text)
    except ValueError:
        print(f"  [competitors] Could not parse analysis for {url}")
        return dict(UNPARSEABLE_ANALYSIS)


async def research_competitors(urls: list, industry: str | None = None) -> list:
    """
    Analyze up to max_competitors URLs. Cached analyses are reused until they
    expire. A failing URL yields {"url", "error"} instead of aborting the batch.
    """
    settings = get_settings()
    results = []

    for url in urls[:settings.max_competitors]:
        try:
            domain = competitor_domain(url)
            cached = await database.get_cached_competitor(domain)
            if cached:
                print(f"  [competitors] Cache hit for {domain}")
                results.append(cached["analysis"])
                continue

            scraped = await scrape_with_browser(url)
            analysis = await analyze_competitor(url, scraped)
            entry = {"url": url, "scraped_data": scraped, "analysis": analysis}
            results.append(entry)

            await database.cache_competitor(
                domain, industry or "general", entry, ttl_days=settings.competitor_cache_days
            )
            print(f"  [competitors] Analyzed {domain}")
        except Exception as e:
            print(f"  [competitors] Error analyzing {url}: {e}")
            results.append({"url": url, "error": "Failed to analyze competitor"})

    return results
