"""
Tiered scrape: plain HTTP first, stealth browser second.

When both tiers fail because the site refuses automated access, the result
asks the caller for a manual screenshot upload (the third tier, handled by
screenshot_analysis).
"""

from sitepolish.browser_scraper import scrape_with_browser
from sitepolish.http_scraper import scrape_with_http


BLOCKED_MARKERS = ("403", "Access denied")


async def scrape_website(url: str) -> dict:
    """
    Returns {"success", "data", "method", "error", "needs_manual_upload"}.
    method is "http" or "browser" on success.
    """
    print(f"  [hybrid-scraper] Starting scrape for {url}")

    # Tier 1
    try:
        data = await scrape_with_http(url)
        print("  [hybrid-scraper] HTTP tier succeeded")
        return {"success": True, "data": data, "method": "http", "error": None, "needs_manual_upload": False}
    except Exception as e:
        http_error = str(e)
        if "NEEDS_JAVASCRIPT" in http_error:
            print("  [hybrid-scraper] Page needs JavaScript rendering, trying browser")
        else:
            print(f"  [hybrid-scraper] HTTP tier failed ({http_error}), trying browser")

    # Tier 2
    try:
        data = await scrape_with_browser(url)
        print("  [hybrid-scraper] Browser tier succeeded")
        return {"success": True, "data": data, "method": "browser", "error": None, "needs_manual_upload": False}
    except Exception as e:
        browser_error = str(e)
        print(f"  [hybrid-scraper] Browser tier failed: {browser_error}")

    blocked = any(marker in browser_error for marker in BLOCKED_MARKERS)
    if blocked:
        print("  [hybrid-scraper] Both tiers blocked, manual upload recommended")
    return {
        "success": False,
        "data": None,
        "method": None,
        "error": f"HTTP: {http_error}; Browser: {browser_error}",
        "needs_manual_upload": blocked,
    }
