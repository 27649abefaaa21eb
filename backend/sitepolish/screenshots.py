"""
Render preview HTML in headless Chromium and capture PNG screenshots
(base64) at the configured viewport sizes.
"""

import base64

from playwright.async_api import async_playwright


VIEWPORTS = {
    "desktop": {"width": 1920, "height": 1080},
    "laptop": {"width": 1366, "height": 768},
    "tablet-portrait": {"width": 1024, "height": 1366},
    "mobile-portrait": {"width": 375, "height": 667},
}

LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-accelerated-2d-canvas",
    "--disable-gpu",
]

SETTLE_MS = 500


async def generate_screenshots(html: str, viewports: list) -> dict:
    """
    Full-page screenshot per viewport name -> base64 PNG.
    Unknown viewport names are skipped. The browser is always closed.
    """
    screenshots = {}
    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=True, args=LAUNCH_ARGS)
        try:
            page = await browser.new_page()
            await page.set_content(html, wait_until="networkidle", timeout=30000)

            for name in viewports:
                size = VIEWPORTS.get(name)
                if size is None:
                    continue
                await page.set_viewport_size(size)
                await page.wait_for_timeout(SETTLE_MS)
                png = await page.screenshot(type="png", full_page=True)
                screenshots[name] = base64.b64encode(png).decode()
        finally:
            await browser.close()

    print(f"  [screenshots] Captured {len(screenshots)} viewport(s): {', '.join(screenshots)}")
    return screenshots


async def generate_preview_screenshot(html: str) -> str:
    """Single desktop screenshot (viewport only, not full page) as base64 PNG."""
    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=True, args=LAUNCH_ARGS)
        try:
            page = await browser.new_page(viewport=VIEWPORTS["desktop"])
            await page.set_content(html, wait_until="networkidle", timeout=30000)
            await page.wait_for_timeout(SETTLE_MS)
            png = await page.screenshot(type="png")
        finally:
            await browser.close()
    return base64.b64encode(png).decode()
