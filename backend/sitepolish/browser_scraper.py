"""
Tier 2 scraper: headless Chromium with playwright-stealth.

Used when the plain HTTP fetch is blocked or the page needs JavaScript to
render. Produces the same ScrapedData shape as the HTTP tier.
"""

from playwright.async_api import async_playwright
from playwright_stealth import Stealth

from sitepolish.config import get_settings


USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/131.0.0.0 Safari/537.36"
)

_stealth = Stealth()


class BrowserScrapeError(Exception):
    """Browser-tier failure carrying a message fit to show the user."""


EXTRACT_PAGE_JS = '''() => {
    const collapse = (t) => (t || "").replace(/\\s+/g, " ").trim();

    const header = document.querySelector("header");
    const footer = document.querySelector("footer");

    const navigation = [...document.querySelectorAll("nav a, header a")]
        .map(a => (a.textContent || "").trim())
        .filter(Boolean);

    const sections = [...document.querySelectorAll("section, main > div")]
        .map(s => collapse(s.textContent))
        .filter(t => t.length > 20);

    const images = [...document.querySelectorAll("img")]
        .filter(img => img.src && !img.src.startsWith("data:"))
        .map(img => ({ src: img.src, alt: img.alt || "" }));

    const forms = [...document.querySelectorAll("form")].map(form => ({
        action: form.getAttribute("action") || "",
        fields: [...form.querySelectorAll("input, textarea, select")]
            .map(f => f.name || f.type || "")
            .filter(Boolean),
    }));

    const buttons = [...document.querySelectorAll('button, a.button, a.btn, input[type="submit"], .cta')]
        .map(b => ({ text: (b.textContent || b.value || "").trim(), href: b.href || "" }))
        .filter(b => b.text);

    const logoSelectors = [
        'header img[alt*="logo" i]',
        "header img:first-of-type",
        ".logo img",
        "#logo img",
        'a[href="/"] img',
    ];
    let logo = null;
    for (const selector of logoSelectors) {
        const el = document.querySelector(selector);
        if (el && el.src) {
            logo = { src: el.src, alt: el.alt || "" };
            break;
        }
    }

    return {
        title: document.title || collapse(document.querySelector("h1")?.textContent),
        content: collapse(document.body ? document.body.innerText : ""),
        structure: {
            header: header ? collapse(header.innerText) : "",
            navigation,
            sections,
            footer: footer ? collapse(footer.innerText) : "",
        },
        images,
        forms,
        buttons,
        logo,
    };
}'''


def friendly_error(url: str, error: Exception) -> str:
    """Translate Chromium network errors into a message a user can act on."""
    message = str(error)
    if "ERR_NAME_NOT_RESOLVED" in message:
        return f"Could not resolve domain: {url}. Please check the URL is correct."
    if "ERR_CONNECTION_REFUSED" in message:
        return f"Connection refused by {url}. The website may be down."
    if "ERR_CONNECTION_TIMED_OUT" in message:
        return f"Connection timed out for {url}. The website may be slow or blocking requests."
    if "Timeout" in message:
        return f"Request timed out for {url}. The website took too long to respond."
    return f"Failed to scrape {url}: {message}"


async def dismiss_overlays(page):
    """Click away cookie banners and remove consent overlays before extraction."""
    await page.evaluate('''() => {
        const btns = document.querySelectorAll(
            '[class*="cookie"] button, [id*="cookie"] button, ' +
            '[class*="consent"] button, [aria-label*="accept" i], [class*="gdpr"] button'
        );
        for (const btn of btns) {
            if ((btn.innerText || "").match(/accept|agree|got it|ok|close|dismiss/i)) {
                btn.click();
                break;
            }
        }
        document.querySelectorAll(
            '[class*="cookie"], [id*="cookie"], [class*="consent"], [class*="gdpr"]'
        ).forEach(el => {
            if ((el.innerText || "").toLowerCase().match(/cookie|consent|privacy|gdpr/)) {
                el.remove();
            }
        });
    }''')


async def open_page(url: str, p) -> tuple:
    """
    Launch a stealth browser and navigate to url.
    Returns (browser, page, status). The caller owns closing the browser.
    """
    settings = get_settings()
    browser = await p.chromium.launch(
        headless=True,
        args=["--no-sandbox", "--disable-setuid-sandbox"],
    )
    try:
        context = await browser.new_context(
            viewport={"width": settings.viewport_width, "height": settings.viewport_height},
            user_agent=USER_AGENT,
        )
        page = await context.new_page()
        await _stealth.apply_stealth_async(page)

        try:
            response = await page.goto(url, wait_until="networkidle", timeout=settings.page_load_timeout)
        except Exception:
            response = await page.goto(url, wait_until="domcontentloaded", timeout=settings.page_load_timeout)
            await page.wait_for_timeout(2000)
    except Exception:
        await browser.close()
        raise
    return browser, page, (response.status if response else None)


async def scrape_with_browser(url: str) -> dict:
    """Render url in a stealth browser and extract ScrapedData. Always closes the browser."""
    try:
        async with async_playwright() as p:
            browser, page, status = await open_page(url, p)
            try:
                if status == 403:
                    raise BrowserScrapeError(f"Access denied (403) by {url}. The site blocks automated browsers.")
                try:
                    await dismiss_overlays(page)
                except Exception as e:
                    print(f"  [browser-scraper] Overlay cleanup failed: {e}")
                data = await page.evaluate(EXTRACT_PAGE_JS)
            finally:
                await browser.close()
    except BrowserScrapeError:
        raise
    except Exception as e:
        raise BrowserScrapeError(friendly_error(url, e)) from e

    data["url"] = url
    print(f"  [browser-scraper] {url}: {len(data.get('content', ''))} chars, "
          f"{len(data.get('structure', {}).get('sections', []))} sections")
    return data
