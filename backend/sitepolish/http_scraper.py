"""
Tier 1 scraper: a plain HTTP GET parsed with BeautifulSoup.

Much faster than a browser and less likely to trip bot protection. Raises
ScrapeError with a short code when the page is blocked, unreachable, or too
thin to be useful without JavaScript.
"""

import re
from urllib.parse import urljoin

import httpx
from bs4 import BeautifulSoup

from sitepolish.config import get_settings


BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/131.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Accept-Encoding": "gzip, deflate",
    "DNT": "1",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "none",
    "Cache-Control": "max-age=0",
}

BUTTON_SELECTOR = 'button, a.button, a.btn, input[type="submit"], .cta'

LOGO_SELECTORS = [
    'header img[alt*="logo" i]',
    "header img:first-of-type",
    ".logo img",
    "#logo img",
    'a[href="/"] img',
]

MIN_CONTENT_LENGTH = 500

DNS_FAILURE_MARKERS = (
    "name or service not known",
    "nodename nor servname",
    "getaddrinfo failed",
    "temporary failure in name resolution",
    "no address associated",
)


class ScrapeError(Exception):
    """HTTP-tier failure with a machine-readable code (e.g. HTTP_BLOCKED_403)."""

    def __init__(self, code: str, message: str = ""):
        self.code = code
        super().__init__(message or code)


def _collapse(text: str) -> str:
    return re.sub(r"\s+", " ", text or "").strip()


def _absolute(src: str, base_url: str) -> str:
    return src if src.startswith("http") else urljoin(base_url, src)


def parse_html(html: str, url: str) -> dict:
    """Turn a raw HTML document into the ScrapedData shape."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()

    title_tag = soup.find("title")
    title = title_tag.get_text(strip=True) if title_tag else ""
    if not title:
        h1 = soup.find("h1")
        title = h1.get_text(strip=True) if h1 else ""

    body = soup.body or soup
    content = _collapse(body.get_text(" "))

    header_tag = soup.find("header")
    header = _collapse(header_tag.get_text(" ")) if header_tag else ""

    navigation = []
    for a in soup.select("nav a, header a"):
        text = a.get_text(strip=True)
        if text:
            navigation.append(text)

    sections = []
    for el in soup.select("section, main > div"):
        text = _collapse(el.get_text(" "))
        if len(text) > 20:
            sections.append(text)

    footer_tag = soup.find("footer")
    footer = _collapse(footer_tag.get_text(" ")) if footer_tag else ""

    images = []
    for img in soup.find_all("img"):
        src = img.get("src")
        if src:
            images.append({"src": _absolute(src, url), "alt": img.get("alt", "")})

    forms = []
    for form in soup.find_all("form"):
        fields = []
        for field in form.find_all(["input", "textarea", "select"]):
            fields.append(field.get("name") or field.get("type") or "unknown")
        forms.append({"action": form.get("action", ""), "fields": fields})

    buttons = []
    for el in soup.select(BUTTON_SELECTOR):
        text = el.get_text(strip=True) or (el.get("value") or "").strip()
        if text:
            buttons.append({"text": text, "href": el.get("href", "")})

    logo = None
    for selector in LOGO_SELECTORS:
        el = soup.select_one(selector)
        if el is not None and el.get("src"):
            logo = {"src": _absolute(el["src"], url), "alt": el.get("alt", "")}
            break

    return {
        "url": url,
        "title": title,
        "content": content,
        "structure": {
            "header": header,
            "navigation": navigation,
            "sections": sections,
            "footer": footer,
        },
        "images": images,
        "forms": forms,
        "buttons": buttons,
        "logo": logo,
    }


def needs_javascript(data: dict) -> bool:
    """True when the static HTML is too thin to describe the site."""
    structure = data.get("structure", {})
    has_enough_content = len(data.get("content", "")) > MIN_CONTENT_LENGTH
    has_structure = bool(structure.get("sections")) or bool(structure.get("navigation"))
    return not has_enough_content or not has_structure


def is_javascript_heavy(html: str) -> bool:
    """Detect single-page-app frameworks that render most content client side."""
    soup = BeautifulSoup(html, "html.parser")
    has_react = "react" in html or "React" in html
    has_vue = "vue" in html or "Vue" in html
    has_angular = "angular" in html or "ng-app" in html
    has_next = soup.select_one('script[src*="next"]') is not None
    return has_react or has_vue or has_angular or has_next


async def scrape_with_http(url: str, transport: httpx.AsyncBaseTransport | None = None) -> dict:
    """
    Fetch a page with browser-like headers and parse it.
    Raises ScrapeError on blocking, network failure or a JS-only page.
    """
    settings = get_settings()
    client_kwargs = {
        "headers": BROWSER_HEADERS,
        "timeout": settings.http_timeout,
        "follow_redirects": True,
        "max_redirects": settings.http_max_redirects,
    }
    if transport is not None:
        client_kwargs["transport"] = transport

    try:
        async with httpx.AsyncClient(**client_kwargs) as client:
            response = await client.get(url)
    except httpx.TimeoutException as e:
        raise ScrapeError("HTTP_TIMEOUT", f"Timed out fetching {url}") from e
    except httpx.ConnectError as e:
        message = str(e).lower()
        if any(marker in message for marker in DNS_FAILURE_MARKERS):
            raise ScrapeError("HTTP_DNS_ERROR", f"Could not resolve {url}") from e
        raise ScrapeError("HTTP_FAILED", f"Connection failed for {url}: {e}") from e
    except httpx.HTTPError as e:
        raise ScrapeError("HTTP_FAILED", f"Request failed for {url}: {e}") from e

    if response.status_code == 403:
        raise ScrapeError("HTTP_BLOCKED_403")
    if response.status_code == 429:
        raise ScrapeError("HTTP_RATE_LIMITED_429")
    if response.status_code >= 400:
        raise ScrapeError(f"HTTP_ERROR_{response.status_code}")

    data = parse_html(response.text, str(response.url))
    data["url"] = url
    if needs_javascript(data):
        raise ScrapeError("NEEDS_JAVASCRIPT")

    print(f"  [http-scraper] {url}: {len(data['content'])} chars, "
          f"{len(data['structure']['sections'])} sections")
    return data
