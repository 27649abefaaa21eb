"""
Tier 3: build ScrapedData from a user-uploaded screenshot with Claude vision.
Used when both automated scrape tiers are blocked.
"""

import base64
import binascii

from sitepolish.image_utils import screenshot_to_b64
from sitepolish.llm import complete_text, extract_json_object, image_block


SCREENSHOT_SYSTEM_PROMPT = """You analyze website screenshots for a web design agency.
Return ONLY valid JSON, no additional text."""

SCREENSHOT_PROMPT = """Analyze this website screenshot and extract the following information as JSON:

{
  "title": "Website title or main heading",
  "siteType": "ecommerce" or "leadgen",
  "industry": "Industry category (e.g. Transportation, E-commerce, Healthcare)",
  "colors": ["#hex1", "#hex2", "#hex3", "#hex4", "#hex5"],
  "structure": {
    "hasHeader": true/false,
    "hasHero": true/false,
    "hasSections": true/false,
    "hasFooter": true/false,
    "navigation": ["Nav item 1", "Nav item 2"]
  },
  "content": {
    "heading": "Main headline text",
    "subheading": "Subheading or tagline",
    "ctaButtons": ["Button text 1", "Button text 2"],
    "description": "Brief description of the site's purpose and content"
  },
  "designPatterns": ["hero banner", "card grid"],
  "hasLogo": true/false
}

siteType is "ecommerce" when the site sells products and "leadgen" when it collects inquiries.
colors are the 5 most prominent colors as hex codes."""


def decode_screenshot(screenshot: str) -> bytes:
    """Accept raw base64 or a data URL. Raises ValueError on bad input."""
    data = screenshot.split(",", 1)[1] if screenshot.startswith("data:") else screenshot
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Screenshot is not valid base64: {e}")


def analysis_to_scraped_data(analysis: dict, url: str) -> dict:
    """Map the vision analysis onto the same ScrapedData shape the scrapers produce."""
    structure = analysis.get("structure") or {}
    content = analysis.get("content") or {}
    return {
        "url": url,
        "title": analysis.get("title") or content.get("heading") or "",
        "content": " ".join(
            part for part in (content.get("heading"), content.get("subheading"), content.get("description")) if part
        ),
        "structure": {
            "header": "Header present" if structure.get("hasHeader") else "",
            "navigation": structure.get("navigation") or [],
            "sections": analysis.get("designPatterns") or [],
            "footer": "Footer present" if structure.get("hasFooter") else "",
        },
        "images": [],
        "forms": [],
        "buttons": [{"text": text, "href": ""} for text in content.get("ctaButtons") or []],
        "logo": {"src": "", "alt": "Logo detected"} if analysis.get("hasLogo") else None,
    }


async def analyze_screenshot(screenshot: str, url: str) -> dict:
    """
    Run the vision analysis on an uploaded screenshot.
    Returns {"analysis": <raw model JSON>, "scraped": <ScrapedData>}.
    """
    image_bytes = decode_screenshot(screenshot)
    image_b64, media_type = screenshot_to_b64(image_bytes)

    print(f"  [screenshot-analysis] Analyzing upload for {url}")
    text = await complete_text(
        SCREENSHOT_SYSTEM_PROMPT,
        [image_block(image_b64, media_type), {"type": "text", "text": SCREENSHOT_PROMPT}],
        max_tokens=4096,
    )
    analysis = extract_json_object(text)
    return {"analysis": analysis, "scraped": analysis_to_scraped_data(analysis, url)}
