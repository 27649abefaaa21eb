"""
Design generator: one Claude call -> exactly three design variations
(Conservative, Balanced, Bold), each with a global header and body sections.
"""

import base64
import copy
import json
import os
import time
from urllib.parse import urlparse

from sitepolish.config import get_settings
from sitepolish.design_prompts import build_header_generation_prompt, build_header_system_prompt
from sitepolish.llm import complete_text, image_block, repair_json, strip_fences


VARIATION_NAMES = ("Conservative", "Balanced", "Bold")

REFERENCE_HEADER_FILES = [
    "s1.png",
    "s5.png",
    "s12.png",
    "s20.png",
    "s22.png",
    "s30.png",
    "s45.png",
    "s50.png",
    "s55.png",
    "s59.png",
]


class DesignGenerationError(Exception):
    """Claude's response could not be turned into three variations."""


def extract_company_name(scraped: dict | None, url: str) -> str:
    """Title before any "|" or "-", else the capitalised domain label, else COMPANY."""
    title = (scraped or {}).get("title") or ""
    if title:
        name = title.split("|")[0].split("-")[0].strip()
        if 0 < len(name) < 50:
            return name

    host = urlparse(url or "").hostname or ""
    host = host.replace("www.", "", 1)
    label = host.split(".")[0] if host else ""
    if label:
        return label[0].upper() + label[1:]
    return "COMPANY"


def _reference_base_header(project: dict, company_name: str) -> dict:
    logo_url = project.get("logo_url")
    return {
        "layout": "modern",
        "height": 75,
        "backgroundColor": "#1a1d2e",
        "sticky": True,
        "widgets": [
            {
                "type": "site-logo",
                "imageUrl": logo_url,
                "alt": f"{company_name} logo",
                "width": 160,
                "position": "left",
                "textLogo": None if logo_url else company_name,
                "textLogoStyle": {
                    "color": "#ffffff",
                    "fontSize": "20px",
                    "fontWeight": "700",
                    "textTransform": "uppercase",
                    "letterSpacing": "1px",
                },
            },
            {
                "type": "nav-menu",
                "items": [
                    {"text": "Services", "link": "#services"},
                    {"text": "Industries", "link": "#industries"},
                    {"text": "About", "link": "#about"},
                ],
                "style": "horizontal",
                "alignment": "right",
                "itemStyle": {
                    "color": "#ffffff",
                    "fontSize": "15px",
                    "fontWeight": "400",
                    "spacing": "32px",
                },
            },
            {
                "type": "button",
                "text": "Get in touch",
                "link": "#contact",
                "size": "md",
                "style": "outline",
                "position": "right",
                "customStyle": {
                    "border": "2px solid #00bcd4",
                    "color": "#ffffff",
                    "backgroundColor": "transparent",
                    "borderRadius": "24px",
                    "padding": "10px 28px",
                    "fontSize": "15px",
                    "fontWeight": "500",
                    "hoverBackground": "#00bcd4",
                    "hoverColor": "#ffffff",
                },
            },
        ],
    }


def reference_header_variations(project: dict) -> list:
    """Three fixed dark-navy headers; used when Claude is switched off."""
    company_name = extract_company_name(project.get("scraped_content"), project.get("url", ""))
    base = _reference_base_header(project, company_name)

    bold = copy.deepcopy(base)
    bold["backgroundColor"] = "#0a0e1a"
    bold["height"] = 80
    bold["widgets"][2]["customStyle"]["border"] = "2px solid #00e5ff"
    bold["widgets"][2]["customStyle"]["padding"] = "12px 32px"

    return [
        {
            "name": "Conservative",
            "description": "Dark sophisticated header with a clean tech aesthetic and a minimal widget set",
            "widgetStructure": {"globalHeader": {**copy.deepcopy(base), "backgroundColor": "#1a1d2e"}, "sections": []},
            "rationale": "A dark background gives high contrast and sophistication. Logo, navigation and a "
                         "single CTA keep attention focused. The outline button reads as modern and professional.",
            "ctaStrategy": "Single 'Get in touch' outline button with a cyan accent",
            "designDecisions": {
                "layoutApproach": "Logo left, navigation right-aligned, CTA button far right",
                "colorStrategy": "Dark navy (#1a1d2e) with white text and cyan (#00bcd4) accent",
                "typographyScale": "Logo 20px, nav items 15px",
                "spacingSystem": "32px between nav items",
                "asymmetry": "Symmetric layout with balanced weight distribution",
            },
        },
        {
            "name": "Balanced",
            "description": "Dark sophisticated header with a slightly deeper background",
            "widgetStructure": {"globalHeader": {**copy.deepcopy(base), "backgroundColor": "#0f1219", "height": 75}, "sections": []},
            "rationale": "Keeps the same minimal widget approach with a darker tone for variation, balancing "
                         "professionalism and modernity.",
            "ctaStrategy": "Outline 'Get in touch' button with a cyan border",
            "designDecisions": {
                "layoutApproach": "Logo left, nav right, button far right",
                "colorStrategy": "Darker navy (#0f1219) with white text and cyan (#00bcd4) accent",
                "typographyScale": "Logo 20px, nav 15px, button 15px",
                "spacingSystem": "32px nav spacing",
                "asymmetry": "Symmetric professional layout",
            },
        },
        {
            "name": "Bold",
            "description": "Dark sophisticated header with the deepest background and a brighter accent",
            "widgetStructure": {"globalHeader": bold, "sections": []},
            "rationale": "The deepest background and a brighter cyan accent push visual impact while keeping "
                         "the same layout and widget structure.",
            "ctaStrategy": "Prominent outline button with bright cyan (#00e5ff) for maximum visibility",
            "designDecisions": {
                "layoutApproach": "Modern horizontal layout with right-aligned navigation",
                "colorStrategy": "Deepest navy (#0a0e1a) with bright cyan accent (#00e5ff)",
                "typographyScale": "20px logo, 15px nav, 15px button",
                "spacingSystem": "32px spacing, larger button padding",
                "asymmetry": "Symmetric balanced layout",
            },
        },
    ]


def load_reference_headers(directory: str | None = None) -> list:
    """Image blocks for whichever reference header screenshots exist on disk."""
    directory = directory if directory is not None else get_settings().reference_headers_dir
    if not directory:
        return []

    blocks = []
    for filename in REFERENCE_HEADER_FILES:
        path = os.path.join(directory, filename)
        if not os.path.exists(path):
            continue
        with open(path, "rb") as f:
            blocks.append(image_block(base64.b64encode(f.read()).decode(), "image/png"))
    return blocks


def parse_variations(response_text: str) -> list:
    """First [...] block -> repair -> json.loads. Exactly three items or DesignGenerationError."""
    text = strip_fences(response_text)
    start = text.find("[")
    end = text.rfind("]")
    if start == -1 or end <= start:
        print(f"  [design-gen] No JSON array in response: {response_text[:500]}")
        raise DesignGenerationError("Failed to find JSON array in Claude response")

    json_string = repair_json(text[start:end + 1])
    try:
        variations = json.loads(json_string)
    except json.JSONDecodeError as e:
        print(f"  [design-gen] JSON parse error: {e}")
        print(f"  [design-gen] first 1000 chars: {json_string[:1000]}")
        raise DesignGenerationError(
            f"JSON parsing failed: {e}. Response length: {len(json_string)} chars."
        ) from e

    if not isinstance(variations, list) or len(variations) != 3:
        count = len(variations) if isinstance(variations, list) else 0
        raise DesignGenerationError(f"Expected 3 variations, got {count}")

    for i, variation in enumerate(variations):
        if not isinstance(variation, dict):
            raise DesignGenerationError(f"Variation {i} is not an object")
        variation.setdefault("name", VARIATION_NAMES[i])
        variation.setdefault("description", "")
        variation.setdefault("rationale", "")
        variation.setdefault("ctaStrategy", "")
        variation.setdefault("designDecisions", {})
        structure = variation.setdefault("widgetStructure", {})
        structure.setdefault("sections", [])

    return variations


async def generate_design_variations(project: dict) -> list:
    """Return exactly three variations for a configured project."""
    settings = get_settings()
    if settings.reference_headers_only:
        print("  [design-gen] Reference header mode: returning fixed headers")
        return reference_header_variations(project)

    company_name = extract_company_name(project.get("scraped_content"), project.get("url", ""))
    references = load_reference_headers()

    content = []
    if references:
        content.append({
            "type": "text",
            "text": f"Here are {len(references)} professional Elementor header examples. "
                    "Study their layouts, widget usage, spacing and visual hierarchy:",
        })
        content.extend(references)
    content.append({"type": "text", "text": build_header_generation_prompt(project, company_name)})

    start = time.time()
    try:
        response_text = await complete_text(
            build_header_system_prompt(project),
            content,
            max_tokens=settings.design_max_tokens,
        )
    except ValueError:
        raise
    except Exception as e:
        raise DesignGenerationError(f"Claude request failed: {e}") from e

    variations = parse_variations(response_text)
    print(f"  [design-gen] {company_name}: 3 variations in {time.time() - start:.1f}s "
          f"({len(references)} reference headers)")
    return variations
