"""
Site classification: ecommerce vs lead generation, industry, and conversion goals.

Site type is a keyword vote over page content and button labels. Industry
comes from a short Claude call with a keyword-pattern fallback.
"""

import re

from sitepolish.llm import complete_text, extract_json_object


ECOMMERCE_KEYWORDS = [
    "add to cart", "checkout", "shop now", "buy now", "product",
    "cart", "shopping", "price", "$",
]

LEADGEN_KEYWORDS = [
    "contact us", "get a quote", "request", "consultation",
    "schedule", "book", "demo", "trial",
]

CONTACT_FIELD_MARKERS = ("email", "phone", "message")

INDUSTRY_PATTERNS = [
    {
        "keywords": ["transport", "vehicle", "shipping", "delivery", "logistics", "freight"],
        "industry": "vehicle-transport",
        "guidance": "Professional and trustworthy design with bold typography. Use blues and grays for reliability. "
                    "Feature vehicle imagery, service areas, and contact information prominently.",
    },
    {
        "keywords": ["restaurant", "food", "menu", "dining", "cuisine", "cafe", "bistro"],
        "industry": "restaurant",
        "guidance": "Appetizing design with food photography. Use warm colors (reds, oranges, yellows). "
                    "Highlight menu, reservations, and location.",
    },
    {
        "keywords": ["dental", "dentist", "orthodontic", "teeth", "smile"],
        "industry": "dental-practice",
        "guidance": "Clean, professional design with calming colors (blues, whites). "
                    "Feature patient testimonials, services, and appointment booking.",
    },
    {
        "keywords": ["law", "legal", "attorney", "lawyer", "firm"],
        "industry": "law-firm",
        "guidance": "Professional, authoritative design with traditional serif fonts. Use navy, burgundy, gold. "
                    "Emphasize expertise and trust.",
    },
    {
        "keywords": ["real estate", "property", "homes", "realty", "housing"],
        "industry": "real-estate",
        "guidance": "Modern, aspirational design with property imagery. "
                    "Use professional photography, search features, and agent profiles.",
    },
    {
        "keywords": ["fitness", "gym", "workout", "training", "health club"],
        "industry": "fitness",
        "guidance": "Energetic design with dynamic imagery. Use bold colors and strong CTAs for memberships and classes.",
    },
    {
        "keywords": ["salon", "spa", "beauty", "hair", "massage", "wellness"],
        "industry": "beauty-salon",
        "guidance": "Elegant, soothing design with soft colors (pastels, neutrals). Feature services, pricing, and booking.",
    },
    {
        "keywords": ["plumbing", "plumber", "hvac", "electrician", "contractor"],
        "industry": "home-services",
        "guidance": "Trustworthy, professional design. Use blue and orange for reliability. "
                    "Feature emergency contact, services, and testimonials.",
    },
    {
        "keywords": ["photography", "photographer", "photo", "portrait", "wedding"],
        "industry": "photography",
        "guidance": "Portfolio-focused design with stunning imagery. Minimize text, maximize visual impact.",
    },
    {
        "keywords": ["insurance", "coverage", "policy", "claims"],
        "industry": "insurance",
        "guidance": "Professional, reassuring design. Use blues and greens. Emphasize trust, coverage options, and quotes.",
    },
]

DEFAULT_INDUSTRY = {
    "industry": "general-business",
    "design_guidance": "Modern, professional design with clear visual hierarchy. Use neutral colors with accent "
                       "highlights. Feature services, about section, and strong call-to-action elements.",
}

INDUSTRY_SYSTEM_PROMPT = """You classify businesses by industry from their website text.
Respond with ONLY a JSON object:
{"industry": "short-kebab-case-slug", "designGuidance": "one or two sentences of visual design guidance"}
Use the most specific industry that fits (e.g. "vehicle-transport", "dental-practice", "saas").
Do not restrict yourself to a fixed list."""


def _score(keywords: list[str], content: str, buttons: list[str]) -> int:
    return sum(
        1 for keyword in keywords
        if keyword in content or any(keyword in b for b in buttons)
    )


def detect_industry_fallback(content: str, url: str) -> dict:
    """Keyword-pattern industry detection used when Claude is unavailable."""
    lower_content = content.lower()
    lower_url = url.lower()
    for pattern in INDUSTRY_PATTERNS:
        if any(k in lower_content or k in lower_url for k in pattern["keywords"]):
            return {"industry": pattern["industry"], "design_guidance": pattern["guidance"]}
    return dict(DEFAULT_INDUSTRY)


async def classify_industry(content: str, url: str) -> dict | None:
    """Ask Claude for an industry slug and design guidance. Returns None on any failure."""
    try:
        text = await complete_text(
            INDUSTRY_SYSTEM_PROMPT,
            f"Website URL: {url}\n\nWebsite content:\n{content[:4000]}",
            max_tokens=300,
        )
        result = extract_json_object(text)
        industry = (result.get("industry") or "").strip().lower()
        if not industry:
            return None
        industry = re.sub(r"[^a-z0-9]+", "-", industry).strip("-")
        return {"industry": industry, "design_guidance": result.get("designGuidance") or ""}
    except Exception as e:
        print(f"  [site-classifier] Industry classification failed: {e}, using fallback")
        return None


def identify_conversion_goals(site_type: str, buttons: list[str], has_contact_form: bool) -> list[str]:
    goals = []
    if site_type == "ecommerce":
        goals += ["Product purchases", "Add to cart conversions"]
        if any("subscribe" in b or "newsletter" in b for b in buttons):
            goals.append("Email list signups")
    else:
        if has_contact_form:
            goals.append("Contact form submissions")
        if any("quote" in b or "consultation" in b for b in buttons):
            goals.append("Quote/consultation requests")
        if any("call" in b or "phone" in b for b in buttons):
            goals.append("Phone call conversions")
    return goals


async def classify_site(scraped: dict, url: str) -> dict:
    """
    Classify scraped data. Returns
    {"site_type", "confidence", "industry", "industry_design_guidance",
     "has_contact_form", "conversion_goals"}.
    """
    content = (scraped.get("content") or "").lower()
    buttons = [(b.get("text") or "").lower() for b in scraped.get("buttons") or []]
    forms = scraped.get("forms") or []

    ecommerce_score = _score(ECOMMERCE_KEYWORDS, content, buttons)
    leadgen_score = _score(LEADGEN_KEYWORDS, content, buttons)

    has_contact_form = any(
        any(marker in field.lower() for marker in CONTACT_FIELD_MARKERS)
        for form in forms
        for field in form.get("fields") or []
    )

    site_type = "ecommerce" if ecommerce_score > leadgen_score else "leadgen"
    confidence = min(max(ecommerce_score, leadgen_score) / 10, 1)

    industry = await classify_industry(content, url)
    if not industry:
        industry = detect_industry_fallback(content, url)

    result = {
        "site_type": site_type,
        "confidence": confidence,
        "industry": industry["industry"],
        "industry_design_guidance": industry["design_guidance"],
        "has_contact_form": has_contact_form,
        "conversion_goals": identify_conversion_goals(site_type, buttons, has_contact_form),
    }
    print(f"  [site-classifier] {url}: {site_type} ({confidence:.1f}), industry={result['industry']}")
    return result
