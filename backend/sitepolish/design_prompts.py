"""
Prompts for design generation.

One Claude call returns all three variations (Conservative, Balanced, Bold).
Each carries a globalHeader plus a short list of body sections.
"""

import json


DEFAULT_MENU_ITEMS = ["Home", "About", "Services", "Contact"]

DESIGN_PRINCIPLES = """CRITICAL DESIGN PRINCIPLES:

1. LAYOUT: avoid centering everything. Use asymmetric splits (70/30, 60/40),
   offset content and varied grids. Never default to a three-column feature grid.
2. SPACING: vary section spacing (40, 64, 96, 120, 160px). Some sections dense, others sparse.
3. TYPOGRAPHY: dramatic scale (H1 64px, H2 40px, H3 28px, body 18px), at least 3 size levels,
   meaningful weight contrast.
4. COLOR: use gradients and overlays with purpose. Brand colors go on buttons and accents.
5. CONTENT: industry-specific copy. No "Your Trusted Partner", "Learn More" or "Get Started".
6. ACCESSIBILITY: WCAG AA contrast (4.5:1 normal text, 3:1 large), 44px touch targets."""


HEADER_WIDGET_SCHEMA = """HEADER WIDGETS (use only these in globalHeader.widgets):
- site-logo: {"type": "site-logo", "imageUrl": string|null, "alt": string, "width": number}
- nav-menu: {"type": "nav-menu", "items": [{"text": string, "link": string}], "style": "horizontal", "alignment": "left"|"center"|"right"}
- search: {"type": "search", "style": "icon"|"input-box", "placeholder": string}
- icon-box: {"type": "icon-box", "icon": "phone"|"email"|"location"|"chat", "text": string, "description": string, "isHeader": true}
- button: {"type": "button", "text": string, "link": string, "size": "sm"|"md"|"lg", "style": "primary"|"secondary"|"outline"}
- cart-icon: {"type": "cart-icon", "itemCount": number}

Optional header rows:
- utilityBar: {"backgroundColor", "textColor", "leftItems": [...], "rightItems": [...]} with items of type text, link, social-icons or icon-box
- announcementBar: {"text", "link", "backgroundColor", "textColor", "closeable"}"""

BODY_WIDGET_SCHEMA = """BODY WIDGETS (sections[].widgets):
heading {text, level, fontSize}, text-editor {text, fontSize}, image {alt}, video {},
button {text, link, size}, icon-box {icon, title, description}, image-box {title, description},
testimonial {text, name, position}, counter {endNumber, title}, accordion {items: [{title, content}]},
call-to-action {title, description, buttonText, buttonLink}, hero-banner {title, subtitle, buttonText},
icon-list {items}, price-table {title, price, period, features}, form {fields}, spacer {height}, divider {}.
Leave image and video URLs out: stock media is assigned afterwards."""


GENERAL_HEADER_GUIDANCE = """GENERAL HEADER DESIGN:
- Logo left, navigation center or right, CTA button right
- Include the widgets requested in the header configuration
- Clean layout appropriate for any business"""

HEADER_GUIDANCE = {
    "vehicle-transport": """HEADER FOR VEHICLE TRANSPORT:
- Logo left, nav (Services, Fleet, Tracking, Contact), phone icon-box "24/7 Dispatch", CTA "Get Free Quote"
- Blues (#003d82, #0066cc) and grays; height 80-90px; sticky""",
    "restaurant": """HEADER FOR RESTAURANT:
- Logo left, nav center (Menu, Reservations, Our Story, Catering), phone icon-box "Call to Reserve", CTA "Reserve Table"
- Warm appetizing accents (#c41e3a, #ff6b35); height 70-80px; sticky""",
    "dental-practice": """HEADER FOR DENTAL PRACTICE:
- Logo left, nav center (Services, New Patients, Insurance, Contact), phone icon-box, CTA "Book Appointment"
- Calming blues (#4a90e2) and clean whites; height 75-85px; sticky""",
    "law-firm": """HEADER FOR LAW FIRM:
- Logo left, nav right (Practice Areas, Attorneys, Case Results, Contact), phone icon-box, CTA "Free Consultation"
- Navy #1a365d, burgundy #722f37, gold accents; height 85-95px; sticky""",
    "real-estate": """HEADER FOR REAL ESTATE:
- Logo left, nav center (Buy, Sell, Rent, Agents, Neighborhoods), search icon, CTA "View Listings"
- Modern blues (#2c5aa0) and grays; height 75-85px; sticky""",
    "fitness": """HEADER FOR FITNESS:
- Logo left, nav center (Classes, Trainers, Memberships, Schedule), CTA "Start Free Trial"
- Energetic red #e53e3e, orange #dd6b20, black #1a202c; height 70-80px; sticky""",
    "beauty-salon": """HEADER FOR BEAUTY SALON / SPA:
- Logo center or left, nav right (Services, Stylists, Gallery, Book Online), phone icon-box, CTA "Book Now"
- Rose gold #b76e79, soft pink #f7d7dc, cream #faf8f3; height 70-80px""",
    "home-services": """HEADER FOR HOME SERVICES:
- Logo left, nav center (Services, Emergency, Service Areas, Contact), large phone icon-box, CTA "24/7 Emergency"
- Trust blue #2563eb with orange #f97316 for urgency; height 80-90px; sticky""",
    "photography": """HEADER FOR PHOTOGRAPHY:
- Minimal: logo left or center, short nav (Portfolio, Services, About, Contact), CTA "View Portfolio"
- Black and white with a subtle accent; height 60-70px""",
    "insurance": """HEADER FOR INSURANCE:
- Logo left, nav center (Insurance Types, Claims, About, Contact), phone icon-box, CTA "Get Free Quote"
- Reassuring blue #1e40af and green #059669; height 80-90px; sticky""",
    "ecommerce": """HEADER FOR E-COMMERCE:
- Logo left, category nav center, search (required), cart-icon with item count (required)
- Clear visual hierarchy; height 70-80px; sticky""",
    "leadgen": """HEADER FOR LEAD GENERATION:
- Logo left, service-focused nav, phone or email icon-box, strong industry-specific CTA
- Trust-building colors; height 75-85px; sticky""",
}


def header_guidance(industry: str | None, site_type: str | None = None) -> str:
    """Industry guidance, else the site-type guidance, else lead generation."""
    if not industry:
        return GENERAL_HEADER_GUIDANCE
    return (
        HEADER_GUIDANCE.get(industry)
        or HEADER_GUIDANCE.get(site_type or "leadgen")
        or HEADER_GUIDANCE["leadgen"]
    )


VARIATION_GUIDANCE = {
    "Conservative": """TARGET: risk-averse decision makers
- Professional but not boring; trust elements prominent (testimonials, credentials)
- Header: white (#ffffff) or very light gray background, phone icon-box plus brand-colored button""",
    "Balanced": """TARGET: mid-market buyers
- Modern with personality; mix of bold and subtle elements
- Header: light gray (#f8f9fa) or a 5% brand tint, right-aligned nav, large colorful button""",
    "Bold": """TARGET: early adopters and creative buyers
- Attention-grabbing, unconventional layout choices, strong visual identity
- Header: dark sophisticated background (#1a1a2e, #2c3e50, #1e293b) with light text""",
}

INDUSTRY_PERSONALITIES = {
    "transportation": "Bold action imagery, strong CTAs, trust badges, coverage maps, blue/orange tones",
    "vehicle-transport": "Vehicles in motion, route coverage, trust badges, blue/orange tones",
    "automotive": "Vehicle showcase imagery, service bay photos, certifications, tech-forward layouts",
    "legal": "Navy/burgundy colors, serif accents, structured layouts, generous whitespace",
    "law-firm": "Navy/burgundy colors, serif accents, structured layouts, generous whitespace",
    "fashion": "Masonry galleries, editorial layouts, image-heavy asymmetric grids",
    "saas": "Product screenshots, modern sans-serif, integration logos, comparison tables",
    "restaurant": "Full-bleed food photography, warm colors, distinctive display fonts, menu highlights",
    "healthcare": "Calming blues/greens, friendly imagery, organized layouts, trust signals",
    "dental-practice": "Calming blues, friendly staff imagery, clear appointment paths",
    "finance": "Navy/green tones, conservative layouts, trust indicators",
    "insurance": "Reassuring blues/greens, plain-language coverage highlights, quote paths",
    "real-estate": "Large property images, map integrations, clean listing cards",
    "construction": "Project galleries, before/after showcases, safety certifications, industrial palette",
    "home-services": "Technicians at work, service-area maps, emergency contact prominence",
    "education": "Bright engaging colors, student imagery, course highlights",
    "fitness": "High-energy photography, bold type, class schedules",
    "beauty-salon": "Soft elegant palette, treatment galleries, easy booking",
    "photography": "Minimal chrome, full-width portfolio imagery",
}


def industry_personality(industry: str | None) -> str:
    if not industry:
        return "Modern, professional aesthetic"
    return INDUSTRY_PERSONALITIES.get(industry, "Modern, industry-appropriate aesthetic")


def build_design_prompt(project: dict, company_name: str, variation: str) -> str:
    """Guidance block for one named variation."""
    industry = project.get("industry") or "business"
    return f"""{variation.upper()} VARIATION for {company_name}, a {project.get("site_type", "leadgen")} {industry}:
{VARIATION_GUIDANCE[variation]}
INDUSTRY PERSONALITY: {industry_personality(project.get("industry"))}"""


def build_header_system_prompt(project: dict) -> str:
    industry = project.get("industry") or "general"
    config = project.get("global_header_config") or {}
    menu_items = config.get("menuItems") or DEFAULT_MENU_ITEMS
    return f"""You are an expert website designer creating production-grade GLOBAL HEADERS and
page layouts for Elementor websites.

The header matters most: logo placement, navigation hierarchy and CTA visibility.
{industry} sites need their own visual language. Header backgrounds stay neutral
(white, light or dark); brand colors go on buttons and accents. Service businesses
get a prominent phone icon-box before the CTA. Ecommerce sites get search and cart.
Use these menu items unless the industry suggests better ones: {json.dumps(menu_items)}

{header_guidance(project.get("industry"), project.get("site_type"))}

{HEADER_WIDGET_SCHEMA}

{BODY_WIDGET_SCHEMA}

{DESIGN_PRINCIPLES}

Return ONLY a JSON array of exactly 3 variations. No markdown, no comments, no trailing commas."""


def build_header_generation_prompt(project: dict, company_name: str) -> str:
    """User prompt asking for all three variations in one JSON array."""
    logo_url = project.get("logo_url")
    scraped = json.dumps(project.get("scraped_content") or {})[:1000]
    variations = "\n\n".join(
        build_design_prompt(project, company_name, name) for name in ("Conservative", "Balanced", "Bold")
    )
    industry_note = project.get("industry_design_guidance") or ""

    return f"""Generate 3 distinctive designs for {company_name}.

PROJECT:
- URL: {project.get("url", "")}
- Industry: {project.get("industry") or "general"}
- Site type: {project.get("site_type", "leadgen")}
- Industry guidance: {industry_note}
- Colors: {json.dumps(project.get("color_scheme") or {})}
- Fonts: {json.dumps(project.get("fonts") or {})}
- Header config: {json.dumps(project.get("global_header_config") or {})}
- Requested body widgets: {json.dumps(project.get("layout_widgets") or [])}
- Competitor insights: {json.dumps(project.get("competitors") or [])[:1500]}

SCRAPED CONTENT (brand info):
{scraped}

{variations}

Each variation:
{{
  "name": "Conservative" | "Balanced" | "Bold",
  "description": string,
  "widgetStructure": {{
    "globalHeader": {{
      "layout": "standard" | "classic" | "modern",
      "height": number,
      "backgroundColor": string,
      "sticky": boolean,
      "widgets": [
        {{"type": "site-logo", "imageUrl": {json.dumps(logo_url)}, "alt": "{company_name} logo", "width": 180}},
        {{"type": "nav-menu", "items": [...], "style": "horizontal", "alignment": "right"}},
        {{"type": "button", "text": "industry-specific CTA", "style": "primary", "size": "md"}}
      ]
    }},
    "sections": [
      {{"name": string, "layout": "boxed" | "full", "background": string, "spacing": {{"top": number, "bottom": number}}, "widgets": [...]}}
    ]
  }},
  "rationale": string,
  "ctaStrategy": string,
  "designDecisions": {{
    "layoutApproach": string,
    "colorStrategy": string,
    "typographyScale": string,
    "spacingSystem": string,
    "asymmetry": string
  }}
}}"""
