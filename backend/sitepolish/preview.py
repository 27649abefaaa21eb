"""
Preview rendering: per-variation CSS, the HTML body (global header followed by
the section containers), and the standalone preview document served by
GET /designs/{id}/preview.
"""

import re
from html import escape

from sitepolish.colors import get_button_colors, get_contrast_safe_text_color, get_header_text_color
from sitepolish.elementor_html import MediaPicker, generate_section_html
from sitepolish.header_widgets import generate_global_header_html


FONT_AWESOME_CSS = "https://cdnjs.cloudflare.com/ajax/libs/font-awesome/6.4.0/css/all.min.css"

DEFAULT_PRIMARY_FONT = "'Inter', system-ui, -apple-system, sans-serif"
DEFAULT_SECONDARY_FONT = "Georgia, serif"
DEFAULT_OUTLINE_COLOR = "#00bcd4"

BASE_CSS = """/* Elementor Base Styles */
* { box-sizing: border-box; -webkit-font-smoothing: antialiased; -moz-osx-font-smoothing: grayscale; }
body {
  margin: 0;
  padding: 0;
  font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Oxygen, Ubuntu, Cantarell, sans-serif;
  line-height: 1.6;
}

/* Containers */
.elementor-element { position: relative; }
.e-con { display: flex; width: 100%; }
.e-con-boxed { max-width: 1200px; margin: 0 auto; }
.e-con-full { width: 100%; }
.e-con-inner { width: 100%; display: flex; flex-direction: column; }
.e-flex { display: flex; }
.elementor-location-header, .elementor-location-footer, .elementor-section-wrap { width: 100%; }

/* Widgets */
.elementor-widget { position: relative; margin-bottom: 20px; }
.elementor-widget-container { width: 100%; }
.elementor-heading-title { margin: 0; padding: 0; line-height: 1.2; }

.elementor-button-wrapper { display: inline-block; }
.elementor-button {
  display: inline-flex;
  align-items: center;
  justify-content: center;
  padding: 12px 24px;
  border-radius: 4px;
  text-decoration: none;
  transition: all 0.3s;
  font-weight: 600;
}
.elementor-button-content-wrapper { display: flex; align-items: center; gap: 8px; }
.elementor-size-xs { padding: 8px 16px; font-size: 12px; }
.elementor-size-sm { padding: 12px 24px; font-size: 14px; }
.elementor-size-md { padding: 14px 28px; font-size: 16px; }
.elementor-size-lg { padding: 16px 32px; font-size: 18px; }
.elementor-size-xl { padding: 20px 40px; font-size: 20px; }

.elementor-divider { padding: 15px 0; }
.elementor-divider-separator { display: block; border-top: var(--divider-border-width, 1px) var(--divider-border-style, solid) var(--divider-color, #ddd); }
.elementor-spacer-inner { display: block; }
.elementor-icon { display: inline-flex; align-items: center; justify-content: center; font-size: 50px; }

.elementor-icon-box-wrapper { display: flex; gap: 15px; align-items: flex-start; }
.elementor-icon-box-icon { flex-shrink: 0; }
.elementor-icon-box-content { flex-grow: 1; }
.elementor-icon-box-title { margin: 0 0 10px; }
.elementor-icon-box-description { margin: 0; }

.elementor-image-box-wrapper { text-align: center; }
.elementor-image-box-img { margin: 0 0 20px; }
.elementor-image-box-img img { width: 100%; height: auto; display: block; }

.elementor-testimonial-wrapper { padding: 30px; background: #f9f9f9; border-radius: 8px; }
.elementor-testimonial-content { margin: 0 0 20px; font-style: italic; line-height: 1.6; }
.elementor-testimonial-meta { display: flex; align-items: center; gap: 15px; }

.elementor-star-rating { color: #ffc107; font-size: 24px; }
.elementor-social-icons-wrapper { display: flex; gap: 10px; }
.elementor-social-icon {
  display: inline-flex;
  align-items: center;
  justify-content: center;
  width: 40px;
  height: 40px;
  border-radius: 50%;
  text-decoration: none;
  transition: all 0.3s;
}

.elementor-counter { text-align: center; }
.elementor-counter-number { font-size: 48px; font-weight: 700; display: block; }
.elementor-counter-title { margin-top: 10px; font-size: 16px; }

.elementor-progress-wrapper { margin: 20px 0; }
.elementor-progress-bar { background: #e0e0e0; border-radius: 10px; height: 20px; position: relative; margin-top: 10px; }
.elementor-progress-bar-fill { height: 100%; border-radius: 10px; background: var(--primary-color, #007bff); transition: width 2s ease; }
.elementor-progress-text, .elementor-progress-percentage { font-size: 14px; font-weight: 600; }

.elementor-accordion { border: 1px solid #e0e0e0; border-radius: 8px; }
.elementor-accordion-item { border-bottom: 1px solid #e0e0e0; }
.elementor-accordion-item:last-child { border-bottom: none; }
.elementor-tab-title { padding: 15px 20px; cursor: pointer; background: white; transition: background 0.3s; }
.elementor-tab-title:hover, .elementor-tab-title.elementor-active { background: #f9f9f9; }
.elementor-tab-content { padding: 0 20px; max-height: 0; overflow: hidden; transition: max-height 0.3s ease; }
.elementor-tab-content.elementor-active { padding: 15px 20px; max-height: 1000px; }
.elementor-tabs-wrapper { display: flex; border-bottom: 2px solid #e0e0e0; gap: 5px; }
.elementor-tabs .elementor-tab-title { border: none; border-bottom: 2px solid transparent; padding: 12px 24px; }
.elementor-tabs .elementor-tab-title.elementor-active { border-bottom-color: currentColor; }

.elementor-alert { padding: 15px 20px; border-radius: 4px; border: 1px solid; }
.elementor-alert-info { background: #d1ecf1; border-color: #0dcaf0; color: #0c5460; }
.elementor-alert-warning { background: #fff3cd; border-color: #ffc107; color: #856404; }
.elementor-alert-success { background: #d4edda; border-color: #28a745; color: #155724; }
.elementor-alert-danger { background: #f8d7da; border-color: #dc3545; color: #721c24; }

.elementor-cta { position: relative; padding: 60px 40px; text-align: center; border-radius: 12px; overflow: hidden; }
.elementor-cta__bg { position: absolute; inset: 0; background-size: cover; background-position: center; opacity: 0.35; }
.elementor-cta__content { position: relative; }
.elementor-cta__title { margin: 0 0 15px; font-size: 36px; }
.elementor-cta__description { margin: 0 0 30px; font-size: 18px; }
.elementor-cta__button { display: inline-block; }

.elementor-hero-banner { position: relative; min-height: 600px; display: flex; align-items: center; justify-content: center; background-size: cover; background-position: center; }
.elementor-hero-banner__overlay { position: absolute; inset: 0; background: rgba(0, 0, 0, 0.4); }
.elementor-hero-banner__content { position: relative; z-index: 1; text-align: center; color: white; max-width: 800px; padding: 40px; }
.elementor-hero-banner__content .elementor-heading-title { font-size: 56px; font-weight: 700; margin: 0 0 20px; }
.elementor-hero-banner__subtitle { font-size: 24px; margin: 0 0 40px; opacity: 0.95; }

.elementor-gallery { display: grid; grid-template-columns: repeat(auto-fill, minmax(250px, 1fr)); gap: 20px; }
.elementor-gallery-item { position: relative; margin: 0; overflow: hidden; border-radius: 12px; box-shadow: 0 4px 12px rgba(0, 0, 0, 0.08); transition: all 0.3s cubic-bezier(0.4, 0, 0.2, 1); }
.elementor-gallery-item:hover { transform: translateY(-8px); box-shadow: 0 12px 28px rgba(0, 0, 0, 0.15); }
.elementor-gallery-item-image { width: 100%; height: 250px; object-fit: cover; display: block; transition: transform 0.3s ease; }
.elementor-gallery-item:hover .elementor-gallery-item-image { transform: scale(1.05); }

.elementor-icon-list-items { list-style: none; padding: 0; margin: 0; }
.elementor-icon-list-item { display: flex; align-items: center; gap: 12px; padding: 12px 0; transition: all 0.2s ease; }
.elementor-icon-list-icon { flex-shrink: 0; width: 24px; height: 24px; display: flex; align-items: center; justify-content: center; color: var(--primary-color, #007bff); }
.elementor-icon-list-text { font-size: 16px; line-height: 1.6; }

.elementor-form { display: flex; flex-direction: column; gap: 20px; }
.elementor-field-group { display: flex; flex-direction: column; gap: 8px; }
.elementor-field-label { font-size: 14px; font-weight: 600; color: #333; }
.elementor-field-group input, .elementor-field-group textarea { padding: 14px 16px; border: 2px solid #e0e0e0; border-radius: 8px; font-size: 16px; background: white; }
.elementor-field-group textarea { resize: vertical; min-height: 120px; }

.elementor-price-table { background: white; border-radius: 16px; padding: 40px 32px; text-align: center; border: 2px solid #e0e0e0; position: relative; overflow: hidden; box-shadow: 0 4px 12px rgba(0, 0, 0, 0.05); }
.elementor-price-table__ribbon { position: absolute; top: 20px; right: -35px; background: var(--primary-color, #007bff); color: white; padding: 6px 40px; transform: rotate(45deg); font-size: 12px; font-weight: 700; text-transform: uppercase; }
.elementor-price-table__heading { font-size: 24px; margin: 0 0 24px; color: #333; }
.elementor-price-table__price { font-size: 48px; font-weight: 700; color: var(--primary-color, #007bff); margin: 24px 0; }
.elementor-price-table__period { font-size: 18px; font-weight: 400; color: #666; }
.elementor-price-table__features-list { list-style: none; padding: 0; margin: 32px 0; }
.elementor-price-table__feature { padding: 12px 0; border-bottom: 1px solid #f0f0f0; }
.elementor-price-table__button { width: 100%; background: var(--primary-color, #007bff); color: white; }

.elementor-headline { font-size: 48px; font-weight: 700; line-height: 1.2; display: flex; flex-wrap: wrap; gap: 12px; align-items: center; }
.elementor-headline-dynamic-wrapper { position: relative; overflow: hidden; }
.elementor-headline-dynamic-text { color: var(--primary-color, #007bff); display: inline-block; animation: fadeInUp 0.6s ease; }
@keyframes fadeInUp {
  from { opacity: 0; transform: translateY(20px); }
  to { opacity: 1; transform: translateY(0); }
}

/* Header widgets */
.elementor-nav-menu { display: flex; list-style: none; margin: 0; padding: 0; }
.elementor-nav-menu-link { text-decoration: none; }
.elementor-search-icon { background: transparent; border: none; cursor: pointer; }
.elementor-cart-icon-link { position: relative; display: inline-flex; }
.elementor-cart-count { position: absolute; top: -6px; right: -8px; font-size: 11px; }
.elementor-location-header .elementor-widget { margin-bottom: 0; }
"""


def _palette(project: dict) -> list:
    return ((project or {}).get("color_scheme") or {}).get("colors") or []


def _outline_button_color(header_widgets: list) -> str | None:
    """Border color of the first outline-style header button, if any."""
    for widget in header_widgets:
        if widget.get("type") == "button" and widget.get("style") == "outline":
            border = (widget.get("customStyle") or {}).get("border") or ""
            match = re.search(r"#[0-9a-fA-F]{6}|#[0-9a-fA-F]{3}", border)
            return match.group(0) if match else DEFAULT_OUTLINE_COLOR
    return None


def build_css(variation: dict, project: dict) -> str:
    """Design CSS: theme variables, contrast-safe header overrides, responsive rules."""
    colors = _palette(project)
    fonts = (project or {}).get("fonts") or {}
    structure = variation.get("widgetStructure") or {}
    header = structure.get("globalHeader") or {}

    header_bg = header.get("backgroundColor") or "#ffffff"
    header_text = get_header_text_color(header_bg)
    body_bg = "#ffffff"
    body_text = get_contrast_safe_text_color(body_bg)

    outline_color = _outline_button_color(header.get("widgets") or [])
    if outline_color:
        button = {"background": "transparent", "text": header_text}
        header_button_rules = (
            "  background-color: transparent !important;\n"
            "  color: var(--header-text) !important;\n"
            f"  border: 2px solid {outline_color} !important;\n"
            "  border-radius: 24px !important;\n"
            "  padding: 10px 28px !important;\n"
            "  transition: all 0.3s ease !important;\n"
        )
        hover_rules = (
            ".elementor-location-header .elementor-button:hover {\n"
            f"  background-color: {outline_color} !important;\n"
            "  color: #ffffff !important;\n"
            "  transform: translateY(-2px);\n"
            "}\n"
        )
    else:
        button = get_button_colors(colors[0] if colors else "#007bff")
        header_button_rules = (
            "  background-color: var(--button-bg) !important;\n"
            "  color: var(--button-text) !important;\n"
        )
        hover_rules = ""

    return f"""/* {variation.get("name", "Design")} Design - Generated CSS with WCAG AA Contrast */

:root {{
  --primary-color: {colors[0] if len(colors) > 0 else "#007bff"};
  --secondary-color: {colors[1] if len(colors) > 1 else "#6c757d"};
  --accent-color: {colors[2] if len(colors) > 2 else "#28a745"};
  --primary-font: {fonts.get("primary") or DEFAULT_PRIMARY_FONT};
  --secondary-font: {fonts.get("secondary") or DEFAULT_SECONDARY_FONT};
  --header-bg: {header_bg};
  --header-text: {header_text};
  --body-bg: {body_bg};
  --body-text: {body_text};
  --button-bg: {button["background"]};
  --button-text: {button["text"]};
}}

body {{
  font-family: var(--primary-font);
  color: var(--body-text);
  margin: 0;
  padding: 0;
  line-height: 1.6;
  background: var(--body-bg);
}}

h1, h2, h3, h4, h5, h6 {{
  font-family: var(--primary-font);
  font-weight: 700;
  line-height: 1.2;
  color: inherit;
}}

a {{ color: var(--primary-color); transition: opacity 0.2s ease; }}
a:hover {{ opacity: 0.8; }}
img {{ max-width: 100%; height: auto; display: block; }}

.elementor-button {{ background-color: var(--button-bg); color: var(--button-text); }}

.elementor-location-header {{
  background-color: var(--header-bg) !important;
  color: var(--header-text) !important;
}}

.elementor-location-header * {{
  color: var(--header-text) !important;
}}

.elementor-location-header .elementor-site-logo-placeholder {{
  background: transparent !important;
  color: var(--header-text) !important;
  font-size: 20px !important;
  font-weight: 700 !important;
  text-transform: uppercase !important;
  letter-spacing: 1px !important;
}}

.elementor-location-header .elementor-nav-menu-link {{
  color: var(--header-text) !important;
  font-size: 15px !important;
  font-weight: 400 !important;
  padding: 8px 16px !important;
}}

.elementor-location-header .dt-nav-menu-horizontal {{
  gap: 32px !important;
}}

.elementor-location-header .elementor-button {{
{header_button_rules}}}

{hover_rules}
.elementor-location-header .elementor-search-icon,
.elementor-location-header .elementor-cart-icon-link,
.elementor-location-header .header-icon-box-link,
.elementor-location-header .header-icon-box-text {{
  color: var(--header-text) !important;
}}

@media (max-width: 768px) {{
  body {{ font-size: 14px; }}
  h1 {{ font-size: 32px !important; }}
  h2 {{ font-size: 28px !important; }}
}}
"""


def build_preview_html(variation: dict, project: dict, media: list | None = None) -> str:
    """Global header followed by every section, media assigned round-robin."""
    from sitepolish.design_generator import extract_company_name

    project = project or {}
    picker = MediaPicker(media if media is not None else project.get("media"))
    structure = variation.get("widgetStructure") or {}
    company = extract_company_name(project.get("scraped_content") or {}, project.get("url") or "")

    parts = []
    header = structure.get("globalHeader")
    if header:
        parts.append(generate_global_header_html(header, company, project.get("color_scheme"), picker))

    for index, section in enumerate(structure.get("sections") or []):
        if isinstance(section, dict):
            parts.append(generate_section_html(section, index, picker))

    return "\n".join(parts)


def build_preview_document(design: dict) -> str:
    """Full standalone HTML page for a stored design record."""
    name = escape(design.get("name") or "Design")
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{name} - Design Preview</title>
  <link rel="stylesheet" href="{FONT_AWESOME_CSS}">
  <style>
{BASE_CSS}
/* Custom Design CSS */
{design.get("css_code") or ""}
  </style>
</head>
<body>
{design.get("html_preview") or ""}
</body>
</html>"""
