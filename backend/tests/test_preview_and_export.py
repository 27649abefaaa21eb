import json

from sitepolish.elementor_exporter import convert_widget, export_filename, export_to_elementor, to_json
from sitepolish.pdf_report import build_proposal_html, score_color
from sitepolish.preview import build_css, build_preview_document, build_preview_html


# ---------------------------------------------------------------------------
# Preview
# ---------------------------------------------------------------------------

def test_preview_html_has_header_then_sections(sample_variation, project_row):
    media = [{"type": "image", "url": "https://img/hero.jpg"}]
    html = build_preview_html(sample_variation, project_row, media)

    assert html.index("elementor-location-header") < html.index('id="hero"') < html.index('id="services"')
    assert ">Acme Dental</span>" in html, "Company name comes from the page title"
    assert 'src="https://img/hero.jpg"' in html


def test_preview_html_uses_project_media_by_default(sample_variation, project_row):
    project_row["media"] = [{"type": "image", "url": "https://img/stored.jpg"}]
    html = build_preview_html(sample_variation, project_row)
    assert "https://img/stored.jpg" in html


def test_css_variables_from_project(sample_variation, project_row):
    css = build_css(sample_variation, project_row)
    assert "--primary-color: #1e3a8a;" in css
    assert "--secondary-color: #f59e0b;" in css
    assert "--primary-font: Inter;" in css
    assert "--header-bg: #0a0e1a;" in css
    assert "--header-text: #ffffff;" in css


def test_css_outline_header_button_uses_border_color(sample_variation, project_row):
    css = build_css(sample_variation, project_row)
    assert "border: 2px solid #00e5ff !important;" in css
    assert "background-color: #00e5ff !important;" in css, "Hover fills with the outline color"


def test_css_defaults_without_configuration():
    css = build_css({"name": "Plain", "widgetStructure": {}}, {})
    assert "--primary-color: #007bff;" in css
    assert "--header-bg: #ffffff;" in css
    assert "--button-bg: #007bff;" in css


def test_preview_document_wraps_stored_design():
    doc = build_preview_document({"name": "Bold <3", "css_code": ".x { color: red; }", "html_preview": "<p>Hi</p>"})
    assert doc.startswith("<!DOCTYPE html>")
    assert "<title>Bold &lt;3 - Design Preview</title>" in doc
    assert ".x { color: red; }" in doc
    assert "<body>\n<p>Hi</p>\n</body>" in doc
    assert "font-awesome" in doc


# ---------------------------------------------------------------------------
# Elementor export
# ---------------------------------------------------------------------------

def test_export_document_shape(sample_variation):
    design = {"name": "Bold", "widget_structure": sample_variation["widgetStructure"]}
    doc = export_to_elementor(design)

    assert doc["version"] == "0.4"
    assert doc["type"] == "page"
    assert doc["page_settings"] == {"template": "elementor_canvas"}
    assert len(doc["content"]) == 3, "Header container plus two sections"

    header = doc["content"][0]
    assert header["settings"]["content_width"] == "full"
    assert header["settings"]["background_color"] == "#0a0e1a"
    assert [el["widgetType"] for el in header["elements"]] == ["theme-site-logo", "nav-menu", "button"]

    hero = doc["content"][1]
    assert hero["elType"] == "container"
    assert hero["settings"]["padding"]["top"] == 96
    assert hero["settings"]["background_background"] == "gradient"
    assert [el["widgetType"] for el in hero["elements"]] == ["heading", "text-editor", "image"]


def test_export_accepts_camel_case_structure_and_footer():
    doc = export_to_elementor({
        "name": "X",
        "widgetStructure": {
            "sections": [{"widgets": [{"type": "spacer", "height": 20}]}],
            "globalFooter": {"widgets": [{"type": "text-editor", "text": "© 2026"}]},
        },
    })
    assert doc["content"][-1]["elements"][0]["settings"]["editor"] == "© 2026"
    assert doc["content"][0]["elements"][0]["settings"]["space"] == {"size": 20, "unit": "px"}


def test_convert_widget_mappings():
    heading = convert_widget({"type": "heading", "text": "Hi", "level": "h1", "id": "hero-title"})
    assert heading["settings"] == {"_element_id": "hero-title", "title": "Hi", "header_size": "h1", "align": "left"}
    assert heading["elType"] == "widget"

    assert convert_widget({"type": "alert", "alertType": "danger"})["settings"]["alert_type"] == "danger"
    assert convert_widget({"type": "search", "style": "icon"})["widgetType"] == "search-form"
    assert convert_widget({"type": "cart-icon"})["widgetType"] == "woocommerce-menu-cart"
    assert convert_widget({"type": "price-table", "featured": True})["settings"]["featured"] == "yes"
    assert convert_widget({"type": "video", "url": "https://youtube.com/watch?v=1"})["settings"]["video_type"] == "youtube"

    header_box = convert_widget({"type": "icon-box", "isHeader": True, "icon": "email", "text": "hi@x.com"})
    assert header_box["settings"]["selected_icon"]["value"] == "fas fa-email"

    assert convert_widget({"type": "global-header"}) is None
    assert convert_widget({"no": "type"}) is None
    assert convert_widget({"type": "lottie"})["widgetType"] == "lottie"


def test_export_filename_and_json():
    name = export_filename({"name": "Bold Modern"}, {"url": "https://example.com/about"})
    assert name == "Bold-Modern-Elementor-example.com-about.json"
    assert json.loads(to_json({"a": 1})) == {"a": 1}


# ---------------------------------------------------------------------------
# PDF proposal
# ---------------------------------------------------------------------------

def test_score_color_bands():
    assert score_color(95) == "rgb(34, 197, 94)"
    assert score_color(65) == "rgb(234, 179, 8)"
    assert score_color(10) == "rgb(239, 68, 68)"


def test_proposal_html_sections():
    design = {
        "name": "Balanced",
        "description": "Calm & clear",
        "accessibility_score": 92,
        "distinctiveness_score": 58,
        "estimated_build_time": 40,
        "rationale": "Trust first",
        "cta_strategy": "Book online",
        "quality_strengths": ["Highly distinctive design"],
        "quality_issues": [],
        "screenshots": {"desktop": "aGVsbG8=", "mobile-portrait": ""},
    }
    html = build_proposal_html(design, {"url": "https://acme.com", "industry": "dental-practice", "site_type": "leadgen"})

    assert "Website Design Proposal" in html
    assert "Calm &amp; clear" in html
    assert "Accessibility Score: 92/100" in html
    assert "width: 58%; background: rgb(239, 68, 68)" in html
    assert "Estimated Build Time: 40 minutes" in html
    assert "Quality Strengths" in html
    assert "Areas for Improvement" not in html
    assert 'src="data:image/png;base64,aGVsbG8="' in html
    assert "Mobile Portrait" in html and "(Screenshot unavailable)" in html
