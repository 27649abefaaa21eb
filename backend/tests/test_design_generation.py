import asyncio
import json

import pytest

from sitepolish import design_generator
from sitepolish.design_generator import (
    DesignGenerationError,
    extract_company_name,
    generate_design_variations,
    load_reference_headers,
    parse_variations,
    reference_header_variations,
)
from sitepolish.design_prompts import build_header_generation_prompt, header_guidance
from sitepolish.design_scoring import (
    accessibility_score,
    distinctiveness_score,
    estimate_build_time,
    quality_issues,
    quality_strengths,
)
from sitepolish.design_validator import validate_design


def _variations_json(count=3, trailing_comma=False):
    items = [
        {"name": name, "widgetStructure": {"globalHeader": {"widgets": []}}}
        for name in ("Conservative", "Balanced", "Bold")[:count]
    ]
    text = json.dumps(items)
    if trailing_comma:
        text = text[:-1] + ",]"
    return text


# ---------------------------------------------------------------------------
# Company name / reference headers
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("scraped,url,expected", [
    ({"title": "Acme Dental | Family Dentistry"}, "https://acme.com", "Acme Dental"),
    ({"title": "Smith Law - Attorneys"}, "https://smith.com", "Smith Law"),
    ({"title": ""}, "https://www.brightsmile.co.uk/about", "Brightsmile"),
    (None, "", "COMPANY"),
])
def test_extract_company_name(scraped, url, expected):
    assert extract_company_name(scraped, url) == expected


def test_reference_variations(project_row):
    variations = reference_header_variations(project_row)

    assert [v["name"] for v in variations] == ["Conservative", "Balanced", "Bold"]
    backgrounds = [v["widgetStructure"]["globalHeader"]["backgroundColor"] for v in variations]
    assert backgrounds == ["#1a1d2e", "#0f1219", "#0a0e1a"]

    bold = variations[2]["widgetStructure"]["globalHeader"]
    assert bold["height"] == 80
    assert bold["widgets"][2]["customStyle"]["border"] == "2px solid #00e5ff"
    assert variations[0]["widgetStructure"]["globalHeader"]["widgets"][2]["customStyle"]["border"] != "2px solid #00e5ff"
    assert all(v["widgetStructure"]["sections"] == [] for v in variations)


def test_load_reference_headers_reads_existing_files(tmp_path):
    (tmp_path / "s1.png").write_bytes(b"\x89PNG fake")
    (tmp_path / "ignored.png").write_bytes(b"\x89PNG fake")
    blocks = load_reference_headers(str(tmp_path))
    assert len(blocks) == 1
    assert blocks[0]["source"]["media_type"] == "image/png"
    assert load_reference_headers("") == []


# ---------------------------------------------------------------------------
# Parsing Claude output
# ---------------------------------------------------------------------------

def test_parse_variations_from_fenced_text():
    text = "Here you go:\n```json\n" + _variations_json(trailing_comma=True) + "\n```"
    variations = parse_variations(text)
    assert len(variations) == 3
    assert variations[0]["widgetStructure"]["sections"] == []
    assert variations[1]["rationale"] == ""


def test_parse_variations_wrong_count():
    with pytest.raises(DesignGenerationError, match="Expected 3 variations, got 2"):
        parse_variations(_variations_json(count=2))


def test_parse_variations_without_array():
    with pytest.raises(DesignGenerationError):
        parse_variations("I cannot help with that.")


def test_parse_variations_invalid_json():
    with pytest.raises(DesignGenerationError, match="JSON parsing failed"):
        parse_variations('[{"name": "A"} {"name": "B"}]')


# ---------------------------------------------------------------------------
# generate_design_variations
# ---------------------------------------------------------------------------

def test_reference_mode_skips_claude(monkeypatch, project_row):
    monkeypatch.setenv("REFERENCE_HEADERS_ONLY", "true")

    async def fail(*args, **kwargs):
        raise AssertionError("Claude should not be called")

    monkeypatch.setattr(design_generator, "complete_text", fail)
    variations = asyncio.run(generate_design_variations(project_row))
    assert len(variations) == 3


def test_generation_calls_claude_with_prompt(monkeypatch, project_row):
    seen = {}

    async def fake_complete(system, content, max_tokens=4000, model=None):
        seen["system"] = system
        seen["content"] = content
        seen["max_tokens"] = max_tokens
        return _variations_json()

    monkeypatch.setattr(design_generator, "complete_text", fake_complete)
    variations = asyncio.run(generate_design_variations(project_row))

    assert [v["name"] for v in variations] == ["Conservative", "Balanced", "Bold"]
    assert seen["max_tokens"] == 8000
    assert "Acme Dental" in seen["content"][-1]["text"]


def test_generation_wraps_client_errors(monkeypatch, project_row):
    async def boom(*args, **kwargs):
        raise RuntimeError("overloaded")

    monkeypatch.setattr(design_generator, "complete_text", boom)
    with pytest.raises(DesignGenerationError, match="overloaded"):
        asyncio.run(generate_design_variations(project_row))


def test_generation_missing_key_propagates(monkeypatch, project_row):
    async def no_key(*args, **kwargs):
        raise ValueError("ANTHROPIC_API_KEY must be set in .env")

    monkeypatch.setattr(design_generator, "complete_text", no_key)
    with pytest.raises(ValueError):
        asyncio.run(generate_design_variations(project_row))


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------

def test_header_guidance_selection():
    assert header_guidance("dental-practice", "leadgen") != header_guidance(None)
    assert header_guidance("unknown-industry", "ecommerce") == header_guidance("ecommerce")
    assert header_guidance("unknown-industry", "weird") == header_guidance("unknown-industry", "leadgen")


def test_generation_prompt_mentions_company_and_logo(project_row):
    project_row["logo_url"] = "https://acme.com/logo.png"
    prompt = build_header_generation_prompt(project_row, "Acme Dental")
    assert "Acme Dental" in prompt
    assert "https://acme.com/logo.png" in prompt


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------

def test_accessibility_score(sample_variation):
    assert accessibility_score(sample_variation) == 100

    small_text = {
        "widgetStructure": {
            "globalHeader": {"backgroundColor": "#ffffff"},
            "sections": [{"widgets": [
                {"type": "text-editor", "fontSize": "14px"},
                {"type": "heading", "level": "h1", "fontSize": 28},
            ]}],
        },
    }
    # +10 for passing contrast, -10 small body text, -5 small h1
    assert accessibility_score(small_text) == 95

    no_header = {"widgetStructure": {"sections": [{"widgets": [{"type": "text-editor", "fontSize": 12}]}]}}
    assert accessibility_score(no_header) == 90


def test_distinctiveness_and_strengths(sample_variation):
    score = distinctiveness_score(sample_variation)
    assert score == 100
    strengths = quality_strengths(sample_variation, score)
    assert strengths == [
        "Highly distinctive design",
        "Effective use of asymmetric layouts",
        "Dynamic spacing creates visual interest",
    ]
    symmetric = {"designDecisions": {"asymmetry": "Symmetric balanced layout"}}
    assert distinctiveness_score(symmetric) == 80


def test_quality_issues_thresholds():
    assert quality_issues({}, 95) == []
    assert quality_issues({}, 70) == ["Some accessibility improvements needed"]
    assert len(quality_issues({}, 50)) == 2


def test_estimate_build_time(sample_variation):
    assert estimate_build_time(sample_variation["widgetStructure"]) == 15 + 5 * 5
    assert estimate_build_time({}) == 15


# ---------------------------------------------------------------------------
# Static validation
# ---------------------------------------------------------------------------

def test_distinctive_design_passes_validation(sample_variation):
    result = validate_design(sample_variation["widgetStructure"])

    assert len(result["checks"]) == 8
    assert sum(c["max_points"] for c in result["checks"]) == 100
    assert result["score"] >= 70
    assert result["generic_pattern_detected"] is False
    assert "Good use of asymmetric layouts" in result["strengths"]


def test_generic_design_is_flagged():
    generic = {
        "sections": [
            {"layout": "centered", "widgets": [{"type": "heading", "text": "Your trusted partner"}]},
            {"layout": "three-column", "widgets": [{"type": "button", "text": "Learn more"}]},
        ],
    }
    result = validate_design(generic)

    assert result["generic_pattern_detected"] is True
    assert result["score"] < 70
    assert any("generic phrases" in issue for issue in result["issues"])
    assert any("center everything" in issue for issue in result["issues"])
