import asyncio

import pytest

from sitepolish import database, design_pipeline
from sitepolish.design_generator import DesignGenerationError
from sitepolish.design_pipeline import build_design_record, fetch_media_for_variations, run_design_generation


@pytest.fixture
def stored_project(fake_db, project_row):
    return asyncio.run(database.create_project(project_row))


@pytest.fixture
def no_stock_media(monkeypatch):
    async def fake_populate(industry, image_count=5, video_count=2, **kwargs):
        media = [{"type": "image", "url": f"https://img/{i}.jpg"} for i in range(image_count + 2)]
        media += [{"type": "video", "url": f"https://vid/{i}.mp4"} for i in range(video_count + 1)]
        return {"success": True, "media": media, "error": None}

    monkeypatch.setattr(design_pipeline, "auto_populate_media", fake_populate)


def _three(sample_variation):
    names = ["Conservative", "Balanced", "Bold"]
    return [{**sample_variation, "name": name} for name in names]


def test_design_record_fields(sample_variation, project_row):
    project_row["id"] = "p1"
    record = build_design_record(project_row, sample_variation, [])

    assert record["project_id"] == "p1"
    assert record["name"] == "Bold"
    assert record["cta_strategy"] == "Book a visit"
    assert record["screenshots"] == {}
    assert record["widget_structure"] is sample_variation["widgetStructure"]
    assert "elementor-location-header" in record["html_preview"]
    assert "--header-bg: #0a0e1a;" in record["css_code"]
    assert record["accessibility_score"] == 100
    assert record["distinctiveness_score"] == 100
    assert record["estimated_build_time"] == 40
    assert len(record["quality_strengths"]) == len(set(record["quality_strengths"]))
    assert record["quality_issues"] == []


def test_media_fetch_is_sliced_to_requirements(stored_project, sample_variation, no_stock_media):
    media = asyncio.run(fetch_media_for_variations(stored_project, [sample_variation]))

    assert [m["type"] for m in media] == ["image"], "One image widget, no video widgets"
    assert asyncio.run(database.get_project(stored_project["id"]))["media"] == media


def test_media_fetch_skipped_without_media_widgets(stored_project, monkeypatch):
    async def fail(*args, **kwargs):
        raise AssertionError("No media should be requested")

    monkeypatch.setattr(design_pipeline, "auto_populate_media", fail)
    stored_project["media"] = [{"type": "image", "url": "keep.jpg"}]
    variation = {"widgetStructure": {"sections": [{"widgets": [{"type": "heading"}]}]}}

    assert asyncio.run(fetch_media_for_variations(stored_project, [variation])) == stored_project["media"]


def test_media_fetch_failure_keeps_existing(stored_project, sample_variation, monkeypatch):
    async def empty(industry, **kwargs):
        return {"success": False, "media": [], "error": "No media found for this industry"}

    monkeypatch.setattr(design_pipeline, "auto_populate_media", empty)
    assert asyncio.run(fetch_media_for_variations(stored_project, [sample_variation])) == []


def test_generation_stores_designs_and_completes(stored_project, sample_variation, no_stock_media, monkeypatch):
    async def fake_generate(project):
        return _three(sample_variation)

    monkeypatch.setattr(design_pipeline, "generate_design_variations", fake_generate)
    designs = asyncio.run(run_design_generation(stored_project, screenshots=False))

    assert [d["name"] for d in designs] == ["Conservative", "Balanced", "Bold"]
    assert all(d["id"] for d in designs)
    project = asyncio.run(database.get_project(stored_project["id"]))
    assert project["status"] == "completed"
    assert project["error_message"] is None
    assert 'src="https://img/0.jpg"' in designs[0]["html_preview"]


def test_regenerate_replaces_previous_designs(stored_project, sample_variation, no_stock_media, monkeypatch):
    async def fake_generate(project):
        return _three(sample_variation)

    monkeypatch.setattr(design_pipeline, "generate_design_variations", fake_generate)
    asyncio.run(run_design_generation(stored_project, screenshots=False))
    asyncio.run(run_design_generation(stored_project, regenerate=True, screenshots=False))

    assert len(asyncio.run(database.get_project_designs(stored_project["id"]))) == 3


def test_generation_failure_marks_project_failed(stored_project, monkeypatch):
    async def broken(project):
        raise DesignGenerationError("Expected 3 variations, got 1")

    monkeypatch.setattr(design_pipeline, "generate_design_variations", broken)
    with pytest.raises(DesignGenerationError):
        asyncio.run(run_design_generation(stored_project, screenshots=False))

    project = asyncio.run(database.get_project(stored_project["id"]))
    assert project["status"] == "failed"
    assert project["error_message"] == "Expected 3 variations, got 1"
    assert asyncio.run(database.get_project_designs(stored_project["id"])) == []


def test_generation_timeout_marks_project_failed(stored_project, monkeypatch):
    monkeypatch.setenv("GENERATION_TIMEOUT", "0")

    async def slow(project):
        await asyncio.sleep(1)

    monkeypatch.setattr(design_pipeline, "generate_design_variations", slow)
    with pytest.raises(asyncio.TimeoutError):
        asyncio.run(run_design_generation(stored_project, screenshots=False))

    project = asyncio.run(database.get_project(stored_project["id"]))
    assert project["error_message"] == "Design generation timed out"


def test_screenshots_are_scheduled_with_project_viewports(stored_project, sample_variation, no_stock_media, monkeypatch):
    scheduled = {}

    async def fake_generate(project):
        return _three(sample_variation)

    monkeypatch.setattr(design_pipeline, "generate_design_variations", fake_generate)
    monkeypatch.setattr(design_pipeline, "schedule_screenshots",
                        lambda designs, viewports: scheduled.update(count=len(designs), viewports=viewports))
    asyncio.run(run_design_generation(stored_project))

    assert scheduled == {"count": 3, "viewports": ["desktop", "mobile-portrait"]}


def test_capture_design_screenshots_saves_on_design(fake_db, monkeypatch):
    from sitepolish import screenshots

    design = asyncio.run(database.save_design({"project_id": "p1", "name": "Bold", "html_preview": "<p>x</p>"}))
    seen = {}

    async def fake_generate(html, viewports):
        seen["html"] = html
        seen["viewports"] = viewports
        return {"desktop": "cG5n"}

    monkeypatch.setattr(screenshots, "generate_screenshots", fake_generate)
    shots = asyncio.run(design_pipeline.capture_design_screenshots(design))

    assert shots == {"desktop": "cG5n"}
    assert seen["viewports"] == design_pipeline.DEFAULT_VIEWPORTS
    assert "<p>x</p>" in seen["html"]
    assert asyncio.run(database.get_design(design["id"]))["screenshots"] == {"desktop": "cG5n"}


@pytest.mark.parametrize("background", ["navy", "hsl(222, 47%, 11%)"])
def test_design_record_accepts_css_color_headers(sample_variation, project_row, background):
    project_row["id"] = "p1"
    sample_variation["widgetStructure"]["globalHeader"]["backgroundColor"] = background

    record = build_design_record(project_row, sample_variation, [])

    assert f"background-color: {background}; color: #ffffff" in record["html_preview"]
    assert record["accessibility_score"] == 100


def test_design_record_survives_unreadable_header_color(sample_variation, project_row):
    project_row["id"] = "p1"
    sample_variation["widgetStructure"]["globalHeader"]["backgroundColor"] = "var(--brand)"

    record = build_design_record(project_row, sample_variation, [])

    assert record["accessibility_score"] == 100
    assert "elementor-location-header" in record["html_preview"]


def test_outer_timeout_during_media_fetch_marks_project_failed(stored_project, sample_variation, monkeypatch):
    async def fake_generate(project):
        return _three(sample_variation)

    async def slow_media(project, variations):
        await asyncio.sleep(1)

    monkeypatch.setattr(design_pipeline, "generate_design_variations", fake_generate)
    monkeypatch.setattr(design_pipeline, "fetch_media_for_variations", slow_media)

    with pytest.raises(asyncio.TimeoutError):
        asyncio.run(asyncio.wait_for(run_design_generation(stored_project, screenshots=False), timeout=0.1))

    project = asyncio.run(database.get_project(stored_project["id"]))
    assert project["status"] == "failed"
    assert project["error_message"] == "Design generation timed out"
