"""
Design generation pipeline: variations -> media on demand -> preview HTML/CSS
and scores -> design records, with project status tracking and background
screenshot capture.
"""

import asyncio
import time

from sitepolish import database
from sitepolish.config import get_settings
from sitepolish.design_generator import generate_design_variations
from sitepolish.design_scoring import (
    accessibility_score,
    distinctiveness_score,
    estimate_build_time,
    quality_issues,
    quality_strengths,
)
from sitepolish.design_validator import validate_design
from sitepolish.media_analyzer import analyze_all_variations
from sitepolish.preview import build_css, build_preview_document, build_preview_html
from sitepolish.stock_media import auto_populate_media


DEFAULT_VIEWPORTS = ["desktop", "laptop", "tablet-portrait", "mobile-portrait"]

# Strong references to fire-and-forget screenshot tasks
_background_tasks = set()


async def fetch_media_for_variations(project: dict, variations: list) -> list:
    """
    Fetch only as many stock images/videos as the variations' widgets use.
    Keeps the project's existing media when nothing is needed or the fetch fails.
    """
    requirements = analyze_all_variations(variations)
    print(f"  [pipeline] Media needed: {requirements['images']} images, {requirements['videos']} videos")

    existing = project.get("media") or []
    if requirements["images"] == 0 and requirements["videos"] == 0:
        return existing

    result = await auto_populate_media(
        project.get("industry") or "general",
        image_count=max(requirements["images"], 1),
        video_count=requirements["videos"],
    )
    if not result["success"]:
        print(f"  [pipeline] Media fetch failed: {result['error']}")
        return existing

    images = [m for m in result["media"] if m["type"] == "image"][:requirements["images"]]
    videos = [m for m in result["media"] if m["type"] == "video"][:requirements["videos"]]
    media = images + videos
    await database.update_project(project["id"], {"media": media})
    print(f"  [pipeline] Fetched {len(images)} images and {len(videos)} videos")
    return media


def build_design_record(project: dict, variation: dict, media: list) -> dict:
    structure = variation.get("widgetStructure") or {}
    accessibility = accessibility_score(variation)
    distinctiveness = distinctiveness_score(variation)

    issues = quality_issues(variation, accessibility)
    strengths = quality_strengths(variation, distinctiveness)
    if structure.get("sections"):
        validation = validate_design(structure)
        if validation["generic_pattern_detected"]:
            issues.extend(validation["issues"])
        strengths.extend(s for s in validation["strengths"] if s not in strengths)

    return {
        "project_id": project["id"],
        "name": variation.get("name") or "Design",
        "description": variation.get("description") or "",
        "widget_structure": structure,
        "html_preview": build_preview_html(variation, project, media),
        "css_code": build_css(variation, project),
        "estimated_build_time": estimate_build_time(structure),
        "accessibility_score": accessibility,
        "distinctiveness_score": distinctiveness,
        "rationale": variation.get("rationale") or "",
        "cta_strategy": variation.get("ctaStrategy") or "",
        "screenshots": {},
        "quality_issues": issues,
        "quality_strengths": strengths,
    }


async def capture_design_screenshots(design: dict, viewports: list | None = None) -> dict:
    """Screenshot one stored design and save the result on its record."""
    from sitepolish.screenshots import generate_screenshots

    shots = await generate_screenshots(build_preview_document(design), viewports or DEFAULT_VIEWPORTS)
    await database.update_design(design["id"], {"screenshots": shots})
    return shots


async def _capture_all(designs: list, viewports: list):
    for design in designs:
        try:
            await capture_design_screenshots(design, viewports)
        except Exception as e:
            print(f"  [pipeline] Screenshots failed for design {design.get('id')}: {e}")


def schedule_screenshots(designs: list, viewports: list):
    task = asyncio.create_task(_capture_all(designs, viewports))
    _background_tasks.add(task)
    task.add_done_callback(_background_tasks.discard)


async def run_design_generation(project: dict, regenerate: bool = False, screenshots: bool = True) -> list:
    """
    Generate and store three designs for a configured project.
    Status goes generating -> completed, or failed with error_message on any error
    (the error is re-raised for the caller to map).
    """
    settings = get_settings()
    project_id = project["id"]
    start = time.time()

    if regenerate:
        await database.delete_project_designs(project_id)
        print(f"  [pipeline] Deleted existing designs for {project_id}")

    await database.set_project_status(project_id, "generating")

    try:
        variations = await asyncio.wait_for(
            generate_design_variations(project),
            timeout=settings.generation_timeout,
        )
        media = await fetch_media_for_variations(project, variations)

        designs = []
        for variation in variations:
            record = build_design_record(project, variation, media)
            designs.append(await database.save_design(record))

        await database.set_project_status(project_id, "completed")
    except (asyncio.TimeoutError, asyncio.CancelledError):
        # CancelledError comes from the route-level timeout around this call
        await database.set_project_status(project_id, "failed", "Design generation timed out")
        raise
    except Exception as e:
        await database.set_project_status(project_id, "failed", str(e))
        raise

    print(f"  [pipeline] {len(designs)} designs for {project_id} in {time.time() - start:.1f}s")

    if screenshots:
        schedule_screenshots(designs, project.get("viewports") or DEFAULT_VIEWPORTS)
    return designs
