from contextlib import asynccontextmanager

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, Response
from pydantic import BaseModel
import asyncio
import base64


@asynccontextmanager
async def lifespan(app: FastAPI):
    from sitepolish.config import get_settings
    settings = get_settings()
    if settings.reference_headers_only:
        print("[startup] Reference header mode: design generation will not call Claude")
    if not settings.supabase_url or not settings.supabase_key:
        print("[startup] SUPABASE_URL / SUPABASE_KEY not set, database routes will fail")
    yield


app = FastAPI(title="SitePolish API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

class ScrapeRequest(BaseModel):
    url: str


class ProjectUpdate(BaseModel):
    site_type: str | None = None
    industry: str | None = None
    viewports: list[str] | None = None
    color_scheme: dict | None = None
    fonts: dict | None = None
    layout_widgets: list | None = None
    video_config: dict | None = None
    competitors: list | None = None
    logo_url: str | None = None
    logo_colors: list | None = None
    media: list | None = None
    global_header_config: dict | None = None


class GenerateRequest(BaseModel):
    project_id: str


class ApproveRequest(BaseModel):
    approved_by: str | None = None


class ScreenshotRequest(BaseModel):
    viewports: list[str] | None = None


class HarmonizeRequest(BaseModel):
    base_color: str
    harmony: str = "complementary"


class CompetitorRequest(BaseModel):
    urls: list[str]
    project_id: str | None = None
    industry: str | None = None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _require_project(project_id: str) -> dict:
    from sitepolish.database import get_project
    project = await get_project(project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


async def _require_design(design_id: str) -> dict:
    from sitepolish.database import get_design
    design = await get_design(design_id)
    if not design:
        raise HTTPException(status_code=404, detail="Design not found")
    return design


async def _logo_colors(logo_url: str | None) -> list:
    if not logo_url:
        return []
    from sitepolish.image_utils import extract_logo_colors
    try:
        return await extract_logo_colors(logo_url)
    except Exception as e:
        print(f"  [scrape] Logo color extraction failed: {e}")
        return []


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@app.get("/")
def root():
    return {"message": "SitePolish backend is running"}


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.post("/scrape")
async def scrape_endpoint(request: ScrapeRequest):
    """Scrape and classify a site, then create a project for it."""
    url = request.url.strip()
    if not url.startswith(("http://", "https://")):
        raise HTTPException(status_code=400, detail="URL must start with http:// or https://")

    try:
        from sitepolish.hybrid_scraper import scrape_website
        from sitepolish.site_classifier import classify_site
        from sitepolish.stock_media import auto_populate_media
        from sitepolish.database import create_project

        result = await scrape_website(url)
        if not result["success"]:
            if result["needs_manual_upload"]:
                raise HTTPException(status_code=403, detail={
                    "message": "This site blocks automated access. Upload a screenshot instead.",
                    "error": result["error"],
                    "needs_manual_upload": True,
                })
            raise HTTPException(status_code=500, detail=f"Scrape failed: {result['error']}")

        scraped = result["data"]
        classification = await classify_site(scraped, url)
        logo_url = (scraped.get("logo") or {}).get("src")
        logo_colors = await _logo_colors(logo_url)
        media = await auto_populate_media(classification["industry"])

        project = await create_project({
            "url": url,
            "site_type": classification["site_type"],
            "industry": classification["industry"],
            "industry_design_guidance": classification["industry_design_guidance"],
            "scraped_content": scraped,
            "logo_url": logo_url,
            "logo_colors": logo_colors,
            "media": media["media"],
        })
        print(f"  [scrape] Project {project.get('id')} created via {result['method']}")

        return {
            "project_id": project.get("id"),
            "project": project,
            "method": result["method"],
            "classification": classification,
        }

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Scrape failed: {str(e)}")


@app.post("/scrape/screenshot")
async def scrape_screenshot_endpoint(url: str = Form(...), file: UploadFile = File(...)):
    """Manual fallback: analyze an uploaded screenshot of a site that blocks scraping."""
    url = url.strip()
    if not url.startswith(("http://", "https://")):
        raise HTTPException(status_code=400, detail="URL must start with http:// or https://")
    if not (file.content_type or "").startswith("image/"):
        raise HTTPException(status_code=400, detail="Upload must be an image")

    try:
        from sitepolish.screenshot_analysis import analyze_screenshot
        from sitepolish.site_classifier import classify_site
        from sitepolish.database import create_project

        image_b64 = base64.b64encode(await file.read()).decode()
        result = await analyze_screenshot(image_b64, url)
        scraped = result["scraped"]
        classification = await classify_site(scraped, url)

        project = await create_project({
            "url": url,
            "site_type": result["analysis"].get("siteType") or classification["site_type"],
            "industry": classification["industry"],
            "industry_design_guidance": classification["industry_design_guidance"],
            "scraped_content": scraped,
            "screenshot": image_b64,
        })
        return {
            "project_id": project.get("id"),
            "project": project,
            "method": "screenshot",
            "analysis": result["analysis"],
        }

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Screenshot analysis failed: {str(e)}")


@app.get("/projects")
async def list_projects_endpoint(limit: int = 20):
    """List recent projects from Supabase."""
    try:
        from sitepolish.database import list_projects
        projects = await list_projects(limit=min(limit, 50))
        return {"projects": projects}
    except Exception as e:
        return {"projects": [], "error": str(e)}


@app.get("/projects/{project_id}")
async def get_project_endpoint(project_id: str):
    try:
        return await _require_project(project_id)
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.patch("/projects/{project_id}")
async def update_project_endpoint(project_id: str, request: ProjectUpdate):
    """Save the configuration chosen before generation (viewports, colors, fonts, ...)."""
    changes = request.model_dump(exclude_unset=True)
    if not changes:
        raise HTTPException(status_code=400, detail="No fields to update")

    try:
        from sitepolish.database import update_project
        await _require_project(project_id)
        return await update_project(project_id, changes)
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/projects/{project_id}/designs")
async def list_designs_endpoint(project_id: str):
    try:
        from sitepolish.database import get_project_designs
        designs = await get_project_designs(project_id)
        return {"designs": designs}
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


async def _generate(project_id: str, regenerate: bool) -> dict:
    from sitepolish.design_pipeline import run_design_generation
    from sitepolish.config import get_settings

    project = await _require_project(project_id)
    try:
        designs = await asyncio.wait_for(
            run_design_generation(project, regenerate=regenerate),
            timeout=get_settings().generation_timeout + 60,
        )
        return {"project_id": project_id, "designs": designs}
    except asyncio.TimeoutError:
        raise HTTPException(status_code=504, detail="Design generation timed out. Try again.")
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Design generation failed: {str(e)}")


@app.post("/designs/generate")
async def generate_designs_endpoint(request: GenerateRequest):
    """Generate three design variations for a configured project."""
    return await _generate(request.project_id, regenerate=False)


@app.post("/designs/regenerate")
async def regenerate_designs_endpoint(request: GenerateRequest):
    """Delete a project's designs and generate three new ones."""
    return await _generate(request.project_id, regenerate=True)


@app.post("/designs/{design_id}/approve")
async def approve_design_endpoint(design_id: str, request: ApproveRequest | None = None):
    try:
        from sitepolish.database import approve_design
        design = await _require_design(design_id)
        approved_by = request.approved_by if request else None
        return await approve_design(design_id, design["project_id"], approved_by)
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/designs/{design_id}/screenshots")
async def design_screenshots_endpoint(design_id: str, request: ScreenshotRequest | None = None):
    """Capture (or recapture) screenshots of a design's preview."""
    try:
        from sitepolish.design_pipeline import capture_design_screenshots
        design = await _require_design(design_id)
        viewports = request.viewports if request else None
        if not viewports:
            project = await _require_project(design["project_id"])
            viewports = project.get("viewports")
        screenshots = await capture_design_screenshots(design, viewports)
        return {"design_id": design_id, "screenshots": screenshots}
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Screenshot capture failed: {str(e)}")


@app.get("/designs/{design_id}/thumbnail")
async def design_thumbnail_endpoint(design_id: str):
    """Quick desktop-viewport screenshot, not saved on the design."""
    try:
        from sitepolish.preview import build_preview_document
        from sitepolish.screenshots import generate_preview_screenshot
        design = await _require_design(design_id)
        screenshot = await generate_preview_screenshot(build_preview_document(design))
        return {"design_id": design_id, "screenshot": screenshot}
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Screenshot capture failed: {str(e)}")


@app.get("/designs/{design_id}/preview", response_class=HTMLResponse)
async def preview_design_endpoint(design_id: str):
    """Full preview document for a design."""
    try:
        from sitepolish.preview import build_preview_document
        design = await _require_design(design_id)
        return HTMLResponse(
            content=build_preview_document(design),
            headers={"Cache-Control": "public, max-age=3600"},
        )
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/designs/{design_id}/export/elementor")
async def export_elementor_endpoint(design_id: str):
    try:
        from sitepolish.elementor_exporter import export_filename, export_to_elementor, to_json
        from sitepolish.database import get_project
        design = await _require_design(design_id)
        project = await get_project(design["project_id"]) or {}
        filename = export_filename(design, project)
        return Response(
            content=to_json(export_to_elementor(design)),
            media_type="application/json",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Export failed: {str(e)}")


@app.get("/designs/{design_id}/export/pdf")
async def export_pdf_endpoint(design_id: str):
    try:
        from sitepolish.pdf_report import generate_design_pdf
        from sitepolish.database import get_project
        design = await _require_design(design_id)
        project = await get_project(design["project_id"]) or {}
        pdf = await generate_design_pdf(design, project)
        filename = f"{(design.get('name') or 'Design').replace(' ', '-')}-Proposal.pdf"
        return Response(
            content=pdf,
            media_type="application/pdf",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"PDF export failed: {str(e)}")


@app.post("/colors/harmonize")
async def harmonize_colors_endpoint(request: HarmonizeRequest):
    from sitepolish.colors import (
        evaluate_color_palette,
        generate_color_harmony,
        generate_color_variations,
        is_valid_color,
    )

    if not is_valid_color(request.base_color):
        raise HTTPException(status_code=400, detail=f"Invalid color: {request.base_color}")
    try:
        harmony = generate_color_harmony(request.base_color, request.harmony)
        return {
            "harmony": harmony,
            "variations": generate_color_variations(request.base_color),
            "evaluation": evaluate_color_palette(harmony["colors"]),
        }
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/competitors/research")
async def research_competitors_endpoint(request: CompetitorRequest):
    """Analyze competitor sites. Results are stored on the project when one is given."""
    if not request.urls:
        raise HTTPException(status_code=400, detail="At least one competitor URL is required")

    try:
        from sitepolish.competitors import research_competitors
        from sitepolish.database import update_project

        industry = request.industry
        if request.project_id:
            project = await _require_project(request.project_id)
            industry = industry or project.get("industry")

        results = await research_competitors(request.urls, industry)
        if request.project_id:
            await update_project(request.project_id, {"competitors": results})
        return {"competitors": results}
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/images/search")
async def search_images_endpoint(query: str, page: int = 1, per_page: int = 20, orientation: str | None = None):
    try:
        from sitepolish.stock_media import search_images
        return await search_images(query, page=page, per_page=per_page, orientation=orientation)
    except ValueError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/videos/search")
async def search_videos_endpoint(query: str, page: int = 1, per_page: int = 15):
    try:
        from sitepolish.stock_media import search_videos
        return await search_videos(query, page=page, per_page=per_page)
    except ValueError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
