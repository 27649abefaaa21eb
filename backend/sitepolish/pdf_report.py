"""
Design proposal PDF: an HTML report printed to A4 with Playwright.
"""

from datetime import date
from html import escape

from playwright.async_api import async_playwright


PRODUCT_NAME = "SitePolish - AI-Powered Website Design Generator"

REPORT_CSS = """
@page { size: A4; margin: 20mm; }
body { font-family: Helvetica, Arial, sans-serif; color: #111; font-size: 11pt; line-height: 1.5; }
h1 { font-size: 28pt; margin: 0 0 4mm; }
h2 { font-size: 16pt; margin: 8mm 0 3mm; }
.subtitle { font-size: 20pt; color: #646464; margin: 0 0 4mm; }
.meta p { margin: 1mm 0; }
.metric { display: flex; align-items: center; margin: 2mm 0 2mm 5mm; }
.metric .label { width: 70mm; }
.metric .track { width: 60mm; height: 5mm; background: #eee; }
.metric .bar { height: 5mm; }
ul { margin: 0; padding-left: 10mm; }
.page-break { page-break-before: always; }
.shot { margin: 0 0 8mm; }
.shot h3 { font-size: 12pt; margin: 0 0 2mm; }
.shot img { width: 100%; max-height: 80mm; object-fit: cover; object-position: top; }
.unavailable { font-style: italic; font-size: 10pt; }
footer { margin-top: 12mm; font-size: 9pt; color: #969696; display: flex; justify-content: space-between; }
"""


def score_color(score: int) -> str:
    """Green at 80+, yellow at 60+, otherwise red."""
    if score >= 80:
        return "rgb(34, 197, 94)"
    if score >= 60:
        return "rgb(234, 179, 8)"
    return "rgb(239, 68, 68)"


def _metric(label: str, score: int) -> str:
    width = max(0, min(100, score))
    return (
        f'<div class="metric"><span class="label">{escape(label)}: {score}/100</span>'
        f'<span class="track"><div class="bar" style="width: {width}%; background: {score_color(score)};"></div></span></div>'
    )


def _list_section(title: str, items: list) -> str:
    if not items:
        return ""
    lis = "".join(f"<li>{escape(str(i))}</li>" for i in items)
    return f"<h2>{escape(title)}</h2><ul>{lis}</ul>"


def _viewport_title(name: str) -> str:
    return " ".join(w.capitalize() for w in name.split("-"))


def build_proposal_html(design: dict, project: dict) -> str:
    accessibility = design.get("accessibility_score") or 0
    distinctiveness = design.get("distinctiveness_score") or 0

    shots = ""
    screenshots = design.get("screenshots") or {}
    if screenshots:
        blocks = []
        for viewport, data in screenshots.items():
            if data:
                src = data if data.startswith("data:") else f"data:image/png;base64,{data}"
                body = f'<img src="{escape(src)}" alt="{escape(viewport)} preview">'
            else:
                body = '<p class="unavailable">(Screenshot unavailable)</p>'
            blocks.append(f'<div class="shot"><h3>{escape(_viewport_title(viewport))}</h3>{body}</div>')
        shots = '<div class="page-break"></div><h2>Design Previews</h2>' + "".join(blocks)

    return f"""<!DOCTYPE html>
<html><head><meta charset="UTF-8"><style>{REPORT_CSS}</style></head>
<body>
<h1>Website Design Proposal</h1>
<p class="subtitle">{escape(design.get("name") or "")}</p>
<div class="meta">
  <p>Project: {escape(project.get("url") or "")}</p>
  <p>Industry: {escape(project.get("industry") or "general")}</p>
  <p>Site Type: {escape(project.get("site_type") or "")}</p>
</div>

<h2>Design Overview</h2>
<p>{escape(design.get("description") or "")}</p>

<h2>Quality Metrics</h2>
{_metric("Accessibility Score", accessibility)}
{_metric("Distinctiveness Score", distinctiveness)}
<p class="metric">Estimated Build Time: {design.get("estimated_build_time") or 0} minutes</p>

<h2>Design Rationale</h2>
<p>{escape(design.get("rationale") or "")}</p>

<h2>Call-to-Action Strategy</h2>
<p>{escape(design.get("cta_strategy") or "")}</p>

{_list_section("Quality Strengths", design.get("quality_strengths") or [])}
{_list_section("Areas for Improvement", design.get("quality_issues") or [])}
{shots}
<footer><span>Generated on {date.today().isoformat()}</span><span>{PRODUCT_NAME}</span></footer>
</body></html>"""


async def generate_design_pdf(design: dict, project: dict) -> bytes:
    """Render the proposal HTML to an A4 PDF."""
    html = build_proposal_html(design, project)
    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=True, args=["--no-sandbox", "--disable-setuid-sandbox"])
        try:
            page = await browser.new_page()
            await page.set_content(html, wait_until="load")
            pdf = await page.pdf(format="A4", print_background=True, prefer_css_page_size=True)
        finally:
            await browser.close()
    print(f"  [pdf] {design.get('name')}: {len(pdf)} bytes")
    return pdf
