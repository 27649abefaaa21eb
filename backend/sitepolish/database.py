"""
Supabase client for project, design and competitor-cache records.
Table definitions live in backend/schema.sql.
"""

from datetime import datetime, timedelta, timezone

from sitepolish.config import get_settings


PROJECT_SUMMARY_COLUMNS = (
    "id, url, site_type, industry, status, error_message, logo_url, created_at, updated_at, "
    "designs(id, name, approved, accessibility_score, distinctiveness_score)"
)


def _get_client():
    """Get a Supabase client. Raises if credentials are missing."""
    settings = get_settings()
    url = settings.supabase_url
    key = settings.supabase_key
    if not url or not key:
        raise ValueError("SUPABASE_URL and SUPABASE_KEY must be set in .env")
    from supabase import create_client
    return create_client(url, key)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _first(result) -> dict | None:
    return result.data[0] if result.data else None


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------

async def create_project(data: dict) -> dict:
    """Insert a project record. Returns the inserted row."""
    client = _get_client()
    row = {"status": "configuring", **data, "updated_at": _now()}
    result = client.table("projects").insert(row).execute()
    return _first(result) or {}


async def get_project(project_id: str) -> dict | None:
    """Get a single project by ID, or None."""
    client = _get_client()
    result = client.table("projects").select("*").eq("id", project_id).limit(1).execute()
    return _first(result)


async def list_projects(limit: int = 50) -> list:
    """Recent projects with a short summary of their designs."""
    client = _get_client()
    result = (
        client.table("projects")
        .select(PROJECT_SUMMARY_COLUMNS)
        .order("created_at", desc=True)
        .limit(limit)
        .execute()
    )
    return result.data


async def update_project(project_id: str, data: dict) -> dict:
    """Update a project record. Always bumps updated_at."""
    client = _get_client()
    result = (
        client.table("projects")
        .update({**data, "updated_at": _now()})
        .eq("id", project_id)
        .execute()
    )
    return _first(result) or {}


async def set_project_status(project_id: str, status: str, error_message: str | None = None) -> dict:
    """Move a project through configuring -> generating -> completed | failed."""
    return await update_project(project_id, {"status": status, "error_message": error_message})


# ---------------------------------------------------------------------------
# Designs
# ---------------------------------------------------------------------------

async def save_design(data: dict) -> dict:
    """Insert a design record. Returns the inserted row."""
    client = _get_client()
    result = client.table("designs").insert(data).execute()
    return _first(result) or {}


async def get_design(design_id: str) -> dict | None:
    """Get a single design by ID, or None."""
    client = _get_client()
    result = client.table("designs").select("*").eq("id", design_id).limit(1).execute()
    return _first(result)


async def get_project_designs(project_id: str) -> list:
    """All designs of a project, oldest first."""
    client = _get_client()
    result = (
        client.table("designs")
        .select("*")
        .eq("project_id", project_id)
        .order("created_at")
        .execute()
    )
    return result.data


async def update_design(design_id: str, data: dict) -> dict:
    """Update a design record."""
    client = _get_client()
    result = client.table("designs").update(data).eq("id", design_id).execute()
    return _first(result) or {}


async def delete_project_designs(project_id: str) -> bool:
    """Delete every design of a project."""
    client = _get_client()
    client.table("designs").delete().eq("project_id", project_id).execute()
    return True


async def approve_design(design_id: str, project_id: str, approved_by: str | None = None) -> dict:
    """Mark one design approved. Every other design of the project is unapproved first."""
    client = _get_client()
    (
        client.table("designs")
        .update({"approved": False, "approved_at": None, "approved_by": None})
        .eq("project_id", project_id)
        .execute()
    )
    result = (
        client.table("designs")
        .update({"approved": True, "approved_at": _now(), "approved_by": approved_by})
        .eq("id", design_id)
        .execute()
    )
    return _first(result) or {}


# ---------------------------------------------------------------------------
# Competitor cache
# ---------------------------------------------------------------------------

async def get_cached_competitor(domain: str) -> dict | None:
    """Cached analysis for a domain if it has not expired yet."""
    client = _get_client()
    result = (
        client.table("competitor_cache")
        .select("*")
        .eq("domain", domain)
        .gt("expires_at", _now())
        .limit(1)
        .execute()
    )
    return _first(result)


async def cache_competitor(domain: str, industry: str, analysis: dict, ttl_days: int = 7) -> dict:
    """Insert or refresh the cached analysis for a domain."""
    client = _get_client()
    expires_at = (datetime.now(timezone.utc) + timedelta(days=ttl_days)).isoformat()
    result = (
        client.table("competitor_cache")
        .upsert(
            {"domain": domain, "industry": industry, "analysis": analysis, "expires_at": expires_at},
            on_conflict="domain",
        )
        .execute()
    )
    return _first(result) or {}
