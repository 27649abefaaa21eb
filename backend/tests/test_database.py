import asyncio

import pytest

from sitepolish import database
from sitepolish.config import get_settings


def test_missing_credentials_raise(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "")
    monkeypatch.setenv("SUPABASE_KEY", "")
    get_settings.cache_clear()
    with pytest.raises(ValueError, match="SUPABASE_URL"):
        asyncio.run(database.get_project("p1"))


def test_project_lifecycle(fake_db, project_row):
    project = asyncio.run(database.create_project(project_row))
    assert project["status"] == "configuring"
    assert project["id"]

    fetched = asyncio.run(database.get_project(project["id"]))
    assert fetched["url"] == project_row["url"]

    asyncio.run(database.update_project(project["id"], {"fonts": {"primary": "Lato"}}))
    asyncio.run(database.set_project_status(project["id"], "failed", "boom"))
    updated = asyncio.run(database.get_project(project["id"]))
    assert updated["fonts"] == {"primary": "Lato"}
    assert updated["status"] == "failed"
    assert updated["error_message"] == "boom"
    assert updated["updated_at"]

    assert asyncio.run(database.get_project("missing")) is None


def test_list_projects_newest_first(fake_db):
    first = asyncio.run(database.create_project({"url": "https://a.com"}))
    second = asyncio.run(database.create_project({"url": "https://b.com"}))
    projects = asyncio.run(database.list_projects(limit=10))
    assert [p["id"] for p in projects] == [second["id"], first["id"]]
    assert len(asyncio.run(database.list_projects(limit=1))) == 1


def test_designs_and_approval(fake_db):
    designs = [
        asyncio.run(database.save_design({"project_id": "p1", "name": name, "approved": False}))
        for name in ("Conservative", "Balanced", "Bold")
    ]
    asyncio.run(database.save_design({"project_id": "p2", "name": "Other", "approved": True}))

    assert [d["name"] for d in asyncio.run(database.get_project_designs("p1"))] == [
        "Conservative", "Balanced", "Bold",
    ]

    asyncio.run(database.approve_design(designs[0]["id"], "p1", "client@acme.com"))
    approved = asyncio.run(database.approve_design(designs[2]["id"], "p1"))
    assert approved["approved"] is True and approved["approved_at"]

    stored = {d["name"]: d for d in asyncio.run(database.get_project_designs("p1"))}
    assert stored["Conservative"]["approved"] is False
    assert stored["Conservative"]["approved_by"] is None
    assert stored["Bold"]["approved"] is True
    assert asyncio.run(database.get_project_designs("p2"))[0]["approved"] is True, "Other projects are untouched"

    asyncio.run(database.update_design(designs[1]["id"], {"screenshots": {"desktop": "abc"}}))
    assert asyncio.run(database.get_design(designs[1]["id"]))["screenshots"] == {"desktop": "abc"}

    asyncio.run(database.delete_project_designs("p1"))
    assert asyncio.run(database.get_project_designs("p1")) == []
    assert len(asyncio.run(database.get_project_designs("p2"))) == 1


def test_competitor_cache_expiry(fake_db):
    asyncio.run(database.cache_competitor("rival.com", "dental-practice", {"designStyle": "minimal"}))
    cached = asyncio.run(database.get_cached_competitor("rival.com"))
    assert cached["analysis"] == {"designStyle": "minimal"}

    asyncio.run(database.cache_competitor("rival.com", "dental-practice", {"designStyle": "bold"}))
    assert len(fake_db.rows("competitor_cache")) == 1, "Upsert keeps one row per domain"
    assert asyncio.run(database.get_cached_competitor("rival.com"))["analysis"] == {"designStyle": "bold"}

    asyncio.run(database.cache_competitor("old.com", "general", {"designStyle": "dated"}, ttl_days=-1))
    assert asyncio.run(database.get_cached_competitor("old.com")) is None
