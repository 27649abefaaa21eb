import copy
import uuid

import pytest

from sitepolish import database
from sitepolish.config import get_settings


class FakeResult:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    """Just enough of the supabase-py query builder for the database module."""

    def __init__(self, store: "FakeSupabase", table: str):
        self.store = store
        self.table = table
        self.op = "select"
        self.payload = None
        self.on_conflict = None
        self.filters = []
        self.order_by = None
        self.limit_to = None

    def select(self, columns="*"):
        self.op = "select"
        return self

    def insert(self, row):
        self.op, self.payload = "insert", row
        return self

    def update(self, data):
        self.op, self.payload = "update", data
        return self

    def delete(self):
        self.op = "delete"
        return self

    def upsert(self, row, on_conflict=None):
        self.op, self.payload, self.on_conflict = "upsert", row, on_conflict
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def gt(self, column, value):
        self.filters.append(lambda row: row.get(column) is not None and row.get(column) > value)
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def limit(self, n):
        self.limit_to = n
        return self

    def _matching(self):
        return [row for row in self.store.rows(self.table) if all(f(row) for f in self.filters)]

    def execute(self):
        rows = self.store.rows(self.table)

        if self.op == "insert":
            return FakeResult([copy.deepcopy(self.store.add(self.table, self.payload))])

        if self.op == "upsert":
            key = self.on_conflict or "id"
            existing = next((r for r in rows if r.get(key) == self.payload.get(key)), None)
            if existing:
                existing.update(copy.deepcopy(self.payload))
                return FakeResult([copy.deepcopy(existing)])
            return FakeResult([copy.deepcopy(self.store.add(self.table, self.payload))])

        matched = self._matching()
        if self.op == "update":
            for row in matched:
                row.update(copy.deepcopy(self.payload))
            return FakeResult([copy.deepcopy(r) for r in matched])
        if self.op == "delete":
            self.store.tables[self.table] = [r for r in rows if r not in matched]
            return FakeResult([copy.deepcopy(r) for r in matched])

        if self.order_by:
            column, desc = self.order_by
            matched = sorted(matched, key=lambda r: r.get(column) or "", reverse=desc)
        if self.limit_to is not None:
            matched = matched[:self.limit_to]
        return FakeResult([copy.deepcopy(r) for r in matched])


class FakeSupabase:
    def __init__(self):
        self.tables = {}
        self._counter = 0

    def rows(self, table: str) -> list:
        return self.tables.setdefault(table, [])

    def add(self, table: str, row: dict) -> dict:
        self._counter += 1
        stored = {
            "id": str(uuid.uuid4()),
            "created_at": f"2026-01-01T00:00:00.{self._counter:06d}+00:00",
            **copy.deepcopy(row),
        }
        self.rows(table).append(stored)
        return stored

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fake_db(monkeypatch):
    db = FakeSupabase()
    monkeypatch.setattr(database, "_get_client", lambda: db)
    return db


@pytest.fixture
def project_row():
    return {
        "url": "https://www.acmedental.com",
        "site_type": "leadgen",
        "industry": "dental-practice",
        "industry_design_guidance": "Clean, calming blues.",
        "scraped_content": {"title": "Acme Dental | Family Dentistry", "content": "dentist"},
        "color_scheme": {"colors": ["#1e3a8a", "#f59e0b", "#10b981"], "harmony": "triadic"},
        "fonts": {"primary": "Inter", "secondary": "Georgia"},
        "viewports": ["desktop", "mobile-portrait"],
        "logo_url": None,
        "media": [],
    }


@pytest.fixture
def sample_variation():
    return {
        "name": "Bold",
        "description": "Asymmetric hero with a dark header",
        "rationale": "Stands out from competitors",
        "ctaStrategy": "Book a visit",
        "designDecisions": {"asymmetry": "Asymmetric 70-30 hero", "spacingSystem": "Varied 40/64/96"},
        "widgetStructure": {
            "globalHeader": {
                "backgroundColor": "#0a0e1a",
                "height": 80,
                "widgets": [
                    {"type": "site-logo", "imageUrl": None, "alt": "Acme logo"},
                    {"type": "nav-menu", "items": ["Home", "Services", "Contact"]},
                    {"type": "button", "text": "Book Now", "style": "outline",
                     "customStyle": {"border": "2px solid #00e5ff"}},
                ],
            },
            "sections": [
                {
                    "name": "Hero",
                    "layout": "asymmetric-70-30",
                    "background": {"type": "gradient", "gradient": "linear-gradient(135deg, #1e3a8a, #10b981)"},
                    "spacing": {"top": 96, "bottom": 64},
                    "decorativeElements": ["blob", "grid-pattern"],
                    "widgets": [
                        {"type": "heading", "level": "h1", "text": "Gentle dentistry in Springfield",
                         "fontSize": 56, "color": "#ffffff"},
                        {"type": "text-editor", "text": "<p>Same-week appointments.</p>", "fontSize": 18,
                         "color": "#e5e7eb"},
                        {"type": "image", "alt": "Treatment room"},
                    ],
                },
                {
                    "name": "Services",
                    "layout": "bento",
                    "background": {"color": "#f8fafc"},
                    "spacing": {"top": 40, "bottom": 40},
                    "widgets": [
                        {"type": "icon-box", "title": "Implants", "description": "Natural-looking results",
                         "color": "#1e3a8a"},
                        {"type": "heading", "level": "h2", "text": "Our services", "fontSize": 36},
                    ],
                },
            ],
        },
    }
