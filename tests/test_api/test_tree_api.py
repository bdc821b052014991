"""Tests for the tree HTTP API."""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio

import forge.deps as deps
from forge.config import ForgeConfig
from forge.main import app


@pytest_asyncio.fixture
async def client() -> AsyncIterator[httpx.AsyncClient]:
    deps._config = ForgeConfig(target_dir="/srv")
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    deps._config = None


class TestParseEndpoint:
    @pytest.mark.asyncio
    async def test_parse(self, client: httpx.AsyncClient, guide_tree: str) -> None:
        resp = await client.post("/api/parse", json={"text": guide_tree, "render": "indent"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["paths"] == ["project", "project/src", "project/src/index.ts"]
        assert data["forest"][0]["children"][0]["kind"] == "directory"
        assert data["rendered"] == "project/\n  src/\n    index.ts"
        assert data["warnings"] == []

    @pytest.mark.asyncio
    async def test_structural_failure(self, client: httpx.AsyncClient) -> None:
        resp = await client.post("/api/parse", json={"text": "root/\n\n/* open"})
        assert resp.status_code == 422
        detail = resp.json()["detail"]
        assert detail["issues"][0]["check_name"] == "unclosed_comment"
        assert detail["issues"][0]["line"] == 3


class TestValidateEndpoint:
    @pytest.mark.asyncio
    async def test_clean_tree(self, client: httpx.AsyncClient, monorepo_tree: str) -> None:
        resp = await client.post("/api/validate", json={"text": monorepo_tree})
        assert resp.status_code == 200
        data = resp.json()
        assert data["valid"] is True
        assert data["violations"] == []
        assert data["normalized_paths"][-1] == "/srv/root/apps/web/package.json"

    @pytest.mark.asyncio
    async def test_strategy_override(self, client: httpx.AsyncClient) -> None:
        resp = await client.post(
            "/api/validate",
            json={
                "text": "root/\n  résumé@.txt",
                "strategy": {
                    "onInvalidChars": "transliterate",
                    "transliterationMap": {"é": "e", "@": "at"},
                },
            },
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["valid"] is False
        violation = data["violations"][0]
        assert violation["code"] == "invalidChars"
        assert violation["details"]["resolved_path"] == "root/resumeat.txt"

    @pytest.mark.asyncio
    async def test_rules_override(self, client: httpx.AsyncClient) -> None:
        resp = await client.post(
            "/api/validate",
            json={"text": "root/\n  my notes.txt", "rules": {"allowSpaces": True, "allowedChars": "^[a-z .]+$"}},
        )
        assert resp.status_code == 200
        assert resp.json()["violations"] == []

    @pytest.mark.asyncio
    async def test_bad_override(self, client: httpx.AsyncClient) -> None:
        resp = await client.post(
            "/api/validate",
            json={"text": "root/", "strategy": {"onDuplicatePath": "bogus"}},
        )
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_structural_failure(self, client: httpx.AsyncClient) -> None:
        resp = await client.post("/api/validate", json={"text": "  root/"})
        assert resp.status_code == 422
        assert resp.json()["detail"]["issues"][0]["check_name"] == "root_indent"


class TestConfigEndpoint:
    @pytest.mark.asyncio
    async def test_config(self, client: httpx.AsyncClient) -> None:
        resp = await client.get("/api/config")
        assert resp.status_code == 200
        data = resp.json()
        assert data["targetDir"] == "/srv"
        assert data["rules"]["maxPathLength"] == 260
        assert data["strategy"]["onDuplicatePath"] == "error"
        assert data["parse"]["detectGuides"] is True
