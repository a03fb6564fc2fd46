"""Shared fixtures: an in-process score download service and config factory."""

import asyncio
from datetime import date

import pytest
from aiohttp import web

from satdownload.models.config import RetrievalConfig

ORG_ID = "1234"
USERNAME = "reporting_user"
PASSWORD = "s3cret"
REFERENCE_DATE = date(2026, 10, 19)


def sequence_name(number: int, day: date = REFERENCE_DATE) -> str:
    return f"{ORG_ID}_{day:%Y%m%d}_{number:06d}.txt"


class FakeScoreService:
    """Stands in for the link-issuance endpoint and the file host behind it."""

    def __init__(self):
        self.files: dict[str, bytes] = {}
        self.refused_downloads: set[str] = set()
        self.link_requests: list[str] = []
        self.download_requests: list[str] = []
        self.link_bodies: list[dict] = []
        self.link_delay = 0.0
        self.on_link_request = None
        self.host = ""
        self.port = 0

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    def make_app(self) -> web.Application:
        app = web.Application()
        app.router.add_post("/pascoredwnld/file", self.issue_link)
        app.router.add_get("/download/{name}", self.serve_file)
        return app

    async def issue_link(self, request: web.Request) -> web.Response:
        name = request.query.get("filename", "")
        body = await request.json()
        self.link_requests.append(name)
        self.link_bodies.append(body)
        if self.on_link_request is not None:
            self.on_link_request(name)
        if self.link_delay:
            await asyncio.sleep(self.link_delay)

        if body != {"username": USERNAME, "password": PASSWORD}:
            return web.Response(status=401)
        if name not in self.files:
            return web.Response(status=404, text="File not found")
        return web.json_response(
            {
                "fileUrl": f"{self.base_url}/download/{name}?token=one-time",
                "filePath": f"/assessments/reporting/5678/HED/SAT/ESR/{name}",
            }
        )

    async def serve_file(self, request: web.Request) -> web.Response:
        name = request.match_info["name"]
        self.download_requests.append(name)
        if name in self.refused_downloads or name not in self.files:
            return web.Response(status=403)
        return web.Response(
            body=self.files[name], content_type="application/octet-stream"
        )


@pytest.fixture
async def score_service(aiohttp_server):
    service = FakeScoreService()
    server = await aiohttp_server(service.make_app())
    service.host = server.host
    service.port = server.port
    return service


@pytest.fixture
def make_config(tmp_path):
    def _make(**overrides) -> RetrievalConfig:
        settings = {
            "scheme": "http",
            "host": "127.0.0.1",
            "port": 8080,
            "username": USERNAME,
            "password": PASSWORD,
            "org_id": ORG_ID,
            "local_directory": str(tmp_path / "inbound"),
            "counter_file": str(tmp_path / "satdownload.counter"),
        }
        settings.update(overrides)
        return RetrievalConfig(**settings)

    return _make
