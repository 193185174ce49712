import asyncio

import aiohttp
import pytest

from backend.services.upload_service import UploadService
from endpoints import imgur
from endpoints.imgur import ImgurClient, ImageUploadError


class FakeResponse:
    def __init__(self, status, payload):
        self.status = status
        self.payload = payload

    async def json(self, content_type=None):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload

    async def text(self):
        return "<html>oops</html>"

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        return False


class FakeClientSession:
    """Replaces aiohttp.ClientSession and records posted requests."""
    requests = []
    response = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        return False

    def post(self, url, data=None, headers=None, timeout=None):
        FakeClientSession.requests.append({"url": url, "headers": headers})
        if isinstance(FakeClientSession.response, Exception):
            raise FakeClientSession.response
        return FakeClientSession.response


@pytest.fixture
def imgur_response(monkeypatch):
    FakeClientSession.requests = []
    monkeypatch.setattr(imgur.aiohttp, "ClientSession", FakeClientSession)

    def respond(status, payload):
        FakeClientSession.response = FakeResponse(status, payload)
        return FakeClientSession.requests
    return respond


async def test_imgur_returns_link(imgur_response):
    requests = imgur_response(200, {"success": True, "data": {"link": "https://i.imgur.com/x.png"}})
    client = ImgurClient(api_url="https://api.imgur.test/3/image", client_id="abc")

    assert await client.upload_image(b"bytes", "x.png", "image/png") == "https://i.imgur.com/x.png"
    assert requests[0]["url"] == "https://api.imgur.test/3/image"
    assert requests[0]["headers"] == {"Authorization": "Client-ID abc"}


@pytest.mark.parametrize("status,payload", [
    (500, {"success": False}),
    (200, {"success": False, "data": {"error": "bad image"}}),
    (200, {"success": True, "data": {}}),
    (200, ["unexpected"]),
    (502, ValueError("not json")),
])
async def test_imgur_failures(imgur_response, status, payload):
    imgur_response(status, payload)
    with pytest.raises(ImageUploadError):
        await ImgurClient(api_url="https://api.imgur.test/3/image").upload_image(b"bytes")


@pytest.fixture
def imgur_unreachable(monkeypatch):
    def fail_with(error):
        FakeClientSession.requests = []
        FakeClientSession.response = error
        monkeypatch.setattr(imgur.aiohttp, "ClientSession", FakeClientSession)
    return fail_with


@pytest.mark.parametrize("error", [asyncio.TimeoutError(), aiohttp.ClientConnectionError("refused")])
async def test_imgur_transport_errors_become_upload_errors(imgur_unreachable, error):
    imgur_unreachable(error)
    with pytest.raises(ImageUploadError) as exc_info:
        await ImgurClient(api_url="https://api.imgur.test/3/image").upload_image(b"bytes")
    assert exc_info.value.__cause__ is error


async def test_upload_service_reports_timeout(imgur_unreachable):
    imgur_unreachable(asyncio.TimeoutError())
    client = ImgurClient(api_url="https://api.imgur.test/3/image")

    result = await UploadService(client=client).upload_image(b"data", "cover.png", "image/png")
    assert not result.success
    assert result.error["code"] == "UPLOAD_FAILED"


class StubClient:
    def __init__(self):
        self.called = False

    async def upload_image(self, content, filename="image", content_type=None):
        self.called = True
        return "https://i.imgur.com/stub.png"


async def test_upload_service_rejects_large_image(monkeypatch):
    monkeypatch.setenv("UPLOAD_MAX_BYTES", "4")
    stub = StubClient()

    result = await UploadService(client=stub).upload_image(b"12345", "big.png")
    assert result.error["code"] == "IMAGE_TOO_LARGE"
    assert not stub.called


async def test_upload_service_success():
    stub = StubClient()
    result = await UploadService(client=stub).upload_image(b"123", "small.png", "image/png")
    assert result.data == {"url": "https://i.imgur.com/stub.png"}
