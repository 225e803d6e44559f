"""
Tests for subscription source fetching.
"""
import pytest
import httpx

from submerge.services.source_fetcher import SourceFetcher


class TestSourceFetcher:

    @pytest.mark.asyncio
    async def test_fetch_json(self, make_transport, tvbox_document):
        fetcher = SourceFetcher(transport=make_transport({"http://feed.example.com/a.json": tvbox_document}))
        assert await fetcher.fetch("http://feed.example.com/a.json") == tvbox_document

    @pytest.mark.asyncio
    async def test_fetch_with_bom(self, make_transport):
        body = "\ufeff" + '{"sites": []}'
        transport = make_transport({
            "http://feed.example.com/bom.json": httpx.Response(200, content=body.encode("utf-8"))
        })
        assert await SourceFetcher(transport=transport).fetch("http://feed.example.com/bom.json") == {"sites": []}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("response", [
        404,
        500,
        httpx.Response(200, text="<html>not json</html>"),
        httpx.Response(200, content=b"\xff\xfe\x00garbage"),
    ])
    async def test_unusable_responses_return_none(self, make_transport, response):
        fetcher = SourceFetcher(transport=make_transport({"http://feed.example.com/x": response}))
        assert await fetcher.fetch("http://feed.example.com/x") is None

    @pytest.mark.asyncio
    async def test_unreachable_returns_none(self, make_transport, caplog):
        fetcher = SourceFetcher(transport=make_transport({}))

        with caplog.at_level("WARNING"):
            assert await fetcher.fetch("http://down.example.com/x") is None

        assert "http://down.example.com/x" in caplog.text

    @pytest.mark.asyncio
    async def test_timeout_returns_none(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        fetcher = SourceFetcher(timeout=0.1, transport=httpx.MockTransport(handler))
        assert await fetcher.fetch("http://slow.example.com/x") is None

    @pytest.mark.asyncio
    async def test_sends_user_agent(self):
        seen = {}

        def handler(request):
            seen["ua"] = request.headers.get("user-agent")
            return httpx.Response(200, json={})

        await SourceFetcher(transport=httpx.MockTransport(handler)).fetch("http://feed.example.com/")
        assert seen["ua"] == "okhttp/3.15"
