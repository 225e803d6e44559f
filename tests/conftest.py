"""
Pytest configuration and fixtures for subscription merger tests.
"""
import pytest
import httpx


@pytest.fixture
def tvbox_document():
    """TVBox-style subscription document."""
    return {
        "spider": "https://example.com/spider.jar",
        "sites": [
            {"key": "douban", "name": "豆瓣", "type": 3, "api": "csp_Douban", "searchable": 0},
            {"name": "Foo Films", "api": "http://foo.example.com/api.php/provide/vod", "ext": "http://foo.example.com/ext.json"},
            {"name": "Foo-Films", "api": "http://dupe.example.com/api"},
            {"name": "Bar TV", "api": "http://bar.example.com/api", "type": 1, "quickSearch": False},
            {"name": "No API"},
            "not-an-object",
        ],
        "parses": [
            {"name": "Parse One", "url": "http://parse.example.com/?url=", "type": 1, "header": {"User-Agent": "okhttp"}},
            {"name": "Parse One", "url": "http://other-parse.example.com/?url="},
            {"url": "http://noname.example.com/jx?url="},
            {"name": "Missing URL"},
        ],
        "lives": [
            {"name": "CCTV", "url": "http://live.example.com/cctv.m3u", "epg": "http://epg.example.com/{name}", "logo": "http://logo.example.com/{name}.png"},
            {"url": "http://live.example.com/unnamed.txt"},
            {"name": "CCTV", "url": "http://live.example.com/cctv-backup.m3u"},
            {"name": "Empty URL", "url": ""},
        ],
    }


@pytest.fixture
def orangetv_document():
    """OrangeTV-style subscription document with pre-shaped sites."""
    return {
        "cache_time": 7200,
        "api_site": {
            "dyttzy": {
                "api": "http://caiji.dyttzyapi.com/api.php/provide/vod",
                "name": "电影天堂资源",
                "detail": "http://caiji.dyttzyapi.com",
            },
            "ruyi": {
                "api": "https://cj.rycjapi.com/api.php/provide/vod",
                "name": "如意资源",
            },
        },
    }


def build_transport(routes: dict) -> httpx.MockTransport:
    """
    Build a mock transport from ``{url: response}``.

    A response is a JSON-able body (served with 200), an ``httpx.Response``,
    an int status code, or an exception instance to raise. Unknown URLs get
    a connection error.
    """
    def handler(request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        if url not in routes:
            raise httpx.ConnectError("Connection refused", request=request)
        result = routes[url]
        if isinstance(result, Exception):
            raise result
        if isinstance(result, httpx.Response):
            return result
        if isinstance(result, int):
            return httpx.Response(result)
        return httpx.Response(200, json=result)

    return httpx.MockTransport(handler)


@pytest.fixture
def make_transport():
    """Factory fixture returning build_transport."""
    return build_transport
