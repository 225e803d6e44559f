"""
Tests for key derivation.
"""
import pytest

from submerge.services.key_deriver import derive_live_key, derive_site_key


class TestSiteKey:

    def test_name_is_lowercased_and_stripped(self):
        assert derive_site_key("Foo Films-HD!", "http://x/api") == "foofilmshd"

    def test_falls_back_to_url(self):
        assert derive_site_key(None, "http://X.example.com/api") == "httpxexamplecomapi"
        assert derive_site_key("", "http://x/api") == "httpxapi"

    def test_non_ascii_name_uses_positional_key(self):
        """Names that strip to nothing get a deterministic positional key."""
        assert derive_site_key("豆瓣", "csp_Douban", 0) == "site0"
        assert derive_site_key(None, "豆瓣接口", 4) == "site4"
        assert derive_site_key("解析", "", 2, prefix="parse") == "parse2"

    def test_empty_without_index_raises(self):
        with pytest.raises(ValueError):
            derive_site_key("豆瓣", None)

    def test_deterministic(self):
        assert derive_site_key("Same Name", "a") == derive_site_key("Same Name", "b")


class TestLiveKey:

    def test_name_kept_verbatim(self):
        assert derive_live_key("CCTV-1 综合", 0) == "CCTV-1 综合"

    def test_positional_fallback(self):
        assert derive_live_key(None, 3) == "live3"
        assert derive_live_key("", 0) == "live0"
