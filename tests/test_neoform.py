"""Tests for neoform.py: NeoForm index lookup with on-disk cache."""

import pytest
import requests

from minecraft_submodule import neoform
from minecraft_submodule.errors import VersionIndexError
from minecraft_submodule.neoform import NeoFormIndexClient, NeoFormVersion, resolve_neoform_version

INDEX = {
    "isSnapshot": False,
    "versions": [
        "1.20.6-20240429.153634",
        "1.21.1-20240808.144430",
        "1.21.1-20240808.090000",
        "1.21.1-20240901.000001",
        "1.21-20240613.152323",
        "not-a-version",
    ],
}


class FakeResponse:
    def __init__(self, payload, status=200):
        self.payload = payload
        self.status = status

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status} error")

    def json(self):
        return self.payload


@pytest.fixture
def fake_index(monkeypatch):
    calls = []

    def fake_get(url, timeout=None, **kwargs):
        calls.append(url)
        return FakeResponse(INDEX)

    monkeypatch.setattr(neoform.requests, "get", fake_get)
    return calls


class TestNeoFormVersion:
    def test_parse(self):
        version = NeoFormVersion.parse("1.21.1-20240808.144430")
        assert version == NeoFormVersion("1.21.1", 20240808, 144430)
        assert str(version) == "1.21.1-20240808.144430"

    def test_parse_rejects(self):
        assert NeoFormVersion.parse("1.21.1") is None

    def test_str_keeps_zero_padded_time(self):
        version = NeoFormVersion.parse("1.21.1-20240808.044430")
        assert version.time == 44430
        assert str(version) == "1.21.1-20240808.044430"


class TestFetchVersions:
    def test_groups_by_minecraft_version(self, fake_index):
        versions = NeoFormIndexClient("https://example.invalid/index").fetch_versions()
        assert sorted(versions) == ["1.20.6", "1.21", "1.21.1"]
        assert len(versions["1.21.1"]) == 3
        assert fake_index == ["https://example.invalid/index"]


class TestResolveNeoFormVersion:
    def test_picks_latest_by_date_and_time(self, fake_index, tmp_path):
        assert resolve_neoform_version("1.21.1", tmp_path) == "1.21.1-20240901.000001"
        assert (tmp_path / "1.21.1.txt").read_text(encoding="utf-8") == "1.21.1-20240901.000001"

    def test_uses_cache(self, fake_index, tmp_path):
        (tmp_path / "1.21.txt").write_text("1.21-cached.1\n", encoding="utf-8")
        assert resolve_neoform_version("1.21", tmp_path) == "1.21-cached.1"
        assert fake_index == []

    def test_unknown_minecraft_version(self, fake_index, tmp_path):
        with pytest.raises(VersionIndexError, match="1.99"):
            resolve_neoform_version("1.99", tmp_path)
        assert not (tmp_path / "1.99.txt").exists()

    def test_download_failure(self, monkeypatch, tmp_path):
        def failing_get(url, timeout=None, **kwargs):
            raise requests.ConnectionError("offline")

        monkeypatch.setattr(neoform.requests, "get", failing_get)
        with pytest.raises(VersionIndexError) as excinfo:
            resolve_neoform_version("1.21.1", tmp_path)
        assert isinstance(excinfo.value.__cause__, requests.ConnectionError)

    def test_malformed_index(self, monkeypatch, tmp_path):
        monkeypatch.setattr(neoform.requests, "get", lambda url, timeout=None: FakeResponse({"nope": []}))
        with pytest.raises(VersionIndexError):
            resolve_neoform_version("1.21.1", tmp_path)

    def test_zero_padded_time_returned_and_cached_verbatim(self, monkeypatch, tmp_path):
        index = {"versions": ["1.21.1-20240808.044430", "1.21.1-20240807.235959"]}
        monkeypatch.setattr(neoform.requests, "get", lambda url, timeout=None: FakeResponse(index))

        assert resolve_neoform_version("1.21.1", tmp_path) == "1.21.1-20240808.044430"
        assert (tmp_path / "1.21.1.txt").read_text(encoding="utf-8") == "1.21.1-20240808.044430"
