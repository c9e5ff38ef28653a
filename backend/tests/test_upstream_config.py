from urllib.parse import parse_qs, urlsplit

from seastyle.services.upstream.config import SeaStyleConfig

ORIGIN = "https://seastyle.test"


def test_direct_url():
    config = SeaStyleConfig(origin=ORIGIN + "/", api_base="")
    assert not config.uses_relay()
    assert config.build_url("/api/Reserve/GetMarinaList") == ORIGIN + "/api/Reserve/GetMarinaList"
    url = config.build_url("/Reserve/ClubBoatEmptyList", {"marinaCd": "3802", "targetDate": "2025-06-01", "x": None})
    parts = urlsplit(url)
    assert parts.path == "/Reserve/ClubBoatEmptyList"
    assert parse_qs(parts.query) == {"marinaCd": ["3802"], "targetDate": ["2025-06-01"]}


def test_relay_passes_target_as_path_param():
    config = SeaStyleConfig(origin=ORIGIN, api_base="https://relay.test/api/proxy")
    assert config.uses_relay()
    url = config.build_url("/Reserve/ClubBoatEmptyList", {"marinaCd": "3802", "format": "partial"})
    parts = urlsplit(url)
    assert parts.netloc == "relay.test"
    assert parts.path == "/api/proxy"
    assert parse_qs(parts.query)["path"] == ["/Reserve/ClubBoatEmptyList?marinaCd=3802&format=partial"]


def test_relay_keeps_its_own_query():
    config = SeaStyleConfig(origin=ORIGIN, api_base="https://relay.test/fn?key=abc&path=old")
    query = parse_qs(urlsplit(config.build_url("/api/Reserve/GetMarinaList")).query)
    assert query == {"key": ["abc"], "path": ["/api/Reserve/GetMarinaList"]}


def test_relative_relay_base_resolves_against_origin():
    config = SeaStyleConfig(origin=ORIGIN, api_base="/api/proxy")
    assert config.api_base == ORIGIN + "/api/proxy"
    assert urlsplit(config.build_url("/x")).netloc == "seastyle.test"


def test_non_relay_api_base_is_a_prefix():
    config = SeaStyleConfig(origin=ORIGIN, api_base="https://mirror.test")
    assert not config.uses_relay()
    assert config.build_url("/api/Reserve/GetMarinaList") == "https://mirror.test/api/Reserve/GetMarinaList"


def test_headers():
    config = SeaStyleConfig(origin=ORIGIN, api_base="", user_agent="test-agent")
    assert config.headers()["User-Agent"] == "test-agent"
    assert config.headers()["Referer"] == ORIGIN + "/"
    assert "Content-Type" not in config.headers()
    assert config.headers(json_body=True)["Content-Type"] == "application/json"
