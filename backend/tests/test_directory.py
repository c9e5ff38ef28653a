import pytest

from seastyle.core.errors import CancellationError, TransportError
from seastyle.services.directory import MarinaSearch, load_directory, normalize_directory, normalize_search_text
from seastyle.services.normalize.types import MarinaDirectory, MarinaEntry

GROUPED_LIST = {
    "data": [
        {
            "prefecture": "東京都",
            "marinas": [
                {"marinaCd": "3802", "marinaName": "勝どきマリーナ", "marinaNameKana": "カチドキマリーナ"},
                {"marinaCd": 3803, "marinaName": "夢の島マリーナ", "areaName": "江東"},
            ],
        },
        {"prefectureName": "神奈川県", "list": [{"code": "1401", "name": "横浜ベイサイドマリーナ"}]},
    ]
}


def test_grouped_list_with_inherited_context():
    entries = normalize_directory(GROUPED_LIST)
    assert [e.code for e in entries] == ["3802", "3803", "1401"]
    assert entries[0].name_kana == "カチドキマリーナ"
    assert entries[0].prefecture == "東京都"
    assert entries[1].area == "江東"
    assert entries[2].prefecture == "神奈川県"


def test_duplicate_code_keeps_first():
    entries = normalize_directory([{"code": "1", "name": "A"}, {"code": "1", "name": "B"}])
    assert len(entries) == 1
    assert entries[0].name == "A"


def test_candidates_missing_a_name_are_descended():
    entries = normalize_directory({"id": 5, "items": [{"code": "9", "name": "X"}]})
    assert [e.code for e in entries] == ["9"]


def test_cycle_terminates():
    node = {"code": "1", "name": "A", "children": []}
    node["children"].append(node)
    assert len(normalize_directory(node)) == 1


def test_non_container_payload():
    assert normalize_directory("<html></html>") == []
    assert normalize_directory(None) == []


def test_normalize_search_text():
    assert normalize_search_text(" かちどき マリーナ ") == "カチドキマリーナ"
    assert normalize_search_text("ＡＢＣ") == "abc"
    assert normalize_search_text(None) == ""


def _search():
    return MarinaSearch(normalize_directory(GROUPED_LIST))


def test_suggest_ranks_prefix_matches_first():
    search = _search()
    assert search.suggest("かちどき")[0].code == "3802"
    assert {e.code for e in search.suggest("マリーナ")} == {"3802", "3803", "1401"}
    assert search.suggest("存在しない") == []
    assert len(search.suggest("", limit=2)) == 2


def test_resolve():
    search = _search()
    assert search.resolve(code="1401").name == "横浜ベイサイドマリーナ"
    assert search.resolve(name="夢の島").code == "3803"
    assert search.resolve(code="0000", name=None, default_name="勝どき").code == "3802"
    assert search.resolve() is None


class _DirectoryClient:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error

    async def fetch_marina_directory(self, *, signal=None):
        if self.error is not None:
            raise self.error
        return self.result


@pytest.mark.asyncio
async def test_load_directory_success():
    entry = MarinaEntry(code="1401", name="横浜ベイサイドマリーナ")
    loaded = await load_directory(_DirectoryClient(MarinaDirectory(marinas=(entry,))))
    assert not loaded.used_fallback
    assert loaded.entries == (entry,)


@pytest.mark.asyncio
async def test_load_directory_falls_back_on_error():
    error = TransportError("Sea-Style API error: 503", status_code=503)
    loaded = await load_directory(_DirectoryClient(error=error))
    assert loaded.used_fallback
    assert loaded.error is error
    assert [e.code for e in loaded.entries] == ["3802"]
    assert loaded.entries[0].name == "勝どきマリーナ"


@pytest.mark.asyncio
async def test_load_directory_falls_back_on_empty_list():
    loaded = await load_directory(_DirectoryClient(MarinaDirectory(marinas=())))
    assert loaded.used_fallback
    assert loaded.error is None


@pytest.mark.asyncio
async def test_load_directory_propagates_cancellation():
    with pytest.raises(CancellationError):
        await load_directory(_DirectoryClient(error=CancellationError("stop")))
