from seastyle.services.normalize.walker import extract_groups, infer_title


def test_single_slot_array_under_a_key():
    groups = extract_groups({"a": [{"status": "◯", "time": "10:00-11:00"}]})
    assert len(groups) == 1
    assert len(groups[0].slots) == 1
    slot = groups[0].slots[0]
    assert slot.status_key == "vacant"
    assert slot.time_text == "10:00〜11:00"
    assert groups[0].title == "A"


def test_deeply_nested_slot_array_is_found():
    payload = {"outer": {"inner": {"deep": [{"time": "9:00", "status": "×"}]}}}
    groups = extract_groups(payload)
    assert len(groups) == 1
    assert groups[0].title == "Deep"
    assert groups[0].slots[0].status_key == "full"


def test_generic_wrappers_keep_fallback_title():
    payload = {"data": {"result": {"payload": [{"time": "9:00", "status": "×"}]}}}
    groups = extract_groups(payload)
    assert [g.title for g in groups] == ["空き状況"]


def test_boat_containers_title_and_merge(boats_payload):
    boats_payload["data"]["boats"].append(
        {"boatName": "YF-21", "slots": [{"time": "11:00", "status": "△"}]}
    )
    groups = extract_groups(boats_payload)
    assert [g.title for g in groups] == ["YF-21", "SR-X"]
    yf = groups[0]
    assert [s.time_text for s in yf.slots] == ["09:00〜12:00", "11:00", "13:00〜16:00"]
    assert all(s.boat_name == "YF-21" for s in yf.slots)
    assert groups[1].slots[0].note == "Memo: 要予約"


def test_top_level_list():
    groups = extract_groups([{"time": "14:00", "status": "空"}, {"time": "10:00", "status": "満"}])
    assert len(groups) == 1
    assert groups[0].title == "空き状況"
    assert [s.sort_key for s in groups[0].slots] == [600, 840]


def test_cycles_terminate():
    payload = {"x": {}, "slots": [{"time": "10:00", "status": "◯"}]}
    payload["x"]["back"] = payload
    groups = extract_groups(payload)
    assert len(groups) == 1
    assert groups[0].title == "Slots"


def test_scalars_and_scalar_arrays_yield_nothing():
    assert extract_groups({"ids": [1, 2, 3], "count": 3}) == []
    assert extract_groups(None) == []
    assert extract_groups("text") == []


def test_infer_title():
    assert infer_title({"menuName": " 半日 "}) == "半日"
    assert infer_title({"boatName": "", "title": "T"}) == "T"
    assert infer_title(["boatName"]) is None
