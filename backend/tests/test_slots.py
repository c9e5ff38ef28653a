from seastyle.services.normalize.slots import build_slot, humanize_key, merge_groups, sort_slots
from seastyle.services.normalize.status import NumericStatusPolicy


def test_string_record():
    slot = build_slot("  10:00〜11:00 ◯ ")
    assert slot.time_text == "10:00〜11:00"
    assert slot.status_key == "vacant"
    assert slot.note == "10:00〜11:00 ◯"
    assert slot.sort_key == 600


def test_start_and_end_fields():
    slot = build_slot({"startTime": "9:00", "endTime": "12:00", "status": 1})
    assert slot.time_text == "09:00〜12:00"
    assert slot.status_key == "few"
    assert slot.status_raw == 1
    assert slot.sort_key == 540


def test_range_field_wins_over_start_end():
    slot = build_slot({"timeRange": "8:00-9:00", "startTime": "10:00", "status": "◯"})
    assert slot.time_text == "08:00〜09:00"


def test_label_field_only_used_with_a_clock():
    assert build_slot({"label": "9:00〜12:00", "status": "◯"}).time_text == "09:00〜12:00"
    slot = build_slot({"name": "Yamaha", "status": "◯"})
    assert slot.time_text is None
    assert slot.sort_key is None


def test_status_falls_back_to_time_text():
    slot = build_slot({"timeText": "満席"})
    assert slot.time_text == "満席"
    assert slot.status_key == "full"


def test_later_known_status_field_beats_earlier_unknown():
    slot = build_slot({"time": "10:00", "status": "???", "vacancy": "△"})
    assert slot.status_key == "few"


def test_note_assembly():
    slot = build_slot(
        {"time": "10:00", "planName": "半日プラン", "remainCount": 2, "notes": ["要予約", " ", 3]}
    )
    assert slot.note == "半日プラン ／ Remain count: 2 ／ 要予約 ／ 3"


def test_boat_name_from_record_or_fallback():
    assert build_slot({"time": "10:00", "status": "○", "boatName": "SR-X"}, "Other").boat_name == "SR-X"
    assert build_slot({"time": "10:00", "status": "○"}, "YF-21").boat_name == "YF-21"


def test_records_without_signal_are_discarded():
    assert build_slot({"foo": "bar"}) is None
    assert build_slot({}) is None
    assert build_slot("   ") is None
    assert build_slot(42) is None
    assert build_slot(None) is None


def test_humanize_key():
    assert humanize_key("remainCount") == "Remain count"
    assert humanize_key("remain_count") == "Remain count"
    assert humanize_key("空き") == "空き"


def test_sort_and_merge():
    late = build_slot({"time": "13:00", "status": "◯"})
    early = build_slot({"time": "9:00", "status": "◯"})
    untimed = build_slot({"status": "◯", "memo": "終日"})
    assert sort_slots([untimed, late, early]) == (early, late, untimed)

    groups = merge_groups([("A", [late]), (None, [untimed]), ("A", [early]), ("B", [])])
    assert [g.title for g in groups] == ["A", "空き状況"]
    assert groups[0].slots == (early, late)


def test_numeric_policy_is_passed_to_status_fields():
    policy = NumericStatusPolicy(vacant_code=5, few_code=6, full_from=7)
    assert build_slot({"time": "10:00", "vacancy": 5}, numeric_policy=policy).status_key == "vacant"
    assert build_slot({"time": "10:00", "vacancy": 5}).status_key == "full"
