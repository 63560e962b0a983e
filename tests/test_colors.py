import json

import pytest

from aiosu.colors import (
    ColorProfile,
    bgr_to_hex,
    hex_to_bgr,
    is_hex_color,
    joycon_backup,
    joycon_profiles,
    load_profiles_file,
    parse_profiles,
    procon_backup,
    procon_profiles,
    store_backup,
)


def test_hex_to_bgr_swaps_bytes():
    assert hex_to_bgr("82FF96") == 0x96FF82


def test_hex_to_bgr_rejects_garbage():
    with pytest.raises(ValueError):
        hex_to_bgr("zzzzzz")


@pytest.mark.parametrize(
    "text, expected",
    [
        ("0A1E0A", True),
        ("e6e6e6", True),
        ("0a1e0g", False),
        ("12345", False),
        ("1234567", False),
        ("", False),
    ],
)
def test_is_hex_color(text, expected):
    assert is_hex_color(text) is expected


def test_bgr_to_hex_zero():
    assert bgr_to_hex(0) == "000100"


def test_bgr_to_hex_is_valid_hex_text():
    for value in (hex_to_bgr("0A1E28"), hex_to_bgr("96F5F5"), hex_to_bgr("2d2d2d")):
        text = bgr_to_hex(value)
        assert is_hex_color(text)
        assert text == text.lower()


def test_joycon_default_profile_when_remote_empty():
    profiles = joycon_profiles([], [])
    assert profiles == [
        ColorProfile(
            "Animal Crossing: New Horizons",
            (
                hex_to_bgr("82FF96"),
                hex_to_bgr("0A1E0A"),
                hex_to_bgr("96F5F5"),
                hex_to_bgr("0A1E28"),
            ),
        )
    ]


def test_procon_default_profile():
    profiles = procon_profiles([], None)
    assert [p.name for p in profiles] == ["Default black"]
    assert profiles[0].colors == (hex_to_bgr("2d2d2d"), hex_to_bgr("e6e6e6"))


def test_backup_goes_first_and_remote_follows_local():
    local = [
        {"name": "mine", "BODY": "111111", "BTN": "222222"},
        {"name": "_backup", "BODY": "333333", "BTN": "444444"},
    ]
    remote = [{"name": "theirs", "BODY": "555555", "BTN": "666666"}]
    profiles = procon_profiles(local, remote)
    assert [p.name for p in profiles] == ["_backup", "mine", "theirs"]
    assert profiles[0].is_backup


def test_invalid_entries_skipped_and_empty_name_renamed():
    documents = [
        [
            {"name": "bad", "BODY": "12345", "BTN": "222222"},
            {"name": "", "BODY": "abcdef", "BTN": "ABCDEF"},
        ]
    ]
    profiles = parse_profiles(documents, ("BODY", "BTN"))
    assert [p.name for p in profiles] == ["Unamed"]


def test_object_document_is_read_by_values():
    documents = [{"a": {"name": "x", "BODY": "111111", "BTN": "222222"}}]
    profiles = parse_profiles(documents, ("BODY", "BTN"))
    assert [p.name for p in profiles] == ["x"]


def test_non_string_field_raises():
    with pytest.raises(TypeError):
        parse_profiles([[{"name": "x", "BODY": 5, "BTN": "222222"}]], ("BODY", "BTN"))


def test_missing_field_raises():
    with pytest.raises(KeyError):
        parse_profiles([[{"name": "x", "BODY": "111111"}]], ("BODY", "BTN"))


def test_load_missing_file_is_empty(tmp_path):
    assert load_profiles_file(tmp_path / "none.json") == []


def test_store_backup_replaces_old_backup(tmp_path):
    path = tmp_path / "colors.json"
    path.write_text(
        json.dumps(
            [
                {"name": "_backup", "BODY": "000000", "BTN": "000000"},
                {"name": "keep", "BODY": "111111", "BTN": "222222"},
            ]
        )
    )
    backup = procon_backup(hex_to_bgr("abcdef"), hex_to_bgr("123456"))
    result = store_backup(path, backup)
    on_disk = json.loads(path.read_text())
    assert on_disk == result
    assert [p["name"] for p in on_disk] == ["keep", "_backup"]
    assert on_disk[-1] == backup


def test_store_backup_creates_file(tmp_path):
    path = tmp_path / "sub" / "jc.json"
    backup = joycon_backup(1, 2, 3, 4)
    store_backup(path, backup)
    assert json.loads(path.read_text()) == [backup]


def test_store_backup_rejects_object_file(tmp_path):
    path = tmp_path / "colors.json"
    path.write_text("{}")
    with pytest.raises(ValueError):
        store_backup(path, procon_backup(0, 0))


def test_joycon_backup_fields():
    backup = joycon_backup(10, 20, 30, 40)
    assert backup["name"] == "_backup"
    assert set(backup) == {"name", "L_JC", "L_BTN", "R_JC", "R_BTN"}
    assert backup["L_JC"] == bgr_to_hex(10)
    assert backup["R_BTN"] == bgr_to_hex(40)


def test_backup_is_readable_as_profile(tmp_path):
    path = tmp_path / "jc.json"
    store_backup(path, joycon_backup(0, 0, 0, 0))
    profiles = joycon_profiles(load_profiles_file(path), [])
    assert profiles[0].is_backup
    assert len(profiles[0].colors) == 4