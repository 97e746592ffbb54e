from accordion_store.store import next_id, to_int
from accordion_store.store.utils import name_key


def test_next_id_is_max_plus_one() -> None:
    assert next_id({1, 3, 7}) == 8


def test_next_id_defaults_to_one() -> None:
    assert next_id([]) == 1
    assert next_id([0, -4, "abc", None]) == 1


def test_next_id_accepts_string_ids() -> None:
    assert next_id(["2", 5, "11", "x"]) == 12


def test_to_int_coerces_wire_ids() -> None:
    assert to_int(4) == 4
    assert to_int("17") == 17
    assert to_int(" 3 ") == 3
    assert to_int(2.0) == 2
    assert to_int("abc") == 0
    assert to_int(None) == 0
    assert to_int(True) == 0
    assert to_int(1.5) == 0


def test_name_key_ignores_case_and_padding() -> None:
    assert name_key("  Work ") == name_key("work")
