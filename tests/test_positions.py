import json

import pytest
from hypothesis import given
from hypothesis import strategies as st

from nbodymap.positions import (
    PositionRecord,
    PositionsFormatError,
    format_links,
    format_positions,
    parse_positions,
    read_positions,
    write_links,
    write_positions,
)

records_strategy = st.lists(
    st.builds(
        PositionRecord,
        st.integers(0, 2**32 - 1),
        st.integers(-(2**31), 2**31 - 1),
        st.integers(-(2**31), 2**31 - 1),
        st.integers(-(2**31), 2**31 - 1),
    ),
    max_size=20,
)


def test_format_single_entry():
    assert format_positions([PositionRecord(5, 1, -2, 3)]) == "[\n[5,1,-2,3]\n]\n"


def test_format_two_entries_separated_by_comma_newline():
    text = format_positions([PositionRecord(1, 2, 3, 4), PositionRecord(5, 6, 7, 8)])
    assert text == "[\n[1,2,3,4],\n[5,6,7,8]\n]\n"


def test_format_empty():
    assert format_positions([]) == "[\n]\n"
    assert parse_positions("[\n]\n") == []


@given(records_strategy)
def test_round_trip(records):
    assert parse_positions(format_positions(records)) == records


@given(records_strategy)
def test_output_is_valid_json(records):
    decoded = json.loads(format_positions(records))
    assert decoded == [[r.id, r.x, r.y, r.r] for r in records]


def test_parse_without_newlines_and_with_spaces():
    assert parse_positions("[[1, 2, -3, 4],[7,8,9,10]]") == [
        PositionRecord(1, 2, -3, 4),
        PositionRecord(7, 8, 9, 10),
    ]


def test_parse_bad_first_character():
    with pytest.raises(PositionsFormatError):
        parse_positions("{}")


def test_parse_empty_input():
    with pytest.raises(PositionsFormatError):
        parse_positions("")


def test_parse_bad_entry_reports_index():
    with pytest.raises(PositionsFormatError) as info:
        parse_positions("[\n[1,2,3,4],\n[1,2,x,4]\n]\n")
    assert info.value.entry == 1


def test_parse_missing_close():
    with pytest.raises(PositionsFormatError):
        parse_positions("[\n[1,2,3,4]\n")


def test_file_round_trip(tmp_path):
    path = tmp_path / "pos.json"
    records = [PositionRecord(10, -5, 6, 2), PositionRecord(11, 0, 0, 1)]
    assert write_positions(path, records) == 2
    assert read_positions(path) == records
    assert path.read_text() == format_positions(records)


def test_write_replaces_existing(tmp_path):
    path = tmp_path / "pos.json"
    write_positions(path, [PositionRecord(1, 1, 1, 1), PositionRecord(2, 2, 2, 2)])
    write_positions(path, [PositionRecord(3, 3, 3, 3)])
    assert read_positions(path) == [PositionRecord(3, 3, 3, 3)]


def test_read_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_positions(tmp_path / "absent.json")


def test_format_links():
    text = format_links([(1, [(2, 0.5), (3, 1.0)]), (4, [])])
    assert text == "[\n[1,[[2,0.5],[3,1]]],\n[4,[]]\n]\n"


def test_format_links_is_json():
    links = [(1, [(2, 0.25)]), (9, [(1, 3.0), (2, 0.125)])]
    decoded = json.loads(format_links(links))
    assert decoded == [[1, [[2, 0.25]]], [9, [[1, 3], [2, 0.125]]]]


def test_format_links_empty():
    assert format_links([]) == "[\n]\n"


def test_write_links(tmp_path):
    path = tmp_path / "links.json"
    links = [(1, iter([(2, 0.5)])), (2, iter([(1, 0.5)]))]
    assert write_links(path, links) == 2
    assert json.loads(path.read_text()) == [[1, [[2, 0.5]]], [2, [[1, 0.5]]]]