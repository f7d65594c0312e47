import pytest

from mgpad.lists import (
    ListKind,
    continue_list,
    indent_level,
    is_list_line,
    letter_marker,
    parse_list_line,
    renumber_lines,
    set_indent_level,
)


def _renumber(text: str) -> str:
    return "\n".join(renumber_lines(text.split("\n")))


def test_renumber_lists_separates_numbering_by_indent() -> None:
    text = "1. Parent\n    5. Child\n    9. Second child\n3. Next parent\n"

    assert _renumber(text) == "1. Parent\n    1. Child\n    2. Second child\n2. Next parent\n"


def test_renumber_lists_restarts_after_plain_line() -> None:
    text = "4. one\n7. two\nA paragraph.\n9. again\n"

    assert _renumber(text) == "1. one\n2. two\nA paragraph.\n1. again\n"


def test_renumber_lists_letters_keep_case_and_punctuation() -> None:
    text = "C) first\nq) second\n\tx. nested\n"

    assert _renumber(text) == "A) first\nB) second\n\ta. nested\n"


def test_renumber_lists_leaves_bullets_alone() -> None:
    text = "- apples\n* pears\n"
    assert _renumber(text) == text


def test_renumber_lists_bullet_interrupts_same_level() -> None:
    text = "2. a\n- b\n5. c\n"
    assert _renumber(text) == "1. a\n- b\n1. c\n"


def test_renumber_lists_kind_change_restarts() -> None:
    text = "3. a\nb. b\nz. c\n"
    assert _renumber(text) == "1. a\na. b\nb. c\n"


def test_renumber_lists_preserves_crlf() -> None:
    text = "2. a\r\n2. b\r\n"
    assert _renumber(text) == "1. a\r\n2. b\r\n"


def test_renumber_lines_keeps_line_count() -> None:
    lines = ["5. a", "", "7. b"]
    assert renumber_lines(lines) == ["1. a", "", "1. b"]


def test_lettered_list_clamps_at_z() -> None:
    lines = [f"a. item {i}" for i in range(28)]
    out = renumber_lines(lines)
    assert out[0].startswith("a. ")
    assert out[25].startswith("z. ")
    assert out[27].startswith("z. ")


def test_parse_list_line_parts() -> None:
    parsed = parse_list_line("    12) Buy milk\n")

    assert parsed is not None
    assert parsed.kind is ListKind.NUMBERED
    assert parsed.indent == "    "
    assert parsed.level == 1
    assert parsed.marker == "12"
    assert parsed.punctuation == ")"
    assert parsed.spacing == " "
    assert parsed.content == "Buy milk"
    assert parsed.line_break == "\n"
    assert parsed.prefix == "    12) "


@pytest.mark.parametrize(
    "line, expected",
    [
        ("1. item", True),
        ("a) item", True),
        ("- item", True),
        ("* item", True),
        ("1.item", False),
        ("I am here", False),
        ("1 item", False),
        ("plain text", False),
        ("", False),
    ],
)
def test_is_list_line(line: str, expected: bool) -> None:
    assert is_list_line(line) is expected


@pytest.mark.parametrize(
    "line, level",
    [
        ("1. a", 0),
        ("    1. a", 1),
        ("\t1. a", 1),
        ("\t    - a", 2),
        ("  - a", 0),
        ("not a list", 0),
    ],
)
def test_indent_level(line: str, level: int) -> None:
    assert indent_level(line) == level


def test_set_indent_level() -> None:
    assert set_indent_level("\t1. a\n", 2) == "        1. a\n"
    assert set_indent_level("    - a", 0) == "- a"
    assert set_indent_level("    - a", -3) == "- a"
    assert set_indent_level("plain", 3) == "plain"


@pytest.mark.parametrize(
    "line, expected",
    [
        ("1. first", "2. "),
        ("  9) ninth", "  10) "),
        ("b. second", "c. "),
        ("C) third", "D) "),
        ("z. last", "z. "),
        ("- bullet", "- "),
        ("1. ", ""),
        ("-   ", ""),
        ("just text", None),
    ],
)
def test_continue_list(line: str, expected) -> None:
    assert continue_list(line) == expected


def test_letter_marker() -> None:
    assert letter_marker(1, False) == "a"
    assert letter_marker(3, True) == "C"
    assert letter_marker(0, False) == "a"
    assert letter_marker(40, True) == "Z"
