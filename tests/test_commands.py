from __future__ import annotations

import pytest

from buf_edit.actions import Command, CommandError, apply_command, parse_command, run_script
from buf_edit.buffer import Buffer, Status

LINES = ("Test file", "", "Wally", "line 4", "line 5", "line 6", "")


def make_buffer() -> Buffer:
    return Buffer.from_lines(LINES, source_id="test.txt")


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("12", Command("goto", ("12",))),
        ("+2", Command("relative", ("+2",))),
        ("-1", Command("relative", ("-1",))),
        ("$", Command("end")),
        ("/Wally/", Command("search_down", ("Wally",))),
        ("/Wally", Command("search_down", ("Wally",))),
        ("?line \\d?", Command("search_up", ("line \\d",))),
        ("/a\\\\/", Command("search_down", ("a\\\\",))),
        ("/a\\/", Command("search_down", ("a\\/",))),
        ("/a\\//", Command("search_down", ("a\\/",))),
        ("d", Command("delete", ("1",))),
        ("d3", Command("delete", ("3",))),
        ("d 2", Command("delete", ("2",))),
        ("i hello world", Command("insert", ("hello world",))),
        ("i", Command("insert", ("",))),
        ("c replaced", Command("change", ("replaced",))),
        ("s/old/new/", Command("substitute", ("old", "new"))),
        ("s|a/b|c|", Command("substitute", ("a/b", "c"))),
        ("s/gone/", Command("substitute", ("gone", ""))),
    ],
)
def test_parse_command(text: str, expected: Command) -> None:
    assert parse_command(text) == expected


def test_parse_insert_keeps_inner_whitespace() -> None:
    assert parse_command("i   indented  \n").args == ("  indented  ",)


@pytest.mark.parametrize("text", ["", "   ", "x", "dx", "/", "?", "ifoo", "s", "s/", "s/a/b/c"])
def test_parse_command_rejects_malformed(text: str) -> None:
    with pytest.raises(CommandError) as excinfo:
        parse_command(text)

    assert excinfo.value.command == text


def test_apply_search_and_delete() -> None:
    buffer = apply_command(make_buffer(), "/Wally/")
    assert buffer.line_num == 3

    buffer = apply_command(buffer, "d")

    assert buffer.lines == ("Test file", "", "line 4", "line 5", "line 6", "")


def test_apply_invalid_regex_raises_command_error() -> None:
    with pytest.raises(CommandError):
        apply_command(make_buffer(), "/[unclosed/")


def test_apply_navigation_commands() -> None:
    buffer = make_buffer()

    assert apply_command(buffer, "4").cursor == (4, 1)
    assert apply_command(apply_command(buffer, "4"), "-2").line_num == 2
    assert apply_command(buffer, "$").line_num == 7


def test_apply_change_and_substitute() -> None:
    buffer = apply_command(make_buffer(), "/line 4/")

    changed = apply_command(buffer, "c fourth")
    substituted = apply_command(buffer, "s/line/row/")

    assert changed.lines[3] == "fourth"
    assert changed.line_num == 5
    assert substituted.lines[3] == "row 4"


def test_run_script_skips_comments_and_blanks() -> None:
    script = [
        "# move to the blank line",
        "2",
        "",
        "i inserted",
        "?Test?",
        "s/Test/Demo/",
    ]

    buffer = run_script(make_buffer(), script)

    assert buffer.lines[:3] == ("Demo file", "inserted", "")
    assert buffer.status is Status.OK


def test_run_script_failed_search_skips_edits_until_move() -> None:
    script = ["/Not here/", "d", "i never", "1", "d"]

    buffer = run_script(make_buffer(), script)

    assert buffer.lines == LINES[1:]


def test_run_script_propagates_command_error() -> None:
    with pytest.raises(CommandError):
        run_script(make_buffer(), ["/Wally/", "bogus"])
