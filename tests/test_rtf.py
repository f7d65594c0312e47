import pytest

from mgpad.rtf import RTF_HEADER, TextRun, merge_runs, read_rtf, write_rtf


def test_write_rtf_toggles_formatting() -> None:
    runs = [TextRun("plain "), TextRun("bold", bold=True), TextRun(" and "), TextRun("both", italic=True, underline=True)]

    rtf = write_rtf(runs)

    assert rtf == RTF_HEADER + "plain \\b bold\\b0  and \\i \\ul both}"


def test_write_rtf_escapes_specials() -> None:
    rtf = write_rtf([TextRun("a\\b {c}\nd\te")])

    assert rtf == RTF_HEADER + "a\\\\b \\{c\\}\\par\nd\\tab e}"


def test_write_rtf_unicode() -> None:
    assert write_rtf([TextRun("café")]).endswith("caf\\u233?}")
    assert write_rtf([TextRun("한")]).endswith("\\u-10916?}")
    # outside the BMP: surrogate pair
    assert write_rtf([TextRun("😀")]).endswith("\\u-10179?\\u-8704?}")


def test_read_rtf_restores_written_runs() -> None:
    runs = [
        TextRun("Title", bold=True),
        TextRun("\nSome "),
        TextRun("emphasis", italic=True),
        TextRun(", "),
        TextRun("underlined", underline=True),
        TextRun(" and café 😀 {braces} \\ done."),
    ]

    assert read_rtf(write_rtf(runs)) == runs


def test_read_rtf_from_word_processor() -> None:
    data = (
        "{\\rtf1\\ansi\\ansicpg1252\\deff0\\nouicompat{\\fonttbl{\\f0\\fnil\\fcharset0 Calibri;}}\n"
        "{\\colortbl ;\\red255\\green0\\blue0;}\n"
        "{\\*\\generator Riched20 10.0.19041}\\viewkind4\\uc1 \n"
        "\\pard\\sa200\\sl276\\slmult1\\f0\\fs22\\lang9 Total: \\b 1.50\\b0  and {\\i 2.5}\\par\n"
        "Caf\\'e9\\tab end\\par\n"
        "}\n"
    )

    runs = read_rtf(data)

    assert runs == [
        TextRun("Total: "),
        TextRun("1.50", bold=True),
        TextRun(" and "),
        TextRun("2.5", italic=True),
        TextRun("\nCafé\tend\n"),
    ]


def test_read_rtf_ulnone_and_plain() -> None:
    data = "{\\rtf1 \\ul a\\ulnone b\\b\\i c\\plain d}"
    assert read_rtf(data) == [
        TextRun("a", underline=True),
        TextRun("b"),
        TextRun("c", bold=True, italic=True),
        TextRun("d"),
    ]


def test_read_rtf_uc_skip_count() -> None:
    data = "{\\rtf1 \\uc2\\u233XYz}"
    assert read_rtf(data) == [TextRun("éz")]


def test_read_rtf_rejects_non_rtf() -> None:
    with pytest.raises(ValueError):
        read_rtf("just some text")


def test_merge_runs_joins_and_drops_empty() -> None:
    runs = [TextRun("a"), TextRun(""), TextRun("b"), TextRun("c", bold=True), TextRun("d", bold=True)]
    assert merge_runs(runs) == [TextRun("ab"), TextRun("cd", bold=True)]


@pytest.mark.parametrize(
    "data, expected",
    [
        ("{\\rtf1\\ansi\\ansicpg949\\deff0 \\'c7\\'d1\\'b1\\'db}", "한글"),
        ("{\\rtf1\\ansi\\ansicpg932\\deff0 \\'93\\'fa\n\\'96\\'7b}", "日本"),
        ("{\\rtf1\\ansi\\ansicpg1252 Caf\\'e9}", "Café"),
    ],
)
def test_read_rtf_decodes_hex_with_code_page(data: str, expected: str) -> None:
    assert read_rtf(data) == [TextRun(expected)]


def test_read_rtf_hex_run_keeps_its_formatting() -> None:
    data = "{\\rtf1\\ansi\\ansicpg949 \\b \\'c7\\'d1\\b0 \\'b1\\'db}"
    assert read_rtf(data) == [TextRun("한", bold=True), TextRun("글")]


def test_read_rtf_unknown_code_page_falls_back(caplog) -> None:
    assert read_rtf("{\\rtf1\\ansi\\ansicpg99999 Caf\\'e9}") == [TextRun("Café")]
    assert "99999" in caplog.text
