import pytest

import srcgen


def test_join_with_spaces_elides_empty_tokens() -> None:
    assert srcgen.join_with_spaces(["", "public", "", "int"]) == "public int"


def test_join_with_spaces_strips_and_drops_whitespace_and_none() -> None:
    tokens = ["  static ", "\t", None, " int", "Count  "]

    assert srcgen.join_with_spaces(tokens) == "static int Count"


def test_join_with_spaces_of_nothing_is_empty() -> None:
    assert srcgen.join_with_spaces([]) == ""
    assert srcgen.join_with_spaces(["", "   "]) == ""


@pytest.mark.parametrize("depth", [0, 1, 3, srcgen.MAX_DEPTH])
def test_indent_repeats_one_unit_per_level(depth: int) -> None:
    assert srcgen.indent(depth) == srcgen.INDENT_UNIT * depth


@pytest.mark.parametrize("depth", [-1, srcgen.MAX_DEPTH + 1])
def test_indent_rejects_out_of_range_depth(depth: int) -> None:
    with pytest.raises(ValueError):
        srcgen.indent(depth)


def test_prefix_indent_prepends_indentation() -> None:
    assert srcgen.prefix_indent(2, "{") == "\t\t{"


def test_line_for_optionally_terminates() -> None:
    assert srcgen.line_for(1, "import core") == "\timport core\r\n"
    assert srcgen.line_for(0, "import core", terminate=True) == "import core;\r\n"


def test_formatting_constants_are_platform_independent() -> None:
    assert srcgen.NEWLINE == "\r\n"
    assert srcgen.TERMINATOR == ";"
    assert srcgen.INDENT_UNIT == "\t"


def test_join_sections_puts_one_blank_line_between_non_empty_blocks() -> None:
    joined = srcgen.join_sections(["a", "", "b"])

    assert joined == "a\r\n\r\nb"
    assert srcgen.join_sections(["", ""]) == ""


def test_render_children_leaves_last_child_unterminated(
    make_field,
) -> None:
    text = srcgen.render_children([make_field("X"), make_field("Y")], 1)

    assert text == "\tint X;\r\n\tint Y;"
    assert srcgen.render_children([], 1) == ""
    assert srcgen.render_children(None, 1) == ""
