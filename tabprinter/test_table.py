"""
Unit tests for the table model, rendering entry points and derived tables.

Run with: pytest tabprinter/test_table.py -v
"""

import io

import pytest
from .ansi import ColorSpec, Palette, strip_ansi
from .column import Alignment
from .errors import ColumnCountMismatch, InvalidWidth, RenderIOError
from .styles import TableStyle
from .table import Table
from .width import display_width


def make_table(style=TableStyle.GRID, **kwargs):
    """Three-column table with two rows."""
    table = Table(style, **kwargs)
    table.add_column("Name", 8, Alignment.LEFT)
    table.add_column("Age", 5, Alignment.RIGHT)
    table.add_column("City", 13, Alignment.CENTER)
    table.add_row(["Alice", "30", "New York"])
    table.add_row(["Bob", "25", "Los Angeles"])
    return table


class TestConstruction:
    """Tests for add_column / add_row."""

    def test_add_column(self):
        table = Table(TableStyle.SIMPLE)
        column = table.add_column("Test", 10, Alignment.LEFT)
        assert len(table.columns) == 1
        assert column.header == "Test"
        assert column.width == 10
        assert column.alignment is Alignment.LEFT

    def test_add_column_alignment_by_name(self):
        table = Table()
        assert table.add_column("n", 3, "r").alignment is Alignment.RIGHT

    @pytest.mark.parametrize("width", [0, -1])
    def test_add_column_invalid_width(self, width):
        table = Table()
        with pytest.raises(InvalidWidth):
            table.add_column("Bad", width, Alignment.LEFT)
        assert table.columns == ()

    def test_add_row(self):
        table = Table(TableStyle.SIMPLE)
        table.add_column("Test", 10, Alignment.LEFT)
        table.add_row(["Value"])
        assert len(table) == 1
        assert table.rows[0] == ("Value",)

    def test_add_row_converts_values(self):
        table = Table()
        table.add_column("n", 3)
        table.add_column("x", 3)
        table.add_row([1, None])
        assert table.rows[0] == ("1", "None")

    @pytest.mark.parametrize("cells", [[], ["a"], ["a", "b", "c"]])
    def test_add_row_mismatch(self, cells):
        """add_row fails iff the cell count differs from the column count."""
        table = Table()
        table.add_column("A", 5)
        table.add_column("B", 5)
        with pytest.raises(ColumnCountMismatch) as exc_info:
            table.add_row(cells)
        assert exc_info.value.expected == 2
        assert exc_info.value.actual == len(cells)
        assert len(table) == 0

    @pytest.mark.parametrize("marker", ["\n", "\033[31m", "\u2028", None])
    def test_invalid_marker_rejected(self, marker):
        with pytest.raises(ValueError, match="truncation_marker"):
            Table(truncation_marker=marker)

    def test_marker_fills_column_exactly(self):
        table = Table(TableStyle.GRID, truncation_marker="~>")
        table.add_column("Word", 6)
        table.add_row(["extraordinary"])
        assert "|extr~>|" in table.render_plain().splitlines()
        assert strip_ansi(table.render_color()) == table.render_plain()

    def test_add_row_without_columns(self):
        table = Table()
        table.add_row([])
        with pytest.raises(ColumnCountMismatch):
            table.add_row(["x"])

    def test_failed_row_can_be_retried(self):
        table = Table()
        table.add_column("A", 5)
        with pytest.raises(ColumnCountMismatch):
            table.add_row(["a", "b"])
        table.add_row(["a"])
        assert table.rows == (("a",),)

    def test_string_row_rejected(self):
        table = Table()
        table.add_column("A", 5)
        with pytest.raises(TypeError):
            table.add_row("a")

    def test_column_after_rows_rejected(self):
        """Existing rows would be short a cell."""
        table = Table()
        table.add_column("A", 5)
        table.add_row(["a"])
        with pytest.raises(ColumnCountMismatch, match="after rows"):
            table.add_column("B", 5)
        assert len(table.columns) == 1

    def test_style_by_name(self):
        assert Table("fancy-grid").style is TableStyle.FANCY_GRID

    @pytest.mark.parametrize("padding", [-1, 1.5, True])
    def test_invalid_padding(self, padding):
        with pytest.raises(ValueError):
            Table(padding=padding)


class TestGridExample:
    """Name(10, Left), Age(5, Right) with style GRID."""

    @pytest.fixture
    def table(self):
        table = Table(TableStyle.GRID)
        table.add_column("Name", 10, Alignment.LEFT)
        table.add_column("Age", 5, Alignment.RIGHT)
        table.add_row(["Alice", "30"])
        return table

    def test_exact_output(self, table):
        assert table.render_plain() == (
            "+----------+-----+\n"
            "|Name      |  Age|\n"
            "+----------+-----+\n"
            "|Alice     |   30|\n"
            "+----------+-----+\n"
        )

    def test_line_width_is_widths_plus_three(self, table):
        lines = table.render_plain().splitlines()
        assert all(display_width(line) == 10 + 5 + 3 for line in lines)
        assert table.width == 18

    def test_one_data_line(self, table):
        lines = table.render_plain().splitlines()
        assert sum(1 for line in lines if "Alice" in line) == 1
        assert sum(1 for line in lines if line.startswith("|")) == 2

    def test_padding_adds_two_per_column(self, table):
        table.padding = 1
        assert table.render_plain().splitlines()[1] == "| Name       |   Age |"
        assert table.width == 22


class TestStyles:
    """Rendering across styles."""

    def test_zero_row_round(self):
        table = Table(TableStyle.ROUND)
        table.add_column("Name", 4)
        table.add_column("Age", 3, Alignment.RIGHT)
        out = table.render_plain()
        assert out == (
            "╭────┬───╮\n"
            "│Name│Age│\n"
            "├────┼───┤\n"
            "╰────┴───╯\n"
        )
        assert not out.endswith("\n\n")

    def test_simple(self):
        out = make_table(TableStyle.SIMPLE).render_plain()
        assert out == (
            "Name       Age     City     \n"
            "Alice       30   New York   \n"
            "Bob         25  Los Angeles \n"
        )

    def test_banner(self):
        table = Table(TableStyle.BANNER)
        table.add_column("A", 2)
        table.add_row(["x"])
        assert table.render_plain() == "╒══╕\n│A │\n╘══╛\n│x │\n╘══╛\n"

    def test_markdown(self):
        table = Table(TableStyle.MARKDOWN, padding=1)
        table.add_column("Key", 3)
        table.add_column("Value", 5, Alignment.RIGHT)
        table.add_row(["a", "1"])
        assert table.render_plain() == (
            "| Key | Value |\n"
            "|-----|-------|\n"
            "| a   |     1 |\n"
        )

    def test_block(self):
        table = Table(TableStyle.BLOCK)
        table.add_column("A", 1)
        table.add_column("B", 1)
        table.add_row(["x", "y"])
        assert table.render_plain() == "◢■■■◣\n A B \n ━━━ \n x y \n◥■■■◤\n"

    @pytest.mark.parametrize("style", list(TableStyle))
    @pytest.mark.parametrize("padding", [0, 1, 2])
    def test_all_lines_same_width(self, style, padding):
        """Grid alignment holds for every style, including wide text."""
        table = make_table(style, padding=padding)
        table.add_row(["日本語の名前", "100000", "Zoë\tMüller"])
        table.add_row(["😀", "", "x" * 40])
        lines = table.render_plain().splitlines()
        assert lines
        assert {display_width(line) for line in lines} == {table.width}

    @pytest.mark.parametrize("style", list(TableStyle))
    def test_line_count(self, style):
        table = make_table(style)
        sd = table.style_def
        expected = 1 + len(table) + (2 if sd.has_banner else 0) \
            + (1 if sd.has_header_separator else 0)
        assert len(table.render_plain().splitlines()) == expected

    def test_amiga_plain_fallback(self):
        """Color-only style still renders a well-formed plain table."""
        out = make_table(TableStyle.AMIGA).render_plain()
        assert out
        assert out == make_table(TableStyle.SIMPLE).render_plain()
        assert "\033[" not in out

    @pytest.mark.parametrize("style", list(TableStyle))
    def test_zero_columns(self, style):
        table = Table(style)
        assert table.render_plain() == ""
        assert table.render_color() == ""
        assert table.width == 0


class TestColor:
    """Tests for color rendering."""

    @pytest.mark.parametrize("style", list(TableStyle))
    def test_strip_color_equals_plain(self, style):
        table = make_table(style, padding=1)
        assert strip_ansi(table.render_color()) == table.render_plain()

    def test_line_separators_in_cells_keep_grid(self):
        table = Table(TableStyle.GRID)
        table.add_column("Note", 6)
        table.add_row(["a\u2028b\u2029c"])
        plain = table.render_plain()
        assert len(plain.splitlines()) == 5
        assert {display_width(line) for line in plain.splitlines()} == {table.width}
        assert strip_ansi(table.render_color()) == plain

    def test_color_output_has_escapes(self):
        assert "\033[" in make_table(TableStyle.GRID).render_color()

    def test_amiga_palette(self):
        out = make_table(TableStyle.AMIGA).render_color()
        first, second = out.splitlines()[:2]
        assert "\033[34mName" in first
        assert "\033[37mAlice" in second

    def test_explicit_palette_overrides_style(self):
        palette = Palette(border=ColorSpec(), header=ColorSpec(fg="red"), cell=ColorSpec())
        table = make_table(TableStyle.NEON, palette=palette)
        out = table.render_color()
        assert "\033[31m" in out
        assert "\033[95m" not in out

    def test_render_color_argument_palette(self):
        palette = Palette(border=ColorSpec(), header=ColorSpec(), cell=ColorSpec())
        table = make_table(TableStyle.GRID)
        assert table.render_color(palette) == table.render_plain()


class TestSinks:
    """Tests for writing to output sinks."""

    def test_write_plain(self):
        table = make_table()
        buf = io.StringIO()
        table.write_plain(buf)
        assert buf.getvalue() == table.render_plain()

    def test_write_color(self):
        table = make_table()
        buf = io.StringIO()
        table.write_color(buf)
        assert buf.getvalue() == table.render_color()

    def test_binary_sink(self):
        table = make_table(TableStyle.ROUND)
        buf = io.BytesIO()
        table.write_plain(buf)
        assert buf.getvalue().decode("utf-8") == table.render_plain()

    def test_failing_sink_raises(self):
        class BrokenSink:
            def write(self, text):
                raise OSError("disk full")

        with pytest.raises(RenderIOError, match="disk full") as exc_info:
            make_table().write_plain(BrokenSink())
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_failure_after_partial_write(self):
        class FlakySink:
            def __init__(self):
                self.lines = []

            def write(self, text):
                if len(self.lines) == 2:
                    raise OSError("broken pipe")
                self.lines.append(text)

        sink = FlakySink()
        with pytest.raises(RenderIOError):
            make_table().write_color(sink)
        assert len(sink.lines) == 2

    def test_closed_sink(self):
        buf = io.StringIO()
        buf.close()
        with pytest.raises(RenderIOError):
            make_table().write_plain(buf)

    def test_render_io_error_is_os_error(self):
        buf = io.StringIO()
        buf.close()
        with pytest.raises(OSError):
            make_table().write_plain(buf)

    def test_print_explicit_color(self):
        table = make_table()
        buf = io.StringIO()
        table.print(buf, color=True)
        assert buf.getvalue() == table.render_color()

    def test_print_auto_color_non_tty(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("FORCE_COLOR", raising=False)
        table = make_table()
        buf = io.StringIO()
        table.print(buf)
        assert buf.getvalue() == table.render_plain()

    def test_print_defaults_to_stdout(self, capsys):
        table = make_table()
        table.print(color=False)
        assert capsys.readouterr().out == table.render_plain()


class TestDerived:
    """Tests for sorting, filtering and pagination."""

    @pytest.fixture
    def books(self):
        table = Table(TableStyle.GRID)
        table.add_column("Title", 22)
        table.add_column("Year", 6, Alignment.RIGHT)
        table.add_rows([
            ["1984", "1949"],
            ["To Kill a Mockingbird", "1960"],
            ["The Great Gatsby", "1925"],
            ["Pride and Prejudice", "1813"],
            ["The Catcher in the Rye", "1951"],
        ])
        return table

    def test_sort_numeric_ascending(self, books):
        years = [row[1] for row in books.sorted_by("Year").rows]
        assert years == ["1813", "1925", "1949", "1951", "1960"]

    def test_sort_descending_by_index(self, books):
        years = [row[1] for row in books.sorted_by(1, ascending=False).rows]
        assert years == ["1960", "1951", "1949", "1925", "1813"]

    def test_sort_text(self, books):
        titles = [row[0] for row in books.sorted_by("Title").rows]
        assert titles[0] == "1984"
        assert titles[1:] == sorted(titles[1:])

    def test_sort_numbers_before_text(self):
        table = Table()
        table.add_column("v", 5)
        table.add_rows([["b"], ["10"], ["a"], ["9"], ["-1.5"]])
        assert [r[0] for r in table.sorted_by(0).rows] == ["-1.5", "9", "10", "a", "b"]

    def test_sort_descending_keeps_numbers_first(self):
        table = Table()
        table.add_column("v", 5)
        table.add_rows([["b"], ["10"], ["a"], ["9"], ["-1.5"]])
        rows = table.sorted_by(0, ascending=False).rows
        assert [r[0] for r in rows] == ["10", "9", "-1.5", "b", "a"]

    def test_sort_descending_is_stable(self):
        table = Table()
        table.add_column("k", 3)
        table.add_column("tag", 3)
        table.add_rows([["1", "x"], ["2", "y"], ["1", "z"]])
        rows = table.sorted_by("k", ascending=False).rows
        assert rows == (("2", "y"), ("1", "x"), ("1", "z"))

    def test_sort_leaves_source_untouched(self, books):
        before = books.rows
        books.sorted_by("Year")
        assert books.rows == before

    def test_sort_unknown_column(self, books):
        with pytest.raises(KeyError):
            books.sorted_by("Author")
        with pytest.raises(IndexError):
            books.sorted_by(5)

    def test_filter(self, books):
        recent = books.filter(lambda row: int(row[1]) > 1950)
        assert [r[0] for r in recent.rows] == ["To Kill a Mockingbird", "The Catcher in the Rye"]
        assert recent.columns == books.columns
        assert recent.style is books.style

    def test_derived_table_is_append_only_copy(self, books):
        copy = books.filter(lambda row: True)
        copy.add_row(["New", "2024"])
        assert len(books) == 5
        assert len(copy) == 6

    def test_pages(self):
        table = Table(TableStyle.GRID, page_size=10)
        table.add_column("ID", 5, Alignment.RIGHT)
        table.add_rows([[str(i)] for i in range(1, 26)])
        pages = list(table.pages())
        assert table.page_count() == 3
        assert [len(p) for p in pages] == [10, 10, 5]
        assert pages[2].rows[0] == ("21",)

    def test_single_page_without_page_size(self):
        table = make_table()
        assert table.page_count() == 1
        assert [len(p) for p in table.pages()] == [2]

    def test_empty_table_has_one_page(self):
        table = Table(page_size=5)
        table.add_column("A", 3)
        assert table.page_count() == 1
        assert [len(p) for p in table.pages()] == [0]

    @pytest.mark.parametrize("size", [0, -2, 2.5])
    def test_invalid_page_size(self, size):
        with pytest.raises(ValueError):
            Table().set_page_size(size)

    def test_print_paginated(self):
        table = Table(TableStyle.SIMPLE, page_size=2)
        table.add_column("N", 2)
        table.add_rows([["1"], ["2"], ["3"]])
        pauses = []
        buf = io.StringIO()
        table.print_paginated(buf, color=False, pause=lambda: pauses.append(True))
        assert buf.getvalue() == (
            "Page 1 of 2\n"
            "N \n1 \n2 \n"
            "Page 2 of 2\n"
            "N \n3 \n"
        )
        assert len(pauses) == 1
