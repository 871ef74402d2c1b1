import pytest

from docx2ir.docx.models import (
    BookMark,
    BreakElem,
    Cell,
    Chart,
    Drawing,
    Footnote,
    InternalHyperLink,
    LevelInfo,
    ListItem,
    OMathPara,
    PlainOMath,
    PlainRun,
    Row,
    RunStyle,
    TabElem,
    Table,
    TableLook,
    TextElem,
    TextRun,
)
from docx2ir.ir.models import (
    IrBlockQuote,
    IrBulletList,
    IrCode,
    IrCodeBlock,
    IrHeader,
    IrImage,
    IrLineBreak,
    IrMath,
    IrNote,
    IrPara,
    IrPlain,
    IrSpace,
    IrSpan,
    IrStr,
    IrSuperscript,
    IrTable,
)
from docx2ir.media import MediaBag

from builders import convert, heading, para, plain, text_run


def blocks_of(body, **kwargs):
    return convert(body, **kwargs).document.blocks


class TestParagraphs:

    def test_plain_paragraph(self):
        assert blocks_of([para("Hello world")]) == [IrPara([IrStr("Hello"), IrSpace(), IrStr("world")])]

    def test_surrounding_whitespace_is_trimmed(self):
        run = TextRun(elems=[BreakElem(), TextElem(" text "), TabElem()])
        assert blocks_of([para(PlainRun(run))]) == [IrPara([IrStr("text")])]

    def test_empty_paragraph_emits_nothing(self):
        assert blocks_of([para("body"), para("   "), para("end")]) == [
            IrPara([IrStr("body")]),
            IrPara([IrStr("end")]),
        ]

    def test_indented_paragraph_is_block_quote(self):
        blocks = blocks_of([para("body"), para("quoted", indentation=(720, 0))])
        assert blocks[1] == IrBlockQuote([IrPara([IrStr("quoted")])])

    def test_line_break_inside(self):
        run = TextRun(elems=[TextElem("a"), BreakElem(), TextElem("b")])
        assert blocks_of([para(PlainRun(run))]) == [IrPara([IrStr("a"), IrLineBreak(), IrStr("b")])]


class TestDropCap:

    def test_drop_cap_merges_into_next_paragraph(self):
        blocks = blocks_of([para("body"), para("A", drop_cap=True), para("bc")])
        assert blocks == [IrPara([IrStr("body")]), IrPara([IrStr("Abc")])]

    def test_pending_drop_cap_is_cleared(self):
        blocks = blocks_of([para("body"), para("A", drop_cap=True), para("bc"), para("de")])
        assert blocks[-1] == IrPara([IrStr("de")])

    def test_trailing_drop_cap_is_dropped(self):
        assert blocks_of([para("body"), para("A", drop_cap=True)]) == [IrPara([IrStr("body")])]


class TestCodeBlocks:

    def test_code_paragraph_keeps_literal_text(self):
        run = TextRun(elems=[TextElem("if x:"), BreakElem(), TabElem(), TextElem("pass")])
        blocks = blocks_of([para("body"), para(PlainRun(run), styles=["SourceCode"], indentation=(720, 0))])
        assert blocks[1] == IrCodeBlock("if x:\n\tpass")

    def test_consecutive_code_paragraphs_merge(self):
        blocks = blocks_of([para("body"), para("a", styles=["SourceCode"]), para("b", styles=["SourceCode"])])
        assert blocks[1] == IrCodeBlock("a\nb")

    def test_verbatim_char_run(self):
        style = RunStyle(style=("VerbatimChar", RunStyle()))
        blocks = blocks_of([para(plain("x = 1", style))])
        assert blocks == [IrPara([IrCode("x = 1")])]

    def test_verbatim_char_keeps_superscript_only(self):
        style = RunStyle(bold=True, vert_align="superscript", style=("VerbatimChar", RunStyle()))
        blocks = blocks_of([para(plain("n", style))])
        assert blocks == [IrPara([IrSuperscript([IrCode("n")])])]


class TestHeadings:

    def test_heading_level_and_identifier(self):
        blocks = blocks_of([para("body"), heading("Introduction", level=2)])
        header = blocks[1]
        assert isinstance(header, IrHeader)
        assert header.level == 2
        assert header.attr.identifier == "introduction"
        assert "Heading2" not in header.attr.classes

    def test_heading_keeps_surrounding_spaces(self):
        header = blocks_of([para("body"), heading("Intro ")])[1]
        assert header.inlines == [IrStr("Intro"), IrSpace()]
        assert header.attr.identifier == "intro"

    def test_heading_is_not_block_quoted(self):
        indented = para("Indented", styles=["Heading1"], heading=("Heading1", 1), indentation=(720, 0))
        blocks = blocks_of([para("body"), indented])
        assert isinstance(blocks[1], IrHeader)

    def test_bookmarked_heading_and_link(self):
        body = [
            para("body"),
            heading(BookMark("0", "_bm1"), "Intro"),
            para(InternalHyperLink("_bm1", [text_run("see")])),
        ]
        blocks = blocks_of(body)
        assert blocks[1].attr.identifier == "intro"
        assert blocks[1].inlines == [IrStr("Intro")]
        link = blocks[2].inlines[0]
        assert link.url == "#intro"


class TestListItems:

    def test_list_item_becomes_list(self):
        info = LevelInfo(level="0", format="bullet", text="•")
        body = [
            para("body"),
            ListItem(num_id="1", level="0", level_info=info, parts=[plain("one")]),
            ListItem(num_id="1", level="0", level_info=info, parts=[plain("two")]),
        ]
        blocks = blocks_of(body)
        assert blocks[1] == IrBulletList([[IrPara([IrStr("one")])], [IrPara([IrStr("two")])]])

    def test_list_item_without_level_info(self):
        body = [para("body"), ListItem(num_id="9", level="0", level_info=None, parts=[plain("loose")])]
        blocks = blocks_of(body)
        assert blocks[1] == IrPara([IrStr("loose")])


class TestTables:

    def _table(self, rows, first_row=False):
        return Table(
            rows=[Row([Cell([para(text)]) for text in row]) for row in rows],
            look=TableLook(first_row=first_row),
        )

    def test_empty_table(self):
        assert blocks_of([para("body"), Table()])[1] == IrPara([])

    def test_header_row(self):
        table = blocks_of([para("body"), self._table([["h1", "h2"], ["a", "b"]], first_row=True)])[1]
        assert isinstance(table, IrTable)
        assert table.headers == [[IrPlain([IrStr("h1")])], [IrPlain([IrStr("h2")])]]
        assert table.rows == [[[IrPlain([IrStr("a")])], [IrPlain([IrStr("b")])]]]

    def test_single_row_with_header_flag(self):
        table = blocks_of([para("body"), self._table([["a", "b"]], first_row=True)])[1]
        assert table.headers == [[], []]
        assert len(table.rows) == 1

    def test_no_header_flag(self):
        table = blocks_of([para("body"), self._table([["a"], ["b"]])])[1]
        assert table.headers == [[]]
        assert len(table.rows) == 2

    @pytest.mark.parametrize(
        "rows, first_row",
        [
            ([["a", "b", "c"], ["d", "e", "f"]], True),
            ([["h"], ["a", "b"]], True),
            ([["a", "b", "c", "d"]], False),
        ],
    )
    def test_shape_matches_first_data_row(self, rows, first_row):
        table = blocks_of([para("body"), self._table(rows, first_row)])[1]
        width = len(table.rows[0])
        assert len(table.headers) == width
        assert table.alignments == ["AlignDefault"] * width
        assert table.widths == [0.0] * width

    def test_caption(self):
        table = Table(caption="Sales data", rows=[Row([Cell([para("x")])])])
        result = blocks_of([para("body"), table])[1]
        assert result.caption == [IrStr("Sales"), IrSpace(), IrStr("data")]


class TestOtherContent:

    def test_display_math(self):
        assert blocks_of([para("body"), OMathPara("x^2")])[1] == IrPara([IrMath("DisplayMath", "x^2")])

    def test_inline_math(self):
        blocks = blocks_of([para("body"), para("a", PlainOMath("x"))])
        assert IrMath("InlineMath", "x") in blocks[1].inlines

    def test_footnote(self):
        note = Footnote([para("note text")])
        blocks = blocks_of([para("body", PlainRun(note))])
        assert blocks[0].inlines[-1] == IrNote([IrPara([IrStr("note"), IrSpace(), IrStr("text")])])

    def test_drawing_is_stored(self):
        bag = MediaBag()
        drawing = Drawing("media/image1.png", "T", "alt text", b"PNG", (914400.0, 457200.0))
        blocks = blocks_of([para("body"), para(drawing)], media_store=bag)

        image = blocks[1].inlines[0]
        assert isinstance(image, IrImage)
        assert image.url == "media/image1.png"
        assert image.title == "T"
        assert dict(image.attr.attributes) == {"width": "1.0in", "height": "0.5in"}
        assert bag.get("media/image1.png").data == b"PNG"

    def test_chart_placeholder(self):
        blocks = blocks_of([para("body"), para(Chart())])
        span = blocks[1].inlines[0]
        assert isinstance(span, IrSpan)
        assert span.attr.classes == ["chart"]
        assert span.inlines == [IrStr("[CHART]")]
