import io
import zipfile

import pytest

from docx2ir.docx.models import (
    BookMark,
    Chart,
    CommentEnd,
    CommentStart,
    Deletion,
    Drawing,
    ExternalHyperLink,
    Footnote,
    Insertion,
    InternalHyperLink,
    ListItem,
    OMathPara,
    Paragraph,
    PlainOMath,
    PlainRun,
    Table,
    TextElem,
)
from docx2ir.docx.reader import DocxReader
from docx2ir.errors import DocxPackageError, StyleChainError

from builders import docx_bytes, w_p, w_r

STYLES = (
    '<w:style w:type="paragraph" w:styleId="Normal"><w:name w:val="Normal"/></w:style>'
    '<w:style w:type="paragraph" w:styleId="Heading1"><w:name w:val="heading 1"/>'
    '<w:basedOn w:val="Normal"/></w:style>'
    '<w:style w:type="paragraph" w:styleId="Titre2"><w:name w:val="heading 2"/></w:style>'
    '<w:style w:type="paragraph" w:styleId="MyHeading"><w:name w:val="My Heading"/>'
    '<w:basedOn w:val="Titre2"/></w:style>'
    '<w:style w:type="paragraph" w:styleId="Quote"><w:name w:val="Quote"/></w:style>'
    '<w:style w:type="character" w:styleId="Strong"><w:name w:val="Strong"/>'
    "<w:rPr><w:b/></w:rPr></w:style>"
    '<w:style w:type="character" w:styleId="StrongEmphasis"><w:name w:val="Strong Emphasis"/>'
    '<w:basedOn w:val="Strong"/><w:rPr><w:i/></w:rPr></w:style>'
)

NUMBERING = (
    '<w:abstractNum w:abstractNumId="0">'
    '<w:lvl w:ilvl="0"><w:start w:val="1"/><w:numFmt w:val="decimal"/><w:lvlText w:val="%1."/></w:lvl>'
    '<w:lvl w:ilvl="1"><w:numFmt w:val="bullet"/><w:lvlText w:val="o"/></w:lvl>'
    "</w:abstractNum>"
    '<w:num w:numId="1"><w:abstractNumId w:val="0"/></w:num>'
    '<w:num w:numId="2"><w:abstractNumId w:val="0"/>'
    '<w:lvlOverride w:ilvl="0"><w:startOverride w:val="4"/></w:lvlOverride></w:num>'
)


def read(body_xml, **kwargs):
    return DocxReader().read(docx_bytes(body_xml, **kwargs))


def first_part(body_xml, **kwargs):
    document, _ = read(body_xml, **kwargs)
    return document.body[0]


class TestPackage:

    def test_not_a_zip(self):
        with pytest.raises(DocxPackageError, match="couldn't parse docx file"):
            DocxReader().read(b"not a zip archive")

    def test_missing_main_part(self):
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w") as zf:
            zf.writestr("hello.txt", "hi")
        with pytest.raises(DocxPackageError):
            DocxReader().read(buffer.getvalue())

    def test_malformed_xml(self):
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w") as zf:
            zf.writestr("word/document.xml", "<w:document><w:body>")
        with pytest.raises(DocxPackageError, match="couldn't parse docx file"):
            DocxReader().read(buffer.getvalue())

    def test_corrupted_member(self):
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", zipfile.ZIP_STORED) as zf:
            zf.writestr("word/document.xml", w_p(w_r("checksum")))
        data = buffer.getvalue().replace(b"checksum", b"checksun", 1)
        with pytest.raises(DocxPackageError, match="couldn't parse docx file"):
            DocxReader().read(data)

    def test_reads_from_path(self, tmp_path):
        path = tmp_path / "sample.docx"
        path.write_bytes(docx_bytes(w_p(w_r("hello"))))
        document, warnings = DocxReader().read(path)
        assert isinstance(document.body[0], Paragraph)
        assert warnings == []


class TestRuns:

    def test_text_and_direct_formatting(self):
        part = first_part(w_p(w_r("bold", rpr="<w:b/><w:i w:val=\"0\"/>")))
        run = part.parts[0].run
        assert run.elems == [TextElem("bold")]
        assert run.style.bold is True
        assert run.style.italic is False

    def test_character_style_chain(self):
        part = first_part(w_p(w_r("x", rpr='<w:rStyle w:val="StrongEmphasis"/>')), styles_xml=STYLES)
        style_id, style = part.parts[0].run.style.style
        assert style_id == "StrongEmphasis"
        assert style.italic is True
        assert style.style[0] == "Strong"
        assert style.style[1].bold is True

    def test_cyclic_character_styles(self):
        styles = (
            '<w:style w:type="character" w:styleId="A"><w:basedOn w:val="B"/></w:style>'
            '<w:style w:type="character" w:styleId="B"><w:basedOn w:val="A"/></w:style>'
        )
        with pytest.raises(StyleChainError):
            read(w_p(w_r("x", rpr='<w:rStyle w:val="A"/>')), styles_xml=styles)

    def test_special_characters(self):
        xml = w_p("<w:r><w:t>a</w:t><w:tab/><w:br/><w:softHyphen/><w:noBreakHyphen/></w:r>")
        elems = first_part(xml).parts[0].run.elems
        assert [type(e).__name__ for e in elems] == [
            "TextElem", "TabElem", "BreakElem", "SoftHyphenElem", "NoBreakHyphenElem",
        ]

    def test_footnote_reference(self):
        footnotes = (
            '<w:footnote w:type="separator" w:id="-1"><w:p/></w:footnote>'
            '<w:footnote w:id="1">' + w_p(w_r("note body")) + "</w:footnote>"
        )
        xml = w_p(w_r("text"), '<w:r><w:footnoteReference w:id="1"/></w:r>')
        part = first_part(xml, footnotes_xml=footnotes)
        note = part.parts[1].run
        assert isinstance(note, Footnote)
        assert note.body[0].parts[0].run.elems == [TextElem("note body")]

    def test_missing_footnote_warns(self):
        document, warnings = read(w_p('<w:r><w:footnoteReference w:id="9"/></w:r>'))
        assert document.body[0].parts == []
        assert warnings == ["Docx footnote 9 not found"]

    def test_drawing(self):
        drawing = (
            "<w:r><w:drawing><wp:inline>"
            '<wp:extent cx="914400" cy="457200"/>'
            '<wp:docPr id="1" name="Picture 1" title="Chart title" descr="A picture"/>'
            "<a:graphic><a:graphicData><pic:pic><pic:blipFill>"
            '<a:blip r:embed="rIdImg"/>'
            "</pic:blipFill></pic:pic></a:graphicData></a:graphic>"
            "</wp:inline></w:drawing></w:r>"
        )
        part = first_part(w_p(drawing), media={"rIdImg": b"\x89PNG"})
        image = part.parts[0]
        assert isinstance(image, Drawing)
        assert image.path == "media/rIdImg.png"
        assert image.title == "Chart title"
        assert image.alt == "A picture"
        assert image.data == b"\x89PNG"
        assert image.extent == (914400.0, 457200.0)

    def test_chart(self):
        chart = (
            "<w:r><w:drawing><wp:inline><a:graphic><a:graphicData>"
            '<c:chart r:id="rIdChart"/>'
            "</a:graphicData></a:graphic></wp:inline></w:drawing></w:r>"
        )
        assert isinstance(first_part(w_p(chart)).parts[0], Chart)


class TestParagraphParts:

    def test_revisions(self):
        xml = w_p(
            '<w:ins w:id="1" w:author="Kim" w:date="2024-01-01T00:00:00Z">' + w_r("new") + "</w:ins>",
            '<w:del w:id="2" w:author="Lee" w:date="2024-01-02T00:00:00Z">'
            '<w:r><w:delText>old</w:delText></w:r></w:del>',
        )
        insertion, deletion = first_part(xml).parts
        assert isinstance(insertion, Insertion)
        assert (insertion.author, insertion.date) == ("Kim", "2024-01-01T00:00:00Z")
        assert isinstance(deletion, Deletion)
        assert deletion.runs[0].elems == [TextElem("old")]

    def test_revision_with_hyperlink_keeps_order(self):
        xml = w_p(
            '<w:ins w:id="1" w:author="Kim" w:date="">'
            + w_r("A")
            + '<w:hyperlink w:anchor="x">' + w_r("B") + "</w:hyperlink>"
            + w_r("C")
            + "</w:ins>"
        )
        insertion = first_part(xml).parts[0]
        texts = [elem.text for run in insertion.runs for elem in run.elems]
        assert texts == ["A", "B", "C"]

    def test_comment_range(self):
        comments = '<w:comment w:id="0" w:author="Kim" w:date="2024">' + w_p(w_r("remark")) + "</w:comment>"
        xml = w_p('<w:commentRangeStart w:id="0"/>', w_r("text"), '<w:commentRangeEnd w:id="0"/>')
        parts = first_part(xml, comments_xml=comments).parts
        assert isinstance(parts[0], CommentStart)
        assert parts[0].author == "Kim"
        assert len(parts[0].body) == 1
        assert parts[-1] == CommentEnd("0")

    def test_bookmark(self):
        xml = w_p('<w:bookmarkStart w:id="3" w:name="_Toc1"/>', w_r("x"), '<w:bookmarkEnd w:id="3"/>')
        assert first_part(xml).parts[0] == BookMark("3", "_Toc1")

    def test_hyperlinks(self):
        xml = w_p(
            '<w:hyperlink r:id="rIdLink">' + w_r("site") + "</w:hyperlink>",
            '<w:hyperlink w:anchor="_Toc1">' + w_r("inside") + "</w:hyperlink>",
        )
        external, internal = first_part(xml, links=[("rIdLink", "https://example.com/")]).parts
        assert isinstance(external, ExternalHyperLink)
        assert external.target == "https://example.com/"
        assert isinstance(internal, InternalHyperLink)
        assert internal.anchor == "_Toc1"

    def test_inline_math(self):
        xml = w_p(
            w_r("area "),
            "<m:oMath><m:sSup><m:e><m:r><m:t>r</m:t></m:r></m:e>"
            "<m:sup><m:r><m:t>2</m:t></m:r></m:sup></m:sSup></m:oMath>",
        )
        math = first_part(xml).parts[1]
        assert math == PlainOMath("{r}^{2}")

    def test_display_math(self):
        xml = (
            "<w:p><m:oMathPara><m:oMath><m:f><m:num><m:r><m:t>a</m:t></m:r></m:num>"
            "<m:den><m:r><m:t>b</m:t></m:r></m:den></m:f></m:oMath></m:oMathPara></w:p>"
        )
        assert first_part(xml) == OMathPara("\\frac{a}{b}")

    def test_content_controls_and_fields(self):
        xml = w_p(
            "<w:sdt><w:sdtContent>" + w_r("in control") + "</w:sdtContent></w:sdt>",
            '<w:fldSimple w:instr="PAGE">' + w_r("1") + "</w:fldSimple>",
        )
        parts = first_part(xml).parts
        assert all(isinstance(p, PlainRun) for p in parts)
        assert len(parts) == 2


class TestParagraphStyles:

    def test_heading_by_style_name(self):
        part = first_part(w_p(w_r("T"), ppr='<w:pStyle w:val="Heading1"/>'), styles_xml=STYLES)
        assert part.style.heading == ("Heading1", 1)

    def test_heading_is_inherited(self):
        part = first_part(w_p(w_r("T"), ppr='<w:pStyle w:val="MyHeading"/>'), styles_xml=STYLES)
        assert part.style.heading == ("MyHeading", 2)

    def test_block_quote_style(self):
        part = first_part(w_p(w_r("T"), ppr='<w:pStyle w:val="Quote"/>'), styles_xml=STYLES)
        assert part.style.block_quote is True

    def test_indentation_and_drop_cap(self):
        ppr = '<w:framePr w:dropCap="drop"/><w:ind w:left="720" w:firstLine="360"/>'
        style = first_part(w_p(w_r("A"), ppr=ppr)).style
        assert style.drop_cap is True
        assert style.indentation.left == 720
        assert style.indentation.hanging == -360


class TestLists:

    def test_list_item_level_info(self):
        ppr = '<w:numPr><w:ilvl w:val="0"/><w:numId w:val="1"/></w:numPr>'
        part = first_part(w_p(w_r("one"), ppr=ppr), numbering_xml=NUMBERING)
        assert isinstance(part, ListItem)
        assert part.num_id == "1"
        assert part.level_info.format == "decimal"
        assert part.level_info.text == "%1."
        assert part.level_info.start == 1

    def test_start_override(self):
        ppr = '<w:numPr><w:ilvl w:val="0"/><w:numId w:val="2"/></w:numPr>'
        part = first_part(w_p(w_r("four"), ppr=ppr), numbering_xml=NUMBERING)
        assert part.level_info.start == 4

    def test_unknown_numbering(self):
        ppr = '<w:numPr><w:ilvl w:val="0"/><w:numId w:val="7"/></w:numPr>'
        document, warnings = read(w_p(w_r("x"), ppr=ppr), numbering_xml=NUMBERING)
        assert document.body[0].level_info is None
        assert warnings == ["Docx numbering 7 level 0 not found"]

    def test_num_id_zero_is_not_a_list(self):
        ppr = '<w:numPr><w:ilvl w:val="0"/><w:numId w:val="0"/></w:numPr>'
        assert isinstance(first_part(w_p(w_r("x"), ppr=ppr)), Paragraph)


class TestTables:

    def _table(self, look):
        row = "<w:tr><w:tc>" + w_p(w_r("a")) + "</w:tc><w:tc>" + w_p(w_r("b")) + "</w:tc></w:tr>"
        return (
            f'<w:tbl><w:tblPr><w:tblCaption w:val="Totals"/>{look}</w:tblPr>'
            '<w:tblGrid><w:gridCol w:w="2000"/><w:gridCol w:w="3000"/></w:tblGrid>'
            f"{row}{row}</w:tbl>"
        )

    def test_table_structure(self):
        table = first_part(self._table('<w:tblLook w:firstRow="1"/>'))
        assert isinstance(table, Table)
        assert table.caption == "Totals"
        assert table.grid == [2000, 3000]
        assert table.look.first_row is True
        assert len(table.rows) == 2
        assert len(table.rows[0].cells) == 2

    def test_look_bitmask(self):
        assert first_part(self._table('<w:tblLook w:val="04A0"/>')).look.first_row is True
        assert first_part(self._table('<w:tblLook w:val="0400"/>')).look.first_row is False
