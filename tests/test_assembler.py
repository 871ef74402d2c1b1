import pytest

from docx2ir.convert.assembler import DocumentAssembler
from docx2ir.convert.context import ReaderOptions
from docx2ir.docx.models import (
    BookMark,
    CommentEnd,
    CommentStart,
    Deletion,
    DocxDocument,
    Insertion,
    InternalHyperLink,
)
from docx2ir.ir.base import collect_links, stringify, walk_inlines
from docx2ir.ir.models import IrHeader, IrSpan

from builders import convert, heading, para, text_run


def tracked_body():
    return [
        para(
            "kept",
            Insertion("1", "Kim", "2024-01-01", [text_run(" added")]),
            Deletion("2", "Lee", "2024-01-02", [text_run(" removed")]),
        ),
    ]


def spans(blocks):
    found = []

    def _visit(inline):
        if isinstance(inline, IrSpan):
            found.append(inline)
        return inline

    walk_inlines(_visit, blocks)
    return found


class TestTrackChanges:

    def test_accept(self):
        blocks = convert(tracked_body(), "accept").document.blocks
        assert stringify(blocks[0].inlines) == "kept added"
        assert spans(blocks) == []

    def test_reject(self):
        blocks = convert(tracked_body(), "reject").document.blocks
        assert stringify(blocks[0].inlines) == "kept removed"
        assert spans(blocks) == []

    def test_all(self):
        blocks = convert(tracked_body(), "all").document.blocks
        tagged = spans(blocks)
        assert [s.attr.classes for s in tagged] == [["insertion"], ["deletion"]]
        for span in tagged:
            attributes = dict(span.attr.attributes)
            assert attributes["author"]
            assert attributes["date"]
        assert dict(tagged[0].attr.attributes) == {"author": "Kim", "date": "2024-01-01"}

    def test_comments_only_in_all_mode(self):
        body = [
            para(
                CommentStart("5", "Kim", "2024-01-01", [para("remark")]),
                "text",
                CommentEnd("5"),
            ),
        ]
        assert spans(convert(body, "accept").document.blocks) == []
        classes = [s.attr.classes for s in spans(convert(body, "all").document.blocks)]
        assert classes == [["comment-start"], ["comment-end"]]


class TestAnchors:

    def test_forward_and_backward_links(self):
        body = [
            para(InternalHyperLink("_bm1", [text_run("forward")])),
            heading(BookMark("1", "_bm1"), "Intro"),
            para(InternalHyperLink("_bm1", [text_run("back")])),
            para(InternalHyperLink("nowhere", [text_run("missing")])),
        ]
        links = collect_links(convert(body).document.blocks)
        assert [link.url for link in links] == ["#intro", "#intro", "#nowhere"]

    def test_recorded_identifiers_are_unique(self):
        body = [
            para(BookMark("1", "intro"), "text"),
            heading("Intro"),
            para(BookMark("2", "intro-1"), "more"),
            heading("Intro"),
            para(BookMark("3", "_GoBack"), "end"),
        ]
        blocks = convert(body).document.blocks
        identifiers = [b.attr.identifier for b in blocks if isinstance(b, IrHeader)]
        identifiers += [s.attr.identifier for s in spans(blocks) if s.attr.classes == ["anchor"]]
        assert len(identifiers) == len(set(identifiers))


class TestAssembler:

    def test_parser_warnings_come_first(self):
        assembler = DocumentAssembler(ReaderOptions(track_changes="all"))
        body = [para(CommentStart("1", "Kim", "", [heading("Rich")]), "x")]
        result = assembler.convert(DocxDocument(body=body), parser_warnings=["parser warning"])
        assert result.warnings == ["parser warning", "Docx comment 1 will not retain formatting"]

    def test_each_conversion_starts_fresh(self):
        assembler = DocumentAssembler()
        document = DocxDocument(body=[heading("Intro")])
        first = assembler.convert(document)
        second = assembler.convert(document)
        assert first.document.blocks[0].attr.identifier == "intro"
        assert second.document.blocks[0].attr.identifier == "intro"

    def test_custom_structurers(self):
        calls = []

        def lists(blocks):
            calls.append("lists")
            return blocks

        def definitions(blocks):
            calls.append("definitions")
            return blocks

        assembler = DocumentAssembler(list_structurer=lists, definition_structurer=definitions)
        assembler.convert(DocxDocument(body=[para("x")]))
        assert calls == ["lists", "definitions"]

    def test_invalid_mode(self):
        with pytest.raises(ValueError):
            ReaderOptions(track_changes="maybe")
