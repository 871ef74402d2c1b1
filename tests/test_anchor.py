from docx2ir.convert.anchor import anchor_span, is_anchor_span
from docx2ir.ir.models import IrHeader, IrLink, IrPara, IrStr, attr_with


class TestBookmark:

    def test_dummy_anchor_is_ignored(self, anchors, context):
        assert anchors.bookmark("_GoBack") == []
        assert context.anchor_map == {}

    def test_new_name_is_kept(self, anchors, context):
        assert anchors.bookmark("intro") == [anchor_span("intro")]
        assert context.anchor_map == {"intro": "intro"}

    def test_name_already_used_as_identifier_is_renamed(self, anchors, context):
        context.record_anchor("_Toc1", "results")
        result = anchors.bookmark("results")
        assert result == [anchor_span("results-1")]
        assert context.anchor_map["results"] == "results-1"

    def test_values_stay_unique(self, anchors, context):
        for name in ["a", "b", "a-1"]:
            anchors.bookmark(name)
        context.record_anchor("x", "dup")
        anchors.bookmark("dup")
        values = list(context.anchor_map.values())
        assert len(values) == len(set(values))

    def test_replaced_identifier_is_free_again(self, context):
        context.record_anchor("a", "one")
        context.record_anchor("b", "one")
        context.record_anchor("a", "two")
        assert set(context.used_idents()) == {"one", "two"}
        context.record_anchor("b", "three")
        assert set(context.used_idents()) == {"two", "three"}

    def test_repeated_bookmark_warns(self, anchors, context):
        anchors.bookmark("twice")
        anchors.bookmark("twice")
        assert context.warnings == ["Docx bookmark twice is defined more than once"]

    def test_inside_header_records_nothing(self, anchors, context):
        with context.inside_header():
            result = anchors.bookmark("_bm1")
        assert result == [anchor_span("_bm1")]
        assert context.anchor_map == {}


class TestHeaderAnchor:

    def test_folds_anchor_span_into_header(self, anchors, context):
        header = IrHeader(1, attr_with(), [anchor_span("_bm1"), IrStr("Intro")])
        result = anchors.make_header_anchor(header)

        assert result.attr.identifier == "intro"
        assert not any(is_anchor_span(il) for il in result.inlines)
        assert result.inlines == [IrStr("Intro")]
        assert context.anchor_map == {"_bm1": "intro"}

    def test_header_without_anchor_maps_to_itself(self, anchors, context):
        result = anchors.make_header_anchor(IrHeader(2, attr_with(), [IrStr("Methods")]))
        assert result.attr.identifier == "methods"
        assert context.anchor_map == {"methods": "methods"}

    def test_explicit_identifier_is_kept(self, anchors, context):
        header = IrHeader(1, attr_with(identifier="custom"), [anchor_span("_bm2"), IrStr("Text")])
        result = anchors.make_header_anchor(header)
        assert result.attr.identifier == "custom"
        assert context.anchor_map == {"_bm2": "custom"}

    def test_repeated_header_text_gets_suffix(self, anchors):
        first = anchors.make_header_anchor(IrHeader(1, attr_with(), [IrStr("Notes")]))
        second = anchors.make_header_anchor(IrHeader(1, attr_with(), [IrStr("Notes")]))
        assert first.attr.identifier == "notes"
        assert second.attr.identifier == "notes-1"

    def test_several_anchor_spans(self, anchors, context):
        # 한 헤더의 북마크들은 모두 헤더 식별자 하나를 가리킨다 (값 중복 허용)
        header = IrHeader(1, attr_with(), [anchor_span("a"), IrStr("Title"), anchor_span("b")])
        result = anchors.make_header_anchor(header)
        assert result.inlines == [IrStr("Title")]
        assert context.anchor_map == {"a": "title", "b": "title"}

    def test_empty_header_text(self, anchors):
        result = anchors.make_header_anchor(IrHeader(1, attr_with(), [IrStr("1.2")]))
        assert result.attr.identifier == "section"


class TestRewriteLinks:

    def test_rewrites_mapped_targets(self, anchors, context):
        context.record_anchor("_bm1", "intro")
        blocks = [IrPara([IrLink("#_bm1", [IrStr("see")])])]
        assert anchors.rewrite_links(blocks) == [IrPara([IrLink("#intro", [IrStr("see")])])]

    def test_unmapped_and_external_targets_are_kept(self, anchors):
        blocks = [IrPara([IrLink("#missing", []), IrLink("https://example.com", [])])]
        assert anchors.rewrite_links(blocks) == blocks
