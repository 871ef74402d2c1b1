from docx2ir.convert.lists import blocks_to_bullets, blocks_to_definitions
from docx2ir.ir.models import (
    IrBulletList,
    IrDefinitionList,
    IrDiv,
    IrListAttributes,
    IrOrderedList,
    IrPara,
    IrStr,
    attr_with,
)


def item(text, level="0", num_id="1", fmt="bullet", lvl_text="•", start=None):
    attributes = [("level", level), ("num-id", num_id), ("format", fmt), ("text", lvl_text)]
    if start is not None:
        attributes.append(("start", str(start)))
    return IrDiv(attr_with(classes=["list-item"], attributes=attributes), [IrPara([IrStr(text)])])


def div(class_name, text):
    return IrDiv(attr_with(classes=[class_name]), [IrPara([IrStr(text)])])


class TestBlocksToBullets:

    def test_flat_bullet_list(self):
        result = blocks_to_bullets([item("a"), item("b")])
        assert result == [IrBulletList([[IrPara([IrStr("a")])], [IrPara([IrStr("b")])]])]

    def test_ordered_list_attributes(self):
        result = blocks_to_bullets([
            item("a", fmt="lowerRoman", lvl_text="%1)", start=3),
            item("b", fmt="lowerRoman", lvl_text="%1)", start=3),
        ])
        assert isinstance(result[0], IrOrderedList)
        assert result[0].list_attributes == IrListAttributes(start=3, style="LowerRoman", delim="OneParen")
        assert len(result[0].items) == 2

    def test_nested_levels(self):
        result = blocks_to_bullets([
            item("a"),
            item("a.1", level="1", fmt="decimal", lvl_text="%2."),
            item("b"),
        ])
        assert len(result) == 1
        outer = result[0]
        assert isinstance(outer, IrBulletList)
        assert len(outer.items) == 2
        nested = outer.items[0][1]
        assert isinstance(nested, IrOrderedList)
        assert nested.list_attributes.delim == "Period"

    def test_different_numbering_starts_new_list(self):
        result = blocks_to_bullets([item("a", num_id="1"), item("b", num_id="2")])
        assert len(result) == 2

    def test_list_paragraph_attaches_to_previous_item(self):
        result = blocks_to_bullets([item("a"), div("ListParagraph", "more")])
        assert result == [IrBulletList([[IrPara([IrStr("a")]), IrPara([IrStr("more")])]])]

    def test_stray_list_paragraph_is_unwrapped(self):
        result = blocks_to_bullets([div("ListParagraph", "alone")])
        assert result == [IrPara([IrStr("alone")])]

    def test_other_blocks_keep_their_place(self):
        result = blocks_to_bullets([IrPara([IrStr("x")]), item("a"), IrPara([IrStr("y")])])
        assert result[0] == IrPara([IrStr("x")])
        assert isinstance(result[1], IrBulletList)
        assert result[2] == IrPara([IrStr("y")])

    def test_idempotent(self):
        once = blocks_to_bullets([item("a"), item("b", level="1")])
        assert blocks_to_bullets(once) == once


class TestBlocksToDefinitions:

    def test_term_with_definitions(self):
        result = blocks_to_definitions([
            div("DefinitionTerm", "term"),
            div("Definition", "first"),
            div("Definition", "second"),
        ])
        assert result == [
            IrDefinitionList([
                ([IrStr("term")], [[IrPara([IrStr("first")])], [IrPara([IrStr("second")])]]),
            ])
        ]

    def test_stray_definition_is_unwrapped(self):
        assert blocks_to_definitions([div("Definition", "d")]) == [IrPara([IrStr("d")])]

    def test_idempotent(self):
        once = blocks_to_definitions([div("DefinitionTerm", "t"), div("Definition", "d")])
        assert blocks_to_definitions(once) == once
