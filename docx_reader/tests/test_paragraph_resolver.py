"""Tests for paragraph format resolution precedence."""
import unittest
from xml.etree import ElementTree as ET

from docx_reader.model.elements import Indentation, NumberingReference
from docx_reader.parser.numbering_parser import parse_numbering
from docx_reader.parser.paragraph_properties import parse_paragraph_properties
from docx_reader.parser.paragraph_resolver import BLOCK_HEADING, BLOCK_PARAGRAPH, ParagraphFormatResolver
from docx_reader.parser.styles_parser import parse_styles
from docx_reader.tests.fixtures import W_NS, numbering_xml, styles_xml


STYLES = styles_xml("""
  <w:style w:type="paragraph" w:styleId="Normal"><w:name w:val="Normal"/></w:style>
  <w:style w:type="paragraph" w:styleId="Heading1">
    <w:name w:val="heading 1"/>
    <w:basedOn w:val="Normal"/>
    <w:pPr><w:outlineLvl w:val="0"/></w:pPr>
  </w:style>
  <w:style w:type="paragraph" w:styleId="Chapter">
    <w:name w:val="Chapter"/>
    <w:basedOn w:val="Heading1"/>
  </w:style>
  <w:style w:type="paragraph" w:styleId="Heading3">
    <w:name w:val="heading 3"/>
  </w:style>
  <w:style w:type="paragraph" w:styleId="NotAHeading">
    <w:name w:val="heading 2"/>
    <w:pPr><w:outlineLvl w:val="9"/></w:pPr>
  </w:style>
  <w:style w:type="paragraph" w:styleId="ZeroList">
    <w:pPr><w:ind w:left="0" w:hanging="0"/></w:pPr>
  </w:style>
  <w:style w:type="paragraph" w:styleId="HangOnly">
    <w:pPr><w:ind w:hanging="240"/></w:pPr>
  </w:style>
  <w:style w:type="paragraph" w:styleId="FirstLine">
    <w:pPr><w:ind w:firstLine="720"/></w:pPr>
  </w:style>
  <w:style w:type="paragraph" w:styleId="LoopA"><w:basedOn w:val="LoopB"/></w:style>
  <w:style w:type="paragraph" w:styleId="LoopB"><w:basedOn w:val="LoopA"/></w:style>
""").encode("utf-8")

NUMBERING = numbering_xml("""
  <w:abstractNum w:abstractNumId="0">
    <w:lvl w:ilvl="0">
      <w:numFmt w:val="decimal"/>
      <w:lvlText w:val="%1."/>
      <w:pPr><w:ind w:left="1440" w:hanging="720"/></w:pPr>
    </w:lvl>
    <w:lvl w:ilvl="1">
      <w:numFmt w:val="bullet"/>
      <w:lvlText w:val="o"/>
    </w:lvl>
  </w:abstractNum>
  <w:num w:numId="1"><w:abstractNumId w:val="0"/></w:num>
""").encode("utf-8")


class ParagraphResolverTest(unittest.TestCase):
    """Each indentation field walks direct, style, then numbering."""

    def setUp(self) -> None:
        self.resolver = ParagraphFormatResolver(parse_styles(STYLES), parse_numbering(NUMBERING))
        self.list_ref = NumberingReference(num_id="1", ilvl=0)

    def test_numbering_indent_alone(self) -> None:
        attrs = self.resolver.resolve(num_reference=self.list_ref).attrs
        self.assertEqual(attrs["listIndentLeft"], "1440")
        self.assertEqual(attrs["listIndentHanging"], "720")

    def test_direct_zero_beats_numbering(self) -> None:
        attrs = self.resolver.resolve(
            direct_indent=Indentation(left="0", hanging="0"),
            num_reference=self.list_ref,
        ).attrs
        self.assertEqual(attrs["listIndentLeft"], "0")
        self.assertEqual(attrs["listIndentHanging"], "0")

    def test_style_zero_beats_numbering(self) -> None:
        attrs = self.resolver.resolve(style_id="ZeroList", num_reference=self.list_ref).attrs
        self.assertEqual(attrs["listIndentLeft"], "0")
        self.assertEqual(attrs["listIndentHanging"], "0")

    def test_fields_resolve_independently(self) -> None:
        attrs = self.resolver.resolve(
            direct_indent=Indentation(left="360"),
            style_id="HangOnly",
            num_reference=self.list_ref,
        ).attrs
        self.assertEqual(attrs["listIndentLeft"], "360")
        self.assertEqual(attrs["listIndentHanging"], "240")

    def test_list_descriptor(self) -> None:
        resolved = self.resolver.resolve(num_reference=self.list_ref)
        self.assertEqual(resolved.attrs["listNumId"], "1")
        self.assertEqual(resolved.attrs["listIlvl"], 0)
        self.assertEqual(resolved.attrs["listNumFmt"], "decimal")
        self.assertEqual(resolved.attrs["listLvlText"], "%1.")
        self.assertTrue(resolved.attrs["listIsOrdered"])
        self.assertEqual(resolved.attrs["listStart"], 1)
        assert resolved.numbering_level is not None
        self.assertEqual(resolved.numbering_level.ilvl, 0)

    def test_bullet_level_without_indent(self) -> None:
        attrs = self.resolver.resolve(num_reference=NumberingReference("1", 1)).attrs
        self.assertFalse(attrs["listIsOrdered"])
        self.assertNotIn("listIndentLeft", attrs)
        self.assertNotIn("listIndentHanging", attrs)

    def test_unknown_list_keeps_reference_only(self) -> None:
        resolved = self.resolver.resolve(
            direct_indent=Indentation(left="200"),
            num_reference=NumberingReference("77", 2),
        )
        self.assertIsNone(resolved.numbering_level)
        self.assertEqual(
            resolved.attrs,
            {"listNumId": "77", "listIlvl": 2, "listIndentLeft": "200"},
        )

    def test_generic_indent_for_plain_paragraphs(self) -> None:
        attrs = self.resolver.resolve(
            direct_indent=Indentation(left="100", first_line="0"),
            style_id="HangOnly",
        ).attrs
        self.assertEqual(attrs, {"indent": "100", "hanging": "240", "firstLine": "0"})

    def test_style_first_line_does_not_imply_indent(self) -> None:
        attrs = self.resolver.resolve(style_id="FirstLine").attrs
        self.assertEqual(attrs, {"firstLine": "720"})

    def test_list_paragraphs_skip_generic_indent(self) -> None:
        attrs = self.resolver.resolve(style_id="FirstLine", num_reference=self.list_ref).attrs
        self.assertNotIn("firstLine", attrs)
        self.assertNotIn("indent", attrs)

    def test_cyclic_style_degrades(self) -> None:
        with self.assertLogs("docx_reader.model.style_model", level="WARNING"):
            resolved = self.resolver.resolve(style_id="LoopA")
        self.assertEqual(resolved.block_type, BLOCK_PARAGRAPH)
        self.assertEqual(resolved.attrs, {})


class HeadingDetectionTest(unittest.TestCase):

    def setUp(self) -> None:
        self.resolver = ParagraphFormatResolver(parse_styles(STYLES), parse_numbering(None))

    def test_outline_level_from_style(self) -> None:
        resolved = self.resolver.resolve(style_id="Heading1")
        self.assertEqual(resolved.block_type, BLOCK_HEADING)
        self.assertEqual(resolved.attrs["level"], 1)

    def test_outline_level_is_inherited(self) -> None:
        self.assertEqual(self.resolver.resolve_heading_level("Chapter"), 1)

    def test_direct_outline_level_wins(self) -> None:
        self.assertEqual(self.resolver.resolve_heading_level("Heading1", 3), 4)
        self.assertIsNone(self.resolver.resolve_heading_level("Heading1", 9))

    def test_body_text_outline_level_blocks_name_fallback(self) -> None:
        self.assertIsNone(self.resolver.resolve_heading_level("NotAHeading"))

    def test_style_name_fallback(self) -> None:
        self.assertEqual(self.resolver.resolve_heading_level("Heading3"), 3)

    def test_style_id_fallback_for_undefined_style(self) -> None:
        self.assertEqual(self.resolver.resolve_heading_level("Heading5"), 5)
        self.assertIsNone(self.resolver.resolve_heading_level("Heading0"))

    def test_plain_paragraph(self) -> None:
        self.assertEqual(self.resolver.resolve(style_id="Normal").block_type, BLOCK_PARAGRAPH)
        self.assertEqual(self.resolver.resolve().block_type, BLOCK_PARAGRAPH)


class ResolvePropertiesTest(unittest.TestCase):
    """Passthrough attributes from a parsed ``w:pPr``."""

    def test_extras_and_style_id(self) -> None:
        paragraph = ET.fromstring(f"""
        <w:p xmlns:w="{W_NS}">
          <w:pPr>
            <w:pStyle w:val="Heading1"/>
            <w:keepNext/>
            <w:keepLines w:val="0"/>
            <w:spacing w:before="120" w:after="60" w:line="276" w:lineRule="auto"/>
            <w:shd w:val="clear" w:fill="FFFF00"/>
            <w:jc w:val="center"/>
            <w:ind w:start="567"/>
          </w:pPr>
        </w:p>
        """)
        resolver = ParagraphFormatResolver(parse_styles(STYLES), parse_numbering(None))
        resolved = resolver.resolve_properties(parse_paragraph_properties(paragraph))
        self.assertEqual(resolved.block_type, BLOCK_HEADING)
        self.assertEqual(resolved.attrs, {
            "textAlign": "center",
            "spacingBefore": "120",
            "spacingAfter": "60",
            "lineHeight": "276",
            "lineRule": "auto",
            "keepNext": "1",
            "keepLines": "0",
            "backgroundColor": "#FFFF00",
            "styleId": "Heading1",
            "indent": "567",
            "level": 1,
        })

    def test_num_id_zero_removes_numbering(self) -> None:
        paragraph = ET.fromstring(f"""
        <w:p xmlns:w="{W_NS}">
          <w:pPr><w:numPr><w:ilvl w:val="0"/><w:numId w:val="0"/></w:numPr></w:pPr>
        </w:p>
        """)
        properties = parse_paragraph_properties(paragraph)
        self.assertIsNone(properties.numbering)

    def test_missing_ilvl_defaults_to_zero(self) -> None:
        paragraph = ET.fromstring(f"""
        <w:p xmlns:w="{W_NS}">
          <w:pPr><w:numPr><w:numId w:val="4"/></w:numPr></w:pPr>
        </w:p>
        """)
        self.assertEqual(parse_paragraph_properties(paragraph).numbering, NumberingReference("4", 0))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
