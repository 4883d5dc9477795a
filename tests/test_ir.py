"""Unit tests for IR helpers that decide page anchors.

WHY: Every in-page link on a protocol page points at an anchor GitHub
derives from a heading. If the anchors computed here drift from GitHub's,
links silently land on the wrong section.
"""

from ddl_docgen.core.ir import (
    HeadingSlugger,
    MethodDefinition,
    ProtocolDefinition,
    ProtocolDocument,
    StructureDefinition,
    heading_anchor,
)


def _document(structure_names, methods=1):
    return ProtocolDocument(
        protocol=ProtocolDefinition(
            name="P",
            methods=[MethodDefinition(ordinal=i, name="M{}".format(i)) for i in range(1, methods + 1)],
        ),
        structures=[StructureDefinition(name=name) for name in structure_names],
    )


class TestHeadingAnchor:
    def test_method_heading(self):
        assert heading_anchor("(3) GetName") == "3-getname"

    def test_punctuation_dropped(self):
        assert heading_anchor("NEX-Protocols > Friends (Unknown ID)") == "nex-protocols--friends-unknown-id"


class TestHeadingSlugger:
    def test_repeats_are_numbered(self):
        slugger = HeadingSlugger()
        assert [slugger.slug(h) for h in ["Request", "Response", "Request", "Request"]] == [
            "request", "response", "request-1", "request-2",
        ]

    def test_taken_suffix_is_skipped(self):
        slugger = HeadingSlugger()
        assert [slugger.slug(h) for h in ["foo-1", "foo", "foo"]] == ["foo-1", "foo", "foo-2"]


class TestStructureAnchors:
    def test_plain_names(self, sample_document):
        assert sample_document.structure_anchors == {
            "FriendInfo": "friendinfo",
            "NintendoPresence": "nintendopresence",
            "EmptyNotice": "emptynotice",
        }

    def test_names_of_fixed_headings_are_deduplicated(self):
        anchors = _document(["Request", "Response", "Types"], methods=2).structure_anchors
        assert anchors == {"Request": "request-2", "Response": "response-2", "Types": "types-1"}

    def test_repeated_structure_links_to_first_section(self):
        anchors = _document(["Foo", "Foo", "Request"], methods=0).structure_anchors
        assert anchors == {"Foo": "foo", "Request": "request"}

    def test_no_structures(self):
        assert _document([]).structure_anchors == {}
