"""Unit tests for type resolution.

WHY: Every type cell in the documentation goes through the resolver.
Wrong canonical names, broken container unwrapping, or a common type
winning over a local structure would mislink entire pages.

HOW: Tests cover each resolution stage and the plain-text fallback:
  - common-type canonicalization and idempotence
  - list and map containers, nested
  - local structure shadowing
  - wiki links and HTML escaping
  - malformed tokens
"""

import pytest

from ddl_docgen.config import COMMON_TYPE_LINKS
from ddl_docgen.core.ir import DisplayType
from ddl_docgen.core.resolver import (
    TypeExpression,
    TypeResolver,
    TypeSyntaxError,
    parse_type,
    resolve_type,
)


class TestParseType:
    """The recursive-descent parser for container syntax."""

    def test_plain_name(self):
        assert parse_type("uint32") == TypeExpression(name="uint32")

    def test_nested_container(self):
        assert parse_type("qvector<qvector<byte>>") == TypeExpression(
            name="qvector",
            arguments=(TypeExpression(name="qvector", arguments=(TypeExpression(name="byte"),)),),
        )

    def test_whitespace_is_ignored(self):
        assert parse_type(" std_map< string , qvector<byte> > ") == parse_type(
            "std_map<string,qvector<byte>>"
        )

    @pytest.mark.parametrize("raw", ["", "qvector<", "qvector<byte", "qvector<byte>>", "<byte>", "a,b"])
    def test_malformed_tokens(self, raw):
        with pytest.raises(TypeSyntaxError):
            parse_type(raw)


class TestCommonTypes:
    """Exact-match canonicalization against the common type table."""

    def test_uint32_canonicalized_and_linked(self):
        resolved = resolve_type("uint32")
        assert resolved.text == "Uint32"
        assert resolved.link_target == COMMON_TYPE_LINKS["Uint32"]
        assert not resolved.local

    def test_qresult_becomes_result(self):
        assert resolve_type("qresult").text == "Result"

    def test_match_is_case_sensitive(self):
        assert resolve_type("UINT32").text == "UINT32"

    @pytest.mark.parametrize("raw", ["uint32", "byte", "string", "qresult", "datetime", "buffer"])
    def test_resolution_is_idempotent(self, raw):
        once = resolve_type(raw)
        assert resolve_type(once.text).text == once.text

    def test_unknown_token_passes_through_unlinked(self):
        resolved = resolve_type("SomeExternalType")
        assert resolved == DisplayType(name="SomeExternalType")


class TestContainers:
    """Every container spelling collapses to one display form."""

    def test_nested_lists(self):
        assert resolve_type("qvector<qvector<byte>>").text == "List<List<Uint8>>"

    @pytest.mark.parametrize("spelling", ["qvector", "qlist", "std_list", "std_vector", "list", "List"])
    def test_all_list_spellings(self, spelling):
        assert resolve_type("{}<uint16>".format(spelling)).text == "List<Uint16>"

    def test_mixed_spellings_nest(self):
        assert resolve_type("std_list<qvector<std_list<string>>>").text == "List<List<List<String>>>"

    def test_list_head_links_to_list_reference(self):
        resolved = resolve_type("qvector<byte>")
        assert resolved.link_target == COMMON_TYPE_LINKS["List"]
        assert resolved.arguments[0].link_target == COMMON_TYPE_LINKS["Uint8"]

    def test_map(self):
        assert resolve_type("std_map<string, qvector<uint32>>").text == "Map<String, List<Uint32>>"

    def test_list_output_resolves_to_itself(self):
        text = resolve_type("qvector<qvector<byte>>").text
        assert resolve_type(text).text == text

    def test_list_with_two_arguments_is_plain_text(self):
        resolved = resolve_type("qvector<byte, byte>")
        assert resolved == DisplayType(name="qvector<byte, byte>")

    def test_unknown_generic_is_plain_text(self):
        resolved = resolve_type("Holder<uint32>")
        assert resolved.text == "Holder<uint32>"
        assert resolved.link_target is None
        assert resolved.arguments == ()

    def test_deep_nesting(self):
        raw = "qvector<" * 50 + "byte" + ">" * 50
        assert resolve_type(raw).text == "List<" * 50 + "Uint8" + ">" * 50


class TestLocalStructures:
    """Structures declared in the tree link to their own section."""

    def test_structure_reference(self):
        resolved = resolve_type("FriendInfo", {"FriendInfo"})
        assert resolved.text == "FriendInfo"
        assert resolved.link_target == "#friendinfo"
        assert resolved.local

    def test_structure_shadows_common_type(self):
        resolved = resolve_type("Result", {"Result"})
        assert resolved.local
        assert resolved.link_target == "#result"
        assert resolved.link_target != COMMON_TYPE_LINKS["Result"]

    def test_structure_shadows_canonicalized_token(self):
        resolved = resolve_type("qresult", {"Result"})
        assert resolved.text == "Result"
        assert resolved.local

    def test_raw_common_token_is_canonicalized_before_lookup(self):
        resolved = resolve_type("datetime", {"datetime"})
        assert resolved.text == "DateTime"
        assert resolved.link_target == COMMON_TYPE_LINKS["DateTime"]
        assert not resolved.local

    def test_anchor_mapping_is_used_for_links(self):
        resolved = resolve_type("qvector<Request>", {"Request": "request-1"})
        assert resolved.arguments[0].link_target == "#request-1"
        assert resolved.arguments[0].local

    def test_structure_inside_container(self):
        resolved = resolve_type("qvector<FriendInfo>", {"FriendInfo"})
        assert resolved.text == "List<FriendInfo>"
        assert resolved.arguments[0].local
        assert not resolved.local

    def test_structure_set_is_per_call(self):
        assert resolve_type("FriendInfo", {"FriendInfo"}).local
        assert not resolve_type("FriendInfo").local


class TestMarkdown:
    """Embedding escapes HTML-sensitive characters."""

    def test_container_markdown_is_escaped_and_linked(self):
        markdown = resolve_type("qvector<byte>").to_markdown()
        assert markdown == "[List]({})&lt;[Uint8]({})&gt;".format(
            COMMON_TYPE_LINKS["List"], COMMON_TYPE_LINKS["Uint8"],
        )

    def test_plain_text_fallback_is_escaped(self):
        assert resolve_type("Holder<a&b>").to_markdown() == "Holder&lt;a&amp;b&gt;"

    def test_unlinked_name_has_no_brackets(self):
        assert resolve_type("Custom").to_markdown() == "Custom"

    def test_type_resolver_binds_structures(self):
        resolver = TypeResolver(["FriendInfo"])
        assert resolver.to_markdown("FriendInfo") == "[FriendInfo](#friendinfo)"
        assert resolver.resolve("qvector<FriendInfo>").text == "List<FriendInfo>"

    def test_type_resolver_accepts_anchor_mapping(self):
        resolver = TypeResolver({"Types": "types-1"})
        assert resolver.to_markdown("Types") == "[Types](#types-1)"
