import os
from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

from conftest import ADDRESS, USER_BEAN, line_of

from el_navigator import constants as cs
from el_navigator.models import FieldFact, MemberFact, MethodFact, PropertyFact
from el_navigator.parsers.java import member_facts
from el_navigator.parsers.java.member_facts import (
    MemberFactExtractor,
    accessor_candidates,
    extract_member_facts,
    find_member,
    locate_method,
    property_name_for_getter,
)
from el_navigator.services.cache import CacheStore


def _by_key(text: str) -> dict[tuple[cs.MemberKind, str], MemberFact]:
    return {(fact.kind, fact.label): fact for fact in extract_member_facts(text)}


class TestExtractMemberFacts:
    def test_getter_yields_method_and_property(self) -> None:
        facts = _by_key(USER_BEAN)

        method = facts[(cs.MemberKind.METHOD, "getName")]
        prop = facts[(cs.MemberKind.PROPERTY, "name")]
        assert isinstance(method, MethodFact)
        assert isinstance(prop, PropertyFact)
        assert prop.getter_name == "getName"
        assert prop.type_text == "String"
        assert prop.line == method.line == line_of(USER_BEAN, "getName()")

    def test_boolean_getter_yields_property(self) -> None:
        facts = _by_key(USER_BEAN)
        assert (cs.MemberKind.PROPERTY, "active") in facts

    def test_method_with_parameters_has_no_property(self) -> None:
        facts = _by_key(USER_BEAN)

        save = facts[(cs.MemberKind.METHOD, "save")]
        assert isinstance(save, MethodFact)
        assert save.has_parameters
        assert save.insert_text == "save()"
        assert save.detail == "String save(String reason)"
        assert (cs.MemberKind.METHOD, "setName") in facts
        assert (cs.MemberKind.PROPERTY, "name") in facts
        assert not any(
            kind == cs.MemberKind.PROPERTY and label == "save"
            for kind, label in facts
        )

    def test_parameterless_method_inserts_bare_name(self) -> None:
        facts = _by_key(USER_BEAN)
        assert facts[(cs.MemberKind.METHOD, "getName")].insert_text == "getName"

    def test_constructor_and_object_noise_are_skipped(self) -> None:
        labels = {label for _, label in _by_key(USER_BEAN)}

        assert "UserBean" not in labels
        assert "toString" not in labels

    def test_public_field_with_collection_type(self) -> None:
        field = _by_key(USER_BEAN)[(cs.MemberKind.FIELD, "addresses")]

        assert isinstance(field, FieldFact)
        assert field.type_text == "List<Address>"
        assert field.element_type_text == "Address"

    def test_private_field_is_not_a_member(self) -> None:
        assert (cs.MemberKind.FIELD, "city") not in _by_key(ADDRESS)

    def test_commented_method_is_ignored(self) -> None:
        text = (
            "public class A {\n"
            "    // public String getOld() { return null; }\n"
            "    /* public String getGone() { return null; } */\n"
            "    public String getNew() { return null; }\n"
            "}\n"
        )
        labels = {fact.label for fact in extract_member_facts(text)}

        assert labels == {"getNew", "new"}

    def test_generic_method_and_throws_clause(self) -> None:
        text = (
            "public class Repo {\n"
            "    public <T extends Item> List<T> getItems() throws IOException {\n"
            "        return null;\n"
            "    }\n"
            "}\n"
        )
        prop = _by_key(text)[(cs.MemberKind.PROPERTY, "items")]

        assert prop.type_info is not None
        assert prop.type_info.simple_type_name == "List"
        assert prop.element_type_text == "T"

    def test_type_use_annotation_after_modifiers(self) -> None:
        text = (
            "public class Person {\n"
            "    public @Nullable String nickname;\n"
            "    public static final @NotNull List<Address> homes = List.of();\n"
            "    public @Nullable String getName() {\n"
            "        return null;\n"
            "    }\n"
            "}\n"
        )
        facts = _by_key(text)

        assert facts[(cs.MemberKind.PROPERTY, "name")].type_text == "String"
        assert facts[(cs.MemberKind.METHOD, "getName")].line == 4
        assert facts[(cs.MemberKind.FIELD, "nickname")].type_text == "String"
        assert facts[(cs.MemberKind.FIELD, "homes")].element_type_text == "Address"

    def test_duplicate_overloads_keep_first(self) -> None:
        text = (
            "public class A {\n"
            "    public String find() { return null; }\n"
            "    public String find(int id) { return null; }\n"
            "}\n"
        )
        methods = [
            fact for fact in extract_member_facts(text) if fact.label == "find"
        ]

        assert len(methods) == 1
        assert methods[0].line == 2

    def test_interface_without_modifiers_yields_nothing(self) -> None:
        assert extract_member_facts("interface A {\n    String get();\n}\n") == ()


class TestMemberLookups:
    def test_find_member_prefers_property_then_field_then_method(self) -> None:
        text = (
            "public class A {\n"
            "    public String label;\n"
            "    public String label() { return null; }\n"
            "    public String size;\n"
            "    public Integer getSize() { return 1; }\n"
            "}\n"
        )
        members = extract_member_facts(text)

        assert find_member(members, "size").kind == cs.MemberKind.PROPERTY
        assert find_member(members, "label").kind == cs.MemberKind.FIELD
        assert find_member(members, "getSize").kind == cs.MemberKind.METHOD
        assert find_member(members, "Label") is None

    def test_find_member_property_wins(self) -> None:
        members = extract_member_facts(USER_BEAN)
        assert find_member(members, "name").kind == cs.MemberKind.PROPERTY

    def test_accessor_candidates(self) -> None:
        assert accessor_candidates("name") == ["name", "getName", "isName", "setName"]
        assert accessor_candidates("x") == ["x", "getX", "isX", "setX"]
        assert accessor_candidates("") == []

    def test_locate_method_uses_candidate_order(self) -> None:
        members = extract_member_facts(USER_BEAN)
        location = locate_method(members, accessor_candidates("name"))

        assert location is not None
        assert location.method_name == "getName"
        assert location.line == line_of(USER_BEAN, "getName()")

    def test_locate_method_falls_back_to_setter(self) -> None:
        text = "public class A {\n    public void setOnly(String v) {\n    }\n}\n"
        members = extract_member_facts(text)
        location = locate_method(members, accessor_candidates("only"))

        assert location is not None
        assert location.method_name == "setOnly"
        assert location.line == 2

    def test_property_name_for_getter(self) -> None:
        assert property_name_for_getter("getCity") == "city"
        assert property_name_for_getter("isActive") == "active"
        assert property_name_for_getter("getURL") == "uRL"
        assert property_name_for_getter("get") is None
        assert property_name_for_getter("getter") is None
        assert property_name_for_getter("island") is None


class TestMemberFactExtractor:
    def test_unchanged_file_returns_cached_tuple(
        self, write_java: Callable[[str, str], Path]
    ) -> None:
        path = write_java("com/acme/model/Address.java", ADDRESS)
        extractor = MemberFactExtractor(CacheStore("members"))

        with patch.object(
            member_facts, "extract_member_facts", wraps=extract_member_facts
        ) as parse:
            first = extractor.members_for(path)
            second = extractor.members_for(path)

        assert first is second
        assert parse.call_count == 1

    def test_changed_mtime_reparses(
        self, write_java: Callable[[str, str], Path]
    ) -> None:
        path = write_java("com/acme/model/Address.java", ADDRESS)
        extractor = MemberFactExtractor(CacheStore("members"))
        first = extractor.members_for(path)

        path.write_text(ADDRESS.replace("getStreet", "getZip"), encoding="utf-8")
        stat = path.stat()
        os.utime(path, (stat.st_atime, stat.st_mtime + 5))
        second = extractor.members_for(path)

        labels = {fact.label for fact in second}
        assert second is not first
        assert "zip" in labels
        assert "street" not in labels

    def test_missing_file_yields_no_members(self, tmp_path: Path) -> None:
        extractor = MemberFactExtractor(CacheStore("members"))

        assert extractor.members_for(tmp_path / "Missing.java") == ()
        assert len(extractor.cache) == 0
