from el_navigator.parsers.markup.local_bindings import (
    find_local_binding,
    iter_tags,
    parse_attributes,
    scan_local_bindings,
)

TABLE = """<h:form>
  <ui:repeat var="row" value="#{items}">
    <h:outputText value="#{row.name}"/>
  </ui:repeat>
  <h:dataTable var="row" value="#{otherItems}">
    <h:column>#{row.code}</h:column>
  </h:dataTable>
</h:form>
"""


class TestIterTags:
    def test_skips_closing_comment_and_processing_tags(self) -> None:
        text = '<?xml version="1.0"?><!-- note --><b></b><c/>'
        names = [tag.name for tag in iter_tags(text)]

        assert names == ["b", "c"]

    def test_quoted_angle_bracket_does_not_close_tag(self) -> None:
        text = '<h:panel rendered="#{a > b}" id="p">'
        (tag,) = iter_tags(text)

        assert tag.name == "h:panel"
        assert tag.text == text

    def test_only_tags_closed_before_end(self) -> None:
        text = '<a x="1"><b y="2">'
        assert [tag.name for tag in iter_tags(text, text.index('y="2"'))] == ["a"]

    def test_unterminated_tag_stops_scan(self) -> None:
        assert [tag.name for tag in iter_tags('<a x="1"><b y="')] == ["a"]


class TestParseAttributes:
    def test_single_and_double_quotes(self) -> None:
        attributes = parse_attributes("<c:forEach var='x' items=\"#{bean.list}\">")

        assert attributes == {"var": "x", "items": "#{bean.list}"}

    def test_first_occurrence_wins(self) -> None:
        assert parse_attributes('<a id="1" id="2">') == {"id": "1"}


class TestScanLocalBindings:
    def test_records_var_and_value(self) -> None:
        offset = TABLE.index("#{row.name}")
        bindings = scan_local_bindings(TABLE, offset)

        assert set(bindings) == {"row"}
        assert bindings["row"].value_expression == "items"
        assert bindings["row"].tag_name == "ui:repeat"
        assert bindings["row"].offset == TABLE.index("<ui:repeat")

    def test_later_binding_shadows_earlier(self) -> None:
        binding = find_local_binding(TABLE, TABLE.index("#{row.code}"), "row")

        assert binding is not None
        assert binding.value_expression == "otherItems"
        assert binding.tag_name == "h:dataTable"

    def test_binding_after_offset_is_not_visible(self) -> None:
        assert scan_local_bindings(TABLE, TABLE.index("<ui:repeat")) == {}

    def test_foreach_items_attribute(self) -> None:
        text = '<c:forEach var="order" items="#{ orders.open }">'
        binding = find_local_binding(text, len(text), "order")

        assert binding is not None
        assert binding.value_expression == "orders.open"

    def test_complex_expression_is_not_a_binding(self) -> None:
        text = (
            '<ui:repeat var="a" value="#{bean.list(1)}">'
            '<ui:repeat var="b" value="#{x ? y : z}">'
            '<ui:repeat var="c" value="list">'
        )
        assert scan_local_bindings(text, len(text)) == {}

    def test_var_must_be_identifier(self) -> None:
        text = '<ui:repeat var="#{row}" value="#{items}">'
        assert scan_local_bindings(text, len(text)) == {}

    def test_var_without_value(self) -> None:
        text = '<f:loadBundle var="msg" basename="messages"/>'
        assert find_local_binding(text, len(text), "msg") is None
