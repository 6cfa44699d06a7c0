"""
Tests for cms/mapping/content_mapper.py -- basic, dto and display projections.
"""

import pytest

from cms.errors import MissingDataTypeError
from cms.mapping.content_mapper import UNKNOWN_USER_NAME, ContentModelMapper, UserModelMapper
from cms.models.base import PropertyType
from cms.models.editing import GENERIC_PROPERTIES_LABEL


@pytest.fixture
def mapper(editor_registry, data_type_service, user_service):
    return ContentModelMapper(editor_registry, data_type_service, UserModelMapper(user_service))


@pytest.fixture
def content_with_ungrouped(simple_content_type):
    """The simple content type plus two properties outside any group."""
    from cms.models.base import Content

    simple_content_type.add_property_type(PropertyType(
        alias="nonGrouped1", name="Non Grouped 1", data_type_definition_id=-88, sort_order=1,
    ))
    simple_content_type.add_property_type(PropertyType(
        alias="nonGrouped2", name="Non Grouped 2", data_type_definition_id=-88, sort_order=1,
    ))
    content = Content.from_type(simple_content_type, "With extras")
    for index, prop in enumerate(content.properties, start=1):
        prop.id = index
    return content


# ------------------------------------------------------------------
# Assertions
# ------------------------------------------------------------------

def _assert_basics(result, entity):
    assert result.id == entity.id
    assert result.owner.user_id == 0
    assert result.owner.name == "admin"
    assert result.parent_id == entity.parent_id
    assert result.update_date == entity.update_date
    assert result.create_date == entity.create_date
    assert result.name == entity.name
    assert len(result.properties) == len(entity.properties)


def _assert_basic_property(result, prop):
    matches = [p for p in result.properties if p.alias == prop.alias]
    assert len(matches) == 1
    dto = matches[0]
    assert dto.id == prop.id
    assert dto.value == prop.value


def _assert_property(result, prop, data_type_service, editor_registry):
    _assert_basic_property(result, prop)
    dto = next(p for p in result.properties if p.alias == prop.alias)
    assert dto.is_required == prop.property_type.mandatory
    assert dto.validation_regexp == prop.property_type.validation_regexp
    assert dto.description == prop.property_type.description
    assert dto.label == prop.property_type.name
    data_type = data_type_service.get_data_type_definition_by_id(
        prop.property_type.data_type_definition_id
    )
    assert dto.data_type == data_type
    assert dto.editor.alias == editor_registry.get(data_type.property_editor_alias).alias


# ------------------------------------------------------------------
# Basic projection
# ------------------------------------------------------------------

class TestProjectBasic:
    def test_media_item(self, mapper, image_media):
        result = mapper.project_basic(image_media)
        _assert_basics(result, image_media)
        for prop in image_media.properties:
            _assert_basic_property(result, prop)

    def test_content_item(self, mapper, simple_content):
        result = mapper.project_basic(simple_content)
        _assert_basics(result, simple_content)
        for prop in simple_content.properties:
            _assert_basic_property(result, prop)

    def test_never_resolves_data_types(self, mapper, simple_content):
        simple_content.properties[0].property_type.data_type_definition_id = 999999
        result = mapper.project_basic(simple_content)
        assert len(result.properties) == len(simple_content.properties)

    def test_content_type_alias_and_key(self, mapper, simple_content):
        result = mapper.project_basic(simple_content)
        assert result.content_type_alias == "simpleContentType"
        assert result.key == str(simple_content.key)


# ------------------------------------------------------------------
# Dto projection
# ------------------------------------------------------------------

class TestProjectDto:
    def test_content_item(self, mapper, simple_content, data_type_service, editor_registry):
        result = mapper.project_dto(simple_content)
        _assert_basics(result, simple_content)
        for prop in simple_content.properties:
            _assert_property(result, prop, data_type_service, editor_registry)
        assert result.errors == {}

    def test_media_item(self, mapper, image_media, data_type_service, editor_registry):
        result = mapper.project_dto(image_media)
        _assert_basics(result, image_media)
        for prop in image_media.properties:
            _assert_property(result, prop, data_type_service, editor_registry)

    def test_unresolved_property_recorded(self, mapper, simple_content):
        simple_content.get_property("author").property_type.data_type_definition_id = 424242
        result = mapper.project_dto(simple_content)
        assert "author" in result.errors
        author = next(p for p in result.properties if p.alias == "author")
        assert author.data_type is None
        assert author.editor is None
        assert len(result.properties) == len(simple_content.properties)

    def test_strict_raises(self, mapper, simple_content):
        simple_content.get_property("author").property_type.data_type_definition_id = 424242
        with pytest.raises(MissingDataTypeError) as excinfo:
            mapper.project_dto(simple_content, strict=True)
        assert excinfo.value.alias == "author"


# ------------------------------------------------------------------
# Display projection
# ------------------------------------------------------------------

class TestProjectDisplay:
    def test_display_model(self, mapper, simple_content):
        result = mapper.project_display(simple_content)

        assert result.name == simple_content.name
        assert result.id == simple_content.id
        assert len(result.properties) == len(simple_content.properties)
        assert len(simple_content.property_groups) == len(result.tabs) - 1
        assert any(t.label == GENERIC_PROPERTIES_LABEL for t in result.tabs)
        assert result.tabs[0].is_active
        assert all(not t.is_active for t in result.tabs[1:])

    def test_display_model_with_non_grouped_properties(self, mapper, content_with_ungrouped):
        result = mapper.project_display(content_with_ungrouped)

        assert result.name == content_with_ungrouped.name
        assert len(result.properties) == len(content_with_ungrouped.properties)
        assert len(content_with_ungrouped.property_groups) == len(result.tabs) - 1
        assert len(result.tabs) == 3
        generic = [t for t in result.tabs if t.label == GENERIC_PROPERTIES_LABEL]
        assert len(generic) == 1
        assert [p.alias for p in generic[0].properties] == ["nonGrouped1", "nonGrouped2"]

    def test_tabs_follow_group_order(self, mapper, simple_content):
        result = mapper.project_display(simple_content)
        assert [t.label for t in result.tabs] == ["Content", "Meta", GENERIC_PROPERTIES_LABEL]
        assert [t.sort_order for t in result.tabs] == [0, 1, 2]
        assert [p.alias for p in result.tabs[0].properties] == ["title", "bodyText", "author"]

    def test_every_property_traceable(self, mapper, simple_content):
        result = mapper.project_display(simple_content)
        source_aliases = sorted(p.alias for p in simple_content.properties)
        assert sorted(p.alias for p in result.properties) == source_aliases

    def test_idempotent(self, mapper, simple_content):
        first = mapper.project_display(simple_content)
        second = mapper.project_display(simple_content)
        assert first.model_dump() == second.model_dump()

    def test_does_not_mutate_entity(self, mapper, simple_content):
        simple_content.set_value("bodyText", {"blocks": ["a", "b"]})
        before = simple_content.model_dump()
        result = mapper.project_display(simple_content)
        result.properties[1].value["blocks"].append("c")
        assert simple_content.model_dump() == before

    def test_unresolved_editor_recorded(self, mapper, simple_content, data_type_service):
        from cms.models.base import DataTypeDefinition

        data_type_service.save_data_type_definition(
            DataTypeDefinition(id=-88, name="Textstring", property_editor_alias="Gone.Editor")
        )
        result = mapper.project_display(simple_content)
        assert set(result.errors) == {"title", "author", "keywords"}
        assert len(result.properties) == len(simple_content.properties)
        assert result.tabs[0].is_active

    def test_strict_names_offending_alias(self, mapper, simple_content):
        simple_content.get_property("keywords").property_type.data_type_definition_id = 5150
        with pytest.raises(MissingDataTypeError, match="keywords"):
            mapper.project_display(simple_content, strict=True)

    def test_media_item(self, mapper, image_media):
        result = mapper.project_display(image_media)
        assert [t.label for t in result.tabs] == ["Image", GENERIC_PROPERTIES_LABEL]
        assert len(result.tabs[0].properties) == 5
        assert result.tabs[1].properties == []
        cropper = result.tabs[0].properties[0]
        assert cropper.editor.alias == "Umbraco.ImageCropper"
        assert cropper.editor.value_type == "JSON"


# ------------------------------------------------------------------
# Owner
# ------------------------------------------------------------------

class TestOwner:
    def test_known_owner(self, mapper, simple_content):
        simple_content.creator_id = 7
        result = mapper.project_display(simple_content)
        assert result.owner.user_id == 7
        assert result.owner.name == "Editor Erin"

    def test_unknown_owner_gets_placeholder(self, mapper, simple_content):
        simple_content.creator_id = 99
        result = mapper.project_basic(simple_content)
        assert result.owner.user_id == 99
        assert result.owner.name == UNKNOWN_USER_NAME


class TestDisplayHelpers:
    def test_active_tab_is_first(self, mapper, simple_content):
        result = mapper.project_display(simple_content)
        assert result.active_tab is result.tabs[0]
        assert result.active_tab.label == "Content"

    def test_get_tab(self, mapper, simple_content):
        result = mapper.project_display(simple_content)
        assert [p.alias for p in result.get_tab("Meta").properties] == ["keywords", "description"]
        assert result.get_tab("Nope") is None

    def test_flattened_properties(self, mapper, simple_content):
        result = mapper.project_display(simple_content)
        assert [p.alias for p in result.properties] == [
            "title", "bodyText", "author", "keywords", "description",
        ]
