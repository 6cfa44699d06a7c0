"""
Shared pytest fixtures for the content engine test suite.

Provides:
    - data_type_definitions / prevalues: the stock data types
    - editor_registry, data_type_service, user_service
    - simple_content_type / simple_content: two groups, five properties
    - image_media_type / image_media: the upload property plus its metadata fields
    - media_root / sample_image: a media directory holding a real PNG
    - settings / app: a fully wired CmsApplication over the above
"""

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest
from PIL import Image

# ---------------------------------------------------------------------------
# Ensure cms/ is importable regardless of where pytest is invoked
# ---------------------------------------------------------------------------

PROJECT_ROOT = Path(__file__).resolve().parent.parent

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from cms.application import DEFAULT_EDITORS, CmsApplication  # noqa: E402
from cms.config import CmsSettings, MediaSettings  # noqa: E402
from cms.models.base import (  # noqa: E402
    Content,
    ContentType,
    DataTypeDefinition,
    Media,
    MediaType,
    PropertyType,
    User,
)
from cms.property_editors.base import PropertyEditorRegistry  # noqa: E402
from cms.services.data_type_service import DataTypeService  # noqa: E402
from cms.services.user_service import UserService  # noqa: E402

TEXTSTRING_ID = -88
TEXTAREA_ID = -89
RICH_TEXT_ID = -87
UPLOAD_ID = -90
LABEL_ID = -92
NUMERIC_ID = -51
IMAGE_CROPPER_ID = 1043

CROP_PRESETS = '[{"alias": "thumb", "width": 100, "height": 100}]'


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------

@pytest.fixture
def data_type_definitions():
    return [
        DataTypeDefinition(id=TEXTSTRING_ID, name="Textstring", property_editor_alias="Umbraco.Textbox"),
        DataTypeDefinition(id=TEXTAREA_ID, name="Textarea", property_editor_alias="Umbraco.TextboxMultiple"),
        DataTypeDefinition(id=RICH_TEXT_ID, name="Richtext editor", property_editor_alias="Umbraco.TinyMCEv3"),
        DataTypeDefinition(id=UPLOAD_ID, name="Upload", property_editor_alias="Umbraco.UploadField"),
        DataTypeDefinition(id=LABEL_ID, name="Label", property_editor_alias="Umbraco.NoEdit"),
        DataTypeDefinition(id=NUMERIC_ID, name="Numeric", property_editor_alias="Umbraco.Integer"),
        DataTypeDefinition(id=IMAGE_CROPPER_ID, name="Image Cropper", property_editor_alias="Umbraco.ImageCropper"),
    ]


@pytest.fixture
def prevalues():
    """Pre-values keyed by data type id; the image cropper has no presets."""
    return {IMAGE_CROPPER_ID: []}


@pytest.fixture
def editor_registry():
    return PropertyEditorRegistry(DEFAULT_EDITORS)


@pytest.fixture
def data_type_service(data_type_definitions, prevalues):
    return DataTypeService(data_type_definitions, prevalues)


@pytest.fixture
def users():
    return [
        User(id=0, name="admin", username="admin", email="admin@example.com"),
        User(id=7, name="Editor Erin", username="erin"),
    ]


@pytest.fixture
def user_service(users):
    return UserService(users)


# ---------------------------------------------------------------------------
# Content
# ---------------------------------------------------------------------------

@pytest.fixture
def simple_content_type():
    """Content type with a "Content" and a "Meta" group."""
    ct = ContentType(id=1045, alias="simpleContentType", name="Simple Content Type")
    ct.add_property_type(
        PropertyType(id=1, alias="title", name="Title", description="Page title",
                     mandatory=True, data_type_definition_id=TEXTSTRING_ID, sort_order=1),
        "Content",
    )
    ct.add_property_type(
        PropertyType(id=2, alias="bodyText", name="Body Text",
                     data_type_definition_id=RICH_TEXT_ID, sort_order=2),
        "Content",
    )
    ct.add_property_type(
        PropertyType(id=3, alias="author", name="Author",
                     data_type_definition_id=TEXTSTRING_ID, sort_order=3),
        "Content",
    )
    ct.add_property_type(
        PropertyType(id=4, alias="keywords", name="Keywords",
                     data_type_definition_id=TEXTSTRING_ID, sort_order=1,
                     validation_regexp=r"[a-z, ]+"),
        "Meta",
    )
    ct.add_property_type(
        PropertyType(id=5, alias="description", name="Description",
                     data_type_definition_id=TEXTAREA_ID, sort_order=2),
        "Meta",
    )
    return ct


@pytest.fixture
def simple_content(simple_content_type):
    content = Content.from_type(simple_content_type, "Home", parent_id=-1, creator_id=0)
    content.id = 1046
    content.create_date = datetime(2025, 1, 1, tzinfo=timezone.utc)
    content.update_date = datetime(2025, 1, 2, tzinfo=timezone.utc)
    for index, prop in enumerate(content.properties, start=100):
        prop.id = index
    content.set_value("title", "Welcome to our site")
    content.set_value("bodyText", "<p>This is the home page.</p>")
    content.set_value("author", "John Doe")
    content.set_value("keywords", "home, welcome")
    content.set_value("description", "The front page")
    return content


# ---------------------------------------------------------------------------
# Media
# ---------------------------------------------------------------------------

@pytest.fixture
def image_media_type():
    mt = MediaType(id=1032, alias="Image", name="Image")
    mt.add_property_type(
        PropertyType(alias="umbracoFile", name="Upload image",
                     data_type_definition_id=IMAGE_CROPPER_ID, sort_order=1),
        "Image",
    )
    for order, (alias, name) in enumerate(
        [("umbracoWidth", "Width"), ("umbracoHeight", "Height"),
         ("umbracoBytes", "Size"), ("umbracoExtension", "Type")],
        start=2,
    ):
        mt.add_property_type(
            PropertyType(alias=alias, name=name,
                         data_type_definition_id=LABEL_ID, sort_order=order),
            "Image",
        )
    return mt


@pytest.fixture
def image_media(image_media_type):
    media = Media.from_type(image_media_type, "Test Image", parent_id=-1, creator_id=0)
    media.id = 1050
    return media


@pytest.fixture
def media_root(tmp_path):
    root = tmp_path / "media"
    root.mkdir()
    return root


@pytest.fixture
def sample_image(media_root):
    """A 40x30 PNG stored at ``/media/1001/photo.png``."""
    folder = media_root / "1001"
    folder.mkdir()
    path = folder / "photo.png"
    Image.new("RGB", (40, 30), (200, 30, 30)).save(path)
    return path


@pytest.fixture
def settings(media_root):
    return CmsSettings(media=MediaSettings(root=str(media_root)))


@pytest.fixture
def app(settings, data_type_definitions, prevalues, users, image_media_type):
    return CmsApplication(
        settings,
        data_types=data_type_definitions,
        prevalues=prevalues,
        users=users,
        media_types=[image_media_type],
    )
