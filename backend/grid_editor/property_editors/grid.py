import json
import logging
from typing import Any, Iterator, Optional

from grid_editor.constants import EMPTY_GUID
from grid_editor.domain.grid import GridValue, parse_grid_value, serialize_grid_value
from grid_editor.domain.udi import EntityReference
from grid_editor.richtext import HtmlImageSourceParser, HtmlLocalLinkParser, RichTextEditorPastedImages
from grid_editor.security import SecurityContext, resolve_user_id
from .base import (
    ConfigurationEditor,
    ContentPropertyData,
    DataEditor,
    DataEditorAttribute,
    DataValueEditor,
    DataValueReference,
    Groups,
    Property,
    ValueTypes,
    data_editor,
)
from .grid_configuration import GridConfiguration, GridConfigurationEditor
from .grid_index import GridPropertyIndexValueFactory
from .media_picker import MediaPickerPropertyEditor, MediaPickerPropertyValueEditor
from .rich_text import RichTextPropertyEditor, RichTextPropertyValueEditor

logger = logging.getLogger(__name__)

# Member of a "media" control value holding the picked media UDI
MEDIA_UDI_KEY = "udi"


@data_editor(
    "Grid",
    "Grid layout",
    "grid",
    value_type=ValueTypes.JSON,
    icon="icon-layout",
    group=Groups.RICH_CONTENT,
    hide_label=True,
)
class GridPropertyEditor(DataEditor):
    """Represents a grid property editor."""

    def __init__(
        self,
        image_source_parser: HtmlImageSourceParser,
        local_link_parser: HtmlLocalLinkParser,
        pasted_images: RichTextEditorPastedImages,
    ):
        super().__init__()
        self._image_source_parser = image_source_parser
        self._local_link_parser = local_link_parser
        self._pasted_images = pasted_images

    @property
    def property_index_value_factory(self) -> GridPropertyIndexValueFactory:
        return GridPropertyIndexValueFactory()

    def create_value_editor(self) -> "GridPropertyValueEditor":
        return GridPropertyValueEditor(
            self.attribute,
            self._image_source_parser,
            self._pasted_images,
            RichTextPropertyValueEditor(
                RichTextPropertyEditor.attribute,
                self._image_source_parser,
                self._local_link_parser,
                self._pasted_images,
            ),
            MediaPickerPropertyValueEditor(MediaPickerPropertyEditor.attribute),
        )

    def create_configuration_editor(self) -> ConfigurationEditor:
        return GridConfigurationEditor()


class GridPropertyValueEditor(DataValueEditor, DataValueReference):
    """
    Processes the rich text controls of a grid on save and load, and reports
    the media and content a grid value points at.
    """

    def __init__(
        self,
        attribute: DataEditorAttribute,
        image_source_parser: HtmlImageSourceParser,
        pasted_images: RichTextEditorPastedImages,
        rich_text_value_editor: RichTextPropertyValueEditor,
        media_picker_value_editor: MediaPickerPropertyValueEditor,
    ):
        super().__init__(attribute)
        self._image_source_parser = image_source_parser
        self._pasted_images = pasted_images
        self._rich_text_value_editor = rich_text_value_editor
        self._media_picker_value_editor = media_picker_value_editor

    def from_editor(
        self,
        editor_value: ContentPropertyData,
        current_value: Any,
        context: Optional[SecurityContext] = None,
    ) -> Optional[str]:
        """
        Format the grid for persistence.

        Images pasted into rich text controls are moved to the media library
        and media URLs are stripped from the HTML before the grid is stored.
        """
        if editor_value.value is None:
            return None

        raw_json = _raw_json(editor_value.value)
        if not raw_json.strip():
            return None

        config = editor_value.data_type_configuration
        media_parent = config.media_parent_id if isinstance(config, GridConfiguration) else None
        media_parent_id = media_parent.guid if media_parent is not None else EMPTY_GUID

        grid = parse_grid_value(raw_json)
        user_id = resolve_user_id(context)

        # Shared by every rich text control so an image pasted twice is promoted once
        uploaded = {}

        rtes = grid.rich_text_controls()
        for rte in rtes:
            html = _control_html(rte.value)

            html = self._pasted_images.find_and_persist_pasted_temp_images(html, media_parent_id, user_id, uploaded)
            rte.value = self._image_source_parser.remove_image_sources(html)

        logger.debug("Processed %d rich text control(s) for save", len(rtes))

        return serialize_grid_value(grid)

    def to_editor(self, property: Property, culture: Optional[str] = None, segment: Optional[str] = None) -> Any:
        """Resolve media URLs in the rich text controls before the grid is edited."""
        value = property.get_value(culture, segment)
        if value is None:
            return ""

        grid = parse_grid_value(_raw_json(value))

        for rte in grid.rich_text_controls():
            rte.value = self._image_source_parser.ensure_image_sources(_control_html(rte.value))

        return grid

    def get_references(self, value: Any) -> Iterator[EntityReference]:
        raw_json = "" if value is None else _raw_json(value)
        if not raw_json.strip():
            return

        grid = parse_grid_value(raw_json)

        for rte in grid.rich_text_controls():
            yield from self._rich_text_value_editor.get_references(_control_html(rte.value))

        for media in grid.media_controls():
            if not isinstance(media.value, dict):
                continue
            yield from self._media_picker_value_editor.get_references(media.value.get(MEDIA_UDI_KEY))


def _control_html(value: Any) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def _raw_json(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, GridValue):
        return serialize_grid_value(value)
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)
