from typing import Any, Iterator, Optional

from grid_editor.constants import EMPTY_GUID
from grid_editor.domain.udi import EntityReference
from grid_editor.richtext import HtmlImageSourceParser, HtmlLocalLinkParser, RichTextEditorPastedImages
from grid_editor.security import SecurityContext, resolve_user_id
from .base import (
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


@data_editor(
    "RichText",
    "Rich Text Editor",
    "rte",
    value_type=ValueTypes.TEXT,
    icon="icon-browser-window",
    group=Groups.RICH_CONTENT,
)
class RichTextPropertyEditor(DataEditor):
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

    def create_value_editor(self) -> "RichTextPropertyValueEditor":
        return RichTextPropertyValueEditor(
            self.attribute,
            self._image_source_parser,
            self._local_link_parser,
            self._pasted_images,
        )


class RichTextPropertyValueEditor(DataValueEditor, DataValueReference):
    def __init__(
        self,
        attribute: DataEditorAttribute,
        image_source_parser: HtmlImageSourceParser,
        local_link_parser: HtmlLocalLinkParser,
        pasted_images: RichTextEditorPastedImages,
    ):
        super().__init__(attribute)
        self._image_source_parser = image_source_parser
        self._local_link_parser = local_link_parser
        self._pasted_images = pasted_images

    def from_editor(
        self,
        editor_value: ContentPropertyData,
        current_value: Any,
        context: Optional[SecurityContext] = None,
    ) -> Optional[str]:
        if editor_value.value is None:
            return None

        media_parent = getattr(editor_value.data_type_configuration, "media_parent_id", None)
        media_parent_id = media_parent.guid if media_parent is not None else EMPTY_GUID

        html = self._pasted_images.find_and_persist_pasted_temp_images(
            str(editor_value.value),
            media_parent_id,
            resolve_user_id(context),
        )
        return self._image_source_parser.remove_image_sources(html)

    def to_editor(self, property: Property, culture: Optional[str] = None, segment: Optional[str] = None) -> Any:
        value = property.get_value(culture, segment)
        if value is None:
            return ""
        return self._image_source_parser.ensure_image_sources(str(value))

    def get_references(self, value: Any) -> Iterator[EntityReference]:
        text = "" if value is None else value if isinstance(value, str) else str(value)

        for udi in self._image_source_parser.find_udis_from_data_attributes(text):
            yield EntityReference(udi)

        for udi in self._local_link_parser.find_udis_from_local_links(text):
            yield EntityReference(udi)
