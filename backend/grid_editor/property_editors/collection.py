from typing import Dict, Iterable, Iterator, Optional

from flask import Flask, current_app

from grid_editor.richtext import HtmlImageSourceParser, HtmlLocalLinkParser, RichTextEditorPastedImages
from grid_editor.services.media_service import MediaService
from .base import DataEditor
from .grid import GridPropertyEditor
from .media_picker import MediaPickerPropertyEditor
from .rich_text import RichTextPropertyEditor

EXTENSION_KEY = "property_editors"


class UnknownPropertyEditor(LookupError):
    pass


class PropertyEditorCollection:
    def __init__(self, editors: Iterable[DataEditor]):
        self._editors: Dict[str, DataEditor] = {}
        for editor in editors:
            if editor.alias in self._editors:
                raise ValueError(f"Duplicate property editor alias: {editor.alias}")
            self._editors[editor.alias] = editor

    def get(self, alias: str) -> Optional[DataEditor]:
        return self._editors.get(alias)

    def require(self, alias: str) -> DataEditor:
        editor = self._editors.get(alias)
        if editor is None:
            raise UnknownPropertyEditor(f"Unknown property editor: {alias}")
        return editor

    def __contains__(self, alias: str) -> bool:
        return alias in self._editors

    def __iter__(self) -> Iterator[DataEditor]:
        return iter(self._editors.values())

    def __len__(self) -> int:
        return len(self._editors)


def init_property_editors(app: Flask) -> PropertyEditorCollection:
    media_service = MediaService()
    image_source_parser = HtmlImageSourceParser(media_service.get_url)
    local_link_parser = HtmlLocalLinkParser()
    pasted_images = RichTextEditorPastedImages(
        media_service,
        temp_folder=app.config["TEMP_MEDIA_FOLDER"],
        temp_url=app.config["TEMP_MEDIA_URL"],
    )

    editors = PropertyEditorCollection([
        GridPropertyEditor(image_source_parser, local_link_parser, pasted_images),
        RichTextPropertyEditor(image_source_parser, local_link_parser, pasted_images),
        MediaPickerPropertyEditor(),
    ])

    app.extensions[EXTENSION_KEY] = editors
    app.logger.debug(f"Registered property editors: {', '.join(e.alias for e in editors)}")
    return editors


def get_property_editors() -> PropertyEditorCollection:
    return current_app.extensions[EXTENSION_KEY]
