import logging
import os
import uuid
from typing import Dict, Optional, Protocol

from werkzeug.utils import secure_filename

from grid_editor.constants import EMPTY_GUID
from grid_editor.domain.udi import Udi
from .html import get_attribute, remove_attribute, replace_img_tags, set_attribute, split_query

logger = logging.getLogger(__name__)

TEMP_IMAGE_ATTRIBUTE = "data-tmpimg"


class PastedMedia(Protocol):
    udi: Udi
    url: str


class MediaCreator(Protocol):
    def create_media_from_file(
        self,
        name: str,
        parent_key: Optional[uuid.UUID],
        user_id: str,
        source_path: str,
    ) -> PastedMedia: ...


class RichTextEditorPastedImages:
    """
    Promotes images pasted into the rich text editor to media items.

    A pasted image is an <img> that either carries ``data-tmpimg`` or whose
    ``src`` points into the temporary upload URL. Each one becomes a media
    item and the tag is rewritten to reference it through ``data-udi``.
    """

    def __init__(self, media_service: MediaCreator, temp_folder: str, temp_url: str):
        self._media_service = media_service
        self._temp_folder = temp_folder
        self._temp_url = temp_url

    def find_and_persist_pasted_temp_images(
        self,
        html: Optional[str],
        media_parent_id: uuid.UUID,
        user_id: str,
        uploaded: Optional[Dict[str, PastedMedia]] = None,
    ) -> Optional[str]:
        """
        Rewrite pasted images in ``html`` to reference new media items.

        ``uploaded`` maps temp references to media already created for them.
        Passing the same dict for several values of one save promotes an
        image pasted into more than one of them only once.
        """
        if not html:
            return html

        parent_key = None if media_parent_id == EMPTY_GUID else media_parent_id
        if uploaded is None:
            uploaded = {}

        def persist(tag: str) -> str:
            reference = self._temp_reference(tag)
            if reference is None:
                return tag

            media = uploaded.get(reference)
            if media is None:
                path = self._temp_file_path(reference)
                if path is None or not os.path.isfile(path):
                    logger.warning("Pasted image %s not found in temp folder, skipping", reference)
                    return tag

                media = self._media_service.create_media_from_file(
                    os.path.basename(path),
                    parent_key,
                    user_id,
                    path,
                )
                uploaded[reference] = media
                logger.debug("Persisted pasted image %s as %s", reference, media.udi)

            tag = remove_attribute(tag, TEMP_IMAGE_ATTRIBUTE)
            tag = set_attribute(tag, "src", media.url)
            return set_attribute(tag, "data-udi", str(media.udi))

        return replace_img_tags(html, persist)

    def _temp_reference(self, tag: str) -> Optional[str]:
        temp_image = get_attribute(tag, TEMP_IMAGE_ATTRIBUTE)
        if temp_image:
            return temp_image

        src = get_attribute(tag, "src")
        if src and src.startswith(self._temp_url):
            return src
        return None

    def _temp_file_path(self, reference: str) -> Optional[str]:
        path, _ = split_query(reference)
        filename = secure_filename(os.path.basename(path))
        if not filename:
            return None
        return os.path.join(self._temp_folder, filename)
