import os
import shutil
import uuid
from typing import Optional

from flask import current_app
from werkzeug.utils import secure_filename

from grid_editor.domain.udi import MEDIA, Udi
from grid_editor.extensions import db
from grid_editor.models.media import Media
from grid_editor.utils.audit import log_action
from grid_editor.utils.transaction import transactional

ALLOWED_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp', 'svg'}


def allowed_file(filename):
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS


class MediaService:
    """Media library access. Must be used inside an application context."""

    def create_media_from_file(
        self,
        name: str,
        parent_key: Optional[uuid.UUID],
        user_id: str,
        source_path: str,
        media_type: str = "Image",
    ) -> Media:
        """
        Move a file into the upload folder and create a media item for it.

        The media item is committed straight away: it is not rolled back if
        the save that triggered it fails later.
        """
        filename = secure_filename(name)
        if not allowed_file(filename):
            raise ValueError(f"File type not allowed: {name}")

        ext = filename.rsplit('.', 1)[1].lower()
        unique_filename = f"{uuid.uuid4().hex}.{ext}"

        upload_folder = current_app.config.get('UPLOAD_FOLDER', 'uploads')
        os.makedirs(upload_folder, exist_ok=True)
        shutil.move(source_path, os.path.join(upload_folder, unique_filename))

        media_url = current_app.config.get('MEDIA_URL', '/media').rstrip('/')

        media = Media()
        media.id = str(uuid.uuid4())
        media.name = filename
        media.media_type = media_type
        media.parent_key = str(parent_key) if parent_key else None
        media.url = f"{media_url}/{unique_filename}"
        media.created_by = str(user_id)

        with transactional():
            db.session.add(media)
            log_action(
                actor_id=str(user_id),
                action="media.create",
                entity_type="media",
                entity_id=media.id,
                payload={"name": media.name, "parent_key": media.parent_key},
            )

        current_app.logger.info(f"Created media {media.id} ({media.name}) for user {user_id}")
        return media

    def get_by_key(self, key: uuid.UUID) -> Optional[Media]:
        return db.session.get(Media, str(key))

    def get_url(self, udi: Udi) -> Optional[str]:
        if udi.entity_type != MEDIA:
            return None

        media = self.get_by_key(udi.guid)
        return media.url if media else None
