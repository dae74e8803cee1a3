import uuid
from grid_editor.extensions import db
from grid_editor.domain.udi import Udi, MEDIA
from .base import BaseModel

class Media(BaseModel):
    __tablename__ = "media"

    name = db.Column(db.String(255), nullable=False)
    media_type = db.Column(db.String(50), nullable=False, default="Image")
    # None files the item at the root of the media library
    parent_key = db.Column(db.String(36), nullable=True, index=True)
    url = db.Column(db.String(512), nullable=False)
    created_by = db.Column(db.String(36), nullable=False)

    @property
    def udi(self) -> Udi:
        return Udi(MEDIA, uuid.UUID(self.id))
