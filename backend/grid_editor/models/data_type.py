from grid_editor.extensions import db
from .base import BaseModel

class DataType(BaseModel):
    __tablename__ = "data_types"

    name = db.Column(db.String(200), nullable=False)
    editor_alias = db.Column(db.String(100), nullable=False, index=True)
    # Stored in the configuration editor's wire format
    configuration = db.Column(db.JSON, nullable=False, default=dict)
