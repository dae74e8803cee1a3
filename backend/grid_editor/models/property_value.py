from grid_editor.extensions import db
from .base import BaseModel

class PropertyValue(BaseModel):
    __tablename__ = "property_values"

    content_key = db.Column(db.String(36), nullable=False, index=True)
    property_alias = db.Column(db.String(100), nullable=False)
    culture = db.Column(db.String(20), nullable=True)
    segment = db.Column(db.String(50), nullable=True)

    data_type_id = db.Column(db.String(36), db.ForeignKey("data_types.id"), nullable=False)
    value = db.Column(db.Text, nullable=True)

    data_type = db.relationship("DataType")

    __table_args__ = (
        db.UniqueConstraint(
            "content_key", "property_alias", "culture", "segment",
            name="uq_property_value_variant",
        ),
        db.Index("idx_property_value_content_alias", "content_key", "property_alias"),
    )
