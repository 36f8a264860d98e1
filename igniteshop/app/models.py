from __future__ import annotations

from datetime import datetime

from igniteshop.app.extensions import db


class StaticPage(db.Model):
    """Generated page props, kept until the revalidation window passes."""

    __tablename__ = "static_pages"

    product_id = db.Column(db.String(64), primary_key=True)
    props = db.Column(db.JSON, nullable=False)
    variant = db.Column(db.String(16), nullable=False, default="full")
    generated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
