from __future__ import annotations

from datetime import datetime

from motoparts.app.extensions import db


class KeyValueEntry(db.Model):
    """One JSON blob per storage key (catalog, carts written server-side)."""

    __tablename__ = "kv_entries"

    key = db.Column(db.String(255), primary_key=True)
    value = db.Column(db.Text, nullable=False)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
