"""
Local storage model.

One row per (device, key) pair, mirroring the browser localStorage contract:
string keys mapped to string (JSON text) values, isolated per device.
"""

from sqlalchemy import Column, Integer, String, Text, DateTime, UniqueConstraint
from sqlalchemy.sql import func
from portal.core.database import Base


class LocalStorageItem(Base):
    """
    Local storage item - a single key/value entry for one device.

    Table: local_storage
    """
    __tablename__ = "local_storage"
    __table_args__ = (
        UniqueConstraint("device_id", "key", name="uq_local_storage_device_key"),
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    device_id = Column(String(64), nullable=False, index=True)
    key = Column(String(255), nullable=False)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<LocalStorageItem(device_id='{self.device_id}', key='{self.key}')>"
