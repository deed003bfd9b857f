"""
Device-scoped local storage.

Same contract as a browser's localStorage: string keys, string values,
visible only to the device that wrote them.
"""

from typing import Optional
from sqlalchemy.orm import Session

from portal.models.local_storage import LocalStorageItem


class LocalStorage:
    """Key/value storage for a single device"""

    def __init__(self, db: Session, device_id: str):
        self.db = db
        self.device_id = device_id

    def _find(self, key: str) -> Optional[LocalStorageItem]:
        return (
            self.db.query(LocalStorageItem)
            .filter(
                LocalStorageItem.device_id == self.device_id,
                LocalStorageItem.key == key,
            )
            .first()
        )

    def get_item(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key was never set"""
        item = self._find(key)
        return item.value if item else None

    def set_item(self, key: str, value: str) -> None:
        """Create or overwrite a key"""
        item = self._find(key)
        if item is None:
            item = LocalStorageItem(device_id=self.device_id, key=key, value=value)
            self.db.add(item)
        else:
            item.value = value
        self.db.commit()
