"""
Repository layer for submitted requests.

Each request kind is an append-only list kept as a JSON array under a fixed
local storage key. Records are never updated or deleted.
"""

import json
import logging
from typing import Generic, List, Optional, Type, TypeVar
from pydantic import ValidationError
from sqlalchemy.orm import Session

from portal.schemas.common import CamelModel
from portal.schemas.design_request import DesignRequest
from portal.schemas.lsm_request import LsmRequest
from portal.schemas.price_change import PriceChange
from portal.schemas.store_hours_change import StoreHoursChange
from portal.services.local_storage import LocalStorage

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=CamelModel)


class RequestRepository(Generic[RecordT]):
    """Base repository: one storage key, one record model"""

    STORAGE_KEY: str = ""
    MODEL: Type[CamelModel] = CamelModel

    @classmethod
    def _load_raw(cls, storage: LocalStorage) -> list:
        data = storage.get_item(cls.STORAGE_KEY)
        if not data:
            return []
        try:
            items = json.loads(data)
        except json.JSONDecodeError as e:
            logger.warning(f"Corrupt local storage value for {cls.STORAGE_KEY}: {str(e)}")
            return []
        if not isinstance(items, list):
            logger.warning(f"Local storage value for {cls.STORAGE_KEY} is not a list")
            return []
        return items

    @classmethod
    def get_all(cls, db: Session, device_id: str) -> List[RecordT]:
        """Get every record for this device in submission order"""
        records = []
        for item in cls._load_raw(LocalStorage(db, device_id)):
            try:
                records.append(cls.MODEL.model_validate(item))
            except ValidationError as e:
                logger.warning(
                    f"Skipping unreadable record in {cls.STORAGE_KEY}: {e.error_count()} error(s)"
                )
        return records

    @classmethod
    def get_by_id(cls, db: Session, device_id: str, record_id: str) -> Optional[RecordT]:
        """Get one record by ID"""
        for record in cls.get_all(db, device_id):
            if record.id == record_id:
                return record
        return None

    @classmethod
    def save(cls, db: Session, device_id: str, record: RecordT) -> RecordT:
        """Append a record to the end of this device's list"""
        storage = LocalStorage(db, device_id)
        items = cls._load_raw(storage)
        items.append(record.to_storage())
        storage.set_item(cls.STORAGE_KEY, json.dumps(items))
        return record


class DesignRequestRepository(RequestRepository[DesignRequest]):
    STORAGE_KEY = "yogurtland_design_requests"
    MODEL = DesignRequest


class StoreHoursChangeRepository(RequestRepository[StoreHoursChange]):
    STORAGE_KEY = "yogurtland_store_hours_changes"
    MODEL = StoreHoursChange


class PriceChangeRepository(RequestRepository[PriceChange]):
    STORAGE_KEY = "yogurtland_price_changes"
    MODEL = PriceChange


class LsmRequestRepository(RequestRepository[LsmRequest]):
    STORAGE_KEY = "yogurtland_lsm_requests"
    MODEL = LsmRequest
