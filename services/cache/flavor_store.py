from __future__ import annotations
from typing import Dict, Tuple
import time

from sqlmodel import Session, select

from config.database import create_db_and_tables
from models.flavor import FlavorCacheEntry, FlavorRecord
from utils.logger import setup_logger

logger = setup_logger(__name__)


class FlavorCacheStore:
    def __init__(self, engine):
        self.engine = engine
        create_db_and_tables(engine)

    def load_all(self) -> Dict[str, Tuple[FlavorRecord, float]]:
        entries: Dict[str, Tuple[FlavorRecord, float]] = {}
        with Session(self.engine) as session:
            rows = session.exec(select(FlavorCacheEntry)).all()
            for row in rows:
                try:
                    record = FlavorRecord.model_validate(row.payload)
                except ValueError as e:
                    logger.warning(
                        "Skipping unreadable flavor cache row",
                        extra={"canonical_name": row.canonical_name, "error": str(e)}
                    )
                    continue
                entries[row.canonical_name] = (record, row.fetched_at)
        return entries

    def save_all(self, entries: Dict[str, Tuple[FlavorRecord, float]]) -> int:
        start_time = time.time()
        with Session(self.engine) as session:
            for name, (record, fetched_at) in entries.items():
                row = session.get(FlavorCacheEntry, name)
                payload = record.model_dump(mode="json")
                if row is None:
                    row = FlavorCacheEntry(canonical_name=name, payload=payload, fetched_at=fetched_at)
                else:
                    row.payload = payload
                    row.fetched_at = fetched_at
                session.add(row)
            session.commit()

        logger.info(
            "Flavor cache persisted",
            extra={
                "entries": len(entries),
                "duration_ms": round((time.time() - start_time) * 1000, 2)
            }
        )
        return len(entries)
