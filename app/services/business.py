from datetime import datetime
from typing import List, Sequence, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models import generate_uuid
from app.models.business import Business
from app.schemas.business import BusinessRecord
from app.services.logger import Logger

log = Logger('service-business')

RECORD_COLUMNS = [name for name in BusinessRecord.model_fields if name != "id"]

class BusinessService:
    """Server side of the businesses API. Saving replaces the whole stored collection."""
    def __init__(self):
        pass

    def _serialize_business(self, business: Business) -> BusinessRecord:
        """Serialize a Business row to the record shape the grid uses."""
        values = {"id": business.id}
        for column in RECORD_COLUMNS:
            values[column] = getattr(business, column)
        return BusinessRecord.model_validate(values)

    def _to_row(self, record: BusinessRecord, created_at: str) -> Business:
        values = record.model_dump(mode="json")
        values["id"] = record.id or generate_uuid()
        values["created_at"] = created_at
        return Business(**values)

    def list_all(self, db: Session) -> Tuple[int, dict]:
        """Return every stored business, oldest first."""
        try:
            businesses = db.query(Business).order_by(Business.created_at, Business.id).all()
            records = [self._serialize_business(business).to_wire() for business in businesses]
            log.info(f"Returning {len(records)} businesses")
            return 200, {"success": True, "data": records, "count": len(records)}
        except SQLAlchemyError as e:
            log.error(f"Error reading businesses: {e}")
            return 500, {"success": False, "error": f"Database error: {e}"}

    def replace_all(self, db: Session, records: Sequence[BusinessRecord]) -> Tuple[int, dict]:
        """Store exactly the submitted records, deleting everything else.

        Records with an empty id get a new one. Ids that were already stored
        keep their original created_at.
        """
        log.info(f"Replacing stored businesses with {len(records)} records")
        now = datetime.now().isoformat(' ', 'microseconds')

        try:
            existing = {row_id: created_at for row_id, created_at in db.query(Business.id, Business.created_at).all()}
            db.query(Business).delete(synchronize_session=False)

            rows: List[Business] = []
            for record in records:
                created_at = existing.get(record.id, now) if record.id else now
                rows.append(self._to_row(record, created_at))
            db.add_all(rows)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            log.error(f"Error saving businesses: {e}")
            return 500, {"success": False, "error": f"Database error: {e}"}

        saved = [self._serialize_business(row).to_wire() for row in rows]
        log.info(f"Saved {len(saved)} businesses ({len(existing)} previously stored)")
        return 200, {"success": True, "data": saved, "count": len(saved)}
