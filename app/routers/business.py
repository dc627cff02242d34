from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.services.logger import Logger
from app.services.business import BusinessService
from app.schemas.core import APIResponse, SaveRequest

log = Logger('router-business')

business_router = APIRouter()

@business_router.get("", response_model=APIResponse)
def read_businesses(db: Session = Depends(get_db)):
    """Return every stored business."""
    bus_service = BusinessService()
    code, content = bus_service.list_all(db=db)
    log.debug(f"List response: {code}, {content.get('count')} records")
    return JSONResponse(status_code=code, content=content)

@business_router.post("/save", response_model=APIResponse)
def save_businesses(request: SaveRequest, db: Session = Depends(get_db)):
    """Replace the stored collection with the submitted one."""
    bus_service = BusinessService()
    try:
        code, content = bus_service.replace_all(db=db, records=request.data)
    except Exception as e:
        log.error(f"Unexpected error saving businesses: {e}")
        return JSONResponse(status_code=500, content={"success": False, "error": f"Unexpected error: {e}"})
    log.debug(f"Save response: {code}, {content.get('count')} records")
    return JSONResponse(status_code=code, content=content)
