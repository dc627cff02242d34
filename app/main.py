# main.py
from app.services.logger import Logger
from app.core.config import config
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from app.routers.business import business_router

log = Logger('app-main')

app = FastAPI(title=config.settings['APP_NAME'])

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    log.warning(f"Rejected request body on {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": f"Invalid request body: {exc.errors()}"}
    )

@app.get("/")
def root():
    return {"message": "Welcome to the BizSheet API!"}

app.include_router(business_router, prefix="/businesses", tags=["businesses"])

@app.api_route("/{path:path}", methods=["GET", "POST", "PUT", "DELETE"])
async def catch_all(request: Request, path: str):
    """Catch-all route for any other paths not defined in the routers."""
    log.info(f"PATH NOT FOUND - Path: {path} - Method: {request.method}")
    return JSONResponse(
        status_code=404,
        content={
            "success": False,
            "error": f"The requested path '{path}' was not found on the server.",
            "method": request.method
        }
    )
