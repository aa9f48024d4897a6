import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from app.database import create_db_and_tables
from app.config import settings
from app.errors import MarketplaceError
from app.routes import (
    admin,
    bookings,
    books,
    payments,
    reports,
    users,
)

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Run DB creation ONLY in local
    if settings.env == "local":
        create_db_and_tables()
    logger.info(f"Royal Book marketplace API ready on port {settings.port}")
    yield

app = FastAPI(title="Royal Book Marketplace API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(MarketplaceError)
async def marketplace_error_handler(request: Request, exc: MarketplaceError):
    log = logger.warning if exc.status_code < 500 else logger.error
    log(f"{request.method} {request.url.path} -> {exc.status_code} {exc.kind}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"ok": False, "error": exc.to_dict()},
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content={
            "ok": False,
            "error": {
                "kind": "validation_error",
                "message": "Validation error",
                "details": jsonable_errors(exc),
            },
        },
    )


def jsonable_errors(exc: RequestValidationError):
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]


app.include_router(users.router, tags=["Users"])
app.include_router(books.router, tags=["Books"])
app.include_router(bookings.router, tags=["Bookings"])
app.include_router(payments.router, tags=["Payments"])
app.include_router(admin.router, tags=["Admin"])
app.include_router(reports.router, tags=["Reports"])


@app.get("/")
def root():
    return {"message": "Royal Server is running"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.port)
