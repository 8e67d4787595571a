import logging
import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from config import DEBUG, APP_HOST, APP_PORT, UPLOAD_DIR, UPLOAD_URL_PREFIX
from database.init import Base, engine
from responses.error import service_error_response, validation_error_response
from routes import (
    auth_routes,
    property_routes,
    booking_routes,
    lease_routes,
    review_routes,
    message_routes,
    maintenance_routes,
    document_routes,
    admin_routes,
)
from utils.exceptions import ServiceError
from utils.logging_config import configure_logging

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready")
    yield
    engine.dispose()


app = FastAPI(title="Campus Rentals API", debug=DEBUG, lifespan=lifespan)

os.makedirs(UPLOAD_DIR, exist_ok=True)
app.mount(UPLOAD_URL_PREFIX, StaticFiles(directory=UPLOAD_DIR), name="uploads")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ServiceError)
async def handle_service_error(request: Request, exc: ServiceError):
    # Raised from dependencies, e.g. a missing or invalid bearer token
    return service_error_response(exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    return validation_error_response(exc.errors())


app.include_router(auth_routes.router)
app.include_router(property_routes.router)
app.include_router(booking_routes.router)
app.include_router(lease_routes.router)
app.include_router(review_routes.router)
app.include_router(message_routes.router)
app.include_router(maintenance_routes.router)
app.include_router(document_routes.router)
app.include_router(admin_routes.router)


@app.get("/")
def read_root():
    return {"name": "Campus Rentals API", "version": "1.0.0"}


if __name__ == "__main__":
    uvicorn.run("main:app", host=APP_HOST, port=APP_PORT, reload=DEBUG)
