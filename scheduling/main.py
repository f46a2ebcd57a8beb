import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from scheduling.core import config
from scheduling.core.errors import SchedulingError, ValidationError
from scheduling.database import Base, engine, ensure_appointment_schema
from scheduling.jobs.registry import queue
from scheduling.models import appointment, file, notification, user  # noqa: F401
from scheduling.routes import appointment_routes

logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s %(levelname)s [%(name)s] %(message)s',
)

app = FastAPI(title='Scheduling API')

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

logger = logging.getLogger(__name__)


@app.on_event('startup')
def initialize_database() -> None:
    config.validate_runtime_config()
    try:
        Base.metadata.create_all(bind=engine)
        ensure_appointment_schema()
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL and database credentials.')


@app.on_event('startup')
def start_job_worker() -> None:
    queue.start()


@app.on_event('shutdown')
def stop_job_worker() -> None:
    queue.stop()


@app.exception_handler(SchedulingError)
async def scheduling_error_handler(request: Request, exc: SchedulingError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={'error': exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    error = ValidationError()
    logger.debug('Rejected request to %s: %s', request.url.path, exc.errors())
    return JSONResponse(status_code=error.status_code, content={'error': error.message})


@app.get('/')
def root():
    return {'status': 'Scheduling API Running'}


app.include_router(appointment_routes.router, prefix='/appointments')
