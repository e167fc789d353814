import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from hospital_network import __version__
from hospital_network.core.config import settings
from hospital_network.core.errors import (
    ConstraintViolation,
    ForeignKeyViolation,
    NotNullViolation,
    RecordNotFound,
    RestrictedDeletion,
    UniqueConstraintViolation,
)
from hospital_network.core.logging import configure_logging
from hospital_network.api.v1.clinic import router as clinic_router
from hospital_network.api.v1.specialty import router as specialty_router
from hospital_network.api.v1.doctor import router as doctor_router
from hospital_network.api.v1.patient import router as patient_router
from hospital_network.api.v1.service import router as service_router
from hospital_network.api.v1.appointment import router as appointment_router
from hospital_network.api.v1.payment import router as payment_router
from hospital_network.api.v1.prescriptions import router as prescriptions_router
from hospital_network.api.v1.medical_record import router as medical_record_router
from hospital_network.api.v1.reports import router as reports_router

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_NAME, version=__version__)

app.include_router(clinic_router)
app.include_router(specialty_router)
app.include_router(doctor_router)
app.include_router(patient_router)
app.include_router(service_router)
app.include_router(appointment_router)
app.include_router(payment_router)
app.include_router(prescriptions_router)
app.include_router(medical_record_router)
app.include_router(reports_router)


def _error(status_code: int, exc: Exception, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error": type(exc).__name__, **extra},
    )


@app.exception_handler(RecordNotFound)
async def not_found_handler(request: Request, exc: RecordNotFound):
    return _error(status.HTTP_404_NOT_FOUND, exc)


@app.exception_handler(RestrictedDeletion)
async def restricted_handler(request: Request, exc: RestrictedDeletion):
    return _error(status.HTTP_409_CONFLICT, exc, blockers=exc.blockers)


@app.exception_handler(UniqueConstraintViolation)
async def unique_handler(request: Request, exc: UniqueConstraintViolation):
    return _error(status.HTTP_409_CONFLICT, exc)


@app.exception_handler(ForeignKeyViolation)
@app.exception_handler(NotNullViolation)
async def invalid_reference_handler(request: Request, exc: ConstraintViolation):
    return _error(422, exc)


@app.exception_handler(ConstraintViolation)
async def constraint_handler(request: Request, exc: ConstraintViolation):
    logger.warning("Unclassified constraint violation on %s %s: %s", request.method, request.url.path, exc)
    return _error(status.HTTP_409_CONFLICT, exc)


@app.get("/health")
async def health():
    return {"status": "ok"}
