import logging

import uvicorn
from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import get_settings
from dependencies import get_credential_store, get_transaction_store
from routers import admin_router, transactions_router
from routers.responses import envelope, error_response
from services import CredentialStore, TransactionStore, VerificationError
from utils.logging import configure_logging

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

# App instance
app = FastAPI(title="Secure Payment Verification API")

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(VerificationError)
async def verification_error_handler(request: Request, exc: VerificationError):
    return error_response(exc)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    fields = sorted({".".join(str(part) for part in error["loc"][1:]) for error in exc.errors()} - {""})
    message = "Invalid or missing fields: " + ", ".join(fields) if fields else "Invalid request payload"
    return envelope(message, status_code=status.HTTP_400_BAD_REQUEST, success=False)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    message = "Route not found" if exc.status_code == 404 else str(exc.detail)
    return envelope(message, status_code=exc.status_code, success=False)


@app.get("/health")
def healthcheck(
    transactions: TransactionStore = Depends(get_transaction_store),
    credentials: CredentialStore = Depends(get_credential_store),
):
    return envelope(
        "ok",
        data={
            "transactions": len(transactions),
            "live_credentials": len(credentials),
        },
    )


app.include_router(transactions_router)
app.include_router(admin_router)


# Internal errors
@app.middleware("http")
async def envelope_middleware(request: Request, call_next):
    try:
        response = await call_next(request)
    except Exception:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "message": "Internal server error"},
        )
    return response


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=settings.port, reload=True)
