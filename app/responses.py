"""
Response envelope helpers shared by every router.

Successful responses are wrapped as ``{data, status, header}``; failures
are written as ``{"errors": [{code, title, detail}, ...]}`` with the
failing HTTP status.
"""
from http import HTTPStatus

from fastapi.responses import JSONResponse

from app.middleware import elapsed_seconds
from app.schemas import Envelope, EnvelopeHeader, EnvelopeStatus, ErrorItem, ErrorResponse


def envelope(data, status_code: int = 200) -> JSONResponse:
    """Wrap *data* in the standard envelope and return it as JSON."""
    total = len(data) if isinstance(data, list) else 1
    body = Envelope(
        data=data,
        status=EnvelopeStatus(message=HTTPStatus(status_code).phrase, error_code=0),
        header=EnvelopeHeader(total_data=total, process_time_seconds=elapsed_seconds()),
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True),
    )


def error_response(status_code: int, *details: str, headers: dict | None = None) -> JSONResponse:
    """Return one ``{code, title, detail}`` entry per message in *details*."""
    title = HTTPStatus(status_code).phrase
    body = ErrorResponse(
        errors=[ErrorItem(code=str(status_code), title=title, detail=d) for d in details]
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)
