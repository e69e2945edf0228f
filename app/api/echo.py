"""
Echo API endpoint
"""
import json
import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from app.models.responses import ErrorResponse, SuccessResponse
from app.models.system import EchoData

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Echo"])


def reject_constant(token: str):
    """NaN and Infinity are accepted by the json module but are not JSON"""
    raise ValueError(f"Invalid JSON constant: {token}")


def first_header_values(request: Request) -> dict:
    """
    Map each header name to the first value sent for it

    Names are kept in the lower-case form the ASGI server delivers.
    """
    headers = {}
    for key, value in request.headers.items():
        headers.setdefault(key, value)
    return headers


@router.post(
    "/echo",
    response_model=SuccessResponse,
    responses={400: {"model": ErrorResponse, "description": "Invalid JSON"}},
)
async def echo(request: Request):
    """
    Echo the JSON request body back with the request headers and method

    Bodies that are not valid JSON are rejected with a 400 error envelope.
    Header names are echoed in lower case.
    """
    body = await request.body()
    try:
        payload = json.loads(body, parse_constant=reject_constant)
    except ValueError:
        logger.debug(f"Rejected non-JSON body on {request.url.path}")
        error = ErrorResponse(message="Invalid JSON", status_code=status.HTTP_400_BAD_REQUEST)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error.model_dump(by_alias=True),
        )

    return SuccessResponse(
        data=EchoData(
            echo=payload,
            headers=first_header_values(request),
            method=request.method,
        )
    )
