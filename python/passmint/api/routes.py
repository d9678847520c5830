"""
HTTP endpoints for password generation and validation.
"""

import json
import logging
from typing import Any, Dict

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import DEFAULT_COUNT, DEFAULT_LENGTH
from ..exceptions import InvalidRequestError
from ..utils.password_generator import generate_password, generate_passwords
from ..utils.validation import validate_password
from .params import int_param, options_from_params, parse_generation_params, requirements_from_params

logger = logging.getLogger(__name__)

router = APIRouter()


async def read_json_body(request: Request) -> Dict[str, Any]:
    """
    Decode the request body as a JSON object.

    An empty body is treated as an empty object.

    Raises:
        InvalidRequestError: If the body is not valid JSON or not an object
    """
    raw = await request.body()
    if not raw.strip():
        return {}

    try:
        data = json.loads(raw)
    except ValueError as e:
        raise InvalidRequestError(f"Invalid JSON body: {e}")
    except RecursionError:
        raise InvalidRequestError("Invalid JSON body: nesting too deep")

    if not isinstance(data, dict):
        raise InvalidRequestError("JSON body must be an object")

    return data


@router.get("/api/password")
async def get_password(request: Request) -> Dict[str, Any]:
    """Generate a single password from query parameters."""
    query = request.query_params
    length = int_param(query.get("length"), DEFAULT_LENGTH)
    params = parse_generation_params(query)

    password = generate_password(length, options_from_params(params))
    logger.debug(f"Generated password of length {len(password)}")

    return {
        "success": True,
        "password": password,
        "length": len(password),
        "options": params,
    }


@router.post("/api/passwords")
async def post_passwords(request: Request) -> Dict[str, Any]:
    """Generate a batch of passwords from a JSON body."""
    body = await read_json_body(request)
    length = int_param(body.get("length"), DEFAULT_LENGTH)
    count = int_param(body.get("count"), DEFAULT_COUNT)
    params = parse_generation_params(body)

    passwords = generate_passwords(count, length, options_from_params(params))

    return {
        "success": True,
        "count": len(passwords),
        "passwords": passwords,
        "length": length,
        "options": params,
    }


@router.post("/api/password/validate")
async def post_validate(request: Request) -> JSONResponse:
    """Check a password against strength requirements."""
    body = await read_json_body(request)
    password = body.get("password")

    if not isinstance(password, str) or not password:
        raise InvalidRequestError(
            "Field 'password' is required and must be a non-empty string",
            status_code=422,
        )

    report = validate_password(password, requirements_from_params(body.get("requirements")))
    logger.debug(f"Validated password: {report.passed}/{report.total} checks passed")

    return JSONResponse(
        status_code=200 if report.valid else 422,
        content={
            "success": True,
            "password": password,
            "result": report.to_dict(),
        },
    )


@router.get("/health", tags=["health"])
async def health_check() -> Dict[str, Any]:
    """Service health check endpoint."""
    return {
        "status": "healthy",
        "service": "passmint",
        "version": __version__,
    }
