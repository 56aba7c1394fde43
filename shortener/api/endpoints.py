"""
FastAPI Endpoints for URL Shortener Service

This module defines all REST API endpoints with minimal logic.
Endpoints only handle:
- Request validation (Pydantic models)
- Rate limiting
- Error handling and HTTP responses
- Delegating to service layer

Endpoints are plain `def` functions: FastAPI runs them on its thread pool,
one thread per request, and the in-memory storage is built for that.

Error mapping (detail = {"error": kind, "message": text}):
- invalid_url, scheme_not_allowed, self_referential -> 400
- blocked_domain -> 403
- not_found -> 404
- internal_error -> 500, without internal details
"""

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import RedirectResponse

from shortener.api.schemas import (
    DomainMetricsItem,
    ErrorResponse,
    ShortenRequest,
    ShortenResponse,
    TopDomainsResponse,
    URLInfoResponse,
)
from shortener.core.exceptions import (
    BlockedDomainError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from shortener.core.rate_limit import limiter, RATE_LIMITS
from shortener.core.service_manager import get_metrics_service, get_shortener_service
from shortener.core.validators import sanitize_short_code
from shortener.services.metrics_service import DomainMetricsService
from shortener.services.url_service import ShortenerService

router = APIRouter()


def _error_responses(*status_codes: int) -> dict:
    return {code: {"model": ErrorResponse} for code in status_codes}


def _error(status_code: int, kind: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail={"error": kind, "message": message},
    )


def _require_valid_code(short_code: str) -> str:
    sanitized_code = sanitize_short_code(short_code)
    if not sanitized_code:
        raise _error(
            status.HTTP_400_BAD_REQUEST,
            "invalid_short_code",
            "Short codes must contain only alphanumeric characters (max 20).",
        )
    return sanitized_code


@router.post(
    "/api/v1/urls",
    response_model=ShortenResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_error_responses(400, 403, 500),
    summary="Create a short URL",
    description="Takes a long URL and returns a shortened version; "
                "URLs shortened before return their existing code"
)
@limiter.limit(RATE_LIMITS["shorten"])
def create_short_url(
    request: Request,  # Required for rate limiting (slowapi expects parameter named 'request')
    body: ShortenRequest,
    service: ShortenerService = Depends(get_shortener_service),
) -> ShortenResponse:
    """
    Create a new short URL from a long URL.

    Returns:
        ShortenResponse with short_code, short_url, and original_url
    """
    try:
        record = service.create_short_url(body.url)
    except BlockedDomainError as e:
        raise _error(status.HTTP_403_FORBIDDEN, e.kind, e.reason)
    except ValidationError as e:
        raise _error(status.HTTP_400_BAD_REQUEST, e.kind, e.reason)
    except InternalError:
        raise _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "internal_error",
            "Failed to create short URL",
        )

    return ShortenResponse(
        short_code=record.code,
        short_url=service.generate_short_url(record.code),
        original_url=record.original_url,
    )


@router.get(
    "/api/v1/urls/{short_code}",
    response_model=URLInfoResponse,
    responses=_error_responses(400, 404),
    summary="Get short URL details",
)
@limiter.limit(RATE_LIMITS["lookup"])
def get_short_url(
    short_code: str,
    request: Request,
    service: ShortenerService = Depends(get_shortener_service),
) -> URLInfoResponse:
    short_code = _require_valid_code(short_code)

    try:
        record = service.get_url(short_code)
    except NotFoundError as e:
        raise _error(status.HTTP_404_NOT_FOUND, "not_found", str(e))

    return URLInfoResponse(
        short_code=record.code,
        short_url=service.generate_short_url(record.code),
        original_url=record.original_url,
        created_at=record.created_at,
    )


@router.delete(
    "/api/v1/urls/{short_code}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=_error_responses(400, 404),
    summary="Delete a short URL",
)
@limiter.limit(RATE_LIMITS["lookup"])
def delete_short_url(
    short_code: str,
    request: Request,
    service: ShortenerService = Depends(get_shortener_service),
) -> Response:
    short_code = _require_valid_code(short_code)

    try:
        service.delete_short_url(short_code)
    except NotFoundError as e:
        raise _error(status.HTTP_404_NOT_FOUND, "not_found", str(e))

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/api/v1/metrics/domains",
    response_model=TopDomainsResponse,
    summary="Most shortened domains",
    description="Returns the domains with the most shortened URLs, highest first"
)
@limiter.limit(RATE_LIMITS["metrics"])
def get_top_domains(
    request: Request,
    limit: str = "3",
    metrics_service: DomainMetricsService = Depends(get_metrics_service),
) -> TopDomainsResponse:
    """
    Get the top domains.

    Args:
        limit: Number of domains; invalid or non-positive values use the default
    """
    try:
        requested = int(limit)
    except ValueError:
        requested = 0
    if requested <= 0:
        requested = metrics_service.default_limit

    top = metrics_service.get_top_domains(requested)
    return TopDomainsResponse(
        top_domains=[
            DomainMetricsItem(domain=stat.domain, shorten_count=stat.count)
            for stat in top
        ],
        limit=requested,
    )


@router.get(
    "/{short_code}",
    status_code=status.HTTP_302_FOUND,
    responses=_error_responses(400, 404),
    summary="Redirect to original URL",
    description="Takes a short code and redirects to the original long URL"
)
@limiter.limit(RATE_LIMITS["redirect"])
def redirect_to_url(
    short_code: str,
    request: Request,
    service: ShortenerService = Depends(get_shortener_service),
) -> RedirectResponse:
    """
    Redirect to the original URL for a given short code.

    Raises:
        HTTPException 400: If short code format is invalid
        HTTPException 404: If short code not found
        HTTPException 429: If rate limit exceeded
    """
    short_code = _require_valid_code(short_code)

    try:
        original_url = service.resolve(short_code)
    except NotFoundError:
        raise _error(
            status.HTTP_404_NOT_FOUND,
            "not_found",
            f"Short code '{short_code}' not found",
        )

    return RedirectResponse(
        url=original_url,
        status_code=status.HTTP_302_FOUND
    )
