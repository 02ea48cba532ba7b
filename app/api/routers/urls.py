"""
app/api/routers/urls.py

Url registration, listing, detail and check endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from app.domain.url_check import FlashMessage
from app.schemas.urls import (
    CheckRunResponse,
    FlashMessageResponse,
    UrlCheckResponse,
    UrlCreateRequest,
    UrlDetailResponse,
    UrlListItemResponse,
    UrlRegisteredResponse,
    UrlResponse,
)
from app.services.url_service import UrlService, get_url_service
from app.validators.url_validator import UrlValidationError
from db.repositories.errors import PersistenceError, UrlNotFoundError
from db.session import get_db

router = APIRouter(prefix="/urls", tags=["urls"])


def _flash(flash: FlashMessage) -> FlashMessageResponse:
    return FlashMessageResponse(severity=flash.severity.value, message=flash.message)


def _not_found(exc: UrlNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


def _persistence_failed(exc: PersistenceError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="The request could not be completed. Please try again later.",
    )


@router.post(
    "",
    response_model=UrlRegisteredResponse,
    status_code=status.HTTP_201_CREATED,
)
def register_url(
    body: UrlCreateRequest,
    response: Response,
    db: Session = Depends(get_db),
    service: UrlService = Depends(get_url_service),
) -> UrlRegisteredResponse:
    """
    Register a url. Returns 201 for a new identity, 200 when it already exists.
    """

    try:
        result = service.register_url(db=db, raw_url=body.url)
    except UrlValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=exc.to_dict(),
        ) from exc
    except PersistenceError as exc:
        raise _persistence_failed(exc) from exc

    if not result.created:
        response.status_code = status.HTTP_200_OK
    return UrlRegisteredResponse(
        id=result.url_id,
        created=result.created,
        flash=_flash(result.flash),
    )


@router.get("", response_model=list[UrlListItemResponse])
def list_urls(
    db: Session = Depends(get_db),
    service: UrlService = Depends(get_url_service),
) -> list[UrlListItemResponse]:
    try:
        listings = service.list_urls(db=db)
    except PersistenceError as exc:
        raise _persistence_failed(exc) from exc
    return [UrlListItemResponse.model_validate(listing) for listing in listings]


@router.get("/{url_id}", response_model=UrlDetailResponse)
def get_url_detail(
    url_id: int,
    db: Session = Depends(get_db),
    service: UrlService = Depends(get_url_service),
) -> UrlDetailResponse:
    try:
        detail = service.get_url_detail(db=db, url_id=url_id)
    except UrlNotFoundError as exc:
        raise _not_found(exc) from exc
    except PersistenceError as exc:
        raise _persistence_failed(exc) from exc

    return UrlDetailResponse(
        url=UrlResponse.model_validate(detail.url),
        checks=[UrlCheckResponse.model_validate(check) for check in detail.checks],
    )


@router.post("/{url_id}/checks", response_model=CheckRunResponse)
def run_url_check(
    url_id: int,
    db: Session = Depends(get_db),
    service: UrlService = Depends(get_url_service),
) -> CheckRunResponse:
    """
    Run one check now. Network failures come back as a flash, not an error status.
    """

    try:
        result = service.run_check(db=db, url_id=url_id)
    except UrlNotFoundError as exc:
        raise _not_found(exc) from exc
    except PersistenceError as exc:
        raise _persistence_failed(exc) from exc

    return CheckRunResponse(
        flash=_flash(result.flash),
        redirect_target_id=result.redirect_target_id,
        outcome=result.outcome_kind.value,
        check=UrlCheckResponse.model_validate(result.check) if result.check else None,
    )
