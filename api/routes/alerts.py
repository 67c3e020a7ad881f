"""
Alert composition endpoints.
"""
from fastapi import APIRouter, Depends, status

from agroguard.alerts.composer import AlertComposer, resolve_language
from agroguard.risk.detector import RiskDetector
from api.dependencies import get_composer, get_detector
from api.routes.risks import ensure_finite
from api.models.alert import (
    AlertDraftResponse,
    AlertPreviewRequest,
    AlertPreviewResponse,
    ComposeAlertRequest,
    ComposeAlertResponse,
)


router = APIRouter()


@router.post(
    "/alerts/compose",
    response_model=ComposeAlertResponse,
    status_code=status.HTTP_200_OK,
    summary="Compose an alert message",
    description="Localized SMS text for a risk type and description"
)
async def compose_alert(
    request: ComposeAlertRequest,
    composer: AlertComposer = Depends(get_composer)
):
    """Compose one alert; unknown languages get the English text."""
    message = composer.compose_message(request.risk_type, request.description, request.language)
    return ComposeAlertResponse(message=message, language=resolve_language(request.language))


@router.post(
    "/alerts/preview",
    response_model=AlertPreviewResponse,
    status_code=status.HTTP_200_OK,
    summary="Draft alerts for a roster",
    description="Detect risks for a snapshot and draft a message per nearby farmer and risk"
)
async def preview_alerts(
    request: AlertPreviewRequest,
    detector: RiskDetector = Depends(get_detector),
    composer: AlertComposer = Depends(get_composer)
):
    """
    Draft the messages an SMS transport would send.

    Nothing is sent; farmers further than one degree from the snapshot
    location are skipped.
    """
    snapshot = ensure_finite(request.snapshot)
    risks = detector.get_risks_with_farmer_count(snapshot, request.farmers)
    drafts = composer.compose_for_roster(risks, request.farmers, snapshot.latitude, snapshot.longitude)

    notified = {id(draft.farmer) for draft in drafts}
    skipped = len(request.farmers) - len(notified) if risks else len(request.farmers)

    return AlertPreviewResponse(
        location=snapshot.location,
        drafts=[
            AlertDraftResponse(
                farmer=draft.farmer,
                risk_type=draft.assessment.type,
                severity=draft.assessment.severity,
                language=draft.language,
                message=draft.message,
            )
            for draft in drafts
        ],
        skipped_farmers=skipped,
    )
