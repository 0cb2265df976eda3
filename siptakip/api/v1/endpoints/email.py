"""Bulk marketing e-mail endpoints (super admin only)."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from siptakip.core.security import authorize
from siptakip.schemas.email import EmailSendRequest, EmailSendResponse, EmailTemplateResponse
from siptakip.services import email_service

router: APIRouter = APIRouter(dependencies=[Depends(authorize("super_admin"))])
logger = logging.getLogger(__name__)


@router.get("/template", response_model=EmailTemplateResponse)
def get_template() -> EmailTemplateResponse:
    return EmailTemplateResponse(
        subject=email_service.DEFAULT_SUBJECT,
        html=email_service.render_default_template(),
    )


@router.post("/send", response_model=EmailSendResponse)
def send_emails(payload: EmailSendRequest) -> EmailSendResponse:
    try:
        mailer = email_service.get_mailer()
    except email_service.MailerNotConfiguredError as exc:
        logger.error("[EMAIL] %s", exc)
        raise HTTPException(status_code=500, detail="E-posta sunucusu yapılandırılmamış") from exc

    subject = payload.subject or email_service.DEFAULT_SUBJECT
    html = payload.custom_html or email_service.render_default_template()
    results = email_service.send_bulk(mailer, payload.emails, subject, html)

    sent = sum(1 for result in results if result.success)
    failed = len(results) - sent
    logger.info("[EMAIL] bulk send finished: %d sent, %d failed", sent, failed)
    return EmailSendResponse(
        message=f"{sent} e-posta gönderildi, {failed} başarısız.",
        sent=sent,
        failed=failed,
        results=results,
    )
