"""
Tickets, certificates and outbound links.

Everything here is a read-only projection of a Registration and the event
settings. On-screen pages embed QR images from the external QR service;
PDFs embed a locally generated PNG so that rendering a file never waits on
the network.
"""
import base64
import io
import json
from urllib.parse import quote, urlencode

import qrcode
from django.conf import settings
from django.template.loader import render_to_string

from .models import EventSettings, LocationSettings, RegistrationStatus

TICKET_QR_SIZE = '120x120'
CERTIFICATE_QR_SIZE = '100x100'


def qr_payload(registration):
    return json.dumps({'registrationId': str(registration.uuid), 'rider': 1})


def qr_image_url(data, size=TICKET_QR_SIZE, **extra):
    params = {'size': size, 'data': data, **extra}
    return f"{settings.RIDES_QR_SERVICE_URL}?{urlencode(params, quote_via=quote)}"


def verification_url(registration):
    return f"{settings.RIDES_PUBLIC_BASE_URL.rstrip('/')}/ticket/{registration.uuid}/"


def generate_qr_bytes(data):
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=10,
        border=4,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")
    buffer = io.BytesIO()
    img.save(buffer, 'PNG')
    return buffer.getvalue()


def qr_png_data_uri(data):
    encoded = base64.b64encode(generate_qr_bytes(data)).decode('ascii')
    return f"data:image/png;base64,{encoded}"


def ticket_context(registration, event_settings=None):
    event_settings = event_settings or EventSettings.load()
    payload = qr_payload(registration)
    return {
        'registration': registration,
        'settings': event_settings,
        'route': LocationSettings.load(),
        'title': event_settings.ticket_title,
        'subtitle': event_settings.ticket_subtitle,
        'logo_url': event_settings.ticket_logo_url,
        'event_date': event_settings.start_time,
        'qr_data': payload,
        'qr_url': qr_image_url(payload, TICKET_QR_SIZE),
        'is_valid': registration.status == RegistrationStatus.APPROVED,
        'verification_url': verification_url(registration),
    }


def certificate_context(registration, event_settings=None):
    event_settings = event_settings or EventSettings.load()
    url = verification_url(registration)
    return {
        'registration': registration,
        'settings': event_settings,
        'rider_name': registration.full_name,
        'rider_photo_url': registration.photo_url,
        'title': event_settings.certificate_title,
        'subtitle': event_settings.certificate_subtitle,
        'logo_url': event_settings.certificate_logo_url,
        'signatory_name': event_settings.certificate_signatory_name,
        'signatory_role': event_settings.certificate_signatory_role,
        'event_date': event_settings.start_time,
        'verification_url': url,
        'qr_url': qr_image_url(url, CERTIFICATE_QR_SIZE, qzone=1, margin=0),
    }


def ticket_pdf_html(registration):
    context = ticket_context(registration)
    context['qr_src'] = qr_png_data_uri(context['qr_data'])
    return render_to_string('rides/ticket_pdf.html', context)


def certificate_pdf_html(registration):
    context = certificate_context(registration)
    context['qr_src'] = qr_png_data_uri(context['verification_url'])
    return render_to_string('rides/certificate_pdf.html', context)


def render_ticket_pdf(registration, base_url=None):
    from weasyprint import HTML

    return HTML(string=ticket_pdf_html(registration), base_url=base_url).write_pdf()


def render_certificate_pdf(registration, base_url=None):
    from weasyprint import HTML

    return HTML(string=certificate_pdf_html(registration), base_url=base_url).write_pdf()


# --- Messaging links ---

def whatsapp_link(phone, message=None):
    digits = ''.join(ch for ch in phone if ch.isdigit())
    if len(digits) == 10:
        digits = f"{settings.RIDES_DEFAULT_COUNTRY_CODE}{digits}"

    url = f"https://wa.me/{digits}"
    if message:
        return f"{url}?text={quote(message, safe='')}"
    return url


def ticket_message(name, ticket_url):
    return (
        f"Hi {name}, your registration for the ride is confirmed! "
        f"You can view and download your digital ticket here: {ticket_url}"
    )


def pending_review_message(registration):
    admin_url = f"{settings.RIDES_PUBLIC_BASE_URL.rstrip('/')}/admin/"
    return (
        "Hi team, please review my registration.\n\n"
        f"Name(s): {registration.full_name}\n"
        f"Registration ID: {registration.pk}\n\n"
        f"Manage here: {admin_url}"
    )


def organizer_notify_link(registration):
    return whatsapp_link(settings.RIDES_ORGANIZER_WHATSAPP, pending_review_message(registration))
