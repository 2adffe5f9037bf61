import base64
import binascii
import json
import logging
import re
from uuid import uuid4

from django.conf import settings
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage
from django.http import HttpResponse, JsonResponse
from django.shortcuts import get_object_or_404, render
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from .actions import ACTIONS, run_action
from .auth import credential_from_request
from .models import (
    Announcement, EventSettings, Faq, LocationPartner, LocationSettings, Offer, Organizer,
    QnaQuestion, Registration, RegistrationStatus, ScheduleEvent,
)
from .rendering import (
    generate_qr_bytes, organizer_notify_link, qr_payload, render_certificate_pdf,
    render_ticket_pdf, ticket_context, ticket_message, verification_url, whatsapp_link,
)

logger = logging.getLogger(__name__)

# Actions whose HTMX response is the refreshed dashboard row
ROW_ACTIONS = {
    'update_registration_status', 'update_registration_details',
    'check_in_rider', 'revert_check_in', 'finish_rider', 'revert_finish',
    'grant_certificate', 'revoke_certificate',
}

DATA_URI_RE = re.compile(r'^data:(?P<mime>[\w/+.-]+);base64,(?P<data>.+)$', re.DOTALL)

UPLOAD_EXTENSIONS = {
    'image/jpeg': 'jpg',
    'image/png': 'png',
    'image/webp': 'webp',
    'image/gif': 'gif',
}


def event_home(request):
    """Public event page."""
    event_settings = EventSettings.load()
    context = {
        'settings': event_settings,
        'route': LocationSettings.load(),
        'faqs': Faq.objects.all(),
        'announcements': Announcement.objects.all()[:5],
        'questions': QnaQuestion.objects.prefetch_related('replies')[:20],
        'partners': LocationPartner.objects.all(),
    }
    # Sections the organizers switched off are not queried at all
    if event_settings.show_schedule:
        context['schedule'] = ScheduleEvent.objects.all()
    if event_settings.show_organizers:
        context['organizers'] = Organizer.objects.all()
    if event_settings.show_promotions:
        context['offers'] = Offer.objects.all()
    return render(request, 'rides/event_home.html', context)


def registration_detail(request, uuid):
    """
    Public verification page for a ticket.
    Scanning either the ticket or the certificate QR code lands here.
    """
    registration = get_object_or_404(Registration, uuid=uuid)
    context = ticket_context(registration)

    if registration.status == RegistrationStatus.APPROVED:
        context['share_link'] = whatsapp_link(
            registration.whatsapp_number or registration.phone_number,
            ticket_message(registration.full_name, verification_url(registration)),
        )
    elif registration.status == RegistrationStatus.PENDING:
        context['notify_link'] = organizer_notify_link(registration)

    return render(request, 'rides/ticket_detail.html', context)


def registration_qr_code(request, uuid):
    """QR code PNG carrying the ticket payload."""
    registration = get_object_or_404(Registration, uuid=uuid)
    return HttpResponse(generate_qr_bytes(qr_payload(registration)), content_type='image/png')


def download_ticket_pdf(request, uuid):
    registration = get_object_or_404(Registration, uuid=uuid)
    if registration.status != RegistrationStatus.APPROVED:
        return HttpResponse("Registration not approved", status=403)

    pdf_file = render_ticket_pdf(registration, base_url=request.build_absolute_uri())

    response = HttpResponse(pdf_file, content_type='application/pdf')
    response['Content-Disposition'] = f'attachment; filename="Ride_Ticket_{registration.uuid}.pdf"'
    return response


def download_certificate_pdf(request, uuid):
    registration = get_object_or_404(Registration, uuid=uuid)
    if not registration.certificate_granted:
        return HttpResponse("Certificate not granted", status=403)

    pdf_file = render_certificate_pdf(registration, base_url=request.build_absolute_uri())

    response = HttpResponse(pdf_file, content_type='application/pdf')
    response['Content-Disposition'] = f'attachment; filename="Ride_Certificate_{registration.uuid}.pdf"'
    return response


def _request_payload(request):
    if request.content_type == 'application/json':
        try:
            payload = json.loads(request.body or b'{}')
        except (ValueError, UnicodeDecodeError):
            return None
        return payload if isinstance(payload, dict) else None
    return request.POST.dict()


@csrf_exempt
@require_POST
def action_endpoint(request, name):
    """Dispatch a JSON payload to the named action."""
    if name not in ACTIONS:
        return JsonResponse({'success': False, 'message': "Unknown action."}, status=404)

    values = _request_payload(request)
    if values is None:
        return JsonResponse({'success': False, 'message': "Malformed JSON body."}, status=400)

    result = run_action(name, values, credential_from_request(request))

    if request.htmx and name in ROW_ACTIONS and result.success:
        registration = Registration.objects.get(pk=result.data['registration']['id'])
        return render(request, 'rides/partials/registration_row.html', {'reg': registration})

    return JsonResponse(result.to_dict(), status=result.http_status)


@csrf_exempt
@require_POST
def upload_photo(request):
    """Accept ``{file: <base64 data URI>}`` and answer with the stored file URL."""
    values = _request_payload(request) or {}
    match = DATA_URI_RE.match(values.get('file') or '')
    if not match:
        return JsonResponse({'error': "No file provided."}, status=400)

    extension = UPLOAD_EXTENSIONS.get(match.group('mime'))
    if extension is None:
        return JsonResponse({'error': "Only image uploads are allowed."}, status=400)

    try:
        content = base64.b64decode(match.group('data'), validate=True)
    except (binascii.Error, ValueError):
        return JsonResponse({'error': "File is not valid base64."}, status=400)

    if len(content) > settings.RIDES_UPLOAD_MAX_BYTES:
        return JsonResponse({'error': "File is too large."}, status=400)

    try:
        name = default_storage.save(f"uploads/{uuid4().hex}.{extension}", ContentFile(content))
    except OSError:
        logger.exception("Upload could not be stored")
        return JsonResponse({'error': "Upload failed. Please try again."}, status=500)

    return JsonResponse({'url': request.build_absolute_uri(default_storage.url(name))})
