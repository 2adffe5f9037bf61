"""Tests for QR payloads, ticket contexts and WhatsApp links"""

import json

from rides.models import EventSettings, RegistrationStatus
from rides.rendering import (
    certificate_context, certificate_pdf_html, generate_qr_bytes, organizer_notify_link, qr_image_url,
    qr_payload, qr_png_data_uri, ticket_context, ticket_message, ticket_pdf_html, verification_url,
    whatsapp_link,
)

from .base import BaseTestCase


class TestTicketRendering(BaseTestCase):

    def test_qr_payload(self):
        registration = self.create_registration()
        assert json.loads(qr_payload(registration)) == {'registrationId': str(registration.uuid), 'rider': 1}

    def test_verification_url(self):
        registration = self.create_registration()
        assert verification_url(registration) == f'https://rides.example.com/ticket/{registration.uuid}/'

    def test_ticket_context_uses_branding(self):
        event_settings = EventSettings.load()
        event_settings.ticket_title = 'City Ride'
        event_settings.save()
        registration = self.create_registration(status=RegistrationStatus.APPROVED)

        context = ticket_context(registration)

        assert context['title'] == 'City Ride'
        assert context['is_valid'] is True
        assert context['qr_url'].startswith('https://api.qrserver.com/v1/create-qr-code/?size=120x120&data=')
        assert context['route'].origin == 'City Hall'

    def test_pending_ticket_is_not_valid(self):
        registration = self.create_registration()
        assert ticket_context(registration)['is_valid'] is False

    def test_certificate_context(self):
        registration = self.create_registration(certificate_granted=True)
        context = certificate_context(registration)

        assert context['rider_name'] == 'Ravi Kumar'
        assert context['signatory_name'] == 'RideRegister Team'
        assert 'size=100x100' in context['qr_url']
        assert 'qzone=1' in context['qr_url']

    def test_ticket_pdf_template(self):
        event_settings = EventSettings.load()
        event_settings.ticket_title = 'City Ride'
        event_settings.save()
        registration = self.create_registration(status=RegistrationStatus.APPROVED)

        html = ticket_pdf_html(registration)

        assert '<h1>Ravi Kumar</h1>' in html
        assert '<h2>City Ride</h2>' in html
        assert 'City Hall &rarr; Central Park' in html
        assert 'src="data:image/png;base64,' in html
        assert str(registration.uuid)[:8] in html

    def test_certificate_pdf_template(self):
        registration = self.create_registration(certificate_granted=True)

        html = certificate_pdf_html(registration)

        assert '<h2>Ravi Kumar</h2>' in html
        assert 'Certificate of Completion' in html
        assert 'RideRegister Team' in html
        assert f'https://rides.example.com/ticket/{registration.uuid}/' in html
        assert 'src="data:image/png;base64,' in html

    def test_notify_link_targets_organizer(self):
        registration = self.create_registration()
        link = organizer_notify_link(registration)
        assert link.startswith('https://wa.me/916363148287?text=')
        assert 'Ravi%20Kumar' in link


def test_qr_image_url_encodes_data():
    url = qr_image_url('{"registrationId": 5, "rider": 1}')
    assert '%7B%22registrationId%22%3A%205%2C%20%22rider%22%3A%201%7D' in url


def test_generated_qr_is_png():
    assert generate_qr_bytes('hello')[:8] == b'\x89PNG\r\n\x1a\n'
    assert qr_png_data_uri('hello').startswith('data:image/png;base64,')


def test_whatsapp_link_prefixes_country_code():
    assert whatsapp_link('98765 43210') == 'https://wa.me/919876543210'
    assert whatsapp_link('+44 7700 900123') == 'https://wa.me/447700900123'


def test_whatsapp_link_encodes_message():
    link = whatsapp_link('9876543210', ticket_message('Asha', 'https://rides.example.com/ticket/3/'))
    assert link.startswith('https://wa.me/919876543210?text=Hi%20Asha%2C%20')
    assert 'https%3A%2F%2Frides.example.com%2Fticket%2F3%2F' in link
