from django.urls import path

from .views import (
    action_endpoint, download_certificate_pdf, download_ticket_pdf, event_home,
    registration_detail, registration_qr_code, upload_photo,
)

app_name = 'rides'

urlpatterns = [
    path('', event_home, name='event-home'),
    path('ticket/<uuid:uuid>/', registration_detail, name='ticket-detail'),
    path('ticket/<uuid:uuid>/qr/', registration_qr_code, name='ticket-qr'),
    path('ticket/<uuid:uuid>/download/', download_ticket_pdf, name='download-ticket'),
    path('ticket/<uuid:uuid>/certificate/', download_certificate_pdf, name='download-certificate'),

    # API
    path('api/upload/', upload_photo, name='upload'),
    path('api/login/', action_endpoint, {'name': 'login'}, name='login'),
    path('api/actions/<slug:name>/', action_endpoint, name='action'),
]
