import uuid

from django.conf import settings
from django.db import models
from django.urls import reverse
from django.utils import timezone


class UserRole(models.TextChoices):
    USER = 'user', 'User'
    VIEWER = 'viewer', 'Viewer'
    ADMIN = 'admin', 'Admin'
    SUPERADMIN = 'superadmin', 'Super Admin'


class RegistrationStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    APPROVED = 'approved', 'Approved'
    REJECTED = 'rejected', 'Rejected'
    CANCELLATION_REQUESTED = 'cancellation_requested', 'Cancellation Requested'
    CANCELLED = 'cancelled', 'Cancelled'


class VehicleType(models.TextChoices):
    BIKE = 'bike', 'Bike'
    JEEP = 'jeep', 'Jeep'
    CAR = 'car', 'Car'


class AccessRequestStatus(models.TextChoices):
    NONE = '', 'No request'
    PENDING_REVIEW = 'pending_review', 'Pending Review'
    APPROVED = 'approved', 'Approved'
    REJECTED = 'rejected', 'Rejected'


class Profile(models.Model):
    """Application-side profile of an identity. Shares its primary key with the auth user."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE,
        primary_key=True, related_name='profile'
    )
    display_name = models.CharField(max_length=200, blank=True)
    photo_url = models.URLField(max_length=500, blank=True)
    role = models.CharField(max_length=20, choices=UserRole.choices, default=UserRole.USER)

    access_request_status = models.CharField(
        max_length=20, choices=AccessRequestStatus.choices, blank=True, default=AccessRequestStatus.NONE
    )
    access_requested_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['display_name']

    def __str__(self):
        return f"{self.display_name or self.user.get_username()} ({self.role})"

    @property
    def email(self):
        return self.user.email

    @property
    def has_access_request(self):
        return bool(self.access_request_status)


class Registration(models.Model):
    """One rider's signup. Its id is the id of the identity that owns it."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE,
        primary_key=True, related_name='registration'
    )
    # Public ticket id; the primary key is sequential and never appears in URLs
    uuid = models.UUIDField(default=uuid.uuid4, editable=False, unique=True)
    registration_type = models.CharField(max_length=10, choices=VehicleType.choices)
    full_name = models.CharField(max_length=200)
    age = models.PositiveSmallIntegerField()
    phone_number = models.CharField(max_length=30)
    whatsapp_number = models.CharField(max_length=30, blank=True)
    photo_url = models.URLField(max_length=500, blank=True)
    email = models.EmailField(blank=True)
    consent = models.BooleanField(default=False)

    status = models.CharField(max_length=30, choices=RegistrationStatus.choices, default=RegistrationStatus.PENDING)
    rider1_checked_in = models.BooleanField(default=False)
    rider1_finished = models.BooleanField(default=False)
    certificate_granted = models.BooleanField(default=False)
    cancellation_reason = models.TextField(blank=True)

    status_last_updated_at = models.DateTimeField(null=True, blank=True)
    status_last_updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL,
        null=True, blank=True, related_name='+'
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.full_name} - {self.registration_type} ({self.status})"

    def get_absolute_url(self):
        return reverse('rides:ticket-detail', kwargs={'uuid': self.uuid})


class QnaQuestion(models.Model):
    text = models.TextField()
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='questions')
    user_name = models.CharField(max_length=200)
    user_photo_url = models.URLField(max_length=500, blank=True)
    is_pinned = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-is_pinned', '-created_at']

    def __str__(self):
        return self.text[:60]


class QnaReply(models.Model):
    question = models.ForeignKey(QnaQuestion, on_delete=models.CASCADE, related_name='replies')
    text = models.TextField()
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='qna_replies')
    user_name = models.CharField(max_length=200)
    user_photo_url = models.URLField(max_length=500, blank=True)
    # Role snapshot at post time; not re-evaluated when the role later changes
    is_admin = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['created_at']
        verbose_name_plural = 'QnA replies'

    def __str__(self):
        return f"{self.user_name}: {self.text[:40]}"


class Announcement(models.Model):
    message = models.CharField(max_length=280)
    admin = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, related_name='+')
    admin_name = models.CharField(max_length=200)
    admin_role = models.CharField(max_length=20, choices=UserRole.choices, default=UserRole.ADMIN)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return self.message


class Faq(models.Model):
    question = models.CharField(max_length=500)
    answer = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['created_at']
        verbose_name = 'FAQ'

    def __str__(self):
        return self.question


class Offer(models.Model):
    title = models.CharField(max_length=200)
    description = models.TextField()
    validity = models.CharField(max_length=200)
    image_url = models.URLField(max_length=500)
    image_hint = models.CharField(max_length=100)
    actual_price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    offer_price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return self.title


class Organizer(models.Model):
    name = models.CharField(max_length=200)
    role = models.CharField(max_length=200)
    image_url = models.URLField(max_length=500, blank=True)
    image_hint = models.CharField(max_length=100, blank=True)
    contact_number = models.CharField(max_length=30, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['created_at']

    def __str__(self):
        return f"{self.name} ({self.role})"


class LocationPartner(models.Model):
    name = models.CharField(max_length=200)
    image_url = models.URLField(max_length=500)
    image_hint = models.CharField(max_length=100)
    website_url = models.URLField(max_length=500, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['created_at']

    def __str__(self):
        return self.name


class ScheduleEvent(models.Model):
    time = models.CharField(max_length=50)
    title = models.CharField(max_length=200)
    description = models.TextField()
    icon = models.CharField(max_length=50)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['created_at']

    def __str__(self):
        return f"{self.time} {self.title}"


class SingletonModel(models.Model):
    """A settings document that always lives at pk=1."""

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        self.pk = 1
        super().save(*args, **kwargs)

    @classmethod
    def load(cls):
        obj, _ = cls.objects.get_or_create(pk=1)
        return obj


class EventSettings(SingletonModel):
    start_time = models.DateTimeField(null=True, blank=True)
    registrations_open = models.BooleanField(default=True)

    # Homepage sections
    show_schedule = models.BooleanField(default=True)
    show_reviews = models.BooleanField(default=True)
    show_organizers = models.BooleanField(default=True)
    show_promotions = models.BooleanField(default=True)

    hero_title = models.CharField(max_length=200, blank=True)
    hero_description = models.TextField(blank=True)
    hero_image_url = models.URLField(max_length=500, blank=True)
    hero_image_hint = models.CharField(max_length=100, blank=True)
    perk1_title = models.CharField(max_length=100, blank=True)
    perk1_description = models.TextField(blank=True)
    perk2_title = models.CharField(max_length=100, blank=True)
    perk2_description = models.TextField(blank=True)
    perk3_title = models.CharField(max_length=100, blank=True)
    perk3_description = models.TextField(blank=True)

    # Ticket and certificate branding
    ticket_title = models.CharField(max_length=100, default='RideRegister')
    ticket_subtitle = models.CharField(max_length=100, default='Event Ticket')
    ticket_logo_url = models.URLField(max_length=500, blank=True)
    certificate_title = models.CharField(max_length=100, default='Certificate of Completion')
    certificate_subtitle = models.CharField(max_length=200, default='the Annual Community Bike Ride')
    certificate_logo_url = models.URLField(max_length=500, blank=True)
    certificate_signatory_name = models.CharField(max_length=100, default='RideRegister Team')
    certificate_signatory_role = models.CharField(max_length=100, default='Event Organizer')

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'event settings'
        verbose_name_plural = 'event settings'

    def __str__(self):
        return 'Event settings'

    @property
    def has_started(self):
        return bool(self.start_time and timezone.now() >= self.start_time)


class LocationSettings(SingletonModel):
    origin = models.CharField(max_length=200, default='City Hall')
    destination = models.CharField(max_length=200, default='Central Park')

    class Meta:
        verbose_name = 'route'
        verbose_name_plural = 'route'

    def __str__(self):
        return f"{self.origin} → {self.destination}"
