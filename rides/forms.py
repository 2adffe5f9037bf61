from django import forms
from django.core.validators import MaxValueValidator, MinValueValidator, RegexValidator

from .models import (
    EventSettings, Faq, LocationPartner, LocationSettings, Offer, Organizer,
    RegistrationStatus, ScheduleEvent, UserRole, VehicleType,
)

PHONE_VALIDATOR = RegexValidator(
    regex=r'^([+]?[\s0-9]+)?(\d{3}|[(]?[0-9]+[)])?([-]?[\s]?[0-9])+$',
    message="Invalid phone number.",
)

CONSENT_RULES = [
    "I will wear a helmet and proper riding gear for the whole ride.",
    "I hold a valid driving licence for the vehicle I am bringing.",
    "My vehicle is roadworthy, insured and carries valid papers.",
    "I will follow the marshals and stay in formation.",
    "I will not ride under the influence of alcohol or drugs.",
    "I ride at my own risk and release the organizers from liability.",
    "I agree that photos and videos of me may be used by the organizers.",
]


class RiderDetailsForm(forms.Form):
    """Rider fields shared by signup and admin edits."""

    full_name = forms.CharField(
        label="Full Name", min_length=2, max_length=200,
        error_messages={'min_length': "Full name must be at least 2 characters."},
    )
    age = forms.IntegerField(
        label="Age",
        validators=[
            MinValueValidator(18, "You must be at least 18 years old."),
            MaxValueValidator(100),
        ],
    )
    phone_number = forms.CharField(label="Phone Number", max_length=30, validators=[PHONE_VALIDATOR])
    photo_url = forms.URLField(label="Photo", max_length=500, required=False)
    registration_type = forms.ChoiceField(
        label="Vehicle", choices=VehicleType.choices,
        error_messages={'required': "You need to select a vehicle type."},
    )


class RiderRegistrationForm(RiderDetailsForm):
    """Signup for an identity that already exists."""

    user_id = forms.CharField(required=False)
    whatsapp_number = forms.CharField(label="WhatsApp Number", max_length=30, required=False)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        # One mandatory checkbox per ride rule
        for index, rule in enumerate(CONSENT_RULES, start=1):
            self.fields[f'rule{index}'] = forms.BooleanField(
                label=rule, required=True,
                error_messages={'required': "You must agree to this rule."},
            )

    def registration_data(self):
        """Cleaned values that belong on the Registration record."""
        data = {
            key: value for key, value in self.cleaned_data.items()
            if key in RIDER_FIELDS
        }
        data['consent'] = True
        return data


RIDER_FIELDS = ('full_name', 'age', 'phone_number', 'whatsapp_number', 'photo_url', 'registration_type')


class AccountRegistrationForm(RiderRegistrationForm):
    """Signup that also creates the account."""

    email = forms.EmailField(error_messages={'invalid': "A valid email is required."})
    password = forms.CharField(min_length=6, strip=False)
    confirm_password = forms.CharField(min_length=6, strip=False)

    def clean(self):
        cleaned_data = super().clean()
        password = cleaned_data.get('password')
        confirm = cleaned_data.get('confirm_password')
        if password and confirm and password != confirm:
            self.add_error('confirm_password', "Passwords do not match.")
        return cleaned_data


class EditRegistrationForm(RiderDetailsForm):
    registration_id = forms.CharField()


class RegistrationRefForm(forms.Form):
    registration_id = forms.CharField(error_messages={'required': "Registration ID is required."})
    admin_id = forms.CharField(required=False)


class StatusUpdateForm(RegistrationRefForm):
    status = forms.ChoiceField(choices=RegistrationStatus.choices)


class CancellationForm(forms.Form):
    registration_id = forms.CharField()
    reason = forms.CharField(
        min_length=10, max_length=500,
        error_messages={'min_length': "Please provide a reason for cancellation."},
    )


class AccessRequestForm(forms.Form):
    user_id = forms.CharField(required=False)


class OrganizerSignupForm(forms.Form):
    email = forms.EmailField()
    password = forms.CharField(min_length=6, strip=False)
    consent = forms.BooleanField(required=True, error_messages={'required': "Consent is required."})


class RoleChangeForm(forms.Form):
    admin_id = forms.CharField(required=False)
    target_user_id = forms.CharField()
    new_role = forms.ChoiceField(choices=UserRole.choices)


class LoginForm(forms.Form):
    email = forms.EmailField()
    password = forms.CharField(strip=False)


# --- Q&A ---

class QuestionForm(forms.Form):
    text = forms.CharField(
        min_length=10, max_length=500,
        error_messages={
            'min_length': "Question must be at least 10 characters.",
            'max_length': "Question cannot be longer than 500 characters.",
        },
    )
    user_id = forms.CharField(required=False)
    user_name = forms.CharField(max_length=200, required=False)
    user_photo_url = forms.URLField(max_length=500, required=False)


class ReplyForm(forms.Form):
    question_id = forms.IntegerField()
    text = forms.CharField(
        max_length=500,
        error_messages={'max_length': "Reply cannot be longer than 500 characters."},
    )
    user_id = forms.CharField(required=False)
    user_name = forms.CharField(max_length=200, required=False)
    user_photo_url = forms.URLField(max_length=500, required=False)


class QuestionRefForm(forms.Form):
    question_id = forms.IntegerField()


class AnnouncementForm(forms.Form):
    message = forms.CharField(
        min_length=5, max_length=280,
        error_messages={
            'min_length': "Announcement must be at least 5 characters.",
            'max_length': "Announcement cannot be longer than 280 characters.",
        },
    )
    admin_name = forms.CharField(max_length=200, required=False)


class ObjectRefForm(forms.Form):
    id = forms.IntegerField()


# --- Content entities ---

class FaqForm(forms.ModelForm):
    question = forms.CharField(min_length=10, max_length=500)
    answer = forms.CharField(min_length=10)

    class Meta:
        model = Faq
        fields = ['question', 'answer']


class ScheduleEventForm(forms.ModelForm):
    title = forms.CharField(min_length=3, max_length=200)
    description = forms.CharField(min_length=10)

    class Meta:
        model = ScheduleEvent
        fields = ['time', 'title', 'description', 'icon']


class OrganizerForm(forms.ModelForm):
    name = forms.CharField(min_length=3, max_length=200)
    role = forms.CharField(min_length=3, max_length=200)

    class Meta:
        model = Organizer
        fields = ['name', 'role', 'image_url', 'image_hint', 'contact_number']


class OfferForm(forms.ModelForm):
    title = forms.CharField(min_length=3, max_length=200)
    description = forms.CharField(min_length=10)
    validity = forms.CharField(min_length=3, max_length=200)
    image_url = forms.URLField(max_length=500, error_messages={'required': "A valid promotion photo is required."})
    image_hint = forms.CharField(min_length=2, max_length=100)

    class Meta:
        model = Offer
        fields = ['title', 'description', 'validity', 'image_url', 'image_hint', 'actual_price', 'offer_price']


class LocationPartnerForm(forms.ModelForm):
    name = forms.CharField(min_length=3, max_length=200)
    image_hint = forms.CharField(min_length=2, max_length=100)

    class Meta:
        model = LocationPartner
        fields = ['name', 'image_url', 'image_hint', 'website_url']


class LocationForm(forms.ModelForm):
    origin = forms.CharField(min_length=5, max_length=200)
    destination = forms.CharField(min_length=5, max_length=200)

    class Meta:
        model = LocationSettings
        fields = ['origin', 'destination']


class EventTimeForm(forms.Form):
    event_date = forms.DateTimeField()


class GeneralSettingsForm(forms.ModelForm):
    class Meta:
        model = EventSettings
        fields = ['registrations_open']


class HomepageContentForm(forms.ModelForm):
    hero_title = forms.CharField(min_length=5, max_length=200)
    hero_description = forms.CharField(min_length=10)
    perk1_title = forms.CharField(min_length=3, max_length=100)
    perk1_description = forms.CharField(min_length=3)
    perk2_title = forms.CharField(min_length=3, max_length=100)
    perk2_description = forms.CharField(min_length=3)
    perk3_title = forms.CharField(min_length=3, max_length=100)
    perk3_description = forms.CharField(min_length=3)

    class Meta:
        model = EventSettings
        fields = [
            'hero_title', 'hero_description', 'hero_image_url', 'hero_image_hint',
            'perk1_title', 'perk1_description',
            'perk2_title', 'perk2_description',
            'perk3_title', 'perk3_description',
        ]


class HomepageVisibilityForm(forms.ModelForm):
    class Meta:
        model = EventSettings
        fields = ['show_schedule', 'show_reviews', 'show_organizers', 'show_promotions']


class BrandingForm(forms.ModelForm):
    class Meta:
        model = EventSettings
        fields = [
            'ticket_title', 'ticket_subtitle', 'ticket_logo_url',
            'certificate_title', 'certificate_subtitle', 'certificate_logo_url',
            'certificate_signatory_name', 'certificate_signatory_role',
        ]
