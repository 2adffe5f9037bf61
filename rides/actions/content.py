"""
Admin-editable homepage content.

The list-style entities (FAQ, schedule, organizers, promotions, partners)
all share one create/update/delete shape: a payload without ``id`` creates,
one with ``id`` updates that row. The settings documents are singletons.
"""
import logging

from ..auth import ADMIN_ROLES, authorize
from ..forms import (
    BrandingForm, EventTimeForm, FaqForm, GeneralSettingsForm, HomepageContentForm,
    HomepageVisibilityForm, LocationForm, LocationPartnerForm, ObjectRefForm, OfferForm,
    OrganizerForm, ScheduleEventForm,
)
from ..models import (
    EventSettings, Faq, LocationPartner, LocationSettings, Offer, Organizer, ScheduleEvent,
)
from .base import action, get_or_fail, ok, validate

logger = logging.getLogger(__name__)

DEFAULT_ORIGIN = "City Hall"
DEFAULT_DESTINATION = "Central Park"


def _collection_actions(manage_name, delete_name, model, form_class, label):
    @action(manage_name)
    def manage(values, credential):
        identity = authorize(credential, ADMIN_ROLES)

        object_id = values.get('id')
        instance = get_or_fail(model, object_id, f"{label} not found.") if object_id else None
        form = validate(form_class, values, message="Invalid data.", instance=instance)
        obj = form.save()

        verb = 'updated' if instance else 'added'
        logger.info("Admin %s %s %s %s", identity.uid, verb, model.__name__, obj.pk)
        return ok(f"{label} {verb}.", id=obj.pk)

    @action(delete_name)
    def delete(values, credential):
        identity = authorize(credential, ADMIN_ROLES)
        form = validate(ObjectRefForm, values)
        get_or_fail(model, form.cleaned_data['id'], f"{label} not found.").delete()

        logger.info("Admin %s deleted %s %s", identity.uid, model.__name__, form.cleaned_data['id'])
        return ok(f"{label} deleted.")

    manage.__name__ = manage_name
    delete.__name__ = delete_name
    return manage, delete


manage_faq, delete_faq = _collection_actions(
    'manage_faq', 'delete_faq', Faq, FaqForm, "FAQ item")
manage_schedule, delete_schedule_item = _collection_actions(
    'manage_schedule', 'delete_schedule_item', ScheduleEvent, ScheduleEventForm, "Schedule item")
manage_organizer, delete_organizer = _collection_actions(
    'manage_organizer', 'delete_organizer', Organizer, OrganizerForm, "Organizer")
manage_promotion, delete_promotion = _collection_actions(
    'manage_promotion', 'delete_promotion', Offer, OfferForm, "Promotion")
manage_location_partner, delete_location_partner = _collection_actions(
    'manage_location_partner', 'delete_location_partner', LocationPartner, LocationPartnerForm, "Location partner")


def _save_event_settings(form_class, values, message):
    form = validate(form_class, values, message=message, instance=EventSettings.load())
    form.save()


@action('manage_location')
def manage_location(values, credential):
    authorize(credential, ADMIN_ROLES)
    data = {
        'origin': values.get('origin') or DEFAULT_ORIGIN,
        'destination': values.get('destination') or DEFAULT_DESTINATION,
    }
    form = validate(LocationForm, data, message="Invalid data.", instance=LocationSettings.load())
    form.save()
    return ok("Route location updated successfully.")


@action('manage_event_time')
def manage_event_time(values, credential):
    authorize(credential, ADMIN_ROLES)
    form = validate(EventTimeForm, values, message="Invalid data.")

    event_settings = EventSettings.load()
    event_settings.start_time = form.cleaned_data['event_date']
    event_settings.save(update_fields=['start_time', 'updated_at'])
    return ok("Event time updated successfully.")


@action('manage_general_settings')
def manage_general_settings(values, credential):
    identity = authorize(credential, ADMIN_ROLES)
    _save_event_settings(GeneralSettingsForm, values, "Invalid data.")
    logger.info("Admin %s set registrations_open=%s", identity.uid, EventSettings.load().registrations_open)
    return ok("Settings updated.")


@action('manage_homepage_content')
def manage_homepage_content(values, credential):
    authorize(credential, ADMIN_ROLES)
    _save_event_settings(HomepageContentForm, values, "Invalid data provided.")
    return ok("Homepage content updated successfully!")


@action('manage_homepage_visibility')
def manage_homepage_visibility(values, credential):
    authorize(credential, ADMIN_ROLES)
    _save_event_settings(HomepageVisibilityForm, values, "Invalid data provided.")
    return ok("Homepage section visibility updated.")


@action('manage_branding')
def manage_branding(values, credential):
    authorize(credential, ADMIN_ROLES)
    _save_event_settings(BrandingForm, values, "Invalid data provided.")
    return ok("Ticket and certificate branding updated.")
