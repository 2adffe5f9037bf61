from django.contrib import admin

from .models import (
    Announcement, EventSettings, Faq, LocationPartner, LocationSettings, Offer, Organizer,
    Profile, QnaQuestion, QnaReply, Registration, ScheduleEvent,
)


admin.site.site_header = "RideRegister"
admin.site.site_title = "RideRegister Admin"
admin.site.index_title = "Ride Dashboard"

# --- INLINES ---

class QnaReplyInline(admin.TabularInline):
    model = QnaReply
    extra = 0
    fields = ('user_name', 'text', 'is_admin', 'created_at')
    readonly_fields = ('created_at',)

# --- ADMINS ---

@admin.register(Registration)
class RegistrationAdmin(admin.ModelAdmin):
    list_display = ('full_name', 'registration_type', 'status', 'rider1_checked_in', 'rider1_finished', 'certificate_granted', 'created_at')
    list_filter = ('status', 'registration_type', 'rider1_checked_in', 'certificate_granted')
    search_fields = ('full_name', 'phone_number', 'email', 'uuid')
    readonly_fields = ('uuid', 'status_last_updated_at', 'status_last_updated_by', 'created_at')

@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ('display_name', 'email', 'role', 'access_request_status')
    list_filter = ('role', 'access_request_status')
    search_fields = ('display_name', 'user__email')

@admin.register(QnaQuestion)
class QnaQuestionAdmin(admin.ModelAdmin):
    list_display = ('text', 'user_name', 'is_pinned', 'created_at')
    list_filter = ('is_pinned',)
    search_fields = ('text', 'user_name')
    inlines = [QnaReplyInline]

@admin.register(Announcement)
class AnnouncementAdmin(admin.ModelAdmin):
    list_display = ('message', 'admin_name', 'admin_role', 'created_at')

@admin.register(Faq)
class FaqAdmin(admin.ModelAdmin):
    list_display = ('question', 'created_at')
    search_fields = ('question', 'answer')

@admin.register(Offer)
class OfferAdmin(admin.ModelAdmin):
    list_display = ('title', 'validity', 'actual_price', 'offer_price')

@admin.register(Organizer)
class OrganizerAdmin(admin.ModelAdmin):
    list_display = ('name', 'role', 'contact_number')

@admin.register(LocationPartner)
class LocationPartnerAdmin(admin.ModelAdmin):
    list_display = ('name', 'website_url')

@admin.register(ScheduleEvent)
class ScheduleEventAdmin(admin.ModelAdmin):
    list_display = ('time', 'title', 'icon')

# Singletons: one row, never deleted from the admin
@admin.register(EventSettings, LocationSettings)
class SingletonAdmin(admin.ModelAdmin):
    def has_add_permission(self, request):
        return not self.model.objects.exists()

    def has_delete_permission(self, request, obj=None):
        return False
