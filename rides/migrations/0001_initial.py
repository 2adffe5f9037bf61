import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='EventSettings',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('start_time', models.DateTimeField(blank=True, null=True)),
                ('registrations_open', models.BooleanField(default=True)),
                ('show_schedule', models.BooleanField(default=True)),
                ('show_reviews', models.BooleanField(default=True)),
                ('show_organizers', models.BooleanField(default=True)),
                ('show_promotions', models.BooleanField(default=True)),
                ('hero_title', models.CharField(blank=True, max_length=200)),
                ('hero_description', models.TextField(blank=True)),
                ('hero_image_url', models.URLField(blank=True, max_length=500)),
                ('hero_image_hint', models.CharField(blank=True, max_length=100)),
                ('perk1_title', models.CharField(blank=True, max_length=100)),
                ('perk1_description', models.TextField(blank=True)),
                ('perk2_title', models.CharField(blank=True, max_length=100)),
                ('perk2_description', models.TextField(blank=True)),
                ('perk3_title', models.CharField(blank=True, max_length=100)),
                ('perk3_description', models.TextField(blank=True)),
                ('ticket_title', models.CharField(default='RideRegister', max_length=100)),
                ('ticket_subtitle', models.CharField(default='Event Ticket', max_length=100)),
                ('ticket_logo_url', models.URLField(blank=True, max_length=500)),
                ('certificate_title', models.CharField(default='Certificate of Completion', max_length=100)),
                ('certificate_subtitle', models.CharField(default='the Annual Community Bike Ride', max_length=200)),
                ('certificate_logo_url', models.URLField(blank=True, max_length=500)),
                ('certificate_signatory_name', models.CharField(default='RideRegister Team', max_length=100)),
                ('certificate_signatory_role', models.CharField(default='Event Organizer', max_length=100)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'event settings',
                'verbose_name_plural': 'event settings',
            },
        ),
        migrations.CreateModel(
            name='Faq',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('question', models.CharField(max_length=500)),
                ('answer', models.TextField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name': 'FAQ',
                'ordering': ['created_at'],
            },
        ),
        migrations.CreateModel(
            name='LocationPartner',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200)),
                ('image_url', models.URLField(max_length=500)),
                ('image_hint', models.CharField(max_length=100)),
                ('website_url', models.URLField(blank=True, max_length=500)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'ordering': ['created_at'],
            },
        ),
        migrations.CreateModel(
            name='LocationSettings',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('origin', models.CharField(default='City Hall', max_length=200)),
                ('destination', models.CharField(default='Central Park', max_length=200)),
            ],
            options={
                'verbose_name': 'route',
                'verbose_name_plural': 'route',
            },
        ),
        migrations.CreateModel(
            name='Offer',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=200)),
                ('description', models.TextField()),
                ('validity', models.CharField(max_length=200)),
                ('image_url', models.URLField(max_length=500)),
                ('image_hint', models.CharField(max_length=100)),
                ('actual_price', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ('offer_price', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Organizer',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200)),
                ('role', models.CharField(max_length=200)),
                ('image_url', models.URLField(blank=True, max_length=500)),
                ('image_hint', models.CharField(blank=True, max_length=100)),
                ('contact_number', models.CharField(blank=True, max_length=30)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'ordering': ['created_at'],
            },
        ),
        migrations.CreateModel(
            name='ScheduleEvent',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('time', models.CharField(max_length=50)),
                ('title', models.CharField(max_length=200)),
                ('description', models.TextField()),
                ('icon', models.CharField(max_length=50)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'ordering': ['created_at'],
            },
        ),
        migrations.CreateModel(
            name='Profile',
            fields=[
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, primary_key=True, related_name='profile', serialize=False, to=settings.AUTH_USER_MODEL)),
                ('display_name', models.CharField(blank=True, max_length=200)),
                ('photo_url', models.URLField(blank=True, max_length=500)),
                ('role', models.CharField(choices=[('user', 'User'), ('viewer', 'Viewer'), ('admin', 'Admin'), ('superadmin', 'Super Admin')], default='user', max_length=20)),
                ('access_request_status', models.CharField(blank=True, choices=[('', 'No request'), ('pending_review', 'Pending Review'), ('approved', 'Approved'), ('rejected', 'Rejected')], default='', max_length=20)),
                ('access_requested_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'ordering': ['display_name'],
            },
        ),
        migrations.CreateModel(
            name='Registration',
            fields=[
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, primary_key=True, related_name='registration', serialize=False, to=settings.AUTH_USER_MODEL)),
                ('uuid', models.UUIDField(default=uuid.uuid4, editable=False, unique=True)),
                ('registration_type', models.CharField(choices=[('bike', 'Bike'), ('jeep', 'Jeep'), ('car', 'Car')], max_length=10)),
                ('full_name', models.CharField(max_length=200)),
                ('age', models.PositiveSmallIntegerField()),
                ('phone_number', models.CharField(max_length=30)),
                ('whatsapp_number', models.CharField(blank=True, max_length=30)),
                ('photo_url', models.URLField(blank=True, max_length=500)),
                ('email', models.EmailField(blank=True, max_length=254)),
                ('consent', models.BooleanField(default=False)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('approved', 'Approved'), ('rejected', 'Rejected'), ('cancellation_requested', 'Cancellation Requested'), ('cancelled', 'Cancelled')], default='pending', max_length=30)),
                ('rider1_checked_in', models.BooleanField(default=False)),
                ('rider1_finished', models.BooleanField(default=False)),
                ('certificate_granted', models.BooleanField(default=False)),
                ('cancellation_reason', models.TextField(blank=True)),
                ('status_last_updated_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('status_last_updated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='QnaQuestion',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('text', models.TextField()),
                ('user_name', models.CharField(max_length=200)),
                ('user_photo_url', models.URLField(blank=True, max_length=500)),
                ('is_pinned', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='questions', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-is_pinned', '-created_at'],
            },
        ),
        migrations.CreateModel(
            name='QnaReply',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('text', models.TextField()),
                ('user_name', models.CharField(max_length=200)),
                ('user_photo_url', models.URLField(blank=True, max_length=500)),
                ('is_admin', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('question', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='replies', to='rides.qnaquestion')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='qna_replies', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name_plural': 'QnA replies',
                'ordering': ['created_at'],
            },
        ),
        migrations.CreateModel(
            name='Announcement',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('message', models.CharField(max_length=280)),
                ('admin_name', models.CharField(max_length=200)),
                ('admin_role', models.CharField(choices=[('user', 'User'), ('viewer', 'Viewer'), ('admin', 'Admin'), ('superadmin', 'Super Admin')], default='admin', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('admin', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-created_at'],
            },
        ),
    ]
