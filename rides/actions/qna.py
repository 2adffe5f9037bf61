"""Q&A threads and organizer announcements."""
import logging

from ..auth import ADMIN_ROLES, authorize, ensure_same_identity
from ..forms import AnnouncementForm, ObjectRefForm, QuestionForm, QuestionRefForm, ReplyForm
from ..models import Announcement, QnaQuestion, QnaReply
from .base import action, get_or_fail, ok, validate

logger = logging.getLogger(__name__)


@action('add_question')
def add_question(values, credential):
    identity = authorize(credential)
    ensure_same_identity(identity, values.get('user_id'))
    form = validate(QuestionForm, values)

    question = QnaQuestion.objects.create(
        text=form.cleaned_data['text'],
        user=identity.user,
        user_name=identity.display_name(form.cleaned_data['user_name']),
        user_photo_url=form.cleaned_data['user_photo_url'] or identity.profile.photo_url,
    )

    logger.info("User %s posted question %s", identity.uid, question.pk)
    return ok("Question posted successfully!", id=question.pk)


@action('add_reply')
def add_reply(values, credential):
    identity = authorize(credential)
    ensure_same_identity(identity, values.get('user_id'))
    form = validate(ReplyForm, values)
    question = get_or_fail(QnaQuestion, form.cleaned_data['question_id'], "Question not found.")

    reply = QnaReply.objects.create(
        question=question,
        text=form.cleaned_data['text'],
        user=identity.user,
        user_name=identity.display_name(form.cleaned_data['user_name']),
        user_photo_url=form.cleaned_data['user_photo_url'] or identity.profile.photo_url,
        is_admin=identity.is_admin,
    )

    logger.info("User %s replied to question %s", identity.uid, question.pk)
    return ok("Reply posted successfully!", id=reply.pk)


@action('toggle_pin_question')
def toggle_pin_question(values, credential):
    authorize(credential, ADMIN_ROLES)
    form = validate(QuestionRefForm, values)
    question = get_or_fail(QnaQuestion, form.cleaned_data['question_id'], "Question not found.")

    question.is_pinned = not question.is_pinned
    question.save(update_fields=['is_pinned'])

    return ok(f"Question {'pinned' if question.is_pinned else 'unpinned'}.", isPinned=question.is_pinned)


@action('delete_question')
def delete_question(values, credential):
    identity = authorize(credential, ADMIN_ROLES)
    form = validate(QuestionRefForm, values)
    question = get_or_fail(QnaQuestion, form.cleaned_data['question_id'], "Question not found.")
    question.delete()

    logger.info("Admin %s deleted question %s", identity.uid, form.cleaned_data['question_id'])
    return ok("Question deleted.")


@action('add_announcement')
def add_announcement(values, credential):
    identity = authorize(credential, ADMIN_ROLES)
    ensure_same_identity(identity, values.get('admin_id'))
    form = validate(AnnouncementForm, values)

    announcement = Announcement.objects.create(
        message=form.cleaned_data['message'],
        admin=identity.user,
        admin_name=identity.display_name(form.cleaned_data['admin_name']),
        admin_role=identity.role,
    )
    return ok("Announcement posted successfully!", id=announcement.pk)


@action('delete_announcement')
def delete_announcement(values, credential):
    authorize(credential, ADMIN_ROLES)
    form = validate(ObjectRefForm, values)
    get_or_fail(Announcement, form.cleaned_data['id'], "Announcement not found.").delete()
    return ok("Announcement deleted.")
