import logging

from .models import ContactMessage

logger = logging.getLogger(__name__)


class MessageService:
    @staticmethod
    def send(email, content, user=None):
        message = ContactMessage.objects.create(
            user=user if user is not None and user.is_authenticated else None,
            email=email,
            content=content,
        )
        logger.info(f"Contact message {message.id} received from {email}")
        return message

    @staticmethod
    def mark_read(message):
        if not message.is_read:
            message.is_read = True
            message.save(update_fields=['is_read'])
        return message
