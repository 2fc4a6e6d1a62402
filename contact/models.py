from django.conf import settings
from django.db import models

MAX_CONTENT_LENGTH = 2000


class ContactMessage(models.Model):
    """Message sent to the shop through the contact form"""
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, null=True, blank=True, related_name='contact_messages'
    )
    email = models.EmailField()
    content = models.TextField(max_length=MAX_CONTENT_LENGTH)
    created_at = models.DateTimeField(auto_now_add=True)
    is_read = models.BooleanField(default=False)

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"Message from {self.email} ({self.created_at:%Y-%m-%d})"
