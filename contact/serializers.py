from rest_framework import serializers
from .models import ContactMessage, MAX_CONTENT_LENGTH


class ContactMessageCreateSerializer(serializers.Serializer):
    email = serializers.EmailField(required=False, allow_blank=True)
    content = serializers.CharField(max_length=MAX_CONTENT_LENGTH)

    def validate(self, data):
        user = self.context.get('user')
        if not data.get('email'):
            if user is None or not user.is_authenticated:
                raise serializers.ValidationError({"email": "Email is required."})
            data['email'] = user.email
        return data


class ContactMessageSerializer(serializers.ModelSerializer):
    user_email = serializers.EmailField(source='user.email', read_only=True, default=None)

    class Meta:
        model = ContactMessage
        fields = ['id', 'email', 'user_email', 'content', 'created_at', 'is_read']
        read_only_fields = fields
