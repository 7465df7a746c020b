"""
Serializers for the users app.

Account payloads use the camelCase field names the web and mobile clients
expect.  Profile attributes live on `UserProfile` and are exposed flat on
the user representation through ``source="profile.<field>"`` mappings.
"""
from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers

User = get_user_model()


class LocationSerializer(serializers.Serializer):
    city = serializers.CharField(max_length=120, required=False, allow_blank=True, allow_null=True)
    state = serializers.CharField(max_length=120, required=False, allow_blank=True, allow_null=True)


class UserSummarySerializer(serializers.ModelSerializer):
    """Minimal author/friend projection embedded in social and event payloads."""

    firstName = serializers.CharField(source="first_name", read_only=True)
    lastName = serializers.CharField(source="last_name", read_only=True)
    profileImageUrl = serializers.CharField(source="profile.profile_image_url", read_only=True, default="")

    class Meta:
        model = User
        fields = ["id", "firstName", "lastName", "profileImageUrl"]


class PublicUserSerializer(UserSummarySerializer):
    location = serializers.JSONField(source="profile.location", read_only=True, default=None)
    musicPreferences = serializers.JSONField(source="profile.music_preferences", read_only=True, default=list)
    createdAt = serializers.DateTimeField(source="date_joined", read_only=True)

    class Meta(UserSummarySerializer.Meta):
        fields = UserSummarySerializer.Meta.fields + ["location", "musicPreferences", "createdAt"]


class UserSearchResultSerializer(UserSummarySerializer):
    location = serializers.JSONField(source="profile.location", read_only=True, default=None)

    class Meta(UserSummarySerializer.Meta):
        fields = UserSummarySerializer.Meta.fields + ["location"]


class AccountSerializer(serializers.ModelSerializer):
    """The caller's own account, as returned by register/login/me."""

    firstName = serializers.CharField(source="first_name", read_only=True)
    lastName = serializers.CharField(source="last_name", read_only=True)
    profileImageUrl = serializers.CharField(source="profile.profile_image_url", read_only=True)
    dateOfBirth = serializers.DateField(source="profile.date_of_birth", read_only=True)
    location = serializers.JSONField(source="profile.location", read_only=True)
    musicPreferences = serializers.JSONField(source="profile.music_preferences", read_only=True)
    maxPrice = serializers.DecimalField(
        source="profile.max_price", max_digits=10, decimal_places=2, coerce_to_string=False, read_only=True
    )
    isEmailVerified = serializers.BooleanField(source="profile.is_email_verified", read_only=True)
    createdAt = serializers.DateTimeField(source="date_joined", read_only=True)
    updatedAt = serializers.DateTimeField(source="profile.updated_at", read_only=True)

    class Meta:
        model = User
        fields = [
            "id", "email", "firstName", "lastName", "profileImageUrl", "dateOfBirth",
            "location", "musicPreferences", "maxPrice", "isEmailVerified", "createdAt", "updatedAt",
        ]


class RegisterSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False, style={"input_type": "password"})
    firstName = serializers.CharField(max_length=150)
    lastName = serializers.CharField(max_length=150)

    def validate_email(self, value: str) -> str:
        value = value.strip().lower()
        if User.objects.filter(username=value).exists():
            raise serializers.ValidationError("User with this email already exists")
        return value

    def validate_password(self, value: str) -> str:
        validate_password(value)
        return value

    def create(self, validated_data):
        email = validated_data["email"]
        return User.objects.create_user(
            username=email,
            email=email,
            password=validated_data["password"],
            first_name=validated_data["firstName"],
            last_name=validated_data["lastName"],
        )


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)


class ChangePasswordSerializer(serializers.Serializer):
    currentPassword = serializers.CharField(write_only=True, trim_whitespace=False)
    newPassword = serializers.CharField(write_only=True, trim_whitespace=False)

    def validate_newPassword(self, value: str) -> str:
        validate_password(value, self.context["request"].user)
        return value


class ProfileUpdateSerializer(serializers.Serializer):
    """Partial update of the caller's name and profile attributes."""

    USER_FIELDS = {"firstName": "first_name", "lastName": "last_name"}
    PROFILE_FIELDS = {
        "dateOfBirth": "date_of_birth",
        "location": "location",
        "musicPreferences": "music_preferences",
        "maxPrice": "max_price",
        "profileImageUrl": "profile_image_url",
    }

    firstName = serializers.CharField(max_length=150, required=False)
    lastName = serializers.CharField(max_length=150, required=False)
    dateOfBirth = serializers.DateField(required=False, allow_null=True)
    location = LocationSerializer(required=False, allow_null=True)
    musicPreferences = serializers.ListField(
        child=serializers.CharField(max_length=50), required=False, max_length=50
    )
    maxPrice = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, required=False, allow_null=True)
    profileImageUrl = serializers.URLField(max_length=500, required=False, allow_blank=True)

    def update(self, instance, validated_data):
        user_changes = []
        for key, attr in self.USER_FIELDS.items():
            if key in validated_data:
                setattr(instance, attr, validated_data[key])
                user_changes.append(attr)
        if user_changes:
            instance.save(update_fields=user_changes)

        profile = instance.profile
        for key, attr in self.PROFILE_FIELDS.items():
            if key in validated_data:
                setattr(profile, attr, validated_data[key])
        profile.save()
        return instance
