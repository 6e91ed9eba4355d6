from rest_framework import serializers
from rest_framework.validators import UniqueValidator

from .models import ExperienceLevel, Role, User
from .services import AuthenticationService, QuizService, TokenService


class OwnerSerializer(serializers.ModelSerializer):
    """The public face of a user, embedded in content they own."""

    class Meta:
        model = User
        fields = ('id', 'username')
        read_only_fields = fields


class RegistrationSerializer(serializers.ModelSerializer):
    """Serializers registration requests and creates a new user."""

    password = serializers.CharField(
        max_length=128,
        min_length=8,
        write_only=True
    )

    email = serializers.EmailField(
        required=False,
        allow_null=True,
        allow_blank=True,
        validators=[UniqueValidator(queryset=User.objects.all())],
    )

    token = serializers.CharField(max_length=255, read_only=True)

    class Meta:
        model = User
        fields = ['id', 'email', 'username', 'password', 'role', 'token']
        read_only_fields = ('id', 'role')

    def validate_email(self, value):
        # Treat an empty string like a missing email so the unique
        # constraint only applies to real addresses.
        return value or None

    def create(self, validated_data):
        # Self-service signups always get the plain `user` role.
        return User.objects.create_user(**validated_data)


class AdminRegistrationSerializer(RegistrationSerializer):
    """Lets a super_admin create an account with any role."""

    role = serializers.ChoiceField(choices=Role.choices)

    class Meta(RegistrationSerializer.Meta):
        read_only_fields = ('id',)


class LoginSerializer(serializers.Serializer):
    """
    Handles login validation. Authentication logic is delegated to
    AuthenticationService: this serializer only validates input format and
    translates service-layer errors into DRF validation errors.
    """
    id = serializers.IntegerField(read_only=True)
    username = serializers.CharField(max_length=255, required=False)
    password = serializers.CharField(
        max_length=128, write_only=True, required=False
    )
    email = serializers.CharField(max_length=255, read_only=True)
    role = serializers.CharField(max_length=20, read_only=True)
    token = serializers.CharField(max_length=255, read_only=True)

    def validate(self, data):
        username = data.get('username', None)
        password = data.get('password', None)

        try:
            user = AuthenticationService.authenticate(username, password)
        except ValueError as e:
            raise serializers.ValidationError(str(e))

        return {
            'id': user.pk,
            'email': user.email,
            'username': user.username,
            'role': user.role,
            'token': TokenService.generate_token(user)
        }


class UserSerializer(serializers.ModelSerializer):
    """Handles serialization and deserialization of User objects."""

    password = serializers.CharField(
        max_length=128,
        min_length=8,
        write_only=True
    )

    email = serializers.EmailField(
        required=False,
        allow_null=True,
        allow_blank=True,
        validators=[UniqueValidator(queryset=User.objects.all())],
    )

    class Meta:
        model = User
        fields = (
            'id', 'email', 'username', 'password', 'role',
            'experience_level', 'token',
        )

        # Users can never promote themselves.
        read_only_fields = ('id', 'role', 'token')

    def validate_email(self, value):
        return value or None

    def update(self, instance, validated_data):
        """Performs an update on a User."""

        # Passwords should not be handled with `setattr`, unlike other fields.
        # Django provides a function that handles hashing and salting
        # passwords. That means we need to remove the password field from the
        # `validated_data` dictionary before iterating over it.
        password = validated_data.pop('password', None)

        for (key, value) in validated_data.items():
            setattr(instance, key, value)

        if password is not None:
            instance.set_password(password)

        instance.save()

        return instance


class AdminUserSerializer(UserSerializer):
    """User management by a super_admin; the only way to change a role."""

    class Meta(UserSerializer.Meta):
        fields = (
            'id', 'email', 'username', 'password', 'role',
            'experience_level', 'is_active', 'createdAt', 'updatedAt',
        )
        read_only_fields = ('id',)

    createdAt = serializers.SerializerMethodField(method_name='get_created_at')
    updatedAt = serializers.SerializerMethodField(method_name='get_updated_at')

    def get_created_at(self, instance):
        return instance.created_at.isoformat()

    def get_updated_at(self, instance):
        return instance.updated_at.isoformat()


class ExperienceSerializer(serializers.Serializer):
    """
    Accepts either an explicit `experience_level` or the quiz `answers`
    (sudo/terminal/kernel, each "yes" or "no") to score.
    """
    experience_level = serializers.ChoiceField(
        choices=ExperienceLevel.choices, required=False
    )
    answers = serializers.DictField(
        child=serializers.CharField(allow_blank=True),
        required=False,
        write_only=True,
    )

    def validate(self, data):
        level = data.get('experience_level', None)
        answers = data.get('answers', None)

        if (level is None) == (answers is None):
            raise serializers.ValidationError(
                'Provide either an experience_level or quiz answers.'
            )

        if level is None:
            level = QuizService.level_for_answers(answers)

        return {'experience_level': level}

    def save(self, user):
        return QuizService.set_experience_level(
            user, self.validated_data['experience_level']
        )
