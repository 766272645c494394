# accounts/services.py

import logging

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email
from django.db import IntegrityError, transaction

from filehub.errors import AuthenticationError, ConflictError, NotFoundError, ValidationError
from .serializers import UserSummarySerializer

logger = logging.getLogger(__name__)

User = get_user_model()


def user_summary(user) -> dict:
    return dict(UserSummarySerializer(user).data)


class AccountService:
    def register(self, *, name, email, password) -> dict:
        missing = [field for field, value in (("name", name), ("email", email), ("password", password)) if not value]
        if missing:
            raise ValidationError(f"Missing required field(s): {', '.join(missing)}")

        name = str(name).strip()
        email = User.objects.normalize_email(str(email).strip())
        if not name:
            raise ValidationError("Missing required field(s): name")
        try:
            validate_email(email)
        except DjangoValidationError:
            raise ValidationError(f"Invalid email address: {email}")

        # Friendly pre-check; the UNIQUE constraints below are what actually
        # close the window between two concurrent registrations.
        if User.objects.filter(name=name).exists():
            raise ConflictError(f"User with name '{name}' already exists")
        if User.objects.filter(email__iexact=email).exists():
            raise ConflictError(f"User with email '{email}' already exists")

        try:
            with transaction.atomic():
                user = User.objects.create_user(name=name, email=email, password=str(password))
        except IntegrityError:
            logger.info(f"Registration for '{name}' lost a uniqueness race.")
            raise ConflictError("User with this name or email already exists")

        logger.info(f"Registered user '{user.name}' ({user.id}).")
        return user_summary(user)

    def login(self, *, name, password) -> dict:
        if not name or not password:
            raise ValidationError("Name and password are required")

        try:
            user = User.objects.get(name=str(name).strip())
        except User.DoesNotExist:
            logger.info(f"Login attempt for unknown user '{name}'.")
            raise NotFoundError("User not found")

        if not user.check_password(str(password)):
            logger.info(f"Login attempt with invalid password for '{user.name}'.")
            raise AuthenticationError("Invalid password")

        logger.info(f"User '{user.name}' logged in.")
        return user_summary(user)
