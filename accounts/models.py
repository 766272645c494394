import uuid
from django.db import models
from django.contrib.auth.models import AbstractBaseUser, BaseUserManager


class UserManager(BaseUserManager):
    use_in_migrations = True

    def create_user(self, name, email, password=None, **extra_fields):
        if not name:
            raise ValueError("The Name field must be set")
        if not email:
            raise ValueError("The Email field must be set")

        email = self.normalize_email(email)
        user = self.model(name=name, email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user


class User(AbstractBaseUser):
    """
    A registered user. Created once at registration and never mutated or
    deleted by the service. `password` (from AbstractBaseUser) only ever holds
    the salted hash produced by the configured password hasher.
    """
    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for the user."
    )

    name = models.CharField(max_length=150, unique=True)
    email = models.EmailField(unique=True, max_length=255)

    date_joined = models.DateTimeField(auto_now_add=True)

    USERNAME_FIELD = 'name'
    EMAIL_FIELD = 'email'
    REQUIRED_FIELDS = ['email']

    objects = UserManager()

    def __str__(self):
        return self.name
