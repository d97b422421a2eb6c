from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin, BaseUserManager
from django.db import models
from django.utils import timezone
from django.core.validators import RegexValidator
from django.utils.translation import gettext_lazy as _

import uuid


# ---------- USER MANAGER ----------
class UserManager(BaseUserManager):
    """Custom user manager that normalizes email.

    Use `create_user` and `create_superuser` as the canonical constructors.
    """

    def _create_user(self, email: str, password: str | None = None, **extra_fields):
        if not email:
            raise ValueError("The Email field must be set")
        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_user(self, email: str, password: str | None = None, **extra_fields):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email: str, password: str | None = None, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)

        if not extra_fields.get("is_staff"):
            raise ValueError("Superuser must have is_staff=True.")
        if not extra_fields.get("is_superuser"):
            raise ValueError("Superuser must have is_superuser=True.")

        return self._create_user(email, password, **extra_fields)


# ---------- USER MODEL ----------
class User(AbstractBaseUser, PermissionsMixin):
    """Primary user model and points profile.

    - Email is the unique identifier (USERNAME_FIELD).
    - ``points`` is the spendable balance, ``total_earned`` the lifetime credit.
      Both are only mutated through ``points.services.PointsService``.
    - A banned user is inactive with no expiry; a suspended user is inactive
      until ``ban_expires_at``.
    """

    STATUS_ACTIVE = "active"
    STATUS_BANNED = "banned"
    STATUS_SUSPENDED = "suspended"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    email = models.EmailField(_("email address"), unique=True, db_index=True)
    full_name = models.CharField(max_length=150, blank=True)

    phone_regex = RegexValidator(
        regex=r"^\+?1?\d{9,15}$",
        message=_("Phone number must be entered in the format: '+999999999'. Up to 15 digits allowed."),
    )
    phone = models.CharField(validators=[phone_regex], max_length=17, blank=True, null=True)

    # Points
    points = models.PositiveIntegerField(default=0)
    total_earned = models.PositiveIntegerField(default=0)

    # Status
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)
    ban_expires_at = models.DateTimeField(null=True, blank=True)

    # Timestamps
    date_joined = models.DateTimeField(default=timezone.now)
    last_login = models.DateTimeField(blank=True, null=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    class Meta:
        db_table = "users"
        verbose_name = _("user")
        verbose_name_plural = _("users")
        ordering = ["-date_joined"]

    # ----- Display helpers -----
    def get_full_name(self) -> str:
        return self.full_name.strip()

    def get_short_name(self) -> str:
        return self.full_name.split(" ")[0] if self.full_name else self.email.split("@")[0]

    def get_display_name(self) -> str:
        return self.get_full_name() or self.email

    def __str__(self) -> str:
        return self.get_display_name()

    @property
    def status(self) -> str:
        if self.is_active:
            return self.STATUS_ACTIVE
        return self.STATUS_SUSPENDED if self.ban_expires_at else self.STATUS_BANNED
