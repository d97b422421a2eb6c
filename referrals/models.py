import logging
import random
import string

from django.conf import settings
from django.db import models
from django.contrib.auth import get_user_model

logger = logging.getLogger(__name__)

User = get_user_model()


class ReferralCode(models.Model):
    """Unique referral code assigned to each user."""
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name="referral_code")
    code = models.CharField(max_length=10, unique=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    is_active = models.BooleanField(default=True)

    def save(self, *args, **kwargs):
        if not self.code:
            self.code = self._generate_code()
            logger.info(f"[REFERRAL_CODE] Generated new code: {self.code} for user: {self.user.email}")
        super().save(*args, **kwargs)

    @staticmethod
    def _generate_code():
        """Generate a unique referral code (8 chars upper/digit)."""
        attempts = 0
        max_attempts = 10

        while attempts < max_attempts:
            code = "".join(random.choices(string.ascii_uppercase + string.digits, k=8))
            if not ReferralCode.objects.filter(code=code).exists():
                logger.debug(f"[REFERRAL_CODE] Successfully generated unique code: {code} after {attempts + 1} attempts")
                return code
            attempts += 1

        logger.error(f"[REFERRAL_CODE] Failed to generate unique code after {max_attempts} attempts")
        raise ValueError("Unable to generate unique referral code")

    def __str__(self):
        return f"{self.user.get_display_name()} - {self.code}"


class Referral(models.Model):
    """Attribution edge between a referrer and a referred user (max 3 levels)."""
    LEVEL_CHOICES = [
        (1, "Direct (Level 1)"),
        (2, "Indirect (Level 2)"),
        (3, "Indirect (Level 3)"),
    ]

    STATUS_PENDING = "pending"
    STATUS_COMPLETED = "completed"
    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_COMPLETED, "Completed"),
    ]

    referrer = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="referrals_made"
    )
    referred = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="referral_source"
    )
    # Code the referred user signed up with
    referral_code = models.CharField(max_length=10)
    level = models.PositiveSmallIntegerField(choices=LEVEL_CHOICES, default=1)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    points_awarded = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["referrer", "referred"], name="unique_referrer_referred"),
            models.UniqueConstraint(fields=["referred", "level"], name="unique_referred_level"),
        ]
        indexes = [
            models.Index(fields=["referrer", "level"]),
            models.Index(fields=["referred"]),
        ]

    def save(self, *args, **kwargs):
        is_new = self.pk is None
        if is_new:
            logger.info(
                f"[REFERRAL_CREATE] Creating referral: {self.referrer.email} → "
                f"{self.referred.email} (Level {self.level}, code {self.referral_code})"
            )
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.referrer} → {self.referred} (Level {self.level})"


class ReferralEarning(models.Model):
    """Commission paid to an ancestor for one transaction of a referred user."""
    referrer = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="referral_earnings"
    )
    referred = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="earnings_generated"
    )
    transaction = models.ForeignKey(
        "points.PointTransaction", on_delete=models.CASCADE, related_name="referral_earnings"
    )
    original_points = models.PositiveIntegerField()
    commission_percentage = models.DecimalField(max_digits=5, decimal_places=2)
    commission_points = models.PositiveIntegerField()
    level = models.PositiveSmallIntegerField(choices=Referral.LEVEL_CHOICES)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["referrer", "transaction"], name="unique_earning_per_transaction"),
        ]
        indexes = [
            models.Index(fields=["referrer", "level"]),
        ]

    def __str__(self):
        return (
            f"{self.referrer} +{self.commission_points} from {self.referred} "
            f"(Level {self.level}, {self.commission_percentage}%)"
        )
