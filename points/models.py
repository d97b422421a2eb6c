import uuid

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models


class PointTransaction(models.Model):
    """One row of the points ledger. Balances live on the user."""
    TYPE_EARN = "earn"
    TYPE_REDEEM = "redeem"

    TRANSACTION_TYPES = [
        (TYPE_EARN, "Earn"),
        (TYPE_REDEEM, "Redeem"),
    ]

    # Ledger sources that are not task activity
    SOURCE_WELCOME_BONUS = "welcome_bonus"
    SOURCE_REFERRAL_BONUS = "referral_bonus"
    SOURCE_REFERRAL_COMMISSION = "referral_commission"
    SOURCE_ADMIN_ADJUSTMENT = "admin_adjustment"
    SOURCE_REDEMPTION = "redemption"

    # Earnings from these sources never generate referral commission
    NON_QUALIFYING_SOURCES = (
        SOURCE_WELCOME_BONUS,
        SOURCE_REFERRAL_BONUS,
        SOURCE_REFERRAL_COMMISSION,
        SOURCE_ADMIN_ADJUSTMENT,
    )

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="point_transactions"
    )
    type = models.CharField(max_length=10, choices=TRANSACTION_TYPES)
    points = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    description = models.CharField(max_length=255, blank=True)
    task_type = models.CharField(max_length=50, blank=True, db_index=True)
    balance_after = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = "transactions"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "type", "created_at"]),
        ]

    def __str__(self):
        sign = "+" if self.type == self.TYPE_EARN else "-"
        return f"{self.user} {sign}{self.points} ({self.task_type or self.type})"

    @property
    def qualifies_for_commission(self) -> bool:
        return self.type == self.TYPE_EARN and self.task_type not in self.NON_QUALIFYING_SOURCES
