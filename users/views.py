# users/views.py
import logging

from django.db import transaction
from rest_framework import generics, status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken

from referrals.services import ReferralService
from .models import User
from .serializers import RegisterSerializer, UserSerializer

logger = logging.getLogger(__name__)


class RegisterView(generics.GenericAPIView):
    """
    Create an account and return it with a JWT pair. A referral code may come
    in the body or as ``?ref=``; an invalid code never blocks registration.
    """
    permission_classes = [AllowAny]
    authentication_classes = []
    serializer_class = RegisterSerializer

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        referral_code = data.get('referral_code') or request.query_params.get('ref', '')

        with transaction.atomic():
            user = User.objects.create_user(
                email=data['email'],
                password=data['password'],
                full_name=data.get('full_name', ''),
                phone=data.get('phone') or None,
            )
        logger.info(f"[REGISTER] ✅ New user registered: {user.email}")

        referral = {'applied': False, 'error': None}
        if referral_code:
            success, _, error = ReferralService.validate_and_create_referral(user, referral_code)
            referral = {'applied': success, 'error': error}
            if not success:
                logger.warning(f"[REGISTER] Referral not applied for {user.email}: {error}")

        user.refresh_from_db()
        refresh = RefreshToken.for_user(user)
        return Response(
            {
                'user': UserSerializer(user).data,
                'referral': referral,
                'tokens': {
                    'refresh': str(refresh),
                    'access': str(refresh.access_token),
                },
            },
            status=status.HTTP_201_CREATED,
        )


class MeView(generics.RetrieveAPIView):
    permission_classes = [IsAuthenticated]
    serializer_class = UserSerializer

    def get_object(self):
        return self.request.user
