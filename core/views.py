# core/views.py
import logging

from django.core.exceptions import ObjectDoesNotExist
from django.db import DatabaseError
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .permissions import IsPlatformAdmin

logger = logging.getLogger(__name__)


class AdminActionView(APIView):
    """
    Base class for admin endpoints dispatched on ``?action=``.

    Subclasses map action names to handler methods per HTTP method and
    describe each action for failure messages ("Failed to <label>: ...").
    Handlers raise ValueError for bad input and ObjectDoesNotExist for
    missing rows; both are turned into 400/404 here, database errors into 500.
    """
    permission_classes = [IsAuthenticated, IsPlatformAdmin]

    get_actions = {}
    post_actions = {}
    default_get_action = 'list'
    default_post_action = None
    action_labels = {}
    not_found_message = 'Not found'

    def get(self, request, *args, **kwargs):
        return self._dispatch_action(request, self.get_actions, self.default_get_action)

    def post(self, request, *args, **kwargs):
        return self._dispatch_action(request, self.post_actions, self.default_post_action)

    def get_payload(self, request, serializer_class=None):
        """
        Return the request body, validated by ``serializer_class`` when given.
        Values of the wrong type raise a DRF ValidationError (400).
        """
        if not isinstance(request.data, dict):
            raise ValueError('Request body must be a JSON object')
        if serializer_class is None:
            return request.data

        serializer = serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)
        return serializer.validated_data

    def _dispatch_action(self, request, actions, default):
        action = request.query_params.get('action') or default
        handler_name = actions.get(action)
        if not handler_name:
            logger.warning(
                f"[ADMIN_ACTION] ❌ Invalid action '{action}' ({request.method}) "
                f"on {self.__class__.__name__}"
            )
            return Response({'error': 'Invalid action or method'}, status=status.HTTP_400_BAD_REQUEST)

        logger.info(
            f"[ADMIN_ACTION] {self.__class__.__name__}: action={action} "
            f"method={request.method} admin={request.user.email}"
        )

        try:
            return getattr(self, handler_name)(request)
        except ValueError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except ObjectDoesNotExist:
            return Response({'error': self.not_found_message}, status=status.HTTP_404_NOT_FOUND)
        except DatabaseError as e:
            label = self.action_labels.get(action, action)
            logger.error(f"[ADMIN_ACTION] ❌ Failed to {label}: {e}", exc_info=True)
            return Response(
                {'error': f'Failed to {label}: {e}'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
