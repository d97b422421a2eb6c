# subscriptions/admin_views.py
from rest_framework import status
from rest_framework.response import Response

from core.views import AdminActionView
from .serializers import (
    AddSubscriptionSerializer,
    DeleteSubscriptionSerializer,
    SubscriptionAvailabilitySerializer,
    ToggleSubscriptionSerializer,
)
from .services import SubscriptionService


class AdminSubscriptionsView(AdminActionView):
    """
    GET  ?action=list
    POST ?action=toggle  {id, currentStatus?}
    POST ?action=add     {subscription_id, duration, points_cost?}
    POST ?action=delete  {id}
    """
    get_actions = {
        'list': 'list_subscriptions',
    }
    post_actions = {
        'toggle': 'toggle_subscription',
        'add': 'add_subscription',
        'delete': 'delete_subscription',
    }
    default_post_action = 'list'
    action_labels = {
        'list': 'fetch subscriptions',
        'toggle': 'update subscription',
        'add': 'add subscription',
        'delete': 'delete subscription',
    }
    not_found_message = 'Subscription not found'

    def list_subscriptions(self, request):
        availability = SubscriptionService.list()
        return Response(SubscriptionAvailabilitySerializer(availability, many=True).data)

    def toggle_subscription(self, request):
        payload = self.get_payload(request, ToggleSubscriptionSerializer)
        availability = SubscriptionService.toggle(payload.get('id'), payload.get('currentStatus'))
        return Response(SubscriptionAvailabilitySerializer(availability).data)

    def add_subscription(self, request):
        payload = self.get_payload(request, AddSubscriptionSerializer)
        availability = SubscriptionService.add(
            payload.get('subscription_id'),
            payload.get('duration'),
            payload.get('points_cost'),
        )
        return Response(
            SubscriptionAvailabilitySerializer([availability], many=True).data,
            status=status.HTTP_201_CREATED,
        )

    def delete_subscription(self, request):
        payload = self.get_payload(request, DeleteSubscriptionSerializer)
        SubscriptionService.delete(payload.get('id'))
        return Response({'success': True})
