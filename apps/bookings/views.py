"""API views for the booking domain."""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from shared.domain.session import Session

from . import services
from .filters import BookingRequestFilterSet
from .models import BookingRequest
from .serializers import (
    ApproveBookingSerializer,
    BookingRequestCreateSerializer,
    BookingRequestSerializer,
    CancelBookingSerializer,
    DeclineBookingSerializer,
    FeedbackSerializer,
)


class BookingRequestViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Viewing requests.

    Super admins see every request, property admins the requests for their
    properties and tenants their own. Requests are never deleted; they end
    in one of the terminal statuses instead.
    """

    queryset = BookingRequest.objects.select_related("property", "tenant", "admin")
    permission_classes = [permissions.IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_class = BookingRequestFilterSet

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BookingRequestCreateSerializer
        return BookingRequestSerializer

    def get_queryset(self):  # type: ignore
        return super().get_queryset().visible_to(self.request.user)

    def _session(self) -> Session:
        return Session.from_user(self.request.user)

    def _respond(self, booking: BookingRequest, code: int = status.HTTP_200_OK) -> Response:
        return Response(BookingRequestSerializer(booking, context=self.get_serializer_context()).data, status=code)

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        property_obj = data.pop("property")
        booking = services.create_booking_request(self._session(), property_obj, data)
        return self._respond(booking, status.HTTP_201_CREATED)

    @action(detail=True, methods=["post"])
    def approve(self, request, pk=None):  # type: ignore
        booking = self.get_object()
        payload = ApproveBookingSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        booking = services.approve_booking(
            self._session(),
            booking.pk,
            scheduled_date=payload.validated_data["scheduled_date"],
            admin_response=payload.validated_data["admin_response"],
        )
        return self._respond(booking)

    @action(detail=True, methods=["post"])
    def decline(self, request, pk=None):  # type: ignore
        booking = self.get_object()
        payload = DeclineBookingSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        booking = services.decline_booking(
            self._session(),
            booking.pk,
            admin_response=payload.validated_data["admin_response"],
        )
        return self._respond(booking)

    @action(detail=True, methods=["post"])
    def complete(self, request, pk=None):  # type: ignore
        booking = self.get_object()
        booking = services.complete_booking(self._session(), booking.pk)
        return self._respond(booking)

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):  # type: ignore
        booking = self.get_object()
        payload = CancelBookingSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        booking = services.cancel_booking(
            self._session(),
            booking.pk,
            reason=payload.validated_data["reason"],
        )
        return self._respond(booking)

    @action(detail=True, methods=["post"])
    def feedback(self, request, pk=None):  # type: ignore
        booking = self.get_object()
        payload = FeedbackSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        booking = services.leave_feedback(
            self._session(),
            booking.pk,
            rating=payload.validated_data["rating"],
            comment=payload.validated_data["comment"],
        )
        return self._respond(booking)
