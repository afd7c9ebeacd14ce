"""User API views."""

from __future__ import annotations

import logging

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import mixins, permissions, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from .permissions import IsAdminRole
from .serializers import RoleUpdateSerializer, UserSerializer

User = get_user_model()
logger = logging.getLogger(__name__)


class UserViewSet(mixins.ListModelMixin, mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """User management.

    - `me` returns the profile of the current user
    - listing, retrieval and role changes are reserved to administrators
    """

    serializer_class = UserSerializer
    queryset = User.objects.all()
    permission_classes = [IsAdminRole]

    @action(detail=False, methods=["get", "patch"], permission_classes=[permissions.IsAuthenticated])
    def me(self, request):
        """Profile of the current user; PATCH updates first and last name."""
        if request.method == "PATCH":
            serializer = UserSerializer(request.user, data=request.data, partial=True)
            serializer.is_valid(raise_exception=True)
            serializer.save()
            return Response(serializer.data)
        return Response(UserSerializer(request.user).data)

    @action(detail=True, methods=["patch"], url_path="role")
    def role(self, request, pk=None):
        user = self.get_object()
        serializer = RoleUpdateSerializer(user, data=request.data)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        logger.info("User %s role changed to %s by %s", user.pk, user.role, request.user.pk)
        return Response(UserSerializer(user).data)
