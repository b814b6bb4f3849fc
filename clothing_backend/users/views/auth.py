"""
USER AUTH VIEWS

- Register / login issue a SimpleJWT pair and also set the access token as an
  httpOnly cookie (browser storefront). API clients use the returned tokens.
- Both are the guest -> authenticated transition: the guest cart (session copy
  or, when posted, the "guestCart" lines from client storage, which replace
  the session copy rather than add to it) is merged into the
  account cart exactly once here.
- Logout clears the cookie and tears down the session guest cart.

Security hardening:
- Targeted anon throttling on register/login.
- authentication_classes = [] so a stale cookie can never block a fresh login.
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.contrib.auth import authenticate
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import generics, status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken

from cart.services.storage import adopt_guest_cart, discard_guest_cart
from common.api import error_response
from users.serializers import LoginSerializer, RegisterSerializer, UserSerializer

logger = logging.getLogger(__name__)


# ---------------- THROTTLES (TARGETED) ----------------
class AuthAnonThrottle(AnonRateThrottle):
    """
    Uses REST_FRAMEWORK['DEFAULT_THROTTLE_RATES']['anon'].
    """

    scope = "anon"


# ---------------- HELPERS ----------------
def _set_auth_cookie(response: Response, access_token: str) -> None:
    lifetime = settings.SIMPLE_JWT["ACCESS_TOKEN_LIFETIME"]
    response.set_cookie(
        settings.JWT_COOKIE_NAME,
        access_token,
        max_age=int(lifetime.total_seconds()),
        httponly=True,
        secure=settings.JWT_COOKIE_SECURE,
        samesite=settings.JWT_COOKIE_SAMESITE,
    )


def _authenticated_response(*, request, user, posted_lines, http_status) -> Response:
    cart = adopt_guest_cart(request=request, user=user, posted_lines=posted_lines)

    refresh = RefreshToken.for_user(user)
    access = str(refresh.access_token)

    response = Response(
        {
            "access": access,
            "refresh": str(refresh),
            "user": UserSerializer(user).data,
            "cartItemCount": cart.item_count,
        },
        status=http_status,
    )
    _set_auth_cookie(response, access)
    return response


# ---------------- REGISTER ----------------
class RegisterView(generics.GenericAPIView):
    serializer_class = RegisterSerializer
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [AuthAnonThrottle]

    @extend_schema(
        request=RegisterSerializer,
        responses={201: dict, 400: OpenApiResponse(description="Validation error")},
        description="Register a customer account, sign in and merge the guest cart",
    )
    def post(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        posted_lines = serializer.validated_data.get("guestCart") or []
        user = serializer.save()

        logger.info("User registered", extra={"user_id": str(user.id)})

        return _authenticated_response(
            request=request,
            user=user,
            posted_lines=posted_lines,
            http_status=status.HTTP_201_CREATED,
        )


# ---------------- LOGIN (JWT + EMAIL) ----------------
class LoginView(generics.GenericAPIView):
    serializer_class = LoginSerializer
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [AuthAnonThrottle]

    @extend_schema(
        request=LoginSerializer,
        responses={200: dict, 401: OpenApiResponse(description="Invalid credentials")},
        description="Authenticate with email + password, set the JWT cookie and merge the guest cart",
    )
    def post(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        email = serializer.validated_data["email"].strip().lower()
        password = serializer.validated_data["password"]

        user = authenticate(request=request, email=email, password=password)
        if user is None:
            logger.warning("Failed login attempt", extra={"email": email})
            return error_response(
                code="INVALID_CREDENTIALS",
                message="Invalid email or password",
                http_status=status.HTTP_401_UNAUTHORIZED,
            )

        return _authenticated_response(
            request=request,
            user=user,
            posted_lines=serializer.validated_data.get("guestCart") or [],
            http_status=status.HTTP_200_OK,
        )


# ---------------- LOGOUT ----------------
class LogoutView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(request=None, responses={200: dict}, description="Clear the auth cookie")
    def post(self, request):
        discard_guest_cart(request)

        response = Response({"message": "Logged out successfully"}, status=status.HTTP_200_OK)
        response.delete_cookie(
            settings.JWT_COOKIE_NAME,
            samesite=settings.JWT_COOKIE_SAMESITE,
        )
        return response
