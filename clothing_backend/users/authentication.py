"""
PATH: users/authentication.py

JWT AUTHENTICATION (HEADER OR COOKIE)

Browsers keep the access token in an httpOnly cookie (set at login/register);
API clients send "Authorization: Bearer <token>". Header wins when both exist.

Rules:
- A bad header token is a hard 401 (the client asked to be authenticated).
- A stale/invalid cookie is ignored: the request continues as anonymous, so
  public catalog and guest cart endpoints keep working after expiry.

CSRF:
- The cookie path does not run Django's CSRF token check. The storefront is a
  cross-origin SPA and cannot read a csrftoken cookie from the API host.
- Protection comes from the cookie itself: httpOnly and SameSite Lax/Strict,
  so browsers never attach it to cross-site unsafe requests. Settings refuse
  any other SameSite value (backend/settings/base.py).
"""

from __future__ import annotations

import logging

from django.conf import settings
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken

logger = logging.getLogger(__name__)


class CookieJWTAuthentication(JWTAuthentication):
    def authenticate(self, request):
        header = self.get_header(request)
        if header is not None:
            return super().authenticate(request)

        raw_token = request.COOKIES.get(settings.JWT_COOKIE_NAME)
        if not raw_token:
            return None

        try:
            validated_token = self.get_validated_token(raw_token)
            return self.get_user(validated_token), validated_token
        except (InvalidToken, AuthenticationFailed):
            logger.info("Ignoring invalid JWT cookie")
            return None
