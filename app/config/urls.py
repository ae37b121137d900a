"""
URL configuration for the home rental backend.

URL Structure:
    /                              - ReDoc API documentation
    /admin/                        - Django admin interface
    /health/                       - Health check endpoint (for load balancers, Docker)
    /schema/                       - OpenAPI schema (YAML)
    /api/v1/auth/                  - Authentication endpoints (dj-rest-auth)
        login/                     - Email/password login
        logout/                    - Logout
        registration/              - User registration (sends a confirmation e-mail)
        registration/verify-email/ - Confirm an e-mail address with its key
        registration/resend-email/ - Send the confirmation e-mail again
        user/                      - Current user (GET/PUT/PATCH)
        password/change/           - Change password
        users/{id}/                - Public profile (custom)
    /api/v1/chat/                  - Chat endpoints
        chats/                     - List chats, resolve or delete a chat (?user=)
        messages/                  - Send a message
        messages/{id}/             - Edit or delete a message
    /api/v1/coins/                 - Coin endpoints
        balance/                   - Current coin balance
        buy/                       - Start a coin purchase (Stripe Checkout)
        verify/                    - Confirm a purchase (?id=)
        webhook/                   - Stripe webhook endpoint (POST)
    /api/v1/houses/                - House listings
        {id}/                      - Listing detail/update/delete
        {id}/images/               - Replace listing images
        {id}/rate/                 - Rate the listing owner

WebSocket routes live in chat.routing.

For more information, see:
https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""

from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView

from core.views import health_check

# =============================================================================
# API v1 Routes
# =============================================================================
# All routes here are prefixed with /api/v1/ automatically
api_v1_patterns = [
    # Authentication (dj-rest-auth)
    path("auth/", include("dj_rest_auth.urls")),
    # Custom authentication (public profiles)
    path("auth/", include("authentication.urls")),
    # Registration
    path("auth/registration/", include("dj_rest_auth.registration.urls")),
    # Chat
    path("chat/", include("chat.urls")),
    # Coins
    path("coins/", include("payments.urls")),
    # Listings
    path("houses/", include("houses.urls")),
]

urlpatterns = [
    # Documentation
    path("", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    # Admin
    path("admin/", admin.site.urls),
    # Health check (Docker, Kubernetes, load balancers)
    path("health/", health_check, name="health_check"),
    # API v1
    path("api/v1/", include(api_v1_patterns)),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)

# =============================================================================
# Admin Site Customization
# =============================================================================
admin.site.site_header = "Home Rental Admin"
admin.site.site_title = "Home Rental Admin Portal"
admin.site.index_title = "Welcome to the Home Rental Admin Portal"
