"""Compiled-in baseline data set for the events hub.

The baseline is the single source of truth for "what should exist by
default". It is never mutated at runtime: use ``default_app_state()`` to
get a private copy.
"""

from copy import deepcopy
from types import MappingProxyType
from typing import Any, Dict

from .catalog import DEFAULT_SERVICES, copy_records

ROLES = ("Admin", "Sales", "Operations")

PERMISSION_FLAGS = (
    "canCreateEvents",
    "canManageServices",
    "canViewFinancials",
    "canManageUsers",
    "canManageRFQs",
)

PERMISSIONS: Dict[str, Dict[str, bool]] = {
    "Admin": {
        "canCreateEvents": True,
        "canManageServices": True,
        "canViewFinancials": True,
        "canManageUsers": True,
        "canManageRFQs": True,
    },
    "Sales": {
        "canCreateEvents": True,
        "canManageServices": False,
        "canViewFinancials": False,
        "canManageUsers": False,
        "canManageRFQs": True,
    },
    "Operations": {
        "canCreateEvents": False,
        "canManageServices": True,
        "canViewFinancials": True,
        "canManageUsers": False,
        "canManageRFQs": False,
    },
}

DEFAULT_DARK_THEME: Dict[str, Any] = {
    "themeMode": "dark",
    "adminPin": "1234",
    "colors": {
        "primaryAccent": "#8b5cf6",
        "background": "#0f172a",
        "cardContainer": "rgba(15, 23, 42, 0.65)",
        "primaryText": "#f8fafc",
        "secondaryText": "#94a3b8",
        "borderColor": "rgba(255, 255, 255, 0.1)",
    },
    "typography": {
        "applicationFont": "Inter",
        "headingFont": "Poppins",
    },
    "layout": {
        "borderRadius": 16,
        "sidebarWidth": 288,
        "cardDensity": "comfortable",
        "glassIntensity": 20,
    },
    "motion": {
        "enableAnimations": True,
        "transitionSpeed": 0.3,
        "animationDuration": 0.5,
        "transitionEasing": "ease-in-out",
        "defaultEntryAnimation": "fadeIn",
        "smoothScrolling": True,
        "cardHoverEffect": "lift",
        "buttonHoverEffect": "scale",
        "particleCount": 60,
        "particleSpeed": 0.5,
        "particleOpacity": 0.4,
        "particleStyle": "particle-flow",
    },
    "branding": {
        "logoUrl": "",
        "appBackgroundUrl": "https://images.unsplash.com/photo-1531685250784-7569952593d2"
        "?q=80&w=2574&auto=format&fit=crop",
    },
    "landingPage": {
        "background": {
            "type": "image",
            "imagePool": [
                "https://images.unsplash.com/photo-1511795409834-ef04bbd61622"
                "?q=80&w=2670&auto=format&fit=crop",
                "https://images.unsplash.com/photo-1533174072545-7a4b6ad7a6c3"
                "?q=80&w=2670&auto=format&fit=crop",
                "https://images.unsplash.com/photo-1429514513361-8c332c3ca085"
                "?q=80&w=2670&auto=format&fit=crop",
            ],
        },
        "motivationalQuotes": [
            "The secret of getting ahead is getting started.",
            "Excellence is not an act, but a habit.",
            "Your work is going to fill a large part of your life, and the only way to be "
            "truly satisfied is to do what you believe is great work.",
        ],
    },
    "aiFallback": {
        "enableGeminiQuotaFallback": True,
        "fallbackMode": "predefined",
    },
    "aiProxyEnabled": False,
    "userPreferences": {
        "defaultView": "Dashboard",
        "dashboardWidgets": ["kpi", "charts", "alerts"],
        "eventListViewOptions": {
            "showDate": True,
            "showLocation": True,
            "showGuests": True,
            "showPayment": True,
            "showSalesperson": True,
        },
    },
}

SYSTEM_TEMPLATE_TYPE = "system_default"

SYSTEM_PROPOSAL_TEMPLATES = (
    {
        "id": "pt-sys-classic",
        "name": "Classic Elegance",
        "description": "Serif headings on a warm ivory page for formal events.",
        "templateType": SYSTEM_TEMPLATE_TYPE,
        "style": {
            "primaryColor": "#7c3aed",
            "secondaryColor": "#c4b5fd",
            "backgroundColor": "#fffbf5",
            "textColor": "#1f2937",
            "fontFamilyHeading": "Playfair Display",
            "fontFamilyBody": "Inter",
        },
    },
    {
        "id": "pt-sys-modern",
        "name": "Modern Minimal",
        "description": "Clean sans-serif layout with generous whitespace.",
        "templateType": SYSTEM_TEMPLATE_TYPE,
        "style": {
            "primaryColor": "#0f172a",
            "secondaryColor": "#38bdf8",
            "backgroundColor": "#ffffff",
            "textColor": "#0f172a",
            "fontFamilyHeading": "Poppins",
            "fontFamilyBody": "Inter",
        },
    },
)

DEFAULT_USERS = (
    {"userId": "u_admin", "name": "Firash", "role": "Admin", "commissionRate": 0},
    {"userId": "u_paul", "name": "Paul bro", "role": "Sales", "commissionRate": 15},
)

_DEFAULT_APP_STATE: Dict[str, Any] = {
    "users": [dict(u) for u in DEFAULT_USERS],
    "events": [],
    "services": copy_records(DEFAULT_SERVICES),
    "clients": [],
    "rfqs": [],
    "quotationTemplates": [],
    "proposalTemplates": deepcopy(list(SYSTEM_PROPOSAL_TEMPLATES)),
    "roles": deepcopy(PERMISSIONS),
    "currentUserId": "u_paul",
    "settings": deepcopy(DEFAULT_DARK_THEME),
    "isLoggedIn": False,
    "customThemes": [],
    "notifications": [],
    "savedCatalogues": [],
    "suppliers": [],
    "procurementDocuments": [],
}

# Read-only view of the top level; nested values must still be copied before use
DEFAULT_APP_STATE = MappingProxyType(_DEFAULT_APP_STATE)


def default_app_state() -> Dict[str, Any]:
    """Return a private, mutable copy of the baseline data set."""
    return deepcopy(_DEFAULT_APP_STATE)
