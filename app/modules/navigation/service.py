"""
Route guard for the client's pages.

Given a page path and the identity's onboarding status, decide whether the
page may be shown or where to send the user instead.
"""

from typing import Optional
from app.modules.onboarding.schemas import OnboardingStatus

PUBLIC_ROUTES = ("/", "/login")
ONBOARDING_ROUTES = ("/onboarding/family", "/onboarding/members", "/onboarding/complete")
APP_ROUTES = ("/dashboard", "/chores", "/shopping", "/meals", "/settings/family")
KNOWN_ROUTES = PUBLIC_ROUTES + ONBOARDING_ROUTES + APP_ROUTES

ONBOARDING_START = "/onboarding/family"


def normalize_path(path: str) -> str:
    path = "/" + path.strip().strip("/")
    return path


def resolve_redirect(path: str, status: Optional[OnboardingStatus]) -> Optional[str]:
    """
    Redirect target for a page, or None when the page may be shown.
    `status` is None for anonymous visitors. Raises KeyError for unknown pages.
    """
    path = normalize_path(path)
    if path not in KNOWN_ROUTES:
        raise KeyError(path)

    if path == "/":
        return None
    if status is None:
        return None if path == "/login" else "/login"
    if path == "/login":
        return status.landing

    fully_onboarded = status.completed and status.has_family

    if path in APP_ROUTES:
        return None if fully_onboarded else ONBOARDING_START

    if path == "/onboarding/family":
        return "/dashboard" if fully_onboarded else None
    if path == "/onboarding/members":
        return None if status.has_family else ONBOARDING_START
    # /onboarding/complete
    return None if fully_onboarded else status.next
