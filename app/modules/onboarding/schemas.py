from pydantic import BaseModel, field_validator
from typing import Optional, Literal

OnboardingState = Literal["needs_family", "needs_members", "complete"]


class OnboardingStatus(BaseModel):
    state: OnboardingState
    completed: bool = False
    has_family: bool = False
    family_id: Optional[str] = None
    member_count: int = 0
    next: str  # Onboarding step (or dashboard) the identity belongs on

    @property
    def landing(self) -> str:
        """Page to land on after sign-in: dashboard once fully onboarded, else onboarding start."""
        if self.completed and self.has_family:
            return "/dashboard"
        return "/onboarding/family"


class OnboardingFamilyCreate(BaseModel):
    name: str

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Family name must not be empty")
        return value


class OnboardingFamilyResponse(BaseModel):
    family_id: str
    name: str
    next: str = "/onboarding/members"


class OnboardingFinishResponse(BaseModel):
    completed: bool = True
    next: str = "/onboarding/complete"


class OnboardingCompleteResponse(BaseModel):
    message: str
    next: str = "/dashboard"
    redirect_after_seconds: int
