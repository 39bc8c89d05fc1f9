from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ddmatch.models import Member, clamp_offset, member_from_document

TIMEZONE_OFFSETS = {
    "America/Los_Angeles": -8,
    "America/Denver": -7,
    "America/Chicago": -6,
    "America/New_York": -5,
    "UTC": 0,
}

# Form labels -> tags the faith sub-scorer looks for.
SUPPORT_NEED_TAGS = {
    "mentorship": "mentorship",
    "accountability": "accountability",
    "daily prayer support": "prayer_partners",
    "prayer partners": "prayer_partners",
    "bible study group": "bible_study_partners",
    "bible study partners": "bible_study_partners",
    "encouragement": "encouragement",
}


def timezone_to_offset_hours(tz: str) -> int:
    return TIMEZONE_OFFSETS.get(tz, 0)


def split_free_text(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [str(v).strip() for v in value if v is not None and str(v).strip()]


def support_need_tag(label: str) -> str:
    key = label.strip().lower()
    return SUPPORT_NEED_TAGS.get(key, key.replace(" ", "_"))


def slack_profile_url(workspace: str, user_id: str) -> str:
    return f"https://{workspace}.slack.com/team/{user_id}"


class OnboardingPayload(BaseModel):
    """Onboarding form submission, camelCase on the wire."""

    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field(alias="firstName", min_length=1)
    last_name: str = Field(alias="lastName", min_length=1)

    stage: Literal["college", "new_grad", "transfer", "gap_year", "other"]
    major: str = Field(default="")
    institution: str = Field(default="")
    linkedin_url: str = Field(alias="linkedinUrl", default="")

    faith_season: Literal["exploring", "recently_committed", "growing_consistent", "mature_mentoring"] = Field(
        alias="faithSeason"
    )
    spiritual_support_needs: List[str] = Field(alias="spiritualSupportNeeds", default_factory=list)

    tech_interests: List[str] = Field(alias="techInterests", default_factory=list)
    career_goals: List[str] = Field(alias="careerGoals", default_factory=list)

    community_environment: List[str] = Field(alias="communityEnvironment", default_factory=list)
    personality_words: List[str] = Field(alias="personalityWords", default_factory=list)

    habits: List[str] = Field(default_factory=list)
    accountability_level: Literal["light", "weekly", "daily", "group", "unsure"] = Field(alias="accountabilityLevel")

    pods: List[Literal["deploy", "debug", "pr_review", "systems_integrity"]] = Field(default_factory=list)

    timezone: str = Field(default="UTC")
    timezone_offset_hours: Optional[float] = Field(alias="timezoneOffsetHours", default=None)
    availability_slots: List[str] = Field(alias="availabilitySlots", default_factory=list)

    match_preference: Literal["peer", "mentor", "mentee", "no_preference"] = Field(alias="matchPreference")

    hobbies_raw: List[str] = Field(alias="hobbiesRaw", default_factory=list)
    sports_they_watch: List[str] = Field(alias="sportsTheyWatch", default_factory=list)

    profile: str = Field(default="")

    @field_validator("first_name", "last_name")
    @classmethod
    def _strip_names(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name cannot be blank")
        return value

    @field_validator("personality_words", "hobbies_raw", mode="before")
    @classmethod
    def _split_comma_text(cls, value: Any) -> List[str]:
        return split_free_text(value)

    def offset_hours(self) -> int:
        if self.timezone in TIMEZONE_OFFSETS:
            return TIMEZONE_OFFSETS[self.timezone]
        return clamp_offset(self.timezone_offset_hours)

    def to_document(self, chat_user_id: Optional[str] = None, workspace: str = "debuggingdisciples") -> Dict[str, Any]:
        profile = slack_profile_url(workspace, chat_user_id) if chat_user_id else self.profile
        return {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "stage": self.stage,
            "major": self.major,
            "institution": self.institution,
            "linkedinUrl": self.linkedin_url,
            "faithSeason": self.faith_season,
            "spiritualSupportNeeds": sorted({support_need_tag(n) for n in self.spiritual_support_needs if n.strip()}),
            "techInterests": split_free_text(self.tech_interests),
            "careerGoals": split_free_text(self.career_goals),
            "communityEnvironment": split_free_text(self.community_environment),
            "personalityWords": self.personality_words,
            "habits": split_free_text(self.habits),
            "accountabilityLevel": self.accountability_level,
            "pods": list(dict.fromkeys(self.pods)),
            "timezone": self.timezone,
            "timezoneOffsetHours": self.offset_hours(),
            "availabilitySlots": split_free_text(self.availability_slots),
            "matchPreference": self.match_preference,
            "hobbies": self.hobbies_raw,
            "sportsTheyWatch": split_free_text(self.sports_they_watch),
            "profile": profile,
            "createdAt": datetime.now(timezone.utc).isoformat(),
        }

    def to_member(self, member_id: str) -> Member:
        return member_from_document(self.to_document(), member_id=member_id)
