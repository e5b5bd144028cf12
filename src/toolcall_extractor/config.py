"""Configuration for the extraction engine."""

from dataclasses import dataclass, field, replace
from typing import Literal

DEFAULT_IMPLICIT_TOOL_NAME = "update_user_profile"

# Keys that mark a bare JSON object in a fenced block as profile data.
DEFAULT_PROFILE_FIELDS: frozenset[str] = frozenset({
    "full_name",
    "bio",
    "user_description",
    "experience_level",
    "sailing_experience",
    "skills",
    "risk_level",
    "comfort_zones",
    "sailing_preferences",
    "certifications",
})

# Place names that models tend to write as `Norway (the fjords)`.
DEFAULT_PLACE_NAME_DENYLIST: frozenset[str] = frozenset({
    "ireland",
    "iceland",
    "greenland",
    "norway",
    "brittany",
    "svalbard",
    "lofoten",
})


@dataclass(frozen=True)
class ExtractionConfig:
    """Tunable heuristics for tool call extraction.

    Attributes:
        implicit_tool_name: Tool name assigned to fenced JSON objects that carry
            profile fields but no ``name``.
        profile_fields: Keys that trigger an implicit call.
        place_name_denylist: Lower-cased names never accepted as Python-style
            function names.
        id_prefix: Prefix for generated tool call ids.
        id_strategy: ``"timestamp"`` for ``tc_<epoch ms>_<seq>`` ids or
            ``"uuid"`` for ``tc_<uuid4 hex>`` ids.
    """
    implicit_tool_name: str = DEFAULT_IMPLICIT_TOOL_NAME
    profile_fields: frozenset[str] = field(default=DEFAULT_PROFILE_FIELDS)
    place_name_denylist: frozenset[str] = field(default=DEFAULT_PLACE_NAME_DENYLIST)
    id_prefix: str = "tc"
    id_strategy: Literal["timestamp", "uuid"] = "timestamp"

    @classmethod
    def default(cls) -> "ExtractionConfig":
        """Config matching the stock assistant prompts."""
        return cls()

    @classmethod
    def strict(cls) -> "ExtractionConfig":
        """Config with implicit profile calls disabled."""
        return cls(profile_fields=frozenset())

    def with_profile_fields(self, *fields: str) -> "ExtractionConfig":
        """Return a copy that also treats ``fields`` as profile triggers."""
        return replace(self, profile_fields=self.profile_fields | frozenset(fields))

    def with_denied_names(self, *names: str) -> "ExtractionConfig":
        """Return a copy with extra names added to the place-name denylist."""
        extra = frozenset(name.lower() for name in names)
        return replace(self, place_name_denylist=self.place_name_denylist | extra)
