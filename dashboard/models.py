"""
Pydantic models for backend responses the dashboard interprets.

Profile, education, publication and application records are passed
through as plain dicts; only suggestions are parsed since the dashboard
groups and formats them.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

SUGGESTION_SECTIONS = ("reach", "match", "safe")


class Suggestion(BaseModel):
    """A single suggested program."""

    university: Optional[str] = None
    program: Optional[str] = None
    admit_rate: Optional[float] = Field(None, description="Admit rate as a fraction (0-1).")
    avg_gpa: Optional[float] = Field(None, description="Average admitted GPA, if known.")


class SuggestionBuckets(BaseModel):
    """Suggestions grouped by how competitive the program is for the user."""

    reach: List[Suggestion] = Field(default_factory=list)
    match: List[Suggestion] = Field(default_factory=list)
    safe: List[Suggestion] = Field(default_factory=list)

    def sections(self):
        """Yield (section name, suggestions) in display order."""
        for name in SUGGESTION_SECTIONS:
            yield name, getattr(self, name)
