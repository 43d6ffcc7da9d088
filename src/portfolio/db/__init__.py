"""Persistence layer."""

from portfolio.db.database import Database
from portfolio.db.models import (
    Base,
    Category,
    ContactMessage,
    Experience,
    ExperienceMedia,
    PageConnection,
    Project,
    ProjectPage,
    Setting,
    Skill,
    Testimonial,
)

__all__ = [
    "Base",
    "Category",
    "ContactMessage",
    "Database",
    "Experience",
    "ExperienceMedia",
    "PageConnection",
    "Project",
    "ProjectPage",
    "Setting",
    "Skill",
    "Testimonial",
]
