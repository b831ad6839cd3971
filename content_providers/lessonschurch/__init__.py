"""Lessons.church provider."""

from .provider import LessonsChurchProvider

__all__ = ["LessonsChurchProvider"]
