"""Dependency container for the activity recorder."""

from dataclasses import dataclass

from agencyhub.domain.repositories.activity_repository import IActivityRepository
from agencyhub.domain.services.access_verifier import AccessVerifier


@dataclass
class ActivityDependencies:
    """Container for activity recorder dependencies."""

    activity_repository: IActivityRepository
    access_verifier: AccessVerifier


__all__ = ["ActivityDependencies"]
