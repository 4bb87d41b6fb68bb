from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Admin roles."""

    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


class UnitType(str, Enum):
    """The five levels of the organizational hierarchy."""

    GROUP = "group"
    PAI = "pai"  # sub-unit
    COMMUNITY = "community"  # neighborhood
    REGION = "region"
    CHURCH = "church"  # congregation


class AttachmentKind(str, Enum):
    IMAGE = "image"
    FILE = "file"


class MeetingShape(str, Enum):
    """How meeting rows point at their unit in storage."""

    DENORMALIZED = "denormalized"
    REFERENTIAL = "referential"


class GroupBy(str, Enum):
    """Dimensions the statistics report can be summarized over."""

    BY_PROJECT = "by_project"
    BY_UNIT = "by_unit"
    BY_PROJECT_AND_UNIT = "by_project_and_unit"
