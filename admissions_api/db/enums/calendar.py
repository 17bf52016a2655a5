"""Admissions calendar enums."""

from enum import Enum


class AdmissionRound(str, Enum):
    ED = "ED"
    ED2 = "ED2"
    EA = "EA"
    REA = "REA"
    RD = "RD"
    ROLLING = "Rolling"


class GlobalEventCategory(str, Enum):
    TEST = "TEST"
    COMPETITION = "COMPETITION"
    SUMMER_PROGRAM = "SUMMER_PROGRAM"
    FINANCIAL_AID = "FINANCIAL_AID"
    APPLICATION = "APPLICATION"
    OTHER = "OTHER"


class DeadlineSource(str, Enum):
    """Where a school deadline row came from."""

    MANUAL = "MANUAL"
    SCRAPED = "SCRAPED"
