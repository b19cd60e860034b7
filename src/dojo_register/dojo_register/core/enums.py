from __future__ import annotations

from enum import Enum


class ClassCategory(str, Enum):
    """Cohort a student trains with."""

    LITTLE_LIONS = "Little Lions"
    JUNIORS = "Juniors"
    YOUTHS = "Youths"
    ADULTS = "Adults"


class AgeRange(str, Enum):
    """Testing age range used for grading eligibility."""

    EIGHT_AND_BELOW = "8 and below"
    NINE_TO_TWELVE = "9-12 years"
    THIRTEEN_TO_SEVENTEEN = "13-17 years"
    EIGHTEEN_AND_ABOVE = "18 and above"
