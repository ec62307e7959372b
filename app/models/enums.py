"""Centralized Enum Definitions"""

import enum


class UserRole(enum.IntEnum):
    """
    Privilege levels. Stored as a plain integer so intermediate levels stay
    representable; comparisons are numeric (``role >= UserRole.ADMIN``).
    """
    ANONYMOUS = 0
    MEMBER = 1
    STAFF = 2
    ADMIN = 3
