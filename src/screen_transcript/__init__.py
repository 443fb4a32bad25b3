"""Recover a role-tagged chat transcript from terminal screen snapshots."""

__version__ = "0.1.0"
