"""SchoolBoard backend: school management API with exam result ranking."""

__version__ = "1.0.0"
