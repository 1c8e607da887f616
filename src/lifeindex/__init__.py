"""LifeIndex: daily wellness and recovery scoring from health readings."""

__version__ = "0.1.0"
