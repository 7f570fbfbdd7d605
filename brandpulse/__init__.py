"""BrandPulse: AI-powered brand feedback dashboard."""

__version__ = "1.0.0"
