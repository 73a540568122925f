"""Resume Matcher API - authenticated, rate-limited resume analysis service."""

__version__ = "0.1.0"
