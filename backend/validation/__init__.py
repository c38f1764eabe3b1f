"""
validation
----------
Validates individual export files before usernames are extracted.
Ensures: size within limit, readable JSON, and the top-level shape Instagram
uses for following.json / followers_N.json. Raises AnalysisError subclasses.
"""

from .validator import check_size, validate_export

__all__ = ["check_size", "validate_export"]
