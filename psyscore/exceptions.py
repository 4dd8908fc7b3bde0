"""PsyScore — exception hierarchy.

Scoring never raises on bad response data; these cover deployment problems
such as an unreadable or invalid research-norms file.
"""


class PsyScoreError(Exception):
    """Base class for all PsyScore errors."""


class ResearchNormsError(PsyScoreError):
    """Raised when a research-norms file cannot be read or validated."""
