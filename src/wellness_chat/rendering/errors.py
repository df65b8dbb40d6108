"""Exceptions raised inside the rendering pipeline.

None of these escape ``render``: the renderer's failure boundary converts
them into degraded output.  They exist so internal faults are distinguishable
from programming errors in logs and tests.
"""


class RenderError(Exception):
    """Base class for internal rendering faults."""


class PlaceholderError(RenderError):
    """A placeholder token went missing or was duplicated before restoration."""
