"""Shared contract for per-service recognizers."""

from typing import Callable

from ..config import ConfigLayer, Layered
from ..models import MatchOutcome, PathCursor, Url

# A recognizer inspects the URL's path, query and fragment and either returns a
# rendered label or declines with NOT_MATCHED. Recognizers never write output.
Recognizer = Callable[[Url, PathCursor, Layered[ConfigLayer]], MatchOutcome]
