"""Algorithm trace and playback core package."""

from .controller import PlaybackController  # noqa: F401
from .api import (  # noqa: F401
    prepare_input,
    generate_trace,
    render_at,
    dump_trace,
    trace_stats,
)
