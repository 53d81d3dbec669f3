"""Turn pipeline: stage dispatch, image enrichment fan-out, log assembly."""

from .assembler import assemble  # noqa: F401
from .dispatcher import advance, run_turn  # noqa: F401
from .enrichment import Settled, enrich, settle_all  # noqa: F401
