"""Domain initialization and configuration.

CarGo runs as a single Protean domain so that an order's payment
confirmation, the matching stock decrements and the buyer's address update
commit in one unit of work.
"""

from protean.domain import Domain

from cargo.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
cargo = Domain(name="cargo")
