"""Academy domain: course and product catalogue, reviews and ratings, enrollments.

A single Protean domain hosts every aggregate. Cross-aggregate consistency
(rating recomputation, user counters, cascade deletes) is orchestrated
explicitly inside command handlers, so each command commits as one unit
of work.
"""

from protean.domain import Domain

from academy.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging(level="INFO", log_dir="logs", log_file_prefix="academy")

logger = get_logger(__name__)

# Domain Composition Root
academy = Domain(name="academy")
