"""Campus bounded context: vendor onboarding and cafeteria pre-ordering.

Owners apply to run a cafeteria and are provisioned one storefront on
approval. Students build a cart against one cafeteria, check it out into a
confirmed Order, and track it through to pickup.
"""

import os

from protean.domain import Domain

from campus.utils.logging import configure_logging, get_logger

configure_logging(log_dir=os.getenv("LOG_DIR"))

logger = get_logger(__name__)

# Domain Composition Root
campus = Domain(name="campus")
