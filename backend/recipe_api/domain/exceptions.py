"""Domain-specific exceptions: framework-independent.

Expected use-case outcomes are returned as typed failures (see
``recipe_api.domain.failures``); exceptions are kept for conditions raised
by lower layers.
"""


class DuplicateEntityError(Exception):
    """Raised by storage when a write violates a unique constraint."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")
