"""
Domain exceptions
"""


class GenerationError(Exception):
    """The answer generator call failed or returned unusable content"""


class ProviderNotConfiguredError(GenerationError):
    """No API key configured for the answer generator"""


class InvalidCategoryError(ValueError):
    """A category string could not be resolved to a known category"""

    def __init__(self, category: str | None):
        self.category = category
        super().__init__(
            f"Invalid category: {category}. Must be one of the valid category IDs."
        )
