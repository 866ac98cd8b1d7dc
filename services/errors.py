"""
Custom exceptions for the list controller.

Only configuration mistakes are exceptions. Normal paths such as an empty
list, no criteria, a cache miss, removing an unknown entity or paging past
the data are handled silently.
"""


class ListControllerError(Exception):
    """Base exception for list controller errors."""
    pass


class SearchConfigurationError(ListControllerError):
    """
    Raised when a predicate search criterion has no cache name.

    A function has no value that can be turned into a filter cache key, so
    the caller must name it.

    Attributes:
        property_name: Property path of the offending criterion
        model_name: Entity model the list holds
        message: Error message
    """

    def __init__(self, property_name: str, model_name: str = None, message: str = None):
        self.property_name = property_name
        self.model_name = model_name

        if message is None:
            target = f"the {model_name} list" if model_name else "the list"
            message = (
                f"The value of {property_name} is a function, so it needs a "
                f"cache_name to reference it in {target}."
            )

        self.message = message
        super().__init__(message)
