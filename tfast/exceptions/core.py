from typing import Any


class BaseException(Exception):  # noqa: A001
    """Base class for tfast exceptions."""

    def __init__(self, **kwargs: Any) -> None:
        """Initialise Exception."""
        super().__init__()
        self.extra = kwargs

    def __str__(self) -> str:
        """Return a string representation of the exception.

        String is defined as follows:
        ```
        <class_name>(extra_key1=extra_value1, extra_key2=extra_value2, ...)
        ```
        """
        class_name = self.__class__.__name__
        extra_str = ", ".join(f"{key}={value}" for key, value in self.extra.items())
        return f"{class_name}({extra_str})"

    def get_data(self) -> dict[str, Any]:
        """Get the extra data attached to the exception.

        Returns:
            dict[str, Any]: a copy of the extra data
        """
        return self.extra.copy()

    def __repr__(self) -> str:
        """Return a representation of the exception with its extra data."""
        class_name = self.__class__.__name__
        extra_str = ", ".join(f"{key}={value!r}" for key, value in self.extra.items())
        return f"{class_name}({extra_str})"
