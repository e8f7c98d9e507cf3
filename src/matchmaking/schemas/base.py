"""
Base Schema Classes

This module provides base classes for request and response schemas with
common conversion to and from decoded JSON bodies to avoid code duplication.
"""

from dataclasses import asdict, fields
from typing import Any, Dict, Type, TypeVar

T = TypeVar("T", bound="BaseResponse")


class BaseRequest:
    """
    Base class for request bodies sent to remote services.

    Fields whose value is None are omitted, so optional flags are only
    sent when set.
    """

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Returns:
            Dictionary of the dataclass fields that are not None.
        """
        if not (hasattr(self, "__dataclass_fields__") and fields(self)):
            return {}
        return {key: value for key, value in asdict(self).items() if value is not None}


class BaseResponse:
    """
    Base class for response bodies received from remote services.

    Provides common deserialization methods for creating response objects
    from decoded JSON dictionaries.
    """

    @classmethod
    def from_dict(cls: Type[T], data: Dict[str, Any]) -> T:
        """
        Create instance from dictionary.

        Args:
            data: Decoded response body.

        Returns:
            Instance of the response class.

        Raises:
            ValueError: If required fields are missing.
        """
        if not isinstance(data, dict):
            raise ValueError(f"{cls.__name__} expects an object, got {type(data).__name__}")
        try:
            return cls._from_data(data)
        except KeyError as e:
            raise ValueError(f"{cls.__name__} is missing field {e}") from e

    @classmethod
    def _from_data(cls: Type[T], data: Dict[str, Any]) -> T:
        """
        Create instance from response data dictionary.

        Should be overridden by subclasses for custom deserialization.
        """
        return cls(**data)
