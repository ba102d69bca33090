"""Base Pydantic model with strict defaults for rider schemas.

All rider schemas inherit from this base to ensure consistent validation
behavior across parameter, user, CLI, internal and descriptor models.
"""

from pydantic import BaseModel, ConfigDict


class RiderBaseModel(BaseModel):
    """Base model for all rider schemas.

    Enforces strict validation:
    - No extra fields allowed
    - Validates assignments after initialization
    - Uses Python mode (not JSON mode)
    """

    model_config = ConfigDict(
        extra='forbid',           # Reject unknown fields
        validate_assignment=True, # Validate on field mutation
        use_enum_values=True,     # Convert enums to values
        str_strip_whitespace=True,# Strip whitespace from strings
    )
