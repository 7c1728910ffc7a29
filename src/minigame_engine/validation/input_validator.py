"""
Input validation for resolution submissions.
"""
from typing import Any, Mapping, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .exceptions import InputValidationError

M = TypeVar("M", bound=BaseModel)


class InputValidator:
    """
    Parses raw host input into the active strategy's submission model.

    Anything that does not parse is rejected here, so the controller never
    records an attempt for it.
    """

    @staticmethod
    def parse(model: Type[M], raw: Any) -> M:
        """
        Validate raw input against a submission model.

        :param model: Pydantic submission class of the active strategy
        :param raw: Model instance or mapping of fields
        :return: Parsed submission
        :raises InputValidationError: If the input does not match the model
        """
        if isinstance(raw, model):
            return raw

        if isinstance(raw, BaseModel):
            raise InputValidationError(
                f"Expected {model.__name__}, got {type(raw).__name__}"
            )

        if not isinstance(raw, Mapping):
            raise InputValidationError(
                f"Submission must be a mapping of fields, got {type(raw).__name__}"
            )

        try:
            return model.model_validate(dict(raw))
        except PydanticValidationError as exc:
            details = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'input'}: {err['msg']}"
                for err in exc.errors()
            )
            raise InputValidationError(f"Invalid {model.__name__}: {details}") from exc
