"""
The selectHouses function tool.

The model calls this tool to report which catalog houses match what the
customer asked for. The tool only validates and acknowledges; resolving the
IDs into records is left to whoever observes the call.
"""

import json
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator

from src.ai.base import ToolName
from src.ai.configurator.constants import SELECT_HOUSES_DESCRIPTION
from src.ai.configurator.exceptions import SelectionValidationError
from src.utils.logger import logger

HOUSE_IDS_CONTEXT_KEY = "house_ids"


class SelectHousesInput(BaseModel):
    """Arguments of a selectHouses call.

    Validate with ``context={"house_ids": <live catalog IDs>}`` so membership is
    checked against the catalog as it is at call time.
    """

    model_config = ConfigDict(extra="forbid")

    house_ids: list[str] = Field(
        ..., alias="houseIds", description="IDs of the selected houses"
    )

    @field_validator("house_ids")
    @classmethod
    def house_ids_in_catalog(cls, value: list[str], info: ValidationInfo) -> list[str]:
        known = (info.context or {}).get(HOUSE_IDS_CONTEXT_KEY)
        if known is None:
            raise ValueError("no catalog house IDs to validate against")
        unknown = [house_id for house_id in value if house_id not in known]
        if unknown:
            raise ValueError(f"unknown house IDs: {', '.join(unknown)}")
        return value


class SelectHousesResult(BaseModel):
    """Acknowledgement returned to the model."""

    success: bool = True


def build_select_houses_tool(house_ids: Iterable[str]) -> dict[str, Any]:
    """Build the function tool definition for the Responses API.

    The item enum is generated from the IDs passed in, so call this with the
    live catalog on every request.

    Args:
        house_ids: Identifiers the model may select

    Returns:
        dict: FunctionToolParam-shaped tool definition
    """
    return {
        "type": "function",
        "name": ToolName.SELECT_HOUSES.value,
        "description": SELECT_HOUSES_DESCRIPTION,
        "strict": True,
        "parameters": {
            "type": "object",
            "properties": {
                "houseIds": {
                    "type": "array",
                    "description": "IDs of the selected houses",
                    "items": {"type": "string", "enum": list(house_ids)},
                }
            },
            "required": ["houseIds"],
            "additionalProperties": False,
        },
    }


def parse_select_houses(
    arguments: str | dict[str, Any], house_ids: Iterable[str]
) -> SelectHousesInput:
    """Validate selectHouses arguments against the catalog.

    Args:
        arguments: Raw JSON string from the model, or an already decoded object
        house_ids: Live catalog house IDs

    Returns:
        SelectHousesInput: Validated arguments

    Raises:
        SelectionValidationError: If the arguments are not valid JSON, have the
            wrong shape, or name a house that is not in the catalog
    """
    context = {HOUSE_IDS_CONTEXT_KEY: set(house_ids)}
    try:
        if isinstance(arguments, str):
            return SelectHousesInput.model_validate_json(arguments, context=context)
        return SelectHousesInput.model_validate(arguments, context=context)
    except ValidationError as e:
        errors = e.errors(include_url=False, include_context=False)
        message = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc']) or 'input'}: {err['msg']}"
            for err in errors
        )
        raise SelectionValidationError(f"Invalid selectHouses input: {message}", errors)


def execute_select_houses(
    arguments: str | dict[str, Any], house_ids: Iterable[str]
) -> SelectHousesResult:
    """Run the selectHouses tool.

    Args:
        arguments: Raw arguments from the model
        house_ids: Live catalog house IDs

    Returns:
        SelectHousesResult: Success acknowledgement

    Raises:
        SelectionValidationError: If validation fails
    """
    selection = parse_select_houses(arguments, house_ids)
    logger.info("[TOOL] selectHouses", house_ids=selection.house_ids)
    return SelectHousesResult()


def tool_output(result: dict[str, Any] | None = None, error: str | None = None) -> str:
    """Serialize a tool outcome as the function_call_output sent back to the model."""
    if error is not None:
        return json.dumps({"success": False, "error": error})
    return json.dumps(result if result is not None else {"success": True})
