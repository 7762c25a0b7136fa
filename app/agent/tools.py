"""
Agent tools: declarations and execution for tool-calling mode.

Tools: book_appointment, check_order_status. Both are mock stand-ins for a
scheduling API and an e-commerce order API; swap the handler to go live.
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping

logger = logging.getLogger(__name__)

ToolHandler = Callable[[Mapping[str, Any]], str]


@dataclass(frozen=True)
class ToolParameter:
    type: str
    description: str
    required: bool = True


@dataclass(frozen=True)
class ToolDeclaration:
    name: str
    description: str
    parameters: Mapping[str, ToolParameter] = field(default_factory=dict)

    def to_openai(self) -> dict[str, Any]:
        """Render as an OpenAI function-calling tool definition."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": {
                    "type": "object",
                    "properties": {
                        pname: {"type": p.type, "description": p.description}
                        for pname, p in self.parameters.items()
                    },
                    "required": [pname for pname, p in self.parameters.items() if p.required],
                },
            },
        }


@dataclass(frozen=True)
class Tool:
    declaration: ToolDeclaration
    handler: ToolHandler

    @property
    def name(self) -> str:
        return self.declaration.name


class ToolRegistry:
    """Fixed name -> Tool table. Read-only after construction."""

    def __init__(self, tools: Iterable[Tool]) -> None:
        table: dict[str, Tool] = {}
        for tool in tools:
            if tool.name in table:
                raise ValueError(f"Duplicate tool name: {tool.name!r}")
            table[tool.name] = tool
        self._tools = MappingProxyType(table)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def names(self) -> list[str]:
        return list(self._tools)

    def schemas(self) -> tuple[ToolDeclaration, ...]:
        return tuple(t.declaration for t in self._tools.values())

    def openai_tools(self) -> list[dict[str, Any]]:
        return [d.to_openai() for d in self.schemas()]

    def execute(self, name: str, arguments: Mapping[str, Any] | None) -> tuple[str, bool]:
        """
        Execute a tool by exact name with the raw argument mapping.
        Returns (result, True), or ("", False) when no such tool is registered.
        """
        tool = self._tools.get(name)
        if tool is None:
            logger.warning("[tools] execute_tool unknown name=%r", name)
            return "", False
        args = arguments or {}
        logger.info("[tools] execute_tool name=%r arguments=%r", name, args)
        result = tool.handler(args)
        logger.info("[tools] execute_tool name=%r OUT result=%r", name, result)
        return result, True


def _str_arg(args: Mapping[str, Any], key: str) -> str:
    value = args.get(key)
    return "" if value is None else str(value)


def _book_appointment(args: Mapping[str, Any]) -> str:
    # Mock: a real deployment calls the scheduling API (CRM, booking service) here.
    date = _str_arg(args, "date")
    service = _str_arg(args, "service")
    if "urgent" in service.lower():
        return f"Sorry, all urgent slots are full. Please try booking for a later date than {date}."
    return f"✅ Appointment for '{service}' successfully confirmed on {date}. A text alert has been sent."


def _check_order_status(args: Mapping[str, Any]) -> str:
    # Mock: a real deployment calls the store's order API here.
    order_id = _str_arg(args, "order_id")
    if order_id == "ABC-123":
        return "Order ABC-123 is currently 'In Transit' and expected to arrive tomorrow, December 8, 2025."
    return f"❌ Sorry, order {order_id} was not found in our system. Please double-check the ID."


BOOK_APPOINTMENT = Tool(
    declaration=ToolDeclaration(
        name="book_appointment",
        description="Books a service appointment for the customer. Requires a date and the type of service.",
        parameters={
            "date": ToolParameter(
                type="string",
                description='The desired date for the appointment (e.g., "next Tuesday").',
            ),
            "service": ToolParameter(
                type="string",
                description='The specific service the customer wants (e.g., "haircut", "plumbing repair").',
            ),
        },
    ),
    handler=_book_appointment,
)

CHECK_ORDER_STATUS = Tool(
    declaration=ToolDeclaration(
        name="check_order_status",
        description="Retrieves the current shipping status of a customer's order. Requires an order ID.",
        parameters={
            "order_id": ToolParameter(
                type="string",
                description="The customer's unique order identification number.",
            ),
        },
    ),
    handler=_check_order_status,
)

TOOL_REGISTRY = ToolRegistry([BOOK_APPOINTMENT, CHECK_ORDER_STATUS])
