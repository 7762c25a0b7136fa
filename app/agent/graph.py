"""
LangGraph agent: initial → (await_tool_result) → END.

initial: retrieve context, build the prompt, first model call with tools.
await_tool_result: run the first requested tool, feed its result back, second model call.
Only the first tool call of a reply is honoured; the flow never loops.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Literal, TypedDict

from langgraph.graph import END, StateGraph

from app.agent.llm import ToolCall, chat_with_tools
from app.agent.tools import TOOL_REGISTRY
from app.core.errors import ClientInputError
from app.services.retrieval_service import retrieve_context

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = (
    "You are a helpful and professional customer support agent for a small business. "
    "Your goal is to answer questions accurately and quickly. "
    "Always prioritize the information provided in the 'CONTEXT' section. "
    "If the user asks about an appointment or order status, use the available tools."
)

UNKNOWN_TOOL_ANSWER = "Error: The model requested an unknown function: {name}."


class ChatState(TypedDict):
    user_query: str
    context: str
    messages: list  # OpenAI chat turns: user / assistant (tool_calls) / tool
    tool_call: ToolCall | None
    answer: str
    action_taken: str | None


@dataclass
class ChatResult:
    answer: str
    action_taken: str | None = None


def build_prompt(context: str, user_query: str) -> str:
    return f"CONTEXT:\n---\n{context}\n---\n\nCUSTOMER QUESTION: {user_query}"


def format_action(name: str, arguments: dict[str, Any], result: str) -> str:
    """Human-readable action log entry, e.g. check_order_status({"order_id":"ABC-123"}) -> ..."""
    args_json = json.dumps(arguments, separators=(",", ":"), ensure_ascii=False)
    return f"{name}({args_json}) -> {result}"


def _initial(state: ChatState) -> dict:
    """Node 1: retrieve context, start the history, first model call."""
    query = state["user_query"]
    logger.info("[graph:initial] IN  user_query=%r", query)
    context = retrieve_context(query)
    messages = [{"role": "user", "content": build_prompt(context, query)}]
    reply = chat_with_tools(messages, TOOL_REGISTRY.openai_tools(), SYSTEM_INSTRUCTION)
    tool_call = reply.tool_calls[0] if reply.tool_calls else None
    if len(reply.tool_calls) > 1:
        logger.warning(
            "[graph:initial] model requested %d tool calls; honouring only %r, dropping %s",
            len(reply.tool_calls), tool_call.name, [t.name for t in reply.tool_calls[1:]],
        )
    logger.info("[graph:initial] OUT content_len=%d tool_call=%s", len(reply.content or ""), tool_call.name if tool_call else None)
    return {
        "context": context,
        "messages": messages,
        "tool_call": tool_call,
        "answer": reply.content or "",
    }


def _route_after_initial(state: ChatState) -> Literal["await_tool_result", "__end__"]:
    next_node = "await_tool_result" if state.get("tool_call") else END
    logger.info("[graph:route_after_initial] -> %s", next_node)
    return next_node


def _await_tool_result(state: ChatState) -> dict:
    """Node 2: execute the requested tool and ask the model for the final answer."""
    call = state["tool_call"]
    logger.info("[graph:await_tool_result] IN  name=%r arguments=%r", call.name, call.arguments)
    result, found = TOOL_REGISTRY.execute(call.name, call.arguments)
    if not found:
        logger.warning("[graph:await_tool_result] unknown tool %r; skipping second model call", call.name)
        return {"answer": UNKNOWN_TOOL_ANSWER.format(name=call.name), "action_taken": None}

    # The assistant turn carries only the honoured call: every tool_call_id sent
    # back must be answered by a tool turn.
    assistant_turn = {
        "role": "assistant",
        "content": state.get("answer") or "",
        "tool_calls": [
            {
                "id": call.id,
                "type": "function",
                "function": {"name": call.name, "arguments": json.dumps(call.arguments)},
            }
        ],
    }
    tool_turn = {"role": "tool", "tool_call_id": call.id, "name": call.name, "content": result}
    messages = [*state["messages"], assistant_turn, tool_turn]
    reply = chat_with_tools(messages, TOOL_REGISTRY.openai_tools(), SYSTEM_INSTRUCTION)
    if reply.tool_calls:
        logger.info("[graph:await_tool_result] ignoring follow-up tool calls %s", [t.name for t in reply.tool_calls])
    action = format_action(call.name, call.arguments, result)
    logger.info("[graph:await_tool_result] OUT action_taken=%r", action)
    return {"messages": messages, "answer": reply.content or "", "action_taken": action}


def build_graph():
    """
    Build and compile the chat graph.
    initial → (await_tool_result if a tool was requested) → END.
    """
    graph = StateGraph(ChatState)

    graph.add_node("initial", _initial)
    graph.add_node("await_tool_result", _await_tool_result)

    graph.set_entry_point("initial")
    graph.add_conditional_edges("initial", _route_after_initial)
    graph.add_edge("await_tool_result", END)

    return graph.compile()


_GRAPH = build_graph()


def run_chat(user_query: str | None) -> ChatResult:
    """
    Run one chat request. Raises ClientInputError for a missing/empty query (before
    any model call); model failures propagate as UpstreamServiceError.
    """
    if not isinstance(user_query, str) or not user_query:
        raise ClientInputError("Missing 'user_query' in request body.")
    logger.info("[run_chat] START user_query=%r", user_query)
    initial: ChatState = {
        "user_query": user_query,
        "context": "",
        "messages": [],
        "tool_call": None,
        "answer": "",
        "action_taken": None,
    }
    final = _GRAPH.invoke(initial)
    result = ChatResult(answer=final.get("answer") or "", action_taken=final.get("action_taken"))
    logger.info("[run_chat] END answer_len=%d action_taken=%r", len(result.answer), result.action_taken)
    return result
