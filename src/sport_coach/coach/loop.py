"""
Orchestration loop: drives the model to completion over a bounded number of turns.

Each turn sends the conversation with the tool registry attached, splits the
reply into commentary and tool invocations, executes the invocations in the
order they were emitted, and feeds the acknowledgments back as tool results.
The loop stops when a reply carries no tool calls or the turn cap is reached.

Conversation history, turn counter, and result are local to one `run` call;
a Coach can serve several check-ins.
"""

import logging
from typing import Any, Dict, List, Tuple

from sport_coach.api.model import CoachInput, CoachResult, ToolInvocation
from sport_coach.coach.executor import ToolExecutor
from sport_coach.coach.prompts import build_system_prompt, build_user_message
from sport_coach.coach.tools import COACH_TOOLS, ToolRegistry

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-sonnet-4-20250514"
DEFAULT_MAX_TOKENS = 2048
MAX_TURNS = 4


def partition_content(content) -> Tuple[str, List[ToolInvocation]]:
    """Split response content blocks into concatenated text and tool invocations."""
    text = ""
    invocations = []
    for block in content or []:
        block_type = getattr(block, "type", None)
        if block_type == "text":
            text += block.text or ""
        elif block_type == "tool_use":
            invocations.append(ToolInvocation(
                id=block.id,
                name=block.name,
                arguments=block.input if isinstance(block.input, dict) else {},
            ))
    return text, invocations


def serialize_content(content) -> List[Dict[str, Any]]:
    """Assistant content blocks as plain dicts for the next request."""
    blocks = []
    for block in content or []:
        block_type = getattr(block, "type", None)
        if block_type == "text":
            blocks.append({"type": "text", "text": block.text})
        elif block_type == "tool_use":
            blocks.append({
                "type": "tool_use",
                "id": block.id,
                "name": block.name,
                "input": block.input,
            })
    return blocks


def tool_results_message(acknowledgments: List[Tuple[str, str]]) -> Dict[str, Any]:
    """Synthetic user message carrying one tool_result per invocation, in order."""
    return {
        "role": "user",
        "content": [
            {"type": "tool_result", "tool_use_id": invocation_id, "content": ack}
            for invocation_id, ack in acknowledgments
        ],
    }


class Coach:
    """Runs the coaching conversation for one CoachInput at a time."""

    def __init__(
        self,
        client,
        executor: ToolExecutor,
        registry: ToolRegistry = COACH_TOOLS,
        model: str = DEFAULT_MODEL,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        max_turns: int = MAX_TURNS,
    ):
        if max_turns < 1:
            raise ValueError("max_turns must be at least 1")
        self._client = client
        self._executor = executor
        self._registry = registry
        self._tools = registry.to_anthropic()
        self.model = model
        self.max_tokens = max_tokens
        self.max_turns = max_turns

    def run(self, snapshot: CoachInput) -> CoachResult:
        """Run the loop to completion and return the accumulated result.

        Model-call failures propagate. Failures inside a tool are reported
        to the model as that tool's result.
        """
        system_prompt = build_system_prompt(snapshot)
        messages: List[Dict[str, Any]] = [
            {"role": "user", "content": build_user_message(snapshot)},
        ]
        result = CoachResult.initial(snapshot)

        turn = 0
        while True:
            turn += 1
            response = self._call_model(system_prompt, messages, self._tool_choice(snapshot, turn), turn)
            usage = getattr(response, "usage", None)
            result = result.with_usage(
                getattr(usage, "input_tokens", 0),
                getattr(usage, "output_tokens", 0),
            )

            text, invocations = partition_content(response.content)
            result = result.with_commentary(text)

            acknowledgments = []
            for invocation in invocations:
                ack, result = self._run_invocation(invocation, snapshot, result)
                acknowledgments.append((invocation.id, ack))

            if not invocations:
                logger.info("Turn %d: no tool calls, done", turn)
                break
            if turn >= self.max_turns:
                logger.info("Turn %d: reached turn limit, stopping", turn)
                break

            messages.append({"role": "assistant", "content": serialize_content(response.content)})
            messages.append(tool_results_message(acknowledgments))

        logger.info("Actions taken: %s", ", ".join(result.actions) or "none")
        return result.with_turns(turn)

    def _tool_choice(self, snapshot: CoachInput, turn: int) -> Dict[str, str]:
        # Unattended check-ins must act on the first turn; questions may be answered in text.
        if turn == 1 and not snapshot.question:
            return {"type": "any"}
        return {"type": "auto"}

    def _call_model(self, system_prompt: str, messages: List[Dict[str, Any]], tool_choice, turn: int):
        logger.info("Calling model (turn %d/%d, tool_choice=%s)", turn, self.max_turns, tool_choice["type"])
        response = self._client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            system=system_prompt,
            tools=self._tools,
            tool_choice=tool_choice,
            messages=list(messages),
        )
        usage = getattr(response, "usage", None)
        if usage is not None:
            logger.info(
                "Tokens: %s in, %s out (stop_reason=%s)",
                usage.input_tokens, usage.output_tokens, getattr(response, "stop_reason", None),
            )
        return response

    def _run_invocation(
        self,
        invocation: ToolInvocation,
        snapshot: CoachInput,
        result: CoachResult,
    ) -> Tuple[str, CoachResult]:
        logger.info("Tool: %s", invocation.name)
        try:
            return self._executor.execute(invocation.name, invocation.arguments, snapshot, result)
        except Exception as e:
            logger.exception("Tool %s failed", invocation.name)
            return f"Error executing {invocation.name}: {e}", result
