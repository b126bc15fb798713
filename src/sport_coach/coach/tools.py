"""
Tool schema registry: the fixed catalog of tools the model may call.

The registry is built once (`build_coach_registry`) and passed by reference
into the executor and the loop. Schemas are frozen on construction; callers
get fresh plain-dict copies when exporting them to the model API.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from sport_coach.sdk.types import RiskCategory, Severity, TrainingGoal, enum_values

CREATE_WEEK_PLAN = "create_week_plan"
UPDATE_WEEK_PLAN = "update_week_plan"
FLAG_RISK = "flag_risk"
ADD_NOTE = "add_note"

_JSON_TYPES = {
    "string": (str,),
    "number": (int, float),
    "integer": (int,),
    "boolean": (bool,),
}


def _freeze(value):
    if isinstance(value, Mapping):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    return value


def _thaw(value):
    if isinstance(value, Mapping):
        return {k: _thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [_thaw(v) for v in value]
    return value


@dataclass(frozen=True)
class ToolSpec:
    """One callable tool: name, description, JSON schema of its input."""
    name: str
    description: str
    input_schema: Mapping[str, Any]

    def __post_init__(self):
        object.__setattr__(self, "input_schema", _freeze(self.input_schema))

    @property
    def properties(self) -> Mapping[str, Any]:
        return self.input_schema.get("properties", MappingProxyType({}))

    @property
    def required(self) -> Tuple[str, ...]:
        return tuple(self.input_schema.get("required", ()))

    def to_anthropic(self) -> Dict[str, Any]:
        """Tool definition in the Messages API format."""
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": _thaw(self.input_schema),
        }

    def check_arguments(self, arguments: Any) -> List[str]:
        """List schema problems with a set of arguments (empty when valid).

        Checks presence of required fields, primitive types, and enum
        membership. Unknown extra fields are ignored.
        """
        if not isinstance(arguments, Mapping):
            return ["arguments must be an object"]

        problems = []
        for name in self.required:
            if arguments.get(name) is None:
                problems.append(f"missing required field '{name}'")

        for name, schema in self.properties.items():
            value = arguments.get(name)
            if value is None:
                continue
            expected = _JSON_TYPES.get(schema.get("type"))
            if expected and (not isinstance(value, expected) or
                             (isinstance(value, bool) and bool not in expected)):
                problems.append(f"field '{name}' must be a {schema.get('type')}")
                continue
            allowed = schema.get("enum")
            if allowed and value not in allowed:
                problems.append(f"field '{name}' must be one of: {', '.join(allowed)}")
        return problems


class ToolRegistry:
    """Immutable, ordered collection of tool specs."""

    def __init__(self, specs):
        self._specs: Tuple[ToolSpec, ...] = tuple(specs)
        self._by_name = MappingProxyType({s.name: s for s in self._specs})
        if len(self._by_name) != len(self._specs):
            raise ValueError("Duplicate tool names in registry")

    def __iter__(self) -> Iterator[ToolSpec]:
        return iter(self._specs)

    def __len__(self) -> int:
        return len(self._specs)

    def __contains__(self, name: str) -> bool:
        return name in self._by_name

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(s.name for s in self._specs)

    def get(self, name: str) -> Optional[ToolSpec]:
        return self._by_name.get(name)

    def to_anthropic(self) -> List[Dict[str, Any]]:
        return [s.to_anthropic() for s in self._specs]

    def check_arguments(self, name: str, arguments: Any) -> List[str]:
        spec = self.get(name)
        if spec is None:
            return [f"unknown tool '{name}'"]
        return spec.check_arguments(arguments)


def build_coach_registry() -> ToolRegistry:
    """The four coaching tools: create/update plan, flag risk, add note."""
    return ToolRegistry([
        ToolSpec(
            name=CREATE_WEEK_PLAN,
            description=(
                "Create a new training week plan. Use when no plan exists for the current week."
            ),
            input_schema={
                "type": "object",
                "properties": {
                    "goal": {
                        "type": "string",
                        "enum": enum_values(TrainingGoal),
                        "description": "The training goal for this week",
                    },
                    "weekFocus": {
                        "type": "string",
                        "description": "One or two sentences on the focus of the week",
                    },
                    "plan": {
                        "type": "string",
                        "description": (
                            'Daily workout plan, one line per day in format "Mon: description". '
                            "Include all 7 days."
                        ),
                    },
                    "summary": {
                        "type": "string",
                        "description": "Brief explanation of the plan rationale (1-2 sentences)",
                    },
                    "plannedLoad": {
                        "type": "number",
                        "description": "Expected weekly training load (TSS)",
                    },
                    "dailyNote": {
                        "type": "string",
                        "description": "Short note for today's session (technique cue, reminder)",
                    },
                },
                "required": ["goal", "plan", "summary", "plannedLoad"],
            },
        ),
        ToolSpec(
            name=UPDATE_WEEK_PLAN,
            description=(
                "Update the current week plan. Use to adjust workouts based on how the week is going."
            ),
            input_schema={
                "type": "object",
                "properties": {
                    "weekFocus": {
                        "type": "string",
                        "description": "Updated focus of the week",
                    },
                    "plan": {
                        "type": "string",
                        "description": "Updated daily workout plan, all 7 days",
                    },
                    "summary": {
                        "type": "string",
                        "description": "Explanation of what changed and why",
                    },
                    "plannedLoad": {
                        "type": "number",
                        "description": "Updated expected weekly training load",
                    },
                    "dailyNote": {
                        "type": "string",
                        "description": "Short note for today's session",
                    },
                },
                "required": ["weekFocus", "plan", "summary"],
            },
        ),
        ToolSpec(
            name=FLAG_RISK,
            description=(
                "Flag a potential injury or overtraining risk. Use when metrics indicate concern."
            ),
            input_schema={
                "type": "object",
                "properties": {
                    "risk": {
                        "type": "string",
                        "enum": enum_values(RiskCategory),
                        "description": "Type of risk detected",
                    },
                    "message": {
                        "type": "string",
                        "description": "Explanation of the risk and recommended action",
                    },
                    "severity": {
                        "type": "string",
                        "enum": enum_values(Severity),
                        "description": "How serious is the risk",
                    },
                },
                "required": ["risk", "message", "severity"],
            },
        ),
        ToolSpec(
            name=ADD_NOTE,
            description="Add a coaching observation or note. Use for insights that should be recorded.",
            input_schema={
                "type": "object",
                "properties": {
                    "note": {
                        "type": "string",
                        "description": "The observation or note to record",
                    },
                },
                "required": ["note"],
            },
        ),
    ])


# Built once per process; shared read-only.
COACH_TOOLS = build_coach_registry()
