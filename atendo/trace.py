"""
Execution traces for parses.

A trace records what the engine did with each word, the final result, and
the tagged failure if the parse was abandoned.
"""
import json
import uuid
from datetime import datetime, timezone


def _now():
    return datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')


class ExecutionTrace:
    """
    Represents a single, complete trace of one sentence's parse.
    """
    def __init__(self, initial_query: str):
        self.trace_id = str(uuid.uuid4())
        self.start_time = _now()
        self.end_time = None
        self.initial_query = initial_query
        self.steps = []
        self.final_response = None
        self.result = None
        self.unknown_words = []
        self.error = None

    def add_step(self, step_name: str, inputs: dict, outputs: dict, description: str = None):
        """
        Adds a step to the execution trace.

        Args:
            step_name: The name of the component or action (e.g., "Tokenizer", "Word").
            inputs: A dictionary of inputs to the step.
            outputs: A dictionary of outputs from the step.
            description: An optional natural language description of the step.
        """
        step = {
            "step_id": len(self.steps) + 1,
            "name": step_name,
            "timestamp": _now(),
            "inputs": inputs,
            "outputs": outputs,
        }
        if description:
            step["description"] = description
        self.steps.append(step)

    def set_final_response(self, response: str, result=None):
        """Sets the printed result (and its JSON form) and concludes the trace."""
        self.final_response = response
        self.result = result
        self.end_time = _now()

    def set_error(self, error):
        """Records a tagged failure and concludes the trace."""
        if isinstance(error, BaseException):
            self.error = {"type": error.__class__.__name__, "message": str(error)}
        else:
            self.error = {"type": "Error", "message": str(error)}
        self.end_time = _now()

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.end_time is not None

    def to_json(self, indent=2):
        """Serializes the trace to a JSON string."""
        return json.dumps(self, default=lambda o: o.__dict__, indent=indent, ensure_ascii=False)
