"""AIR for the Padovan sequence, advanced three terms per trace row."""

from typing import List

from primitives.field import FF
from protocol.air import Air, AirContext, Assertion, EvaluationFrame, TraceInfo, TransitionConstraintDegree
from protocol.options import ProofOptions
from padovan.utils import are_equal

TRACE_WIDTH = 3


class PadoAir(Air):
    """Constraints of the Padovan sequence (3 terms per step):

        s_{0, i+1} = s_{0, i} + s_{1, i}
        s_{1, i+1} = s_{1, i} + s_{2, i}
        s_{2, i+1} = s_{0, i+1} + s_{2, i}

    The public input is the expected value of s_2 in the last row.
    """

    def __init__(self, trace_info: TraceInfo, pub_inputs, options: ProofOptions):
        assert trace_info.width == TRACE_WIDTH, (
            f"expected trace width {TRACE_WIDTH}, got {trace_info.width}"
        )
        degrees = [TransitionConstraintDegree(1) for _ in range(TRACE_WIDTH)]
        self.result = FF(int(pub_inputs))
        self._trace_info = trace_info
        self._context = AirContext(trace_info, degrees, len(self.get_assertions()), options)

    @property
    def context(self) -> AirContext:
        return self._context

    def evaluate_transition(self, frame: EvaluationFrame) -> List:
        current, nxt = frame.current, frame.next
        # expected state width is 3 field elements
        assert len(current) == TRACE_WIDTH and len(nxt) == TRACE_WIDTH

        return [
            are_equal(nxt[0], current[0] + current[1]),
            are_equal(nxt[1], current[1] + current[2]),
            are_equal(nxt[2], current[2] + nxt[0]),
        ]

    def get_assertions(self) -> List[Assertion]:
        # a valid sequence starts with three ones and ends with the expected result
        last_step = self._trace_info.length - 1
        one = FF(1)
        return [
            Assertion.single(0, 0, one),
            Assertion.single(1, 0, one),
            Assertion.single(2, 0, one),
            Assertion.single(2, last_step, self.result),
        ]

    def public_inputs_to_elements(self) -> List[int]:
        return [int(self.result)]
