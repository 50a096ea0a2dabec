"""Execution trace generation and proving for the Padovan AIR."""

import numpy as np

from primitives.field import FF
from protocol.prover import Prover
from protocol.trace import TraceTable
from padovan.air import TRACE_WIDTH, PadoAir
from padovan.utils import validate_sequence_length


# --- Step Rule ---

def init_state(state: np.ndarray) -> None:
    state[0] = FF(1)
    state[1] = FF(1)
    state[2] = FF(1)


def apply_step(_step: int, state: np.ndarray) -> None:
    """Advance the sequence by three terms in place.

    s2 is updated from the already-updated s0.
    """
    state[0] = state[0] + state[1]
    state[1] = state[1] + state[2]
    state[2] = state[2] + state[0]


# --- Prover ---

class PadoProver(Prover):
    """Builds Padovan traces and proves them against PadoAir."""

    air_class = PadoAir

    def build_trace(self, sequence_length: int) -> TraceTable:
        """Build an execution trace computing a Padovan sequence of the given length,
        each row advancing the sequence by 3 terms.

        Raises:
            InvalidArgumentError: If sequence_length / 3 is not a whole power of two
        """
        num_rows = validate_sequence_length(sequence_length)

        trace = TraceTable(TRACE_WIDTH, num_rows)
        trace.fill(init_state, apply_step)
        return trace

    def get_pub_inputs(self, trace: TraceTable):
        last_step = trace.length - 1
        return trace.get(2, last_step)
