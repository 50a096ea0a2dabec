"""
Pytest configuration for the Padovan STARK tests.
"""

import sys
from pathlib import Path

import pytest

# Add the repository root to the path so absolute imports work
# (tests/ is inside the repo root, so parent is the root)
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from primitives.hashing import Blake3_256  # noqa: E402
from protocol.options import FieldExtension, ProofOptions  # noqa: E402


def build_proof_options(use_extension_field: bool = False) -> ProofOptions:
    """28 queries, blowup 8, no grinding, folding factor 4, remainder degree 7."""
    extension = FieldExtension.QUADRATIC if use_extension_field else FieldExtension.NONE
    return ProofOptions(28, 8, 0, extension, 4, 7)


@pytest.fixture
def proof_options() -> ProofOptions:
    return build_proof_options(False)


@pytest.fixture
def hasher() -> Blake3_256:
    return Blake3_256()
